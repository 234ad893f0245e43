"""Abstract base class for media catalog providers.

The catalog is owned by the host media server; the subtitle sweep only
asks it for the candidate items of a run.  The adapter pattern keeps the
scheduler independent of how the catalog is stored.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.catalog import CatalogItem, CatalogQuery


class ICatalogProvider(ABC):
    """Contract for catalog query services."""

    @abstractmethod
    async def get_item_list(self, query: CatalogQuery) -> list[CatalogItem]:
        """Return the items matching *query*, in a stable order.

        Parameters
        ----------
        query:
            Media type, virtual-item and location filters plus the item
            type tags to include.

        Returns
        -------
        list[CatalogItem]
            Matching items.  An empty list is a valid answer.

        Raises
        ------
        CatalogError
            If the catalog cannot be queried.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""
