"""Abstract base class for metadata refresh services.

After new subtitles land on disk the host has to re-scan the item so the
new streams show up.  The subtitle sweep awaits the refresh but does not
care how it is done.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod

from src.models.catalog import CatalogItem


class IMetadataRefresher(ABC):
    @abstractmethod
    async def refresh_metadata(
        self,
        item: CatalogItem,
        cancel_event: asyncio.Event | None = None,
    ) -> None:
        """Re-scan *item* so newly downloaded subtitle files are picked up."""
