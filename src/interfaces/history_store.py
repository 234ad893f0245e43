"""Abstract base class for retry-history persistence.

The retry history maps an item's history key to the UTC time of its last
unsuccessful attempt.  It is loaded once per run and written back at most
once per run.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime


class IHistoryStore(ABC):
    """Contract for retry-history stores."""

    @abstractmethod
    def load(self) -> dict[str, datetime]:
        """Return the persisted history, or ``{}`` if it cannot be read.

        Must never raise for a missing, unreadable or corrupt store.
        """

    @abstractmethod
    def save(self, history: dict[str, datetime]) -> None:
        """Replace the persisted history with *history*.

        Raises
        ------
        HistoryStoreError
            If the history could not be written.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this store."""
