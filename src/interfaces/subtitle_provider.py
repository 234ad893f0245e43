"""Abstract base class for remote subtitle providers.

A subtitle provider knows how to talk to one subtitle site (search and
fetch); it knows nothing about retry history or options.  The
:class:`~src.services.subtitle_downloader.SubtitleDownloader` decides
*whether* to search and hands the provider a ready-made request.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod

from src.models.catalog import CatalogItem
from src.models.subtitles import RemoteSubtitleInfo, SubtitleSearchRequest


class ISubtitleProvider(ABC):
    """Contract for subtitle search/download services.

    All operations are async; implementations are expected to observe
    *cancel_event* and return or raise promptly once it is set.
    """

    @abstractmethod
    async def search_subtitles(
        self,
        request: SubtitleSearchRequest,
        cancel_event: asyncio.Event | None = None,
    ) -> list[RemoteSubtitleInfo]:
        """Search for subtitles matching *request*, best match first."""

    @abstractmethod
    async def download_subtitle(
        self,
        item: CatalogItem,
        subtitle_id: str,
        cancel_event: asyncio.Event | None = None,
    ) -> None:
        """Download the subtitle *subtitle_id* and store it alongside *item*.

        Raises
        ------
        SubtitleDownloadError
            If the file could not be fetched or saved.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""
