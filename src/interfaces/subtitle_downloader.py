"""Abstract base class for the per-item subtitle acquisition operation.

This is the boundary the orchestrator calls once per eligible item.
Implementations return the languages they actually downloaded and must
not keep a reference to the item after the call returns.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Sequence

from src.models.catalog import CatalogItem, MediaStream


class ISubtitleDownloader(ABC):
    """Contract for acquiring subtitles for a single catalog item."""

    @abstractmethod
    async def download_subtitles(
        self,
        item: CatalogItem,
        media_streams: Sequence[MediaStream],
        skip_if_embedded_subtitles_present: bool,
        skip_if_audio_track_matches: bool,
        require_perfect_match: bool,
        languages: Sequence[str],
        cancel_event: asyncio.Event | None = None,
    ) -> set[str]:
        """Try to acquire subtitles for *item* in each of *languages*.

        Parameters
        ----------
        item:
            The video to search subtitles for.
        media_streams:
            The streams the item already carries.
        skip_if_embedded_subtitles_present:
            Do not search when the file already has an embedded subtitle.
        skip_if_audio_track_matches:
            Do not search a language the default audio track is in.
        require_perfect_match:
            Only accept hash-matched results.
        languages:
            Desired languages, in priority order.
        cancel_event:
            Cooperative cancellation signal.

        Returns
        -------
        set[str]
            Languages downloaded; empty when nothing was acquired.
        """
