"""Per-item subtitle acquisition with language and stream policy checks.

For every desired language the downloader first looks at what the file
already carries and only goes to the network when it has to:

    language already has a text subtitle stream        → skip
    skip_if_audio_track_matches and default audio == lang → skip
    skip_if_embedded_subtitles_present and embedded sub  → skip
    otherwise → search provider → download first hit

The result is the set of languages that were actually downloaded.  An
empty set tells the orchestrator to try the item again after the
cooldown window.  Provider failures are raised as
ProviderUnavailableError (connection problems) or SubtitleDownloadError.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

import structlog

from src.interfaces.subtitle_downloader import ISubtitleDownloader
from src.interfaces.subtitle_provider import ISubtitleProvider
from src.models.catalog import (
    CatalogItem,
    ItemType,
    LocationType,
    MediaStream,
    MediaStreamType,
)
from src.models.subtitles import SubtitleSearchRequest
from src.utils.errors import (
    ProviderUnavailableError,
    SubtitleDownloadError,
    SubtitleSweepError,
)
from src.utils.logging import get_logger


def _same_language(a: str | None, b: str | None) -> bool:
    return bool(a) and bool(b) and a.casefold() == b.casefold()


class SubtitleDownloader(ISubtitleDownloader):
    """Applies the subtitle options to one item and drives the provider.

    Parameters
    ----------
    subtitle_provider:
        The remote subtitle source to search and download from.
    """

    def __init__(self, subtitle_provider: ISubtitleProvider) -> None:
        self._provider = subtitle_provider
        self._logger: structlog.BoundLogger = get_logger(__name__)

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
        # Subtitles are written next to the media file, so there has to be one.
        if item.location_type != LocationType.FILE_SYSTEM or not item.path:
            return set()

        if item.item_type == ItemType.EPISODE.value:
            content_type = ItemType.EPISODE.value
        elif item.item_type == ItemType.MOVIE.value:
            content_type = ItemType.MOVIE.value
        else:
            return set()

        downloaded: set[str] = set()
        for language in languages:
            if cancel_event is not None and cancel_event.is_set():
                break
            if await self._download_language(
                item,
                media_streams,
                skip_if_embedded_subtitles_present,
                skip_if_audio_track_matches,
                require_perfect_match,
                language,
                content_type,
                cancel_event,
            ):
                downloaded.add(language)

        return downloaded

    async def _download_language(
        self,
        item: CatalogItem,
        media_streams: Sequence[MediaStream],
        skip_if_embedded_subtitles_present: bool,
        skip_if_audio_track_matches: bool,
        require_perfect_match: bool,
        language: str,
        content_type: str,
        cancel_event: asyncio.Event | None,
    ) -> bool:
        """Search and download one language.  Returns ``True`` on download."""
        if any(
            s.type == MediaStreamType.SUBTITLE
            and s.is_text_subtitle_stream
            and _same_language(s.language, language)
            for s in media_streams
        ):
            self._logger.debug(
                "subtitle_language_present", item_id=item.id, language=language
            )
            return False

        if skip_if_audio_track_matches:
            audio_streams = [s for s in media_streams if s.type == MediaStreamType.AUDIO]
            default_audio = next(
                (s for s in audio_streams if s.is_default),
                audio_streams[0] if audio_streams else None,
            )
            if default_audio is not None and _same_language(default_audio.language, language):
                self._logger.debug(
                    "subtitle_audio_matches", item_id=item.id, language=language
                )
                return False

        if skip_if_embedded_subtitles_present and any(
            s.type == MediaStreamType.SUBTITLE and not s.is_external for s in media_streams
        ):
            self._logger.debug("subtitle_embedded_present", item_id=item.id)
            return False

        request = SubtitleSearchRequest(
            content_type=content_type,
            language=language,
            media_path=item.path,
            name=item.name,
            series_name=item.series_name,
            index_number=item.index_number,
            parent_index_number=item.parent_index_number,
            production_year=item.production_year,
            provider_ids=dict(item.provider_ids),
            runtime_ticks=item.runtime_ticks,
            is_perfect_match=require_perfect_match,
        )

        try:
            results = await self._provider.search_subtitles(request, cancel_event)
        except SubtitleSweepError:
            raise
        except Exception as exc:
            raise self._provider_error("search", language, exc) from exc

        if not results:
            self._logger.debug(
                "subtitle_search_empty",
                item_id=item.id,
                language=language,
                provider=self._provider.get_provider_name(),
            )
            return False

        best = results[0]
        try:
            await self._provider.download_subtitle(item, best.id, cancel_event)
        except SubtitleSweepError:
            raise
        except Exception as exc:
            raise self._provider_error("download", language, exc) from exc

        self._logger.info(
            "subtitle_downloaded",
            item_id=item.id,
            language=language,
            subtitle_id=best.id,
            provider=best.provider_name,
        )
        return True

    def _provider_error(self, action: str, language: str, exc: Exception) -> SubtitleSweepError:
        """Map a third-party provider failure onto the sweep's error hierarchy."""
        provider = self._provider.get_provider_name()
        if isinstance(exc, (ConnectionError, TimeoutError, asyncio.TimeoutError)):
            return ProviderUnavailableError(
                message=f"Subtitle {action} for '{language}' could not reach the provider: {exc}",
                provider_name=provider,
            )
        return SubtitleDownloadError(
            message=f"Subtitle {action} for '{language}' failed: {exc}",
            provider_name=provider,
        )
