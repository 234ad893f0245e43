"""Per-item subtitle acquisition loop.

Walks the candidate list in catalog order, one item at a time:

    cancelled?            → stop; mutations already applied are kept
    cooling down?         → skip; no progress, history untouched
    attempt the item      → Resolved | RetryNeeded | Failed(reason)
    apply the outcome     → remove entry | upsert entry with "now"
    report progress       → 100 * completed / total candidates

The history mapping and the :class:`RunState` are owned by the caller and
mutated in place, so whatever was applied before a cancellation or a
crash of the surrounding task is still there for the caller to persist.

A failure on one item never aborts the run: any ``Exception`` raised by
the downloader or the metadata refresh is logged with the item's path
and becomes a retry entry.  ``asyncio.CancelledError`` is not an
``Exception`` and propagates untouched.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, MutableMapping, Sequence
from datetime import datetime, timezone

import structlog

from src.interfaces.metadata_refresher import IMetadataRefresher
from src.interfaces.subtitle_downloader import ISubtitleDownloader
from src.models.acquisition import (
    AcquisitionOutcome,
    Failed,
    Resolved,
    RetryNeeded,
    RunState,
    needs_retry,
)
from src.models.catalog import CatalogItem
from src.models.options import AcquisitionOptions
from src.pipeline.eligibility import is_eligible
from src.pipeline.progress_tracker import ProgressSink
from src.utils.logging import get_logger


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


class AcquisitionOrchestrator:
    """Runs subtitle attempts for a candidate list and updates retry history.

    Parameters
    ----------
    downloader:
        Per-item acquisition operation.
    metadata_refresher:
        Re-scans an item after subtitles were downloaded for it.
    clock:
        Returns the current UTC time; injectable for tests.
    """

    def __init__(
        self,
        downloader: ISubtitleDownloader,
        metadata_refresher: IMetadataRefresher,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._downloader = downloader
        self._metadata_refresher = metadata_refresher
        self._clock = clock or _utcnow
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def run(
        self,
        items: Sequence[CatalogItem],
        options: AcquisitionOptions,
        history: MutableMapping[str, datetime],
        state: RunState | None = None,
        cancel_event: asyncio.Event | None = None,
        progress: ProgressSink | None = None,
    ) -> RunState:
        """Process every candidate in *items* and return the run state.

        Parameters
        ----------
        items:
            All type-filtered candidates.  Progress is reported against
            this full count, including items skipped for cooldown.
        options:
            Options snapshot for this run.
        history:
            Retry history, mutated in place.
        state:
            Run bookkeeping, mutated in place; a fresh one is created
            when omitted.
        cancel_event:
            Checked before each item; once set, no further items start.
        progress:
            Called with the completion percentage after each attempted item.
        """
        if state is None:
            state = RunState()
        state.total_candidates = len(items)

        for item in items:
            if cancel_event is not None and cancel_event.is_set():
                state.cancelled = True
                self._logger.info(
                    "subtitle_run_cancelled",
                    completed=state.completed,
                    total_candidates=state.total_candidates,
                )
                break

            key = item.history_key
            if not is_eligible(key, history, self._clock()):
                state.skipped += 1
                self._logger.debug(
                    "subtitle_item_skipped",
                    item_id=item.id,
                    last_attempt=history[key].isoformat(),
                )
                continue

            outcome = await self.acquire_item(item, options, cancel_event)
            self._apply_outcome(key, outcome, history, state)

            state.completed += 1
            await self._report(progress, state, 100.0 * state.completed / state.total_candidates)

        if not state.cancelled and state.total_candidates > 0 and state.last_progress < 100.0:
            await self._report(progress, state, 100.0)

        return state

    async def acquire_item(
        self,
        item: CatalogItem,
        options: AcquisitionOptions,
        cancel_event: asyncio.Event | None = None,
    ) -> AcquisitionOutcome:
        """Attempt one item and classify the result.

        A type that is no longer enabled counts as resolved without any
        provider call.  Raised errors are logged and returned as
        :class:`Failed`.
        """
        try:
            if item.item_type not in options.enabled_item_types():
                return Resolved()

            languages = await self._downloader.download_subtitles(
                item,
                item.media_streams,
                options.skip_if_embedded_subtitles_present,
                options.skip_if_audio_track_matches,
                options.require_perfect_match,
                options.download_languages,
                cancel_event,
            )

            if languages:
                await self._metadata_refresher.refresh_metadata(item, cancel_event)
                return Resolved(languages=tuple(sorted(languages)))

            return RetryNeeded()
        except Exception as exc:
            self._logger.error(
                "subtitle_download_failed",
                item_id=item.id,
                path=item.path,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return Failed(reason=str(exc) or type(exc).__name__)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _apply_outcome(
        self,
        key: str,
        outcome: AcquisitionOutcome,
        history: MutableMapping[str, datetime],
        state: RunState,
    ) -> None:
        if needs_retry(outcome):
            history[key] = self._clock()
            state.history_changed = True
            if isinstance(outcome, Failed):
                state.failed += 1
            else:
                state.retry_needed += 1
            return

        state.resolved += 1
        if history.pop(key, None) is not None:
            state.history_changed = True
        if isinstance(outcome, Resolved) and outcome.languages:
            self._logger.info(
                "subtitle_item_resolved",
                item_id=key,
                languages=list(outcome.languages),
            )

    async def _report(self, progress: ProgressSink | None, state: RunState, percent: float) -> None:
        state.last_progress = percent
        if progress is None:
            return
        try:
            result = progress(percent)
            if asyncio.iscoroutine(result):
                await result
        except Exception as exc:
            self._logger.warning(
                "progress_sink_error",
                progress=round(percent, 1),
                error=str(exc),
            )
