"""Scheduled task that downloads missing subtitles for the library.

This is the entry point the outer scheduler calls (by default once every
24 hours).  One run:

    1. Read the subtitle options; no enabled item types → done.
    2. Ask the catalog for local, non-virtual episodes/movies → none → done.
    3. Load the retry history.
    4. Hand everything to the AcquisitionOrchestrator.
    5. Write the history back, once, if the run changed it.

The history is written even when the run is cancelled part-way, so
outcomes for items already attempted are not lost.  Overlapping
``execute()`` calls on the same task wait for each other.
"""

from __future__ import annotations

import asyncio
from datetime import timedelta

import structlog

from src.interfaces.catalog_provider import ICatalogProvider
from src.interfaces.history_store import IHistoryStore
from src.interfaces.options_provider import IOptionsProvider
from src.models.acquisition import RunState, RunSummary
from src.models.catalog import CatalogQuery, LocationType, MediaType
from src.models.task import TaskInfo, TaskTrigger, TriggerType
from src.pipeline.eligibility import enabled_item_types
from src.pipeline.orchestrator import AcquisitionOrchestrator
from src.pipeline.progress_tracker import ProgressSink, ProgressTracker
from src.utils.errors import CatalogError, HistoryStoreError, SubtitleSweepError
from src.utils.logging import get_logger

TASK_KEY = "DownloadSubtitles"
TASK_NAME = "Download missing subtitles"
TASK_DESCRIPTION = "Searches the internet for missing subtitles based on metadata configuration."
TASK_CATEGORY = "Library"
DEFAULT_INTERVAL = timedelta(hours=24)


class SubtitleScheduledTask:
    """Run coordinator for the missing-subtitle sweep.

    All collaborators are injected; see ``build_subtitle_task`` in
    src/main.py for the default wiring.
    """

    def __init__(
        self,
        catalog: ICatalogProvider,
        options_provider: IOptionsProvider,
        history_store: IHistoryStore,
        orchestrator: AcquisitionOrchestrator,
        progress_tracker: ProgressTracker | None = None,
    ) -> None:
        self._catalog = catalog
        self._options_provider = options_provider
        self._history_store = history_store
        self._orchestrator = orchestrator
        self._progress_tracker = progress_tracker
        self._run_lock = asyncio.Lock()
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Scheduler registration
    # ------------------------------------------------------------------

    @property
    def key(self) -> str:
        return TASK_KEY

    @property
    def name(self) -> str:
        return TASK_NAME

    @property
    def description(self) -> str:
        return TASK_DESCRIPTION

    @property
    def category(self) -> str:
        return TASK_CATEGORY

    def get_default_triggers(self) -> tuple[TaskTrigger, ...]:
        return (TaskTrigger(type=TriggerType.INTERVAL, interval=DEFAULT_INTERVAL),)

    def get_task_info(self) -> TaskInfo:
        return TaskInfo(
            key=self.key,
            name=self.name,
            description=self.description,
            category=self.category,
            default_triggers=self.get_default_triggers(),
        )

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    async def execute(
        self,
        cancel_event: asyncio.Event | None = None,
        progress: ProgressSink | None = None,
    ) -> RunSummary:
        """Run one subtitle sweep.

        Parameters
        ----------
        cancel_event:
            Cooperative cancellation signal, checked between items and
            forwarded to the collaborators.
        progress:
            Progress sink; defaults to the injected tracker's sink for
            this task's key.

        Returns
        -------
        RunSummary
            Counters for the run.  A run with nothing to do returns an
            empty summary.

        Raises
        ------
        CatalogError
            If the catalog query fails.
        HistoryStoreError
            If the changed history could not be written.
        """
        async with self._run_lock:
            return await self._execute(cancel_event, progress)

    async def _execute(
        self,
        cancel_event: asyncio.Event | None,
        progress: ProgressSink | None,
    ) -> RunSummary:
        options = self._options_provider.get_acquisition_options()

        types = enabled_item_types(options)
        if not types:
            self._logger.debug("subtitle_task_disabled")
            return RunSummary.from_state(RunState(), history_saved=False)

        query = CatalogQuery(
            media_types=[MediaType.VIDEO],
            is_virtual_item=False,
            exclude_location_types=[LocationType.REMOTE, LocationType.VIRTUAL],
            include_item_types=types,
        )
        try:
            catalog_items = await self._catalog.get_item_list(query)
        except SubtitleSweepError:
            raise
        except Exception as exc:
            raise CatalogError(
                message=f"Catalog query failed: {exc}",
                provider_name=self._catalog.get_provider_name(),
            ) from exc

        items = [item for item in catalog_items if item.media_type == MediaType.VIDEO]
        if not items:
            self._logger.debug("subtitle_task_no_candidates", item_types=types)
            return RunSummary.from_state(RunState(), history_saved=False)

        history = self._history_store.load()

        if progress is None and self._progress_tracker is not None:
            progress = self._progress_tracker.sink(self.key)

        self._logger.info(
            "subtitle_task_start",
            candidates=len(items),
            history_entries=len(history),
            item_types=types,
        )

        state = RunState()
        history_saved = False
        try:
            await self._orchestrator.run(
                items,
                options,
                history,
                state=state,
                cancel_event=cancel_event,
                progress=progress,
            )
        except BaseException:
            # Persist what was applied, but let the original error win.
            if state.history_changed:
                try:
                    self._history_store.save(history)
                except HistoryStoreError as exc:
                    self._logger.error(
                        "subtitle_history_save_failed",
                        error=str(exc),
                        completed=state.completed,
                    )
            raise

        if state.history_changed:
            self._history_store.save(history)
            history_saved = True

        summary = RunSummary.from_state(state, history_saved=history_saved)
        self._logger.info(
            "subtitle_task_complete",
            candidates=summary.total_candidates,
            attempted=summary.attempted,
            skipped=summary.skipped,
            resolved=summary.resolved,
            retry_needed=summary.retry_needed,
            failed=summary.failed,
            history_saved=summary.history_saved,
            cancelled=summary.cancelled,
        )
        return summary
