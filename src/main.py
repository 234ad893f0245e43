"""Subtitle sweep wiring.

Builds a ready-to-run :class:`SubtitleScheduledTask` from settings plus
the three collaborators only the host application can supply: its
catalog, a subtitle provider, and its metadata refresher.  Everything
else (options from config.yaml, the JSON retry history, the policy-aware
downloader, progress tracking, logging) is assembled here.

Typical host usage::

    task = build_subtitle_task(
        catalog=LibraryCatalog(db),
        subtitle_provider=OpenSubtitlesProvider(api_key),
        metadata_refresher=LibraryRefresher(db),
    )
    scheduler.register(task.get_task_info(), task.execute)
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import datetime

import structlog

from src.config.settings import Settings
from src.interfaces.catalog_provider import ICatalogProvider
from src.interfaces.metadata_refresher import IMetadataRefresher
from src.interfaces.subtitle_provider import ISubtitleProvider
from src.models.acquisition import RunSummary
from src.pipeline.orchestrator import AcquisitionOrchestrator
from src.pipeline.progress_tracker import ProgressTracker
from src.pipeline.subtitle_task import SubtitleScheduledTask
from src.providers.history.json_history_store import JsonHistoryStore
from src.providers.options.yaml_options_provider import YamlOptionsProvider
from src.services.subtitle_downloader import SubtitleDownloader
from src.utils.logging import configure_logging, get_logger


def build_subtitle_task(
    catalog: ICatalogProvider,
    subtitle_provider: ISubtitleProvider,
    metadata_refresher: IMetadataRefresher,
    custom_settings: Settings | None = None,
    progress_tracker: ProgressTracker | None = None,
    clock: Callable[[], datetime] | None = None,
    configure_logs: bool = True,
) -> SubtitleScheduledTask:
    """Construct a :class:`SubtitleScheduledTask` with injected dependencies.

    Parameters
    ----------
    catalog:
        Host catalog used to enumerate candidate videos.
    subtitle_provider:
        Remote subtitle source.
    metadata_refresher:
        Host hook that re-scans an item after a download.
    custom_settings:
        Settings to use; read from the environment when omitted.
    progress_tracker:
        Shared tracker; a private one is created when omitted.
    clock:
        UTC clock override, used by tests.
    configure_logs:
        Set to ``False`` when the host has already configured structlog.
    """
    s = custom_settings or Settings()

    if configure_logs:
        configure_logging(
            log_level=s.log_level,
            json_output=(s.app_env == "production"),
        )

    downloader = SubtitleDownloader(subtitle_provider=subtitle_provider)
    orchestrator = AcquisitionOrchestrator(
        downloader=downloader,
        metadata_refresher=metadata_refresher,
        clock=clock,
    )

    return SubtitleScheduledTask(
        catalog=catalog,
        options_provider=YamlOptionsProvider(config_path=s.config_path, settings=s),
        history_store=JsonHistoryStore(s.get_history_path()),
        orchestrator=orchestrator,
        progress_tracker=progress_tracker or ProgressTracker(),
    )


async def run_subtitle_task(
    task: SubtitleScheduledTask,
    cancel_event: asyncio.Event | None = None,
) -> RunSummary:
    """Run *task* once, logging the outcome; convenience for scripts and cron."""
    logger: structlog.BoundLogger = get_logger(__name__)
    logger.info("subtitle_task_invoked", task_key=task.key)
    summary = await task.execute(cancel_event=cancel_event)
    logger.info(
        "subtitle_task_finished",
        task_key=task.key,
        cancelled=summary.cancelled,
        attempted=summary.attempted,
    )
    return summary
