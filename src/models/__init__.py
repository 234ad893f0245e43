"""Subtitle sweep domain models; this package re-exports every public model class.

The models are organized across five submodules by concern:
    - catalog.py     - Library items, media streams and the catalog query
    - options.py     - The frozen subtitle options snapshot for a run
    - acquisition.py - Per-item outcomes, run bookkeeping and run summary
    - subtitles.py   - Provider-facing search request / result models
    - task.py        - Scheduler registration data (key, name, triggers)
"""

from __future__ import annotations

from src.models.acquisition import (
    AcquisitionOutcome,
    Failed,
    Resolved,
    RetryNeeded,
    RunState,
    RunSummary,
    needs_retry,
)
from src.models.catalog import (
    CatalogItem,
    CatalogQuery,
    ItemType,
    LocationType,
    MediaStream,
    MediaStreamType,
    MediaType,
)
from src.models.options import AcquisitionOptions
from src.models.subtitles import RemoteSubtitleInfo, SubtitleSearchRequest
from src.models.task import TaskInfo, TaskTrigger, TriggerType

__all__ = [
    "AcquisitionOptions",
    "AcquisitionOutcome",
    "CatalogItem",
    "CatalogQuery",
    "Failed",
    "ItemType",
    "LocationType",
    "MediaStream",
    "MediaStreamType",
    "MediaType",
    "RemoteSubtitleInfo",
    "Resolved",
    "RetryNeeded",
    "RunState",
    "RunSummary",
    "SubtitleSearchRequest",
    "TaskInfo",
    "TaskTrigger",
    "TriggerType",
    "needs_retry",
]
