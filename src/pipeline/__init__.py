"""Scheduling components for the missing-subtitle sweep."""

from src.pipeline.eligibility import HISTORY_COOLDOWN, enabled_item_types, is_eligible
from src.pipeline.orchestrator import AcquisitionOrchestrator
from src.pipeline.progress_tracker import ProgressTracker
from src.pipeline.subtitle_task import SubtitleScheduledTask

__all__ = [
    "HISTORY_COOLDOWN",
    "AcquisitionOrchestrator",
    "ProgressTracker",
    "SubtitleScheduledTask",
    "enabled_item_types",
    "is_eligible",
]
