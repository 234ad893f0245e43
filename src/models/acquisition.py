"""Per-item outcomes and per-run state for the subtitle sweep.

Each attempted item produces exactly one outcome:

    Resolved(languages)  -- subtitles downloaded, or the item no longer
                            qualifies; its retry entry is removed.
    RetryNeeded          -- the provider ran but found nothing usable;
                            the item is parked for the cooldown window.
    Failed(reason)       -- the attempt raised; logged, then treated the
                            same as RetryNeeded.

The outcome types and :class:`RunState` are plain dataclasses because they
never leave the process.  :class:`RunSummary` is what ``execute()`` hands
back to the caller once the run is over.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Union

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class Resolved:
    languages: tuple[str, ...] = ()


@dataclass(frozen=True)
class RetryNeeded:
    pass


@dataclass(frozen=True)
class Failed:
    reason: str


AcquisitionOutcome = Union[Resolved, RetryNeeded, Failed]


def needs_retry(outcome: AcquisitionOutcome) -> bool:
    """Return ``True`` when *outcome* should (re)start the cooldown window."""
    return not isinstance(outcome, Resolved)


@dataclass
class RunState:
    """Mutable bookkeeping for a single run.

    Owned by the orchestrator for the duration of one ``execute()`` call
    and thrown away afterwards; nothing here is persisted.
    """

    total_candidates: int = 0
    completed: int = 0
    history_changed: bool = False
    cancelled: bool = False
    skipped: int = 0
    resolved: int = 0
    retry_needed: int = 0
    failed: int = 0
    last_progress: float = 0.0
    started_at: datetime = field(default_factory=lambda: datetime.now(tz=timezone.utc))


class RunSummary(BaseModel):
    """Immutable result of one subtitle sweep run."""

    model_config = ConfigDict(frozen=True)

    total_candidates: int = 0
    attempted: int = 0
    skipped: int = 0
    resolved: int = 0
    retry_needed: int = 0
    failed: int = 0
    history_saved: bool = False
    cancelled: bool = False
    started_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=timezone.utc)  # noqa: UP017
    )
    completed_at: datetime | None = None

    @classmethod
    def from_state(cls, state: RunState, history_saved: bool) -> RunSummary:
        return cls(
            total_candidates=state.total_candidates,
            attempted=state.completed,
            skipped=state.skipped,
            resolved=state.resolved,
            retry_needed=state.retry_needed,
            failed=state.failed,
            history_saved=history_saved,
            cancelled=state.cancelled,
            started_at=state.started_at,
            completed_at=datetime.now(tz=timezone.utc),
        )
