"""Run progress tracking with callback-based listener notification.

Tracks the latest progress percentage for each task run and broadcasts
updates to registered listener callbacks.  Listeners are keyed by run ID
so several tasks can report through one tracker without cross-talk.

# ─── HOW PROGRESS TRACKING WORKS ──────────────────────────────────────
#
#   Orchestrator ──sink(percent)──→ ProgressTracker ──callback()──→ scheduler UI
#                                                   ──→ (any other listener)
#
#   1. The task asks the tracker for a sink bound to its run ID
#   2. The orchestrator calls the sink after every attempted item
#   3. The tracker stores the snapshot and calls all registered listeners
#
# Listener errors are caught and logged: one broken listener can't stop
# a subtitle run.  Both sync and async callbacks are supported.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

import structlog

from src.utils.logging import get_logger

# A progress sink takes a percentage (0-100) and may return an awaitable.
ProgressSink = Callable[[float], Any]


@dataclass
class _RunStatus:
    """Internal snapshot of a single run's progress."""

    progress: float = 0.0
    message: str = ""


class ProgressTracker:
    """Tracks and broadcasts task progress via callbacks."""

    def __init__(self) -> None:
        self._statuses: dict[str, _RunStatus] = {}
        self._listeners: dict[str, list[Callable]] = {}
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def update(self, run_id: str, progress: float, message: str = "") -> None:
        """Record a progress update and notify all registered listeners.

        Parameters
        ----------
        run_id:
            The run to update.
        progress:
            Completion percentage (0.0 to 100.0); clamped into range.
        message:
            Human-readable status message.
        """
        progress = max(0.0, min(100.0, progress))

        self._statuses[run_id] = _RunStatus(progress=progress, message=message)

        self._logger.debug(
            "progress_update",
            run_id=run_id,
            progress=round(progress, 1),
            message=message,
        )

        await self._notify_listeners(run_id, progress, message)

    def sink(self, run_id: str) -> Callable[[float], Awaitable[None]]:
        """Return a progress sink that reports into this tracker for *run_id*."""

        async def _report(percent: float) -> None:
            await self.update(run_id, percent)

        return _report

    def register_listener(self, run_id: str, callback: Callable) -> None:
        """Register a callback receiving ``(run_id, progress, message)``."""
        if run_id not in self._listeners:
            self._listeners[run_id] = []

        if callback not in self._listeners[run_id]:
            self._listeners[run_id].append(callback)
            self._logger.debug(
                "listener_registered",
                run_id=run_id,
                total_listeners=len(self._listeners[run_id]),
            )

    def unregister_listener(self, run_id: str, callback: Callable) -> None:
        listeners = self._listeners.get(run_id, [])
        if callback in listeners:
            listeners.remove(callback)
            self._logger.debug(
                "listener_unregistered",
                run_id=run_id,
                remaining_listeners=len(listeners),
            )

    def get_status(self, run_id: str) -> dict:
        """Return ``{"progress": float, "message": str}`` for *run_id*.

        Zeroed defaults are returned for runs that have not reported yet.
        """
        status = self._statuses.get(run_id)
        if status is None:
            return {"progress": 0.0, "message": ""}

        return {"progress": status.progress, "message": status.message}

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _notify_listeners(self, run_id: str, progress: float, message: str) -> None:
        listeners = self._listeners.get(run_id, [])
        if not listeners:
            return

        for callback in listeners:
            try:
                result = callback(run_id, progress, message)
                if asyncio.iscoroutine(result):
                    await result
            except Exception as exc:
                self._logger.warning(
                    "listener_callback_error",
                    run_id=run_id,
                    error=str(exc),
                    callback=getattr(callback, "__name__", repr(callback)),
                )
