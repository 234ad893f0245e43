"""JSON-file retry-history store.

The file is a flat object mapping an item's history key to the ISO-8601
UTC time of its last unsuccessful attempt::

    {
      "9f0c6b5e4d1a4c1f8e2b7a3d5c6e7f80": "2026-10-12T03:00:00Z"
    }

Loading never raises: a missing, unreadable or corrupt file yields an
empty history.  Saving writes to a temp file in the same directory and then
``os.replace``-s it over the old file.
"""

from __future__ import annotations

import contextlib
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

import structlog
from pydantic import TypeAdapter, ValidationError

from src.interfaces.history_store import IHistoryStore
from src.utils.errors import HistoryStoreError
from src.utils.logging import get_logger

_HISTORY_ADAPTER: TypeAdapter[dict[str, datetime]] = TypeAdapter(dict[str, datetime])


def _as_utc(value: datetime) -> datetime:
    # Older history files were written without an offset; those are UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class JsonHistoryStore(IHistoryStore):
    """Retry history persisted as a single JSON file.

    Parameters
    ----------
    path:
        Location of the history file, typically
        ``<cache_path>/subtitlehistory.json``.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @property
    def path(self) -> Path:
        return self._path

    # ------------------------------------------------------------------
    # IHistoryStore implementation
    # ------------------------------------------------------------------

    def load(self) -> dict[str, datetime]:
        """Return the persisted history, or ``{}`` if the file is unusable."""
        try:
            raw = self._path.read_bytes()
        except FileNotFoundError:
            self._logger.debug("subtitle_history_missing", path=str(self._path))
            return {}
        except OSError as exc:
            self._logger.warning(
                "subtitle_history_unreadable",
                path=str(self._path),
                error=str(exc),
            )
            return {}

        try:
            parsed = _HISTORY_ADAPTER.validate_json(raw)
            history = {key: _as_utc(value) for key, value in parsed.items()}
        except (ValidationError, OverflowError, ValueError) as exc:
            # Offsets near datetime.min/max parse but overflow when shifted to UTC.
            self._logger.warning(
                "subtitle_history_corrupt",
                path=str(self._path),
                error=str(exc),
            )
            return {}

        self._logger.debug(
            "subtitle_history_loaded",
            path=str(self._path),
            entries=len(history),
        )
        return history

    def save(self, history: dict[str, datetime]) -> None:
        """Atomically replace the history file with *history*."""
        normalized = {key: _as_utc(history[key]) for key in sorted(history)}
        payload = _HISTORY_ADAPTER.dump_json(normalized, indent=2)

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                dir=self._path.parent,
            )
            try:
                with os.fdopen(fd, "wb") as fh:
                    fh.write(payload)
                    fh.flush()
                    os.fsync(fh.fileno())
                os.replace(tmp_name, self._path)
            except BaseException:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            raise HistoryStoreError(
                message=f"Could not write subtitle history to {self._path}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        self._logger.info(
            "subtitle_history_saved",
            path=str(self._path),
            entries=len(normalized),
        )

    def get_provider_name(self) -> str:
        return "json_history"
