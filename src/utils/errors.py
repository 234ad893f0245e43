"""Custom exception hierarchy for the subtitle sweep task.

All application exceptions inherit from :class:`SubtitleSweepError`, which
carries an optional ``provider_name`` so error handlers can identify which
collaborator (e.g. "catalog", "opensubtitles", "json_history") caused the
failure.

The hierarchy is organized by where the failure happens during a run:

    SubtitleSweepError  (base -- catch-all for any subtitle sweep error)
    +-- ConfigurationError       (startup / invalid subtitle options)
    +-- CatalogError             (catalog query failed)
    +-- SubtitleDownloadError    (per-item search or download failed)
    +-- ProviderUnavailableError (subtitle provider down / unreachable)
    +-- HistoryStoreError        (retry history could not be written)

SubtitleDownloader raises the per-item errors (SubtitleDownloadError,
ProviderUnavailableError); the orchestrator contains them and turns them
into a retry entry.  Only ConfigurationError, CatalogError and
HistoryStoreError are expected to escape a run.
"""


class SubtitleSweepError(Exception):
    """Base exception for all subtitle sweep errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which collaborator triggered the error.
    The ``__str__`` method prefixes the provider name in brackets for
    structured log output, e.g. ``[opensubtitles] Rate limit exceeded``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Startup / configuration errors
# ---------------------------------------------------------------------------

class ConfigurationError(SubtitleSweepError):
    """Raised when subtitle options are invalid or cannot be loaded."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class CatalogError(SubtitleSweepError):
    """Raised by catalog providers when the item query fails."""

    def __init__(
        self,
        message: str = "Catalog query failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Per-item acquisition errors
# ---------------------------------------------------------------------------

class SubtitleDownloadError(SubtitleSweepError):
    """Raised when searching for or downloading a subtitle fails."""

    def __init__(
        self,
        message: str = "Subtitle download failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ProviderUnavailableError(SubtitleSweepError):
    """Raised when a subtitle provider is unreachable.

    The orchestrator treats this like any other per-item failure: the item
    is logged and parked in the retry history.
    """

    def __init__(
        self,
        message: str = "External service is unavailable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Persistence errors
# ---------------------------------------------------------------------------

class HistoryStoreError(SubtitleSweepError):
    """Raised when the retry history cannot be persisted to disk.

    Read failures never raise; a missing or corrupt history file simply
    loads as an empty history.
    """

    def __init__(
        self,
        message: str = "Retry history could not be written",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
