"""Utility modules for the subtitle sweep task.

- **errors** -- Domain-specific exception hierarchy rooted at
  SubtitleSweepError; collaborators raise their own subclass so the
  orchestrator can log them with provider context.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
"""

# -- Domain exception hierarchy --------------------------------------------
from src.utils.errors import (
    CatalogError,
    ConfigurationError,
    HistoryStoreError,
    ProviderUnavailableError,
    SubtitleDownloadError,
    SubtitleSweepError,
)

# -- Structured logging setup ----------------------------------------------
from src.utils.logging import configure_logging, get_logger

__all__ = [
    "CatalogError",
    "ConfigurationError",
    "HistoryStoreError",
    "ProviderUnavailableError",
    "SubtitleDownloadError",
    "SubtitleSweepError",
    "configure_logging",
    "get_logger",
]
