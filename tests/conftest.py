"""Shared pytest fixtures for the subtitle sweep test suite."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.interfaces.catalog_provider import ICatalogProvider
from src.interfaces.history_store import IHistoryStore
from src.interfaces.metadata_refresher import IMetadataRefresher
from src.interfaces.options_provider import IOptionsProvider
from src.interfaces.subtitle_downloader import ISubtitleDownloader
from src.interfaces.subtitle_provider import ISubtitleProvider
from src.models.options import AcquisitionOptions

# Fixed "now" used by every clock-dependent test.
FIXED_NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Time
# ---------------------------------------------------------------------------


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def clock(now: datetime) -> Callable[[], datetime]:
    return lambda: now


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------


@pytest.fixture
def default_options() -> AcquisitionOptions:
    """Both item types enabled, English only."""
    return AcquisitionOptions(
        download_episode_subtitles=True,
        download_movie_subtitles=True,
        skip_if_embedded_subtitles_present=False,
        skip_if_audio_track_matches=True,
        require_perfect_match=True,
        download_languages=["eng"],
    )


@pytest.fixture
def mock_options_provider(default_options: AcquisitionOptions) -> IOptionsProvider:
    mock = MagicMock(spec=IOptionsProvider)
    mock.get_acquisition_options.return_value = default_options
    return mock


# ---------------------------------------------------------------------------
# Collaborator mocks
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_catalog() -> ICatalogProvider:
    """Mock catalog returning no items; set get_item_list.return_value per test."""
    mock = MagicMock(spec=ICatalogProvider)
    mock.get_provider_name.return_value = "mock-catalog"
    mock.get_item_list = AsyncMock(return_value=[])
    return mock


@pytest.fixture
def mock_downloader() -> ISubtitleDownloader:
    """Mock per-item downloader that finds nothing by default."""
    mock = MagicMock(spec=ISubtitleDownloader)
    mock.download_subtitles = AsyncMock(return_value=set())
    return mock


@pytest.fixture
def mock_refresher() -> IMetadataRefresher:
    mock = MagicMock(spec=IMetadataRefresher)
    mock.refresh_metadata = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def mock_subtitle_provider() -> ISubtitleProvider:
    """Mock subtitle site with no search hits by default."""
    mock = MagicMock(spec=ISubtitleProvider)
    mock.get_provider_name.return_value = "mock-subs"
    mock.search_subtitles = AsyncMock(return_value=[])
    mock.download_subtitle = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def mock_history_store() -> IHistoryStore:
    """Mock store with an empty history, for asserting on I/O calls."""
    mock = MagicMock(spec=IHistoryStore)
    mock.get_provider_name.return_value = "mock-history"
    mock.load.return_value = {}
    return mock
