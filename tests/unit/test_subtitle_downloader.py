"""Unit tests for SubtitleDownloader's per-language policy checks."""

from __future__ import annotations

import asyncio

import pytest

from src.interfaces.subtitle_provider import ISubtitleProvider
from src.models.catalog import CatalogItem, LocationType, MediaStream, MediaStreamType
from src.models.subtitles import RemoteSubtitleInfo
from src.services.subtitle_downloader import SubtitleDownloader
from src.utils.errors import ProviderUnavailableError, SubtitleDownloadError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _episode(**overrides) -> CatalogItem:
    fields = {
        "id": "ep-1",
        "item_type": "Episode",
        "name": "Pilot",
        "path": "/media/tv/Show/S01E01.mkv",
        "series_name": "Show",
        "index_number": 1,
        "parent_index_number": 1,
        "provider_ids": {"tvdb": "123"},
    }
    fields.update(overrides)
    return CatalogItem(**fields)


def _audio(language: str, is_default: bool = False) -> MediaStream:
    return MediaStream(type=MediaStreamType.AUDIO, language=language, is_default=is_default)


def _subtitle(language: str, is_text: bool = True, is_external: bool = False) -> MediaStream:
    return MediaStream(
        type=MediaStreamType.SUBTITLE,
        language=language,
        is_text_subtitle_stream=is_text,
        is_external=is_external,
    )


def _hit(subtitle_id: str, language: str = "eng") -> RemoteSubtitleInfo:
    return RemoteSubtitleInfo(id=subtitle_id, provider_name="mock-subs", language=language)


async def _download(
    downloader: SubtitleDownloader,
    item: CatalogItem,
    streams: list[MediaStream] | None = None,
    *,
    skip_embedded: bool = False,
    skip_audio: bool = False,
    perfect: bool = False,
    languages: tuple[str, ...] = ("eng",),
    cancel_event: asyncio.Event | None = None,
) -> set[str]:
    return await downloader.download_subtitles(
        item,
        streams or [],
        skip_embedded,
        skip_audio,
        perfect,
        languages,
        cancel_event,
    )


@pytest.fixture()
def downloader(mock_subtitle_provider: ISubtitleProvider) -> SubtitleDownloader:
    return SubtitleDownloader(subtitle_provider=mock_subtitle_provider)


# ======================================================================
# Tests
# ======================================================================


class TestSubtitleDownloader:
    @pytest.mark.asyncio
    async def test_downloads_first_search_hit(
        self, downloader: SubtitleDownloader, mock_subtitle_provider: ISubtitleProvider
    ) -> None:
        mock_subtitle_provider.search_subtitles.return_value = [_hit("best"), _hit("second")]
        item = _episode()

        result = await _download(downloader, item)

        assert result == {"eng"}
        mock_subtitle_provider.download_subtitle.assert_awaited_once_with(item, "best", None)

    @pytest.mark.asyncio
    async def test_search_request_built_from_item(
        self, downloader: SubtitleDownloader, mock_subtitle_provider: ISubtitleProvider
    ) -> None:
        await _download(downloader, _episode(), perfect=True)

        request = mock_subtitle_provider.search_subtitles.await_args.args[0]
        assert request.content_type == "Episode"
        assert request.language == "eng"
        assert request.media_path == "/media/tv/Show/S01E01.mkv"
        assert request.series_name == "Show"
        assert request.index_number == 1
        assert request.parent_index_number == 1
        assert request.provider_ids == {"tvdb": "123"}
        assert request.is_perfect_match is True

    @pytest.mark.asyncio
    async def test_no_hits_returns_empty(
        self, downloader: SubtitleDownloader, mock_subtitle_provider: ISubtitleProvider
    ) -> None:
        result = await _download(downloader, _episode())

        assert result == set()
        mock_subtitle_provider.download_subtitle.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_each_language_searched_in_order(
        self, downloader: SubtitleDownloader, mock_subtitle_provider: ISubtitleProvider
    ) -> None:
        mock_subtitle_provider.search_subtitles.side_effect = [[_hit("en-1")], [], [_hit("de-1", "ger")]]

        result = await _download(downloader, _episode(), languages=("eng", "fre", "ger"))

        assert result == {"eng", "ger"}
        searched = [c.args[0].language for c in mock_subtitle_provider.search_subtitles.await_args_list]
        assert searched == ["eng", "fre", "ger"]

    @pytest.mark.asyncio
    async def test_existing_text_subtitle_skips_language(
        self, downloader: SubtitleDownloader, mock_subtitle_provider: ISubtitleProvider
    ) -> None:
        result = await _download(downloader, _episode(), [_subtitle("ENG")])

        assert result == set()
        mock_subtitle_provider.search_subtitles.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_image_subtitle_does_not_skip_language(
        self, downloader: SubtitleDownloader, mock_subtitle_provider: ISubtitleProvider
    ) -> None:
        mock_subtitle_provider.search_subtitles.return_value = [_hit("x")]

        result = await _download(downloader, _episode(), [_subtitle("eng", is_text=False)])

        assert result == {"eng"}

    @pytest.mark.asyncio
    async def test_default_audio_match_skips_when_enabled(
        self, downloader: SubtitleDownloader, mock_subtitle_provider: ISubtitleProvider
    ) -> None:
        streams = [_audio("jpn"), _audio("eng", is_default=True)]

        result = await _download(downloader, _episode(), streams, skip_audio=True)

        assert result == set()
        mock_subtitle_provider.search_subtitles.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_first_audio_used_when_no_default(
        self, downloader: SubtitleDownloader, mock_subtitle_provider: ISubtitleProvider
    ) -> None:
        streams = [_audio("eng"), _audio("jpn")]

        result = await _download(downloader, _episode(), streams, skip_audio=True)

        assert result == set()
        mock_subtitle_provider.search_subtitles.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_audio_match_ignored_when_disabled(
        self, downloader: SubtitleDownloader, mock_subtitle_provider: ISubtitleProvider
    ) -> None:
        mock_subtitle_provider.search_subtitles.return_value = [_hit("x")]

        result = await _download(downloader, _episode(), [_audio("eng", is_default=True)])

        assert result == {"eng"}

    @pytest.mark.asyncio
    async def test_embedded_subtitle_skips_when_enabled(
        self, downloader: SubtitleDownloader, mock_subtitle_provider: ISubtitleProvider
    ) -> None:
        result = await _download(
            downloader, _episode(), [_subtitle("fre", is_text=False)], skip_embedded=True
        )

        assert result == set()
        mock_subtitle_provider.search_subtitles.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_external_subtitle_is_not_embedded(
        self, downloader: SubtitleDownloader, mock_subtitle_provider: ISubtitleProvider
    ) -> None:
        mock_subtitle_provider.search_subtitles.return_value = [_hit("x")]

        result = await _download(
            downloader, _episode(), [_subtitle("fre", is_external=True)], skip_embedded=True
        )

        assert result == {"eng"}

    @pytest.mark.asyncio
    async def test_remote_item_not_searched(
        self, downloader: SubtitleDownloader, mock_subtitle_provider: ISubtitleProvider
    ) -> None:
        result = await _download(downloader, _episode(location_type=LocationType.REMOTE))

        assert result == set()
        mock_subtitle_provider.search_subtitles.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_item_without_path_not_searched(
        self, downloader: SubtitleDownloader, mock_subtitle_provider: ISubtitleProvider
    ) -> None:
        result = await _download(downloader, _episode(path=None))

        assert result == set()
        mock_subtitle_provider.search_subtitles.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unsupported_item_type_not_searched(
        self, downloader: SubtitleDownloader, mock_subtitle_provider: ISubtitleProvider
    ) -> None:
        result = await _download(downloader, _episode(item_type="MusicVideo"))

        assert result == set()
        mock_subtitle_provider.search_subtitles.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_cancelled_before_first_language(
        self, downloader: SubtitleDownloader, mock_subtitle_provider: ISubtitleProvider
    ) -> None:
        cancel = asyncio.Event()
        cancel.set()

        result = await _download(downloader, _episode(), cancel_event=cancel)

        assert result == set()
        mock_subtitle_provider.search_subtitles.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_search_error_raised_as_download_error(
        self, downloader: SubtitleDownloader, mock_subtitle_provider: ISubtitleProvider
    ) -> None:
        mock_subtitle_provider.search_subtitles.side_effect = RuntimeError("boom")

        with pytest.raises(SubtitleDownloadError, match="boom") as exc_info:
            await _download(downloader, _episode())

        assert exc_info.value.provider_name == "mock-subs"
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_connection_error_raised_as_provider_unavailable(
        self, downloader: SubtitleDownloader, mock_subtitle_provider: ISubtitleProvider
    ) -> None:
        mock_subtitle_provider.search_subtitles.return_value = [_hit("x")]
        mock_subtitle_provider.download_subtitle.side_effect = ConnectionError("reset by peer")

        with pytest.raises(ProviderUnavailableError, match="reset by peer"):
            await _download(downloader, _episode())

    @pytest.mark.asyncio
    async def test_sweep_errors_pass_through_unchanged(
        self, downloader: SubtitleDownloader, mock_subtitle_provider: ISubtitleProvider
    ) -> None:
        original = SubtitleDownloadError(message="quota exceeded", provider_name="opensubtitles")
        mock_subtitle_provider.search_subtitles.side_effect = original

        with pytest.raises(SubtitleDownloadError) as exc_info:
            await _download(downloader, _episode())

        assert exc_info.value is original
