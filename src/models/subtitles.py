"""Subtitle search request/result models shared with subtitle providers."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SubtitleSearchRequest(BaseModel):
    """Everything a provider may need to look up subtitles for one language."""

    model_config = ConfigDict(frozen=True)

    content_type: str
    language: str
    media_path: str | None = None
    name: str = ""
    series_name: str | None = None
    index_number: int | None = None
    parent_index_number: int | None = None
    production_year: int | None = None
    provider_ids: dict[str, str] = Field(default_factory=dict)
    runtime_ticks: int | None = None
    # Only accept results matched on file hash rather than on title.
    is_perfect_match: bool = False


class RemoteSubtitleInfo(BaseModel):
    """A single search hit returned by a subtitle provider."""

    model_config = ConfigDict(frozen=True)

    id: str
    provider_name: str
    language: str
    name: str = ""
    format: str | None = None
    is_hash_match: bool = False
    download_count: int | None = None
