"""Catalog item models consumed by the subtitle sweep task.

The catalog itself is an external collaborator (see
src/interfaces/catalog_provider.py).  These models are the read-only view
of a library item that the task needs: its identity, its type tag, where
it lives, and which media streams it already carries.

    CatalogQuery  ──→ ICatalogProvider.get_item_list() ──→ list[CatalogItem]
                                                             └── MediaStream[]
"""

from __future__ import annotations

from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ItemType(str, Enum):  # noqa: UP042  StrEnum requires Python 3.11+
    """Library item type tags the task knows how to search subtitles for."""

    EPISODE = "Episode"
    MOVIE = "Movie"


class MediaType(str, Enum):  # noqa: UP042
    VIDEO = "Video"
    AUDIO = "Audio"


class LocationType(str, Enum):  # noqa: UP042
    """Where an item's media lives.

    Only ``FILE_SYSTEM`` items have a local file that subtitles can be
    written next to; ``REMOTE`` and ``VIRTUAL`` items are excluded from
    the catalog query.
    """

    FILE_SYSTEM = "FileSystem"
    REMOTE = "Remote"
    VIRTUAL = "Virtual"


class MediaStreamType(str, Enum):  # noqa: UP042
    AUDIO = "Audio"
    VIDEO = "Video"
    SUBTITLE = "Subtitle"


class MediaStream(BaseModel):
    """A single audio, video or subtitle stream attached to an item."""

    model_config = ConfigDict(frozen=True)

    type: MediaStreamType
    # ISO 639-2 code as reported by the media probe, e.g. "eng".
    language: str | None = None
    is_default: bool = False
    # True for sidecar files (movie.eng.srt), False for tracks muxed
    # into the container.
    is_external: bool = False
    # False for image-based formats (PGS, VobSub).
    is_text_subtitle_stream: bool = False


class CatalogItem(BaseModel):
    """A video item from the media catalog.

    The scheduler only reads ``id`` and ``item_type``; the remaining
    descriptive fields are forwarded to subtitle providers so they can
    build a search.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    item_type: str
    name: str = ""
    path: str | None = None
    media_type: MediaType = MediaType.VIDEO
    location_type: LocationType = LocationType.FILE_SYSTEM
    is_virtual_item: bool = False
    media_streams: list[MediaStream] = Field(default_factory=list)
    series_name: str | None = None
    index_number: int | None = None
    parent_index_number: int | None = None
    production_year: int | None = None
    provider_ids: dict[str, str] = Field(default_factory=dict)
    runtime_ticks: int | None = None

    @property
    def history_key(self) -> str:
        """Return the stable key used for this item in the retry history.

        UUID identifiers are normalized to 32 lowercase hex digits with no
        dashes so that history written by older installs keeps matching.
        """
        try:
            return UUID(self.id).hex
        except ValueError:
            return self.id


class CatalogQuery(BaseModel):
    """Filter passed to :meth:`ICatalogProvider.get_item_list`."""

    model_config = ConfigDict(frozen=True)

    media_types: list[MediaType] = Field(default_factory=lambda: [MediaType.VIDEO])
    is_virtual_item: bool | None = False
    exclude_location_types: list[LocationType] = Field(
        default_factory=lambda: [LocationType.REMOTE, LocationType.VIRTUAL]
    )
    include_item_types: list[str] = Field(default_factory=list)
