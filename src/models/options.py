"""Subtitle acquisition options.

A frozen snapshot of the ``subtitles`` configuration block.  One instance
is read at the start of a run and passed explicitly to everything that
needs it, so the options cannot change underneath a run in progress.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.models.catalog import ItemType


class AcquisitionOptions(BaseModel):
    """Which items to search subtitles for, and how picky to be."""

    model_config = ConfigDict(frozen=True)

    # === Eligible item types ===
    download_episode_subtitles: bool = False
    download_movie_subtitles: bool = False

    # === Matching policy ===
    # Skip a language when the file already has an embedded subtitle track.
    skip_if_embedded_subtitles_present: bool = False
    # Skip a language when the default audio track is already in it.
    skip_if_audio_track_matches: bool = False
    require_perfect_match: bool = True

    # Desired languages, in priority order (ISO 639-2, e.g. "eng").
    download_languages: tuple[str, ...] = Field(default_factory=tuple)

    @field_validator("download_languages", mode="before")
    @classmethod
    def _dedupe_languages(cls, value: object) -> object:
        if value is None:
            return ()
        if isinstance(value, str):
            value = [value]
        if isinstance(value, (list, tuple)):
            seen: list[str] = []
            for lang in value:
                lang = str(lang).strip()
                if lang and lang.lower() not in (s.lower() for s in seen):
                    seen.append(lang)
            return tuple(seen)
        return value

    def enabled_item_types(self) -> list[str]:
        """Return the item type tags enabled for subtitle downloads.

        Episodes come before movies; an empty list means the task has
        nothing to do this run.
        """
        types: list[str] = []
        if self.download_episode_subtitles:
            types.append(ItemType.EPISODE.value)
        if self.download_movie_subtitles:
            types.append(ItemType.MOVIE.value)
        return types
