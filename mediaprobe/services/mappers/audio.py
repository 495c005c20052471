# mediaprobe/services/mappers/audio.py
from __future__ import annotations

from datetime import datetime
from typing import Iterable, Mapping, Optional

from mediaprobe.common.logging import get_logger
from mediaprobe.common.probe.value_parsing import (
    parse_date_lenient,
    parse_int_lenient,
    parse_int_strict,
    parse_seconds_strict,
    seconds_to_ticks,
)
from mediaprobe.common.strings.splitters import first_segment, split_tag_values
from mediaprobe.domain.entities.media_item import AudioItem
from mediaprobe.domain.entities.person import PersonInfo
from mediaprobe.domain.entities.probe import ProbeResult
from mediaprobe.domain.enums.media_kind import MediaKind
from mediaprobe.domain.enums.person_role import PersonRole
from mediaprobe.domain.errors import MalformedProbeResultError
from mediaprobe.domain.ports.mapper import BaseMediaKindMapper

logger = get_logger(__name__)

ALBUM_ARTIST_KEYS = ("albumartist", "album artist", "album_artist")
RETAIL_DATE_KEYS = ("retaildate", "retail date", "retail_date")
STUDIO_KEYS = ("organization", "ensemble", "publisher")


def tag_value(tags: Optional[Mapping[str, str]], key: str) -> Optional[str]:
    if tags is None:
        return None
    return tags.get(key)


def first_tag_value(tags: Optional[Mapping[str, str]], keys: Iterable[str]) -> Optional[str]:
    """First non-empty value among `keys`, tried in order."""
    for key in keys:
        val = tag_value(tags, key)
        if val:
            return val
    return None


def first_tag_date(tags: Optional[Mapping[str, str]], keys: Iterable[str]) -> Optional[datetime]:
    """First value among `keys` that parses as a date, tried in order."""
    for key in keys:
        dt = parse_date_lenient(tag_value(tags, key))
        if dt is not None:
            return dt
    return None


class AudioMapper(BaseMediaKindMapper):
    """
    Maps an ffprobe result onto an AudioItem.

    Stream technicals (sample rate, bitrate, duration) are parsed strictly:
    a malformed value raises ValueError and stops mapping, leaving fields set
    before it in place. Tag-derived numbers and dates are parsed leniently
    and become None when they do not parse.
    """

    kind = MediaKind.audio
    item_type = AudioItem

    def apply(self, audio: AudioItem, result: Optional[ProbeResult]) -> None:
        if result is None:
            return

        stream = result.audio_stream()
        if stream is None:
            raise MalformedProbeResultError(
                f"No audio stream in probe result for {audio.id} ({audio.path})"
            )

        audio.channels = stream.channels

        if stream.sample_rate:
            audio.sample_rate = parse_int_strict(stream.sample_rate, "sample_rate")

        bitrate = stream.bit_rate or result.format.bit_rate
        if bitrate:
            audio.bit_rate = parse_int_strict(bitrate, "bit_rate")

        duration = stream.duration or result.format.duration
        if duration:
            audio.run_time_ticks = seconds_to_ticks(parse_seconds_strict(duration, "duration"))

        if result.format.tags is None:
            logger.debug("No format tags for %s %s", audio.id, audio.name)
            return
        self.apply_tags(audio, result.format.tags)

    def apply_tags(self, audio: AudioItem, tags: Mapping[str, str]) -> None:
        title = tag_value(tags, "title")
        if title:
            audio.name = title

        composer = tag_value(tags, "composer")
        if composer:
            audio.add_person(PersonInfo(name=composer, role=PersonRole.composer))

        audio.album = tag_value(tags, "album")
        audio.artist = tag_value(tags, "artist")
        audio.album_artist = first_tag_value(tags, ALBUM_ARTIST_KEYS)

        audio.index_number = parse_int_lenient(tag_value(tags, "track"))
        audio.parent_index_number = parse_int_lenient(first_segment(tag_value(tags, "disc")))

        audio.language = tag_value(tags, "language")

        # "date" is usually just a year; a full date here parses to None
        audio.production_year = parse_int_lenient(tag_value(tags, "date"))

        audio.premiere_date = first_tag_date(tags, RETAIL_DATE_KEYS)

        self._append_genres(audio, tags)
        for key in STUDIO_KEYS:
            self._append_studios(audio, tags, key)

    @staticmethod
    def _append_genres(audio: AudioItem, tags: Mapping[str, str]) -> None:
        values = split_tag_values(tag_value(tags, "genre"))
        if values:
            if audio.genres is None:
                audio.genres = []
            audio.genres.extend(values)

    @staticmethod
    def _append_studios(audio: AudioItem, tags: Mapping[str, str], key: str) -> None:
        values = split_tag_values(tag_value(tags, key))
        if values:
            if audio.studios is None:
                audio.studios = []
            audio.studios.extend(values)
