# mediaprobe/domain/entities/probe.py
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Mapping, Optional, Tuple

from mediaprobe.domain.entities.tag_table import TagTable


@dataclass(frozen=True)
class ProbeFormat:
    """Container-level record. Numbers stay as the strings ffprobe printed."""
    bit_rate: Optional[str] = None
    duration: Optional[str] = None
    format_name: Optional[str] = None
    tags: Optional[Mapping[str, str]] = None


@dataclass(frozen=True)
class ProbeStream:
    index: Optional[int] = None
    codec_type: Optional[str] = None
    codec_name: Optional[str] = None
    channels: Optional[int] = None
    sample_rate: Optional[str] = None
    bit_rate: Optional[str] = None
    duration: Optional[str] = None
    tags: Optional[Mapping[str, str]] = None

    def is_kind(self, codec_type: str) -> bool:
        return (self.codec_type or "").casefold() == codec_type.casefold()


@dataclass(frozen=True)
class ProbeResult:
    """
    Framework-free result of a media probe: one format record plus the
    streams in the order the tool reported them.

    Tags arrive as plain mappings. Call normalized() once before mapping;
    mappers rely on the tag tables being TagTable instances.
    """
    format: ProbeFormat = field(default_factory=ProbeFormat)
    streams: Tuple[ProbeStream, ...] = ()

    def first_stream(self, codec_type: str) -> Optional[ProbeStream]:
        return next((s for s in self.streams if s.is_kind(codec_type)), None)

    def audio_stream(self) -> Optional[ProbeStream]:
        return self.first_stream("audio")

    @property
    def is_normalized(self) -> bool:
        tables = [self.format.tags] + [s.tags for s in self.streams]
        return all(t is None or isinstance(t, TagTable) for t in tables)

    def normalized(self) -> "ProbeResult":
        """Copy with every tag table (format and per-stream) made case-insensitive."""
        if self.is_normalized:
            return self
        return ProbeResult(
            format=replace(self.format, tags=TagTable.from_mapping(self.format.tags)),
            streams=tuple(replace(s, tags=TagTable.from_mapping(s.tags)) for s in self.streams),
        )
