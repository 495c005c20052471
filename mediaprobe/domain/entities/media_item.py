# mediaprobe/domain/entities/media_item.py
from __future__ import annotations

from dataclasses import dataclass, asdict, field
from datetime import datetime, timedelta
from pathlib import Path
from typing import List, Optional
from uuid import UUID, uuid4

from mediaprobe.common.probe.value_parsing import TICKS_PER_SECOND
from mediaprobe.domain.entities.person import PersonInfo
from mediaprobe.domain.enums.media_kind import MediaKind


@dataclass
class MediaItem:
    """
    Core domain entity for a file-backed piece of media. The wider library
    owns its lifecycle; the probe pipeline only writes fields on it.

    Invariants kept here:
      - path is non-empty (str is coerced to Path)
      - kind is a valid MediaKind
      - name defaults to the file stem
    """
    path: Path
    id: UUID = field(default_factory=uuid4)
    name: str = ""
    kind: MediaKind = MediaKind.video

    # File stats (feed the probe cache key)
    modified_ts: Optional[datetime] = None
    date_created: Optional[datetime] = None
    data_origin: Optional[str] = None  # provenance note

    def __post_init__(self) -> None:
        if not self.path or not str(self.path).strip():
            raise ValueError("MediaItem requires a non-empty path")
        if not isinstance(self.path, Path):
            self.path = Path(self.path)
        self.kind = MediaKind(self.kind)
        if not self.name:
            self.name = self.path.stem

    def as_dict(self):
        return asdict(self)


@dataclass
class AudioItem(MediaItem):
    """
    Audio track. Fields below are written by the audio probe mapper.
    `genres` and `studios` stay None until the first value is appended.
    """
    kind: MediaKind = MediaKind.audio

    channels: Optional[int] = None
    sample_rate: Optional[int] = None
    bit_rate: Optional[int] = None
    run_time_ticks: Optional[int] = None  # 100ns units

    people: List[PersonInfo] = field(default_factory=list)
    album: Optional[str] = None
    artist: Optional[str] = None
    album_artist: Optional[str] = None
    index_number: Optional[int] = None         # track
    parent_index_number: Optional[int] = None  # disc
    language: Optional[str] = None
    production_year: Optional[int] = None
    premiere_date: Optional[datetime] = None
    genres: Optional[List[str]] = None
    studios: Optional[List[str]] = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.kind != MediaKind.audio:
            raise ValueError(f"AudioItem kind must be {MediaKind.audio!s}, got {self.kind!s}")

    @property
    def run_time(self) -> Optional[timedelta]:
        if self.run_time_ticks is None:
            return None
        return timedelta(seconds=self.run_time_ticks / TICKS_PER_SECOND)

    def add_person(self, person: PersonInfo) -> None:
        """Append a credit unless the same name (case-insensitive) and role is already present."""
        if any(p.same_credit(person) for p in self.people):
            return
        self.people.append(person)
