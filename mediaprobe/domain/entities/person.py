# mediaprobe/domain/entities/person.py
from __future__ import annotations

from dataclasses import dataclass

from mediaprobe.domain.enums.person_role import PersonRole


@dataclass(frozen=True)
class PersonInfo:
    """A credited person on a media item (e.g. the composer of a track)."""
    name: str
    role: PersonRole = PersonRole.other

    def same_credit(self, other: "PersonInfo") -> bool:
        return self.role == other.role and self.name.casefold() == other.name.casefold()
