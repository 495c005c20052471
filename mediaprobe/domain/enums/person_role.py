from __future__ import annotations
from enum import StrEnum

class PersonRole(StrEnum):
    composer = "Composer"
    artist = "Artist"
    other = "Other"
