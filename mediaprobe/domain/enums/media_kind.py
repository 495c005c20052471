from __future__ import annotations
from enum import StrEnum

class MediaKind(StrEnum):
    audio = "audio"
    video = "video"
    image = "image"
