from __future__ import annotations
from typing import Optional, Protocol, Type, runtime_checkable

from mediaprobe.domain.entities.media_item import MediaItem
from mediaprobe.domain.entities.probe import ProbeResult
from mediaprobe.domain.enums.media_kind import MediaKind


@runtime_checkable
class MediaKindMapper(Protocol):
    """
    Maps a probe result onto one kind of media item. Items routed to it
    are instances of `item_type`.

    apply() may assume `result` has already been normalized
    (ProbeResult.normalized()); implementations must not normalize again.
    """
    kind: MediaKind
    item_type: Type[MediaItem]

    def can_skip(self, item: MediaItem) -> bool: ...

    def apply(self, item: MediaItem, result: Optional[ProbeResult]) -> None: ...


class BaseMediaKindMapper:
    """Default extension points for mappers: never skip probing."""
    kind: MediaKind
    item_type: Type[MediaItem] = MediaItem

    def can_skip(self, item: MediaItem) -> bool:
        return False

    def apply(self, item: MediaItem, result: Optional[ProbeResult]) -> None:
        raise NotImplementedError
