# mediaprobe/domain/entities/tag_table.py
from __future__ import annotations

from collections.abc import Mapping
from typing import Dict, Iterator, Optional, Tuple


class TagTable(Mapping):
    """
    Read-only, case-insensitive view over probe tags.

    ffprobe reports tag keys with whatever casing the container used
    ("TITLE", "Album", "album_artist"). Lookups here casefold the key, while
    iteration yields the keys as they were reported. If the source has two
    keys that differ only by case, the last one wins.
    """

    __slots__ = ("_items",)

    def __init__(self, tags: Optional[Mapping[str, str]] = None) -> None:
        items: Dict[str, Tuple[str, str]] = {}
        for key, value in (tags or {}).items():
            items[str(key).casefold()] = (str(key), value)
        self._items = items

    @classmethod
    def from_mapping(cls, tags: Optional[Mapping[str, str]]) -> Optional["TagTable"]:
        """None stays None; an existing TagTable is returned as-is."""
        if tags is None:
            return None
        if isinstance(tags, TagTable):
            return tags
        return cls(tags)

    def __getitem__(self, key: str) -> str:
        return self._items[str(key).casefold()][1]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.casefold() in self._items

    def __iter__(self) -> Iterator[str]:
        return (original for original, _ in self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TagTable):
            return self._folded() == other._folded()
        if isinstance(other, Mapping):
            return self == TagTable(other)
        return NotImplemented

    def _folded(self) -> Dict[str, str]:
        return {k: v for k, (_, v) in self._items.items()}

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"TagTable({dict(self.items())!r})"
