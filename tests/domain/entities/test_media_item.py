from datetime import timedelta
from pathlib import Path
from uuid import UUID

import pytest

from mediaprobe.domain.entities.media_item import AudioItem, MediaItem
from mediaprobe.domain.entities.person import PersonInfo
from mediaprobe.domain.enums.media_kind import MediaKind
from mediaprobe.domain.enums.person_role import PersonRole


def test_media_item_defaults_from_path():
    item = MediaItem(path="/music/Artist/01 - Intro.mp3", kind="audio")
    assert isinstance(item.path, Path)
    assert isinstance(item.id, UUID)
    assert item.kind is MediaKind.audio
    assert item.name == "01 - Intro"


def test_media_item_keeps_explicit_name():
    item = MediaItem(path="/x/a.mp3", name="Display")
    assert item.name == "Display"


@pytest.mark.parametrize("path", ["", "   "])
def test_media_item_requires_path(path):
    with pytest.raises(ValueError):
        MediaItem(path=path)


def test_media_item_rejects_unknown_kind():
    with pytest.raises(ValueError):
        MediaItem(path="/x/a.bin", kind="hologram")


def test_audio_item_defaults():
    item = AudioItem(path="/x/a.flac")
    assert item.kind is MediaKind.audio
    assert item.people == []
    assert item.genres is None
    assert item.studios is None
    assert item.run_time is None


def test_audio_item_kind_is_fixed():
    with pytest.raises(ValueError):
        AudioItem(path="/x/a.flac", kind=MediaKind.video)


def test_audio_item_run_time():
    item = AudioItem(path="/x/a.flac", run_time_ticks=2_155_000_000)
    assert item.run_time == timedelta(seconds=215.5)


def test_add_person_ignores_same_credit():
    item = AudioItem(path="/x/a.flac")
    item.add_person(PersonInfo("J. S. Bach", PersonRole.composer))
    item.add_person(PersonInfo("j. s. bach", PersonRole.composer))
    item.add_person(PersonInfo("J. S. Bach", PersonRole.artist))
    assert item.people == [
        PersonInfo("J. S. Bach", PersonRole.composer),
        PersonInfo("J. S. Bach", PersonRole.artist),
    ]


def test_people_lists_are_not_shared():
    a = AudioItem(path="/x/a.flac")
    b = AudioItem(path="/x/b.flac")
    a.add_person(PersonInfo("X", PersonRole.composer))
    assert b.people == []
