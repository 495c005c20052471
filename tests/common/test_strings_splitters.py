from mediaprobe.common.strings.splitters import csv_to_list, first_segment, split_tag_values


def test_csv_to_list_none():
    assert csv_to_list(None) == []


def test_csv_to_list_list_input():
    assert csv_to_list([" a ", "b", "", "  "]) == ["a", "b"]


def test_csv_to_list_string_input():
    assert csv_to_list(" mp3, flac ,ogg ,, wav ") == ["mp3", "flac", "ogg", "wav"]


def test_split_tag_values_keeps_order():
    assert split_tag_values("Rock/Pop") == ["Rock", "Pop"]


def test_split_tag_values_is_verbatim():
    # no stripping, no dropping of empty segments
    assert split_tag_values("Rock / Pop") == ["Rock ", " Pop"]
    assert split_tag_values("A//B") == ["A", "", "B"]


def test_split_tag_values_empty():
    assert split_tag_values("") == []
    assert split_tag_values(None) == []


def test_first_segment():
    assert first_segment("2/5") == "2"
    assert first_segment("3") == "3"
    assert first_segment("/5") == ""
    assert first_segment("") is None
    assert first_segment(None) is None
