# tests/conftest.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from mediaprobe.common import settings as settings_mod
from mediaprobe.domain.entities.media_item import AudioItem


@pytest.fixture(autouse=True)
def _fresh_settings(tmp_path, monkeypatch):
    """Every test gets its own DATA_ROOT and an empty settings cache."""
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.setenv("DATA_ROOT", str(tmp_path / "data"))
    settings_mod.get_settings.cache_clear()
    yield
    settings_mod.get_settings.cache_clear()


class FakeProber:
    """MediaProbePort double: returns a canned document and records calls."""

    def __init__(self, document: Optional[Dict[str, Any]] = None, exc: Optional[BaseException] = None):
        self.document = document if document is not None else {}
        self.exc = exc
        self.calls: List[Path] = []

    def probe(self, path: Path) -> Dict[str, Any]:
        self.calls.append(Path(path))
        if self.exc is not None:
            raise self.exc
        return self.document


def make_document(
    *,
    format_tags: Optional[Dict[str, str]] = None,
    stream: Optional[Dict[str, Any]] = None,
    fmt: Optional[Dict[str, Any]] = None,
    extra_streams: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    audio_stream = {
        "index": 0,
        "codec_type": "audio",
        "codec_name": "flac",
        "channels": 2,
        "sample_rate": "44100",
        "bit_rate": "912000",
        "duration": "215.5",
    }
    audio_stream.update(stream or {})
    format_ = {"format_name": "flac", "bit_rate": "920000", "duration": "215.6"}
    format_.update(fmt or {})
    if format_tags is not None:
        format_["tags"] = format_tags
    return {"format": format_, "streams": list(extra_streams or []) + [audio_stream]}


@pytest.fixture
def fake_prober_factory():
    return FakeProber


@pytest.fixture
def document_factory():
    return make_document


@pytest.fixture
def audio_file(tmp_path) -> Path:
    p = tmp_path / "music" / "01 - Song.flac"
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(b"fLaC")
    return p


@pytest.fixture
def audio_item(audio_file) -> AudioItem:
    return AudioItem(path=audio_file)
