import subprocess

import pytest

from mediaprobe.common.probe import ffprobe_helpers
from mediaprobe.common.probe.ffprobe_helpers import build_ffprobe_cmd, decode_ffprobe_json, run_ffprobe
from mediaprobe.domain.errors import ProbeExecutionError


def test_build_ffprobe_cmd_uses_json_flags(tmp_path):
    f = tmp_path / "track.flac"
    cmd = build_ffprobe_cmd(f)
    assert "ffprobe" in cmd[0].lower()
    assert "-show_streams" in cmd
    assert "-show_format" in cmd
    assert cmd[cmd.index("-print_format") + 1] == "json"
    assert cmd[-2:] == ["--", str(f)]


def test_build_ffprobe_cmd_extra_args_go_before_separator(tmp_path):
    f = tmp_path / "-weird name.mp3"
    cmd = build_ffprobe_cmd(f, ffprobe_bin="/opt/ff/ffprobe", log_level="quiet", extra_args=["-show_chapters"])
    assert cmd[0] == "/opt/ff/ffprobe"
    assert cmd[cmd.index("-v") + 1] == "quiet"
    assert cmd.index("-show_chapters") < cmd.index("--")
    assert cmd[-1] == str(f)


class _Completed:
    def __init__(self, returncode=0, stdout="", stderr=""):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


def test_run_ffprobe_parses_stdout(monkeypatch):
    seen = {}

    def fake_run(cmd, **kw):
        seen["cmd"] = cmd
        seen["timeout"] = kw.get("timeout")
        return _Completed(stdout='{"format": {"duration": "1.5"}, "streams": []}')

    monkeypatch.setattr(ffprobe_helpers.subprocess, "run", fake_run)
    data = run_ffprobe(["ffprobe", "x"], timeout_sec=7)
    assert data["format"]["duration"] == "1.5"
    assert seen["timeout"] == 7


def test_run_ffprobe_nonzero_exit_carries_rc_and_stderr(monkeypatch):
    monkeypatch.setattr(
        ffprobe_helpers.subprocess, "run",
        lambda cmd, **kw: _Completed(returncode=1, stderr="Invalid data found"),
    )
    with pytest.raises(ProbeExecutionError) as ei:
        run_ffprobe(["ffprobe", "x"])
    assert ei.value.rc == 1
    assert "Invalid data" in ei.value.stderr


def test_run_ffprobe_timeout(monkeypatch):
    def fake_run(cmd, **kw):
        raise subprocess.TimeoutExpired(cmd, kw.get("timeout"))

    monkeypatch.setattr(ffprobe_helpers.subprocess, "run", fake_run)
    with pytest.raises(ProbeExecutionError, match="timed out"):
        run_ffprobe(["ffprobe", "x"], timeout_sec=1)


def test_run_ffprobe_os_error(monkeypatch):
    def fake_run(cmd, **kw):
        raise FileNotFoundError("ffprobe")

    monkeypatch.setattr(ffprobe_helpers.subprocess, "run", fake_run)
    with pytest.raises(ProbeExecutionError):
        run_ffprobe(["ffprobe", "x"])


def test_decode_ffprobe_json_blank_is_empty_document():
    assert decode_ffprobe_json("") == {}
    assert decode_ffprobe_json(None) == {}


@pytest.mark.parametrize("text", ["not json", "{\"format\": ", "[1, 2]"])
def test_decode_ffprobe_json_rejects_garbage(text):
    with pytest.raises(ProbeExecutionError):
        decode_ffprobe_json(text)
