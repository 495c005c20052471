# mediaprobe/common/probe/ffprobe_helpers.py
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional
import json
import shlex
import subprocess

from mediaprobe.common.logging import get_logger
from mediaprobe.domain.errors import ProbeExecutionError

logger = get_logger(__name__)


def build_ffprobe_cmd(
    input_path: str | Path,
    *,
    ffprobe_bin: str = "ffprobe",
    log_level: str = "error",
    extra_args: Iterable[str] | None = None,
) -> List[str]:
    """
    Build an ffprobe command that emits the format + streams JSON document.
    """
    if isinstance(input_path, Path):
        input_path = str(input_path)
    base = [
        ffprobe_bin,
        "-v", log_level,
        "-show_streams",
        "-show_format",
        "-print_format", "json",
        "--",  # Stop option parsing in case of weird filenames
        input_path,
    ]
    if extra_args:
        # Options must come before the "--" separator
        base = base[:-2] + list(extra_args) + base[-2:]
    return base


def run_ffprobe(cmd: List[str], *, timeout_sec: Optional[float] = None) -> Dict[str, Any]:
    """
    Execute ffprobe and return the parsed JSON document.
    Every failure mode surfaces as ProbeExecutionError.
    """
    logger.debug("ffprobe cmd: %s", " ".join(shlex.quote(p) for p in cmd))
    try:
        cp = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout_sec,
            check=False,  # we handle rc manually to attach stderr
        )
    except subprocess.TimeoutExpired as e:
        raise ProbeExecutionError(f"ffprobe timed out after {timeout_sec}s", stderr=str(e)) from e
    except OSError as e:
        raise ProbeExecutionError("Failed to execute ffprobe (OS error).", stderr=str(e)) from e

    if cp.returncode != 0:
        raise ProbeExecutionError("ffprobe returned non-zero exit code", stderr=cp.stderr, rc=cp.returncode)

    return decode_ffprobe_json(cp.stdout)


def decode_ffprobe_json(text: Optional[str]) -> Dict[str, Any]:
    """Parse ffprobe stdout (or a cached artifact). Blank output is an empty document."""
    try:
        data = json.loads(text or "{}")
    except json.JSONDecodeError as e:
        raise ProbeExecutionError("ffprobe produced invalid JSON", stderr=(text or "")[:2000]) from e
    if not isinstance(data, dict):
        raise ProbeExecutionError(f"ffprobe JSON must be an object, got {type(data).__name__}")
    return data
