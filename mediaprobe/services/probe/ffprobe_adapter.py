# mediaprobe/services/probe/ffprobe_adapter.py
from __future__ import annotations

import shutil
from pathlib import Path
from typing import Any, Dict, Optional

from mediaprobe.common.logging import get_logger
from mediaprobe.common.probe.ffprobe_helpers import build_ffprobe_cmd, run_ffprobe
from mediaprobe.common.settings import get_settings
from mediaprobe.domain.errors import ProbeExecutionError
from mediaprobe.domain.ports.probe import MediaProbePort

logger = get_logger(__name__)


class FFprobeAdapter(MediaProbePort):
    """
    Infrastructure adapter implementing MediaProbePort using `ffprobe`.
    Returns the raw JSON document so ProbeCache can persist it unchanged.
    Safe for use from ThreadManager (I/O-bound, no shared state).
    """

    def __init__(
        self,
        ffprobe_bin: Optional[str] = None,
        timeout_sec: Optional[int] = None,
        log_level: Optional[str] = None,
    ):
        cfg = get_settings().ffprobe
        candidate = ffprobe_bin or cfg.bin
        if not Path(candidate).is_absolute():
            # resolve bare names on PATH for nicer errors up front
            resolved = shutil.which(candidate)
            if not resolved:
                raise ProbeExecutionError(
                    f"{candidate} not found on PATH; set FFPROBE__BIN or install ffmpeg."
                )
            candidate = resolved

        self.ffprobe_bin = candidate
        self.timeout_sec = int(timeout_sec or cfg.timeout_sec)
        self.log_level = log_level or cfg.log_level

    # ---- Port API -------------------------------------------------------------
    def probe(self, path: Path) -> Dict[str, Any]:
        if not path:
            raise ProbeExecutionError("No path provided to probe().")
        if not Path(path).is_file():
            raise ProbeExecutionError(f"File not found: {path}")

        cmd = build_ffprobe_cmd(path, ffprobe_bin=self.ffprobe_bin, log_level=self.log_level)
        return run_ffprobe(cmd, timeout_sec=self.timeout_sec)
