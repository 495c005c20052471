# mediaprobe/domain/errors.py
from __future__ import annotations

from pathlib import Path
from typing import Optional


class MediaProbeError(Exception):
    """Base class for every error raised by the probe pipeline."""


class ProbeExecutionError(MediaProbeError):
    """
    The probing tool could not be run, exited non-zero, or produced output
    (fresh or cached) that could not be parsed into a probe document.
    """

    def __init__(self, message: str, *, stderr: Optional[str] = None, rc: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.stderr = stderr
        self.rc = rc

    def __str__(self) -> str:
        if self.rc is not None:
            return f"{self.message} (rc={self.rc})"
        return self.message


class ProbeIOError(MediaProbeError):
    """The cache directory (or a shard inside it) could not be created or written."""

    def __init__(self, message: str, *, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path is not None:
            return f"{self.message}: {self.path}"
        return self.message


class MalformedProbeResultError(MediaProbeError):
    """A probe result is present but lacks a stream the mapper requires."""


class UnsupportedMediaKindError(MediaProbeError, ValueError):
    """No probe route (mapper + cache) is registered for the item's kind."""
