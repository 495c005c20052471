# mediaprobe/domain/dataclasses/reports.py
from __future__ import annotations

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple


# ---------------------------------------------------------------------------
# Base report (shared fields + utilities)
# ---------------------------------------------------------------------------
@dataclass
class BaseReport:
    """Common report base:
    - timing: started_at / finished_at
    - error capture: error_details
    - helpers: start(), stop(), add_error(), as_dict()
    """
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    # Each tuple is (subject/id/path, message)
    error_details: List[Tuple[str, str]] = field(default_factory=list)

    def start(self) -> None:
        if self.started_at is None:
            self.started_at = datetime.now()

    def stop(self) -> None:
        self.finished_at = datetime.now()

    def add_error(self, subject: str, message: str) -> None:
        self.error_details.append((subject, message))

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Probe (ffprobe) report
# ---------------------------------------------------------------------------
@dataclass
class ProbeReport(BaseReport):
    planned: int = 0
    probed_ok: int = 0        # mapper ran to completion
    skipped: int = 0          # mapper.can_skip() said no probe needed
    no_data: int = 0          # probe produced nothing; item untouched
    duplicates: int = 0       # same item id given more than once
    not_supported: int = 0    # no route for the item's kind
    errors: int = 0

    def merge(self, other: "ProbeReport") -> "ProbeReport":
        self.planned += other.planned
        self.probed_ok += other.probed_ok
        self.skipped += other.skipped
        self.no_data += other.no_data
        self.duplicates += other.duplicates
        self.not_supported += other.not_supported
        self.errors += other.errors
        self.error_details.extend(other.error_details)
        if self.started_at is None or (other.started_at and other.started_at < self.started_at):
            self.started_at = other.started_at
        if other.finished_at and (self.finished_at is None or other.finished_at > self.finished_at):
            self.finished_at = other.finished_at
        return self
