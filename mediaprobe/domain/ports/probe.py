from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Protocol

class MediaProbePort(Protocol):
    # Returns the raw probe document ({"format": {...}, "streams": [...]}) so
    # callers can cache it verbatim before parsing.
    def probe(self, path: Path) -> Dict[str, Any]: ...
