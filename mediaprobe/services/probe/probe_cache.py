# mediaprobe/services/probe/probe_cache.py
from __future__ import annotations

import hashlib
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from mediaprobe.common.logging import get_logger
from mediaprobe.common.probe.ffprobe_helpers import decode_ffprobe_json
from mediaprobe.domain.entities.media_item import MediaItem
from mediaprobe.domain.entities.probe import ProbeResult
from mediaprobe.domain.errors import ProbeIOError
from mediaprobe.domain.ports.probe import MediaProbePort
from mediaprobe.services.mappers.probe_document import to_domain_probe_result

logger = get_logger(__name__)

SHARDS: Tuple[str, ...] = tuple("0123456789") + tuple("abcdef")
ARTIFACT_SUFFIX = ".json"


class ProbeCache:
    """
    On-disk cache of raw probe documents, sharded by the first hex character
    of the cache key:

        <cache_root>/<shard>/<key>.json

    All sixteen shards are created up front (and again on ensure_shards()),
    so per-item reads and writes never create directories and need no lock.
    Entries are never invalidated or deleted here.
    """

    def __init__(self, cache_root: Path | str, prober: MediaProbePort) -> None:
        self.cache_root = Path(cache_root)
        self.prober = prober
        self.ensure_shards()

    # ---- Layout ---------------------------------------------------------------
    def ensure_shards(self) -> None:
        """Create the cache root and its 16 shard directories. Idempotent."""
        for shard in SHARDS:
            d = self.cache_root / shard
            if d.is_dir():
                continue
            try:
                d.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise ProbeIOError("Could not create probe cache shard", path=d) from e

    @staticmethod
    def cache_key(item: MediaItem) -> str:
        """
        Deterministic key from the item's resolved file path plus its
        modification timestamp when the entity carries one. Relative paths
        and symlinks to the same file share one entry.
        """
        stamp = item.modified_ts.isoformat() if item.modified_ts else ""
        raw = f"{item.path.resolve()}|{stamp}"
        return hashlib.sha1(raw.encode("utf-8")).hexdigest()

    @staticmethod
    def shard_for(key: str) -> str:
        shard = key[:1].lower()
        if shard not in SHARDS:
            raise ValueError(f"cache key {key!r} does not map to a shard")
        return shard

    def artifact_path(self, item: MediaItem) -> Path:
        key = self.cache_key(item)
        return self.cache_root / self.shard_for(key) / f"{key}{ARTIFACT_SUFFIX}"

    def is_cached(self, item: MediaItem) -> bool:
        return self.artifact_path(item).is_file()

    # ---- Resolve --------------------------------------------------------------
    def resolve(self, item: MediaItem) -> Optional[ProbeResult]:
        """
        Cached probe result for `item`, running the prober only on a miss.
        None means the tool reported nothing for this file.
        """
        artifact = self.artifact_path(item)
        if artifact.is_file():
            logger.debug("probe cache hit %s -> %s", item.path, artifact.name)
            data = self._read(artifact)
        else:
            logger.debug("probe cache miss %s", item.path)
            data = self.prober.probe(item.path)
            self._write(artifact, data)
        return to_domain_probe_result(data)

    @staticmethod
    def _read(artifact: Path) -> Dict[str, Any]:
        try:
            text = artifact.read_text(encoding="utf-8")
        except OSError as e:
            raise ProbeIOError("Could not read probe cache artifact", path=artifact) from e
        return decode_ffprobe_json(text)

    @staticmethod
    def _write(artifact: Path, data: Dict[str, Any]) -> None:
        # temp file in the same shard + os.replace: readers never see a partial file
        tmp_name: Optional[str] = None
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=".tmp-", suffix=ARTIFACT_SUFFIX, dir=artifact.parent)
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh)
            os.replace(tmp_name, artifact)
            tmp_name = None
        except OSError as e:
            raise ProbeIOError("Could not write probe cache artifact", path=artifact) from e
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
