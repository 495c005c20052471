# mediaprobe/services/probe/pipeline.py
from __future__ import annotations

from concurrent.futures import Future, wait
from dataclasses import dataclass
from enum import StrEnum
from typing import Dict, Iterable, List, Optional, Tuple

from mediaprobe.common.concurrency.thread_manager import DuplicateTaskError, ThreadManager
from mediaprobe.common.logging import get_logger
from mediaprobe.common.settings import Settings, get_settings
from mediaprobe.domain.dataclasses.reports import ProbeReport
from mediaprobe.domain.entities.media_item import MediaItem
from mediaprobe.domain.enums.media_kind import MediaKind
from mediaprobe.domain.errors import UnsupportedMediaKindError
from mediaprobe.domain.ports.mapper import MediaKindMapper
from mediaprobe.domain.ports.probe import MediaProbePort
from mediaprobe.services.mappers.audio import AudioMapper
from mediaprobe.services.probe.ffprobe_adapter import FFprobeAdapter
from mediaprobe.services.probe.probe_cache import ProbeCache

logger = get_logger(__name__)


class ProbeOutcome(StrEnum):
    mapped = "mapped"
    skipped = "skipped"
    no_data = "no_data"


@dataclass(frozen=True)
class ProbeRoute:
    """How one media kind is probed: which mapper, backed by which cache."""
    mapper: MediaKindMapper
    cache: ProbeCache

    @property
    def kind(self) -> MediaKind:
        return self.mapper.kind


class ProbePipeline:
    """
    Generic probe -> cache -> normalize -> map pipeline, dispatched on item.kind.

    process() runs on the calling thread; submit()/process_many() run each
    item on the worker pool. Nothing is shared between items except the
    cache shard directories, which exist before the first item is processed.
    Two concurrent runs for the same item are refused (DuplicateTaskError).
    """

    def __init__(
        self,
        routes: Iterable[ProbeRoute],
        *,
        workers: Optional[ThreadManager] = None,
        owns_workers: Optional[bool] = None,
    ) -> None:
        self._routes: Dict[MediaKind, ProbeRoute] = {}
        for route in routes:
            if route.kind in self._routes:
                raise ValueError(f"Duplicate probe route for media kind {route.kind!s}")
            self._routes[route.kind] = route
        # a pool we create (or are handed with owns_workers=True) is shut down with us
        self._owns_workers = workers is None if owns_workers is None else owns_workers
        self._workers = workers if workers is not None else ThreadManager(name="probe")

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        *,
        prober: Optional[MediaProbePort] = None,
    ) -> "ProbePipeline":
        """Default wiring: audio route on ffprobe, cache rooted at the configured audio cache dir."""
        cfg = settings or get_settings()
        prober = prober or FFprobeAdapter(
            ffprobe_bin=cfg.ffprobe.bin,
            timeout_sec=cfg.ffprobe.timeout_sec,
            log_level=cfg.ffprobe.log_level,
        )
        audio = ProbeRoute(
            mapper=AudioMapper(),
            cache=ProbeCache(cfg.cache_root_for(MediaKind.audio), prober),
        )
        workers = ThreadManager(
            name="probe",
            max_workers=cfg.concurrency.probe_workers,
            max_queue=cfg.concurrency.thread_queue_maxsize,
        )
        return cls([audio], workers=workers, owns_workers=True)

    # ---- Lifecycle ------------------------------------------------------------
    @property
    def kinds(self) -> Tuple[MediaKind, ...]:
        return tuple(self._routes)

    def init(self) -> None:
        """Re-create every route's cache shards. Idempotent."""
        for route in self._routes.values():
            route.cache.ensure_shards()

    @property
    def workers(self) -> ThreadManager:
        return self._workers

    def shutdown(self, wait: bool = True, cancel_futures: bool = False) -> None:
        if self._owns_workers:
            self._workers.shutdown(wait=wait, cancel_futures=cancel_futures)

    def __enter__(self) -> "ProbePipeline":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown(wait=True, cancel_futures=True)

    # ---- Single item ----------------------------------------------------------
    def supports(self, item: MediaItem) -> bool:
        route = self._routes.get(item.kind)
        return route is not None and isinstance(item, route.mapper.item_type)

    def route_for(self, item: MediaItem) -> ProbeRoute:
        route = self._routes.get(item.kind)
        if route is None:
            raise UnsupportedMediaKindError(f"No probe route for media kind {item.kind!s} ({item.path})")
        if not isinstance(item, route.mapper.item_type):
            raise UnsupportedMediaKindError(
                f"{type(item).__name__} cannot carry {item.kind!s} metadata, "
                f"expected {route.mapper.item_type.__name__} ({item.path})"
            )
        return route

    def process(self, item: MediaItem) -> None:
        """Probe `item` and map the result onto it in place."""
        self._process(item)

    def _process(self, item: MediaItem) -> ProbeOutcome:
        route = self.route_for(item)

        if route.mapper.can_skip(item):
            logger.debug("Skipping probe for %s %s", item.id, item.name)
            return ProbeOutcome.skipped

        result = route.cache.resolve(item)
        if result is None:
            logger.info("No probe data for %s %s", item.id, item.name)
            return ProbeOutcome.no_data

        route.mapper.apply(item, result.normalized())
        return ProbeOutcome.mapped

    # ---- Worker pool ----------------------------------------------------------
    def submit(self, item: MediaItem) -> Future[None]:
        """Run process(item) on a worker. Errors surface through the Future."""
        return self.workers.submit_keyed(item.id, self.process, item)

    def process_many(self, items: Iterable[MediaItem]) -> ProbeReport:
        """
        Process items on the worker pool and summarize. One item's failure is
        recorded on the report and never stops the others.
        """
        rpt = ProbeReport()
        rpt.start()

        seen = set()
        pending: List[Tuple[MediaItem, Future[ProbeOutcome]]] = []
        for item in items:
            rpt.planned += 1
            if item.id in seen:
                rpt.duplicates += 1
                continue
            seen.add(item.id)
            if not self.supports(item):
                rpt.not_supported += 1
                continue
            try:
                fut = self.workers.submit_keyed(item.id, self._process, item)
            except DuplicateTaskError:
                # already running via submit()
                rpt.duplicates += 1
                continue
            pending.append((item, fut))

        wait([f for _, f in pending])

        for item, fut in pending:
            try:
                outcome = fut.result()
            except Exception as ex:
                logger.exception("Probe failed for %s %s", item.id, item.path)
                rpt.errors += 1
                rpt.add_error(str(item.id), f"{type(ex).__name__}: {ex}")
                continue
            if outcome is ProbeOutcome.mapped:
                rpt.probed_ok += 1
            elif outcome is ProbeOutcome.skipped:
                rpt.skipped += 1
            else:
                rpt.no_data += 1

        rpt.stop()
        return rpt
