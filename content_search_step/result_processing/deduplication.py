"""Version-aware duplicate removal for search hits."""

import time
from collections.abc import Iterable
from enum import Enum
from typing import Any

from ..config.settings import SearchSettings
from ..models.base import HealthStatus, SearchSurface
from ..models.component import ConfigurableComponentBase
from ..models.query import SearchRequest
from ..models.results import RawHit, SearchResultSink
from ..utils.logging import get_logger
from .formatting import format_results
from .scope import restrict_to_scope
from .visibility import EntityResolverFunc, is_hit_hidden

logger = get_logger(__name__)


class DuplicateAction(str, Enum):
    """What to do with a hit whose item is already accepted."""

    KEEP_EXISTING = "keep_existing"
    REPLACE = "replace"
    APPEND = "append"


def resolve_duplicate(
    request: SearchRequest, existing: RawHit, candidate: RawHit
) -> DuplicateAction:
    """Decide between an accepted hit and a later hit for the same item.

    With a content language requested, a hit in that language displaces one
    in another language, and a newer version displaces an older one of the
    same language. Without a language, non-classic surfaces only take newer
    versions of the same language. The classic surface keeps every hit.
    Equal versions keep the existing hit.
    """
    newer_same_language = (
        existing.language == candidate.language
        and existing.version < candidate.version
    )

    if request.has_language:
        language = request.content_language
        if (
            existing.language != language and candidate.language == language
        ) or newer_same_language:
            return DuplicateAction.REPLACE
        return DuplicateAction.KEEP_EXISTING

    if request.surface != SearchSurface.CLASSIC:
        if newer_same_language:
            return DuplicateAction.REPLACE
        return DuplicateAction.KEEP_EXISTING

    return DuplicateAction.APPEND


class HitAccumulator:
    """Ordered collection of accepted hits keyed by item id.

    Replacing a hit keeps its position. Appended duplicates (classic surface)
    sit after the first hit for the item, which stays the one compared
    against.
    """

    def __init__(self):
        self._hits: list[RawHit] = []
        self._positions: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._hits)

    def __iter__(self):
        return iter(self._hits)

    def find(self, item_id: str) -> RawHit | None:
        """Return the first accepted hit for an item, if any."""
        position = self._positions.get(item_id)
        return None if position is None else self._hits[position]

    def add(self, hit: RawHit) -> None:
        """Accept a hit at the end of the collection."""
        self._positions.setdefault(hit.item_id, len(self._hits))
        self._hits.append(hit)

    def replace(self, hit: RawHit) -> None:
        """Put a hit in place of the first accepted hit for its item."""
        self._hits[self._positions[hit.item_id]] = hit

    def to_list(self) -> list[RawHit]:
        return list(self._hits)


def accumulate_hits(
    request: SearchRequest,
    hits: Iterable[RawHit],
    resolve_entity: EntityResolverFunc,
    show_hidden: bool = False,
) -> list[RawHit]:
    """
    Collect up to ``request.limit`` hits, one per item where the surface requires it.

    Hits are pulled lazily. Once the limit is reached, later hits for items
    already accepted may still replace their entry in place; the first hit
    for a new item, or one that would be appended, ends consumption. Hidden
    hits are skipped without counting toward the limit. Errors raised by the
    hit source propagate to the caller.

    Args:
        request: The search request
        hits: Lazily produced hits from the query engine
        resolve_entity: Resolves the entity behind a hit
        show_hidden: Whether hidden items are kept

    Returns:
        Accepted hits in acceptance order
    """
    if request.limit <= 0:
        return []

    accepted = HitAccumulator()
    for hit in hits:
        at_limit = len(accepted) >= request.limit
        existing = accepted.find(hit.item_id)
        if at_limit and existing is None:
            break

        if not show_hidden and is_hit_hidden(resolve_entity, hit):
            logger.debug(f"Skipping hidden item {hit.item_id}")
            continue

        if existing is None:
            accepted.add(hit)
            continue

        action = resolve_duplicate(request, existing, hit)
        if action == DuplicateAction.REPLACE:
            accepted.replace(hit)
        elif action == DuplicateAction.APPEND:
            if at_limit:
                break
            accepted.add(hit)

    return accepted.to_list()


class ResultDeduplicator(ConfigurableComponentBase[SearchSettings]):
    """Component turning a raw hit stream into display results."""

    def __init__(
        self,
        name: str = "result_deduplicator",
        config: SearchSettings | None = None,
    ):
        """Initialize the deduplicator."""
        if config is None:
            config = SearchSettings()

        super().__init__(name, config)

        self.metrics = self._empty_metrics()

    @staticmethod
    def _empty_metrics() -> dict[str, Any]:
        return {
            "total_runs": 0,
            "total_accepted_hits": 0,
            "total_emitted_results": 0,
            "total_query_errors": 0,
            "avg_processing_time_ms": 0.0,
            "last_run_time": None,
        }

    async def initialize(self) -> None:
        """Initialize the deduplicator component."""
        await super().initialize()
        logger.info("Initialized ResultDeduplicator component")

    def process(
        self,
        request: SearchRequest,
        raw_hits: Iterable[RawHit],
        resolve_entity: EntityResolverFunc,
        sink: SearchResultSink,
        show_hidden: bool | None = None,
        default_icon: str | None = None,
    ) -> None:
        """
        Deduplicate hits and append display results to the sink.

        A failure of the hit source is logged and ends the run without
        emitting anything.

        Args:
            request: The search request
            raw_hits: Lazily produced hits from the query engine
            resolve_entity: Resolves the entity behind a hit
            sink: Caller-owned result collection
            show_hidden: Whether hidden items are kept (defaults to config)
            default_icon: Fallback icon (defaults to config)
        """
        start_time = time.time()

        if show_hidden is None:
            show_hidden = self.config.show_hidden_items

        if default_icon is None:
            default_icon = self.config.default_icon

        try:
            accepted = accumulate_hits(
                request,
                restrict_to_scope(raw_hits, request),
                resolve_entity,
                show_hidden=show_hidden,
            )
        except Exception as e:
            logger.error(f"Invalid search query: {request.text_query}", exc_info=e)
            self.metrics["total_query_errors"] += 1
            self._update_metrics(0, 0, time.time() - start_time)
            return

        emitted = format_results(accepted, resolve_entity, default_icon, sink)
        self._update_metrics(len(accepted), emitted, time.time() - start_time)

    def _update_metrics(self, accepted: int, emitted: int, duration: float) -> None:
        """Update component metrics."""
        self.metrics["total_runs"] += 1
        self.metrics["total_accepted_hits"] += accepted
        self.metrics["total_emitted_results"] += emitted
        self.metrics["last_run_time"] = time.time()

        # Moving average of processing time
        prev_avg = self.metrics["avg_processing_time_ms"]
        prev_count = self.metrics["total_runs"] - 1
        self.metrics["avg_processing_time_ms"] = (
            prev_avg * prev_count + duration * 1000
        ) / self.metrics["total_runs"]

    def get_metrics(self) -> dict[str, Any]:
        """Get component metrics."""
        return dict(self.metrics)

    def reset_metrics(self) -> None:
        """Reset all metrics."""
        self.metrics = self._empty_metrics()

    async def check_health(self) -> tuple[HealthStatus, str]:
        """Check component health."""
        if not self.initialized:
            return HealthStatus.UNHEALTHY, "ResultDeduplicator not initialized"

        return HealthStatus.HEALTHY, "ResultDeduplicator is healthy"
