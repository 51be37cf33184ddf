"""Pipeline step that answers UI searches from the content search index.

The step is one processor in the host's search pipeline. It decides whether
index-backed search applies, finds the index for the search scope, pulls hits
from it and hands them to the ResultDeduplicator, which appends display
results to the pipeline's result sink. No failure escapes ``process``: every
error path either logs and returns or sets a pipeline flag for the next step.
"""

import time
from typing import Any

from ..config.settings import SearchSettings
from ..models.base import HealthStatus
from ..models.component import ConfigurableComponentBase
from ..models.entities import ContentEntity
from ..models.interfaces import IndexLocator, SearchIndex, SearchIndexSwitchTracker
from ..models.query import SearchArgs
from ..models.results import RawHit
from ..result_processing.deduplication import ResultDeduplicator
from ..utils.errors import IndexNotFoundError, InvalidSearchArgsError
from ..utils.logging import get_logger, log_query, log_results
from .query_builder import select_hit_source

logger = get_logger(__name__)


class SearchContentIndexStep(ConfigurableComponentBase[SearchSettings]):
    """Searches the content index and fills the pipeline's result list."""

    def __init__(
        self,
        index_locator: IndexLocator,
        switch_tracker: SearchIndexSwitchTracker | None = None,
        name: str = "search_content_index",
        config: SearchSettings | None = None,
        deduplicator: ResultDeduplicator | None = None,
    ):
        """Initialize the step with its host capabilities."""
        if config is None:
            config = SearchSettings()

        super().__init__(name, config)

        self.index_locator = index_locator
        self.switch_tracker = switch_tracker
        self.deduplicator = deduplicator or ResultDeduplicator(config=config)

        self.metrics = self._empty_metrics()

    @staticmethod
    def _empty_metrics() -> dict[str, Any]:
        return {
            "total_runs": 0,
            "total_searches": 0,
            "total_results_emitted": 0,
            "total_legacy_deferrals": 0,
            "total_switched_off": 0,
            "total_missing_index": 0,
            "total_query_errors": 0,
            "avg_processing_time_ms": 0.0,
            "last_run_time": None,
        }

    async def initialize(self) -> None:
        """Initialize the step and its deduplicator."""
        await super().initialize()
        await self.deduplicator.initialize()
        logger.info("Initialized SearchContentIndexStep component")

    def process(self, args: SearchArgs) -> None:
        """
        Run the step for one search.

        Args:
            args: Pipeline arguments; results are appended to ``args.result``
        """
        self.metrics["total_runs"] += 1

        if args.use_legacy_search_engine:
            return

        if not self.config.content_search_enabled:
            args.use_legacy_search_engine = True
            self.metrics["total_legacy_deferrals"] += 1
            return

        if self._index_provider_off(args):
            return

        request = args.request
        root_id = request.root_scope or args.database_root
        if not root_id:
            error = InvalidSearchArgsError(field="database_root")
            logger.error(error.message)
            return

        if not request.text_query:
            return

        try:
            index = self.index_locator.get_index_for_scope(root_id)
        except IndexNotFoundError:
            logger.warning(f"No index found for {root_id}")
            self.metrics["total_missing_index"] += 1
            return

        if self._index_provider_off(args, index.name):
            return

        start_time = time.time()
        self.metrics["total_searches"] += 1
        log_query(logger, request.model_dump(mode="json"))

        try:
            hits = select_hit_source(index, request)
        except Exception as e:
            logger.error(f"Invalid search query: {request.text_query}", exc_info=e)
            self.metrics["total_query_errors"] += 1
            return

        emitted_before = len(args.result)
        errors_before = self.deduplicator.metrics["total_query_errors"]
        self.deduplicator.process(
            request,
            hits,
            self._entity_resolver(index),
            args.result,
            default_icon=self._default_icon(index),
        )
        if self.deduplicator.metrics["total_query_errors"] > errors_before:
            self.metrics["total_query_errors"] += 1

        emitted = len(args.result) - emitted_before
        self.metrics["total_results_emitted"] += emitted
        log_results(logger, {"total_results": emitted, "query": request.text_query})
        self._update_timing(time.time() - start_time)

    def _index_provider_off(self, args: SearchArgs, index_name: str | None = None) -> bool:
        """Check the switch tracker, clearing the provider flag when it is off."""
        if not self.config.index_switch_tracking or self.switch_tracker is None:
            return False

        if index_name is None:
            is_on = self.switch_tracker.is_on
        else:
            is_on = self.switch_tracker.is_index_on(index_name)

        if is_on:
            return False

        args.is_index_provider_on = False
        self.metrics["total_switched_off"] += 1
        logger.info(
            f"Index provider is switched off{f' for {index_name}' if index_name else ''}"
        )
        return True

    def _default_icon(self, index: SearchIndex) -> str | None:
        """Configured default icon, else the index's own."""
        if self.config.default_icon is not None:
            return self.config.default_icon
        return index.default_icon()

    @staticmethod
    def _entity_resolver(index: SearchIndex):
        def resolve(hit: RawHit) -> ContentEntity | None:
            return index.resolver.resolve(hit.item_id)

        return resolve

    def _update_timing(self, duration: float) -> None:
        self.metrics["last_run_time"] = time.time()
        prev_avg = self.metrics["avg_processing_time_ms"]
        count = self.metrics["total_searches"]
        self.metrics["avg_processing_time_ms"] = (
            prev_avg * (count - 1) + duration * 1000
        ) / count

    def get_metrics(self) -> dict[str, Any]:
        """Get step metrics."""
        return dict(self.metrics)

    def reset_metrics(self) -> None:
        """Reset all metrics."""
        self.metrics = self._empty_metrics()
        self.deduplicator.reset_metrics()

    async def check_health(self) -> tuple[HealthStatus, str]:
        """Check step health."""
        if not self.initialized:
            return HealthStatus.UNHEALTHY, "SearchContentIndexStep not initialized"

        status, message = await self.deduplicator.check_health()
        if status != HealthStatus.HEALTHY:
            return HealthStatus.DEGRADED, message

        return HealthStatus.HEALTHY, "SearchContentIndexStep is healthy"
