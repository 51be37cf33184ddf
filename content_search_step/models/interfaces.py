"""Protocol definitions for component and host interfaces.

This module defines two groups of protocols. The lifecycle and health
protocols are implemented by the step's own components. The host protocols
describe the capabilities the step consumes from the content platform: entity
resolution, index lookup, query execution and the index switch tracker. They
use Python's typing.Protocol for structural subtyping, so any host adapter
with matching attributes can be plugged in.
"""

from abc import abstractmethod
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from .base import HealthStatus
from .entities import ContentEntity
from .query import QueryFilter, SearchRequest
from .results import RawHit


@runtime_checkable
class ServiceLifecycle(Protocol):
    """Core lifecycle protocol that all service components should implement."""

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the component, setting up required resources."""
        ...

    @abstractmethod
    async def cleanup(self) -> None:
        """Clean up resources used by the component."""
        ...

    @abstractmethod
    async def reset(self) -> None:
        """Reset the component to its initial state."""
        ...


@runtime_checkable
class HealthCheck(Protocol):
    """Health checking protocol for components."""

    @abstractmethod
    async def check_health(self) -> tuple[HealthStatus, str]:
        """
        Check the health status of the component.

        Returns:
            A tuple of (status, message) where status is one of
            HealthStatus.HEALTHY, HealthStatus.DEGRADED, or HealthStatus.UNHEALTHY
        """
        ...

    @abstractmethod
    def is_healthy(self) -> bool:
        """
        Check if the component is in a healthy state.

        Returns:
            True if the component is healthy, False otherwise
        """
        ...


@runtime_checkable
class EntityResolver(Protocol):
    """Resolves item ids to their backing entities."""

    @abstractmethod
    def resolve(self, item_id: str) -> ContentEntity | None:
        """
        Fetch the entity for an item id.

        Returns:
            The entity, or None when it does not exist or is not accessible.
            Implementations may raise EntityUnavailableError instead of
            returning None.
        """
        ...


@runtime_checkable
class SearchIndex(Protocol):
    """A search index covering one content subtree."""

    name: str
    resolver: EntityResolver

    @abstractmethod
    def get_queryable(self, query_filter: QueryFilter) -> Iterable[RawHit]:
        """
        Run a filter expression against the index.

        Returns:
            A lazily evaluated sequence of hits. Errors raised by the query
            engine surface while iterating.
        """
        ...

    @abstractmethod
    def search(self, request: SearchRequest) -> Iterable[RawHit] | None:
        """
        Run the index's generic search for a request.

        Returns:
            Matching hits, or None when the index has no generic search.
        """
        ...

    @abstractmethod
    def default_icon(self) -> str | None:
        """Return the index's configured fallback icon."""
        ...


@runtime_checkable
class IndexLocator(Protocol):
    """Finds the index responsible for a content scope."""

    @abstractmethod
    def get_index_for_scope(self, root_id: str) -> SearchIndex:
        """
        Find the index covering an entity.

        Raises:
            IndexNotFoundError: If no index covers the entity
        """
        ...


@runtime_checkable
class SearchIndexSwitchTracker(Protocol):
    """Reports whether index providers are switched on."""

    @property
    @abstractmethod
    def is_on(self) -> bool:
        """Whether index providers are on globally."""
        ...

    @abstractmethod
    def is_index_on(self, index_name: str) -> bool:
        """Whether a specific index is on."""
        ...
