"""Selection of the hit source for a search request."""

from collections.abc import Iterable, Iterator
from itertools import chain

from ..models.base import SearchSurface
from ..models.interfaces import SearchIndex
from ..models.query import QueryFilter, SearchRequest
from ..models.results import RawHit
from ..utils.logging import get_logger

logger = get_logger(__name__)


def build_query_filter(request: SearchRequest) -> QueryFilter:
    """Build the fallback filter: name prefix or content match."""
    return QueryFilter(
        text=request.text_query,
        language=request.content_language if request.has_language else None,
    )


def _non_empty(hits: Iterable[RawHit] | None) -> Iterator[RawHit] | None:
    """Peek at a hit source, returning None when it yields nothing.

    Only the first hit is pulled; the rest of the source stays lazy.
    """
    if hits is None:
        return None
    iterator = iter(hits)
    first = next(iterator, None)
    if first is None:
        return None
    return chain([first], iterator)


def select_hit_source(index: SearchIndex, request: SearchRequest) -> Iterable[RawHit]:
    """
    Pick the hit source for a request.

    Surfaces other than the content editor try the index's generic search
    first. When that is unavailable or yields nothing, the index is queried
    with the fallback filter.

    Args:
        index: The index covering the search scope
        request: The search request

    Returns:
        A lazy sequence of hits
    """
    if request.surface != SearchSurface.CONTENT_EDITOR:
        hits = _non_empty(index.search(request))
        if hits is not None:
            return hits
        logger.debug(f"Generic search returned nothing for {request.text_query!r}")

    return index.get_queryable(build_query_filter(request))
