"""Root-scope restriction of hit streams."""

from collections.abc import Iterable, Iterator

from ..models.base import SearchSurface
from ..models.query import SearchRequest
from ..models.results import RawHit


def scope_applies(request: SearchRequest) -> bool:
    """Whether the request's root scope restricts its hits.

    The content editor searches the whole tree even when a root is supplied.
    """
    return bool(request.root_scope) and request.surface != SearchSurface.CONTENT_EDITOR


def restrict_to_scope(hits: Iterable[RawHit], request: SearchRequest) -> Iterator[RawHit]:
    """Lazily drop hits that lie outside the request's root scope."""
    if not scope_applies(request):
        yield from hits
        return

    for hit in hits:
        if request.root_scope in hit.paths:
            yield hit
