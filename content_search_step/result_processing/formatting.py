"""Conversion of accepted hits into display results."""

from collections.abc import Iterable

from ..models.results import DisplayResult, RawHit, SearchResultSink
from ..utils.logging import get_logger
from .visibility import EntityResolverFunc, safe_resolve

logger = get_logger(__name__)


def format_result(
    hit: RawHit, resolve_entity: EntityResolverFunc, default_icon: str | None
) -> DisplayResult | None:
    """Build the display result for a hit.

    Returns None when the hit's entity no longer resolves, or when no title
    or icon can be found for it.
    """
    entity = safe_resolve(resolve_entity, hit)
    if entity is None:
        # Deleted or access-protected content is never shown
        return None

    title = hit.display_name if hit.display_name is not None else hit.name
    if title is None:
        return None

    icon = hit.icon
    if icon is None:
        icon = entity.icon if entity.icon is not None else default_icon
    if icon is None:
        return None

    return DisplayResult(title=title, icon=icon, url=hit.uri or "")


def format_results(
    hits: Iterable[RawHit],
    resolve_entity: EntityResolverFunc,
    default_icon: str | None,
    sink: SearchResultSink,
) -> int:
    """Append display results for hits to the sink, preserving order.

    Returns:
        Number of results appended
    """
    emitted = 0
    for hit in hits:
        result = format_result(hit, resolve_entity, default_icon)
        if result is None:
            logger.debug(f"Dropping result for item {hit.item_id}")
            continue
        sink.add_result(result)
        emitted += 1
    return emitted
