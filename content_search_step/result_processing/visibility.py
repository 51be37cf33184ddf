"""Hidden-item detection for search hits."""

from collections.abc import Callable

from ..models.entities import ContentEntity
from ..models.results import RawHit
from ..utils.errors import EntityUnavailableError
from ..utils.logging import get_logger

logger = get_logger(__name__)

EntityResolverFunc = Callable[[RawHit], ContentEntity | None]


def is_hidden(entity: ContentEntity) -> bool:
    """Check whether an entity or any of its ancestors is flagged hidden.

    Walks the parent chain iteratively; a chain that loops back on itself is
    treated as ending at the repeated entity.
    """
    seen: set[str] = set()
    current: ContentEntity | None = entity
    while current is not None and current.item_id not in seen:
        if current.hidden:
            return True
        seen.add(current.item_id)
        current = current.parent
    return False


def safe_resolve(
    resolve_entity: EntityResolverFunc, hit: RawHit
) -> ContentEntity | None:
    """Resolve the entity behind a hit, mapping any resolver failure to None."""
    try:
        return resolve_entity(hit)
    except EntityUnavailableError as e:
        logger.debug(f"Entity for hit {hit.item_id} unavailable: {e.message}")
        return None
    except Exception as e:
        logger.warning(f"Could not resolve entity for hit {hit.item_id}: {e}")
        return None


def is_hit_hidden(resolve_entity: EntityResolverFunc, hit: RawHit) -> bool:
    """Check whether a hit points at hidden content.

    A hit whose entity cannot be resolved is not considered hidden.
    """
    entity = safe_resolve(resolve_entity, hit)
    if entity is None:
        return False
    return is_hidden(entity)
