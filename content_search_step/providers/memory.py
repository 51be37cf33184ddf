"""In-memory implementations of the host capabilities.

These back the command line tool and the test suite. They implement the
protocols from ``models.interfaces`` with plain dictionaries, and can load a
content tree from the JSON layout below::

    {
      "indexes": [{"name": "master", "root": "root", "default_icon": "..."}],
      "items": [
        {"id": "root", "name": "content", "parent": null, "hidden": false,
         "icon": null,
         "versions": [{"language": "en", "version": 1,
                       "display_name": "Content", "content": "...",
                       "icon": null}]}
      ]
    }
"""

from collections.abc import Callable, Iterable, Iterator
from typing import Any

from pydantic import ValidationError

from ..models.entities import ContentEntity
from ..models.query import QueryFilter, SearchRequest
from ..models.results import RawHit
from ..utils.errors import (
    ConfigurationError,
    EntityUnavailableError,
    IndexNotFoundError,
    QueryExecutionError,
)
from ..utils.logging import get_logger

logger = get_logger(__name__)

GenericSearch = Callable[[SearchRequest], Iterable[RawHit] | None]


class InMemoryContentRepository:
    """Content repository holding entities by id."""

    def __init__(self):
        self._entities: dict[str, ContentEntity] = {}
        self._denied: set[str] = set()

    def add(self, entity: ContentEntity) -> ContentEntity:
        """Store an entity, replacing any entity with the same id."""
        self._entities[entity.item_id] = entity
        return entity

    def remove(self, item_id: str) -> None:
        """Delete an entity."""
        self._entities.pop(item_id, None)

    def deny(self, item_id: str) -> None:
        """Make an entity inaccessible to the current user."""
        self._denied.add(item_id)

    def get(self, item_id: str) -> ContentEntity | None:
        """Fetch an entity without access checks."""
        return self._entities.get(item_id)

    def resolve(self, item_id: str) -> ContentEntity | None:
        """Fetch an entity as the current user.

        Raises:
            EntityUnavailableError: If access to the entity is denied
        """
        if item_id in self._denied:
            raise EntityUnavailableError(item_id, reason="access denied")
        return self._entities.get(item_id)

    def path_ids(self, item_id: str) -> frozenset[str]:
        """Ids of an entity and all of its ancestors."""
        entity = self._entities.get(item_id)
        if entity is None:
            return frozenset([item_id])
        return frozenset(
            [entity.item_id, *(ancestor.item_id for ancestor in entity.ancestors())]
        )


class InMemorySearchIndex:
    """Search index over a list of hits.

    ``get_queryable`` yields lazily and records how many hits were pulled in
    ``consumed``. Setting ``failure`` makes iteration raise it after
    ``fail_after`` hits, standing in for a failing query engine.
    """

    def __init__(
        self,
        name: str,
        resolver: InMemoryContentRepository,
        hits: Iterable[RawHit] | None = None,
        generic_search: GenericSearch | None = None,
        icon: str | None = None,
    ):
        self.name = name
        self.resolver = resolver
        self.hits: list[RawHit] = list(hits or [])
        self.generic_search = generic_search
        self.icon = icon
        self.failure: Exception | None = None
        self.fail_after = 0
        self.consumed = 0

    def add_hit(self, hit: RawHit) -> None:
        """Append a hit to the index."""
        self.hits.append(hit)

    def get_queryable(self, query_filter: QueryFilter) -> Iterator[RawHit]:
        """Lazily yield the hits matching a filter."""
        for position, hit in enumerate(self.hits):
            if self.failure is not None and position >= self.fail_after:
                raise QueryExecutionError.from_exception(
                    self.failure, query=query_filter.text
                )
            if query_filter.matches(hit):
                self.consumed += 1
                yield hit

        if self.failure is not None and self.fail_after >= len(self.hits):
            raise QueryExecutionError.from_exception(
                self.failure, query=query_filter.text
            )

    def search(self, request: SearchRequest) -> Iterable[RawHit] | None:
        """Run the generic search, when one is configured."""
        if self.generic_search is None:
            return None
        return self.generic_search(request)

    def default_icon(self) -> str | None:
        return self.icon


class IndexRegistry:
    """Index locator mapping subtree roots to indexes."""

    def __init__(self, repository: InMemoryContentRepository):
        self.repository = repository
        self._indexes: dict[str, InMemorySearchIndex] = {}

    def register(self, root_id: str, index: InMemorySearchIndex) -> None:
        """Make an index responsible for the subtree under ``root_id``."""
        self._indexes[root_id] = index

    def get_index_for_scope(self, root_id: str) -> InMemorySearchIndex:
        """Find the index of the nearest registered ancestor-or-self.

        Raises:
            IndexNotFoundError: If no registered root covers the entity
        """
        if root_id in self._indexes:
            return self._indexes[root_id]

        entity = self.repository.get(root_id)
        if entity is not None:
            for ancestor in entity.ancestors():
                if ancestor.item_id in self._indexes:
                    return self._indexes[ancestor.item_id]

        raise IndexNotFoundError(scope=root_id)


class StaticSwitchTracker:
    """Switch tracker with fixed on/off state."""

    def __init__(self, is_on: bool = True, off_indexes: Iterable[str] | None = None):
        self._is_on = is_on
        self.off_indexes = set(off_indexes or [])

    @property
    def is_on(self) -> bool:
        return self._is_on

    def is_index_on(self, index_name: str) -> bool:
        return index_name not in self.off_indexes


def load_content_tree(
    data: dict[str, Any],
) -> tuple[InMemoryContentRepository, IndexRegistry]:
    """
    Build an in-memory host from a content tree description.

    Args:
        data: Parsed JSON content tree (see module docstring)

    Returns:
        Tuple of (repository, index registry)

    Raises:
        ConfigurationError: If an entry is missing a required key, holds a
            value of the wrong type, or names an unknown parent
    """
    try:
        return _build_host(data)
    except (KeyError, TypeError, AttributeError, ValidationError) as e:
        raise ConfigurationError.from_exception(
            e, message=f"Invalid content tree: {e!r}", config_key="tree"
        ) from e


def _build_host(
    data: dict[str, Any],
) -> tuple[InMemoryContentRepository, IndexRegistry]:
    repository = InMemoryContentRepository()
    items = data.get("items", [])

    for item in items:
        repository.add(
            ContentEntity(
                item_id=item["id"],
                name=item["name"],
                hidden=item.get("hidden", False),
                icon=item.get("icon"),
            )
        )

    # Link parents once every entity exists, so items may come in any order
    for item in items:
        parent_id = item.get("parent")
        if parent_id is None:
            continue
        parent = repository.get(parent_id)
        if parent is None:
            raise ConfigurationError(
                f"Item '{item['id']}' names unknown parent '{parent_id}'",
                config_key="items",
            )
        repository.get(item["id"]).parent = parent

    registry = IndexRegistry(repository)
    for entry in data.get("indexes", []):
        index = InMemorySearchIndex(
            entry["name"], repository, icon=entry.get("default_icon")
        )
        registry.register(entry["root"], index)

        for item in items:
            paths = repository.path_ids(item["id"])
            if entry["root"] not in paths:
                continue
            for version in item.get("versions", []):
                index.add_hit(
                    RawHit(
                        item_id=item["id"],
                        language=version["language"],
                        version=version["version"],
                        uri=(
                            f"content://{entry['name']}/{item['id']}"
                            f"?lang={version['language']}&ver={version['version']}"
                        ),
                        name=item["name"],
                        display_name=version.get("display_name"),
                        content=version.get("content", ""),
                        paths=paths,
                        icon=version.get("icon"),
                    )
                )

        logger.debug(f"Loaded index {entry['name']} with {len(index.hits)} hits")

    return repository, registry
