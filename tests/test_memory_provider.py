"""Test the in-memory host implementations."""

import pytest

from content_search_step.models.interfaces import (
    EntityResolver,
    IndexLocator,
    SearchIndex,
    SearchIndexSwitchTracker,
)
from content_search_step.models.query import QueryFilter
from content_search_step.providers.memory import StaticSwitchTracker, load_content_tree
from content_search_step.utils.errors import (
    ConfigurationError,
    EntityUnavailableError,
    IndexNotFoundError,
    QueryExecutionError,
)

TREE = {
    "indexes": [{"name": "master", "root": "root", "default_icon": "doc.png"}],
    "items": [
        {"id": "home", "name": "home", "parent": "root", "icon": "home.png",
         "versions": [
             {"language": "en", "version": 1, "display_name": "Home"},
             {"language": "de", "version": 1, "display_name": "Startseite"},
         ]},
        {"id": "root", "name": "content", "parent": None, "versions": []},
    ],
}


def test_implementations_satisfy_protocols(repository, index, registry):
    """Test structural conformance to the host protocols."""
    assert isinstance(repository, EntityResolver)
    assert isinstance(index, SearchIndex)
    assert isinstance(registry, IndexLocator)
    assert isinstance(StaticSwitchTracker(), SearchIndexSwitchTracker)


def test_resolve_denied_raises(repository):
    """Test that denied entities raise EntityUnavailableError."""
    repository.deny("home")

    with pytest.raises(EntityUnavailableError):
        repository.resolve("home")


def test_path_ids(repository):
    """Test that path ids include the item and its ancestors."""
    assert repository.path_ids("old-news") == {"old-news", "archive", "home", "root"}


def test_registry_finds_index_through_ancestors(registry, index):
    """Test that a descendant scope resolves to the ancestor's index."""
    assert registry.get_index_for_scope("old-news") is index


def test_registry_raises_for_unknown_scope(registry):
    """Test that unknown scopes raise IndexNotFoundError."""
    with pytest.raises(IndexNotFoundError):
        registry.get_index_for_scope("nowhere")


def test_queryable_is_lazy(index, make_hit):
    """Test that hits are produced on demand."""
    for item_id in ("1", "2", "3"):
        index.add_hit(make_hit(item_id))

    hits = index.get_queryable(QueryFilter(text="item"))
    next(hits)

    assert index.consumed == 1


def test_queryable_failure(index, make_hit):
    """Test that a configured failure surfaces during iteration."""
    index.add_hit(make_hit("1"))
    index.failure = RuntimeError("engine down")

    with pytest.raises(QueryExecutionError):
        list(index.get_queryable(QueryFilter(text="item")))


def test_load_content_tree():
    """Test building a host from a tree description, in any item order."""
    repository, registry = load_content_tree(TREE)

    index = registry.get_index_for_scope("home")
    assert index.name == "master"
    assert index.default_icon() == "doc.png"
    assert repository.get("home").parent.item_id == "root"
    assert [(h.item_id, h.language, h.display_name) for h in index.hits] == [
        ("home", "en", "Home"),
        ("home", "de", "Startseite"),
    ]
    assert index.hits[0].uri == "content://master/home?lang=en&ver=1"
    assert index.hits[0].paths == {"home", "root"}


def test_load_content_tree_unknown_parent():
    """Test that a dangling parent reference is rejected."""
    with pytest.raises(ConfigurationError):
        load_content_tree({"items": [{"id": "a", "name": "a", "parent": "ghost"}]})


@pytest.mark.parametrize(
    "tree",
    [
        {"items": [{"name": "no id"}]},
        {"indexes": [{"name": "master"}], "items": []},
        {"items": [{"id": "a", "name": "a", "hidden": "maybe"}]},
        {
            "indexes": [{"name": "master", "root": "a"}],
            "items": [
                {"id": "a", "name": "a",
                 "versions": [{"language": "en", "version": "latest"}]}
            ],
        },
        {"items": ["a"]},
    ],
)
def test_load_content_tree_malformed(tree):
    """Test that missing keys and mistyped values surface as configuration errors."""
    with pytest.raises(ConfigurationError) as exc_info:
        load_content_tree(tree)

    assert exc_info.value.original_error is not None
    assert exc_info.value.details["config_key"] == "tree"
