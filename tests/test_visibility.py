"""Test hidden-item detection."""

from content_search_step.models.entities import ContentEntity
from content_search_step.result_processing.visibility import (
    is_hidden,
    is_hit_hidden,
    safe_resolve,
)


def test_visible_chain(repository):
    """Test that an entity with no hidden ancestor is visible."""
    assert is_hidden(repository.get("about")) is False


def test_hidden_self(repository):
    """Test that a hidden entity is hidden."""
    assert is_hidden(repository.get("archive")) is True


def test_hidden_ancestor(repository):
    """Test that a descendant of a hidden entity is hidden."""
    assert is_hidden(repository.get("old-news")) is True


def test_deep_hierarchy_does_not_recurse():
    """Test that very deep chains are walked without hitting recursion limits."""
    node = ContentEntity(item_id="n0", name="n0", hidden=True)
    for depth in range(1, 5000):
        node = ContentEntity(item_id=f"n{depth}", name=f"n{depth}", parent=node)

    assert is_hidden(node) is True


def test_cyclic_chain_terminates():
    """Test that a parent cycle ends the walk."""
    a = ContentEntity(item_id="a", name="a")
    b = ContentEntity(item_id="b", name="b", parent=a)
    a.parent = b

    assert is_hidden(a) is False


def test_is_hit_hidden_treats_missing_entity_as_visible(make_hit, resolve):
    """Test that hits for deleted items pass the hidden filter."""
    assert is_hit_hidden(resolve, make_hit("deleted")) is False


def test_safe_resolve_maps_denied_to_none(make_hit, resolve, repository):
    """Test that access-denied entities resolve to None."""
    repository.deny("about")

    assert safe_resolve(resolve, make_hit("about")) is None


def test_safe_resolve_maps_resolver_failure_to_none(make_hit):
    """Test that an unexpected resolver error resolves to None."""

    def failing(hit):
        raise RuntimeError("repository connection lost")

    assert safe_resolve(failing, make_hit("about")) is None
    assert is_hit_hidden(failing, make_hit("about")) is False
