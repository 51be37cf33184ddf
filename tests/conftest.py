"""Test configuration for the content search step."""

import pytest

from content_search_step.config import get_settings
from content_search_step.models.entities import ContentEntity
from content_search_step.models.results import RawHit
from content_search_step.providers.memory import (
    IndexRegistry,
    InMemoryContentRepository,
    InMemorySearchIndex,
)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make every test read settings fresh from the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def repository():
    """Content tree: root > home > {about, archive (hidden) > old-news}."""
    repo = InMemoryContentRepository()
    root = repo.add(ContentEntity(item_id="root", name="content"))
    home = repo.add(
        ContentEntity(item_id="home", name="home", icon="home.png", parent=root)
    )
    repo.add(ContentEntity(item_id="about", name="about", parent=home))
    archive = repo.add(
        ContentEntity(item_id="archive", name="archive", hidden=True, parent=home)
    )
    repo.add(ContentEntity(item_id="old-news", name="old news", parent=archive))
    for item_id in ("1", "2", "3", "4", "5"):
        repo.add(ContentEntity(item_id=item_id, name=f"item {item_id}", parent=home))
    return repo


@pytest.fixture
def make_hit(repository):
    """Factory for hits whose paths follow the repository tree."""

    def _make_hit(item_id, language="en", version=1, **kwargs):
        kwargs.setdefault("name", f"item {item_id}")
        kwargs.setdefault("uri", f"content://master/{item_id}?lang={language}&ver={version}")
        kwargs.setdefault("paths", repository.path_ids(item_id))
        return RawHit(item_id=item_id, language=language, version=version, **kwargs)

    return _make_hit


@pytest.fixture
def resolve(repository):
    """Entity resolver bound to the test repository."""
    return lambda hit: repository.resolve(hit.item_id)


@pytest.fixture
def index(repository):
    """Empty index named ``master`` over the test repository."""
    return InMemorySearchIndex("master", repository, icon="index-default.png")


@pytest.fixture
def registry(repository, index):
    """Registry with the ``master`` index registered at the root."""
    reg = IndexRegistry(repository)
    reg.register("root", index)
    return reg
