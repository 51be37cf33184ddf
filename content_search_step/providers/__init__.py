"""Host capability implementations."""

from .memory import (
    IndexRegistry,
    InMemoryContentRepository,
    InMemorySearchIndex,
    StaticSwitchTracker,
    load_content_tree,
)

__all__ = [
    "IndexRegistry",
    "InMemoryContentRepository",
    "InMemorySearchIndex",
    "StaticSwitchTracker",
    "load_content_tree",
]
