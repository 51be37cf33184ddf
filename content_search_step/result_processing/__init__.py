"""Result processing package for search hits.

This package contains modules for processing search hits:
- deduplication: Keep one hit per item, resolving versions and languages
- visibility: Skip hits for hidden content
- scope: Restrict hits to the requested subtree
- formatting: Turn accepted hits into display results
"""

from .deduplication import ResultDeduplicator, accumulate_hits, resolve_duplicate
from .formatting import format_results
from .scope import restrict_to_scope
from .visibility import is_hidden

__all__ = [
    "ResultDeduplicator",
    "accumulate_hits",
    "format_results",
    "is_hidden",
    "resolve_duplicate",
    "restrict_to_scope",
]
