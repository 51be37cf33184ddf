"""Content search pipeline step.

Answers UI searches from a content search index with one display result per
item, resolving duplicate hits by language and version.
"""

from .models import DisplayResult, RawHit, SearchArgs, SearchRequest, SearchSurface
from .pipeline import SearchContentIndexStep
from .result_processing import ResultDeduplicator

__version__ = "0.1.0"

__all__ = [
    "DisplayResult",
    "RawHit",
    "ResultDeduplicator",
    "SearchArgs",
    "SearchContentIndexStep",
    "SearchRequest",
    "SearchSurface",
]
