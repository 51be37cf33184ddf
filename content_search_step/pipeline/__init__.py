"""Search pipeline step and hit source selection."""

from .query_builder import build_query_filter, select_hit_source
from .search_step import SearchContentIndexStep

__all__ = ["SearchContentIndexStep", "build_query_filter", "select_hit_source"]
