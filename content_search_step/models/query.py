"""Query models."""

from pydantic import BaseModel, ConfigDict, Field

from .base import SearchSurface
from .results import RawHit, SearchResultSink


class SearchRequest(BaseModel):
    """A search request handed to the step by the pipeline."""

    model_config = ConfigDict(frozen=True)

    text_query: str = Field(..., description="The free-text search query")
    root_scope: str | None = Field(
        None, description="Id of the entity whose subtree bounds the search"
    )
    content_language: str | None = Field(
        None, description="Preferred content language of the results"
    )
    limit: int = Field(20, description="Maximum number of results to accept", ge=0)
    surface: SearchSurface = Field(
        SearchSurface.OTHER, description="UI surface that issued the request"
    )

    @property
    def has_language(self) -> bool:
        """Whether a non-empty content language was requested."""
        return bool(self.content_language)


class QueryFilter(BaseModel):
    """Filter expression handed to the query engine.

    A hit matches when its name starts with the text, or its content contains
    the text. With a language set, the content clause also requires the hit
    to be in that language; name matches are language-independent.
    """

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Query text")
    language: str | None = Field(
        None, description="Language the content clause is restricted to"
    )

    def matches(self, hit: RawHit) -> bool:
        """Evaluate the filter against a single hit."""
        if hit.name is not None and hit.name.startswith(self.text):
            return True
        if self.text not in hit.content:
            return False
        return self.language is None or hit.language == self.language


class SearchArgs(BaseModel):
    """Mutable arguments passed along the search pipeline.

    The step reads the request and writes results and pipeline flags.
    """

    request: SearchRequest = Field(..., description="The search request")
    database_root: str | None = Field(
        None, description="Id of the database root, used when no scope is given"
    )
    use_legacy_search_engine: bool = Field(
        False, description="Whether the legacy search engine handles this search"
    )
    is_index_provider_on: bool = Field(
        True, description="Cleared when the index provider is switched off"
    )
    result: SearchResultSink = Field(
        default_factory=SearchResultSink, description="Collected results"
    )
