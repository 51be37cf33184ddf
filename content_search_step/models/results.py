"""Result models."""

from pydantic import BaseModel, Field


class RawHit(BaseModel):
    """A single match returned by the query engine, before enrichment."""

    item_id: str = Field(..., description="Identity of the matched item")
    language: str = Field(..., description="Language of the matched version")
    version: int = Field(..., description="Version number of the matched item")
    uri: str | None = Field(None, description="Opaque locator of the matched version")
    name: str | None = Field(None, description="Item name")
    display_name: str | None = Field(None, description="Localized display name")
    content: str = Field("", description="Indexed text content")
    paths: frozenset[str] = Field(
        default_factory=frozenset,
        description="Ids of the item and all of its ancestors",
    )
    icon: str | None = Field(None, description="Icon stored in the index for the hit")


class DisplayResult(BaseModel):
    """A display-ready search result."""

    title: str = Field(..., description="Result title")
    icon: str = Field(..., description="Icon identifier")
    url: str = Field("", description="Locator of the result, empty when unknown")


class SearchResultSink(BaseModel):
    """Caller-owned collection the step appends results to."""

    results: list[DisplayResult] = Field(
        default_factory=list, description="Results in emission order"
    )

    def add_result(self, result: DisplayResult) -> None:
        """Append a result."""
        self.results.append(result)

    def __len__(self) -> int:
        return len(self.results)
