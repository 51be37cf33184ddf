"""Content entity models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ContentEntity(BaseModel):
    """The backing entity of a hit, as resolved from the content repository."""

    item_id: str = Field(..., description="Entity identity")
    name: str = Field(..., description="Entity name")
    hidden: bool = Field(False, description="Whether the entity is flagged hidden")
    icon: str | None = Field(None, description="Icon from the entity's appearance")
    parent: ContentEntity | None = Field(None, description="Owning entity, if any")

    def ancestors(self):
        """Yield the parent chain, nearest first."""
        current = self.parent
        while current is not None:
            yield current
            current = current.parent


ContentEntity.model_rebuild()
