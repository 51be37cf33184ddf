"""Base model definitions."""

from enum import Enum


class HealthStatus(str, Enum):
    """Health status of a component."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


class SearchSurface(str, Enum):
    """UI surface that issued a search.

    The surface changes how duplicate hits for one item are reconciled and
    whether the root scope restricts the query.
    """

    CONTENT_EDITOR = "content_editor"
    CLASSIC = "classic"
    OTHER = "other"
