"""Base component implementation classes.

This module provides abstract base classes that implement the lifecycle and
health interfaces defined in interfaces.py. The deduplicator and the pipeline
step derive from them and supply their own ``check_health``.
"""

import time
from abc import ABC
from typing import Generic, TypeVar

from pydantic import BaseModel

from .interfaces import HealthCheck, ServiceLifecycle

ConfigT = TypeVar("ConfigT", bound=BaseModel)


class Component(ABC, ServiceLifecycle, HealthCheck):
    """Base class for all components with lifecycle and health management."""

    def __init__(self, name: str):
        """Initialize component with a name."""
        self.name = name
        self.initialized = False
        self.healthy = True
        self.health_message = "Not initialized"
        self.last_health_check = 0.0

    async def initialize(self) -> None:
        """Initialize the component, setting up required resources."""
        self.initialized = True
        self.health_message = "Initialized"
        self.last_health_check = time.time()

    async def cleanup(self) -> None:
        """Clean up resources used by the component."""
        self.initialized = False
        self.health_message = "Cleaned up"

    async def reset(self) -> None:
        """Reset the component to its initial state."""
        await self.cleanup()
        await self.initialize()

    def is_healthy(self) -> bool:
        """Check if the component is in a healthy state."""
        return self.healthy and self.initialized


class ConfigurableComponentBase(Component, Generic[ConfigT]):
    """Base class for components holding a settings model."""

    def __init__(self, name: str, config: ConfigT):
        super().__init__(name)
        self.config = config
