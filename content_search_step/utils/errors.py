"""Error handling utilities.

This module provides the exception hierarchy for the content search step. It
defines a base ContentSearchError class and specialized subclasses for the
failure modes the step distinguishes. None of these errors escape the step
itself; they are raised by host capabilities and caught at the step boundary.
"""

from typing import Any, TypeVar

# Type variable for self-referential return types
T = TypeVar("T", bound="ContentSearchError")


class ContentSearchError(Exception):
    """Base class for all content search exceptions in the application.

    All custom exceptions should inherit from this class to ensure consistent
    error handling throughout the application.
    """

    def __init__(
        self,
        message: str,
        original_error: Exception | None = None,
        details: dict[str, Any] | None = None,
    ):
        """Initialize the error with context information.

        Args:
            message: Human-readable error message
            original_error: The original exception that caused this error, if any
            details: Additional structured details about the error
        """
        self.message = message
        self.original_error = original_error
        self.details = details or {}
        super().__init__(message)

    @classmethod
    def from_exception(
        cls: type[T], exc: Exception, message: str | None = None, **kwargs
    ) -> T:
        """Create an error instance from another exception.

        Args:
            exc: The exception to wrap
            message: Custom message to use (defaults to str(exc))
            **kwargs: Additional arguments to pass to the constructor

        Returns:
            A new instance of the error class
        """
        return cls(message=message or str(exc), original_error=exc, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Convert the error to a dictionary representation.

        Returns:
            A dictionary containing error details suitable for serialization
        """
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
        }

        if self.details:
            result["details"] = self.details

        return result


# Index and query errors


class IndexNotFoundError(ContentSearchError):
    """Error raised when no search index covers the requested scope."""

    def __init__(
        self,
        scope: str | None = None,
        message: str | None = None,
        **kwargs,
    ):
        """Initialize an index not found error.

        Args:
            scope: Id of the root entity whose index was looked up
            message: Error message (defaults to a standard message)
            **kwargs: Additional arguments passed to ContentSearchError
        """
        details = kwargs.pop("details", {})

        if scope:
            details["scope"] = scope

        if message is None:
            message = "No index found"
            if scope:
                message = f"No index found for {scope}"

        self.scope = scope
        super().__init__(message, details=details, **kwargs)


class QueryExecutionError(ContentSearchError):
    """Error raised when the query engine fails while producing hits."""

    def __init__(
        self,
        message: str | None = None,
        query: str | None = None,
        **kwargs,
    ):
        """Initialize a query execution error.

        Args:
            message: Error message (defaults to a standard message)
            query: The query text that failed
            **kwargs: Additional arguments passed to ContentSearchError
        """
        details = kwargs.pop("details", {})

        if query:
            details["query"] = query

        if message is None:
            message = "Invalid search query"
            if query:
                message = f"Invalid search query: {query}"

        self.query = query
        super().__init__(message, details=details, **kwargs)


# Entity errors


class EntityUnavailableError(ContentSearchError):
    """Error raised when a backing entity is deleted or access is denied."""

    def __init__(
        self,
        item_id: str,
        message: str | None = None,
        reason: str | None = None,
        **kwargs,
    ):
        """Initialize an entity unavailable error.

        Args:
            item_id: Id of the entity that could not be resolved
            message: Error message (defaults to a standard message)
            reason: Short reason such as "deleted" or "access denied"
            **kwargs: Additional arguments passed to ContentSearchError
        """
        details = kwargs.pop("details", {})
        details["item_id"] = item_id

        if reason:
            details["reason"] = reason

        message = message or f"Entity '{item_id}' is unavailable"
        self.item_id = item_id
        super().__init__(message, details=details, **kwargs)


# Configuration and argument errors


class ConfigurationError(ContentSearchError):
    """Error raised when there's an issue with the application configuration."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        **kwargs,
    ):
        """Initialize a configuration error.

        Args:
            message: Error message
            config_key: The configuration key that caused the error
            **kwargs: Additional arguments passed to ContentSearchError
        """
        details = kwargs.pop("details", {})

        if config_key:
            details["config_key"] = config_key

        super().__init__(message, details=details, **kwargs)


class InvalidSearchArgsError(ContentSearchError):
    """Error raised when the pipeline hands the step unusable arguments."""

    def __init__(self, message: str | None = None, field: str | None = None, **kwargs):
        """Initialize an invalid arguments error.

        Args:
            message: Error message (defaults to a standard message)
            field: Name of the offending argument
            **kwargs: Additional arguments passed to ContentSearchError
        """
        details = kwargs.pop("details", {})

        if field:
            details["field"] = field

        if message is None:
            message = "Invalid search arguments"
            if field:
                message = f"Invalid search arguments: '{field}' is required"

        super().__init__(message, details=details, **kwargs)
