"""
Custom exceptions for content box detection.

Provides a hierarchy of exceptions for the errors that can occur around
page box detection: configuration, image I/O, input validation and
cooperative cancellation.
"""

from typing import Optional, Any


class ContentBoxError(Exception):
    """Base exception for all content box errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} (Details: {details_str})"
        return self.message


class ConfigurationError(ContentBoxError):
    """Raised when there are configuration-related errors."""
    pass


class ProcessingError(ContentBoxError):
    """Raised when image processing operations fail."""

    def __init__(self, message: str, processor: Optional[str] = None,
                 image_path: Optional[str] = None, **kwargs: Any) -> None:
        details = kwargs
        if processor:
            details["processor"] = processor
        if image_path:
            details["image_path"] = image_path
        super().__init__(message, details)


class ImageLoadError(ProcessingError):
    """Raised when an image cannot be loaded or is invalid."""
    pass


class ImageSaveError(ProcessingError):
    """Raised when an image cannot be saved."""
    pass


class ValidationError(ContentBoxError):
    """Raised when input validation fails."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message, kwargs)


class TaskCancelledError(ContentBoxError):
    """Raised at a checkpoint once the caller has cancelled the task."""

    def __init__(self, message: str = "Task was cancelled", **kwargs: Any) -> None:
        super().__init__(message, kwargs)
