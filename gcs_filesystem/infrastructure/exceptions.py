"""
Custom exceptions for the Infrastructure layer.
"""

from typing import Optional


class InfrastructureError(Exception):
    """Base class for exceptions in the infrastructure layer."""
    pass


class FilesystemError(InfrastructureError):
    """Base class for filesystem adapter failures."""

    def __init__(self, message: str, path: Optional[str] = None, reason: str = ""):
        self.path = path
        self.reason = reason
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ObjectNotFoundError(FilesystemError):
    """Raised when the object behind a path does not exist."""

    def __init__(self, path: str, reason: str = ""):
        super().__init__(f"Object not found at location: {path}", path=path, reason=reason)


class UnableToCopyFile(FilesystemError):
    """Raised when a copy did not produce the destination object."""

    def __init__(self, source: str, destination: str, reason: str = ""):
        self.source = source
        self.destination = destination
        super().__init__(
            f"Unable to copy file from {source} to {destination}",
            path=source,
            reason=reason
        )


class UnsupportedOperationError(FilesystemError):
    """Raised for operations the configured adapter does not provide."""

    def __init__(self, operation: str, message: Optional[str] = None):
        self.operation = operation
        super().__init__(message or f"Operation not supported by this adapter: {operation}")


class InvalidVisibilityProvided(FilesystemError, ValueError):
    """Raised when a visibility other than public/private is requested."""

    def __init__(self, visibility):
        self.visibility = visibility
        super().__init__(
            f"Invalid visibility provided. Expected either public or private, received {visibility!r}"
        )
