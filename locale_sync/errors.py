"""Exception types raised by locale_sync. All derive from SyncError."""

from typing import Optional


class SyncError(Exception):
    """Base class; main() turns any of these into exit code 1."""


class ConfigError(SyncError):
    pass


class MissingSourceError(SyncError):
    def __init__(self, path) -> None:
        super().__init__(f"Source JSON not found: {path}")
        self.path = path


class DocumentError(SyncError):
    """A JSON document on disk could not be parsed."""


class MalformedPathError(SyncError):
    def __init__(self, path, reason: str) -> None:
        super().__init__(f"Malformed path {path!r}: {reason}")
        self.path = path
        self.reason = reason


class PathConflictError(SyncError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Path conflict at {path!r}: {reason}")
        self.path = path
        self.reason = reason


class TranslationError(SyncError):
    """
    The translation backend did not return a usable answer.
    `status` is the HTTP status code when there was one.
    """

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status
