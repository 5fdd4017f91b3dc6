"""
Error types for Pack Sync.

Every failure the core can hit is raised as a PackError subclass. Nothing is
retried internally; the CLI maps these to a message and exit code.
"""

from pathlib import Path
from typing import Union


class PackError(Exception):
    """Base class for all Pack Sync errors."""


class NoSuitableDirectory(PackError):
    """No local data directory could be resolved."""

    def __init__(self):
        super().__init__("Could not find a suitable local data directory")


class _PathError(PackError):
    """An OS error tied to a filesystem path."""

    action = "access"

    def __init__(self, path: Union[str, Path], error: OSError):
        self.path = Path(path)
        self.error = error
        super().__init__(f"Failed to {self.action} {self.path}: {error}")


class DirectoryCreateFailed(_PathError):
    action = "create directory"


class DirectoryDeleteFailed(_PathError):
    action = "delete directory"


class DirectoryReadFailed(_PathError):
    action = "read directory"


class FileReadFailed(_PathError):
    action = "read file"


class FileWriteFailed(_PathError):
    action = "write file"


class RequestFailed(PackError):
    """Network-level failure (connection refused, TLS, timeout)."""

    def __init__(self, url: str, error: Exception):
        self.url = url
        self.error = error
        super().__init__(f"Request to {url} failed: {error}")


class UnexpectedStatus(PackError):
    """HTTP status other than the ones treated as success."""

    def __init__(self, url: str, status: int):
        self.url = url
        self.status = status
        super().__init__(f"Unexpected HTTP {status} from {url}")


class InvalidResponseBody(PackError):
    """Response JSON does not match the expected shape."""

    def __init__(self, error: Exception):
        self.error = error
        super().__init__(f"Invalid response body: {error}")


class CorruptCache(PackError):
    """Local packages.json exists but cannot be decoded."""

    def __init__(self, error: Exception):
        self.error = error
        super().__init__(f"Package cache is corrupt: {error}")


class CorruptArchive(PackError):
    """Nested tar/gzip archive could not be decoded."""

    def __init__(self, reason: str = ""):
        self.reason = reason
        message = "Package archive is corrupt"
        super().__init__(f"{message}: {reason}" if reason else message)
