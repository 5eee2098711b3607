"""Exception hierarchy for the sound bank store."""
from __future__ import annotations


class BankError(Exception):
    """Base exception for sound bank failures"""


class ConfigDirUnavailable(BankError):
    """Raised when the platform cannot supply a user configuration directory"""


class BankIOError(BankError):
    """Raised when an underlying filesystem call fails"""

    def __init__(self, message: str, *, relative_path: str | None = None) -> None:
        super().__init__(message)
        self.relative_path = relative_path


class NotFound(BankIOError):
    """Raised when reading a resource that does not exist"""


class PathEscapeError(BankError, ValueError):
    """Raised when a relative path would leave the bank root"""


__all__ = [
    "BankError",
    "ConfigDirUnavailable",
    "BankIOError",
    "NotFound",
    "PathEscapeError",
]
