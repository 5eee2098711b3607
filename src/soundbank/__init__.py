"""Sandboxed per-user text store for the auditory training sound bank."""
from .errors import BankError, BankIOError, ConfigDirUnavailable, NotFound, PathEscapeError
from .store import BankStore
from .version import __version__

__all__ = [
    "BankError",
    "BankIOError",
    "BankStore",
    "ConfigDirUnavailable",
    "NotFound",
    "PathEscapeError",
    "__version__",
]
