"""Validation helpers for caller-supplied bank paths."""
from __future__ import annotations

from pathlib import Path, PurePath

from ..errors import BankIOError, PathEscapeError

_INVALID_CHARS = ("\x00",)


def _normalise_path(path: Path | str) -> Path:
    return Path(path).resolve(strict=False)


def _is_relative_to(path: Path, root: Path) -> bool:
    try:
        path.relative_to(root)
    except ValueError:
        return False
    return True


def join_within_root(root: Path, relative_path: str) -> Path:
    """Join ``relative_path`` onto ``root`` and verify it stays beneath it.

    Absolute paths and drive-anchored paths are rejected outright. Otherwise the
    joined path is resolved (following symlinks that already exist) and must
    remain inside the resolved root, which rules out ``..`` escapes and links
    pointing elsewhere. The empty string and ``"."`` name the root itself.

    Raises
    ------
    BankIOError
        If the path contains characters no filesystem accepts, or cannot be
        resolved (symlink loops and the like).
    PathEscapeError
        If the path is absolute or resolves outside ``root``.
    """

    if any(char in relative_path for char in _INVALID_CHARS):
        raise BankIOError(
            f"Invalid character in path: {relative_path!r}", relative_path=relative_path
        )
    candidate = PurePath(relative_path)
    if candidate.is_absolute() or candidate.anchor:
        raise PathEscapeError(f"Path must be relative to the bank root: {relative_path}")

    joined = root / candidate
    try:
        resolved = _normalise_path(joined)
        resolved_root = _normalise_path(root)
    except (OSError, RuntimeError, ValueError) as exc:
        raise BankIOError(f"Cannot resolve {relative_path!r}: {exc}", relative_path=relative_path) from exc
    if not _is_relative_to(resolved, resolved_root):
        raise PathEscapeError(f"Path escapes the bank root: {relative_path}")
    return joined


__all__ = ["join_within_root"]
