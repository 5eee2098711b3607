"""Sandboxed text file store rooted in the per-user config directory."""
from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Callable, List, Optional

from .errors import BankIOError, ConfigDirUnavailable, NotFound
from .logging import get_logger
from .paths import app_config_dir, bank_root_from
from .utils.validation import join_within_root

if TYPE_CHECKING:
    from .config import AppConfig

RootProvider = Callable[[], Path | str | None]

logger = get_logger("store")


class BankStore:
    """Perform path-scoped text file operations beneath the bank root.

    The store holds no state besides the root provider: the root is looked up
    again for every call and each operation goes straight to the filesystem.
    """

    def __init__(self, root_provider: Optional[RootProvider] = None) -> None:
        self._root_provider: RootProvider = root_provider or app_config_dir

    @classmethod
    def from_config(cls, config: "AppConfig") -> "BankStore":
        bank = config.bank
        if bank.config_dir is not None:
            override = bank.config_dir
            return cls(lambda: override)
        return cls(lambda: app_config_dir(bank.app_id))

    def resolve_root(self) -> Path:
        """Return the bank root without touching the filesystem."""
        try:
            base = self._root_provider()
        except ConfigDirUnavailable:
            raise
        except (OSError, RuntimeError, KeyError) as exc:
            raise ConfigDirUnavailable(f"Unable to determine user config directory: {exc}") from exc
        if base is None or str(base) == "":
            raise ConfigDirUnavailable("Platform did not supply a user config directory")
        return bank_root_from(Path(base).expanduser().absolute())

    def ensure_bank_dir(self) -> str:
        """Create the bank root if needed and return it as a string."""
        return str(self._ensure_root())

    def write_text(self, relative_path: str, contents: str) -> None:
        path = self._resolve(relative_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8", newline="") as handle:
                handle.write(contents)
        except (OSError, UnicodeEncodeError) as exc:
            raise BankIOError(f"Failed to write {relative_path}: {exc}", relative_path=relative_path) from exc
        logger.debug("bank.write", rel_path=relative_path, chars=len(contents))

    def read_text(self, relative_path: str) -> str:
        path = self._resolve(relative_path)
        try:
            with path.open("r", encoding="utf-8", newline="") as handle:
                data = handle.read()
        except FileNotFoundError as exc:
            raise NotFound(f"No such file in bank: {relative_path}", relative_path=relative_path) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise BankIOError(f"Failed to read {relative_path}: {exc}", relative_path=relative_path) from exc
        logger.debug("bank.read", rel_path=relative_path, chars=len(data))
        return data

    def read_dir(self, relative_dir: str = "") -> List[str]:
        """List regular files directly inside ``relative_dir``.

        A directory that does not exist yet is created and reported as empty.
        Names come back in filesystem enumeration order.
        """
        directory = self._resolve(relative_dir)
        try:
            if not directory.exists():
                directory.mkdir(parents=True, exist_ok=True)
                logger.debug("bank.read_dir", rel_dir=relative_dir, created=True, count=0)
                return []
            names: List[str] = []
            with os.scandir(directory) as entries:
                for entry in entries:
                    if entry.is_file(follow_symlinks=False):
                        names.append(entry.name)
        except OSError as exc:
            raise BankIOError(f"Failed to list {relative_dir}: {exc}", relative_path=relative_dir) from exc
        logger.debug("bank.read_dir", rel_dir=relative_dir, created=False, count=len(names))
        return names

    def remove(self, relative_path: str) -> None:
        path = self._resolve(relative_path)
        if not _present(path):
            return
        try:
            path.unlink()
        except OSError as exc:
            raise BankIOError(f"Failed to remove {relative_path}: {exc}", relative_path=relative_path) from exc
        logger.debug("bank.remove", rel_path=relative_path)

    def exists(self, relative_path: str) -> bool:
        """Report whether anything is present; unreadable locations count as absent."""
        return _present(self._resolve(relative_path))

    def _ensure_root(self) -> Path:
        root = self.resolve_root()
        try:
            root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise BankIOError(f"Failed to create bank directory {root}: {exc}") from exc
        return root

    def _resolve(self, relative_path: str) -> Path:
        return join_within_root(self._ensure_root(), relative_path)


def _present(path: Path) -> bool:
    # Name-too-long and permission errors mean nothing usable is there.
    try:
        return path.exists()
    except OSError:
        return False


__all__ = ["BankStore", "RootProvider"]
