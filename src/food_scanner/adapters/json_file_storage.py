"""File-backed implementation of local key-value storage."""

import asyncio
import os
import re
import tempfile
from dataclasses import dataclass
from pathlib import Path

from food_scanner.services.storage import KeyValueStorage, StorageError

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


@dataclass
class JsonFileStorage(KeyValueStorage):
    """Stores each key as its own file under a directory."""

    directory: Path

    @classmethod
    def create(cls, directory: str | Path) -> "JsonFileStorage":
        """Create a storage rooted at a directory."""
        return cls(directory=Path(directory))

    async def get_item(self, key: str) -> str | None:
        """Return the stored value, or None when the key is unset."""
        return await asyncio.to_thread(self._read, self._path(key))

    async def set_item(self, key: str, value: str) -> None:
        """Replace a value atomically."""
        await asyncio.to_thread(self._write, self._path(key), value)

    async def remove_item(self, key: str) -> None:
        """Delete a key if present."""
        await asyncio.to_thread(self._remove, self._path(key))

    def _path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    @staticmethod
    def _read(path: Path) -> str | None:
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageError(f"Failed to read {path}") from exc

    @staticmethod
    def _write(path: Path, value: str) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageError(f"Failed to write {path}") from exc

    @staticmethod
    def _remove(path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise StorageError(f"Failed to remove {path}") from exc
