"""
JSON File Storage Adapter
=========================

KeyValueStorage persisted as one JSON object on disk. Writes go to a
temporary file that atomically replaces the original, so a crash never
leaves a half-written slot behind.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path

from credibility_analyzer.ports.storage import KeyValueStorage, StorageError

logger = logging.getLogger(__name__)


class JSONFileStorage(KeyValueStorage):
    """
    File-backed key-value slot store.

    The file holds ``{"<key>": "<value>", ...}``. Blocking file I/O runs in
    a worker thread.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Cannot read {self._path}: {e}") from e
        except json.JSONDecodeError as e:
            logger.warning(f"Storage file {self._path} is corrupted, starting fresh: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Storage file {self._path} has unexpected layout, starting fresh")
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _dump(self, data: dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(data, fh, ensure_ascii=False)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Cannot write {self._path}: {e}") from e

    def _write_sync(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._dump(data)

    def _delete_sync(self, key: str) -> bool:
        data = self._load()
        if key not in data:
            return False
        del data[key]
        self._dump(data)
        return True

    async def read(self, key: str) -> str | None:
        data = await asyncio.to_thread(self._load)
        return data.get(key)

    async def write(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._write_sync, key, value)

    async def delete(self, key: str) -> bool:
        return await asyncio.to_thread(self._delete_sync, key)

    async def health_check(self) -> bool:
        return os.access(self._path.parent, os.W_OK) if self._path.parent.exists() else True
