"""
In-Memory Storage Adapter
=========================

Process-local KeyValueStorage; used by tests and the 'memory' backend.
"""

from __future__ import annotations

from credibility_analyzer.ports.storage import KeyValueStorage


class InMemoryStorage(KeyValueStorage):
    """Dictionary-backed key-value slot store."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    async def read(self, key: str) -> str | None:
        return self._data.get(key)

    async def write(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None
