"""
Analysis History
================

Bounded, newest-first history of analysis results persisted as a JSON
array in a single key-value slot.

Corrupted or missing state is never an error: it reads as an empty
history and is overwritten by the next append.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import TYPE_CHECKING

from pydantic import TypeAdapter, ValidationError

from credibility_analyzer.domain.results import HistoryEntry
from credibility_analyzer.ports.storage import StorageError

if TYPE_CHECKING:
    from credibility_analyzer.ports.storage import KeyValueStorage

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_KEY = "misinformation-analyzer-history"
DEFAULT_CAPACITY = 10

_entries_adapter = TypeAdapter(list[HistoryEntry])


class AnalysisHistory:
    """
    History store over an injected KeyValueStorage.

    Appends are serialized with a lock so that two concurrent
    read-modify-write cycles cannot drop an entry.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: str = DEFAULT_HISTORY_KEY,
        capacity: int = DEFAULT_CAPACITY,
    ) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._storage = storage
        self._key = key
        self._capacity = capacity
        self._lock = asyncio.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    async def list(self) -> list[HistoryEntry]:
        """Return stored entries, newest first (empty on missing/corrupt state)."""
        try:
            raw = await self._storage.read(self._key)
        except StorageError as e:
            logger.warning(f"History storage unreadable, treating as empty: {e}")
            return []

        if raw is None:
            return []

        try:
            return _entries_adapter.validate_python(json.loads(raw))
        except (ValueError, RecursionError, ValidationError) as e:
            logger.warning(f"Discarding corrupted history in slot '{self._key}': {e}")
            return []

    async def append(self, entry: HistoryEntry) -> None:
        """
        Prepend an entry and evict the oldest beyond capacity.

        Write failures are logged; the caller's analysis result is
        unaffected by a history that could not be saved.
        """
        async with self._lock:
            entries = [entry, *await self.list()][: self._capacity]
            payload = _entries_adapter.dump_json(entries).decode("utf-8")
            try:
                await self._storage.write(self._key, payload)
            except StorageError as e:
                logger.error(f"Failed to save analysis history: {e}")
                return

        logger.debug("History now holds %d entries", len(entries))

    async def clear(self) -> None:
        """Reset the history slot."""
        async with self._lock:
            try:
                await self._storage.delete(self._key)
            except StorageError as e:
                logger.error(f"Failed to clear analysis history: {e}")
