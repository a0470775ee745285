"""
KeyValueStorage Port
====================

Abstract interface for the durable key-value slot holding serialized
analysis history.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class StorageError(Exception):
    """Exception raised when the underlying storage cannot be read or written."""

    pass


class KeyValueStorage(ABC):
    """
    Port for a string-valued key-value store.

    Responsibilities:
    - Read a named slot (None when absent)
    - Overwrite a named slot
    - Remove a named slot
    """

    @abstractmethod
    async def read(self, key: str) -> str | None:
        """
        Read the value stored under key.

        Returns:
            Stored value, or None if the slot is empty.

        Raises:
            StorageError: If the backend is unreachable or the value unreadable.
        """
        ...

    @abstractmethod
    async def write(self, key: str, value: str) -> None:
        """
        Replace the value stored under key.

        Raises:
            StorageError: If the write fails.
        """
        ...

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Remove the slot.

        Returns:
            True if a value was removed.
        """
        ...

    async def connect(self) -> None:
        return None

    async def disconnect(self) -> None:
        return None

    async def health_check(self) -> bool:
        """Check if the storage is operational."""
        return True
