"""
app/db/json_store.py

Purpose: Document store for the user collection

- Load-all / save-all over a single JSON array
- JSON file backend (pretty-printed, atomic replace) and in-memory backend
- Store lifecycle (init on startup, close on shutdown) and health checks
"""

import asyncio
import copy
import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

from app.core.config import settings
from app.core.exceptions import StorageError
from app.core.logging import get_logger

logger = get_logger(__name__)


class DocumentStore(ABC):
    """
    Persistence contract for the user collection.
    The whole collection is read and written at once.
    """

    @abstractmethod
    async def load_all(self) -> List[Dict[str, Any]]:
        """Returns every stored record in insertion order."""

    @abstractmethod
    async def save_all(self, users: List[Dict[str, Any]]) -> None:
        """Replaces the stored collection with `users`."""

    async def ensure_exists(self) -> None:
        """Creates an empty collection if none exists yet."""

    async def check_health(self) -> bool:
        try:
            await self.load_all()
            return True
        except StorageError as e:
            logger.error(f"Store health check failed: {e.details or e.message}")
            return False

    async def close(self) -> None:
        """Releases any resources held by the store."""


class JsonFileStore(DocumentStore):
    """
    Stores the collection as one pretty-printed JSON array on disk.
    """

    def __init__(self, path: str, indent: int = 2):
        self.path = Path(path)
        self.indent = indent

    async def ensure_exists(self) -> None:
        await asyncio.to_thread(self._ensure_exists)

    async def load_all(self) -> List[Dict[str, Any]]:
        return await asyncio.to_thread(self._read)

    async def save_all(self, users: List[Dict[str, Any]]) -> None:
        await asyncio.to_thread(self._write, users)

    def _ensure_exists(self) -> None:
        try:
            if self.path.exists():
                return
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._write([])
            logger.info(f"Created empty users document at {self.path}")
        except OSError as e:
            raise StorageError(details=f"Cannot create {self.path}: {e}") from e

    def _read(self) -> List[Dict[str, Any]]:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(details=f"Cannot read {self.path}: {e}") from e

        if not isinstance(data, list):
            raise StorageError(details=f"{self.path} does not contain a JSON array")

        if not all(isinstance(user, dict) for user in data):
            raise StorageError(details=f"{self.path} contains entries that are not JSON objects")

        return data

    def _write(self, users: List[Dict[str, Any]]) -> None:
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(users, f, indent=self.indent, ensure_ascii=False)
                f.write("\n")
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageError(details=f"Cannot write {self.path}: {e}") from e


class InMemoryStore(DocumentStore):
    """
    Keeps the collection in process memory. Used by tests and throwaway runs.
    """

    def __init__(self, initial: Optional[List[Dict[str, Any]]] = None):
        self._users: List[Dict[str, Any]] = copy.deepcopy(initial or [])

    async def load_all(self) -> List[Dict[str, Any]]:
        return copy.deepcopy(self._users)

    async def save_all(self, users: List[Dict[str, Any]]) -> None:
        self._users = copy.deepcopy(users)


# Global store instance
_store: Optional[DocumentStore] = None


def build_store() -> DocumentStore:
    """
    Builds the store configured by STORE_BACKEND.
    """
    if settings.STORE_BACKEND == "memory":
        return InMemoryStore()
    return JsonFileStore(settings.USERS_FILE, indent=settings.USERS_FILE_INDENT)


async def init_store(store: Optional[DocumentStore] = None) -> DocumentStore:
    """
    Initializes the global store and creates the document on first boot.
    Called during application startup.
    """
    global _store

    if _store is not None:
        logger.warning("Document store already initialized")
        return _store

    candidate = store or build_store()
    await candidate.ensure_exists()
    _store = candidate

    logger.info(f"✅ Document store ready ({type(_store).__name__})")
    return _store


async def close_store():
    """
    Releases the global store.
    Called during application shutdown.
    """
    global _store

    if _store is not None:
        await _store.close()
        _store = None
        logger.info("Document store closed")


async def check_store_health() -> bool:
    """
    Checks that the store can be read.

    Returns:
        True if healthy, False otherwise
    """
    if _store is None:
        logger.error("Document store not initialized")
        return False
    return await _store.check_health()


def get_store() -> DocumentStore:
    """
    Returns the global store instance.

    Raises:
        RuntimeError: If the store is not initialized
    """
    if _store is None:
        raise RuntimeError(
            "Document store not initialized. Call init_store() during startup."
        )
    return _store
