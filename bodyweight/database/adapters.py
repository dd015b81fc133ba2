"""
Persistence adapters: asynchronous get/set of a named blob by string key.

Adapters store opaque strings. Any failure is raised as StorageFailure
with the original error chained.
"""

import asyncio
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Dict, Optional

from bodyweight.exceptions import StorageFailure

logger = logging.getLogger(__name__)


class PersistenceAdapter:
    """Narrow key-value interface the weight store depends on."""

    async def get(self, key: str) -> Optional[str]:
        """Return the blob stored under `key`, or None when absent."""
        raise NotImplementedError

    async def set(self, key: str, value: str) -> None:
        """Replace the blob stored under `key`."""
        raise NotImplementedError


class MemoryAdapter(PersistenceAdapter):
    """In-process adapter, used for tests and previews."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.blobs: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self.blobs.get(key)

    async def set(self, key: str, value: str) -> None:
        self.blobs[key] = value


class JsonFileAdapter(PersistenceAdapter):
    """
    One file per key under a storage directory.

    Writes go to a temporary file that replaces the target, so a key is
    either fully old or fully new on disk. File I/O runs in a worker
    thread to keep the event loop free.
    """

    _UNSAFE_CHARS = re.compile(r'[^A-Za-z0-9_.-]')

    def __init__(self, storage_path: str):
        self.storage_path = Path(storage_path)

    def path_for(self, key: str) -> Path:
        """File backing `key`. Characters outside [A-Za-z0-9_.-] become '_'."""
        safe = self._UNSAFE_CHARS.sub('_', key).strip('.') or '_'
        return self.storage_path / f"{safe}.json"

    async def get(self, key: str) -> Optional[str]:
        try:
            return await asyncio.to_thread(self._read, key)
        except OSError as e:
            logger.error(f"Read failed for key {key}: {e}")
            raise StorageFailure('read', key, e) from e

    async def set(self, key: str, value: str) -> None:
        try:
            await asyncio.to_thread(self._write, key, value)
        except OSError as e:
            logger.error(f"Write failed for key {key}: {e}")
            raise StorageFailure('write', key, e) from e

    def _read(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        # Undecodable bytes reach the payload decoder and read as malformed
        with open(path, 'r', encoding='utf-8', errors='replace') as f:
            return f.read()

    def _write(self, key: str, value: str) -> None:
        self.storage_path.mkdir(parents=True, exist_ok=True)
        target = self.path_for(key)
        fd, tmp_name = tempfile.mkstemp(dir=self.storage_path, prefix=f".{target.stem}.", suffix=".tmp")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(value)
            os.replace(tmp_name, target)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
