"""Key -> text blob stores backing the save subsystem.

A store exposes four awaitable primitives: ``write``, ``read``,
``delete`` and ``list``. Reading or deleting an absent slot raises
``SlotNotFoundError``; any other I/O failure raises ``StorageError``.
Concurrent writes to the same slot are not coordinated: the last write
wins.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol, runtime_checkable

from battle_core.core.config import StorageSettings, get_settings
from battle_core.core.exceptions import SlotNotFoundError, StorageError
from battle_core.core.logging import get_logger


logger = get_logger(__name__)


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class SlotInfo:
    """Listing entry for one slot.

    Attributes:
        slot: Slot name.
        modified: Last write time (UTC).
        size: Payload size in UTF-8 bytes.
    """

    slot: str
    modified: datetime
    size: int


def byte_size(payload: str) -> int:
    return len(payload.encode("utf-8"))


@runtime_checkable
class BlobStore(Protocol):
    """Asynchronous key -> text blob store."""

    async def write(self, slot: str, payload: str) -> None: ...

    async def read(self, slot: str) -> str: ...

    async def delete(self, slot: str) -> None: ...

    async def list(self) -> list[SlotInfo]: ...


# =============================================================================
# In-memory Store
# =============================================================================


class InMemoryBlobStore:
    """Dict-backed store for tests and ephemeral runs."""

    def __init__(self) -> None:
        self._blobs: dict[str, tuple[str, datetime]] = {}

    async def write(self, slot: str, payload: str) -> None:
        self._blobs[slot] = (payload, datetime.now(timezone.utc))

    async def read(self, slot: str) -> str:
        try:
            return self._blobs[slot][0]
        except KeyError:
            raise SlotNotFoundError("Save slot not found", slot=slot) from None

    async def delete(self, slot: str) -> None:
        if slot not in self._blobs:
            raise SlotNotFoundError("Save slot not found", slot=slot)
        del self._blobs[slot]

    async def list(self) -> list[SlotInfo]:
        return [
            SlotInfo(slot=slot, modified=modified, size=byte_size(payload))
            for slot, (payload, modified) in self._blobs.items()
        ]

    def count(self) -> int:
        return len(self._blobs)


# =============================================================================
# File Store
# =============================================================================


class FileBlobStore:
    """One ``<slot>.json`` file per slot under a directory.

    File I/O runs in a worker thread so the event loop is never blocked.
    """

    SUFFIX = ".json"

    def __init__(self, directory: str | Path) -> None:
        """Initialize the store.

        Args:
            directory: Save directory; created on first write.
        """
        self.directory = Path(directory)

    def _path(self, slot: str) -> Path:
        if not slot or slot in {".", ".."} or "/" in slot or "\\" in slot:
            raise StorageError("Invalid slot name", slot=slot or None, operation="resolve")
        return self.directory / f"{slot}{self.SUFFIX}"

    async def write(self, slot: str, payload: str) -> None:
        path = self._path(slot)

        def _write() -> None:
            self.directory.mkdir(parents=True, exist_ok=True)
            path.write_text(payload, encoding="utf-8")

        try:
            await asyncio.to_thread(_write)
        except OSError as exc:
            raise StorageError(f"Write failed: {exc}", slot=slot, operation="write") from exc
        logger.debug("Blob written", slot=slot, path=str(path))

    async def read(self, slot: str) -> str:
        path = self._path(slot)
        try:
            return await asyncio.to_thread(path.read_text, encoding="utf-8")
        except FileNotFoundError:
            raise SlotNotFoundError("Save slot not found", slot=slot) from None
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageError(f"Read failed: {exc}", slot=slot, operation="read") from exc

    async def delete(self, slot: str) -> None:
        path = self._path(slot)
        try:
            await asyncio.to_thread(path.unlink)
        except FileNotFoundError:
            raise SlotNotFoundError("Save slot not found", slot=slot) from None
        except OSError as exc:
            raise StorageError(f"Delete failed: {exc}", slot=slot, operation="delete") from exc

    async def list(self) -> list[SlotInfo]:
        def _scan() -> list[SlotInfo]:
            if not self.directory.exists():
                return []
            entries = []
            for path in sorted(self.directory.glob(f"*{self.SUFFIX}")):
                stat = path.stat()
                entries.append(
                    SlotInfo(
                        slot=path.stem,
                        modified=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
                        size=stat.st_size,
                    )
                )
            return entries

        try:
            return await asyncio.to_thread(_scan)
        except OSError as exc:
            raise StorageError(f"List failed: {exc}", operation="list") from exc


# =============================================================================
# Factory
# =============================================================================


def create_blob_store(settings: StorageSettings | None = None) -> BlobStore:
    """Build the store selected by the storage settings.

    Args:
        settings: Storage settings; the cached application settings when omitted.

    Returns:
        An in-memory or file-backed store.
    """
    settings = settings or get_settings().storage
    if settings.backend == "file":
        logger.info("Using file blob store", directory=str(settings.save_directory))
        return FileBlobStore(settings.save_directory)
    return InMemoryBlobStore()


__all__ = [
    "SlotInfo",
    "BlobStore",
    "InMemoryBlobStore",
    "FileBlobStore",
    "byte_size",
    "create_blob_store",
]
