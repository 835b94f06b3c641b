"""Save persistence: blob stores and the versioned save system."""

from __future__ import annotations

from battle_core.storage.blob_store import (
    BlobStore,
    FileBlobStore,
    InMemoryBlobStore,
    SlotInfo,
    create_blob_store,
)
from battle_core.storage.save_system import SaveSystem


__all__ = [
    "BlobStore",
    "FileBlobStore",
    "InMemoryBlobStore",
    "SlotInfo",
    "create_blob_store",
    "SaveSystem",
]
