"""Versioned save/load of run snapshots over a blob store.

A save is a ``SaveEnvelope``: the snapshot plus ``version`` and
``timestamp``, dumped as camelCase JSON. The equipped-item mapping uses the
tagged ``Map`` wrapper (see ``battle_core.models.items``).

Loading tolerates a version mismatch with a warning event; migrating old
payloads is left to callers. Saves written before ``inventoryData``
existed get the default empty inventory.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from battle_core.core.config import get_settings
from battle_core.core.exceptions import SaveCorruptedError, SlotNotFoundError, StorageError
from battle_core.core.logging import get_logger
from battle_core.core.result import Err, Ok, Result
from battle_core.engine.events import EventLogger
from battle_core.models.items import InventoryData
from battle_core.models.state import GameStateSnapshot, SaveEnvelope
from battle_core.storage.blob_store import BlobStore, SlotInfo, byte_size


logger = get_logger(__name__)

LoadError = SlotNotFoundError | SaveCorruptedError | StorageError


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SaveSystem:
    """Reads and writes save envelopes through a ``BlobStore``.

    Every operation returns a ``Result``; store exceptions never escape.
    Concurrent saves to one slot are not serialized: the last write wins.

    Attributes:
        store: Underlying blob store.
        version: Version tag written into new envelopes.
    """

    def __init__(
        self,
        store: BlobStore,
        *,
        version: str | None = None,
        events: EventLogger | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the save system.

        Args:
            store: Blob store holding one payload per slot.
            version: Envelope version; defaults to the configured save version.
            events: Game event logger.
            clock: Timestamp source, injectable for tests.
        """
        self.store = store
        self.version = version or get_settings().storage.save_version
        self.events = events or EventLogger()
        self._clock = clock or _utcnow

    async def save(
        self, slot: str, snapshot: GameStateSnapshot
    ) -> Result[SaveEnvelope, StorageError]:
        """Wrap ``snapshot`` in an envelope and write it to ``slot``.

        Returns:
            Ok with the written envelope, or Err(StorageError) wrapping the
            store failure.
        """
        envelope = SaveEnvelope.wrap(snapshot, version=self.version, timestamp=self._clock())
        payload = envelope.model_dump_json(by_alias=True)

        try:
            await self.store.write(slot, payload)
        except StorageError as exc:
            self.events.save_failed(slot=slot, operation="write", error=exc.message)
            return Err(
                StorageError(f"Failed to save: {exc.message}", slot=slot, operation="write")
            )

        self.events.save_written(slot=slot, size=byte_size(payload))
        return Ok(envelope)

    async def load(self, slot: str) -> Result[SaveEnvelope, LoadError]:
        """Read and parse the envelope in ``slot``.

        Returns:
            Ok with the envelope; Err(SlotNotFoundError) for an absent slot,
            Err(SaveCorruptedError) when the payload is not valid JSON or not
            a valid envelope, Err(StorageError) for other read failures.
        """
        try:
            payload = await self.store.read(slot)
        except SlotNotFoundError as exc:
            return Err(exc)
        except StorageError as exc:
            self.events.save_failed(slot=slot, operation="read", error=exc.message)
            return Err(exc)

        try:
            data = json.loads(payload)
        except json.JSONDecodeError as exc:
            return Err(
                SaveCorruptedError("Save payload is not valid JSON", slot=slot, reason=str(exc))
            )
        if not isinstance(data, dict):
            return Err(
                SaveCorruptedError(
                    "Save payload is not a JSON object",
                    slot=slot,
                    reason=type(data).__name__,
                )
            )

        found_version = data.get("version")
        if found_version != self.version:
            self.events.save_version_mismatch(
                slot=slot, found=found_version, expected=self.version
            )

        data = self._backfill(data)
        try:
            envelope = SaveEnvelope.model_validate(data)
        except PydanticValidationError as exc:
            return Err(
                SaveCorruptedError(
                    "Save payload does not match the snapshot schema",
                    slot=slot,
                    reason=f"{exc.error_count()} validation error(s)",
                    details={"errors": [error["loc"] for error in exc.errors()]},
                )
            )

        self.events.save_loaded(slot=slot, version=envelope.version)
        return Ok(envelope)

    async def delete(self, slot: str) -> Result[None, SlotNotFoundError | StorageError]:
        try:
            await self.store.delete(slot)
        except (SlotNotFoundError, StorageError) as exc:
            return Err(exc)
        self.events.save_deleted(slot=slot)
        return Ok(None)

    async def list_slots(self) -> Result[list[SlotInfo], StorageError]:
        try:
            return Ok(await self.store.list())
        except StorageError as exc:
            return Err(exc)

    async def has_slot(self, slot: str) -> bool:
        """Whether ``slot`` currently holds a save; False if listing fails."""
        listing = await self.list_slots()
        return listing.ok and any(info.slot == slot for info in listing.unwrap())

    @staticmethod
    def _backfill(data: dict[str, Any]) -> dict[str, Any]:
        if "inventoryData" in data or "inventory_data" in data:
            return data
        logger.debug("Back-filling inventory data for older save")
        return {**data, "inventoryData": InventoryData().to_wire()}


__all__ = [
    "LoadError",
    "SaveSystem",
]
