"""Custom exception hierarchy for the battle simulation core.

Every error raised or returned by the engine inherits from BattleCoreError.
Domain failures that a caller is expected to handle (illegal transitions,
missing roster units, corrupted saves, ...) are not raised: they travel
inside an ``Err`` value (see ``battle_core.core.result``) and carry a
``category`` from the fixed error taxonomy. Only programming errors, such as
asking the stream registry for a label it was never configured with, are
raised directly.

Example:
    >>> from battle_core.core.exceptions import UnitNotFoundError
    >>> error = UnitNotFoundError("Bench unit not found", unit_id="starter_mage")
    >>> error.category
    <ErrorCategory.NOT_FOUND: 'not_found'>
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, ClassVar


class ErrorCategory(StrEnum):
    """Taxonomy of expected domain failures."""

    VALIDATION = "validation"
    """Invalid transition, invalid roster shape, item not usable on target."""

    NOT_FOUND = "not_found"
    """Missing save slot, missing roster unit id, missing item."""

    CORRUPTION = "corruption"
    """Malformed save payload or serialized state."""

    CONSTRAINT_EXHAUSTION = "constraint_exhaustion"
    """Choice diversity unmet after the retry bound."""

    CAPACITY_EXCEEDED = "capacity_exceeded"
    """Team or inventory full without a replacement target."""

    STORAGE_FAILURE = "storage_failure"
    """Underlying blob store read or write error."""


class BattleCoreError(Exception):
    """Base exception for all battle core errors.

    Attributes:
        message: Human-readable error description.
        details: Dictionary containing additional error context.
        category: Error taxonomy bucket, ``None`` for raised-only errors.
    """

    category: ClassVar[ErrorCategory | None] = None

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BattleCoreError):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.message == other.message
            and self.details == other.details
        )

    def __hash__(self) -> int:
        return hash((type(self), self.message))


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(BattleCoreError):
    """Raised when configuration is missing, invalid, or inconsistent.

    This is a programming error (for example an unregistered RNG stream
    label) and is always raised, never returned.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


# =============================================================================
# Validation Exceptions
# =============================================================================


class ValidationError(BattleCoreError):
    """Raised when a value or operation fails a domain rule."""

    category = ErrorCategory.VALIDATION

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


class InvalidTransitionError(ValidationError):
    """Raised when the game flow has no edge to the requested state."""

    def __init__(
        self,
        message: str,
        *,
        current_state: str | None = None,
        target_state: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if current_state is not None:
            combined_details["current_state"] = current_state
        if target_state is not None:
            combined_details["target_state"] = target_state
        super().__init__(message, details=combined_details)


class InvalidRosterError(ValidationError):
    """Raised when a roster breaks its active/bench invariants."""


class ItemNotUsableError(ValidationError):
    """Raised when an item cannot be used on the chosen target."""

    def __init__(
        self,
        message: str,
        *,
        item_id: str | None = None,
        unit_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if item_id:
            combined_details["item_id"] = item_id
        if unit_id:
            combined_details["unit_id"] = unit_id
        super().__init__(message, details=combined_details)


# =============================================================================
# Lookup Exceptions
# =============================================================================


class NotFoundError(BattleCoreError):
    """Base exception for references that do not resolve."""

    category = ErrorCategory.NOT_FOUND


class UnitNotFoundError(NotFoundError):
    """Raised when a roster unit id is absent."""

    def __init__(
        self,
        message: str,
        *,
        unit_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if unit_id:
            combined_details["unit_id"] = unit_id
        super().__init__(message, details=combined_details)


class ItemNotFoundError(NotFoundError):
    """Raised when an item id is absent from the inventory or a catalog."""

    def __init__(
        self,
        message: str,
        *,
        item_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if item_id:
            combined_details["item_id"] = item_id
        super().__init__(message, details=combined_details)


class SlotNotFoundError(NotFoundError):
    """Raised by blob stores (and returned by the save subsystem) for absent slots."""

    def __init__(
        self,
        message: str,
        *,
        slot: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if slot:
            combined_details["slot"] = slot
        super().__init__(message, details=combined_details)


# =============================================================================
# Corruption Exceptions
# =============================================================================


class CorruptionError(BattleCoreError):
    """Base exception for malformed serialized data."""

    category = ErrorCategory.CORRUPTION


class InvalidStateError(CorruptionError):
    """Raised when a serialized state machine cannot be restored."""

    def __init__(
        self,
        message: str,
        *,
        state: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if state is not None:
            combined_details["state"] = state
        super().__init__(message, details=combined_details)


class SaveCorruptedError(CorruptionError):
    """Raised when a save payload parses as JSON but not as an envelope."""

    def __init__(
        self,
        message: str,
        *,
        slot: str | None = None,
        reason: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if slot:
            combined_details["slot"] = slot
        if reason:
            combined_details["reason"] = reason
        super().__init__(message, details=combined_details)


# =============================================================================
# Capacity and Constraint Exceptions
# =============================================================================


class ChoiceConstraintError(BattleCoreError):
    """Describes why opponent choice generation had to degrade.

    This error is never propagated: it is attached to the degraded
    generation outcome and reported through the event logger.
    """

    category = ErrorCategory.CONSTRAINT_EXHAUSTION

    def __init__(
        self,
        message: str,
        *,
        battle_index: int | None = None,
        attempts: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if battle_index is not None:
            combined_details["battle_index"] = battle_index
        if attempts is not None:
            combined_details["attempts"] = attempts
        super().__init__(message, details=combined_details)


class TeamFullError(BattleCoreError):
    """Raised when a team is at capacity."""

    category = ErrorCategory.CAPACITY_EXCEEDED

    def __init__(
        self,
        message: str,
        *,
        capacity: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if capacity is not None:
            combined_details["capacity"] = capacity
        super().__init__(message, details=combined_details)


class InventoryFullError(BattleCoreError):
    """Raised when the item bag or the equipment pool is at capacity."""

    category = ErrorCategory.CAPACITY_EXCEEDED

    def __init__(
        self,
        message: str,
        *,
        pool: str | None = None,
        capacity: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if pool:
            combined_details["pool"] = pool
        if capacity is not None:
            combined_details["capacity"] = capacity
        super().__init__(message, details=combined_details)


# =============================================================================
# Storage Exceptions
# =============================================================================


class StorageError(BattleCoreError):
    """Raised when the underlying blob store fails to read or write."""

    category = ErrorCategory.STORAGE_FAILURE

    def __init__(
        self,
        message: str,
        *,
        slot: str | None = None,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize storage error with slot and operation context.

        Args:
            message: Human-readable error description.
            slot: The save slot being accessed.
            operation: Store primitive that failed (write, read, delete, list).
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if slot:
            combined_details["slot"] = slot
        if operation:
            combined_details["operation"] = operation
        super().__init__(message, details=combined_details)


__all__ = [
    "ErrorCategory",
    "BattleCoreError",
    "ConfigurationError",
    "ValidationError",
    "InvalidTransitionError",
    "InvalidRosterError",
    "ItemNotUsableError",
    "NotFoundError",
    "UnitNotFoundError",
    "ItemNotFoundError",
    "SlotNotFoundError",
    "CorruptionError",
    "InvalidStateError",
    "SaveCorruptedError",
    "ChoiceConstraintError",
    "TeamFullError",
    "InventoryFullError",
    "StorageError",
]
