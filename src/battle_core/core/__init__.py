"""Core module providing configuration, logging, errors and results.

Exports:
    Exceptions:
        BattleCoreError: Base exception for all engine errors.
        ErrorCategory: Taxonomy of expected domain failures.
        ConfigurationError: Raised for programming and configuration errors.

    Results:
        Ok, Err, Result: Tagged success/failure values.

    Configuration:
        Settings: Main settings class.
        get_settings: Get the cached settings.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up structured logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from battle_core.core.config import (
    EngineSettings,
    GemActivationPolicy,
    Settings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
)
from battle_core.core.exceptions import (
    BattleCoreError,
    ChoiceConstraintError,
    ConfigurationError,
    CorruptionError,
    ErrorCategory,
    InvalidRosterError,
    InvalidStateError,
    InvalidTransitionError,
    ItemNotFoundError,
    ItemNotUsableError,
    NotFoundError,
    SaveCorruptedError,
    SlotNotFoundError,
    StorageError,
    InventoryFullError,
    TeamFullError,
    UnitNotFoundError,
    ValidationError,
)
from battle_core.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)
from battle_core.core.result import Err, Ok, Result


__all__ = [
    # Exceptions
    "BattleCoreError",
    "ErrorCategory",
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
    "InventoryFullError",
    "TeamFullError",
    "StorageError",
    # Results
    "Ok",
    "Err",
    "Result",
    # Configuration
    "Settings",
    "EngineSettings",
    "StorageSettings",
    "GemActivationPolicy",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
