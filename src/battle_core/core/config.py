"""Configuration management for the battle simulation core.

Settings are loaded with pydantic-settings from environment variables and
an optional ``.env`` file. The pure engine functions take explicit
parameters; these settings only feed the run controller and the save
subsystem when they are constructed.

Example:
    >>> from battle_core.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.engine.max_battle_rounds
    500

Environment Variables:
    BATTLE_CORE_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    BATTLE_CORE_JSON_LOGS: Emit JSON log lines instead of console output
    BATTLE_CORE_ENGINE_GEM_ACTIVATION_POLICY: reset_each_battle or persist
    BATTLE_CORE_STORAGE_BACKEND: memory or file
    BATTLE_CORE_STORAGE_SAVE_DIRECTORY: Directory used by the file store
"""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from battle_core.core import constants
from battle_core.core.exceptions import ConfigurationError


class GemActivationPolicy(StrEnum):
    """Whether a used gem super stays spent across battles."""

    RESET_EACH_BATTLE = "reset_each_battle"
    """Activation clears when a battle ends and when a save is loaded."""

    PERSIST = "persist"
    """Activation stays set until the run explicitly resets it."""


class EngineSettings(BaseSettings):
    """Configuration for simulation rules.

    Attributes:
        max_battle_rounds: Round cap that forces a draw.
        choice_max_attempts: Diversity retries before degrading.
        choice_count: Opponent previews per round.
        active_party_size: Maximum active party size.
        max_mp: MP pool of player units.
        starting_potions: Health Potions granted per run.
        gem_activation_policy: Gem super activation lifetime.
    """

    model_config = SettingsConfigDict(
        env_prefix="BATTLE_CORE_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    max_battle_rounds: int = Field(
        default=constants.MAX_BATTLE_ROUNDS,
        ge=1,
        description="Rounds before a battle is forced to a draw",
    )
    choice_max_attempts: int = Field(
        default=constants.CHOICE_MAX_ATTEMPTS,
        ge=1,
        le=1000,
        description="Diversity retries before degrading",
    )
    choice_count: int = Field(
        default=constants.CHOICE_COUNT,
        ge=1,
        description="Opponent previews offered per round",
    )
    active_party_size: int = Field(
        default=constants.ACTIVE_PARTY_SIZE,
        ge=1,
        description="Maximum active party size",
    )
    max_mp: int = Field(
        default=constants.DEFAULT_MAX_MP,
        ge=0,
        description="MP pool of player units",
    )
    starting_potions: int = Field(
        default=constants.STARTING_POTIONS,
        ge=0,
        description="Health Potions granted at run start",
    )
    gem_activation_policy: GemActivationPolicy = Field(
        default=GemActivationPolicy.RESET_EACH_BATTLE,
        description="Whether gem super activation resets after each battle",
    )


class StorageSettings(BaseSettings):
    """Configuration for save persistence.

    Attributes:
        backend: Blob store implementation used by default.
        save_directory: Directory holding one JSON file per slot.
        save_version: Version tag written into save envelopes.
    """

    model_config = SettingsConfigDict(
        env_prefix="BATTLE_CORE_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    backend: Literal["memory", "file"] = Field(
        default="memory",
        description="Blob store backend",
    )
    save_directory: Path = Field(
        default=Path("data/saves"),
        description="Directory for file-backed save slots",
    )
    save_version: str = Field(
        default=constants.SAVE_VERSION,
        min_length=1,
        description="Save envelope version tag",
    )

    @model_validator(mode="after")
    def validate_save_directory(self) -> "StorageSettings":
        """Ensure the file backend is not pointed at a regular file.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If save_directory exists and is not a directory.
        """
        if self.backend == "file" and self.save_directory.is_file():
            raise ConfigurationError(
                f"save_directory ({self.save_directory}) is a file, not a directory",
                config_key="save_directory",
            )
        return self


class Settings(BaseSettings):
    """Main settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Render logs as JSON.
        log_file: Optional log file path.
        engine: Simulation rule settings.
        storage: Save persistence settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="BATTLE_CORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="Battle Core",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Render logs as JSON lines",
    )
    log_file: str | None = Field(
        default=None,
        description="Optional log file path",
    )

    engine: EngineSettings = Field(default_factory=EngineSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the cached settings instance.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "GemActivationPolicy",
    "EngineSettings",
    "StorageSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
