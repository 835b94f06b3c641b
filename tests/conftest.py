"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the battle core test suite.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest


if TYPE_CHECKING:
    from collections.abc import Callable, Generator


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from battle_core.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture(autouse=True)
def reset_log_context() -> Generator[None, None, None]:
    """Drop bound log context so runs never leak into other tests."""
    import structlog

    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def restore_logging() -> Generator[None, None, None]:
    """Undo configure_logging: structlog defaults and root logger handlers."""
    import logging

    import structlog

    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "BATTLE_CORE_DEBUG": "true",
        "BATTLE_CORE_LOG_LEVEL": "DEBUG",
        "BATTLE_CORE_ENGINE_MAX_BATTLE_ROUNDS": "50",
        "BATTLE_CORE_ENGINE_GEM_ACTIVATION_POLICY": "persist",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Event Fixtures
# =============================================================================


class RecordingSink:
    """Event sink that keeps every event for assertions."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str, dict[str, Any]]] = []

    def info(self, event: str, **data: Any) -> None:
        self.records.append(("info", event, data))

    def warning(self, event: str, **data: Any) -> None:
        self.records.append(("warning", event, data))

    def error(self, event: str, **data: Any) -> None:
        self.records.append(("error", event, data))

    def named(self, event: str) -> list[dict[str, Any]]:
        return [data for _, name, data in self.records if name == event]

    def levels(self, event: str) -> list[str]:
        return [level for level, name, _ in self.records if name == event]


@pytest.fixture
def event_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def events(event_sink: RecordingSink) -> Any:
    """EventLogger writing into ``event_sink``."""
    from battle_core.engine.events import EventLogger

    return EventLogger(event_sink)


# =============================================================================
# Stream Fixtures
# =============================================================================


@pytest.fixture
def root_rng() -> Any:
    """Root stream for seed 12345."""
    from battle_core.engine.rng import SeededRng

    return SeededRng(12345)


# =============================================================================
# Unit Fixtures
# =============================================================================


@pytest.fixture
def make_unit() -> Callable[..., Any]:
    """Factory for roster units with overridable fields.

    Returns:
        Callable building a RosterUnit.
    """
    from battle_core.models.enums import Element, Role
    from battle_core.models.units import RosterUnit

    def _make(unit_id: str = "hero", **overrides: Any) -> RosterUnit:
        data: dict[str, Any] = {
            "id": unit_id,
            "template_id": unit_id,
            "name": unit_id.replace("_", " ").title(),
            "role": Role.DPS,
            "element": Element.MARS,
            "current_hp": 100,
            "max_hp": 100,
            "atk": 20,
            "defense": 10,
            "speed": 50,
        }
        data.update(overrides)
        return RosterUnit(**data)

    return _make


@pytest.fixture
def make_enemy() -> Callable[..., Any]:
    """Factory for enemy templates with overridable fields."""
    from battle_core.models.enums import Role, Tag
    from battle_core.models.units import EnemyTemplate

    def _make(template_id: str = "grunt", **overrides: Any) -> EnemyTemplate:
        data: dict[str, Any] = {
            "id": template_id,
            "name": template_id.replace("_", " ").title(),
            "role": Role.TANK,
            "tags": (Tag.BEAST,),
            "hp": 60,
            "atk": 15,
            "defense": 15,
            "speed": 30,
        }
        data.update(overrides)
        return EnemyTemplate(**data)

    return _make


@pytest.fixture
def starter_team() -> tuple[Any, ...]:
    """Warrior, Mage and Cleric from the starter catalog."""
    from battle_core.data.starters import STARTER_UNITS

    return (
        STARTER_UNITS["starter_warrior"],
        STARTER_UNITS["starter_mage"],
        STARTER_UNITS["starter_cleric"],
    )


# =============================================================================
# Storage Fixtures
# =============================================================================


@pytest.fixture
def memory_store() -> Any:
    from battle_core.storage.blob_store import InMemoryBlobStore

    return InMemoryBlobStore()


@pytest.fixture
def save_system(memory_store: Any, events: Any) -> Any:
    """Save system over an in-memory store, version 7.0."""
    from battle_core.storage.save_system import SaveSystem

    return SaveSystem(memory_store, version="7.0", events=events)
