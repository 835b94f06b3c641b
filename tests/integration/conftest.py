"""Fixtures for controller-level integration tests."""

from __future__ import annotations

from typing import Any

import pytest

from battle_core.core.config import EngineSettings, GemActivationPolicy
from battle_core.engine.controller import GameController
from battle_core.models.enums import Difficulty, Role, Tag
from battle_core.models.opponents import OpponentSpec


def _catalog(make_enemy: Any, prefix: str, **enemy_stats: Any) -> tuple[OpponentSpec, ...]:
    layout = ((Tag.BEAST, Role.TANK), (Tag.MECH, Role.DPS), (Tag.HOLY, Role.SUPPORT))
    return tuple(
        OpponentSpec(
            id=f"{prefix}_{tag.value.lower()}",
            name=f"{prefix.title()} {tag.value}",
            difficulty=Difficulty.STANDARD,
            units=(
                make_enemy(f"{prefix}_{tag.value.lower()}_a", role=role, tags=(tag,), **enemy_stats),
                make_enemy(f"{prefix}_{tag.value.lower()}_b", role=role, tags=(tag,), **enemy_stats),
            ),
            primary_tag=tag,
        )
        for tag, role in layout
    )


@pytest.fixture
def weak_catalog(make_enemy: Any) -> tuple[OpponentSpec, ...]:
    """Opponents that fall to the first hit and never act first."""
    return _catalog(make_enemy, "weak", hp=1, atk=0, defense=0, speed=0)


@pytest.fixture
def strong_catalog(make_enemy: Any) -> tuple[OpponentSpec, ...]:
    """Opponents that act first and defeat any starter in one hit."""
    return _catalog(make_enemy, "strong", hp=10000, atk=500, defense=500, speed=200)


@pytest.fixture
def make_controller(save_system: Any, events: Any) -> Any:
    def _make(
        catalog: tuple[OpponentSpec, ...],
        policy: GemActivationPolicy = GemActivationPolicy.RESET_EACH_BATTLE,
    ) -> GameController:
        return GameController(
            save_system,
            settings=EngineSettings(gem_activation_policy=policy),
            events=events,
            catalog=catalog,
        )

    return _make
