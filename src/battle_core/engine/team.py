"""Team-side recruitment.

Defeated enemies can join the team. The enemy template becomes a level 1,
rank C roster unit whose element comes from its tags, in this order of
precedence: Holy -> Moon, Nature -> Venus, Beast -> Mars,
Arcane -> Mercury, Mech -> Jupiter, Undead -> Sun (Venus when none
match). The unit carries the gem of its element and gets its abilities
granted immediately.
"""

from __future__ import annotations

from collections.abc import Sequence

from battle_core.core import constants
from battle_core.core.exceptions import InvalidRosterError, TeamFullError, UnitNotFoundError
from battle_core.core.logging import get_logger
from battle_core.core.result import Err, Ok, Result
from battle_core.data.gems import get_elemental_gem
from battle_core.engine.elements import initialize_unit_abilities
from battle_core.models.enums import Element, Tag
from battle_core.models.units import ActiveGemState, EnemyTemplate, RosterUnit


logger = get_logger(__name__)

TAG_ELEMENT_PRECEDENCE: tuple[tuple[Tag, Element], ...] = (
    (Tag.HOLY, Element.MOON),
    (Tag.NATURE, Element.VENUS),
    (Tag.BEAST, Element.MARS),
    (Tag.ARCANE, Element.MERCURY),
    (Tag.MECH, Element.JUPITER),
    (Tag.UNDEAD, Element.SUN),
)

DEFAULT_RECRUIT_ELEMENT = Element.VENUS


def element_for_tags(tags: Sequence[Tag]) -> Element:
    for tag, element in TAG_ELEMENT_PRECEDENCE:
        if tag in tags:
            return element
    return DEFAULT_RECRUIT_ELEMENT


class TeamManager:
    """Recruits and replaces units on a team of bounded size.

    The recruit counter makes recruited ids deterministic
    (``recruited_<template_id>_<n>``); seed it with the number of units
    already recruited when restoring a run.

    Attributes:
        max_team_size: Team capacity.
        recruit_counter: Recruits issued so far.
    """

    def __init__(
        self,
        max_team_size: int = constants.ACTIVE_PARTY_SIZE,
        recruit_counter: int = 0,
    ) -> None:
        self.max_team_size = max_team_size
        self.recruit_counter = recruit_counter

    def convert_enemy_to_player(self, template: EnemyTemplate) -> RosterUnit:
        """Build a fresh roster unit from an enemy template.

        Advances the recruit counter.
        """
        self.recruit_counter += 1
        element = element_for_tags(template.tags)
        unit = RosterUnit(
            id=f"recruited_{template.id}_{self.recruit_counter}",
            template_id=template.id,
            name=template.name,
            role=template.role,
            tags=template.tags,
            element=element,
            active_gem_state=ActiveGemState(active_gem=get_elemental_gem(element)),
            level=1,
            experience=0,
            current_hp=template.hp,
            max_hp=template.hp,
            current_mp=constants.DEFAULT_MAX_MP,
            max_mp=constants.DEFAULT_MAX_MP,
            atk=template.atk,
            defense=template.defense,
            speed=template.speed,
            base_class=str(template.role),
        )
        return initialize_unit_abilities(unit)

    def recruit_unit(
        self,
        team: Sequence[RosterUnit],
        template: EnemyTemplate,
        replace_unit_id: str | None = None,
    ) -> Result[tuple[RosterUnit, ...], TeamFullError | UnitNotFoundError]:
        """Add a recruited enemy to ``team``.

        Args:
            team: Current team.
            template: Defeated enemy template to recruit.
            replace_unit_id: Unit to replace when the team is full.

        Returns:
            Ok with the new team, Err(TeamFullError) when the team is full
            and no replacement was named, or Err(UnitNotFoundError) when the
            replacement is not on the team.
        """
        team = tuple(team)
        if not self.is_team_full(team):
            recruit = self.convert_enemy_to_player(template)
            logger.debug("Unit recruited", unit_id=recruit.id, template_id=template.id)
            return Ok(team + (recruit,))

        if replace_unit_id is None:
            return Err(
                TeamFullError(
                    "Team full - must specify unit to replace", capacity=self.max_team_size
                )
            )
        if self.find_unit(team, replace_unit_id) is None:
            return Err(
                UnitNotFoundError(
                    f"Unit {replace_unit_id} not found in team", unit_id=replace_unit_id
                )
            )

        recruit = self.convert_enemy_to_player(template)
        logger.debug(
            "Unit recruited as replacement",
            unit_id=recruit.id,
            template_id=template.id,
            replaced_id=replace_unit_id,
        )
        return Ok(self.replace_unit(team, replace_unit_id, recruit))

    def validate_team(
        self, team: Sequence[RosterUnit]
    ) -> Result[tuple[RosterUnit, ...], InvalidRosterError]:
        if not team:
            return Err(InvalidRosterError("Team cannot be empty", field_name="team"))
        if len(team) > self.max_team_size:
            return Err(
                InvalidRosterError(
                    f"Team cannot exceed {self.max_team_size} units",
                    field_name="team",
                    invalid_value=len(team),
                )
            )
        return Ok(tuple(team))

    def is_team_full(self, team: Sequence[RosterUnit]) -> bool:
        return len(team) >= self.max_team_size

    def available_slots(self, team: Sequence[RosterUnit]) -> int:
        return max(0, self.max_team_size - len(team))

    @staticmethod
    def find_unit(team: Sequence[RosterUnit], unit_id: str) -> RosterUnit | None:
        return next((unit for unit in team if unit.id == unit_id), None)

    @staticmethod
    def find_duplicate(team: Sequence[RosterUnit], template_id: str) -> RosterUnit | None:
        """First unit created from ``template_id``, a candidate for merging."""
        return next((unit for unit in team if unit.template_id == template_id), None)

    @staticmethod
    def replace_unit(
        team: Sequence[RosterUnit], old_unit_id: str, new_unit: RosterUnit
    ) -> tuple[RosterUnit, ...]:
        return tuple(new_unit if unit.id == old_unit_id else unit for unit in team)

    @staticmethod
    def remove_unit(team: Sequence[RosterUnit], unit_id: str) -> tuple[RosterUnit, ...]:
        return tuple(unit for unit in team if unit.id != unit_id)


__all__ = [
    "TAG_ELEMENT_PRECEDENCE",
    "DEFAULT_RECRUIT_ELEMENT",
    "element_for_tags",
    "TeamManager",
]
