"""Opponent choice generation.

Each round offers a small set of opponents drawn from the static catalog.
A candidate set is accepted when it passes every diversity rule:

1. at least one Standard opponent,
2. at most one Hard opponent,
3. distinct primary tags,
4. no two adjacent opponents sharing a lead role.

Candidates are drawn by a seeded shuffle-and-take. After the retry bound
the last candidate is accepted anyway and the outcome is marked degraded.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from battle_core.core import constants
from battle_core.core.exceptions import ChoiceConstraintError
from battle_core.core.logging import get_logger
from battle_core.data.opponents import OPPONENT_CATALOG
from battle_core.engine.events import EventLogger
from battle_core.engine.rng import SeededRng, StreamLabel
from battle_core.models.enums import Difficulty
from battle_core.models.opponents import OpponentPreview, OpponentSpec


logger = get_logger(__name__)


# =============================================================================
# Diversity Rules
# =============================================================================


def has_standard(specs: Sequence[OpponentSpec]) -> bool:
    return any(spec.difficulty is Difficulty.STANDARD for spec in specs)


def at_most_one_hard(specs: Sequence[OpponentSpec]) -> bool:
    return sum(1 for spec in specs if spec.difficulty is Difficulty.HARD) <= 1


def distinct_primary_tags(specs: Sequence[OpponentSpec]) -> bool:
    return len({spec.primary_tag for spec in specs}) == len(specs)


def no_adjacent_roles(specs: Sequence[OpponentSpec]) -> bool:
    return all(
        first.lead_role != second.lead_role for first, second in zip(specs, specs[1:])
    )


DIVERSITY_RULES: tuple[tuple[str, Callable[[Sequence[OpponentSpec]], bool]], ...] = (
    ("no standard opponent", has_standard),
    ("more than one hard opponent", at_most_one_hard),
    ("duplicate primary tags", distinct_primary_tags),
    ("adjacent opponents share a role", no_adjacent_roles),
)


def failed_rules(specs: Sequence[OpponentSpec]) -> list[str]:
    """Names of the diversity rules ``specs`` breaks, in rule order."""
    return [name for name, rule in DIVERSITY_RULES if not rule(specs)]


def is_diverse(specs: Sequence[OpponentSpec]) -> bool:
    return not failed_rules(specs)


# =============================================================================
# Generation
# =============================================================================


@dataclass(frozen=True)
class GeneratedChoices:
    """Outcome of one choice round.

    Attributes:
        previews: Offered opponents, in draw order.
        attempts: Candidate sets drawn, including the accepted one.
        seed: Seed of the forked choice stream.
        degradation: Why the round degraded, or None when every rule held.
    """

    previews: tuple[OpponentPreview, ...]
    attempts: int
    seed: int
    degradation: ChoiceConstraintError | None = None

    @property
    def degraded(self) -> bool:
        return self.degradation is not None

    @property
    def opponent_ids(self) -> tuple[str, ...]:
        return tuple(preview.spec.id for preview in self.previews)


def choice_stream(root: SeededRng, battle_index: int) -> SeededRng:
    """Fork the stream dedicated to one battle's choices."""
    return root.fork(StreamLabel.CHOICE).fork(str(battle_index))


def generate_choices(
    root: SeededRng,
    battle_index: int,
    catalog: Sequence[OpponentSpec] = OPPONENT_CATALOG,
    *,
    count: int = constants.CHOICE_COUNT,
    max_attempts: int = constants.CHOICE_MAX_ATTEMPTS,
    events: EventLogger | None = None,
) -> GeneratedChoices:
    """Generate the opponent previews for one battle.

    The result depends only on the root seed, the battle index and the
    catalog; draws already taken from ``root`` do not affect it.

    Args:
        root: The run's root stream.
        battle_index: Zero-based index of the upcoming battle.
        catalog: Opponents to choose from.
        count: Opponents offered per round.
        max_attempts: Retry bound before degrading.
        events: Event logger for the generated/degraded events.

    Returns:
        The offered previews and generation metadata.

    Raises:
        ValueError: If the catalog holds fewer than ``count`` opponents or
            ``max_attempts`` is below 1.
    """
    if len(catalog) < count:
        raise ValueError(f"Catalog has {len(catalog)} opponents, need {count}")
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

    events = events or EventLogger()
    stream = choice_stream(root, battle_index)

    candidate: list[OpponentSpec] = []
    reasons: list[str] = []
    attempts = 0
    while attempts < max_attempts:
        attempts += 1
        candidate = stream.shuffle(catalog)[:count]
        reasons = failed_rules(candidate)
        if not reasons:
            break
        logger.debug(
            "Choice candidate rejected",
            battle_index=battle_index,
            attempt=attempts,
            reasons=reasons,
        )

    degradation = None
    if reasons:
        degradation = ChoiceConstraintError(
            f"Diversity rules unmet after {attempts} attempts: {', '.join(reasons)}",
            battle_index=battle_index,
            attempts=attempts,
        )
        events.choice_degraded(
            battle_index=battle_index, reason=", ".join(reasons), attempts=attempts
        )

    previews = tuple(OpponentPreview.from_spec(spec) for spec in candidate)
    events.choice_generated(
        battle_index=battle_index,
        previews=previews,
        seed=stream.seed,
        attempts=attempts,
        degraded=degradation is not None,
    )
    return GeneratedChoices(
        previews=previews,
        attempts=attempts,
        seed=stream.seed,
        degradation=degradation,
    )


__all__ = [
    "DIVERSITY_RULES",
    "has_standard",
    "at_most_one_hard",
    "distinct_primary_tags",
    "no_adjacent_roles",
    "failed_rules",
    "is_diverse",
    "GeneratedChoices",
    "choice_stream",
    "generate_choices",
]
