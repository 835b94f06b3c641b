"""Deterministic seeded random streams.

A run is driven by a single numeric root seed. The ``StreamRegistry`` forks
that root once per named stream (battle, choice, rewards, ...) so that each
subsystem draws from its own independent sequence: extra draws in one
subsystem never shift the results of another. Any stream can be forked
further with an ad-hoc label, for example ``choice`` -> ``"3"`` for the
fourth battle's opponent choices.

Forking hashes the parent's seed together with the label, so the child
depends only on (parent seed, label) and not on how many values the parent
has already produced.

Example:
    >>> registry = StreamRegistry(12345)
    >>> battle = registry.get(StreamLabel.BATTLE)
    >>> battle.next_int(-2, 2) in range(-2, 3)
    True
"""

from __future__ import annotations

import hashlib
import random
from collections.abc import Iterable, Sequence
from enum import StrEnum
from typing import TypeVar

from battle_core.core.exceptions import ConfigurationError
from battle_core.core.logging import get_logger


logger = get_logger(__name__)

T = TypeVar("T")

_SEED_MASK = (1 << 64) - 1


class StreamLabel(StrEnum):
    """Streams registered for every run."""

    ROUTE = "route"
    BATTLE = "battle"
    CHOICE = "choice"
    REWARDS = "rewards"
    ECONOMY = "economy"
    MAP = "map"
    UNIT = "unit"
    SAVE = "save"
    EVENTS = "events"
    LOOT = "loot"


DEFAULT_STREAM_LABELS: tuple[str, ...] = tuple(label.value for label in StreamLabel)


def derive_seed(parent_seed: int, label: str) -> int:
    """Derive a child seed from a parent seed and a label.

    Args:
        parent_seed: Seed of the parent stream.
        label: Fork label.

    Returns:
        A 64-bit child seed.
    """
    digest = hashlib.sha256(f"{parent_seed}:{label}".encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big")


class SeededRng:
    """A single deterministic random stream.

    Wraps ``random.Random`` so that every draw is reproducible from the
    seed. Instances are mutable: each draw advances the stream.
    """

    def __init__(self, seed: int) -> None:
        self._seed = int(seed) & _SEED_MASK
        self._random = random.Random(self._seed)
        self._draws = 0

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def draws(self) -> int:
        """Number of values drawn so far."""
        return self._draws

    def next_int(self, low: int, high: int) -> int:
        """Draw an integer uniformly from ``[low, high]`` inclusive.

        Raises:
            ValueError: If ``low > high``.
        """
        if low > high:
            raise ValueError(f"Empty range [{low}, {high}]")
        self._draws += 1
        return self._random.randint(low, high)

    def next_float(self) -> float:
        """Draw a float uniformly from ``[0, 1)``."""
        self._draws += 1
        return self._random.random()

    def chance(self, probability: float) -> bool:
        return self.next_float() < probability

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise ValueError("Cannot choose from an empty sequence")
        return items[self.next_int(0, len(items) - 1)]

    def shuffle(self, items: Iterable[T]) -> list[T]:
        """Return a shuffled copy of ``items`` (Fisher-Yates, back to front)."""
        shuffled = list(items)
        for i in range(len(shuffled) - 1, 0, -1):
            j = self.next_int(0, i)
            shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
        return shuffled

    def fork(self, label: str) -> SeededRng:
        """Create an independent child stream.

        Args:
            label: Fork label; the same label always yields the same child.

        Returns:
            A new SeededRng.
        """
        return SeededRng(derive_seed(self._seed, str(label)))

    def describe(self) -> str:
        return f"SeededRng(seed={self._seed}, draws={self._draws})"

    def __repr__(self) -> str:
        return self.describe()


class StreamRegistry:
    """Fixed set of named streams forked from one root seed.

    Built once at run start and passed by reference to every component
    that needs randomness.

    Attributes:
        root: The root stream.
    """

    def __init__(
        self,
        root: SeededRng | int,
        labels: Iterable[str] = DEFAULT_STREAM_LABELS,
    ) -> None:
        """Fork every label from the root.

        Args:
            root: Root stream or numeric root seed.
            labels: Stream labels to register.
        """
        self.root = root if isinstance(root, SeededRng) else SeededRng(root)
        self._streams: dict[str, SeededRng] = {}
        for label in labels:
            key = str(label)
            self._streams[key] = self.root.fork(key)
        logger.debug(
            "Stream registry initialized",
            root_seed=self.root.seed,
            labels=list(self._streams),
        )

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(self._streams)

    def get(self, label: str) -> SeededRng:
        """Get a registered stream.

        Args:
            label: Stream label.

        Returns:
            The stream registered under ``label``.

        Raises:
            ConfigurationError: If the label was never registered.
        """
        try:
            return self._streams[str(label)]
        except KeyError:
            raise ConfigurationError(
                f"Unknown RNG stream label: {label!r}",
                config_key="rng_stream",
                details={"registered": sorted(self._streams)},
            ) from None

    def describe(self) -> dict[str, str]:
        """Describe every stream, for debugging."""
        return {label: stream.describe() for label, stream in self._streams.items()}


__all__ = [
    "StreamLabel",
    "DEFAULT_STREAM_LABELS",
    "derive_seed",
    "SeededRng",
    "StreamRegistry",
]
