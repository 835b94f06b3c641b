"""Game flow state machine.

The flow is a fixed directed graph::

    menu -> starter_select -> opponent_select -> team_prep -> battle
    battle -> rewards | defeat
    rewards -> equipment -> recruit -> opponent_select
    defeat -> menu

Illegal transitions are returned as ``Err(InvalidTransitionError)`` and
leave the machine untouched.
"""

from __future__ import annotations

import json
from types import MappingProxyType
from typing import Any, Mapping

from battle_core.core.exceptions import InvalidStateError, InvalidTransitionError
from battle_core.core.logging import get_logger
from battle_core.core.result import Err, Ok, Result
from battle_core.models.enums import FlowState


logger = get_logger(__name__)


TRANSITIONS: Mapping[FlowState, frozenset[FlowState]] = MappingProxyType({
    FlowState.MENU: frozenset({FlowState.STARTER_SELECT}),
    FlowState.STARTER_SELECT: frozenset({FlowState.OPPONENT_SELECT}),
    FlowState.OPPONENT_SELECT: frozenset({FlowState.TEAM_PREP}),
    FlowState.TEAM_PREP: frozenset({FlowState.BATTLE}),
    FlowState.BATTLE: frozenset({FlowState.REWARDS, FlowState.DEFEAT}),
    FlowState.REWARDS: frozenset({FlowState.EQUIPMENT}),
    FlowState.EQUIPMENT: frozenset({FlowState.RECRUIT}),
    FlowState.RECRUIT: frozenset({FlowState.OPPONENT_SELECT}),
    FlowState.DEFEAT: frozenset({FlowState.MENU}),
})


class GameStateMachine:
    """Tracks the current flow state and the states visited before it."""

    def __init__(
        self,
        initial: FlowState = FlowState.MENU,
        history: list[FlowState] | None = None,
    ) -> None:
        self._current = initial
        self._history: list[FlowState] = list(history or [])

    @property
    def state(self) -> FlowState:
        return self._current

    @property
    def history(self) -> tuple[FlowState, ...]:
        return tuple(self._history)

    def can_transition_to(self, target: FlowState) -> bool:
        return target in TRANSITIONS[self._current]

    def transition_to(self, target: FlowState) -> Result[FlowState, InvalidTransitionError]:
        """Move to ``target`` if the graph has an edge for it.

        Args:
            target: Requested state.

        Returns:
            Ok with the new state, or Err(InvalidTransitionError) with the
            machine unchanged.
        """
        if not self.can_transition_to(target):
            return Err(
                InvalidTransitionError(
                    f"Invalid transition: {self._current} -> {target}",
                    current_state=str(self._current),
                    target_state=str(target),
                )
            )
        logger.debug("Flow transition", from_state=str(self._current), to_state=str(target))
        self._history.append(self._current)
        self._current = target
        return Ok(target)

    def previous_state(self) -> FlowState | None:
        return self._history[-1] if self._history else None

    def reset(self) -> None:
        """Return to the menu and forget history."""
        self._current = FlowState.MENU
        self._history.clear()

    def to_dict(self) -> dict[str, Any]:
        return {
            "current": self._current.value,
            "history": [state.value for state in self._history],
        }

    def serialize(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def deserialize(cls, payload: str) -> Result[GameStateMachine, InvalidStateError]:
        """Restore a machine from ``serialize`` output.

        Args:
            payload: JSON text of the form ``{"current": ..., "history": [...]}``.

        Returns:
            Ok with the restored machine, or Err(InvalidStateError) when the
            JSON is malformed or names an unknown state.
        """
        try:
            data = json.loads(payload)
        except (TypeError, ValueError) as exc:
            return Err(InvalidStateError(f"Malformed state machine payload: {exc}"))

        if not isinstance(data, dict):
            return Err(InvalidStateError("State machine payload is not an object", state=data))

        raw_current = data.get("current")
        raw_history = data.get("history", [])
        if not isinstance(raw_history, list):
            return Err(InvalidStateError("State history is not a list", state=raw_history))

        try:
            current = FlowState(raw_current)
        except ValueError:
            return Err(InvalidStateError(f"Invalid state: {raw_current!r}", state=raw_current))

        history: list[FlowState] = []
        for raw in raw_history:
            try:
                history.append(FlowState(raw))
            except ValueError:
                return Err(InvalidStateError(f"Invalid state in history: {raw!r}", state=raw))

        return Ok(cls(current, history))


__all__ = [
    "TRANSITIONS",
    "GameStateMachine",
]
