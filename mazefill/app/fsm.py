"""Finite State Machine for the phases of a maze run."""

from enum import Enum
from typing import Set


class TraversalState(Enum):
    """States of a single maze run."""
    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


class TraversalStateMachine:
    """
    Finite State Machine for a maze run.

    State Transitions:
    IDLE -> IN_PROGRESS (first successful move)
    IDLE -> COMPLETE (a move lands on the end straight away)
    IN_PROGRESS -> COMPLETE (agent reaches the end)
    any state -> IDLE (reset or regeneration, via reset())
    """

    def __init__(self):
        self._current_state = TraversalState.IDLE
        self._valid_transitions = self._build_transition_map()

    def _build_transition_map(self) -> dict[TraversalState, Set[TraversalState]]:
        """Build the valid state transition map."""
        return {
            TraversalState.IDLE: {TraversalState.IN_PROGRESS, TraversalState.COMPLETE},
            TraversalState.IN_PROGRESS: {TraversalState.COMPLETE},
            TraversalState.COMPLETE: set(),
        }

    @property
    def current_state(self) -> TraversalState:
        """Get the current state."""
        return self._current_state

    def can_transition_to(self, target_state: TraversalState) -> bool:
        """Check if transition to target state is valid."""
        return target_state in self._valid_transitions.get(self._current_state, set())

    def _transition_to(self, target_state: TraversalState) -> bool:
        if not self.can_transition_to(target_state):
            return False
        self._current_state = target_state
        return True

    def begin(self) -> bool:
        return self._transition_to(TraversalState.IN_PROGRESS)

    def complete(self) -> bool:
        return self._transition_to(TraversalState.COMPLETE)

    def reset(self):
        """Put the machine back to IDLE."""
        self._current_state = TraversalState.IDLE

    def is_idle(self) -> bool:
        return self._current_state == TraversalState.IDLE

    def is_in_progress(self) -> bool:
        return self._current_state == TraversalState.IN_PROGRESS

    def is_complete(self) -> bool:
        return self._current_state == TraversalState.COMPLETE

    def accepts_moves(self) -> bool:
        """Moves are only applied before the run is complete."""
        return self._current_state != TraversalState.COMPLETE

    def get_state_description(self) -> str:
        """Get a human-readable description of the current state."""
        descriptions = {
            TraversalState.IDLE: "Ready to start",
            TraversalState.IN_PROGRESS: "Exploring",
            TraversalState.COMPLETE: "Maze complete",
        }
        return descriptions[self._current_state]
