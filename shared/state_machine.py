from enum import Enum
from typing import FrozenSet


class CheckInState(str, Enum):
    NOT_CHECKED_IN = "not_checked_in"
    CHECKED_IN = "checked_in"


class CheckInStateMachine:
    """Check-in state of a team, derived from its stored ``checked_in_time``."""

    # Roster is frozen once checked in: players can no longer be removed
    FROZEN_ACTIONS = {
        CheckInState.NOT_CHECKED_IN: frozenset(),
        CheckInState.CHECKED_IN: frozenset({"remove_player"}),
    }

    def __init__(self, initial_state: CheckInState = CheckInState.NOT_CHECKED_IN):
        self._state = initial_state

    @property
    def state(self) -> CheckInState:
        return self._state

    @property
    def frozen_actions(self) -> FrozenSet[str]:
        return self.FROZEN_ACTIONS[self._state]

    def can_perform(self, action: str) -> bool:
        return action not in self.frozen_actions

    @classmethod
    def from_checked_in_time(cls, checked_in_time) -> "CheckInStateMachine":
        if checked_in_time is None:
            return cls(initial_state=CheckInState.NOT_CHECKED_IN)
        return cls(initial_state=CheckInState.CHECKED_IN)
