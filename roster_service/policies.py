"""
Tournament-phase hooks consulted before every roster and admission mutation.

No phase rule is enforced by default: whether joins, roster changes, check-ins
or seeding stay open after a tournament has started is left to the deployment.
A guard returning False rejects the action with ``TournamentPhaseClosed``.
"""
import logging
from datetime import datetime
from typing import Callable

from .errors import TournamentPhaseClosed
from .models import Tournament

logger = logging.getLogger(__name__)

PhaseGuard = Callable[[str, Tournament, datetime], bool]

# Action names passed to guards
CREATE_TEAM = 'create_team'
JOIN = 'join'
ADD_PLAYER = 'add_player'
REMOVE_PLAYER = 'remove_player'
CHECK_IN = 'check_in'
CHECK_OUT = 'check_out'
UPDATE_SEEDS = 'update_seeds'


def allow_any_phase(action: str, tournament: Tournament, now: datetime) -> bool:
    return True


def enforce_phase(guard: PhaseGuard, action: str, tournament: Tournament, now: datetime):
    if not guard(action, tournament, now):
        logger.warning(f"Phase guard rejected {action} for tournament {tournament.id}")
        raise TournamentPhaseClosed(f"Cannot {action.replace('_', ' ')} in the current tournament phase")
