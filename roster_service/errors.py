"""
Request-rejection outcomes raised by the roster, check-in and seeding engines.

Each error carries the HTTP-like status class it maps to:
- 400: the caller sent ids or data that cannot be acted on
- 401: the acting user lacks the authority for the operation
- 404: lookup found nothing to show
- 503: the store timed out or dropped the connection (retryable)
"""
from typing import Any, Dict, Optional


class RosterError(Exception):
    status_code = 400
    code = 'BAD_REQUEST'
    default_message = 'Request rejected'

    def __init__(self, message: str = None, details: Optional[Dict[str, Any]] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    @property
    def error(self) -> str:
        return type(self).__name__

    @property
    def retryable(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'error': self.error,
            'message': self.message,
            'code': self.code,
        }
        if self.details:
            result['details'] = self.details
        return result


# ==================== 400 ====================

class InvalidRequest(RosterError):
    code = 'INVALID_REQUEST'
    default_message = 'Malformed request'


class InvalidTournament(RosterError):
    code = 'INVALID_TOURNAMENT'
    default_message = 'Invalid tournament id'


class InvalidTeam(RosterError):
    code = 'INVALID_TEAM'
    default_message = 'Invalid team id'


class InvalidInviteCode(RosterError):
    code = 'INVALID_INVITE_CODE'
    default_message = 'Invalid invite code'


class TeamFull(RosterError):
    code = 'TEAM_FULL'
    default_message = 'Team is already full'


class CannotRemoveCaptain(RosterError):
    code = 'CANNOT_REMOVE_CAPTAIN'
    default_message = "Can't remove captain"


class AlreadyCheckedIn(RosterError):
    code = 'ALREADY_CHECKED_IN'
    default_message = "Can't remove players after checking in"


class CheckInClosed(RosterError):
    code = 'CHECK_IN_CLOSED'
    default_message = 'Check in time has passed'


class InvalidSeedSet(RosterError):
    code = 'INVALID_SEED_SET'
    default_message = "Seeds must list every team of the tournament exactly once"


class AlreadyOnTeam(RosterError):
    code = 'ALREADY_ON_TEAM'
    default_message = 'User already plays for a team in this tournament'


class NotOnTeam(RosterError):
    code = 'NOT_ON_TEAM'
    default_message = 'Player is not a member of the team'


class TournamentPhaseClosed(RosterError):
    code = 'TOURNAMENT_PHASE_CLOSED'
    default_message = 'Action not allowed in the current tournament phase'


# ==================== 401 ====================

class NotAuthenticated(RosterError):
    status_code = 401
    code = 'AUTH_REQUIRED'
    default_message = 'Log in required'


class NotCaptain(RosterError):
    status_code = 401
    code = 'NOT_CAPTAIN'
    default_message = 'Not captain of the team'


class NotAdmin(RosterError):
    status_code = 401
    code = 'NOT_ADMIN'
    default_message = 'Not tournament admin'


# ==================== 404 ====================

class NotFound(RosterError):
    status_code = 404
    code = 'NOT_FOUND'
    default_message = 'Not found'


# ==================== 503 ====================

class TransientError(RosterError):
    status_code = 503
    code = 'SERVICE_UNAVAILABLE'
    default_message = 'Store temporarily unavailable, retry the request'

    @property
    def retryable(self) -> bool:
        return True
