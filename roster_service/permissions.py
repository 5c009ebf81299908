"""
Authorization predicates for roster operations.

Each predicate has the shape ``(user_id, team=None, organization=None) -> bool``
so operations can combine them with ``either`` and evaluate the result once
against the aggregate they just loaded.
"""
from typing import Callable, Optional

from .models import Organization, Team

Predicate = Callable[..., bool]


def is_tournament_admin(user_id: int, organization: Organization) -> bool:
    """Whether the user administers the organization's tournaments."""
    if user_id is None or organization is None:
        return False
    return user_id in organization.admin_ids


def is_captain(team: Team, user_id: int) -> bool:
    return any(m.captain and m.member_id == user_id for m in team.members)


def admin(user_id: int, team: Optional[Team] = None, organization: Optional[Organization] = None) -> bool:
    if organization is None and team is not None:
        organization = team.tournament.organizer
    return is_tournament_admin(user_id, organization)


def captain(user_id: int, team: Optional[Team] = None, organization: Optional[Organization] = None) -> bool:
    return team is not None and is_captain(team, user_id)


def either(*predicates: Predicate) -> Predicate:
    """Combine predicates; true when any of them grants access."""
    def combined(user_id, team=None, organization=None) -> bool:
        return any(p(user_id, team=team, organization=organization) for p in predicates)
    return combined


# Per-operation policies
CAN_CHANGE_ROSTER = captain
CAN_CHECK_IN = either(admin, captain)
CAN_CHECK_OUT = admin
CAN_SEED = admin
