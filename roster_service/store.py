import logging
from contextlib import contextmanager
from datetime import datetime
from typing import List, Optional

from sqlalchemy import Select
from sqlalchemy.exc import DisconnectionError, IntegrityError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from .errors import AlreadyOnTeam, InvalidRequest, TransientError
from .models import db, Organization, Team, TeamMember, Tournament

logger = logging.getLogger(__name__)

TRANSIENT_ERRORS = (OperationalError, PoolTimeoutError, DisconnectionError)

MEMBERSHIP_CONSTRAINT = 'unique_member_per_tournament'


def is_membership_conflict(error: IntegrityError) -> bool:
    """Whether ``error`` is the one-team-per-tournament unique violation."""
    # PostgreSQL names the constraint; SQLite lists the constrained columns
    message = str(error.orig)
    return (
        MEMBERSHIP_CONSTRAINT in message
        or 'team_members.tournament_id, team_members.member_id' in message
    )


@contextmanager
def transaction():
    """
    Run a unit of work in the request's session.
    Commits on success, rolls back on any exception. Store timeouts and
    dropped connections surface as TransientError so callers may retry.
    """
    try:
        yield db.session
        db.session.commit()
    except TRANSIENT_ERRORS as e:
        db.session.rollback()
        logger.error(f"Store unavailable, rolled back: {e}")
        raise TransientError() from e
    except Exception:
        db.session.rollback()
        raise


class RosterStore:
    """
    Reads and writes for tournaments, teams and members.
    Every method expects to run inside ``transaction()``.
    """

    def tournament_by_id(self, tournament_id: int) -> Optional[Tournament]:
        return db.session.get(Tournament, tournament_id)

    def tournaments_by_name_for_url(self, name_for_url: str) -> List[Tournament]:
        return Tournament.query.filter_by(name_for_url=name_for_url.lower()).all()

    def organization_by_name_for_url(self, name_for_url: str) -> Optional[Organization]:
        return Organization.query.filter_by(name_for_url=name_for_url.lower()).first()

    def team_select(self, lock: bool = True, **filters) -> Select:
        """SELECT for a team; with ``lock`` the row stays locked until the transaction ends."""
        stmt = db.select(Team).filter_by(**filters)
        if lock:
            stmt = stmt.with_for_update()
        return stmt

    def team_by_id(self, team_id: int, lock: bool = True) -> Optional[Team]:
        return db.session.scalars(self.team_select(lock, id=team_id)).first()

    def team_by_invite_code(self, tournament_id: int, invite_code: str, lock: bool = True) -> Optional[Team]:
        stmt = self.team_select(lock, tournament_id=tournament_id, invite_code=invite_code)
        return db.session.scalars(stmt).first()

    def create_team(self, tournament: Tournament, name: str) -> Team:
        team = Team(tournament=tournament, name=name)
        db.session.add(team)
        db.session.flush()
        return team

    def membership(self, tournament_id: int, user_id: int) -> Optional[TeamMember]:
        return TeamMember.query.filter_by(tournament_id=tournament_id, member_id=user_id).first()

    def add_member(self, team: Team, user_id: int, captain: bool = False) -> TeamMember:
        if self.membership(team.tournament_id, user_id) is not None:
            raise AlreadyOnTeam()

        member = TeamMember(
            team=team,
            tournament_id=team.tournament_id,
            member_id=user_id,
            captain=captain
        )
        db.session.add(member)
        try:
            db.session.flush()
        except IntegrityError as e:
            if is_membership_conflict(e):
                # Lost a race against a concurrent join of the same user
                raise AlreadyOnTeam() from e
            logger.warning(f"Rejected member {user_id} for team {team.id}: {e.orig}")
            raise InvalidRequest("Unknown user") from e
        return member

    def delete_member(self, team: Team, member_id: int) -> bool:
        for member in team.members:
            if member.member_id == member_id:
                # delete-orphan cascade removes the row on flush
                team.members.remove(member)
                return True
        return False

    def set_check_in(self, team: Team, checked_in_time: Optional[datetime]):
        team.checked_in_time = checked_in_time

    def set_seeds(self, tournament: Tournament, seeds: List[int]):
        tournament.seeds = list(seeds)
