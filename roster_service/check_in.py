"""
Admission control: moving a team between "not checked in" and "checked in".

Captains check their own team in until the window closes; organizer admins
may check any team in at any time and are the only ones who can check a team
out again. The server closes the window ``grace_minutes`` later than the
nominal deadline shown to players, so a player acting on the UI's last
moment is never rejected.
"""
import logging
from datetime import datetime, timedelta

from shared.events import check_in_changed_event
from shared.pubsub import PubSubClient, publish_safely

from . import permissions, policies
from .clock import Clock
from .errors import CheckInClosed, InvalidTeam, NotAdmin, NotCaptain
from .models import Team, Tournament
from .store import RosterStore, transaction

logger = logging.getLogger(__name__)

DEFAULT_CLOSING_MINUTES_FROM_START = 10
DEFAULT_GRACE_MINUTES = 2


class CheckInEngine:

    def __init__(
        self,
        store: RosterStore = None,
        publisher: PubSubClient = None,
        clock: Clock = None,
        closing_minutes_from_start: int = DEFAULT_CLOSING_MINUTES_FROM_START,
        grace_minutes: int = DEFAULT_GRACE_MINUTES,
        phase_guard: policies.PhaseGuard = policies.allow_any_phase
    ):
        self.store = store or RosterStore()
        self.publisher = publisher
        self.clock = clock or Clock()
        self.closing_minutes_from_start = closing_minutes_from_start
        self.grace_minutes = grace_minutes
        self.phase_guard = phase_guard

    def check_in_closes_at(self, tournament: Tournament) -> datetime:
        """Last instant at which a captain's check-in is accepted."""
        cutoff = self.closing_minutes_from_start - self.grace_minutes
        return tournament.start_time - timedelta(minutes=cutoff)

    def is_window_open(self, tournament: Tournament, now: datetime = None) -> bool:
        now = now or self.clock.now()
        return not self.check_in_closes_at(tournament) < now

    def can_check_in(self, team: Team, user_id: int) -> bool:
        """Whether ``user_id`` could check ``team`` in right now."""
        organization = team.tournament.organizer
        if permissions.is_tournament_admin(user_id, organization):
            return True
        return permissions.is_captain(team, user_id) and self.is_window_open(team.tournament)

    def check_in(self, team_id: int, user_id: int) -> datetime:
        with transaction():
            team = self.store.team_by_id(team_id)
            if not team:
                raise InvalidTeam()

            tournament = team.tournament
            organization = tournament.organizer
            if not permissions.CAN_CHECK_IN(user_id, team=team, organization=organization):
                logger.warning(f"User {user_id} tried to check in team {team_id} without captaincy")
                raise NotCaptain()

            now = self.clock.now()
            is_admin = permissions.is_tournament_admin(user_id, organization)
            if not is_admin and not self.is_window_open(tournament, now):
                raise CheckInClosed()

            policies.enforce_phase(self.phase_guard, policies.CHECK_IN, tournament, now)

            self.store.set_check_in(team, now)
            tournament_id = tournament.id

        logger.info(f"Team {team_id} checked in by {user_id}{' (admin)' if is_admin else ''}")
        publish_safely(self.publisher, check_in_changed_event(tournament_id, team_id, True, user_id))
        return now

    def check_out(self, team_id: int, user_id: int):
        with transaction():
            team = self.store.team_by_id(team_id)
            if not team:
                raise InvalidTeam()

            tournament = team.tournament
            if not permissions.CAN_CHECK_OUT(user_id, organization=tournament.organizer):
                logger.warning(f"User {user_id} tried to check out team {team_id} without admin rights")
                raise NotAdmin()

            policies.enforce_phase(self.phase_guard, policies.CHECK_OUT, tournament, self.clock.now())

            self.store.set_check_in(team, None)
            tournament_id = tournament.id

        logger.info(f"Team {team_id} checked out by admin {user_id}")
        publish_safely(self.publisher, check_in_changed_event(tournament_id, team_id, False, user_id))
