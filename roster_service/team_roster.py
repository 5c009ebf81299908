import logging

from shared.events import (
    team_created_event, member_joined_event, member_added_event, member_removed_event
)
from shared.pubsub import PubSubClient, publish_safely
from shared.state_machine import CheckInStateMachine

from . import permissions, policies
from .clock import Clock
from .errors import (
    AlreadyCheckedIn, CannotRemoveCaptain, InvalidInviteCode, InvalidTeam,
    InvalidTournament, NotCaptain, NotOnTeam, TeamFull
)
from .models import Team, TeamMember
from .store import RosterStore, transaction
from .trust_graph import TrustGraph

logger = logging.getLogger(__name__)

DEFAULT_ROSTER_MAX_SIZE = 6


class TeamRoster:
    """
    Manages who plays for a team:
    - Create a team with its captain
    - Join through the team's invite code (vouching trust toward the captain)
    - Captain adds and removes players until the team checks in
    """

    def __init__(
        self,
        store: RosterStore = None,
        trust_graph: TrustGraph = None,
        publisher: PubSubClient = None,
        clock: Clock = None,
        roster_max_size: int = DEFAULT_ROSTER_MAX_SIZE,
        phase_guard: policies.PhaseGuard = policies.allow_any_phase
    ):
        self.store = store or RosterStore()
        self.trust_graph = trust_graph or TrustGraph()
        self.publisher = publisher
        self.clock = clock or Clock()
        self.roster_max_size = roster_max_size
        self.phase_guard = phase_guard

    def _ensure_room(self, team: Team):
        if len(team.members) >= self.roster_max_size:
            raise TeamFull()

    def create_team(self, tournament_id: int, name: str, captain_id: int) -> Team:
        """Create a team with the creator as its only member and captain."""
        with transaction():
            tournament = self.store.tournament_by_id(tournament_id)
            if not tournament:
                raise InvalidTournament()

            policies.enforce_phase(self.phase_guard, policies.CREATE_TEAM, tournament, self.clock.now())

            team = self.store.create_team(tournament, name)
            self.store.add_member(team, captain_id, captain=True)
            team_id = team.id

        logger.info(f"Team {team_id} created in tournament {tournament_id} by {captain_id}")
        publish_safely(self.publisher, team_created_event(tournament_id, team_id, captain_id))
        return team

    def join_via_invite_code(self, tournament_id: int, invite_code: str, user_id: int) -> TeamMember:
        """
        Join the team holding ``invite_code``.

        The membership and a trust edge from the joining user to the team's
        captain are written in one transaction: both persist or neither does.
        """
        with transaction():
            tournament = self.store.tournament_by_id(tournament_id)
            if not tournament:
                raise InvalidTournament()

            policies.enforce_phase(self.phase_guard, policies.JOIN, tournament, self.clock.now())

            team = self.store.team_by_invite_code(tournament.id, invite_code)
            if not team:
                raise InvalidInviteCode()
            self._ensure_room(team)

            captain = team.captain
            member = self.store.add_member(team, user_id)

            trusted_user_id = None
            if captain is not None:
                trusted_user_id = captain.member_id
                self.trust_graph.upsert_trust(
                    trust_giver_id=user_id,
                    trust_receiver_id=trusted_user_id
                )
            else:
                logger.warning(f"Team {team.id} has no captain; no trust edge for {user_id}")
            team_id = team.id

        logger.info(f"User {user_id} joined team {team_id} via invite code")
        publish_safely(
            self.publisher,
            member_joined_event(tournament_id, team_id, user_id, trusted_user_id)
        )
        return member

    def add_player(self, team_id: int, captain_id: int, new_player_id: int) -> TeamMember:
        """Captain puts a player on the roster directly."""
        with transaction():
            team = self.store.team_by_id(team_id)
            if not team:
                raise InvalidTeam()

            policies.enforce_phase(self.phase_guard, policies.ADD_PLAYER, team.tournament, self.clock.now())

            self._ensure_room(team)
            if not permissions.CAN_CHANGE_ROSTER(captain_id, team=team):
                logger.warning(f"User {captain_id} tried to add a player to team {team_id} without captaincy")
                raise NotCaptain()

            member = self.store.add_member(team, new_player_id)
            tournament_id = team.tournament_id

        logger.info(f"Captain {captain_id} added {new_player_id} to team {team_id}")
        publish_safely(
            self.publisher,
            member_added_event(tournament_id, team_id, new_player_id, captain_id),
            notify_user_id=new_player_id
        )
        return member

    def remove_player(self, team_id: int, captain_id: int, player_id: int):
        """Captain removes a player. Not possible once the team has checked in."""
        if captain_id == player_id:
            raise CannotRemoveCaptain()

        with transaction():
            team = self.store.team_by_id(team_id)
            if not team:
                raise InvalidTeam()

            policies.enforce_phase(self.phase_guard, policies.REMOVE_PLAYER, team.tournament, self.clock.now())

            sm = CheckInStateMachine.from_checked_in_time(team.checked_in_time)
            if not sm.can_perform('remove_player'):
                raise AlreadyCheckedIn()

            if not permissions.CAN_CHANGE_ROSTER(captain_id, team=team):
                logger.warning(f"User {captain_id} tried to remove a player from team {team_id} without captaincy")
                raise NotCaptain()

            if not self.store.delete_member(team, player_id):
                raise NotOnTeam()
            tournament_id = team.tournament_id

        logger.info(f"Captain {captain_id} removed {player_id} from team {team_id}")
        publish_safely(
            self.publisher,
            member_removed_event(tournament_id, team_id, player_id, captain_id),
            notify_user_id=player_id
        )
