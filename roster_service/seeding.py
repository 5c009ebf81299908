import logging
from collections import Counter
from typing import Iterable, List, Sequence

from shared.events import seeds_updated_event
from shared.pubsub import PubSubClient, publish_safely

from . import permissions, policies
from .clock import Clock
from .errors import InvalidSeedSet, InvalidTournament, NotAdmin
from .models import Team
from .store import RosterStore, transaction

logger = logging.getLogger(__name__)


def sort_teams_by_seed(teams: Iterable[Team], seeds: Sequence[int]) -> List[Team]:
    """
    Order teams by their position in ``seeds``.
    Unseeded teams follow all seeded ones, keeping their incoming order.
    """
    positions = {team_id: i for i, team_id in enumerate(seeds or [])}
    unseeded = len(positions)
    return sorted(teams, key=lambda team: positions.get(team.id, unseeded))


def validate_seeds(new_seeds: Sequence[int], team_ids: Sequence[int]):
    """Raise InvalidSeedSet unless new_seeds is a permutation of team_ids."""
    if len(new_seeds) != len(team_ids):
        raise InvalidSeedSet(
            f"Expected {len(team_ids)} seeds, got {len(new_seeds)}"
        )

    duplicates = sorted(s for s, n in Counter(new_seeds).items() if n > 1)
    if duplicates:
        raise InvalidSeedSet("Duplicate teams in seeds", details={'duplicates': duplicates})

    known = set(team_ids)
    unknown = [s for s in new_seeds if s not in known]
    if unknown:
        raise InvalidSeedSet("Seeds contain teams from outside the tournament", details={'unknown': unknown})


class SeedingEngine:
    """Organizer-controlled ordering of a tournament's teams."""

    def __init__(
        self,
        store: RosterStore = None,
        publisher: PubSubClient = None,
        clock: Clock = None,
        phase_guard: policies.PhaseGuard = policies.allow_any_phase
    ):
        self.store = store or RosterStore()
        self.publisher = publisher
        self.clock = clock or Clock()
        self.phase_guard = phase_guard

    def update_seeds(self, tournament_id: int, user_id: int, new_seeds: Sequence[int]) -> List[int]:
        with transaction():
            tournament = self.store.tournament_by_id(tournament_id)
            if not tournament:
                raise InvalidTournament()

            if not permissions.CAN_SEED(user_id, organization=tournament.organizer):
                logger.warning(f"User {user_id} tried to seed tournament {tournament_id} without admin rights")
                raise NotAdmin()

            policies.enforce_phase(self.phase_guard, policies.UPDATE_SEEDS, tournament, self.clock.now())

            validate_seeds(new_seeds, tournament.team_ids)
            self.store.set_seeds(tournament, new_seeds)

        logger.info(f"Seeds of tournament {tournament_id} updated by {user_id}")
        publish_safely(self.publisher, seeds_updated_event(tournament_id, new_seeds))
        return list(new_seeds)

    def teams_in_seed_order(self, tournament_id: int) -> List[Team]:
        tournament = self.store.tournament_by_id(tournament_id)
        if not tournament:
            raise InvalidTournament()
        return sort_teams_by_seed(tournament.teams, tournament.seeds)
