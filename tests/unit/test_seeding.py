"""
Unit tests for seeding: seed validation, ordering and SeedingEngine.
"""
import pytest

from roster_service.errors import InvalidSeedSet, InvalidTournament, NotAdmin
from roster_service.models import db, Tournament
from roster_service.seeding import SeedingEngine, sort_teams_by_seed, validate_seeds
from shared.events import EventType


class FakeTeam:
    def __init__(self, id):
        self.id = id


class TestSortTeamsBySeed:

    def test_seeded_order(self):
        teams = [FakeTeam(1), FakeTeam(2), FakeTeam(3)]
        assert [t.id for t in sort_teams_by_seed(teams, [3, 1, 2])] == [3, 1, 2]

    def test_unseeded_teams_last_in_incoming_order(self):
        teams = [FakeTeam(1), FakeTeam(2), FakeTeam(3), FakeTeam(4)]
        assert [t.id for t in sort_teams_by_seed(teams, [4, 2])] == [4, 2, 1, 3]

    def test_no_seeds(self):
        teams = [FakeTeam(5), FakeTeam(2)]
        assert [t.id for t in sort_teams_by_seed(teams, [])] == [5, 2]
        assert [t.id for t in sort_teams_by_seed(teams, None)] == [5, 2]


class TestValidateSeeds:

    def test_permutation_accepted(self):
        validate_seeds([3, 1, 2], [1, 2, 3])

    def test_empty_for_empty_tournament(self):
        validate_seeds([], [])

    def test_missing_team(self):
        with pytest.raises(InvalidSeedSet):
            validate_seeds([1, 2], [1, 2, 3])

    def test_extra_team(self):
        with pytest.raises(InvalidSeedSet):
            validate_seeds([1, 2, 3, 4], [1, 2, 3])

    def test_duplicate(self):
        with pytest.raises(InvalidSeedSet) as exc_info:
            validate_seeds([1, 1, 2], [1, 2, 3])
        assert exc_info.value.details == {'duplicates': [1]}

    def test_unknown_team(self):
        with pytest.raises(InvalidSeedSet) as exc_info:
            validate_seeds([1, 2, 99], [1, 2, 3])
        assert exc_info.value.details == {'unknown': [99]}


class TestSeedingEngine:

    @pytest.fixture
    def engine(self, clock, mock_publisher):
        return SeedingEngine(publisher=mock_publisher, clock=clock)

    @pytest.fixture
    def three_teams(self, sample_tournament, make_team):
        return [make_team(sample_tournament, name=name) for name in ('A', 'B', 'C')]

    def test_admin_sets_seeds(self, engine, sample_tournament, three_teams, owner):
        a, b, c = [t.id for t in three_teams]

        result = engine.update_seeds(sample_tournament.id, owner.id, [c, a, b])

        assert result == [c, a, b]
        assert db.session.get(Tournament, sample_tournament.id).seeds == [c, a, b]

    def test_teams_in_seed_order(self, engine, sample_tournament, three_teams, org_admin):
        a, b, c = [t.id for t in three_teams]
        engine.update_seeds(sample_tournament.id, org_admin.id, [b, c, a])

        ordered = engine.teams_in_seed_order(sample_tournament.id)

        assert [t.id for t in ordered] == [b, c, a]

    def test_captain_is_not_admin(self, engine, sample_tournament, three_teams):
        captain_id = three_teams[0].captain.member_id
        ids = [t.id for t in three_teams]

        with pytest.raises(NotAdmin):
            engine.update_seeds(sample_tournament.id, captain_id, ids)

        assert db.session.get(Tournament, sample_tournament.id).seeds == []

    def test_invalid_tournament(self, engine, owner):
        with pytest.raises(InvalidTournament):
            engine.update_seeds(9999, owner.id, [])
        with pytest.raises(InvalidTournament):
            engine.teams_in_seed_order(9999)

    def test_partial_seeds_rejected(self, engine, sample_tournament, three_teams, owner):
        """Previous seeds survive a rejected update."""
        ids = [t.id for t in three_teams]
        engine.update_seeds(sample_tournament.id, owner.id, ids)

        with pytest.raises(InvalidSeedSet):
            engine.update_seeds(sample_tournament.id, owner.id, ids[:2])

        assert db.session.get(Tournament, sample_tournament.id).seeds == ids

    def test_team_from_other_tournament_rejected(self, engine, sample_tournament, organization, three_teams,
                                                 make_team, owner):
        other = Tournament(
            organizer_id=organization.id,
            name='Other',
            name_for_url='other',
            start_time=sample_tournament.start_time,
            seeds=[]
        )
        db.session.add(other)
        db.session.commit()
        foreign = make_team(other, name='Foreign')
        ids = [t.id for t in three_teams]

        with pytest.raises(InvalidSeedSet):
            engine.update_seeds(sample_tournament.id, owner.id, ids[:2] + [foreign.id])

    def test_publishes_event(self, engine, sample_tournament, three_teams, owner, mock_publisher):
        ids = [t.id for t in three_teams]
        engine.update_seeds(sample_tournament.id, owner.id, ids)

        event = mock_publisher.publish_tournament_event.call_args.args[1]
        assert event.type == EventType.SEEDS_UPDATED
        assert event.data['seeds'] == ids
