"""
Unit tests for RosterStore: team row locks and membership conflicts.
"""
import pytest
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError

from roster_service.errors import AlreadyOnTeam
from roster_service.models import db
from roster_service.store import RosterStore, is_membership_conflict


def compiled(stmt, dialect) -> str:
    return str(stmt.compile(dialect=dialect))


class TestTeamRowLocks:
    """Team loads must lock the row so concurrent joins see the current size."""

    def test_locked_select_is_for_update_on_postgresql(self):
        stmt = RosterStore().team_select(id=1)
        assert 'FOR UPDATE' in compiled(stmt, postgresql.dialect())

    def test_unlocked_select(self):
        stmt = RosterStore().team_select(False, id=1)
        assert 'FOR UPDATE' not in compiled(stmt, postgresql.dialect())

    def test_sqlite_renders_no_row_lock(self):
        """SQLite serializes writers instead of locking rows."""
        stmt = RosterStore().team_select(tournament_id=1, invite_code='abc')
        assert 'FOR UPDATE' not in compiled(stmt, sqlite.dialect())

    def test_team_loads_take_the_lock(self, mocker, db_session):
        store = RosterStore()
        spy = mocker.spy(store, 'team_select')

        store.team_by_id(1)
        store.team_by_invite_code(1, 'abc')

        assert [c.args[0] for c in spy.call_args_list] == [True, True]
        assert spy.call_args_list[1].kwargs == {'tournament_id': 1, 'invite_code': 'abc'}


class TestMembershipConflict:

    def test_postgresql_constraint_name(self):
        error = IntegrityError(
            'INSERT', {},
            Exception('duplicate key value violates unique constraint "unique_member_per_tournament"')
        )
        assert is_membership_conflict(error) is True

    def test_sqlite_columns(self):
        error = IntegrityError(
            'INSERT', {},
            Exception('UNIQUE constraint failed: team_members.tournament_id, team_members.member_id')
        )
        assert is_membership_conflict(error) is True

    def test_foreign_key_violation(self):
        error = IntegrityError('INSERT', {}, Exception('FOREIGN KEY constraint failed'))
        assert is_membership_conflict(error) is False

    def test_existing_membership_checked_before_insert(self, sample_tournament, make_team):
        store = RosterStore()
        first = make_team(sample_tournament, name='First')
        second = make_team(sample_tournament, name='Second')
        captain_id = first.captain.member_id

        with pytest.raises(AlreadyOnTeam):
            store.add_member(second, captain_id)
        db.session.rollback()
