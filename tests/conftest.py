"""
Pytest configuration and fixtures for roster service tests.
"""
import os
import sys
from datetime import datetime, timedelta
import pytest

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

# Set testing environment before importing app
os.environ['FLASK_ENV'] = 'testing'
os.environ['SQLALCHEMY_DATABASE_URI'] = 'sqlite:///:memory:'

from roster_service.app import create_app
from roster_service.clock import FixedClock
from roster_service.models import db, Organization, Team, TeamMember, Tournament, User

NOW = datetime(2024, 6, 1, 12, 0, 0)


@pytest.fixture(scope='session')
def session_clock():
    return FixedClock(NOW)


@pytest.fixture(scope='session')
def app(session_clock):
    """Create application for testing."""
    app = create_app('testing', clock=session_clock)

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def clock(session_clock):
    """Clock shared with the app, reset to NOW for every test."""
    session_clock.set(NOW)
    return session_clock


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app, clock):
    """Create database session for testing."""
    with app.app_context():
        # Clear all tables before each test
        db.session.remove()

        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()

        yield db.session

        db.session.rollback()


@pytest.fixture
def make_user(db_session):
    """Factory creating committed users."""
    counter = {'n': 0}

    def _make(name: str = None) -> User:
        counter['n'] += 1
        user = User(discord_name=name or f"Player#{counter['n']:04d}")
        db.session.add(user)
        db.session.commit()
        return user

    return _make


@pytest.fixture
def owner(make_user):
    return make_user('Owner#0001')


@pytest.fixture
def org_admin(make_user):
    return make_user('Admin#0001')


@pytest.fixture
def organization(db_session, owner, org_admin):
    """Organization owned by `owner` with `org_admin` as an extra admin."""
    org = Organization(
        name='Inkling Performance Labs',
        name_for_url='inkling-performance-labs',
        owner_id=owner.id,
        twitter='IPLSplatoon',
        discord_invite='xyz123'
    )
    org.admins.append(org_admin)
    db.session.add(org)
    db.session.commit()
    return org


@pytest.fixture
def sample_tournament(db_session, organization):
    """Tournament starting one day after NOW."""
    tournament = Tournament(
        organizer_id=organization.id,
        name='In The Zone 22',
        name_for_url='in-the-zone-22',
        start_time=NOW + timedelta(days=1),
        seeds=[]
    )
    db.session.add(tournament)
    db.session.commit()
    return tournament


@pytest.fixture
def make_team(db_session, make_user):
    """Factory creating a team with a captain and `extra_members` other players."""

    def _make(tournament: Tournament, name: str = 'Team Olive', extra_members: int = 0,
              captain: User = None, invite_code: str = None) -> Team:
        captain = captain or make_user()
        team = Team(tournament_id=tournament.id, name=name)
        if invite_code:
            team.invite_code = invite_code
        db.session.add(team)
        db.session.flush()

        db.session.add(TeamMember(
            team_id=team.id,
            tournament_id=tournament.id,
            member_id=captain.id,
            captain=True
        ))
        for _ in range(extra_members):
            player = make_user()
            db.session.add(TeamMember(
                team_id=team.id,
                tournament_id=tournament.id,
                member_id=player.id,
                captain=False
            ))
        db.session.commit()
        return team

    return _make


@pytest.fixture
def mock_publisher(mocker):
    """Stand-in for the Redis pub/sub client."""
    return mocker.MagicMock()
