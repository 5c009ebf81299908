import uuid
from datetime import datetime
from typing import List, Optional

from flask_sqlalchemy import SQLAlchemy
from flask_login import UserMixin

db = SQLAlchemy()


def generate_invite_code() -> str:
    """Opaque per-team token handed out by the captain."""
    return uuid.uuid4().hex


organization_admins = db.Table(
    'organization_admins',
    db.Column('organization_id', db.Integer, db.ForeignKey('organizations.id'), primary_key=True),
    db.Column('user_id', db.Integer, db.ForeignKey('users.id'), primary_key=True),
)


class User(UserMixin, db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    discord_name = db.Column(db.String(100), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def get_id(self):
        """Return the user ID for Flask-Login session management."""
        return str(self.id)

    def to_dict(self):
        return {
            'id': self.id,
            'discord_name': self.discord_name,
        }


class Organization(db.Model):
    __tablename__ = 'organizations'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    name_for_url = db.Column(db.String(200), unique=True, nullable=False, index=True)
    owner_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    twitter = db.Column(db.String(100), nullable=True)  # Handle only, no URL
    discord_invite = db.Column(db.String(100), nullable=False)  # Invite code only
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    owner = db.relationship('User', foreign_keys=[owner_id])
    admins = db.relationship('User', secondary=organization_admins)
    tournaments = db.relationship('Tournament', back_populates='organizer')

    @property
    def admin_ids(self) -> set:
        return {self.owner_id} | {admin.id for admin in self.admins}


class Tournament(db.Model):
    __tablename__ = 'tournaments'

    id = db.Column(db.Integer, primary_key=True)
    organizer_id = db.Column(db.Integer, db.ForeignKey('organizations.id'), nullable=False)
    name = db.Column(db.String(200), nullable=False)
    name_for_url = db.Column(db.String(200), nullable=False, index=True)
    start_time = db.Column(db.DateTime, nullable=False)
    # Ordered team ids; empty until an organizer seeds the tournament
    seeds = db.Column(db.JSON, nullable=False, default=list)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    organizer = db.relationship('Organization', back_populates='tournaments')
    teams = db.relationship(
        'Team',
        back_populates='tournament',
        cascade='all, delete-orphan',
        order_by='Team.id'
    )

    __table_args__ = (
        db.UniqueConstraint('organizer_id', 'name_for_url', name='unique_tournament_name_per_organizer'),
    )

    @property
    def team_ids(self) -> List[int]:
        return [team.id for team in self.teams]

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'name_for_url': self.name_for_url,
            'start_time': self.start_time.isoformat() if self.start_time else None,
            'seeds': list(self.seeds or []),
            'organizer_id': self.organizer_id,
        }


class Team(db.Model):
    __tablename__ = 'teams'

    id = db.Column(db.Integer, primary_key=True)
    tournament_id = db.Column(db.Integer, db.ForeignKey('tournaments.id'), nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    invite_code = db.Column(db.String(64), nullable=False, default=generate_invite_code)
    checked_in_time = db.Column(db.DateTime, nullable=True)  # NULL = not checked in
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    tournament = db.relationship('Tournament', back_populates='teams')
    members = db.relationship(
        'TeamMember',
        back_populates='team',
        cascade='all, delete-orphan',
        order_by='TeamMember.id'
    )

    __table_args__ = (
        db.UniqueConstraint('tournament_id', 'invite_code', name='unique_invite_code_per_tournament'),
    )

    @property
    def captain(self) -> Optional['TeamMember']:
        for member in self.members:
            if member.captain:
                return member
        return None

    def to_dict(self, include_invite_code: bool = False):
        data = {
            'id': self.id,
            'tournament_id': self.tournament_id,
            'name': self.name,
            'checked_in_time': self.checked_in_time.isoformat() if self.checked_in_time else None,
            'members': [m.to_dict() for m in self.members],
        }
        if include_invite_code:
            data['invite_code'] = self.invite_code
        return data


class TeamMember(db.Model):
    __tablename__ = 'team_members'

    id = db.Column(db.Integer, primary_key=True)
    team_id = db.Column(db.Integer, db.ForeignKey('teams.id'), nullable=False, index=True)
    # Denormalized so the store can enforce one team per user per tournament
    tournament_id = db.Column(db.Integer, db.ForeignKey('tournaments.id'), nullable=False)
    member_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    captain = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    team = db.relationship('Team', back_populates='members')
    member = db.relationship('User')

    __table_args__ = (
        db.UniqueConstraint('tournament_id', 'member_id', name='unique_member_per_tournament'),
    )

    def to_dict(self):
        return {
            'member_id': self.member_id,
            'captain': self.captain,
            'joined_at': self.created_at.isoformat() if self.created_at else None,
        }


class TrustRelationship(db.Model):
    __tablename__ = 'trust_relationships'

    id = db.Column(db.Integer, primary_key=True)
    trust_giver_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    trust_receiver_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    __table_args__ = (
        db.UniqueConstraint('trust_giver_id', 'trust_receiver_id', name='unique_trust_pair'),
    )
