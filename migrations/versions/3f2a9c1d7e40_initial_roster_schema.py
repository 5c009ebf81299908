"""initial roster schema

Revision ID: 3f2a9c1d7e40
Revises:
Create Date: 2024-06-01 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f2a9c1d7e40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('discord_name', sa.String(length=100), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'organizations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('name_for_url', sa.String(length=200), nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('twitter', sa.String(length=100), nullable=True),
        sa.Column('discord_invite', sa.String(length=100), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_organizations_name_for_url', 'organizations', ['name_for_url'], unique=True)

    op.create_table(
        'organization_admins',
        sa.Column('organization_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['organization_id'], ['organizations.id']),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('organization_id', 'user_id')
    )

    op.create_table(
        'tournaments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('organizer_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('name_for_url', sa.String(length=200), nullable=False),
        sa.Column('start_time', sa.DateTime(), nullable=False),
        sa.Column('seeds', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['organizer_id'], ['organizations.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('organizer_id', 'name_for_url', name='unique_tournament_name_per_organizer')
    )
    op.create_index('ix_tournaments_name_for_url', 'tournaments', ['name_for_url'], unique=False)

    op.create_table(
        'teams',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('tournament_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('invite_code', sa.String(length=64), nullable=False),
        sa.Column('checked_in_time', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['tournament_id'], ['tournaments.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('tournament_id', 'invite_code', name='unique_invite_code_per_tournament')
    )
    op.create_index('ix_teams_tournament_id', 'teams', ['tournament_id'], unique=False)

    op.create_table(
        'team_members',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('team_id', sa.Integer(), nullable=False),
        sa.Column('tournament_id', sa.Integer(), nullable=False),
        sa.Column('member_id', sa.Integer(), nullable=False),
        sa.Column('captain', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['member_id'], ['users.id']),
        sa.ForeignKeyConstraint(['team_id'], ['teams.id']),
        sa.ForeignKeyConstraint(['tournament_id'], ['tournaments.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('tournament_id', 'member_id', name='unique_member_per_tournament')
    )
    op.create_index('ix_team_members_team_id', 'team_members', ['team_id'], unique=False)

    op.create_table(
        'trust_relationships',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('trust_giver_id', sa.Integer(), nullable=False),
        sa.Column('trust_receiver_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['trust_giver_id'], ['users.id']),
        sa.ForeignKeyConstraint(['trust_receiver_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('trust_giver_id', 'trust_receiver_id', name='unique_trust_pair')
    )
    op.create_index('ix_trust_relationships_trust_giver_id', 'trust_relationships', ['trust_giver_id'], unique=False)
    op.create_index('ix_trust_relationships_trust_receiver_id', 'trust_relationships', ['trust_receiver_id'], unique=False)


def downgrade():
    op.drop_index('ix_trust_relationships_trust_receiver_id', table_name='trust_relationships')
    op.drop_index('ix_trust_relationships_trust_giver_id', table_name='trust_relationships')
    op.drop_table('trust_relationships')
    op.drop_index('ix_team_members_team_id', table_name='team_members')
    op.drop_table('team_members')
    op.drop_index('ix_teams_tournament_id', table_name='teams')
    op.drop_table('teams')
    op.drop_index('ix_tournaments_name_for_url', table_name='tournaments')
    op.drop_table('tournaments')
    op.drop_table('organization_admins')
    op.drop_index('ix_organizations_name_for_url', table_name='organizations')
    op.drop_table('organizations')
    op.drop_table('users')
