"""create_club_tables

Revision ID: 4c1d9e7a2b30
Revises:
Create Date: 2026-09-28 10:12:44.318204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '4c1d9e7a2b30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create profiles, clubs, membership, join request, event and notification tables."""

    # --- profiles (mirrored from identity claims) ---
    op.create_table('profiles',
        sa.Column('id', sa.String(length=128), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('display_name', sa.String(length=100), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False,
                  server_default=sa.text('NOW()')),
        sa.Column('updated_at', sa.DateTime(), nullable=False,
                  server_default=sa.text('NOW()')),
        sa.PrimaryKeyConstraint('id'),
    )

    # --- clubs ---
    op.create_table('clubs',
        sa.Column('id', sa.String(length=24), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('location', sa.String(length=255), nullable=False,
                  server_default=''),
        sa.Column('is_private', sa.Boolean(), nullable=False,
                  server_default='false'),
        sa.Column('geolocation', postgresql.JSONB(), nullable=True),
        sa.Column('logo', postgresql.JSONB(), nullable=True),
        sa.Column('created_by', sa.String(length=128), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False,
                  server_default=sa.text('NOW()')),
        sa.Column('updated_at', sa.DateTime(), nullable=False,
                  server_default=sa.text('NOW()')),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    # --- club_members ---
    op.create_table('club_members',
        sa.Column('id', sa.String(length=24), nullable=False),
        sa.Column('club_id', sa.String(length=24), nullable=False),
        sa.Column('user_id', sa.String(length=128), nullable=False),
        sa.Column('is_admin', sa.Boolean(), nullable=False,
                  server_default='false'),
        sa.Column('joined_at', sa.DateTime(), nullable=False,
                  server_default=sa.text('NOW()')),
        sa.ForeignKeyConstraint(['club_id'], ['clubs.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('club_id', 'user_id',
                            name='uq_club_members_club_user'),
    )
    op.create_index('ix_club_members_user_id', 'club_members', ['user_id'])

    # --- join_requests ---
    op.create_table('join_requests',
        sa.Column('id', sa.String(length=24), nullable=False),
        sa.Column('club_id', sa.String(length=24), nullable=False),
        sa.Column('user_id', sa.String(length=128), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False,
                  server_default='pending'),
        sa.Column('created_at', sa.DateTime(), nullable=False,
                  server_default=sa.text('NOW()')),
        sa.ForeignKeyConstraint(['club_id'], ['clubs.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    # At most one pending request per (club, user)
    op.create_index('uq_join_requests_pending', 'join_requests',
                    ['club_id', 'user_id'], unique=True,
                    postgresql_where=sa.text("status = 'pending'"))

    # --- events ---
    op.create_table('events',
        sa.Column('id', sa.String(length=24), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('start_time', sa.DateTime(), nullable=False),
        sa.Column('end_time', sa.DateTime(), nullable=True),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('geolocation', postgresql.JSONB(), nullable=True),
        sa.Column('event_type', sa.String(length=20), nullable=False,
                  server_default='event'),
        sa.Column('is_private', sa.Boolean(), nullable=False,
                  server_default='true'),
        sa.Column('image_url', sa.String(length=500), nullable=True),
        sa.Column('image_public_id', sa.String(length=255), nullable=True),
        sa.Column('club_id', sa.String(length=24), nullable=False),
        sa.Column('created_by', sa.String(length=128), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False,
                  server_default=sa.text('NOW()')),
        sa.ForeignKeyConstraint(['club_id'], ['clubs.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_events_club_start', 'events', ['club_id', 'start_time'])

    # --- notifications (one row per recipient) ---
    op.create_table('notifications',
        sa.Column('id', sa.String(length=24), nullable=False),
        sa.Column('type', sa.String(length=30), nullable=False),
        sa.Column('recipient_id', sa.String(length=128), nullable=False),
        sa.Column('sender_id', sa.String(length=128), nullable=True),
        sa.Column('club_id', sa.String(length=24), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('data', postgresql.JSONB(), nullable=True,
                  server_default='{}'),
        sa.Column('is_read', sa.Boolean(), nullable=False,
                  server_default='false'),
        sa.Column('created_at', sa.DateTime(), nullable=False,
                  server_default=sa.text('NOW()')),
        sa.Column('expires_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['club_id'], ['clubs.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_notifications_recipient_created', 'notifications',
                    ['recipient_id', 'created_at'])
    op.create_index('ix_notifications_expires_at', 'notifications',
                    ['expires_at'],
                    postgresql_where=sa.text('expires_at IS NOT NULL'))


def downgrade() -> None:
    """Drop all club tables."""
    op.drop_index('ix_notifications_expires_at', table_name='notifications')
    op.drop_index('ix_notifications_recipient_created', table_name='notifications')
    op.drop_table('notifications')
    op.drop_index('ix_events_club_start', table_name='events')
    op.drop_table('events')
    op.drop_index('uq_join_requests_pending', table_name='join_requests')
    op.drop_table('join_requests')
    op.drop_index('ix_club_members_user_id', table_name='club_members')
    op.drop_table('club_members')
    op.drop_table('clubs')
    op.drop_table('profiles')
