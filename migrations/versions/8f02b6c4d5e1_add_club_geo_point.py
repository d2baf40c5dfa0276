"""add_club_geo_point

Revision ID: 8f02b6c4d5e1
Revises: 4c1d9e7a2b30
Create Date: 2026-10-06 16:40:09.527731

Adds the indexed point derived from ``clubs.geolocation``. Existing rows are
filled by ``python -m infrastructure.database.geo_backfill`` after upgrade.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8f02b6c4d5e1'
down_revision: Union[str, Sequence[str], None] = '4c1d9e7a2b30'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column('clubs', sa.Column('geo_lat', sa.Float(), nullable=True))
    op.add_column('clubs', sa.Column('geo_lng', sa.Float(), nullable=True))
    op.create_index('ix_clubs_geo_point', 'clubs', ['geo_lat', 'geo_lng'])


def downgrade() -> None:
    op.drop_index('ix_clubs_geo_point', table_name='clubs')
    op.drop_column('clubs', 'geo_lng')
    op.drop_column('clubs', 'geo_lat')
