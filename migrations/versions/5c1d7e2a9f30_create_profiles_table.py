"""create_profiles_table

Revision ID: 5c1d7e2a9f30
Revises:
Create Date: 2026-10-19 09:12:44.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '5c1d7e2a9f30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create profiles table."""
    op.create_table('profiles',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('profile_name', sa.String(length=255), nullable=False),
        sa.Column('profile_description', sa.Text(), nullable=False, server_default=''),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('profile_json', postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text("(now() AT TIME ZONE 'utc')")),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text("(now() AT TIME ZONE 'utc')")),
        sa.PrimaryKeyConstraint('id'),
    )
    # Listing is ordered by most recent update
    op.create_index('ix_profiles_updated_at', 'profiles', ['updated_at'], unique=False)


def downgrade() -> None:
    """Drop profiles table."""
    op.drop_index('ix_profiles_updated_at', table_name='profiles')
    op.drop_table('profiles')
