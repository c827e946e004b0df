"""Create reference and rate tables

Revision ID: 20251018_000001
Revises: None
Create Date: 2025-10-18

This migration creates the property directory, the tower directory and
the financing-rate table read by the availability service.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20251018_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create property_meta, tower_meta and rto_rates."""
    op.create_table(
        'property_meta',
        sa.Column('code', sa.String(length=10), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.PrimaryKeyConstraint('code'),
    )

    op.create_table(
        'tower_meta',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('property_code', sa.String(length=10), nullable=False),
        sa.Column('tower_code', sa.String(length=50), nullable=False),
        sa.Column('tower_name', sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['property_code'],
            ['property_meta.code'],
            name='fk_tower_meta_property_code',
        ),
        sa.UniqueConstraint('property_code', 'tower_code', name='uq_tower_meta_property_tower'),
    )
    op.create_index('ix_tower_meta_tower_code', 'tower_meta', ['tower_code'])

    op.create_table(
        'rto_rates',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('project_code', sa.String(length=10), nullable=False),
        sa.Column('unit_type', sa.String(length=20), nullable=False),
        sa.Column('area_min', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('area_max', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('monthly_rate', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('memo_ref', sa.String(length=255), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_rto_rates_project_code', 'rto_rates', ['project_code'])
    op.create_index('ix_rto_rates_lookup', 'rto_rates', ['project_code', 'unit_type', 'is_active'])


def downgrade() -> None:
    """Drop the tables in reverse dependency order."""
    op.drop_index('ix_rto_rates_lookup', table_name='rto_rates')
    op.drop_index('ix_rto_rates_project_code', table_name='rto_rates')
    op.drop_table('rto_rates')
    op.drop_index('ix_tower_meta_tower_code', table_name='tower_meta')
    op.drop_table('tower_meta')
    op.drop_table('property_meta')
