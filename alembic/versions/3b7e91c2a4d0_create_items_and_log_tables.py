"""Create items and log tables

Revision ID: 3b7e91c2a4d0
Revises:
Create Date: 2026-10-17 09:12:31.402118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3b7e91c2a4d0'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'items',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('type', sa.String(length=16), nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('category', sa.String(length=100), nullable=False),
        sa.Column('description', sa.String(length=1000), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_items_date', 'items', ['date'])
    op.create_index('ix_items_type', 'items', ['type'])
    op.create_index('ix_items_category', 'items', ['category'])

    op.create_table(
        'log',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('timestamp', sa.DateTime(), nullable=True),
        sa.Column('method', sa.String(length=10), nullable=False),
        sa.Column('path', sa.String(length=500), nullable=False),
        sa.Column('query_string', sa.String(length=2000), nullable=True),
        sa.Column('status_code', sa.Integer(), nullable=False),
        sa.Column('client_ip', sa.String(length=64), nullable=True),
        sa.Column('processing_time', sa.Float(), nullable=True),
        sa.Column('user_agent', sa.String(length=500), nullable=True),
        sa.Column('username', sa.String(length=100), nullable=True),
        sa.Column('hostname', sa.String(length=255), nullable=True),
        sa.Column('application_id', sa.String(length=100), nullable=True),
        sa.Column('error_detail', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_log_id', 'log', ['id'])
    op.create_index('ix_log_timestamp', 'log', ['timestamp'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_log_timestamp', table_name='log')
    op.drop_index('ix_log_id', table_name='log')
    op.drop_table('log')
    op.drop_index('ix_items_category', table_name='items')
    op.drop_index('ix_items_type', table_name='items')
    op.drop_index('ix_items_date', table_name='items')
    op.drop_table('items')
