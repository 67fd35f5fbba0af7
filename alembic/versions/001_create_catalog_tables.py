"""Create categories and products tables.

Revision ID: 001
Revises:
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create categories and products tables."""
    # Categories table; adjacency stored flat as JSON arrays of IDs.
    # Name columns use the "C" collation so ORDER BY compares code points.
    op.create_table(
        'categories',
        sa.Column('id', sa.String(24), primary_key=True),
        sa.Column('name', sa.String(200, collation='C'), nullable=False, index=True),
        sa.Column('slug', sa.String(200), nullable=False),
        sa.Column('ancestors', sa.JSON(), nullable=False, server_default='[]'),
        sa.Column('children', sa.JSON(), nullable=False, server_default='[]'),
        sa.Column('last_updated', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    )

    # Products table
    op.create_table(
        'products',
        sa.Column('id', sa.String(24), primary_key=True),
        sa.Column('name', sa.String(500, collation='C'), nullable=False, index=True),
        sa.Column('slug', sa.String(500), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('value', sa.Numeric(), nullable=False),
        sa.Column('category_id', sa.String(24), nullable=False, index=True),
        sa.Column('last_updated', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    )


def downgrade() -> None:
    """Drop products and categories tables."""
    op.drop_table('products')
    op.drop_table('categories')
