"""Initial schema: transactions table.

Revision ID: 001_initial
Revises: 
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create transactions table (replaced wholesale by each seed)
    op.create_table(
        'transactions',
        sa.Column('pk', sa.Integer(), nullable=False),
        sa.Column('source_id', sa.String(64), nullable=True),
        sa.Column('title', sa.String(500), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Float(), nullable=True),
        sa.Column('date_of_sale', sa.DateTime(), nullable=True),
        sa.Column('category', sa.String(255), nullable=True),
        sa.Column('sold', sa.Boolean(), nullable=True),
        sa.Column('image', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('pk'),
    )

    # Create indexes for the chart queries
    op.create_index('ix_transactions_price', 'transactions', ['price'])
    op.create_index('ix_transactions_category', 'transactions', ['category'])


def downgrade() -> None:
    op.drop_index('ix_transactions_category', table_name='transactions')
    op.drop_index('ix_transactions_price', table_name='transactions')
    op.drop_table('transactions')
