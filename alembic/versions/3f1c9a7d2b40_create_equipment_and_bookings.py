"""create equipment and bookings tables

Revision ID: 3f1c9a7d2b40
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a7d2b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


bookingstatus_enum = sa.Enum(
    'PENDING_PAYMENT', 'PENDING_PICKUP', 'COMPLETED', 'CANCELLED', name='bookingstatus'
)


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'equipment',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False, unique=True),
        sa.Column('price_per_day', sa.Float(), nullable=False),
        sa.Column('stock', sa.Integer(), nullable=False),
    )
    op.create_index('ix_equipment_id', 'equipment', ['id'])

    # create_table creates the ENUM type where the dialect needs one
    op.create_table(
        'bookings',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('booking_code', sa.String(length=64), nullable=False, unique=True),
        sa.Column('user_name', sa.String(length=255), nullable=False),
        sa.Column('items', sa.Text(), nullable=False),
        sa.Column('rent_date', sa.Date(), nullable=False),
        sa.Column('return_date', sa.Date(), nullable=False),
        sa.Column('payment_method', sa.String(length=64), nullable=False),
        sa.Column('total_price', sa.Float(), nullable=False),
        sa.Column('status', bookingstatus_enum, nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(), nullable=True),
    )
    op.create_index('ix_bookings_id', 'bookings', ['id'])
    op.create_index('ix_bookings_status', 'bookings', ['status'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_bookings_status', table_name='bookings')
    op.drop_index('ix_bookings_id', table_name='bookings')
    op.drop_table('bookings')
    op.drop_index('ix_equipment_id', table_name='equipment')
    op.drop_table('equipment')

    bookingstatus_enum.drop(op.get_bind(), checkfirst=True)
