"""init

Revision ID: 001_initial
Revises:
Create Date: 2025-09-14 11:20:00.000000

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
    # Create payment_links table
    op.create_table(
        'payment_links',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('payment_id', sa.String(36), nullable=False, unique=True),
        sa.Column('creator_address', sa.String(42), nullable=False),
        sa.Column('recipient_address', sa.String(42), nullable=False),
        sa.Column('amount', sa.String(78), nullable=False),  # base units
        sa.Column('solver_fee', sa.String(78), nullable=False),  # base units
        sa.Column('source_chain_id', sa.Integer, nullable=False),
        sa.Column('destination_chain_id', sa.Integer, nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),  # pending, paid
        sa.Column('created_at', sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.Column('expires_at', sa.DateTime, nullable=False),
        sa.Column('paid_at', sa.DateTime),
        sa.Column('transaction_hash', sa.String(66)),
        sa.Column('metadata', sa.JSON),
    )

    # Create payment_attempts table
    op.create_table(
        'payment_attempts',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column(
            'payment_id',
            sa.String(36),
            sa.ForeignKey('payment_links.payment_id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('attempt_address', sa.String(42), nullable=False),
        sa.Column('attempt_chain_id', sa.Integer, nullable=False),
        sa.Column('attempt_timestamp', sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.Column('success', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('error_message', sa.Text),
        sa.Column('transaction_hash', sa.String(66)),
    )

    # Create transactions table
    op.create_table(
        'transactions',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('type', sa.String(10), nullable=False),  # send, swap
        sa.Column('wallet_address', sa.String(42), nullable=False),
        sa.Column('from_chain_id', sa.Integer, nullable=False),
        sa.Column('to_chain_id', sa.Integer),
        sa.Column('amount', sa.String(78)),
        sa.Column('recipient_address', sa.String(42)),
        sa.Column('token_in', sa.String(42)),
        sa.Column('token_out', sa.String(42)),
        sa.Column('success', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('error_message', sa.Text),
        sa.Column('transaction_hash', sa.String(66)),
        sa.Column('timestamp', sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.Column('metadata', sa.JSON),
    )

    # Create indexes
    op.create_index('ix_payment_links_payment_id', 'payment_links', ['payment_id'])
    op.create_index('ix_payment_links_creator_address', 'payment_links', ['creator_address'])
    op.create_index('ix_payment_links_recipient_address', 'payment_links', ['recipient_address'])
    op.create_index('ix_payment_links_status', 'payment_links', ['status'])
    op.create_index('ix_payment_links_created_at', 'payment_links', ['created_at'])
    op.create_index('ix_payment_attempts_payment_id', 'payment_attempts', ['payment_id'])
    op.create_index('ix_payment_attempts_attempt_address', 'payment_attempts', ['attempt_address'])
    op.create_index('ix_transactions_type', 'transactions', ['type'])
    op.create_index('ix_transactions_wallet_address', 'transactions', ['wallet_address'])
    op.create_index('ix_transactions_recipient_address', 'transactions', ['recipient_address'])
    op.create_index('ix_transactions_success', 'transactions', ['success'])
    op.create_index('ix_transactions_timestamp', 'transactions', ['timestamp'])


def downgrade() -> None:
    # Drop tables in reverse order to handle foreign key dependencies
    op.drop_table('transactions')
    op.drop_table('payment_attempts')
    op.drop_table('payment_links')
