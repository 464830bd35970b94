"""Create transactions table

Revision ID: 5c2e8a1f9b30
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5c2e8a1f9b30"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create the append-only debt ledger and its query indexes."""
    op.create_table(
        "transactions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("creditor_id", sa.String(32), nullable=False),
        sa.Column("debtor_id", sa.String(32), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("guild_id", sa.String(32), nullable=False),
        sa.Column("currency", sa.String(8), nullable=False, server_default="USD"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "is_settled", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column("settled_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("creditor_id <> debtor_id", name="ck_transactions_not_self"),
        sa.CheckConstraint("amount >= 0", name="ck_transactions_amount_non_negative"),
    )
    op.create_index(
        "ix_transactions_creditor_debtor", "transactions", ["creditor_id", "debtor_id"]
    )
    op.create_index(
        "ix_transactions_creditor_settled", "transactions", ["creditor_id", "is_settled"]
    )
    op.create_index(
        "ix_transactions_debtor_settled", "transactions", ["debtor_id", "is_settled"]
    )
    op.create_index(
        "ix_transactions_guild_settled", "transactions", ["guild_id", "is_settled"]
    )
    op.create_index("ix_transactions_created_at", "transactions", ["created_at"])
    op.create_index("ix_transactions_settled", "transactions", ["is_settled"])


def downgrade() -> None:
    """Drop the ledger."""
    op.drop_index("ix_transactions_settled", table_name="transactions")
    op.drop_index("ix_transactions_created_at", table_name="transactions")
    op.drop_index("ix_transactions_guild_settled", table_name="transactions")
    op.drop_index("ix_transactions_debtor_settled", table_name="transactions")
    op.drop_index("ix_transactions_creditor_settled", table_name="transactions")
    op.drop_index("ix_transactions_creditor_debtor", table_name="transactions")
    op.drop_table("transactions")
