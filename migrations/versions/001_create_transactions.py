"""Create transactions table.

Revision ID: 001
Revises:
Create Date: 2026-10-16

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "transactions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("wallet_id", sa.Integer(), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=True),
        sa.Column("amount", sa.BigInteger(), nullable=False),
        sa.Column("currency", sa.String(3), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("external_id", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    )

    # Duplicate detection reads by wallet and date window
    op.create_index(
        "idx_transactions_wallet_date_amount", "transactions", ["wallet_id", "date", "amount"]
    )
    op.create_index(
        "idx_transactions_wallet_external_id", "transactions", ["wallet_id", "external_id"]
    )


def downgrade() -> None:
    op.drop_index("idx_transactions_wallet_external_id", table_name="transactions")
    op.drop_index("idx_transactions_wallet_date_amount", table_name="transactions")
    op.drop_table("transactions")
