"""create tickets table

Revision ID: 3a7c1e52b9d0
Revises:
Create Date: 2026-10-17 14:02:11.418305

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3a7c1e52b9d0"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "tickets",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "status",
            sa.Enum("OPEN", "ANSWERED", "CLOSED", name="ticketstatus", native_enum=False),
            nullable=False,
        ),
        sa.Column("sender", sa.String(length=64), nullable=False),
        sa.Column("server", sa.String(length=64), nullable=False),
        sa.Column(
            "reason",
            sa.Enum(
                "BUG",
                "GRIEFING",
                "CHEATING",
                "PLAYER",
                "QUESTION",
                "OTHER",
                name="ticketreason",
                native_enum=False,
            ),
            nullable=False,
        ),
        sa.Column("messages", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sqlite_autoincrement=True,
    )
    op.create_index(op.f("ix_tickets_sender"), "tickets", ["sender"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f("ix_tickets_sender"), table_name="tickets")
    op.drop_table("tickets")
