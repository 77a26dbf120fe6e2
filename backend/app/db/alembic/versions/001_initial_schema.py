"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-19

Creates:
- user (accounts, plaintext credential)
- pdf (document catalog)
- activity (append-only view/download log)
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
    """Create all tables."""
    # user table
    op.create_table(
        "user",
        sa.Column("username", sa.Text(), primary_key=True),
        sa.Column("password", sa.Text(), nullable=False),
        sa.Column("role", sa.String(16), nullable=False, server_default="student"),
        sa.Column("branch", sa.Text(), nullable=False),
        sa.Column("year", sa.String(8), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("idx_user_branch", "user", ["branch"])

    # pdf table
    op.create_table(
        "pdf",
        sa.Column("pdf_id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=True),
        sa.Column("subject", sa.Text(), nullable=False),
        sa.Column("regulation", sa.String(8), nullable=True),
        sa.Column("year", sa.String(8), nullable=True),
        sa.Column("pdf_url", sa.Text(), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column(
            "uploaded_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("idx_pdf_taxonomy", "pdf", ["regulation", "year", "subject"])
    op.create_index("idx_pdf_uploaded", "pdf", ["uploaded_at"])

    # activity table (no foreign key on pdf_id; rows outlive deleted documents)
    op.create_table(
        "activity",
        sa.Column("activity_id", sa.Uuid(), primary_key=True),
        sa.Column("username", sa.Text(), nullable=False),
        sa.Column("pdf_id", sa.Uuid(), nullable=False),
        sa.Column("action", sa.String(16), nullable=False),
        sa.Column("branch", sa.Text(), nullable=False),
        sa.Column("year", sa.String(8), nullable=False),
        sa.Column(
            "timestamp",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["username"], ["user.username"]),
    )
    op.create_index("idx_activity_branch_ts", "activity", ["branch", "timestamp"])
    op.create_index("idx_activity_user_ts", "activity", ["username", "timestamp"])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index("idx_activity_user_ts", table_name="activity")
    op.drop_index("idx_activity_branch_ts", table_name="activity")
    op.drop_table("activity")
    op.drop_index("idx_pdf_uploaded", table_name="pdf")
    op.drop_index("idx_pdf_taxonomy", table_name="pdf")
    op.drop_table("pdf")
    op.drop_index("idx_user_branch", table_name="user")
    op.drop_table("user")
