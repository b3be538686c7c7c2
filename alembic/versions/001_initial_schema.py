"""Initial schema - privilege assignments and per-resource versions.

Revision ID: 001
Revises:
Create Date: 2026-10-17

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "resource_acl",
        sa.Column("resource_id", sa.Text(), primary_key=True),
        sa.Column("version", sa.BigInteger(), nullable=False, server_default="0"),
    )

    # One row per privilege held; a principal without rows holds nothing
    op.create_table(
        "privilege_assignment",
        sa.Column("resource_id", sa.Text(), primary_key=True),
        sa.Column("principal_id", sa.Text(), primary_key=True),
        sa.Column("privilege", sa.String(64), primary_key=True),
    )
    op.create_index(
        "ix_privilege_assignment_principal",
        "privilege_assignment",
        ["principal_id"],
    )


def downgrade() -> None:
    op.drop_index("ix_privilege_assignment_principal", table_name="privilege_assignment")
    op.drop_table("privilege_assignment")
    op.drop_table("resource_acl")
