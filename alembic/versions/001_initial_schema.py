"""Initial schema - actor, permission, role, user_permission.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "actor",
        sa.Column("id", sa.String(255), primary_key=True),
        sa.Column("role_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("display_name", sa.String(255), nullable=True),
    )

    op.create_table(
        "permission",
        sa.Column("id", sa.String(255), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("module", sa.String(50), nullable=False),
        sa.Column("actions", postgresql.ARRAY(sa.String(50)), nullable=False),
        sa.Column("resource", sa.String(255), nullable=True),
        sa.Column("conditions", postgresql.JSONB(), nullable=True),
    )
    op.create_index("ix_permission_module", "permission", ["module"])

    # Role and override ids are not foreign keys: deleting a permission or
    # role leaves dangling ids that evaluation skips.
    op.create_table(
        "role",
        sa.Column("id", sa.String(255), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column(
            "permissions",
            postgresql.ARRAY(sa.String(255)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column("level", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_role_name", "role", ["name"], unique=True)

    op.create_table(
        "user_permission",
        sa.Column("user_id", sa.String(255), primary_key=True),
        sa.Column("role_id", sa.String(255), nullable=True),
        sa.Column(
            "custom_permissions",
            postgresql.ARRAY(sa.String(255)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column(
            "restricted_permissions",
            postgresql.ARRAY(sa.String(255)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column(
            "resource_permissions",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_by", sa.String(255), nullable=True),
    )


def downgrade() -> None:
    op.drop_table("user_permission")
    op.drop_index("ix_role_name", table_name="role")
    op.drop_table("role")
    op.drop_index("ix_permission_module", table_name="permission")
    op.drop_table("permission")
    op.drop_table("actor")
