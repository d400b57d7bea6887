"""Create users and thoughts tables."""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

revision: str = "20261019_0001"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None

TIMESTAMP_DEFAULT = sa.text("CURRENT_TIMESTAMP")
EMPTY_JSON_ARRAY = sa.text("'[]'")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("username", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("thought_ids", sa.JSON(), server_default=EMPTY_JSON_ARRAY, nullable=False),
        sa.Column("friend_ids", sa.JSON(), server_default=EMPTY_JSON_ARRAY, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=TIMESTAMP_DEFAULT,
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "thoughts",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("thought_text", sa.String(length=280), nullable=False),
        sa.Column("username", sa.String(length=255), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=TIMESTAMP_DEFAULT,
            nullable=False,
        ),
        sa.Column("reactions", sa.JSON(), server_default=EMPTY_JSON_ARRAY, nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_thoughts_username", "thoughts", ["username"], unique=False)
    op.create_index("ix_thoughts_created_at", "thoughts", ["created_at"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_thoughts_created_at", table_name="thoughts")
    op.drop_index("ix_thoughts_username", table_name="thoughts")
    op.drop_table("thoughts")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
