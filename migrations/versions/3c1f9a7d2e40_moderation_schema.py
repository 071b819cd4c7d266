"""moderation_schema

Create the schema for script voting and flagging:
- Users (read-only here, roles for moderator checks)
- Scripts (identity plus rating, vote_count and flag_weight counters)
- Votes (one up/down vote per user per script)
- Flags (one flag per user per script)

Revision ID: 3c1f9a7d2e40
Revises:
Create Date: 2026-10-19 10:12:44.218305

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f9a7d2e40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Enable required extensions
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE user_role AS ENUM ('user', 'moderator', 'admin');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # USERS TABLE
    # ========================================================================
    op.create_table(
        "users",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("name", sa.String(64), nullable=False),
        sa.Column(
            "role",
            postgresql.ENUM(
                "user", "moderator", "admin", name="user_role", create_type=False
            ),
            nullable=False,
            server_default="user",
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_users_name"),
    )

    # ========================================================================
    # SCRIPTS TABLE
    # ========================================================================
    op.create_table(
        "scripts",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("install_name", sa.String(255), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("vote_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("flag_weight", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("install_name", name="uq_scripts_install_name"),
        sa.CheckConstraint("vote_count >= 0", name="vote_count_non_negative"),
    )
    op.create_index("idx_scripts_author_id", "scripts", ["author_id"])

    # ========================================================================
    # VOTES TABLE
    # ========================================================================
    op.create_table(
        "votes",
        sa.Column("script_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("is_upvote", sa.Boolean(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["script_id"], ["scripts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("script_id", "user_id", name="votes_pkey"),
    )
    op.create_index("idx_votes_user_id", "votes", ["user_id"])

    # ========================================================================
    # FLAGS TABLE
    # ========================================================================
    op.create_table(
        "flags",
        sa.Column("script_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["script_id"], ["scripts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("script_id", "user_id", name="flags_pkey"),
    )
    op.create_index("idx_flags_user_id", "flags", ["user_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_flags_user_id", table_name="flags")
    op.drop_table("flags")
    op.drop_index("idx_votes_user_id", table_name="votes")
    op.drop_table("votes")
    op.drop_index("idx_scripts_author_id", table_name="scripts")
    op.drop_table("scripts")
    op.drop_table("users")
    op.execute("DROP TYPE IF EXISTS user_role")
