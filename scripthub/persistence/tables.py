"""SQLAlchemy table definitions for scripthub.

These table definitions are used for classical ORM mapping.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (owned by the account system, read here)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(64), nullable=False, unique=True),
    Column(
        "role",
        Enum("user", "moderator", "admin", name="user_role", create_type=False),
        nullable=False,
        server_default="user",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# SCRIPTS TABLE
# ============================================================================
scripts_table = Table(
    "scripts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("name", String(255), nullable=False),
    Column("install_name", String(255), nullable=False, unique=True),
    # Denormalized counters, kept in step with the votes/flags ledgers
    Column("rating", Integer, nullable=False, server_default="0"),
    Column("vote_count", Integer, nullable=False, server_default="0"),
    Column("flag_weight", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("vote_count >= 0", name="vote_count_non_negative"),
)

Index("idx_scripts_author_id", scripts_table.c.author_id)

# ============================================================================
# VOTES TABLE (one row per user per script)
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column(
        "script_id", UUID, ForeignKey("scripts.id", ondelete="CASCADE"), nullable=False
    ),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("is_upvote", Boolean, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("script_id", "user_id", name="votes_pkey"),
)

Index("idx_votes_user_id", votes_table.c.user_id)

# ============================================================================
# FLAGS TABLE (presence only, one row per user per script)
# ============================================================================
flags_table = Table(
    "flags",
    metadata,
    Column(
        "script_id", UUID, ForeignKey("scripts.id", ondelete="CASCADE"), nullable=False
    ),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("script_id", "user_id", name="flags_pkey"),
)

Index("idx_flags_user_id", flags_table.c.user_id)
