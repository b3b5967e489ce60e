"""SQLAlchemy table definitions for Nomen.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# PROFILES TABLE (Consolidated identity)
# ============================================================================
profiles_table = Table(
    "profiles",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("display_name", Text, nullable=True),
    Column("primary_email", Text, nullable=True),
    Column(
        "merged_account_ids",
        postgresql.ARRAY(UUID),
        nullable=False,
        server_default="{}",
    ),  # Append-only audit trail
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# ACCOUNTS TABLE (One per gateway principal)
# ============================================================================
accounts_table = Table(
    "accounts",
    metadata,
    Column("id", UUID, primary_key=True),  # Gateway principal ID
    Column(
        "profile_id",
        UUID,
        ForeignKey("profiles.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_accounts_profile_id", accounts_table.c.profile_id)

# ============================================================================
# EXTERNAL IDENTITIES TABLE (Gateway identity bindings)
# ============================================================================
external_identities_table = Table(
    "external_identities",
    metadata,
    Column("id", UUID, primary_key=True),  # Gateway identity ID
    Column(
        "account_id",
        UUID,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("provider", String(50), nullable=False),
    Column("provider_user_id", String(255), nullable=False),
    Column("claims", JSONB, nullable=False, server_default="{}"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("provider", "provider_user_id", name="uq_provider_identity"),
)

Index("idx_external_identities_account_id", external_identities_table.c.account_id)

# ============================================================================
# PROFILE ATTRIBUTES TABLE (Candidate values per identity)
# ============================================================================
profile_attributes_table = Table(
    "profile_attributes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "profile_id",
        UUID,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "identity_id",
        UUID,
        ForeignKey("external_identities.id", ondelete="CASCADE"),
        nullable=True,  # NULL only for legacy rows
    ),
    Column("attribute_key", String(50), nullable=False),
    Column("attribute_value", Text, nullable=False),
    Column("source_provider", String(50), nullable=True),
    Column("is_preferred", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "attribute_key IN ('display_name', 'primary_email', 'username', 'avatar_url')",
        name="attribute_key_valid",
    ),
    CheckConstraint("attribute_value <> ''", name="attribute_value_not_empty"),
)

Index(
    "idx_profile_attributes_profile_key",
    profile_attributes_table.c.profile_id,
    profile_attributes_table.c.attribute_key,
)
Index(
    "uq_profile_attributes_identity_key",
    profile_attributes_table.c.identity_id,
    profile_attributes_table.c.attribute_key,
    unique=True,
    postgresql_where=profile_attributes_table.c.identity_id.isnot(None),
)
Index(
    "uq_profile_attributes_legacy_key",
    profile_attributes_table.c.profile_id,
    profile_attributes_table.c.attribute_key,
    profile_attributes_table.c.source_provider,
    unique=True,
    postgresql_where=profile_attributes_table.c.identity_id.is_(None),
)
Index(
    "uq_profile_attributes_preferred",
    profile_attributes_table.c.profile_id,
    profile_attributes_table.c.attribute_key,
    unique=True,
    postgresql_where=profile_attributes_table.c.is_preferred.is_(True),
)

# ============================================================================
# MERGE REQUESTS TABLE (Pending merge handshakes)
# ============================================================================
merge_requests_table = Table(
    "merge_requests",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "requester_account_id",
        UUID,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("token", String(255), nullable=False, unique=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
)

Index("idx_merge_requests_requester", merge_requests_table.c.requester_account_id)
Index("idx_merge_requests_expires_at", merge_requests_table.c.expires_at)
