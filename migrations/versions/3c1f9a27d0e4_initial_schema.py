"""initial_schema

Create the foundational schema for Nomen:
- Profiles (consolidated identity, one per person)
- Accounts (one per gateway principal, linked to a profile)
- External identities (provider logins bound to an account)
- Profile attributes (candidate values per identity, one preferred per key)
- Merge requests (single-use, short-lived merge handshakes)

Revision ID: 3c1f9a27d0e4
Revises:
Create Date: 2026-10-16 09:12:44.381905

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f9a27d0e4"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
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
    ]


def upgrade() -> None:
    """Upgrade schema."""
    # gen_random_uuid()
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto"')

    # ========================================================================
    # PROFILES table
    # ========================================================================
    op.create_table(
        "profiles",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("display_name", sa.Text(), nullable=True),
        sa.Column("primary_email", sa.Text(), nullable=True),
        sa.Column(
            "merged_account_ids",
            postgresql.ARRAY(sa.UUID()),
            nullable=False,
            server_default=sa.text("'{}'"),
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    # ========================================================================
    # ACCOUNTS table (id is the gateway principal ID)
    # ========================================================================
    op.create_table(
        "accounts",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("profile_id", sa.UUID(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["profile_id"], ["profiles.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_accounts_profile_id", "accounts", ["profile_id"])

    # ========================================================================
    # EXTERNAL_IDENTITIES table (id is the gateway identity ID)
    # ========================================================================
    op.create_table(
        "external_identities",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("account_id", sa.UUID(), nullable=False),
        sa.Column("provider", sa.String(50), nullable=False),
        sa.Column("provider_user_id", sa.String(255), nullable=False),
        sa.Column(
            "claims",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        *_timestamps(),
        sa.ForeignKeyConstraint(["account_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "provider", "provider_user_id", name="uq_provider_identity"
        ),
    )
    op.create_index(
        "idx_external_identities_account_id", "external_identities", ["account_id"]
    )

    # ========================================================================
    # PROFILE_ATTRIBUTES table
    # ========================================================================
    op.create_table(
        "profile_attributes",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("profile_id", sa.UUID(), nullable=False),
        sa.Column("identity_id", sa.UUID(), nullable=True),  # NULL for legacy rows
        sa.Column("attribute_key", sa.String(50), nullable=False),
        sa.Column("attribute_value", sa.Text(), nullable=False),
        sa.Column("source_provider", sa.String(50), nullable=True),
        sa.Column("is_preferred", sa.Boolean(), nullable=False, server_default="false"),
        *_timestamps(),
        sa.ForeignKeyConstraint(["profile_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["identity_id"], ["external_identities.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "attribute_key IN ('display_name', 'primary_email', 'username', 'avatar_url')",
            name="attribute_key_valid",
        ),
        sa.CheckConstraint("attribute_value <> ''", name="attribute_value_not_empty"),
    )
    op.create_index(
        "idx_profile_attributes_profile_key",
        "profile_attributes",
        ["profile_id", "attribute_key"],
    )
    op.create_index(
        "uq_profile_attributes_identity_key",
        "profile_attributes",
        ["identity_id", "attribute_key"],
        unique=True,
        postgresql_where=sa.text("identity_id IS NOT NULL"),
    )
    op.create_index(
        "uq_profile_attributes_legacy_key",
        "profile_attributes",
        ["profile_id", "attribute_key", "source_provider"],
        unique=True,
        postgresql_where=sa.text("identity_id IS NULL"),
    )
    # At most one preferred value per (profile, key)
    op.create_index(
        "uq_profile_attributes_preferred",
        "profile_attributes",
        ["profile_id", "attribute_key"],
        unique=True,
        postgresql_where=sa.text("is_preferred"),
    )

    # ========================================================================
    # MERGE_REQUESTS table
    # ========================================================================
    op.create_table(
        "merge_requests",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("requester_account_id", sa.UUID(), nullable=False),
        sa.Column("token", sa.String(255), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["requester_account_id"], ["accounts.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("token", name="uq_merge_request_token"),
    )
    op.create_index(
        "idx_merge_requests_requester", "merge_requests", ["requester_account_id"]
    )
    op.create_index("idx_merge_requests_expires_at", "merge_requests", ["expires_at"])


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("merge_requests")
    op.drop_table("profile_attributes")
    op.drop_table("external_identities")
    op.drop_table("accounts")
    op.drop_table("profiles")
