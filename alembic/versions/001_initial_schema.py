"""Initial schema — profiles, spaces, membership index, content, notifications.

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB, UUID

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # -- Identity --
    op.create_table(
        "user_profiles",
        sa.Column("user_id", sa.String(128), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("avatar_url", sa.String(1000), server_default=""),
        sa.Column("avatar_color", sa.String(50), nullable=True),
        sa.Column("avatar_text", sa.String(10), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )

    # -- Workspace --
    op.create_table(
        "spaces",
        sa.Column("space_id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, server_default=""),
        sa.Column("team", JSONB, nullable=False),
        sa.Column("member_ids", JSONB, nullable=False),
        sa.Column("invite_token", sa.String(8), nullable=True),
        sa.Column("compass", JSONB, nullable=True),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
        sa.Column("created_by", sa.String(128), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_spaces_invite_token", "spaces", ["invite_token"], unique=True)

    op.create_table(
        "space_members",
        sa.Column(
            "space_id", UUID(as_uuid=True),
            sa.ForeignKey("spaces.space_id", ondelete="CASCADE"), primary_key=True,
        ),
        sa.Column("user_id", sa.String(128), primary_key=True),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_space_members_user_id", "space_members", ["user_id"])

    # -- Content --
    op.create_table(
        "posts",
        sa.Column("post_id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "space_id", UUID(as_uuid=True),
            sa.ForeignKey("spaces.space_id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.Text, server_default=""),
        sa.Column("platform", sa.String(50), nullable=False),
        sa.Column("post_type", sa.String(100), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="draft"),
        sa.Column("content_type", sa.String(50), nullable=False),
        sa.Column("pillar", JSONB, nullable=True),
        sa.Column("field_values", JSONB, nullable=False),
        sa.Column("scheduled_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_by", JSONB, nullable=False),
        sa.Column("last_modified_by", JSONB, nullable=False),
        sa.Column("image_url", sa.String(1000), nullable=True),
        sa.Column("activity_log", JSONB, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_posts_space_id", "posts", ["space_id"])

    op.create_table(
        "ideas",
        sa.Column("idea_id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "space_id", UUID(as_uuid=True),
            sa.ForeignKey("spaces.space_id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("content_type", sa.String(50), nullable=False),
        sa.Column("pillar", JSONB, nullable=True),
        sa.Column("created_by", JSONB, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_ideas_space_id", "ideas", ["space_id"])

    # -- Delivery --
    op.create_table(
        "notifications",
        sa.Column("notification_id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", sa.String(128), nullable=False),
        sa.Column("message", sa.Text, nullable=False),
        sa.Column("link", sa.String(500), nullable=False),
        sa.Column("read", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_notifications_user_id", "notifications", ["user_id"])


def downgrade() -> None:
    op.drop_table("notifications")
    op.drop_table("ideas")
    op.drop_table("posts")
    op.drop_table("space_members")
    op.drop_table("spaces")
    op.drop_table("user_profiles")
