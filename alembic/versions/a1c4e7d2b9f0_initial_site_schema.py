"""initial site schema

Revision ID: a1c4e7d2b9f0
Revises:
Create Date: 2026-10-17 09:12:40.118203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = 'a1c4e7d2b9f0'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSONB = sa.JSON().with_variant(postgresql.JSONB(astext_type=sa.Text()), "postgresql")


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    app_role = sa.Enum("admin", "editor", name="app_role", native_enum=False)
    page_status = sa.Enum("draft", "published", "archived", name="page_status", native_enum=False, create_constraint=True)
    item_status = sa.Enum("draft", "published", "archived", name="item_status", native_enum=False, create_constraint=True)

    # ---------- auth ----------
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=160), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("full_name", sa.String(length=160), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "user_roles",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("role", app_role, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("user_id", "role", name="uq_user_role"),
    )
    op.create_index("ix_user_roles_user_id", "user_roles", ["user_id"])

    op.create_table(
        "user_invitations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=160), nullable=False),
        sa.Column("role", app_role, nullable=False),
        sa.Column("token", sa.String(length=128), nullable=False, unique=True),
        sa.Column("invited_by", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("accepted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_user_invitations_email", "user_invitations", ["email"])
    op.create_index("ix_user_invitations_email_pending", "user_invitations", ["email", "accepted_at"])

    # ---------- pages & sections ----------
    op.create_table(
        "pages",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("slug", sa.String(length=100), nullable=False),
        sa.Column("status", page_status, nullable=False, server_default="draft"),
        sa.Column("seo_title", sa.String(length=200), nullable=True),
        sa.Column("seo_description", sa.String(length=500), nullable=True),
        sa.Column("seo_image", sa.String(length=1024), nullable=True),
        sa.Column("content", JSONB, nullable=True),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_by", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_pages_slug", "pages", ["slug"], unique=True)

    op.create_table(
        "reusable_components",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=160), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("block_type", sa.String(length=64), nullable=False),
        sa.Column("content", JSONB, nullable=False),
        sa.Column("created_by", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "page_sections",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("page_id", sa.Integer(), sa.ForeignKey("pages.id", ondelete="CASCADE"), nullable=False),
        sa.Column("section_type", sa.String(length=64), nullable=False),
        sa.Column("content_json", JSONB, nullable=False),
        sa.Column("style_overrides", JSONB, nullable=True),
        sa.Column("order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_visible", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_locked", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "reusable_id", sa.Integer(),
            sa.ForeignKey("reusable_components.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column("is_linked", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_page_sections_page_id", "page_sections", ["page_id"])
    op.create_index("ix_page_sections_reusable_id", "page_sections", ["reusable_id"])
    op.create_index("ix_page_sections_page_order", "page_sections", ["page_id", "order"])

    # ---------- site ----------
    op.create_table(
        "global_settings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("key", sa.String(length=64), nullable=False),
        sa.Column("value", JSONB, nullable=True),
        sa.Column("revision", sa.Integer(), server_default="1", nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_global_settings_key", "global_settings", ["key"], unique=True)

    op.create_table(
        "content_types",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("slug", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("icon", sa.String(length=64), nullable=True),
        sa.Column("fields", JSONB, nullable=False),
        sa.Column("page_id", sa.Integer(), sa.ForeignKey("pages.id", ondelete="SET NULL"), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_content_types_slug", "content_types", ["slug"], unique=True)

    op.create_table(
        "content_type_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "content_type_id", sa.Integer(),
            sa.ForeignKey("content_types.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("slug", sa.String(length=100), nullable=False),
        sa.Column("status", item_status, nullable=False, server_default="draft"),
        sa.Column("data", JSONB, nullable=False),
        sa.Column("author_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("content_type_id", "slug", name="uq_content_item_slug_per_type"),
    )
    op.create_index("ix_content_type_items_content_type_id", "content_type_items", ["content_type_id"])
    op.create_index("ix_content_type_items_type_status", "content_type_items", ["content_type_id", "status"])

    op.create_table(
        "media",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("file_path", sa.String(length=1024), nullable=False),
        sa.Column("file_type", sa.String(length=120), nullable=False),
        sa.Column("file_size", sa.BigInteger(), nullable=True),
        sa.Column("alt_text", sa.String(length=500), nullable=True),
        sa.Column("tags", JSONB, nullable=False),
        sa.Column("uploaded_by", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        *_timestamps(),
    )


def downgrade() -> None:
    op.drop_table("media")
    op.drop_index("ix_content_type_items_type_status", table_name="content_type_items")
    op.drop_index("ix_content_type_items_content_type_id", table_name="content_type_items")
    op.drop_table("content_type_items")
    op.drop_index("ix_content_types_slug", table_name="content_types")
    op.drop_table("content_types")
    op.drop_index("ix_global_settings_key", table_name="global_settings")
    op.drop_table("global_settings")

    op.drop_index("ix_page_sections_page_order", table_name="page_sections")
    op.drop_index("ix_page_sections_reusable_id", table_name="page_sections")
    op.drop_index("ix_page_sections_page_id", table_name="page_sections")
    op.drop_table("page_sections")
    op.drop_table("reusable_components")
    op.drop_index("ix_pages_slug", table_name="pages")
    op.drop_table("pages")

    op.drop_index("ix_user_invitations_email_pending", table_name="user_invitations")
    op.drop_index("ix_user_invitations_email", table_name="user_invitations")
    op.drop_table("user_invitations")
    op.drop_index("ix_user_roles_user_id", table_name="user_roles")
    op.drop_table("user_roles")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
