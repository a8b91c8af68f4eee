"""Create pages and page_components tables

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "pages",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            primary_key=True,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False),
        # Not unique: multiple (or zero) home pages are tolerated
        sa.Column("is_home", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
        ),
        sa.UniqueConstraint("slug", name="uq_pages_slug"),
    )

    op.create_table(
        "page_components",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            primary_key=True,
        ),
        sa.Column(
            "page_id",
            sa.UUID(),
            sa.ForeignKey("pages.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("config", sa.JSON(), nullable=False, server_default=sa.text("'{}'")),
        # No unique (page_id, position): reorders rewrite rows one at a time
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.CheckConstraint(
            "type IN ('navigation', 'hero', 'product_grid', 'contact_form', 'cart', 'footer')",
            name="ck_page_components_type",
        ),
        sa.CheckConstraint("position >= 0", name="ck_page_components_position"),
    )
    op.create_index(
        "ix_page_components_page_id_position",
        "page_components",
        ["page_id", "position"],
    )


def downgrade() -> None:
    op.drop_index("ix_page_components_page_id_position", table_name="page_components")
    op.drop_table("page_components")
    op.drop_table("pages")
