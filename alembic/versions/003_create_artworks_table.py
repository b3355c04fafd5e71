"""Create artworks table

Revision ID: 003
Revises: 002
Create Date: 2026-10-19

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "003"
down_revision: str | None = "002"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "artworks",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("artist_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("category_id", sa.Integer(), sa.ForeignKey("categories.id", ondelete="SET NULL"), nullable=True),
        sa.Column("title", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("thumbnail", sa.String(length=500), nullable=True),
        sa.Column("images", sa.JSON(), nullable=True),
        sa.Column("size", sa.String(length=50), nullable=False),
        sa.Column("media", sa.String(length=100), nullable=True),
        sa.Column("print_number", sa.String(length=50), nullable=True),
        sa.Column("inventory_number", sa.String(length=50), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="available"),
        sa.Column("price", sa.Numeric(10, 2), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("sold", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("tags", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_artworks_artist_id"), "artworks", ["artist_id"])
    op.create_index(op.f("ix_artworks_category_id"), "artworks", ["category_id"])
    op.create_index(op.f("ix_artworks_sold"), "artworks", ["sold"])


def downgrade() -> None:
    op.drop_index(op.f("ix_artworks_sold"), table_name="artworks")
    op.drop_index(op.f("ix_artworks_category_id"), table_name="artworks")
    op.drop_index(op.f("ix_artworks_artist_id"), table_name="artworks")
    op.drop_table("artworks")
