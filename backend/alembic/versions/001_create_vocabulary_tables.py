"""Create vocabulary_items and learning_progress tables

Revision ID: 001_vocabulary
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001_vocabulary"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "vocabulary_items",
        sa.Column("item_id", sa.Uuid(), primary_key=True),
        sa.Column("tenant_id", sa.Uuid(), nullable=False),
        sa.Column("term", sa.String(255), nullable=False),
        sa.Column("definition", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "deleted_at",
            sa.DateTime(timezone=True),
            nullable=True,
            comment="Set when the item is retired",
        ),
    )
    op.create_index("ix_vocabulary_items_tenant_id", "vocabulary_items", ["tenant_id"])
    op.create_index(
        "idx_vocabulary_items_tenant_created", "vocabulary_items", ["tenant_id", "created_at"]
    )
    # Terms are unique per tenant among items that are not retired
    op.create_index(
        "uq_vocabulary_items_tenant_term_active",
        "vocabulary_items",
        ["tenant_id", "term"],
        unique=True,
        postgresql_where=sa.text("deleted_at IS NULL"),
        sqlite_where=sa.text("deleted_at IS NULL"),
    )

    op.create_table(
        "learning_progress",
        sa.Column("progress_id", sa.Uuid(), primary_key=True),
        sa.Column("tenant_id", sa.Uuid(), nullable=False),
        sa.Column(
            "item_id",
            sa.Uuid(),
            sa.ForeignKey("vocabulary_items.item_id"),
            nullable=False,
        ),
        sa.Column("level", sa.Integer(), nullable=False, server_default="1", comment="Mastery level 1-3"),
        sa.Column("next_due_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_reviewed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("tenant_id", "item_id", name="uq_learning_progress_tenant_item"),
    )
    op.create_index(
        "idx_learning_progress_tenant_due",
        "learning_progress",
        ["tenant_id", "next_due_at", "level"],
    )


def downgrade() -> None:
    op.drop_index("idx_learning_progress_tenant_due", table_name="learning_progress")
    op.drop_table("learning_progress")
    op.drop_index("uq_vocabulary_items_tenant_term_active", table_name="vocabulary_items")
    op.drop_index("idx_vocabulary_items_tenant_created", table_name="vocabulary_items")
    op.drop_index("ix_vocabulary_items_tenant_id", table_name="vocabulary_items")
    op.drop_table("vocabulary_items")
