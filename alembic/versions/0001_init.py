"""reference and candidate ingredient tables

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op


revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "reference_ingredients",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("code", sa.String(16), nullable=True),
        sa.Column("category", sa.String(100), nullable=False, server_default=""),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_reference_ingredients_name", "reference_ingredients", ["name"])
    op.create_index("ix_reference_ingredients_code", "reference_ingredients", ["code"])

    op.create_table(
        "candidate_ingredients",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False, unique=True),
        sa.Column("status", sa.String(16), nullable=False, server_default="Unknown"),
        sa.Column("source", sa.String(50), nullable=False, server_default="auto-upload"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )


def downgrade() -> None:
    op.drop_table("candidate_ingredients")
    op.drop_index("ix_reference_ingredients_code", table_name="reference_ingredients")
    op.drop_index("ix_reference_ingredients_name", table_name="reference_ingredients")
    op.drop_table("reference_ingredients")
