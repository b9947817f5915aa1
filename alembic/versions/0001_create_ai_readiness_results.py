"""create ai_readiness_results

Revision ID: 0001
Revises:
Create Date: 2025-01-15 09:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "ai_readiness_results",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("slug", sa.String(length=16), nullable=False),
        sa.Column("totals", sa.JSON(), nullable=False),
        sa.Column("avg", sa.Integer(), nullable=False),
        sa.Column("user_name", sa.String(length=255), nullable=True),
        sa.Column("user_email", sa.String(length=255), nullable=True),
        sa.Column("company", sa.String(length=255), nullable=True),
        sa.Column("pdf_locator", sa.String(length=1024), nullable=True),
        sa.Column("catalog_version", sa.String(length=32), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_ai_readiness_results")),
        sa.UniqueConstraint("slug", name=op.f("uq_ai_readiness_results_slug")),
    )
    op.create_index(
        op.f("ix_ai_readiness_results_created_at"), "ai_readiness_results", ["created_at"], unique=False
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_ai_readiness_results_created_at"), table_name="ai_readiness_results")
    op.drop_table("ai_readiness_results")
