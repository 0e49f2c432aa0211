"""forms and responses

Revision ID: base_0001
Revises:
Create Date: 2026-10-17 12:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "base_0001"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "forms",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("header_image", sa.Text(), nullable=True),
        sa.Column("questions", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_forms_updated_at", "forms", ["updated_at"])

    op.create_table(
        "responses",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column("form_id", sa.String(length=64), nullable=False),
        sa.Column("answers", sa.JSON(), nullable=False),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("ip_address", sa.String(length=64), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
    )
    op.create_index("ix_responses_form_id", "responses", ["form_id"])
    op.create_index("ix_responses_submitted_at", "responses", ["submitted_at"])


def downgrade() -> None:
    op.drop_index("ix_responses_submitted_at", table_name="responses")
    op.drop_index("ix_responses_form_id", table_name="responses")
    op.drop_table("responses")
    op.drop_index("ix_forms_updated_at", table_name="forms")
    op.drop_table("forms")
