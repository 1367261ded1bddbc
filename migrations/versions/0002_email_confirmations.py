"""add email confirmation

Revision ID: 0002_email_confirmations
Revises: 0001_init
Create Date: 2026-10-06 16:40:00.000000
"""

from alembic import op
import sqlalchemy as sa

revision = "0002_email_confirmations"
down_revision = "0001_init"
branch_labels = None
depends_on = None


def upgrade() -> None:
    with op.batch_alter_table("users") as batch:
        batch.add_column(sa.Column("is_confirmed", sa.Boolean(), nullable=False, server_default=sa.text("true")))

    op.create_table(
        "email_confirmations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("token", sa.String(), nullable=False),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
        sa.Column("used_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
    )
    op.create_index("ix_email_confirmations_id", "email_confirmations", ["id"], unique=False)
    op.create_index("ix_email_confirmations_token", "email_confirmations", ["token"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_email_confirmations_token", table_name="email_confirmations")
    op.drop_index("ix_email_confirmations_id", table_name="email_confirmations")
    op.drop_table("email_confirmations")

    with op.batch_alter_table("users") as batch:
        batch.drop_column("is_confirmed")
