"""Subscriptions and subscription tokens.

Revision ID: 001_subscriptions
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_subscriptions"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "subscriptions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.Text, nullable=False, unique=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("subscribed_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", sa.String(32), nullable=False),
    )

    op.create_table(
        "subscription_tokens",
        sa.Column("subscription_token", sa.Text, primary_key=True),
        sa.Column("subscriber_id", UUID(as_uuid=True), sa.ForeignKey("subscriptions.id"), nullable=False),
    )
    op.create_index("ix_subscription_tokens_subscriber_id", "subscription_tokens", ["subscriber_id"])


def downgrade() -> None:
    op.drop_index("ix_subscription_tokens_subscriber_id", table_name="subscription_tokens")
    op.drop_table("subscription_tokens")
    op.drop_table("subscriptions")
