"""Subscription Token ORM — maps a confirmation token to its subscriber.

Invariants:
    - subscription_token is the primary key (point lookup by value)
    - Written in the same transaction as the Subscription row; never updated
    - Many tokens per subscriber are possible (repeat signups), none deduplicated
"""

import uuid

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from newsletter.db.base import Base


class SubscriptionToken(Base):
    __tablename__ = "subscription_tokens"

    subscription_token: Mapped[str] = mapped_column(Text, primary_key=True)
    subscriber_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("subscriptions.id"),
        nullable=False,
    )
