"""Subscription ORM — one row per subscriber, the aggregate root of the lifecycle.

Invariants:
    - id is UUID primary key, generated in-process at insert time
    - email is unique (storage-enforced; the only cross-request invariant)
    - status transitions: pending_confirmation -> confirmed (never back, never deleted)

Design Decisions:
    - status stored as String, values from SubscriptionStatus: readable in psql, no
      Postgres ENUM migrations when a state is added
    - No relationship() to tokens: tokens are looked up by value, never navigated
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from newsletter.core.domain_types import SubscriptionStatus
from newsletter.db.base import Base


class Subscription(Base):
    """Subscriber record — created pending, confirmed exactly once by token."""
    __tablename__ = "subscriptions"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    subscribed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    status: Mapped[str] = mapped_column(
        String(32), nullable=False,
        default=SubscriptionStatus.PENDING_CONFIRMATION.value,
    )

    def __repr__(self) -> str:
        return f"<Subscription id={self.id!r} status={self.status!r}>"
