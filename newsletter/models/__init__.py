"""ORM Models — SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Subscription is the aggregate root; tokens reference it by subscriber_id
    - User rows are provisioned externally (scripts/create_user.py); read-only here

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs (ADR: standard SQLAlchemy pattern)
"""

from newsletter.models.subscription import Subscription  # noqa: F401
from newsletter.models.subscription_token import SubscriptionToken  # noqa: F401
from newsletter.models.user import User  # noqa: F401
