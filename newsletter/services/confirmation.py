"""Subscription Confirmation — resolve a token and mark its subscriber confirmed.

Invariants:
    - Unknown token raises UnknownTokenError and performs no write
    - Only the subscriber the token points to is updated
    - Confirming twice succeeds both times (status stays confirmed)
    - Storage failures raise ConfirmationUnexpectedError

Design Decisions:
    - Tokens are not invalidated after use and there is no status guard: the update is
      idempotent, and a replayed link simply confirms again
"""

import logging

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from newsletter.core.domain_types import SubscriberId, SubscriptionStatus
from newsletter.core.errors import ConfirmationUnexpectedError, UnknownTokenError
from newsletter.core.request_context import RequestContext
from newsletter.models.subscription import Subscription
from newsletter.models.subscription_token import SubscriptionToken

logger = logging.getLogger(__name__)


async def get_subscriber_id_from_token(
    db: AsyncSession, subscription_token: str,
) -> SubscriberId | None:
    result = await db.execute(
        select(SubscriptionToken.subscriber_id).where(
            SubscriptionToken.subscription_token == subscription_token,
        ),
    )
    subscriber_id = result.scalar_one_or_none()
    return SubscriberId(subscriber_id) if subscriber_id else None


async def confirm_subscriber(db: AsyncSession, subscriber_id: SubscriberId) -> None:
    await db.execute(
        update(Subscription)
        .where(Subscription.id == subscriber_id)
        .values(status=SubscriptionStatus.CONFIRMED.value),
    )
    await db.commit()


async def confirm(
    subscription_token: str, db: AsyncSession, context: RequestContext,
) -> SubscriberId:
    """Confirm the pending subscriber that owns `subscription_token`."""
    try:
        subscriber_id = await get_subscriber_id_from_token(db, subscription_token)
    except SQLAlchemyError as e:
        raise ConfirmationUnexpectedError(
            "get_subscriber_id_from_token",
            context.error_context("get_subscriber_id_from_token"),
        ) from e

    if subscriber_id is None:
        raise UnknownTokenError(context.error_context("confirm"))

    try:
        await confirm_subscriber(db, subscriber_id)
    except SQLAlchemyError as e:
        await db.rollback()
        raise ConfirmationUnexpectedError(
            "confirm_subscriber", context.error_context("confirm_subscriber"),
        ) from e

    context.record(subscriber_id=subscriber_id)
    logger.info("Subscriber confirmed", extra=context.log_extra())
    return subscriber_id
