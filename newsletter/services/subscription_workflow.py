"""Subscription Workflow — validate, store subscriber + token atomically, then email.

Invariants:
    - Invalid input raises SubscriberValidationError before any storage call
    - Subscriber insert and token insert share one transaction with explicit commit;
      any failure before commit rolls both back (no subscriber without a token)
    - New rows are always pending_confirmation with a fresh UUID
    - The confirmation email is sent only after a successful commit; a send failure
      leaves the stored signup in place
    - Each step raises its own SubscribeError subclass:
      parse → SubscriberValidationError, acquire → PoolError,
      insert → InsertSubscriberError, token → StoreTokenError,
      commit → TransactionCommitError, email → SendEmailError

Design Decisions:
    - Email outside the transaction: delivery cannot be rolled back, losing the signup
      on a transient provider error is worse than a missing email
    - Duplicate emails are not pre-checked: the unique constraint decides, and the
      resulting IntegrityError surfaces as InsertSubscriberError
"""

import logging
import uuid
from datetime import datetime, timezone
from urllib.parse import urlencode

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from newsletter.core.boundary_protocols import EmailSender
from newsletter.core.domain_types import (
    NewSubscriber, SubscriberId, SubscriptionStatus,
)
from newsletter.core.errors import (
    EmailDeliveryError, InsertSubscriberError, PoolError, SendEmailError,
    StoreTokenError, SubscriberValidationError, TransactionCommitError,
)
from newsletter.core.request_context import RequestContext
from newsletter.core.subscription_token import generate_subscription_token
from newsletter.models.subscription import Subscription
from newsletter.models.subscription_token import SubscriptionToken

logger = logging.getLogger(__name__)

CONFIRMATION_SUBJECT = "Welcome!"


async def subscribe(
    raw_name: str,
    raw_email: str,
    db: AsyncSession,
    email_client: EmailSender,
    base_url: str,
    context: RequestContext,
) -> SubscriberId:
    """Run the full signup workflow and return the new subscriber's id."""
    try:
        new_subscriber = NewSubscriber.parse(raw_name, raw_email)
    except SubscriberValidationError as e:
        e.context = context.error_context("parse_subscriber")
        raise

    try:
        await db.connection()
    except SQLAlchemyError as e:
        raise PoolError(context.error_context("acquire_connection")) from e

    subscriber_id = await insert_subscriber(db, new_subscriber, context)
    subscription_token = generate_subscription_token()
    await store_token(db, subscriber_id, subscription_token, context)

    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise TransactionCommitError(context.error_context("commit")) from e

    context.record(subscriber_id=subscriber_id)
    logger.info("New subscriber stored", extra=context.log_extra())

    await send_confirmation_email(
        email_client, new_subscriber, base_url, subscription_token, context,
    )
    return subscriber_id


async def insert_subscriber(
    db: AsyncSession, new_subscriber: NewSubscriber, context: RequestContext,
) -> SubscriberId:
    """Insert a pending subscriber row inside the open transaction."""
    subscriber_id = SubscriberId(uuid.uuid4())
    db.add(Subscription(
        id=subscriber_id,
        email=new_subscriber.email.value,
        name=new_subscriber.name.value,
        subscribed_at=datetime.now(timezone.utc),
        status=SubscriptionStatus.PENDING_CONFIRMATION.value,
    ))
    try:
        await db.flush()
    except SQLAlchemyError as e:
        await db.rollback()
        raise InsertSubscriberError(context.error_context("insert_subscriber")) from e
    return subscriber_id


async def store_token(
    db: AsyncSession,
    subscriber_id: SubscriberId,
    subscription_token: str,
    context: RequestContext,
) -> None:
    """Insert the token → subscriber mapping inside the open transaction."""
    db.add(SubscriptionToken(
        subscription_token=subscription_token, subscriber_id=subscriber_id,
    ))
    try:
        await db.flush()
    except SQLAlchemyError as e:
        await db.rollback()
        raise StoreTokenError(context.error_context("store_token")) from e


def build_confirmation_link(base_url: str, subscription_token: str) -> str:
    query = urlencode({"subscription_token": subscription_token})
    return f"{base_url.rstrip('/')}/subscriptions/confirm?{query}"


async def send_confirmation_email(
    email_client: EmailSender,
    new_subscriber: NewSubscriber,
    base_url: str,
    subscription_token: str,
    context: RequestContext,
) -> None:
    """Email the confirmation link (HTML and plain text) to the new subscriber."""
    confirmation_link = build_confirmation_link(base_url, subscription_token)
    html_body = (
        "Welcome to our newsletter!<br />"
        f'Click <a href="{confirmation_link}">here</a> to confirm your subscription.'
    )
    text_body = (
        "Welcome to our newsletter!\n"
        f"Visit {confirmation_link} to confirm your subscription."
    )
    try:
        await email_client.send_email(
            new_subscriber.email, CONFIRMATION_SUBJECT, html_body, text_body,
        )
    except EmailDeliveryError as e:
        raise SendEmailError(context.error_context("send_confirmation_email")) from e
