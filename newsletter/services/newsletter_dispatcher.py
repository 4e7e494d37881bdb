"""Newsletter Dispatcher — authenticate the operator, fan out one issue to confirmed subscribers.

Invariants:
    - No subscriber is read before the caller is authenticated
    - Only subscribers with status 'confirmed' are considered
    - Stored emails are re-validated at read time; an invalid one is skipped with a
      warning and never aborts the batch (data-quality failure → skip)
    - A transport failure for a valid address aborts the whole publish with
      PublishUnexpectedError (transport failure → escalate)
    - Auth failures always raise PublishAuthError (401 + Basic challenge)

Design Decisions:
    - Deliveries are sequential in storage read order; no ordering is promised
    - Already-delivered recipients are not tracked: a failed publish that is retried
      may email them again (at-least-once, no dedup)
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from newsletter.core.basic_auth import MalformedCredentialsError, parse_basic_auth
from newsletter.core.boundary_protocols import EmailSender
from newsletter.core.domain_types import SubscriberEmail, SubscriptionStatus
from newsletter.core.errors import (
    AuthUnexpectedError, EmailDeliveryError, InvalidCredentialsError,
    PublishAuthError, PublishUnexpectedError, SubscriberValidationError,
)
from newsletter.core.request_context import RequestContext
from newsletter.models.subscription import Subscription
from newsletter.schemas.newsletter import NewsletterIssue
from newsletter.services.credentials import validate_credentials

logger = logging.getLogger(__name__)


async def get_confirmed_subscriber_emails(db: AsyncSession) -> list[str]:
    """Raw stored emails of every confirmed subscriber (not yet re-validated)."""
    result = await db.execute(
        select(Subscription.email).where(
            Subscription.status == SubscriptionStatus.CONFIRMED.value,
        ),
    )
    return list(result.scalars().all())


async def publish_newsletter(
    issue: NewsletterIssue,
    authorization: str | None,
    db: AsyncSession,
    email_client: EmailSender,
    context: RequestContext,
) -> int:
    """Send `issue` to every confirmed subscriber. Returns the number of deliveries."""
    try:
        credentials = parse_basic_auth(authorization)
    except MalformedCredentialsError as e:
        raise PublishAuthError(str(e), context.error_context("basic_authentication")) from e
    context.record(username=credentials.username)

    try:
        user_id = await validate_credentials(credentials, db, context)
    except InvalidCredentialsError as e:
        raise PublishAuthError(context=context.error_context("validate_credentials")) from e
    except AuthUnexpectedError as e:
        raise PublishUnexpectedError(
            "Failed to validate credentials", context.error_context("validate_credentials"),
        ) from e
    context.record(user_id=user_id)

    try:
        raw_emails = await get_confirmed_subscriber_emails(db)
    except SQLAlchemyError as e:
        raise PublishUnexpectedError(
            "Failed to load confirmed subscribers",
            context.error_context("get_confirmed_subscribers"),
        ) from e

    delivered = 0
    for raw_email in raw_emails:
        try:
            recipient = SubscriberEmail.parse(raw_email)
        except SubscriberValidationError as e:
            logger.warning(
                "Skipping a confirmed subscriber. Their stored contact details are invalid",
                extra=context.log_extra(error_code=e.code, operation="publish_newsletter"),
            )
            continue

        try:
            await email_client.send_email(
                recipient, issue.title, issue.content.html, issue.content.text,
            )
        except EmailDeliveryError as e:
            raise PublishUnexpectedError(
                f"Failed to send newsletter issue to {recipient}",
                context.error_context("send_newsletter_issue"),
            ) from e
        delivered += 1

    logger.info(
        f"Newsletter issue delivered to {delivered} subscriber(s)",
        extra=context.log_extra(),
    )
    return delivered
