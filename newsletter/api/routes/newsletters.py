"""Newsletters Route — POST /newsletters (Basic-authenticated publish).

Invariants:
    - Malformed JSON body → 400 (checked before credentials)
    - Missing/invalid credentials → 401 + WWW-Authenticate: Basic realm="publish", empty body
    - Any storage or transport failure → 500
"""

import logging

from fastapi import APIRouter, Depends, Header, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from newsletter.api.dependencies import get_request_context
from newsletter.core.boundary_protocols import EmailSender
from newsletter.core.request_context import RequestContext
from newsletter.infrastructure.database import get_db
from newsletter.infrastructure.email_client import get_email_client
from newsletter.schemas.newsletter import NewsletterIssue
from newsletter.services.newsletter_dispatcher import publish_newsletter

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/newsletters", tags=["newsletters"])


@router.post("", status_code=status.HTTP_200_OK)
async def create_newsletter_issue(
    body: NewsletterIssue,
    authorization: str | None = Header(None, alias="Authorization"),
    db: AsyncSession = Depends(get_db),
    email_client: EmailSender = Depends(get_email_client),
    context: RequestContext = Depends(get_request_context),
):
    """Publish a newsletter issue to all confirmed subscribers."""
    logger.info("Publishing a newsletter issue", extra=context.log_extra())
    await publish_newsletter(body, authorization, db, email_client, context)
    return Response(status_code=status.HTTP_200_OK)
