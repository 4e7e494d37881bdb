"""Subscriptions Route — POST /subscriptions (form-encoded signup).

Invariants:
    - Missing form fields → 400 (RequestValidationError handler)
    - Invalid name/email → 400; every failure past validation → 500
    - Success → 200 with an empty body

Design Decisions:
    - Form fields taken as plain strings: domain validation belongs to
      NewSubscriber.parse, not to FastAPI, so both paths share one rule set
"""

import logging

from fastapi import APIRouter, Depends, Form, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from newsletter.api.dependencies import get_request_context
from newsletter.config import Settings, get_settings
from newsletter.core.boundary_protocols import EmailSender
from newsletter.core.request_context import RequestContext
from newsletter.infrastructure.database import get_db
from newsletter.infrastructure.email_client import get_email_client
from newsletter.services.subscription_workflow import subscribe

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


@router.post("", status_code=status.HTTP_200_OK)
async def create_subscription(
    email: str = Form(...),
    name: str = Form(...),
    db: AsyncSession = Depends(get_db),
    email_client: EmailSender = Depends(get_email_client),
    settings: Settings = Depends(get_settings),
    context: RequestContext = Depends(get_request_context),
):
    """Store a pending subscriber and email them a confirmation link."""
    logger.info("Adding a new subscriber", extra=context.log_extra())
    await subscribe(
        name, email, db, email_client, settings.application_base_url, context,
    )
    return Response(status_code=status.HTTP_200_OK)
