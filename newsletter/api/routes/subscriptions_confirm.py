"""Subscription Confirmation Route — GET /subscriptions/confirm?subscription_token=...

Invariants:
    - Missing subscription_token → 400
    - Unknown token → 401 with empty body (no hint whether it was malformed or unused)
    - Storage failure → 500
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from newsletter.api.dependencies import get_request_context
from newsletter.core.request_context import RequestContext
from newsletter.infrastructure.database import get_db
from newsletter.services.confirmation import confirm

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


@router.get("/confirm", status_code=status.HTTP_200_OK)
async def confirm_subscription(
    subscription_token: str = Query(...),
    db: AsyncSession = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    """Confirm a pending subscriber."""
    logger.info("Confirming a pending subscriber", extra=context.log_extra())
    await confirm(subscription_token, db, context)
    return Response(status_code=status.HTTP_200_OK)
