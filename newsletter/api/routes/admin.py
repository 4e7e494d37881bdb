"""Admin Routes — GET /admin/dashboard (session-gated).

Invariants:
    - No logged-in user → 303 → /login
    - Username lookup failure → 500
"""

import html
import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from newsletter.api.dependencies import get_request_context
from newsletter.core.boundary_protocols import SessionStore
from newsletter.core.request_context import RequestContext
from newsletter.infrastructure.database import get_db
from newsletter.infrastructure.session_store import get_session_store
from newsletter.services.credentials import get_username

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/dashboard", response_class=HTMLResponse)
async def admin_dashboard(
    db: AsyncSession = Depends(get_db),
    session: SessionStore = Depends(get_session_store),
    context: RequestContext = Depends(get_request_context),
):
    user_id = session.get_user_id()
    if user_id is None:
        return RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)
    context.record(user_id=user_id)

    username = await get_username(user_id, db, context)
    return HTMLResponse(f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta http-equiv="content-type" content="text/html; charset=utf-8">
    <title>Admin dashboard</title>
</head>
<body>
    <p>Welcome {html.escape(username)}!</p>
</body>
</html>
""")
