"""Login Routes — GET /login (form) and POST /login (session login).

Invariants:
    - Success → session renewed, user id stored, 303 → /admin/dashboard
    - Failure → one-time flash message, 303 → /login (never a 401 page)
    - The flash message is HTML-escaped before rendering and shown once
    - Wrong username and wrong password produce the same flash message
"""

import html
import logging

from fastapi import APIRouter, Depends, Form, status
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from newsletter.api.dependencies import get_request_context
from newsletter.core.basic_auth import Credentials
from newsletter.core.boundary_protocols import SessionStore
from newsletter.core.errors import AuthUnexpectedError, InvalidCredentialsError
from newsletter.core.request_context import RequestContext
from newsletter.infrastructure.database import get_db
from newsletter.infrastructure.session_store import get_session_store
from newsletter.services.credentials import validate_credentials

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/login", tags=["login"])

AUTHENTICATION_FAILED_MESSAGE = "Authentication failed"
UNEXPECTED_FAILURE_MESSAGE = "Something went wrong"

LOGIN_FORM_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta http-equiv="content-type" content="text/html; charset=utf-8">
    <title>Login</title>
</head>
<body>
    {flash}
    <form action="/login" method="post">
        <label>Username
            <input type="text" placeholder="Enter Username" name="username">
        </label>
        <label>Password
            <input type="password" placeholder="Enter Password" name="password">
        </label>
        <button type="submit">Login</button>
    </form>
</body>
</html>
"""


def render_login_form(flash_message: str | None) -> str:
    flash = f"<p><i>{html.escape(flash_message)}</i></p>" if flash_message else ""
    return LOGIN_FORM_TEMPLATE.format(flash=flash)


@router.get("", response_class=HTMLResponse)
async def login_form(session: SessionStore = Depends(get_session_store)):
    """Render the login form with any pending error notice."""
    return HTMLResponse(render_login_form(session.pop_flash()))


@router.post("")
async def login(
    username: str = Form(...),
    password: str = Form(...),
    db: AsyncSession = Depends(get_db),
    session: SessionStore = Depends(get_session_store),
    context: RequestContext = Depends(get_request_context),
):
    """Validate credentials and start an authenticated session."""
    credentials = Credentials(username=username, password=password)
    context.record(username=username)
    try:
        user_id = await validate_credentials(credentials, db, context)
    except InvalidCredentialsError:
        return _login_redirect(session, AUTHENTICATION_FAILED_MESSAGE)
    except AuthUnexpectedError as e:
        logger.error(
            f"Login failed unexpectedly: {e.message}",
            extra=context.log_extra(error_code=e.code), exc_info=e,
        )
        return _login_redirect(session, UNEXPECTED_FAILURE_MESSAGE)

    session.renew()
    session.insert_user_id(user_id)
    context.record(user_id=user_id)
    logger.info("User logged in", extra=context.log_extra())
    return RedirectResponse(
        "/admin/dashboard", status_code=status.HTTP_303_SEE_OTHER,
    )


def _login_redirect(session: SessionStore, message: str) -> RedirectResponse:
    session.push_flash(message)
    return RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)
