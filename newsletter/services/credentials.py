"""Credential Validation — username/password check with uniform timing.

Invariants:
    - A full argon2 verification runs on every call, whether or not the username exists
    - Unknown username and wrong password both raise InvalidCredentialsError
      (same class, same message, same cost)
    - A user id is returned only when a stored row exists AND the password matches
      the stored hash — matching DUMMY_PASSWORD_HASH never authenticates
    - Malformed stored hash, storage failure and worker failure raise AuthUnexpectedError
    - Verification runs on the password-hash pool, never on the event loop

Design Decisions:
    - DUMMY_PASSWORD_HASH is a fixed constant with the same argon2 parameters as real
      hashes: its only job is deterministic timing, not secrecy
    - Lookup is a fresh read on every call (no credential caching)
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from newsletter.core.basic_auth import Credentials
from newsletter.core.domain_types import UserId
from newsletter.core.errors import AuthUnexpectedError, InvalidCredentialsError
from newsletter.core.request_context import RequestContext
from newsletter.infrastructure.password_hashing import (
    MalformedPasswordHashError, run_cpu_bound, verify_password_hash,
)
from newsletter.models.user import User

logger = logging.getLogger(__name__)

DUMMY_PASSWORD_HASH = (
    "$argon2id$v=19$m=15000,t=2,p=1$"
    "gZiV/M1gPc22ElAH/Jh1Hw$"
    "CWOrkoo7oJBQ/iyh7uJ0LO2aLEfrHwTWllSAxT0zRno"
)


async def get_stored_credentials(
    username: str, db: AsyncSession,
) -> tuple[UUID, str] | None:
    """Fetch (user_id, password_hash) for a username, or None."""
    result = await db.execute(
        select(User.user_id, User.password_hash).where(User.username == username),
    )
    row = result.one_or_none()
    return (row.user_id, row.password_hash) if row else None


async def validate_credentials(
    credentials: Credentials, db: AsyncSession, context: RequestContext,
) -> UserId:
    """Return the user id for valid credentials, else raise an AuthError."""
    user_id: UUID | None = None
    expected_password_hash = DUMMY_PASSWORD_HASH

    try:
        stored = await get_stored_credentials(credentials.username, db)
    except SQLAlchemyError as e:
        raise AuthUnexpectedError(
            "Failed to perform a query to retrieve stored credentials",
            context.error_context("get_stored_credentials"),
        ) from e
    if stored is not None:
        user_id, expected_password_hash = stored

    try:
        password_matches = await run_cpu_bound(
            verify_password_hash, expected_password_hash, credentials.password,
        )
    except MalformedPasswordHashError as e:
        raise AuthUnexpectedError(
            str(e), context.error_context("verify_password_hash"),
        ) from e
    except RuntimeError as e:
        raise AuthUnexpectedError(
            "Failed to schedule password verification",
            context.error_context("verify_password_hash"),
        ) from e

    if user_id is None or not password_matches:
        logger.info(
            "Credential validation failed",
            extra=context.log_extra(username=credentials.username),
        )
        raise InvalidCredentialsError(context.error_context("validate_credentials"))

    return UserId(user_id)


async def get_username(
    user_id: UUID, db: AsyncSession, context: RequestContext,
) -> str:
    """Look up the username of a logged-in user."""
    try:
        result = await db.execute(
            select(User.username).where(User.user_id == user_id),
        )
        username = result.scalar_one_or_none()
    except SQLAlchemyError as e:
        raise AuthUnexpectedError(
            "Failed to perform a query to retrieve a username",
            context.error_context("get_username"),
        ) from e
    if username is None:
        raise AuthUnexpectedError(
            f"No user found for session user id {user_id}",
            context.error_context("get_username"),
        )
    return username
