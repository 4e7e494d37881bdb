"""
Newsletter — Publisher Account Script

Creates a users row with an argon2id password hash. Accounts are provisioned
manually: the service exposes no registration endpoint.

Usage:
    python scripts/create_user.py --username admin
    python scripts/create_user.py --username admin --password 'correct horse battery staple'
"""

from __future__ import annotations

import argparse
import asyncio
import getpass
import os
import sys
import uuid

# Resolve project root so this script can be run from any working directory
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy.exc import SQLAlchemyError

from newsletter.config import get_settings
from newsletter.db.session import create_session_factory
from newsletter.infrastructure.password_hashing import hash_password
from newsletter.models.user import User


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Create a newsletter publisher account (users row).",
    )
    parser.add_argument(
        "--username",
        type=str,
        required=True,
        help="Login name used for /login and Basic auth on /newsletters.",
    )
    parser.add_argument(
        "--password",
        type=str,
        default=None,
        help="Password (prompted for when omitted, which keeps it out of shell history).",
    )
    return parser.parse_args()


async def create_user(username: str, password: str) -> uuid.UUID:
    """Insert a users row holding the argon2id hash of `password`."""
    engine, session_factory = create_session_factory(get_settings().database_url)
    user_id = uuid.uuid4()
    try:
        async with session_factory() as session:
            session.add(User(
                user_id=user_id,
                username=username,
                password_hash=hash_password(password),
            ))
            await session.commit()
    finally:
        await engine.dispose()
    return user_id


async def main() -> None:
    args = parse_args()
    password = args.password or getpass.getpass("Password: ")
    if not password:
        print("Password must not be empty.", file=sys.stderr)
        sys.exit(1)

    print(f"Creating user: username={args.username}")
    try:
        user_id = await create_user(args.username, password)
    except SQLAlchemyError as e:
        print(f"Failed to create user: {e}", file=sys.stderr)
        sys.exit(1)
    print("User created successfully.")
    print(f"  users.user_id = {user_id}")
    print(f"  username      = {args.username}")


if __name__ == "__main__":
    asyncio.run(main())
