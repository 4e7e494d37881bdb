"""Subscription Tokens — unguessable, URL-safe confirmation tokens.

Invariants:
    - Exactly 25 characters from [A-Za-z0-9] (62 symbols, ~1.5e44 values)
    - Drawn from the OS CSPRNG (secrets), never from random

Design Decisions:
    - No uniqueness check against storage: collision probability is negligible
"""

import secrets
import string

SUBSCRIPTION_TOKEN_LENGTH = 25
SUBSCRIPTION_TOKEN_ALPHABET = string.ascii_letters + string.digits


def generate_subscription_token() -> str:
    """Generate a random case-sensitive alphanumeric confirmation token."""
    return "".join(
        secrets.choice(SUBSCRIPTION_TOKEN_ALPHABET)
        for _ in range(SUBSCRIPTION_TOKEN_LENGTH)
    )
