"""Domain Types — validated value objects that replace bare strings at the core boundary.

Invariants:
    - SubscriberName: non-empty after trimming, <= 256 graphemes, none of / ( ) " < > \\ { }
    - SubscriberEmail: passes the email-address grammar check (no DNS lookup)
    - Instances are immutable and validated on construction; parse() also normalizes
    - Parsing strips surrounding whitespace; the stripped value is what gets stored
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - Frozen dataclasses over NewType: the check lives in the type (parse, don't validate)
    - email-validator for the grammar: same checker pydantic's EmailStr relies on
    - regex `\\X` for grapheme clusters: len() counts code points, not what users see
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType
from uuid import UUID

import regex
from email_validator import EmailNotValidError, validate_email

from newsletter.core.errors import SubscriberValidationError


# ─── Identity Types ──────────────────────────────────────────────

SubscriberId = NewType("SubscriberId", UUID)
UserId = NewType("UserId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class SubscriptionStatus(str, Enum):
    """Subscriber lifecycle states — maps to DB `status` column."""
    PENDING_CONFIRMATION = "pending_confirmation"
    CONFIRMED = "confirmed"


# ─── Value Types ─────────────────────────────────────────────────

MAX_NAME_GRAPHEMES = 256
FORBIDDEN_NAME_CHARACTERS = frozenset('/()"<>\\{}')

_GRAPHEME = regex.compile(r"\X")


def _grapheme_length(value: str) -> int:
    return len(_GRAPHEME.findall(value))


@dataclass(frozen=True, slots=True)
class SubscriberName:
    value: str

    def __post_init__(self):
        if not self.value.strip():
            raise SubscriberValidationError(
                "Subscriber name cannot be empty or whitespace", field="name",
            )
        if _grapheme_length(self.value) > MAX_NAME_GRAPHEMES:
            raise SubscriberValidationError(
                f"Subscriber name cannot exceed {MAX_NAME_GRAPHEMES} characters",
                field="name",
            )
        if any(ch in FORBIDDEN_NAME_CHARACTERS for ch in self.value):
            raise SubscriberValidationError(
                "Subscriber name contains forbidden characters", field="name",
            )

    @classmethod
    def parse(cls, raw: str | None) -> "SubscriberName":
        """Validate a raw form value into a SubscriberName."""
        return cls((raw or "").strip())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class SubscriberEmail:
    value: str

    def __post_init__(self):
        try:
            validate_email(self.value, check_deliverability=False)
        except EmailNotValidError as e:
            raise SubscriberValidationError(
                f"{self.value!r} is not a valid subscriber email: {e}", field="email",
            ) from e

    @classmethod
    def parse(cls, raw: str | None) -> "SubscriberEmail":
        """Validate a raw string (form input or stored row) into a SubscriberEmail."""
        return cls((raw or "").strip())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class NewSubscriber:
    """Validated form intake — exists only between the form and the insert."""
    email: SubscriberEmail
    name: SubscriberName

    @classmethod
    def parse(cls, raw_name: str | None, raw_email: str | None) -> "NewSubscriber":
        name = SubscriberName.parse(raw_name)
        email = SubscriberEmail.parse(raw_email)
        return cls(email=email, name=name)
