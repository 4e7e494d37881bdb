"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Services depend on these Protocols, never on httpx or Starlette types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
      (ADR: ExMA anti-pattern)
"""

from typing import Protocol
from uuid import UUID

from newsletter.core.domain_types import SubscriberEmail


class EmailSender(Protocol):
    """Outbound email capability — implemented by infrastructure/email_client.py.

    Raises EmailDeliveryError on rejection, connection failure or timeout.
    """
    async def send_email(
        self,
        recipient: SubscriberEmail,
        subject: str,
        html_content: str,
        text_content: str,
    ) -> None: ...


class SessionStore(Protocol):
    """Typed access to the operator's login session — implemented by shell."""
    def get_user_id(self) -> UUID | None: ...
    def insert_user_id(self, user_id: UUID) -> None: ...
    def renew(self) -> None: ...
    def push_flash(self, message: str) -> None: ...
    def pop_flash(self) -> str | None: ...
