"""Fake Email Sender — records outgoing emails instead of calling the provider.

Invariants:
    - Satisfies the EmailSender protocol (same send_email signature as EmailClient)
    - Recipients listed in fail_for raise EmailDeliveryError (transport failure)
    - sent keeps every successful send in call order
    - fail_after=N lets N sends succeed, then every later send raises
"""

from dataclasses import dataclass, field

from newsletter.core.domain_types import SubscriberEmail
from newsletter.core.errors import EmailDeliveryError


@dataclass
class SentEmail:
    recipient: str
    subject: str
    html_content: str
    text_content: str


@dataclass
class FakeEmailSender:
    sent: list[SentEmail] = field(default_factory=list)
    fail_for: set[str] = field(default_factory=set)
    fail_all: bool = False
    fail_after: int | None = None

    async def send_email(
        self,
        recipient: SubscriberEmail,
        subject: str,
        html_content: str,
        text_content: str,
    ) -> None:
        exhausted = self.fail_after is not None and len(self.sent) >= self.fail_after
        if self.fail_all or exhausted or recipient.value in self.fail_for:
            raise EmailDeliveryError(f"provider rejected {recipient.value}")
        self.sent.append(SentEmail(
            recipient.value, subject, html_content, text_content,
        ))

    @property
    def recipients(self) -> list[str]:
        return [email.recipient for email in self.sent]
