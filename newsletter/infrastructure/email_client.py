"""Email Client — sends transactional emails through the provider's HTTP API.

Invariants:
    - Every request is bounded by the configured timeout (no unbounded waits)
    - Non-2xx responses, connection errors and timeouts all raise EmailDeliveryError
    - No retries: a failed send is reported once and the caller decides
    - The API key travels only in the X-ElasticEmail-ApiKey header; never logged

Design Decisions:
    - One shared httpx.AsyncClient per process: connection pooling across requests
    - Wire format is PascalCase JSON (From/To/Subject/HtmlBody/TextBody) per provider API
    - Singleton created in lifespan, exposed via get_email_client() dependency so
      tests can override it (same pattern as infrastructure/database.py)
"""

import logging

import httpx
from pydantic import SecretStr

from newsletter.core.domain_types import SubscriberEmail
from newsletter.core.errors import EmailDeliveryError

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-ElasticEmail-ApiKey"


class EmailClient:
    """Async client for the email provider."""

    def __init__(
        self,
        base_url: str,
        sender: SubscriberEmail,
        authorization_token: SecretStr,
        timeout_seconds: float,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url
        self.sender = sender
        self._authorization_token = authorization_token
        self._http_client = http_client or httpx.AsyncClient(timeout=timeout_seconds)

    async def send_email(
        self,
        recipient: SubscriberEmail,
        subject: str,
        html_content: str,
        text_content: str,
    ) -> None:
        """POST one email to the provider; raise EmailDeliveryError on any failure."""
        body = {
            "From": self.sender.value,
            "To": recipient.value,
            "Subject": subject,
            "HtmlBody": html_content,
            "TextBody": text_content,
        }
        try:
            response = await self._http_client.post(
                self.base_url,
                headers={
                    API_KEY_HEADER: self._authorization_token.get_secret_value(),
                },
                json=body,
            )
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.warning("Email request timed out", extra={"recipient": recipient.value})
            raise EmailDeliveryError("request timed out") from e
        except httpx.HTTPStatusError as e:
            logger.warning(
                f"Email provider returned {e.response.status_code}",
                extra={"recipient": recipient.value},
            )
            raise EmailDeliveryError(
                f"provider returned {e.response.status_code}",
            ) from e
        except httpx.HTTPError as e:
            raise EmailDeliveryError(f"request failed: {type(e).__name__}") from e

    async def aclose(self) -> None:
        await self._http_client.aclose()


# Singleton (initialized on startup)
email_client: EmailClient | None = None


def init_email_client(
    base_url: str,
    sender_email: str,
    authorization_token: SecretStr,
    timeout_milliseconds: int,
) -> None:
    global email_client
    email_client = EmailClient(
        base_url=base_url,
        sender=SubscriberEmail.parse(sender_email),
        authorization_token=authorization_token,
        timeout_seconds=timeout_milliseconds / 1000,
    )


async def close_email_client() -> None:
    global email_client
    if email_client:
        await email_client.aclose()
        email_client = None


def get_email_client() -> EmailClient:
    """FastAPI dependency for the shared email client."""
    if not email_client:
        raise RuntimeError("Email client not initialized")
    return email_client
