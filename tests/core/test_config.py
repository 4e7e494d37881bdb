"""Settings — verifies URL normalization and sender validation."""

import pytest
from pydantic import ValidationError

from newsletter.config import Settings


def test_postgres_url_uses_asyncpg_driver():
    settings = Settings(database_url="postgresql://app:secret@db:5432/newsletter")
    assert settings.database_url == "postgresql+asyncpg://app:secret@db:5432/newsletter"


def test_asyncpg_url_is_left_untouched():
    url = "postgresql+asyncpg://app:secret@db:5432/newsletter"
    assert Settings(database_url=url).database_url == url


def test_invalid_sender_email_is_rejected():
    with pytest.raises(ValidationError):
        Settings(email_client_sender_email="not-an-email")


def test_secrets_are_masked_in_repr():
    settings = Settings(email_client_authorization_token="super-secret-key")
    assert "super-secret-key" not in repr(settings)
