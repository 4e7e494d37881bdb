"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real database or email provider
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("HMAC_SECRET", "test-only-session-signing-secret")
os.environ.setdefault("EMAIL_CLIENT_BASE_URL", "https://email.invalid/v4/emails/transactional")
os.environ.setdefault("EMAIL_CLIENT_AUTHORIZATION_TOKEN", "test-email-api-key")
os.environ.setdefault("APPLICATION_BASE_URL", "http://127.0.0.1:8000")
