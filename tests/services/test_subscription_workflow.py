"""Subscription Workflow — verifies atomic signup and confirmation email.

Invariants:
    - A valid signup stores exactly one pending_confirmation row plus one token
    - Invalid input writes nothing and sends nothing
    - The confirmation email links to /subscriptions/confirm with the stored token
    - A failed token insert rolls the subscriber back
    - A failed email keeps the stored signup
    - Connection acquisition or commit failures store nothing and send nothing
"""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

import newsletter.services.subscription_workflow as workflow_module
from newsletter.core.errors import (
    InsertSubscriberError, PoolError, SendEmailError, StoreTokenError,
    SubscriberValidationError, TransactionCommitError,
)
from newsletter.core.request_context import RequestContext
from newsletter.models.subscription import Subscription
from newsletter.models.subscription_token import SubscriptionToken
from newsletter.services.subscription_workflow import (
    CONFIRMATION_SUBJECT, build_confirmation_link, subscribe,
)

BASE_URL = "http://127.0.0.1:8000"


async def _subscription_count(db) -> int:
    return (await db.execute(select(func.count()).select_from(Subscription))).scalar_one()


async def _token_for(db, subscriber_id) -> str:
    result = await db.execute(
        select(SubscriptionToken.subscription_token).where(
            SubscriptionToken.subscriber_id == subscriber_id,
        ),
    )
    return result.scalar_one()


async def test_subscribe_stores_pending_subscriber(test_db, email_sender):
    subscriber_id = await subscribe(
        "mj hohams", "mj_hohams@gmail.com", test_db, email_sender, BASE_URL,
        RequestContext(),
    )

    row = (await test_db.execute(
        select(Subscription.email, Subscription.name, Subscription.status)
        .where(Subscription.id == subscriber_id),
    )).one()
    assert row.email == "mj_hohams@gmail.com"
    assert row.name == "mj hohams"
    assert row.status == "pending_confirmation"


async def test_subscribe_stores_normalized_input(test_db, email_sender):
    subscriber_id = await subscribe(
        "  mj hohams ", " mj_hohams@gmail.com ", test_db, email_sender, BASE_URL,
        RequestContext(),
    )
    row = (await test_db.execute(
        select(Subscription.email, Subscription.name).where(Subscription.id == subscriber_id),
    )).one()
    assert (row.email, row.name) == ("mj_hohams@gmail.com", "mj hohams")


async def test_confirmation_email_contains_stored_token_link(test_db, email_sender):
    subscriber_id = await subscribe(
        "mj hohams", "mj_hohams@gmail.com", test_db, email_sender, BASE_URL,
        RequestContext(),
    )

    token = await _token_for(test_db, subscriber_id)
    link = f"{BASE_URL}/subscriptions/confirm?subscription_token={token}"
    assert len(email_sender.sent) == 1
    email = email_sender.sent[0]
    assert email.recipient == "mj_hohams@gmail.com"
    assert email.subject == CONFIRMATION_SUBJECT
    assert link in email.html_content
    assert link in email.text_content


@pytest.mark.parametrize(
    "name, email",
    [
        ("", "ursula@gmail.com"),
        ("Ursula", ""),
        ("Ursula", "definitely-not-an-email"),
        ("<Ursula>", "ursula@gmail.com"),
    ],
)
async def test_invalid_input_writes_nothing(test_db, email_sender, name, email):
    with pytest.raises(SubscriberValidationError):
        await subscribe(name, email, test_db, email_sender, BASE_URL, RequestContext())

    assert await _subscription_count(test_db) == 0
    assert email_sender.sent == []


async def test_duplicate_email_fails_on_insert(test_db, email_sender):
    await subscribe(
        "Ursula", "ursula@gmail.com", test_db, email_sender, BASE_URL, RequestContext(),
    )
    with pytest.raises(InsertSubscriberError):
        await subscribe(
            "Ursula", "ursula@gmail.com", test_db, email_sender, BASE_URL,
            RequestContext(),
        )

    assert await _subscription_count(test_db) == 1
    assert len(email_sender.sent) == 1


async def test_token_failure_rolls_back_subscriber(test_db, email_sender, monkeypatch):
    monkeypatch.setattr(
        workflow_module, "generate_subscription_token", lambda: "A" * 25,
    )
    await subscribe(
        "Ursula", "ursula@gmail.com", test_db, email_sender, BASE_URL, RequestContext(),
    )
    with pytest.raises(StoreTokenError):
        await subscribe(
            "Octavia", "octavia@gmail.com", test_db, email_sender, BASE_URL,
            RequestContext(),
        )

    emails = (await test_db.execute(select(Subscription.email))).scalars().all()
    assert emails == ["ursula@gmail.com"]


async def test_email_failure_keeps_stored_signup(test_db, email_sender):
    email_sender.fail_all = True

    with pytest.raises(SendEmailError):
        await subscribe(
            "Ursula", "ursula@gmail.com", test_db, email_sender, BASE_URL,
            RequestContext(),
        )

    status = (await test_db.execute(
        select(Subscription.status).where(Subscription.email == "ursula@gmail.com"),
    )).scalar_one()
    assert status == "pending_confirmation"


def test_confirmation_link_ignores_trailing_slash():
    assert build_confirmation_link("http://localhost:8000/", "abc") == (
        "http://localhost:8000/subscriptions/confirm?subscription_token=abc"
    )


async def _connection_lost(self, *args, **kwargs):
    raise OperationalError("SELECT 1", {}, Exception("connection lost"))


async def test_connection_failure_raises_pool_error(test_db, email_sender, monkeypatch):
    monkeypatch.setattr(AsyncSession, "connection", _connection_lost)
    with pytest.raises(PoolError):
        await subscribe(
            "Ursula", "ursula@gmail.com", test_db, email_sender, BASE_URL,
            RequestContext(),
        )
    monkeypatch.undo()

    assert await _subscription_count(test_db) == 0
    assert email_sender.sent == []


async def test_commit_failure_rolls_back_signup(test_db, email_sender, monkeypatch):
    monkeypatch.setattr(AsyncSession, "commit", _connection_lost)
    with pytest.raises(TransactionCommitError):
        await subscribe(
            "Ursula", "ursula@gmail.com", test_db, email_sender, BASE_URL,
            RequestContext(),
        )
    monkeypatch.undo()

    assert await _subscription_count(test_db) == 0
    tokens = (await test_db.execute(select(SubscriptionToken))).scalars().all()
    assert tokens == []
    assert email_sender.sent == []
