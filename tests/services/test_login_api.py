"""Login & Admin API — verifies session login, flash messages and the dashboard gate.

Invariants:
    - Successful login → 303 to /admin/dashboard, dashboard greets the user
    - Failed login → 303 to /login, flash shown once on the next GET /login
    - Dashboard without a session → 303 to /login
    - Unexpected credential failure → generic flash, never a 500
"""

import uuid

from sqlalchemy import delete

from newsletter.api.routes.login import render_login_form
from newsletter.models.user import User

from tests.services.factories import TEST_PASSWORD, TEST_USERNAME


async def _login(client, username: str, password: str):
    return await client.post(
        "/login", data={"username": username, "password": password},
    )


async def test_login_form_renders(client):
    res = await client.get("/login")

    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/html")
    assert 'name="username"' in res.text
    assert 'name="password"' in res.text


async def test_successful_login_redirects_to_dashboard(client, seed_user):
    res = await _login(client, TEST_USERNAME, TEST_PASSWORD)

    assert res.status_code == 303
    assert res.headers["location"] == "/admin/dashboard"

    dashboard = await client.get("/admin/dashboard")
    assert dashboard.status_code == 200
    assert f"Welcome {TEST_USERNAME}!" in dashboard.text


async def test_failed_login_flashes_message_once(client, seed_user):
    res = await _login(client, TEST_USERNAME, "wrong-password")

    assert res.status_code == 303
    assert res.headers["location"] == "/login"

    first = await client.get("/login")
    assert "Authentication failed" in first.text
    second = await client.get("/login")
    assert "Authentication failed" not in second.text


async def test_unknown_user_gets_same_flash(client, seed_user):
    res = await _login(client, "nobody", TEST_PASSWORD)

    assert res.status_code == 303
    assert res.headers["location"] == "/login"
    assert "Authentication failed" in (await client.get("/login")).text


async def test_failed_login_does_not_grant_dashboard(client, seed_user):
    await _login(client, TEST_USERNAME, "wrong-password")

    res = await client.get("/admin/dashboard")
    assert res.status_code == 303
    assert res.headers["location"] == "/login"


async def test_unexpected_failure_flashes_generic_message(client, test_db):
    test_db.add(User(
        user_id=uuid.uuid4(), username="broken", password_hash="not-a-phc-string",
    ))
    await test_db.commit()

    res = await _login(client, "broken", "anything")

    assert res.status_code == 303
    assert res.headers["location"] == "/login"
    assert "Something went wrong" in (await client.get("/login")).text


async def test_dashboard_without_session_redirects_to_login(client):
    res = await client.get("/admin/dashboard")

    assert res.status_code == 303
    assert res.headers["location"] == "/login"


async def test_dashboard_for_deleted_user_returns_500(client, test_db, seed_user):
    await _login(client, TEST_USERNAME, TEST_PASSWORD)
    await test_db.execute(delete(User).where(User.user_id == seed_user.user_id))
    await test_db.commit()

    res = await client.get("/admin/dashboard")
    assert res.status_code == 500


async def test_missing_login_fields_return_400(client):
    res = await client.post("/login", data={"username": TEST_USERNAME})
    assert res.status_code == 400


def test_flash_message_is_html_escaped():
    page = render_login_form("<script>alert('x')</script>")
    assert "<script>" not in page
    assert "&lt;script&gt;" in page


def test_login_form_without_flash_has_no_notice():
    assert "<i>" not in render_login_form(None)
