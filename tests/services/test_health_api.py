"""Health & Home API — liveness, readiness and the landing page."""


async def test_health_check_returns_200_with_empty_body(client):
    res = await client.get("/health_check")

    assert res.status_code == 200
    assert res.content == b""


async def test_readiness_reports_database(client):
    res = await client.get("/health_check/ready")

    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"


async def test_home_page_renders(client):
    res = await client.get("/")

    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/html")
