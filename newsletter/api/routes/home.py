"""Home Route — GET / (static landing page)."""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter(tags=["home"])

HOME_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta http-equiv="content-type" content="text/html; charset=utf-8">
    <title>Home</title>
</head>
<body>
    <p>Welcome to our newsletter!</p>
</body>
</html>
"""


@router.get("/", response_class=HTMLResponse)
async def home():
    return HTMLResponse(HOME_PAGE)
