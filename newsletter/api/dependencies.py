"""Request Dependencies — per-request objects injected into route handlers.

Invariants:
    - Every request gets its own RequestContext
    - An incoming X-Request-ID is reused (bounded length), otherwise a UUID4 is minted
"""

from fastapi import Header

from newsletter.core.request_context import RequestContext

MAX_REQUEST_ID_LENGTH = 128


def get_request_context(
    x_request_id: str | None = Header(None, alias="X-Request-ID"),
) -> RequestContext:
    if x_request_id and len(x_request_id) <= MAX_REQUEST_ID_LENGTH:
        return RequestContext(request_id=x_request_id)
    return RequestContext()
