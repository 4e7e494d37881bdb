"""Route Modules — one file per HTTP resource.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes parse HTTP input and call one service; no business logic here
    - Failures surface as NewsletterError subclasses, mapped in api/error_handlers.py

Design Decisions:
    - Explicit registration in main.py over auto-discovery (ADR: ExMA anti-pattern)
"""
