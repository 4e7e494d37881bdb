"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Routes translate HTTP to service calls; classification lives in core/errors

Design Decisions:
    - Thin routes delegate to services (ADR: impureim sandwich)
"""
