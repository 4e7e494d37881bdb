"""Core Layer — domain types, validation, tokens and error taxonomy. No IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure; randomness only in subscription_token

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
