"""Pydantic Schemas — request validation for API endpoints.

Invariants:
    - Schemas validate shape at system boundary; domain rules live in core/domain_types

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence (ADR: DDD boundary)
"""
