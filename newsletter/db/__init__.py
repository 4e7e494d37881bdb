"""Database Layer — declarative Base and standalone session factory.

Invariants:
    - Every model inherits newsletter.db.base.Base (one metadata for Alembic)
    - All sessions are async (AsyncSession)

Design Decisions:
    - asyncpg driver for PostgreSQL (ADR: native async, no thread pool overhead)
    - The request-scoped pool lives in infrastructure/database.py; this package only
      holds what scripts and migrations import
"""
