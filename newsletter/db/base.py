"""SQLAlchemy Declarative Base — shared metadata for subscriptions, tokens and users.

Invariants:
    - Every ORM model inherits from Base
    - Base.metadata is what Alembic autogenerate and the test suite's create_all read

Design Decisions:
    - Separate file for Base: models and alembic/env.py import it without pulling
      in the request-scoped engine
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all newsletter ORM models."""
