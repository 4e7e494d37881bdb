"""Infrastructure Layer — database, email provider, password-hash workers, logging.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All external calls wrapped with timeout and error mapping

Design Decisions:
    - Thin wrappers over raw clients (ADR: single responsibility)
"""
