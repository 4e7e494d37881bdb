"""Services Layer — subscription workflow, confirmation, credentials, newsletter fan-out.

Invariants:
    - Services own transactions and error classification; routes stay thin
    - Every service call receives an explicit RequestContext

Design Decisions:
    - One module per operation for locality (ADR: no god objects)
"""
