"""Request Context — explicit correlation data handed to every service call.

Invariants:
    - One RequestContext per inbound request; never stored in module state
    - Only identifiers are recorded (request id, username, user id) — never secrets
    - log_extra() is the single source of logging `extra` fields for a request

Design Decisions:
    - Passed as an argument instead of a contextvar: call sites show exactly which
      operations are correlated, and tests build one directly
"""

from dataclasses import dataclass, field
from typing import Any
from uuid import uuid4

from newsletter.core.errors import ErrorContext


@dataclass
class RequestContext:
    request_id: str = field(default_factory=lambda: str(uuid4()))
    fields: dict[str, Any] = field(default_factory=dict)

    def record(self, **values: Any) -> None:
        """Attach identifiers discovered while handling the request."""
        self.fields.update({k: str(v) for k, v in values.items()})

    def log_extra(self, **values: Any) -> dict[str, Any]:
        return {"request_id": self.request_id, **self.fields, **values}

    def error_context(self, operation: str) -> ErrorContext:
        return ErrorContext(request_id=self.request_id, operation=operation)
