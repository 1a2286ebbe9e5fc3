"""Single result type shared by the retrieval and ingestion services."""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests
from sqlalchemy.exc import SQLAlchemyError

STORE = "store"
FETCH = "fetch"
UNEXPECTED = "unexpected"


def classify_error(exc):
    if isinstance(exc, SQLAlchemyError):
        return STORE
    if isinstance(exc, requests.RequestException):
        return FETCH
    return UNEXPECTED


@dataclass
class ServiceResult:
    success: bool
    payload: Dict[str, Any] = field(default_factory=dict)
    error_kind: Optional[str] = None
    error: Optional[str] = None
    # fields echoed in a failure body so clients always see the same keys
    failure_defaults: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, **payload):
        return cls(success=True, payload=payload)

    @classmethod
    def failure(cls, exc, **defaults):
        return cls(
            success=False,
            error_kind=classify_error(exc),
            error=str(exc),
            failure_defaults=defaults,
        )

    @property
    def status_code(self):
        return 200 if self.success else 500

    def to_response(self):
        if self.success:
            body = {"success": True}
            body.update(self.payload)
        else:
            body = {"success": False, "error": self.error, "error_kind": self.error_kind}
            body.update(self.failure_defaults)
        return body, self.status_code
