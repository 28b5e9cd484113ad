"""Portal error taxonomy

Services raise these; main.py turns them into structured JSON responses
of the form {"ok": false, "error": <kind>, "message": <message>}.
"""

from typing import Optional


class PortalError(Exception):
    """Base class for every failure an operation reports to its caller"""

    kind = "PortalError"
    status_code = 500
    default_message = "Request failed"
    retryable = False

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body = {"ok": False, "error": self.kind, "message": self.message}
        if self.retryable:
            body["retryable"] = True
        return body


class InvalidInput(PortalError):
    """Missing or malformed required field"""

    kind = "InvalidInput"
    status_code = 400
    default_message = "Invalid payload"


class NotFound(PortalError):
    """Referenced entity id does not resolve"""

    kind = "NotFound"
    status_code = 404
    default_message = "Not found"


class Unauthorized(PortalError):
    """Credential mismatch"""

    kind = "Unauthorized"
    status_code = 401
    default_message = "Invalid username or password."


class AlreadyDecided(PortalError):
    """Entity is no longer pending; a concurrent or repeated decision lost"""

    kind = "AlreadyDecided"
    status_code = 409
    default_message = "This request has already been decided"


class StoreUnavailable(PortalError):
    """Transient backing-store fault. Not retried server-side."""

    kind = "StoreUnavailable"
    status_code = 503
    default_message = "Network error. Please retry."
    retryable = True
