"""Error taxonomy for the promotional marketplace.

Every error carries a stable code and the HTTP status it maps to. The
handlers registered in server.py render them into the standard error
envelope; messages are safe to show to clients.
"""

from typing import Optional


class PromotionError(Exception):
    """Base exception for promotional-flow failures."""

    code = "ERROR"
    http_status = 500

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def to_response(self) -> dict:
        return {
            "status": self.http_status,
            "error": {
                "code": self.code,
                "message": self.message,
            },
        }


class ValidationError(PromotionError):
    """Malformed or out-of-range input."""
    code = "ValidationError"
    http_status = 400


class AuthError(PromotionError):
    """Missing or invalid session."""
    code = "Unauthorized"
    http_status = 401


class NotFoundError(PromotionError):
    """Missing entity, or one the caller does not own."""
    code = "NotFound"
    http_status = 404


class ConflictError(PromotionError):
    """Status transition attempted on a proposal that is no longer pending."""
    code = "AlreadyProcessed"
    http_status = 409

    def __init__(self, message: str = "Proposal has already been processed", code: Optional[str] = None):
        super().__init__(message, code)


class InternalError(PromotionError):
    """Transaction or storage failure. State is guaranteed unchanged."""
    code = "InternalError"
    http_status = 500
