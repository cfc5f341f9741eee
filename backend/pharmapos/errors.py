# Overview: Error taxonomy shared by services and routes.

from __future__ import annotations


class PosError(Exception):
    """
    Base class for user-facing business errors.

    Every error carries a message, optional details and the HTTP status the
    routes answer with. None of these are retried automatically.
    """
    status_code = 400

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict:
        return {"error": self.message, "details": self.details}


class ValidationError(PosError):
    """Malformed or missing input. ``details['fields']`` maps field -> message."""
    status_code = 400

    @classmethod
    def for_fields(cls, errors: dict[str, str]) -> "ValidationError":
        first = next(iter(errors.values()))
        return cls(first, details={"fields": dict(errors)})


class AuthenticationRequiredError(PosError):
    status_code = 401


class PermissionDeniedError(PosError):
    status_code = 403


class NotFoundError(PosError):
    status_code = 404


class ConflictError(PosError):
    """Business rule conflict (e.g., duplicate email)."""
    status_code = 409


class StockInsufficientError(ConflictError):
    """A cart line or checkout would exceed available stock."""


class DependencyConflictError(ConflictError):
    """Deleting a record that other records still reference."""


class ExpiredProductError(PosError):
    """Hard block: the batch is past its expiry date."""
    status_code = 422


class ConfirmationRequiredError(PosError):
    """
    Soft block: the action needs an explicit user decision.

    ``details['confirmation']`` carries the token to send back.
    """
    status_code = 428

    def __init__(self, message: str, confirmation: dict, details: dict | None = None):
        details = dict(details or {})
        details["confirmation"] = confirmation
        super().__init__(message, details=details)
        self.confirmation = confirmation

    @property
    def token(self) -> str:
        return self.confirmation["token"]


class PrescriptionRequiredError(ConfirmationRequiredError):
    """The product requires a verified prescription before it can be sold."""
