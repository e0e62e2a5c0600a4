from dataclasses import dataclass


@dataclass
class LoungeError(Exception):
    """Base error carrying a user-facing message and the HTTP status it maps to."""
    detail: str
    status_code: int = 400

    def __str__(self) -> str:
        return self.detail


class ValidationError(LoungeError):
    """Malformed input, rejected before any side effect."""


@dataclass
class NotFoundError(LoungeError):
    status_code: int = 404


@dataclass
class ConflictError(LoungeError):
    """The request is well formed but the current state refuses it."""
    status_code: int = 409


@dataclass
class UpstreamServiceError(LoungeError):
    """A payment or mail provider failed or is misconfigured."""
    status_code: int = 502
