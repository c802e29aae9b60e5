"""
Domain errors raised by the TinySteps core.

The API layer maps each kind to an HTTP status; the core never deals in
status codes.
"""


class TinyStepsError(Exception):
    """Base class for all domain errors."""

    pass


class ValidationError(TinyStepsError):
    """Raised when input is missing, malformed or out of range."""

    pass


class NotFoundError(TinyStepsError):
    """Raised when a record does not exist or is not owned by the caller.

    Both cases share this error so callers cannot probe for other
    families' records.
    """

    pass


class ForbiddenError(TinyStepsError):
    """Raised when a precondition such as parent consent is not met."""

    pass
