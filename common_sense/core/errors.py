"""
Exception hierarchy for the Common Sense API.

Data-access functions raise these; the application translates them into
HTTP responses carrying ``message`` as the ``detail`` field.
"""


class CommonSenseError(Exception):
    """Base exception for all Common Sense errors."""

    status_code = 500
    default_message = "Something went wrong. Please try again."

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(CommonSenseError):
    """Malformed or out-of-range input."""

    status_code = 400
    default_message = "Invalid input provided."


class AuthenticationError(CommonSenseError):
    """Missing, invalid or expired session."""

    status_code = 401
    default_message = "You must be signed in to continue."


class AuthorizationError(CommonSenseError):
    """Authenticated, but not a party to the resource."""

    status_code = 403
    default_message = "You do not have access to this conversation."


class NotFoundError(CommonSenseError):
    status_code = 404
    default_message = "We could not find what you were looking for."


class ConflictError(CommonSenseError):
    status_code = 409
    default_message = "That already exists."


class ConfigurationError(CommonSenseError):
    """Missing or invalid environment configuration. Raised at startup only."""
    pass
