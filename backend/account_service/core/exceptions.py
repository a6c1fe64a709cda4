"""
Error taxonomy of the account service.

Each error carries a ``message`` that is safe to return to API clients.
Store-level detail goes to the server log, never into ``message``.
"""


class AccountError(Exception):
    """Base class for all account service failures."""

    message = "Request failed"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(AccountError):
    """A required field is missing or empty."""

    message = "Missing required fields"

    def __init__(self, fields: list[str] | None = None, message: str | None = None):
        self.fields = list(fields or [])
        if message is None and self.fields:
            message = f"Missing required fields: {', '.join(self.fields)}"
        super().__init__(message)


class ConflictError(AccountError):
    """Username or email is already registered."""

    message = "Username or email already exists"


class InvalidCredentials(AccountError):
    """Unknown email or wrong password. Deliberately the same error for both."""

    message = "Invalid email or password"


class NotFound(AccountError):
    message = "User not found"


class StorageError(AccountError):
    """The relational store (or upload storage) failed."""

    message = "Storage failure"


class UpstreamUnavailable(AccountError):
    """The store could not be reached at startup or health check."""

    message = "Database unavailable"
