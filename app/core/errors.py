"""Domain errors raised by the stores and the session layer."""


class TodoAppError(Exception):
    """Base class; ``message`` is safe to show to the user."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class ValidationError(TodoAppError):
    """Bad input shape or length."""


class DuplicateUserError(TodoAppError):
    def __init__(self, message: str = "Username already exists"):
        super().__init__(message)


class InvalidCredentials(TodoAppError):
    # Same text for unknown user and wrong password
    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(message)


class LoginRequired(TodoAppError):
    """Raised by protected-route dependencies; turned into a redirect to /login."""
