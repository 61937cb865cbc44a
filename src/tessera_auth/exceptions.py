"""Authentication exceptions.

These exceptions are raised by the tessera_auth package and should be
caught and handled by the application layer (AuthenticationService).
"""


class AuthError(Exception):
    """Base exception for all authentication errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class InvalidTokenError(AuthError):
    """Raised when a JWT token is invalid, tampered with, or malformed."""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class TokenExpiredError(InvalidTokenError):
    """Raised when a JWT token is well-formed and signed but past its expiry."""

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message)
