"""Authentication provider port (interface)."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

INVALID_TOKEN_MESSAGE = "Invalid token"
MISSING_HEADER_MESSAGE = "Missing authorization header"


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity of the caller once the bearer credential is verified."""

    subject: str
    email: Optional[str] = None


class IAuthProvider(ABC):
    """Authentication provider interface.

    Abstracts the identity service (Supabase Auth in production). Allows
    mocking in tests and swapping providers without touching the API layer.

    Examples:
        >>> class StaticProvider(IAuthProvider):
        ...     async def verify_token(self, token: str) -> AuthenticatedUser:
        ...         return AuthenticatedUser(subject="user-1")
    """

    @abstractmethod
    async def verify_token(self, token: str) -> AuthenticatedUser:
        """Verify a bearer token and return the caller identity.

        Args:
            token: Access token from the Authorization header (no scheme)

        Returns:
            AuthenticatedUser with at minimum the subject identifier

        Raises:
            AuthenticationError: Token is invalid, expired, or unverifiable
        """
        pass


class AuthenticationError(Exception):
    """Bearer credential missing or rejected.

    `reason` is for logs; `public_message` is what the HTTP boundary
    returns to the client.
    """

    def __init__(self, reason: str, public_message: str = INVALID_TOKEN_MESSAGE):
        """Initialize with failure reason.

        Args:
            reason: Human-readable reason for failure
            public_message: Message safe to return to the caller
        """
        self.reason = reason
        self.public_message = public_message
        super().__init__(f"Authentication failed: {reason}")
