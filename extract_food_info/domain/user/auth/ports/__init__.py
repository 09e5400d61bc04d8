"""Authentication ports (interfaces)."""

from extract_food_info.domain.user.auth.ports.auth_provider import (
    INVALID_TOKEN_MESSAGE,
    MISSING_HEADER_MESSAGE,
    AuthenticatedUser,
    AuthenticationError,
    IAuthProvider,
)

__all__ = [
    "INVALID_TOKEN_MESSAGE",
    "MISSING_HEADER_MESSAGE",
    "AuthenticatedUser",
    "AuthenticationError",
    "IAuthProvider",
]
