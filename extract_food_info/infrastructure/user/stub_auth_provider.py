"""Stub authentication provider for local development and tests."""

from extract_food_info.domain.user.auth.ports.auth_provider import (
    AuthenticatedUser,
    AuthenticationError,
    IAuthProvider,
)


class StubAuthProvider(IAuthProvider):
    """Accept any non-blank token; the token itself becomes the subject.

    Never enable in production: AUTH_PROVIDER defaults to supabase.
    """

    def __init__(self, subject: str = "stub-user"):
        self.subject = subject

    async def verify_token(self, token: str) -> AuthenticatedUser:
        if not token or not token.strip():
            raise AuthenticationError("Empty token")
        return AuthenticatedUser(subject=self.subject)
