"""Authentication provider factory.

Selects the provider from AUTH_PROVIDER ("supabase" default, "stub").
"""

from typing import Optional

from extract_food_info.domain.user.auth.ports.auth_provider import IAuthProvider
from extract_food_info.infrastructure import config
from extract_food_info.infrastructure.user.stub_auth_provider import StubAuthProvider
from extract_food_info.infrastructure.user.supabase_provider import SupabaseAuthProvider


def create_auth_provider() -> IAuthProvider:
    """Create auth provider based on AUTH_PROVIDER env var.

    Raises:
        ValueError: On unknown provider or incomplete Supabase config
    """
    mode = config.get_auth_provider()

    if mode == "stub":
        return StubAuthProvider()
    if mode == "supabase":
        return SupabaseAuthProvider()

    raise ValueError(f"Unknown AUTH_PROVIDER: {mode!r}")


_auth_provider: Optional[IAuthProvider] = None


def get_auth_provider() -> IAuthProvider:
    global _auth_provider
    if _auth_provider is None:
        _auth_provider = create_auth_provider()
    return _auth_provider


def reset_auth_provider() -> None:
    global _auth_provider
    _auth_provider = None
