"""User infrastructure: authentication adapters."""

from extract_food_info.infrastructure.user.stub_auth_provider import StubAuthProvider
from extract_food_info.infrastructure.user.supabase_provider import SupabaseAuthProvider

__all__ = ["StubAuthProvider", "SupabaseAuthProvider"]
