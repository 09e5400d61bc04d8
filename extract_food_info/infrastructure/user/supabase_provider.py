"""Supabase authentication provider implementation."""

import asyncio
import hashlib
from typing import Any, Dict, Optional

import aiohttp
import jwt
import structlog
from cachetools import TTLCache
from jwt.exceptions import ExpiredSignatureError
from jwt.exceptions import InvalidTokenError as JWTError

from extract_food_info.domain.user.auth.ports.auth_provider import (
    AuthenticatedUser,
    AuthenticationError,
    IAuthProvider,
)
from extract_food_info.infrastructure import config

logger = structlog.get_logger(__name__)

SUPABASE_AUDIENCE = "authenticated"


class SupabaseAuthProvider(IAuthProvider):
    """Supabase authentication provider implementation.

    Two verification modes:
    - Local: HS256 signature check with the project JWT secret (no I/O)
    - Remote: GET {SUPABASE_URL}/auth/v1/user with the bearer token,
      successful lookups cached for a short TTL

    Environment Variables:
    - SUPABASE_URL: Project URL (e.g., "https://xyz.supabase.co")
    - SUPABASE_ANON_KEY: Sent as `apikey` on remote lookups
    - SUPABASE_JWT_SECRET: Enables local verification when set

    Examples:
        >>> provider = SupabaseAuthProvider(jwt_secret="...")
        >>> user = await provider.verify_token(token)
        >>> user.subject
        'a1b2c3...'
    """

    def __init__(
        self,
        url: Optional[str] = None,
        anon_key: Optional[str] = None,
        jwt_secret: Optional[str] = None,
        cache_ttl: int = 60,
        request_timeout_s: float = 5.0,
    ):
        """Initialize Supabase provider.

        Args:
            url: Project URL (defaults to env SUPABASE_URL)
            anon_key: Anonymous API key (defaults to env SUPABASE_ANON_KEY)
            jwt_secret: HS256 secret (defaults to env SUPABASE_JWT_SECRET)
            cache_ttl: Remote lookup cache TTL in seconds
            request_timeout_s: Timeout for the remote lookup

        Raises:
            ValueError: If neither a JWT secret nor a project URL is configured
        """
        self.url = (url or config.get_supabase_url() or "").rstrip("/") or None
        self.anon_key = anon_key or config.get_supabase_anon_key()
        self.jwt_secret = jwt_secret or config.get_supabase_jwt_secret()
        self.request_timeout_s = request_timeout_s

        if not self.jwt_secret and not self.url:
            raise ValueError("SUPABASE_URL or SUPABASE_JWT_SECRET is required")

        # Keyed by token digest, never by the raw token
        self.user_cache: TTLCache[str, AuthenticatedUser] = TTLCache(
            maxsize=1024, ttl=cache_ttl
        )

    async def verify_token(self, token: str) -> AuthenticatedUser:
        """Verify a Supabase access token.

        Raises:
            AuthenticationError: If the token is invalid, expired, or the
                remote lookup rejects it or fails
        """
        if not token or not token.strip():
            raise AuthenticationError("Empty token")

        if self.jwt_secret:
            return self._verify_locally(token)
        return await self._verify_remotely(token)

    def _verify_locally(self, token: str) -> AuthenticatedUser:
        try:
            claims: Dict[str, Any] = jwt.decode(
                token,
                self.jwt_secret,
                algorithms=["HS256"],
                audience=SUPABASE_AUDIENCE,
                options={"require": ["sub", "exp"]},
            )
        except ExpiredSignatureError as e:
            raise AuthenticationError("Token has expired") from e
        except JWTError as e:
            raise AuthenticationError(f"JWT verification failed: {e}") from e

        return AuthenticatedUser(subject=claims["sub"], email=claims.get("email"))

    async def _verify_remotely(self, token: str) -> AuthenticatedUser:
        cache_key = hashlib.sha256(token.encode("utf-8")).hexdigest()
        cached = self.user_cache.get(cache_key)
        if cached is not None:
            return cached

        endpoint = f"{self.url}/auth/v1/user"
        headers = {"Authorization": f"Bearer {token}"}
        if self.anon_key:
            headers["apikey"] = self.anon_key

        try:
            async with aiohttp.ClientSession() as session:
                timeout = aiohttp.ClientTimeout(total=self.request_timeout_s)
                async with session.get(endpoint, headers=headers, timeout=timeout) as resp:
                    if resp.status in (401, 403):
                        raise AuthenticationError(f"Supabase rejected token (HTTP {resp.status})")
                    if resp.status >= 400:
                        logger.warning("Supabase user lookup failed", status=resp.status)
                        raise AuthenticationError(f"Supabase lookup failed (HTTP {resp.status})")
                    payload: Dict[str, Any] = await resp.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning("Supabase user lookup network error", error=str(e))
            raise AuthenticationError(f"Network error: {e}") from e

        subject = payload.get("id")
        if not subject:
            raise AuthenticationError("Supabase user payload missing 'id'")

        user = AuthenticatedUser(subject=subject, email=payload.get("email"))
        self.user_cache[cache_key] = user
        return user
