"""
Token validation for sessions issued by the hosted auth provider (PocketBase).
"""

from __future__ import annotations

import hashlib
import logging
import threading
import time
from typing import Any, cast

import httpx
import jwt
from jwt.exceptions import DecodeError

logger = logging.getLogger(__name__)

SUPERUSERS_COLLECTION = "_superusers"


def decode_claims_unverified(token: str) -> dict[str, Any]:
    """Decode JWT claims WITHOUT verification. For inspection only."""
    try:
        return cast(dict[str, Any], jwt.decode(token, options={"verify_signature": False}))
    except DecodeError:
        return {}


class PocketBaseTokenValidator:
    """Validates user tokens by calling the provider's auth-refresh endpoint."""

    def __init__(self, pocketbase_url: str, auth_collection: str = "users", cache_ttl: int = 60):
        self.pocketbase_url = pocketbase_url.rstrip("/")
        self.auth_collection = auth_collection
        self._validation_cache: dict[str, tuple[dict[str, Any], float]] = {}  # token_hash -> (claims, expiry)
        self._cache_ttl = cache_ttl
        # validate_token runs in worker threads
        self._cache_lock = threading.Lock()

    def validate_token(self, token: str) -> dict[str, Any] | None:
        """
        Validate a token and return the identity claims, or None when invalid.

        Claims returned: sub (user id), email, name, email_verified.
        """
        unverified = decode_claims_unverified(token)
        if not unverified:
            logger.debug("Bearer token is not a JWT")
            return None

        # Admin tokens are for the PocketBase dashboard only
        collection = str(unverified.get("collectionName") or unverified.get("collectionId") or "")
        if collection == SUPERUSERS_COLLECTION or unverified.get("type") == "admin":
            logger.warning("SECURITY: Rejecting superuser token; admin tokens cannot be used as user sessions")
            return None

        exp = unverified.get("exp")
        if isinstance(exp, (int, float)) and exp < time.time():
            logger.debug("Token has expired")
            return None

        cache_key = hashlib.sha256(token.encode()).hexdigest()[:32]
        with self._cache_lock:
            cached = self._validation_cache.get(cache_key)
            if cached is not None:
                claims, expiry = cached
                if time.time() < expiry:
                    return claims
                self._validation_cache.pop(cache_key, None)

        try:
            response = httpx.post(
                f"{self.pocketbase_url}/api/collections/{self.auth_collection}/auth-refresh",
                headers={"Authorization": f"Bearer {token}"},
                timeout=5.0,
            )
        except httpx.TimeoutException:
            logger.warning("Token validation timed out")
            return None
        except httpx.HTTPError as e:
            logger.error(f"Error validating token: {type(e).__name__}: {e}")
            return None

        if response.status_code != 200:
            logger.debug(f"auth-refresh returned status {response.status_code}")
            return None

        record = response.json().get("record", {})
        claims = {
            "sub": record.get("id", ""),
            "email": record.get("email", ""),
            "name": record.get("name", ""),
            "email_verified": record.get("verified", False),
        }
        self._remember(cache_key, claims)
        logger.debug(f"Token validated for user {claims['sub']}")
        return claims

    def _remember(self, cache_key: str, claims: dict[str, Any]) -> None:
        """Cache claims and drop entries whose TTL has passed."""
        now = time.time()
        with self._cache_lock:
            expired = [key for key, (_, expiry) in self._validation_cache.items() if expiry <= now]
            for key in expired:
                del self._validation_cache[key]
            self._validation_cache[cache_key] = (claims, now + self._cache_ttl)


def extract_bearer_token(authorization_header: str | None) -> str | None:
    """Extract bearer token from Authorization header."""
    if not authorization_header:
        return None

    parts = authorization_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None

    return parts[1]
