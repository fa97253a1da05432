"""Bearer token validation against an OIDC provider's signing keys."""

from __future__ import annotations

import logging
import time
from typing import Any

import aiohttp
from fastapi import HTTPException, status
from jose import jwk, jwt
from jose.constants import Algorithms
from jose.exceptions import ExpiredSignatureError, JWSSignatureError, JWTClaimsError, JWTError

logger = logging.getLogger("directory_auth")

_jwks_cache: dict[str, tuple[float, dict[str, Any]]] = {}


async def get_jwks(jwks_url: str, ttl_seconds: int) -> dict[str, Any]:
    """Fetch the key set, reusing a cached copy younger than ``ttl_seconds``.

    When the provider cannot be reached a stale cached copy is still returned.
    """
    now = time.time()
    cached = _jwks_cache.get(jwks_url)
    if cached and now - cached[0] < ttl_seconds:
        return cached[1]

    logger.info("Fetching JWKS from %s", jwks_url)
    try:
        timeout = aiohttp.ClientTimeout(total=15)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(jwks_url) as response:
                response.raise_for_status()
                jwks = await response.json()
    except aiohttp.ClientError as e:
        logger.error("Failed to fetch JWKS: %s", e)
        if cached:
            logger.warning("Using expired JWKS from cache for %s", jwks_url)
            return cached[1]
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Could not fetch signing keys",
        ) from e

    _jwks_cache[jwks_url] = (now, jwks)
    return jwks


def clear_jwks_cache() -> None:
    _jwks_cache.clear()


def find_signing_key(token: str, jwks: dict[str, Any]) -> dict[str, Any]:
    try:
        header = jwt.get_unverified_header(token)
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token header: {e}",
        ) from e

    kid = header.get("kid")
    if not kid:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has no 'kid' in header",
        )

    for key in jwks.get("keys", []):
        if key.get("kid") == kid:
            return key

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=f"No matching signing key for kid: {kid}",
    )


async def validate_token(
    token: str,
    *,
    issuer: str,
    audience: str,
    jwks_url: str,
    jwks_ttl_seconds: int = 24 * 60 * 60,
) -> dict[str, Any]:
    if not issuer or not audience or not jwks_url:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Missing authentication configuration",
        )

    jwks = await get_jwks(jwks_url, jwks_ttl_seconds)
    signing_key = find_signing_key(token, jwks)
    algorithm = signing_key.get("alg", Algorithms.RS256)
    public_key = jwk.construct(signing_key, algorithm=algorithm)

    try:
        return jwt.decode(
            token,
            public_key,
            algorithms=[algorithm],
            audience=audience,
            issuer=issuer,
            options={"require_exp": True, "require_iss": True, "require_aud": True},
        )
    except ExpiredSignatureError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token is expired",
        ) from e
    except JWSSignatureError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token signature",
        ) from e
    except JWTClaimsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token claims: {e}",
        ) from e
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
        ) from e


def extract_roles_from_token(payload: dict[str, Any]) -> list[str]:
    roles = payload.get("roles", [])
    if not isinstance(roles, list):
        return []
    return [str(r) for r in roles if isinstance(r, str | int)]
