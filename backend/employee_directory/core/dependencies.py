from __future__ import annotations

import logging

from fastapi import Depends, Header, HTTPException, status

from employee_directory.core.auth import extract_roles_from_token, validate_token
from employee_directory.core.config import settings
from employee_directory.models.auth import UserInfo

logger = logging.getLogger(__name__)

WRITE_ROLES = ("admin", "hr")


async def get_current_user(authorization: str | None = Header(None)) -> UserInfo:
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = authorization.split(" ", 1)[1]

    try:
        payload = await validate_token(
            token,
            issuer=settings.AUTH_ISSUER,
            audience=settings.AUTH_AUDIENCE,
            jwks_url=settings.AUTH_JWKS_URL,
            jwks_ttl_seconds=settings.AUTH_JWKS_TTL_SECONDS,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error("Token validation error: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    return UserInfo(
        id=payload.get("sub") or payload.get("oid"),
        name=payload.get("name"),
        email=payload.get("email") or payload.get("preferred_username"),
        roles=extract_roles_from_token(payload),
    )


def require_role(*roles: str):
    async def _check_role(user: UserInfo = Depends(get_current_user)) -> UserInfo:  # noqa: B008
        if not user.has_any_role(*roles):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Insufficient permissions. Required: {', '.join(roles)}",
            )
        return user

    return _check_role


require_writer = require_role(*WRITE_ROLES)
