"""
Authentication and authorization dependencies for FastAPI.

The identity used by every workflow comes from the verified bearer token,
never from the request body.
"""

from typing import List, Optional

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.core.auth import decode_access_token
from src.core.logger import logger
from src.models.user import UserRole

# Security scheme
security = HTTPBearer(auto_error=False)


class CurrentUser:
    """
    Authenticated caller as described by the token claims.
    """
    def __init__(self, user_id: str, email: str, roles: List[str] = None):
        self.user_id = user_id
        self.email = email
        self.roles = roles or []

    def has_role(self, role: str) -> bool:
        return role in self.roles

    def is_admin(self) -> bool:
        return self.has_role(UserRole.ADMIN.value)

    @property
    def owner_scope(self) -> Optional[str]:
        """User id to restrict ownership checks to; None for admins."""
        return None if self.is_admin() else self.user_id


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CurrentUser:
    """
    FastAPI dependency to get the current authenticated user.

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")

    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.ExpiredSignatureError:
        logger.warning("Expired JWT token")
        raise _unauthorized("Token has expired")
    except jwt.InvalidTokenError as e:
        logger.warning("JWT validation error", metadata={"reason": str(e)})
        raise _unauthorized("Could not validate credentials")

    user_id = payload["sub"]
    logger.debug("User authenticated", user_id=user_id)
    return CurrentUser(
        user_id=user_id,
        email=payload.get("email", ""),
        roles=payload.get("roles", []),
    )


def require_role(required_role: str):
    """
    Dependency factory to require a specific role.

    Usage:
        @router.post("/products")
        async def create_product(user: CurrentUser = Depends(require_role("ADMIN"))):
            ...
    """
    async def role_checker(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if not current_user.has_role(required_role):
            logger.warning(
                "Access denied: user lacks required role",
                user_id=current_user.user_id,
                metadata={"required_role": required_role, "user_roles": current_user.roles},
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied: requires {required_role} role",
            )
        return current_user

    return role_checker


# Convenience dependency for admin-only endpoints
require_admin = require_role(UserRole.ADMIN.value)
