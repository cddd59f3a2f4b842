"""
FastAPI dependencies for authentication and authorization.

These dependencies are used to protect the write endpoints.
"""

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from typing import Optional

from app.core.exceptions import UnauthorizedError
from app.core.security import decode_token

# HTTP Bearer token scheme (Authorization: Bearer <token>); missing header is
# reported through UnauthorizedError so it gets the standard error envelope
security = HTTPBearer(auto_error=False)


async def get_current_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> dict:
    """
    Extract and validate the JWT claims of the caller.

    Raises:
        UnauthorizedError: If the token is missing, invalid or has no subject
    """
    if credentials is None:
        raise UnauthorizedError("Unauthorized")

    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        raise UnauthorizedError("Unauthorized")

    if payload.get("sub") is None:
        raise UnauthorizedError("Unauthorized")

    return payload


async def get_admin_claims(claims: dict = Depends(get_current_claims)) -> dict:
    """
    Require an admin token.

    Raises:
        UnauthorizedError: If the caller is not an admin
    """
    if claims.get("is_admin") is not True:
        raise UnauthorizedError("Unauthorized")

    return claims
