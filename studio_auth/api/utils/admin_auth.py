"""
Admin Authorization

Resolves caller claims from the bearer token and runs the authorization gate
before admin-only endpoints.
"""

from typing import Optional

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from studio_auth.api.error import ClientError
from studio_auth.api.utils.jwt import decode_claims
from studio_auth.app.services.authorization import allow
from studio_auth.domain.entities import AuthClaims, AuthorizationOutcome, Capability
from studio_auth.libs.result import Error

bearer = HTTPBearer(auto_error=False)


async def get_auth_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
) -> Optional[AuthClaims]:
    """Claims of the caller, or None for a missing or invalid bearer token"""
    if credentials is None:
        return None
    return decode_claims(credentials.credentials)


async def require_admin(
    claims: Optional[AuthClaims] = Depends(get_auth_claims),
) -> AuthClaims:
    """
    Allow only administrators through.

    Raises:
        ClientError: 401 if the caller is anonymous, 403 if not an admin

    Returns:
        The admin caller's claims
    """
    outcome = allow(claims, Capability.admin)

    if outcome == AuthorizationOutcome.unauthenticated:
        raise ClientError(
            Error("UNAUTHENTICATED", "Authentication required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    if outcome == AuthorizationOutcome.forbidden:
        raise ClientError(
            Error("FORBIDDEN", "Administrator privileges required"),
            status_code=status.HTTP_403_FORBIDDEN,
        )

    return claims
