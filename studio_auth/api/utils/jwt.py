from typing import Optional

from jose import JWTError, jwt

from config import ApplicationConfig
from studio_auth.domain.entities import AuthClaims


def decode_claims(token: str) -> Optional[AuthClaims]:
    """
    Verify an access token minted by the login service and extract claims.

    Accepts the login service's claim names (sub, isAdmin) as well as
    snake_case (user_id, is_admin).

    Args:
        token: JWT token string

    Returns:
        AuthClaims, or None if the token is invalid, expired or has no subject
    """
    try:
        payload = jwt.decode(
            token, ApplicationConfig.JWT_SECRET, algorithms=[ApplicationConfig.JWT_ALGORITHM]
        )
    except JWTError:
        return None

    user_id = payload.get("sub") or payload.get("user_id")
    if not user_id:
        return None

    is_admin = payload.get("isAdmin", payload.get("is_admin", False))
    return AuthClaims(user_id=str(user_id), is_admin=is_admin is True or is_admin == "true")
