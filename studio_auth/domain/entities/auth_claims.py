"""
AuthClaims

Caller identity decoded from the upstream login service's access token.
Ephemeral: built per request, never stored.
"""

from pydantic import BaseModel, ConfigDict


class AuthClaims(BaseModel):
    """Identity claims of an authenticated caller"""

    model_config = ConfigDict(frozen=True)

    user_id: str
    is_admin: bool = False
