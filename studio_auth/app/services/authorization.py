"""
Authorization Gate

Decides whether a caller may run a privileged operation. Pure: the caller's
claims come from the upstream authentication layer, nothing is looked up.
"""

from typing import Optional

from studio_auth.domain.entities import AuthClaims, AuthorizationOutcome, Capability


def allow(
    claims: Optional[AuthClaims], capability: Capability = Capability.admin
) -> AuthorizationOutcome:
    """
    Evaluate claims against the capability an operation requires.

    Args:
        claims: Decoded caller claims, None for an anonymous caller
        capability: What the guarded operation requires

    Returns:
        unauthenticated when there are no claims, forbidden when the caller
        is known but lacks the capability, allowed otherwise
    """
    if claims is None:
        return AuthorizationOutcome.unauthenticated

    if capability == Capability.admin and not claims.is_admin:
        return AuthorizationOutcome.forbidden

    return AuthorizationOutcome.allowed
