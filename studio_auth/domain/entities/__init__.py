"""
Studio Auth Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import AuthorizationOutcome, Capability

# Export all entities
from .user import User
from .password_reset_token import PasswordResetToken
from .auth_claims import AuthClaims

__all__ = [
    # Enums
    "AuthorizationOutcome",
    "Capability",
    # Entities
    "User",
    "PasswordResetToken",
    "AuthClaims",
]
