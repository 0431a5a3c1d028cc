"""
Studio Auth Domain Enums

Enumeration types used by the authorization gate.
"""

from enum import Enum


class Capability(str, Enum):
    """What a guarded operation requires of its caller"""

    admin = "admin"


class AuthorizationOutcome(str, Enum):
    """Tri-state result of the authorization gate"""

    allowed = "allowed"
    unauthenticated = "unauthenticated"
    forbidden = "forbidden"
