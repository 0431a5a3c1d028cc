"""
Collaborator failures.

Adapters translate their library-specific exceptions into these so the use
cases can tell an unavailable collaborator apart from a programming error.
"""


class StoreError(Exception):
    """Credential or token store unavailable, timed out or rejected a write"""


class MailDeliveryError(Exception):
    """Reset email could not be handed to the mail transport"""
