from abc import ABC, abstractmethod


class Mailer(ABC):
    """Outbound mail interface - application layer"""

    @abstractmethod
    async def send_password_reset(
        self, *, to_email: str, full_name: str, reset_link: str
    ) -> None:
        """Send the password reset email.

        Raises:
            MailDeliveryError: the message could not be handed to the transport
        """
        pass
