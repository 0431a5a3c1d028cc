"""
Mail transports for the password reset email.

SmtpMailer delivers through an SMTP relay with aiosmtplib; LoggingMailer only
logs that a message was due, with the reset token redacted, and is the
development default.
"""

import logging
from email.message import EmailMessage
from typing import Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import aiosmtplib

from studio_auth.app.services.errors import MailDeliveryError
from studio_auth.app.services.mailer import Mailer

logger = logging.getLogger(__name__)

RESET_SUBJECT = "[Studio Booking] Password reset instructions"

RESET_TEXT_TEMPLATE = """{full_name},

We received a request to reset the password of your Studio Booking account.

Open the link below to choose a new password:
{reset_link}

This link is valid for 24 hours.

If you did not request a password reset, you can ignore this email.

Studio Booking Team
"""

RESET_HTML_TEMPLATE = """<html>
<body style="font-family: Arial, sans-serif;">
  <div style="width: 600px; margin: 0 auto;">
    <h2>Password reset</h2>
    <p>{full_name},</p>
    <p>We received a request to reset the password of your Studio Booking account.</p>
    <p><a href="{reset_link}" style="display: inline-block; padding: 10px 20px; background-color: #82C2A9; color: white; text-decoration: none; border-radius: 5px;">Reset password</a></p>
    <p>Or paste this URL into your browser:<br>{reset_link}</p>
    <p>This link is valid for 24 hours.</p>
    <p>If you did not request a password reset, you can ignore this email.</p>
    <p>Studio Booking Team</p>
  </div>
</body>
</html>
"""


def build_reset_message(
    *, sender: str, to_email: str, full_name: str, reset_link: str
) -> EmailMessage:
    """Plain text message with an HTML alternative"""
    name = full_name or to_email
    message = EmailMessage()
    message["From"] = sender
    message["To"] = to_email
    message["Subject"] = RESET_SUBJECT
    message.set_content(RESET_TEXT_TEMPLATE.format(full_name=name, reset_link=reset_link))
    message.add_alternative(
        RESET_HTML_TEMPLATE.format(full_name=name, reset_link=reset_link), subtype="html"
    )
    return message


class SmtpMailer(Mailer):
    """Mailer delivering through an SMTP relay"""

    def __init__(
        self,
        hostname: str,
        port: int,
        sender: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = False,
        timeout: float = 10.0,
    ):
        self.hostname = hostname
        self.port = port
        self.sender = sender
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    async def send_password_reset(
        self, *, to_email: str, full_name: str, reset_link: str
    ) -> None:
        message = build_reset_message(
            sender=self.sender,
            to_email=to_email,
            full_name=full_name,
            reset_link=reset_link,
        )

        try:
            await aiosmtplib.send(
                message,
                hostname=self.hostname,
                port=self.port,
                username=self.username or None,
                password=self.password or None,
                use_tls=self.use_tls,
                timeout=self.timeout,
            )
        except (aiosmtplib.SMTPException, OSError) as exc:
            raise MailDeliveryError(f"SMTP delivery to {self.hostname} failed") from exc


def redact_reset_link(reset_link: str) -> str:
    """Reset link with the token replaced, safe to write to logs"""
    parts = urlsplit(reset_link)
    query = [
        (key, "redacted" if key == "token" else value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
    ]
    return urlunsplit(parts._replace(query=urlencode(query)))


class LoggingMailer(Mailer):
    """Development mailer: logs the reset link, minus its token, instead of sending it"""

    def __init__(self, sender: str = "no-reply@studio-booking.example.com"):
        self.sender = sender

    async def send_password_reset(
        self, *, to_email: str, full_name: str, reset_link: str
    ) -> None:
        logger.info(
            "Password reset email not sent (log backend) from=%s link=%s",
            self.sender,
            redact_reset_link(reset_link),
        )
