"""
SMTP email sender adapter - Implements EmailSender protocol.

Sends the confirmation code as a multipart (plain text + HTML) message
through an SMTP relay. Failures are logged and reported as False; the
registration flow treats them as fatal and does not retry.
"""

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from vestra.config.settings import Settings

logger = logging.getLogger(__name__)

SUBJECT = "Confirm your email - Finance App"

TEXT_TEMPLATE = """\
Welcome to Finance App!

Thank you for registering. Use the following confirmation code to complete
your registration:

    {code}

This code will expire in {minutes} minutes.

If you didn't request this code, please ignore this email.
"""

HTML_TEMPLATE = """\
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
  <h1 style="color: #333; text-align: center;">Welcome to Finance App!</h1>
  <p style="color: #666; font-size: 16px;">
    Thank you for registering. Please use the following confirmation code to complete your registration:
  </p>
  <div style="background-color: #f5f5f5; padding: 20px; text-align: center; margin: 20px 0; border-radius: 8px;">
    <span style="font-size: 32px; font-weight: bold; letter-spacing: 8px; color: #333;">{code}</span>
  </div>
  <p style="color: #999; font-size: 14px; text-align: center;">
    This code will expire in {minutes} minutes.
  </p>
  <p style="color: #999; font-size: 12px; text-align: center; margin-top: 40px;">
    If you didn't request this code, please ignore this email.
  </p>
</div>
"""


class SmtpEmailSender:
    """
    Implements EmailSender protocol via smtplib.

    Uses structural subtyping - no explicit inheritance from Protocol.
    A new SMTP connection is opened per message.
    """

    def __init__(self, settings: Settings) -> None:
        self._host = settings.smtp_host
        self._port = settings.smtp_port
        self._username = settings.smtp_username
        self._password = settings.smtp_password
        self._use_tls = settings.smtp_use_tls
        self._timeout = settings.smtp_timeout_seconds
        self._from = settings.email_from
        self._expiry_minutes = max(1, settings.code_ttl_seconds // 60)

    def build_message(self, email: str, code: str) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = SUBJECT
        msg["From"] = self._from
        msg["To"] = email
        context = {"code": code, "minutes": self._expiry_minutes}
        msg.attach(MIMEText(TEXT_TEMPLATE.format(**context), "plain"))
        msg.attach(MIMEText(HTML_TEMPLATE.format(**context), "html"))
        return msg

    def send_confirmation_code(self, email: str, code: str) -> bool:
        """
        Send the confirmation code by email.

        Args:
            email: Recipient email address (normalized by domain layer)
            code: 6-digit confirmation code

        Returns:
            True if the relay accepted the message, False otherwise
        """
        msg = self.build_message(email, code)
        try:
            with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as server:
                if self._use_tls:
                    server.starttls()
                if self._username:
                    server.login(self._username, self._password or "")
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send confirmation email to {email}: {e}")
            return False

        logger.info(f"Confirmation email sent to {email}")
        return True
