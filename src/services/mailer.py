"""Transactional email over SMTP."""

import logging
import smtplib
from abc import ABC, abstractmethod
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from html import escape

from src.config import Settings
from src.services.exceptions import MailDeliveryError

logger = logging.getLogger(__name__)

_BUTTON_STYLE = (
    "background-color: #007bff; color: white; padding: 10px 20px; text-decoration: none; "
    "border-radius: 5px; font-size: 16px; display: inline-block;"
)
_WRAPPER_STYLE = (
    "font-family: Arial, sans-serif; padding: 20px; border: 1px solid #ddd; "
    "border-radius: 10px; max-width: 600px; margin: auto;"
)


class Mailer(ABC):
    """Interface for sending a single email with text and HTML bodies."""

    @abstractmethod
    def send(self, to: str, subject: str, text: str, html: str) -> None:
        """Send one message or raise MailDeliveryError."""


class SmtpMailer(Mailer):
    """Mailer that delivers through the configured SMTP server."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def build_message(self, to: str, subject: str, text: str, html: str) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["From"] = self.settings.smtp_sender_email
        msg["To"] = to
        msg["Subject"] = subject
        msg.attach(MIMEText(text, "plain"))
        msg.attach(MIMEText(html, "html"))
        return msg

    def send(self, to: str, subject: str, text: str, html: str) -> None:
        """
        Send an email.

        Raises MailDeliveryError if the SMTP server cannot be reached or
        rejects the message.
        """
        msg = self.build_message(to, subject, text, html)
        try:
            with smtplib.SMTP(
                self.settings.smtp_host,
                self.settings.smtp_port,
                timeout=self.settings.smtp_timeout_seconds,
            ) as server:
                if self.settings.smtp_use_tls:
                    server.starttls()
                if self.settings.smtp_username and self.settings.smtp_password:
                    server.login(self.settings.smtp_username, self.settings.smtp_password)
                server.sendmail(self.settings.smtp_sender_email, [to], msg.as_string())
        except (smtplib.SMTPException, OSError) as e:
            raise MailDeliveryError(f"Failed to send email to {to}: {e}") from e

        logger.info(f"Sent '{subject}' email to {to}")


def build_verification_email(name: str, link: str) -> tuple[str, str, str]:
    """Return (subject, text, html) for the email-verification message."""
    subject = "Verify Your Email Address"
    text = (
        f"Hello {name},\n\n"
        f"Please verify your email using the following link:\n\n{link}\n\n"
        "Thank you!"
    )
    html = f"""
<div style="{_WRAPPER_STYLE}">
  <h2 style="color: #333;">Hello <strong>{escape(name)}</strong>,</h2>
  <p style="font-size: 16px; color: #555;">Please verify your email by clicking the button below:</p>
  <p style="text-align: center;"><a href="{escape(link)}" style="{_BUTTON_STYLE}">Verify Email</a></p>
  <p style="font-size: 14px; color: #777;">If you didn't request this, you can ignore this email.</p>
  <p style="font-size: 14px; color: #777;">Thank you!</p>
</div>
"""
    return subject, text, html


def build_password_reset_email(name: str, link: str, expires_minutes: int) -> tuple[str, str, str]:
    """Return (subject, text, html) for the password-reset message."""
    subject = "Reset Your Password"
    text = (
        f"Hello {name},\n\n"
        "We received a request to reset your password. "
        f"Please use the link below to set a new password:\n\n{link}\n\n"
        f"This link is valid for {expires_minutes} minutes.\n\n"
        "If you did not request this, please ignore this email.\n\n"
        "Thank you!"
    )
    html = f"""
<div style="{_WRAPPER_STYLE}">
  <h2 style="color: #333;">Hello <strong>{escape(name)}</strong>,</h2>
  <p style="font-size: 16px; color: #555;">We received a request to reset your password.</p>
  <p style="font-size: 16px; color: #555;">Click the button below to reset your password:</p>
  <p style="text-align: center;"><a href="{escape(link)}" style="{_BUTTON_STYLE}">Reset Password</a></p>
  <p style="font-size: 14px; color: #777;">This link will expire in {expires_minutes} minutes.</p>
  <p style="font-size: 14px; color: #777;">If you did not request this, you can ignore this email.</p>
  <p style="font-size: 14px; color: #777;">Thank you!</p>
</div>
"""
    return subject, text, html
