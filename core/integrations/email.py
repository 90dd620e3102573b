"""Email integration utilities for sending emails."""

import logging
import smtplib
from datetime import datetime, timezone
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from html import escape
from typing import List, Optional

from core.config import MailConfig

logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    """Raised when the SMTP server rejects or cannot receive a message."""


class EmailService:
    """Email service for sending emails via SMTP."""

    def __init__(self, config: MailConfig):
        """
        Initialize email service.

        Args:
            config: SMTP host, credentials and sender identity
        """
        self.config = config

    def send_email(
        self,
        to_email: str | List[str],
        subject: str,
        body: str,
        html: bool = False,
        reply_to: Optional[str] = None,
    ) -> bool:
        """
        Send an email.

        Args:
            to_email: Recipient email address(es)
            subject: Email subject
            body: Email body
            html: Whether body is HTML
            reply_to: Reply-to email address

        Returns:
            True if email sent successfully

        Raises:
            EmailDeliveryError: If the message could not be delivered
        """
        msg = MIMEMultipart()
        msg['From'] = f"{self.config.from_name} <{self.config.from_email}>"

        # Handle multiple recipients
        if isinstance(to_email, list):
            msg['To'] = ", ".join(to_email)
            recipients = list(to_email)
        else:
            msg['To'] = to_email
            recipients = [to_email]

        msg['Subject'] = subject
        if reply_to:
            msg['Reply-To'] = reply_to

        msg.attach(MIMEText(body, 'html' if html else 'plain'))

        try:
            with smtplib.SMTP(self.config.smtp_host, self.config.smtp_port) as server:
                if self.config.use_tls:
                    server.starttls()
                if self.config.smtp_user and self.config.smtp_password:
                    server.login(self.config.smtp_user, self.config.smtp_password)
                server.send_message(msg, from_addr=self.config.from_email, to_addrs=recipients)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email '{subject}': {e}")
            raise EmailDeliveryError(str(e)) from e

        logger.info(f"Email sent: {subject}")
        return True


# Pre-configured email templates
class EmailTemplates:
    """Pre-configured email templates."""

    @staticmethod
    def verification_otp(otp: str, valid_minutes: int) -> dict:
        """OTP email sent on registration and on resend."""
        year = datetime.now(timezone.utc).year
        return {
            'subject': 'Verify Your Showbiz App Account',
            'body': f"""
                <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px; color: #333;">
                    <h2 style="color: #1a73e8;">Welcome to Showbiz App!</h2>
                    <p>To complete your registration, please use the following One-Time Password (OTP):</p>
                    <h3 style="background: #f1f3f4; padding: 10px; border-radius: 5px; text-align: center; color: #1a73e8;">
                        {escape(otp)}
                    </h3>
                    <p>This OTP is valid for {valid_minutes} minutes. Please do not share it with anyone.</p>
                    <p>If you did not request this OTP, please ignore this email.</p>
                    <p style="margin-top: 20px;">Best regards,<br>The Showbiz App Team</p>
                    <p style="font-size: 12px; color: #777;">&copy; {year} Showbiz App. All rights reserved.</p>
                </div>
            """,
            'html': True
        }

    @staticmethod
    def password_reset(reset_token: str, valid_minutes: int) -> dict:
        """Password reset email template."""
        return {
            'subject': 'Password Reset',
            'body': f"""
                <div style="font-family: Arial, sans-serif;">
                    <p>We received a request to reset your password.</p>
                    <p>Your reset code is: <strong>{escape(reset_token)}</strong></p>
                    <p>It expires in {valid_minutes} minutes. If you didn't request this, please ignore this email.</p>
                </div>
            """,
            'html': True
        }
