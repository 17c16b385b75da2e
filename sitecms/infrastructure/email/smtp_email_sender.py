"""
SMTP Email Sender
=================

Sends plain-text emails with smtplib. Failures are reported in a
SendResult rather than raised, so a broken mail server never fails the
request that triggered the email.
"""
import logging
import smtplib
import ssl
from dataclasses import dataclass
from email.mime.text import MIMEText
from email.utils import formataddr, make_msgid
from typing import Optional

from sitecms.domain.models.email import EncryptionType, SmtpSettings

logger = logging.getLogger(__name__)

SMTP_TIMEOUT_SECONDS = 10
SSL_PORT = 465


@dataclass
class SendResult:
    success: bool
    error_message: Optional[str] = None


class SmtpEmailSender:
    """Thin wrapper around smtplib driven by the stored SmtpSettings."""

    def _connect(self, settings: SmtpSettings) -> smtplib.SMTP:
        context = ssl.create_default_context()
        use_ssl = settings.port == SSL_PORT or settings.encryption == EncryptionType.SSL
        if use_ssl:
            server = smtplib.SMTP_SSL(
                settings.host, settings.port, context=context, timeout=SMTP_TIMEOUT_SECONDS
            )
        else:
            server = smtplib.SMTP(settings.host, settings.port, timeout=SMTP_TIMEOUT_SECONDS)
        try:
            if not use_ssl and settings.encryption == EncryptionType.TLS:
                server.starttls(context=context)
            server.login(settings.username, settings.password)
        except Exception:
            server.close()
            raise
        return server

    def send(
        self,
        settings: SmtpSettings,
        sender: str,
        recipient: str,
        subject: str,
        body: str,
        sender_name: Optional[str] = None,
    ) -> SendResult:
        """
        Send one email.

        Args:
            settings: SMTP configuration (must be configured)
            sender: From address
            recipient: To address
            subject: Subject line
            body: Plain-text body
            sender_name: Display name for the From header

        Returns:
            SendResult with ``success`` False and an error message on failure
        """
        if not settings.is_configured():
            return SendResult(False, "SMTP settings not configured")

        message = MIMEText(body, "plain", "utf-8")
        message["Subject"] = subject
        message["From"] = formataddr((sender_name, sender)) if sender_name else sender
        message["To"] = recipient
        message["Message-ID"] = make_msgid()

        try:
            server = self._connect(settings)
            try:
                server.sendmail(sender, [recipient], message.as_string())
            finally:
                server.quit()
        except smtplib.SMTPAuthenticationError as e:
            logger.error("SMTP auth error: %s", e)
            return SendResult(False, "Authentication failed. Check username and password.")
        except smtplib.SMTPRecipientsRefused as e:
            logger.error("SMTP recipient refused: %s", e)
            return SendResult(False, f"Recipient refused: {recipient}")
        except (smtplib.SMTPException, ssl.SSLError, OSError) as e:
            logger.error("Failed to send email to %s: %s", recipient, e)
            return SendResult(False, str(e) or e.__class__.__name__)

        logger.info("Email '%s' sent to %s", subject, recipient)
        return SendResult(True)

    def test_connection(self, settings: SmtpSettings) -> SendResult:
        """Connect and authenticate without sending anything."""
        if not settings.is_configured():
            return SendResult(False, "SMTP settings not configured")
        try:
            server = self._connect(settings)
            server.quit()
        except smtplib.SMTPAuthenticationError as e:
            logger.error("SMTP auth error: %s", e)
            return SendResult(False, "Authentication failed. Check username and password.")
        except smtplib.SMTPConnectError as e:
            logger.error("SMTP connect error: %s", e)
            return SendResult(False, f"Could not connect to {settings.host}:{settings.port}. Check host and port.")
        except ssl.SSLError as e:
            logger.error("SSL error: %s", e)
            return SendResult(False, "SSL/TLS error. Check the encryption setting or use port 465.")
        except (smtplib.SMTPException, OSError) as e:
            logger.error("SMTP error: %s", e)
            return SendResult(False, f"Connection failed: {e}")
        return SendResult(True)
