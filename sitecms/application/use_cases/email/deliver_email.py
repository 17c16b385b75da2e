"""
Deliver Email
=============

Shared step of the notification use cases: send one templated email and
record the attempt in the email log.
"""
import logging

from pymongo.errors import PyMongoError

from sitecms.domain.models.email import EmailLog, EmailLogStatus, EmailTemplate, SmtpSettings
from sitecms.domain.repositories.email_repository import EmailLogRepository
from sitecms.infrastructure.email.smtp_email_sender import SendResult, SmtpEmailSender

logger = logging.getLogger(__name__)


class DeliverEmailUseCase:
    """Send a rendered template and log the outcome."""

    def __init__(self, email_sender: SmtpEmailSender, email_log_repository: EmailLogRepository):
        self._sender = email_sender
        self._logs = email_log_repository

    def execute(
        self,
        smtp_settings: SmtpSettings,
        template: EmailTemplate,
        recipient: str,
        subject: str,
        body: str,
        reference_id: str,
    ) -> SendResult:
        """
        Args:
            smtp_settings: Configured SMTP settings; the username is the sender
            template: Template the email was rendered from
            recipient: To address
            subject: Rendered subject
            body: Rendered body
            reference_id: Order or appointment id the email is about

        Returns:
            Result of the SMTP send
        """
        result = self._sender.send(
            smtp_settings,
            sender=smtp_settings.username,
            recipient=recipient,
            subject=subject,
            body=body,
        )
        log = EmailLog(
            reference_id=reference_id,
            template_type=template.type,
            recipient=recipient,
            subject=subject,
            status=EmailLogStatus.SENT if result.success else EmailLogStatus.FAILED,
            error_message=result.error_message,
        )
        try:
            self._logs.create(log)
        except PyMongoError as e:
            logger.error("Could not record email log for %s: %s", reference_id, e)
        return result
