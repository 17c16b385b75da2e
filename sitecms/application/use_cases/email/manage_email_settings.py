"""
Email Settings Use Cases
========================

SMTP configuration, administrator address and template editing.
"""
import logging
from typing import List, Optional

from sitecms.domain.models.email import (
    PASSWORD_MASK,
    EmailSettings,
    EmailTemplate,
    EmailTemplateType,
    SmtpSettings,
)
from sitecms.domain.repositories.email_repository import EmailSettingsRepository
from sitecms.infrastructure.email.smtp_email_sender import SendResult, SmtpEmailSender

logger = logging.getLogger(__name__)


class UpdateSmtpSettingsUseCase:
    """
    Store SMTP settings.

    An empty or masked password keeps the stored one, so the admin form can
    be saved without re-typing it.
    """

    def __init__(self, repository: EmailSettingsRepository):
        self._repository = repository

    def execute(
        self,
        host: str,
        port: int,
        username: str,
        password: Optional[str],
        encryption: str,
    ) -> SmtpSettings:
        if not password or password == PASSWORD_MASK:
            password = self._repository.get_smtp_settings().password
        settings = SmtpSettings(
            host=host,
            port=port,
            username=username,
            password=password,
            encryption=encryption,
        )
        self._repository.save_smtp_settings(settings)
        return settings


class CheckSmtpConnectionUseCase:
    def __init__(self, repository: EmailSettingsRepository, email_sender: SmtpEmailSender):
        self._repository = repository
        self._sender = email_sender

    def execute(self) -> SendResult:
        result = self._sender.test_connection(self._repository.get_smtp_settings())
        logger.info("SMTP connection test: %s", "ok" if result.success else result.error_message)
        return result


class UpdateEmailSettingsUseCase:
    def __init__(self, repository: EmailSettingsRepository):
        self._repository = repository

    def execute(self, administrator_email: str) -> EmailSettings:
        settings = EmailSettings(administrator_email=administrator_email)
        self._repository.save_email_settings(settings)
        return settings


class UpdateEmailTemplateUseCase:
    """Partial update of a template; unspecified fields keep their value."""

    def __init__(self, repository: EmailSettingsRepository):
        self._repository = repository

    def execute(
        self,
        template_type: str,
        subject: Optional[str] = None,
        body: Optional[str] = None,
        enabled: Optional[bool] = None,
    ) -> EmailTemplate:
        current = self._repository.get_template(EmailTemplateType.from_string(template_type))
        changes = {
            name: value
            for name, value in (("subject", subject), ("body", body), ("enabled", enabled))
            if value is not None
        }
        updated = current.with_changes(**changes)
        self._repository.save_template(updated)
        logger.info("Email template '%s' updated", updated.type.value)
        return updated


class ListEmailTemplatesUseCase:
    def __init__(self, repository: EmailSettingsRepository):
        self._repository = repository

    def execute(self, appointment_only: Optional[bool] = None) -> List[EmailTemplate]:
        templates = self._repository.get_all_templates()
        if appointment_only is not None:
            templates = [t for t in templates if t.type.is_appointment == appointment_only]
        return templates
