"""
Email Service
=============

Application service for the email configuration screens: SMTP server,
administrator address, templates, placeholders and the log of sent emails.
"""
from typing import Dict, List, Optional

from sitecms.application.use_cases.email.manage_email_settings import (
    CheckSmtpConnectionUseCase,
    ListEmailTemplatesUseCase,
    UpdateEmailSettingsUseCase,
    UpdateEmailTemplateUseCase,
    UpdateSmtpSettingsUseCase,
)
from sitecms.domain.models.email import EmailLog, EmailSettings, EmailTemplate, EmailTemplateType, SmtpSettings
from sitecms.domain.repositories.email_repository import EmailLogRepository, EmailSettingsRepository
from sitecms.infrastructure.email.placeholder_replacer import PlaceholderReplacer
from sitecms.infrastructure.email.smtp_email_sender import SendResult, SmtpEmailSender

MAX_EMAIL_LOGS = 500


class EmailService:
    def __init__(
        self,
        email_settings_repository: EmailSettingsRepository,
        email_log_repository: EmailLogRepository,
        email_sender: SmtpEmailSender,
        placeholder_replacer: PlaceholderReplacer,
    ):
        self._repository = email_settings_repository
        self._logs = email_log_repository
        self._replacer = placeholder_replacer
        self._update_smtp = UpdateSmtpSettingsUseCase(email_settings_repository)
        self._check_smtp = CheckSmtpConnectionUseCase(email_settings_repository, email_sender)
        self._update_email_settings = UpdateEmailSettingsUseCase(email_settings_repository)
        self._update_template = UpdateEmailTemplateUseCase(email_settings_repository)
        self._list_templates = ListEmailTemplatesUseCase(email_settings_repository)

    def get_smtp_settings(self) -> SmtpSettings:
        return self._repository.get_smtp_settings()

    def update_smtp_settings(
        self,
        host: str,
        port: int,
        username: str,
        password: Optional[str],
        encryption: str,
    ) -> SmtpSettings:
        return self._update_smtp.execute(host, port, username, password, encryption)

    def check_smtp_connection(self) -> SendResult:
        """Log in to the configured SMTP server without sending anything."""
        return self._check_smtp.execute()

    def get_email_settings(self) -> Optional[EmailSettings]:
        return self._repository.get_email_settings()

    def update_email_settings(self, administrator_email: str) -> EmailSettings:
        return self._update_email_settings.execute(administrator_email)

    def list_templates(self, appointment_only: Optional[bool] = None) -> List[EmailTemplate]:
        return self._list_templates.execute(appointment_only)

    def get_template(self, template_type: str) -> EmailTemplate:
        return self._repository.get_template(EmailTemplateType.from_string(template_type))

    def update_template(
        self,
        template_type: str,
        subject: Optional[str] = None,
        body: Optional[str] = None,
        enabled: Optional[bool] = None,
    ) -> EmailTemplate:
        return self._update_template.execute(template_type, subject=subject, body=body, enabled=enabled)

    def list_placeholders(self) -> Dict[str, List[Dict[str, str]]]:
        """Placeholders usable in order and appointment templates."""
        return {
            "order": self._replacer.get_order_placeholders(),
            "appointment": self._replacer.get_appointment_placeholders(),
        }

    def list_email_logs(self, limit: int = 50) -> List[EmailLog]:
        """
        Latest email send attempts, most recent first.

        Raises:
            ValueError: If ``limit`` is not between 1 and MAX_EMAIL_LOGS
        """
        if not 1 <= limit <= MAX_EMAIL_LOGS:
            raise ValueError(f"limit must be between 1 and {MAX_EMAIL_LOGS}")
        return self._logs.find_recent(limit)
