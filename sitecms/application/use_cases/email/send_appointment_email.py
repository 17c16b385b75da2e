"""
Send Appointment Email Use Case
===============================

Renders an appointment template and sends it to the client, or to the
administrator for the "new appointment" notification.
"""
import logging
from typing import Optional

from sitecms.application.use_cases.email.deliver_email import DeliverEmailUseCase
from sitecms.application.use_cases.email.send_order_notifications import (
    EMAIL_SETTINGS_NOT_CONFIGURED,
    SMTP_NOT_CONFIGURED,
)
from sitecms.domain.models.appointment import Appointment
from sitecms.domain.models.email import EmailTemplateType
from sitecms.domain.repositories.email_repository import EmailSettingsRepository
from sitecms.infrastructure.email.placeholder_replacer import PlaceholderReplacer
from sitecms.infrastructure.email.smtp_email_sender import SendResult

logger = logging.getLogger(__name__)

ADMIN_RECIPIENT_TEMPLATES = (EmailTemplateType.APPOINTMENT_ADMIN_NEW,)


class SendAppointmentEmailUseCase:
    def __init__(
        self,
        email_settings_repository: EmailSettingsRepository,
        deliver_email: DeliverEmailUseCase,
        placeholder_replacer: PlaceholderReplacer,
    ):
        self._settings = email_settings_repository
        self._deliver = deliver_email
        self._replacer = placeholder_replacer

    def execute(self, template_type: EmailTemplateType, appointment: Appointment) -> Optional[SendResult]:
        """
        Send one appointment email.

        Returns:
            None when the template is disabled, otherwise the send result
        """
        template_type = EmailTemplateType.from_string(template_type)
        if not template_type.is_appointment:
            raise ValueError(f"'{template_type.value}' is not an appointment template")

        template = self._settings.get_template(template_type)
        if not template.enabled:
            return None

        smtp = self._settings.get_smtp_settings()
        if not smtp.is_configured():
            logger.warning("Appointment %s: SMTP not configured, %s not sent", appointment.id, template_type.value)
            return SendResult(False, SMTP_NOT_CONFIGURED)

        if template_type in ADMIN_RECIPIENT_TEMPLATES:
            email_settings = self._settings.get_email_settings()
            if email_settings is None:
                return SendResult(False, EMAIL_SETTINGS_NOT_CONFIGURED)
            recipient = email_settings.administrator_email
        else:
            recipient = appointment.client_info.email

        return self._deliver.execute(
            smtp,
            template,
            recipient=recipient,
            subject=self._replacer.replace_appointment_placeholders(template.subject, appointment),
            body=self._replacer.replace_appointment_placeholders(template.body, appointment),
            reference_id=appointment.id,
        )

    def notify(self, template_type: EmailTemplateType, appointment: Appointment) -> bool:
        """Best-effort variant of ``execute``: failures are logged, never raised."""
        try:
            result = self.execute(template_type, appointment)
        except Exception as e:
            logger.error(
                "Appointment %s: %s email failed: %s", appointment.id, template_type.value, e, exc_info=True
            )
            return False
        if result is not None and not result.success:
            logger.warning(
                "Appointment %s: %s email not sent: %s",
                appointment.id, template_type.value, result.error_message,
            )
        return bool(result and result.success)
