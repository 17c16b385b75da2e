from typing import TYPE_CHECKING

from ...application.services.email_service import EmailService
from ...application.use_cases.email.deliver_email import DeliverEmailUseCase
from ...application.use_cases.email.send_appointment_email import SendAppointmentEmailUseCase
from ...application.use_cases.email.send_order_notifications import SendOrderNotificationEmailsUseCase
from ...domain.repositories.email_repository import EmailLogRepository, EmailSettingsRepository
from ...infrastructure.email.placeholder_replacer import PlaceholderReplacer
from ...infrastructure.email.smtp_email_sender import SmtpEmailSender

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class EmailProvider:
    """
    Email provider - registers the SMTP sender, the notification use cases
    shared by the order and appointment services, and the email service.
    """

    @staticmethod
    def register(container: "BaseContainer") -> None:
        container.register_singleton(SmtpEmailSender, SmtpEmailSender())
        container.register_singleton(PlaceholderReplacer, PlaceholderReplacer())

        deliver_email = DeliverEmailUseCase(
            email_sender=container.get(SmtpEmailSender),
            email_log_repository=container.get(EmailLogRepository),
        )
        container.register_singleton(
            SendOrderNotificationEmailsUseCase,
            SendOrderNotificationEmailsUseCase(
                email_settings_repository=container.get(EmailSettingsRepository),
                deliver_email=deliver_email,
                placeholder_replacer=container.get(PlaceholderReplacer),
            )
        )
        container.register_singleton(
            SendAppointmentEmailUseCase,
            SendAppointmentEmailUseCase(
                email_settings_repository=container.get(EmailSettingsRepository),
                deliver_email=deliver_email,
                placeholder_replacer=container.get(PlaceholderReplacer),
            )
        )

        container.register_singleton(
            EmailService,
            EmailService(
                email_settings_repository=container.get(EmailSettingsRepository),
                email_log_repository=container.get(EmailLogRepository),
                email_sender=container.get(SmtpEmailSender),
                placeholder_replacer=container.get(PlaceholderReplacer),
            )
        )
