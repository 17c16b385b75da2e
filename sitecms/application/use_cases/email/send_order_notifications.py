"""
Send Order Notification Emails Use Case
=======================================

After checkout, the administrator and the purchaser each receive an email
rendered from their template, when that template is enabled.
"""
import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from sitecms.application.use_cases.email.deliver_email import DeliverEmailUseCase
from sitecms.domain.models.email import EmailTemplateType
from sitecms.domain.models.order import Order
from sitecms.domain.repositories.email_repository import EmailSettingsRepository
from sitecms.infrastructure.email.placeholder_replacer import PlaceholderReplacer

logger = logging.getLogger(__name__)

SMTP_NOT_CONFIGURED = "SMTP settings not configured"
EMAIL_SETTINGS_NOT_CONFIGURED = "Email settings not configured"


@dataclass
class OrderNotificationResult:
    admin_email_sent: bool = False
    purchaser_email_sent: bool = False
    admin_error: Optional[str] = None
    purchaser_error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class SendOrderNotificationEmailsUseCase:
    def __init__(
        self,
        email_settings_repository: EmailSettingsRepository,
        deliver_email: DeliverEmailUseCase,
        placeholder_replacer: PlaceholderReplacer,
    ):
        self._settings = email_settings_repository
        self._deliver = deliver_email
        self._replacer = placeholder_replacer

    def execute(self, order: Order) -> OrderNotificationResult:
        """
        Send the admin and purchaser emails of an order.

        Never raises for delivery problems; they are reported in the result.
        """
        result = OrderNotificationResult()
        smtp = self._settings.get_smtp_settings()
        if not smtp.is_configured():
            result.admin_error = SMTP_NOT_CONFIGURED
            result.purchaser_error = SMTP_NOT_CONFIGURED
            logger.warning("Order %s: SMTP not configured, no email sent", order.id)
            return result

        admin_template = self._settings.get_template(EmailTemplateType.ADMIN)
        if admin_template.enabled:
            email_settings = self._settings.get_email_settings()
            if email_settings is None:
                result.admin_error = EMAIL_SETTINGS_NOT_CONFIGURED
            else:
                sent = self._deliver.execute(
                    smtp,
                    admin_template,
                    recipient=email_settings.administrator_email,
                    subject=self._replacer.replace_order_placeholders(admin_template.subject, order),
                    body=self._replacer.replace_order_placeholders(admin_template.body, order),
                    reference_id=order.id,
                )
                result.admin_email_sent = sent.success
                result.admin_error = sent.error_message

        purchaser_template = self._settings.get_template(EmailTemplateType.PURCHASER)
        if purchaser_template.enabled:
            sent = self._deliver.execute(
                smtp,
                purchaser_template,
                recipient=order.customer_email,
                subject=self._replacer.replace_order_placeholders(purchaser_template.subject, order),
                body=self._replacer.replace_order_placeholders(purchaser_template.body, order),
                reference_id=order.id,
            )
            result.purchaser_email_sent = sent.success
            result.purchaser_error = sent.error_message

        logger.info(
            "Order %s notifications: admin=%s purchaser=%s",
            order.id, result.admin_email_sent, result.purchaser_email_sent,
        )
        return result
