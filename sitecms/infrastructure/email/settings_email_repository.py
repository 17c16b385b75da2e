"""
Email Settings Repository
=========================

EmailSettingsRepository backed by the website settings store: SMTP
configuration, administrator address and templates are kept under the
``email-*`` setting keys.
"""
import logging
from typing import List, Optional

from sitecms.domain.constants.setting_keys import SettingKeys, template_keys
from sitecms.domain.models.email import (
    EmailSettings,
    EmailTemplate,
    EmailTemplateType,
    EncryptionType,
    SmtpSettings,
)
from sitecms.domain.repositories.email_repository import EmailSettingsRepository
from sitecms.domain.repositories.settings_repository import WebsiteSettingsRepository
from sitecms.infrastructure.email.password_encryption import PasswordEncryption

logger = logging.getLogger(__name__)


class SettingsEmailRepository(EmailSettingsRepository):
    """
    Email configuration stored as website settings.

    The SMTP password is encrypted at rest with PasswordEncryption.
    """

    def __init__(self, settings_repository: WebsiteSettingsRepository, encryption: PasswordEncryption):
        self._settings = settings_repository
        self._encryption = encryption

    def _value(self, key: str, default=None):
        setting = self._settings.find_by_key(key)
        if setting is None or setting.value is None:
            return default
        return setting.value

    def get_smtp_settings(self) -> SmtpSettings:
        default = SmtpSettings.create_default()
        try:
            port = int(self._value(SettingKeys.EMAIL_SMTP_PORT, default.port))
        except (TypeError, ValueError):
            port = default.port
        if not 1 <= port <= 65535:
            logger.warning("Stored SMTP port %s is out of range, using %s", port, default.port)
            port = default.port
        encryption = self._value(SettingKeys.EMAIL_SMTP_ENCRYPTION, default.encryption.value)
        if not isinstance(encryption, str) or encryption not in {e.value for e in EncryptionType}:
            encryption = default.encryption.value
        try:
            return SmtpSettings(
                host=self._value(SettingKeys.EMAIL_SMTP_HOST, ""),
                port=port,
                username=self._value(SettingKeys.EMAIL_SMTP_USERNAME, ""),
                password=self._encryption.decrypt(self._value(SettingKeys.EMAIL_SMTP_PASSWORD, "")),
                encryption=EncryptionType(encryption),
            )
        except (TypeError, ValueError, AttributeError) as e:
            logger.warning("Stored SMTP settings are invalid, using defaults: %s", e)
            return default

    def save_smtp_settings(self, settings: SmtpSettings) -> None:
        self._settings.set(SettingKeys.EMAIL_SMTP_HOST, settings.host)
        self._settings.set(SettingKeys.EMAIL_SMTP_PORT, str(settings.port))
        self._settings.set(SettingKeys.EMAIL_SMTP_USERNAME, settings.username)
        self._settings.set(SettingKeys.EMAIL_SMTP_PASSWORD, self._encryption.encrypt(settings.password))
        self._settings.set(SettingKeys.EMAIL_SMTP_ENCRYPTION, settings.encryption.value)
        logger.info("SMTP settings saved for host '%s'", settings.host)

    def get_email_settings(self) -> Optional[EmailSettings]:
        address = self._value(SettingKeys.EMAIL_ADMIN_ADDRESS)
        if not address:
            return None
        try:
            return EmailSettings(administrator_email=address)
        except ValueError:
            logger.warning("Stored administrator email '%s' is invalid", address)
            return None

    def save_email_settings(self, settings: EmailSettings) -> None:
        self._settings.set(SettingKeys.EMAIL_ADMIN_ADDRESS, settings.administrator_email)

    def get_template(self, template_type: EmailTemplateType) -> EmailTemplate:
        template_type = EmailTemplateType.from_string(template_type)
        keys = template_keys(template_type.value)
        subject = self._value(keys["subject"])
        body = self._value(keys["body"])
        if not subject or not body:
            return EmailTemplate.create_default(template_type)
        try:
            return EmailTemplate(
                type=template_type,
                subject=subject,
                body=body,
                enabled=str(self._value(keys["enabled"], "false")).lower() == "true",
            )
        except (TypeError, ValueError, AttributeError) as e:
            logger.warning("Stored %s template is invalid, using the default: %s", template_type.value, e)
            return EmailTemplate.create_default(template_type)

    def get_all_templates(self) -> List[EmailTemplate]:
        return [self.get_template(template_type) for template_type in EmailTemplateType]

    def save_template(self, template: EmailTemplate) -> None:
        keys = template_keys(template.type.value)
        self._settings.set(keys["subject"], template.subject)
        self._settings.set(keys["body"], template.body)
        self._settings.set(keys["enabled"], "true" if template.enabled else "false")
