"""
Setting Normalizers
===================

Validation of raw website setting values. Each normalizer returns the value
to store, or raises ValueError.

- SETTING_NORMALIZERS: keys the settings API updates directly
- ASSET_NORMALIZERS: file settings (icon, header logo, custom loader)
- EMAIL_NORMALIZERS: the ``email-*`` keys, checked with the email models
"""
from typing import Any, Callable, Dict

from sitecms.domain.constants.setting_keys import EMAIL_TEMPLATE_KEY_STEMS, SettingKeys, template_keys
from sitecms.domain.models.email import (
    EmailTemplate,
    EmailTemplateType,
    SmtpSettings,
    clean_email_address,
)
from sitecms.domain.models.website_setting import (
    CustomLoader,
    HeaderLogo,
    HeaderMenuTextColor,
    LoaderBackgroundColor,
    ThemeColor,
    WebsiteFont,
    WebsiteIcon,
    clean_theme_mode,
    clean_website_name,
)

Normalizer = Callable[[Any], Any]


def flag(value: Any) -> str:
    """Boolean setting, stored as "true" or "false"."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower()
    raise ValueError("Value must be a boolean")


def _text(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError("Value must be a string")
    return value


def _object(value: Any) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError("Value must be an object")
    return value


def _loader_background(value: Any) -> Dict[str, str]:
    if not isinstance(value, dict):
        raise ValueError("Loader background color must be an object with light and dark colors")
    return LoaderBackgroundColor.from_dict(value).to_dict()


def _smtp_port(value: Any) -> str:
    if isinstance(value, bool):
        raise ValueError("Port must be between 1 and 65535")
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise ValueError("Port must be between 1 and 65535") from None
    return str(SmtpSettings(port=port).port)


def _template_subject(value: Any) -> str:
    return EmailTemplate(EmailTemplateType.ADMIN, subject=_text(value), body="-").subject


def _template_body(value: Any) -> str:
    return EmailTemplate(EmailTemplateType.ADMIN, subject="-", body=_text(value)).body


SETTING_NORMALIZERS: Dict[str, Normalizer] = {
    SettingKeys.WEBSITE_NAME: clean_website_name,
    SettingKeys.THEME_COLOR: lambda value: ThemeColor(_text(value)).value,
    SettingKeys.BACKGROUND_COLOR: lambda value: ThemeColor(_text(value)).value,
    SettingKeys.WEBSITE_FONT: lambda value: WebsiteFont(_text(value)).name,
    SettingKeys.HEADER_MENU_TEXT_COLOR: lambda value: HeaderMenuTextColor(_text(value)).value,
    SettingKeys.LOADER_BACKGROUND_COLOR: _loader_background,
    SettingKeys.THEME_MODE: lambda value: clean_theme_mode(_text(value)),
    SettingKeys.SELLING_ENABLED: flag,
    SettingKeys.APPOINTMENT_MODULE_ENABLED: flag,
    SettingKeys.SCHEDULED_RESTART: lambda value: value,
}

ASSET_NORMALIZERS: Dict[str, Normalizer] = {
    SettingKeys.WEBSITE_ICON: lambda value: WebsiteIcon.from_dict(_object(value)).to_dict(),
    SettingKeys.HEADER_LOGO: lambda value: HeaderLogo.from_dict(_object(value)).to_dict(),
    SettingKeys.CUSTOM_LOADER: lambda value: CustomLoader.from_dict(_object(value)).to_dict(),
}

EMAIL_NORMALIZERS: Dict[str, Normalizer] = {
    SettingKeys.EMAIL_SMTP_HOST: lambda value: SmtpSettings(host=_text(value)).host,
    SettingKeys.EMAIL_SMTP_PORT: _smtp_port,
    SettingKeys.EMAIL_SMTP_USERNAME: lambda value: _text(value).strip(),
    SettingKeys.EMAIL_SMTP_ENCRYPTION: lambda value: SmtpSettings(encryption=_text(value)).encryption.value,
    SettingKeys.EMAIL_SENDER_ADDRESS: lambda value: clean_email_address(_text(value)),
    SettingKeys.EMAIL_ADMIN_ADDRESS: lambda value: clean_email_address(_text(value)),
}
for _template_type in EMAIL_TEMPLATE_KEY_STEMS:
    _keys = template_keys(_template_type)
    EMAIL_NORMALIZERS[_keys["subject"]] = _template_subject
    EMAIL_NORMALIZERS[_keys["body"]] = _template_body
    EMAIL_NORMALIZERS[_keys["enabled"]] = flag


def normalize_setting(key: str, value: Any) -> Any:
    """
    Validate a stored or imported value of any non-secret setting key.

    Raises:
        ValueError: If the key has no rules or the value breaks them
    """
    normalizer = (
        SETTING_NORMALIZERS.get(key)
        or ASSET_NORMALIZERS.get(key)
        or EMAIL_NORMALIZERS.get(key)
    )
    if normalizer is None:
        raise ValueError(f"Setting '{key}' cannot be imported")
    try:
        return normalizer(value)
    except (TypeError, AttributeError) as e:
        raise ValueError(f"Invalid value for '{key}': {e}") from None
