"""
Website Setting Keys
====================

Every key the website settings store accepts, with the defaults used when a
key has never been written.
"""
from typing import Any, Dict, FrozenSet


class SettingKeys:
    """Setting key constants"""
    WEBSITE_NAME = "website-name"
    WEBSITE_ICON = "website-icon"
    THEME_COLOR = "theme-color"
    HEADER_LOGO = "header-logo"
    WEBSITE_FONT = "website-font"
    BACKGROUND_COLOR = "background-color"
    THEME_MODE = "theme-mode"
    CUSTOM_LOADER = "custom-loader"
    SCHEDULED_RESTART = "scheduled-restart"
    SELLING_ENABLED = "selling-enabled"
    HEADER_MENU_TEXT_COLOR = "header-menu-text-color"
    LOADER_BACKGROUND_COLOR = "loader-background-color"
    APPOINTMENT_MODULE_ENABLED = "appointment-module-enabled"

    # SMTP configuration
    EMAIL_SMTP_HOST = "email-smtp-host"
    EMAIL_SMTP_PORT = "email-smtp-port"
    EMAIL_SMTP_USERNAME = "email-smtp-username"
    EMAIL_SMTP_PASSWORD = "email-smtp-password"
    EMAIL_SMTP_ENCRYPTION = "email-smtp-encryption"

    # Email addresses
    EMAIL_SENDER_ADDRESS = "email-sender-address"
    EMAIL_ADMIN_ADDRESS = "email-admin-address"


# Template type -> setting key stem; each stem has -subject, -body and -enabled keys
EMAIL_TEMPLATE_KEY_STEMS: Dict[str, str] = {
    "admin": "email-template-admin",
    "purchaser": "email-template-purchaser",
    "appointment-booking": "email-template-appointment-confirmation",
    "appointment-admin-confirmation": "email-template-appointment-admin-confirmation",
    "appointment-admin-new": "email-template-appointment-admin-new",
    "appointment-reminder": "email-template-appointment-reminder",
    "appointment-cancellation": "email-template-appointment-cancellation",
}


def template_keys(template_type: str) -> Dict[str, str]:
    """Setting keys holding the subject, body and enabled flag of a template."""
    stem = EMAIL_TEMPLATE_KEY_STEMS[template_type]
    return {
        "subject": f"{stem}-subject",
        "body": f"{stem}-body",
        "enabled": f"{stem}-enabled",
    }


def _all_keys() -> FrozenSet[str]:
    keys = {
        value for name, value in vars(SettingKeys).items()
        if name.isupper() and isinstance(value, str)
    }
    for template_type in EMAIL_TEMPLATE_KEY_STEMS:
        keys.update(template_keys(template_type).values())
    return frozenset(keys)


VALID_SETTING_KEYS: FrozenSet[str] = _all_keys()

# Keys never written to configuration exports
SECRET_SETTING_KEYS: FrozenSet[str] = frozenset({SettingKeys.EMAIL_SMTP_PASSWORD})

DEFAULT_SETTING_VALUES: Dict[str, Any] = {
    SettingKeys.WEBSITE_NAME: "Shower",
    SettingKeys.THEME_COLOR: "blue",
    SettingKeys.WEBSITE_FONT: "Inter",
    SettingKeys.SELLING_ENABLED: "false",
    SettingKeys.HEADER_MENU_TEXT_COLOR: "#000000",
    SettingKeys.LOADER_BACKGROUND_COLOR: {"light": "#FFFFFF", "dark": "#1A202C"},
    SettingKeys.APPOINTMENT_MODULE_ENABLED: "false",
    SettingKeys.THEME_MODE: "light",
}


def is_valid_setting_key(key: str) -> bool:
    return key in VALID_SETTING_KEYS
