"""
Get Settings Use Cases
======================

Read the website settings store, filling in defaults for keys that were
never written.
"""
from typing import Any, Dict

from sitecms.domain.constants.available_fonts import DEFAULT_FONT
from sitecms.domain.constants.setting_keys import DEFAULT_SETTING_VALUES, SettingKeys
from sitecms.domain.models.website_setting import (
    LoaderBackgroundColor,
    ThemeColor,
    WebsiteFont,
    parse_selling_enabled,
)
from sitecms.domain.repositories.settings_repository import WebsiteSettingsRepository

EMAIL_KEY_PREFIX = "email-"


class GetSettingsUseCase:
    """All website settings (email configuration excluded) with defaults."""

    def __init__(self, settings_repository: WebsiteSettingsRepository):
        self._repository = settings_repository

    def execute(self) -> Dict[str, Any]:
        values = dict(DEFAULT_SETTING_VALUES)
        for setting in self._repository.find_all():
            if setting.key.startswith(EMAIL_KEY_PREFIX):
                continue
            values[setting.key] = setting.value
        return values


class GetPublicSettingsUseCase:
    """
    Settings the public website needs to render itself.

    Theme color and font are resolved to their hex value and Google Fonts
    stylesheet URL.
    """

    def __init__(self, settings_repository: WebsiteSettingsRepository):
        self._get_settings = GetSettingsUseCase(settings_repository)

    def execute(self) -> Dict[str, Any]:
        values = self._get_settings.execute()

        try:
            theme_color = ThemeColor(values.get(SettingKeys.THEME_COLOR))
        except ValueError:
            theme_color = ThemeColor(DEFAULT_SETTING_VALUES[SettingKeys.THEME_COLOR])
        try:
            font = WebsiteFont(values.get(SettingKeys.WEBSITE_FONT))
        except ValueError:
            font = WebsiteFont(DEFAULT_FONT)
        try:
            loader_background = LoaderBackgroundColor.from_dict(values.get(SettingKeys.LOADER_BACKGROUND_COLOR))
        except (ValueError, AttributeError):
            loader_background = LoaderBackgroundColor()

        return {
            "website_name": values.get(SettingKeys.WEBSITE_NAME),
            "theme_color": theme_color.value,
            "theme_color_hex": theme_color.hex_value,
            "background_color": values.get(SettingKeys.BACKGROUND_COLOR),
            "theme_mode": values.get(SettingKeys.THEME_MODE),
            "website_font": font.name,
            "website_font_url": font.google_fonts_url,
            "header_menu_text_color": values.get(SettingKeys.HEADER_MENU_TEXT_COLOR),
            "loader_background_color": loader_background.to_dict(),
            "website_icon": values.get(SettingKeys.WEBSITE_ICON),
            "header_logo": values.get(SettingKeys.HEADER_LOGO),
            "custom_loader": values.get(SettingKeys.CUSTOM_LOADER),
            "selling_enabled": parse_selling_enabled(values.get(SettingKeys.SELLING_ENABLED)),
            "appointment_module_enabled": parse_selling_enabled(
                values.get(SettingKeys.APPOINTMENT_MODULE_ENABLED)
            ),
        }
