"""
Update Setting Use Case
=======================

Validates and stores the value of one typed website setting.
"""
import logging
from typing import Any

from sitecms.domain.models.setting_normalizers import SETTING_NORMALIZERS
from sitecms.domain.models.website_setting import WebsiteSetting
from sitecms.domain.repositories.settings_repository import WebsiteSettingsRepository

logger = logging.getLogger(__name__)


class UpdateSettingUseCase:
    """Store a new value for one of the keys of SETTING_NORMALIZERS."""

    def __init__(self, settings_repository: WebsiteSettingsRepository):
        self._repository = settings_repository

    def execute(self, key: str, value: Any) -> WebsiteSetting:
        """
        Validate and store a setting value.

        Args:
            key: Setting key
            value: Raw value from the request

        Returns:
            The stored setting

        Raises:
            ValueError: If the key cannot be updated this way or the value is invalid
        """
        normalizer = SETTING_NORMALIZERS.get(key)
        if normalizer is None:
            raise ValueError(f"Setting '{key}' cannot be updated directly")
        setting = self._repository.set(key, normalizer(value))
        logger.info("Setting '%s' updated", key)
        return setting
