"""
Settings Repository Interfaces
==============================

Abstract interfaces for the website settings store and social networks.
"""
from abc import ABC, abstractmethod
from typing import Any, List, Optional

from sitecms.domain.models.social_network import SocialNetwork
from sitecms.domain.models.website_setting import WebsiteSetting


class WebsiteSettingsRepository(ABC):
    """
    Abstract repository for the key/value settings store.

    Keys are unique; ``set`` creates or replaces the value of a key.
    """

    @abstractmethod
    def find_by_key(self, key: str) -> Optional[WebsiteSetting]:
        """
        Find a setting by its key.

        Args:
            key: Setting key

        Returns:
            WebsiteSetting if the key was ever written, None otherwise
        """
        pass

    @abstractmethod
    def find_all(self) -> List[WebsiteSetting]:
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> WebsiteSetting:
        """
        Create or replace a setting.

        Args:
            key: Setting key (must be a valid key)
            value: Any JSON value

        Returns:
            Stored setting
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        pass


class SocialNetworkRepository(ABC):
    """Abstract repository for social network links, one per type."""

    @abstractmethod
    def find_all(self) -> List[SocialNetwork]:
        pass

    @abstractmethod
    def replace_all(self, networks: List[SocialNetwork]) -> List[SocialNetwork]:
        """
        Replace every stored network with ``networks``.

        Returns:
            Stored networks
        """
        pass

    @abstractmethod
    def delete_all(self) -> int:
        pass
