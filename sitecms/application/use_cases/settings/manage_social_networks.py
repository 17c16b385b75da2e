"""
Social Network Use Cases
========================
"""
import logging
from typing import Any, List

from sitecms.domain.models.social_network import SocialNetwork, SocialNetworkValidationService
from sitecms.domain.repositories.settings_repository import SocialNetworkRepository

logger = logging.getLogger(__name__)


class GetSocialNetworksUseCase:
    """Stored networks, or every type disabled when nothing was saved yet."""

    def __init__(self, repository: SocialNetworkRepository):
        self._repository = repository

    def execute(self, enabled_only: bool = False) -> List[SocialNetwork]:
        networks = self._repository.find_all() or SocialNetwork.create_all_defaults()
        if enabled_only:
            networks = [network for network in networks if network.enabled]
        return networks


class UpdateSocialNetworksUseCase:
    """Replace the whole list of social networks."""

    def __init__(self, repository: SocialNetworkRepository):
        self._repository = repository
        self._validator = SocialNetworkValidationService()

    def execute(self, items: Any) -> List[SocialNetwork]:
        """
        Args:
            items: Raw list of {type, url, label, enabled} objects

        Raises:
            ValueError: If any item is invalid or a type appears twice
        """
        result = self._validator.validate_all(items)
        if not result.is_valid:
            raise ValueError(result.message())

        networks = [
            SocialNetwork(
                type=item["type"],
                url=item["url"],
                label=item["label"],
                enabled=item["enabled"],
            )
            for item in items
        ]
        types = [network.type for network in networks]
        if len(types) != len(set(types)):
            raise ValueError("Each social network type can only appear once")

        saved = self._repository.replace_all(networks)
        logger.info("Saved %d social network(s)", len(saved))
        return saved
