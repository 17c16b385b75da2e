"""
MongoDB Settings Repositories
=============================

Concrete implementations of WebsiteSettingsRepository and
SocialNetworkRepository using MongoDB.
"""
from typing import Any, List, Optional

from pymongo import ReturnDocument

from sitecms.core.config import get_settings
from sitecms.domain.constants.setting_fields import SettingFields, SocialNetworkFields
from sitecms.domain.models.social_network import SocialNetwork, SocialNetworkType
from sitecms.domain.models.website_setting import WebsiteSetting
from sitecms.domain.repositories.settings_repository import (
    SocialNetworkRepository,
    WebsiteSettingsRepository,
)
from sitecms.infrastructure.db.mongo_connection import MongoClientManager
from sitecms.utils.datetime_utils import from_storage, now, to_storage


class MongoWebsiteSettingsRepository(WebsiteSettingsRepository):
    """
    MongoDB implementation of WebsiteSettingsRepository.

    Each setting is a document keyed by its setting key.
    """

    def __init__(self, client: MongoClientManager, collection_name: Optional[str] = None):
        self._collection = client.get_collection(
            collection_name or get_settings().settings_collection
        )

    def _to_entity(self, doc: dict) -> WebsiteSetting:
        return WebsiteSetting(
            key=doc[SettingFields.KEY],
            value=doc.get(SettingFields.VALUE),
            updated_at=from_storage(doc.get(SettingFields.UPDATED_AT)) or now(),
        )

    def find_by_key(self, key: str) -> Optional[WebsiteSetting]:
        doc = self._collection.find_one({SettingFields.KEY: key})
        return self._to_entity(doc) if doc else None

    def find_all(self) -> List[WebsiteSetting]:
        return [self._to_entity(doc) for doc in self._collection.find().sort(SettingFields.KEY, 1)]

    def set(self, key: str, value: Any) -> WebsiteSetting:
        setting = WebsiteSetting(key=key, value=value)
        result = self._collection.find_one_and_update(
            {SettingFields.MONGO_ID: key},
            {
                "$set": {
                    SettingFields.KEY: key,
                    SettingFields.VALUE: value,
                    SettingFields.UPDATED_AT: to_storage(setting.updated_at),
                }
            },
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return self._to_entity(result)

    def delete(self, key: str) -> bool:
        return self._collection.delete_one({SettingFields.KEY: key}).deleted_count > 0


class MongoSocialNetworkRepository(SocialNetworkRepository):
    """MongoDB implementation of SocialNetworkRepository; the type is the document ID."""

    def __init__(self, client: MongoClientManager, collection_name: Optional[str] = None):
        self._collection = client.get_collection(
            collection_name or get_settings().social_networks_collection
        )

    def _to_entity(self, doc: dict) -> SocialNetwork:
        return SocialNetwork(
            type=SocialNetworkType(doc[SocialNetworkFields.TYPE]),
            url=doc.get(SocialNetworkFields.URL, ""),
            label=doc.get(SocialNetworkFields.LABEL, ""),
            enabled=bool(doc.get(SocialNetworkFields.ENABLED, False)),
            updated_at=from_storage(doc.get(SocialNetworkFields.UPDATED_AT)) or now(),
        )

    def _to_document(self, network: SocialNetwork) -> dict:
        return {
            SocialNetworkFields.MONGO_ID: network.type.value,
            SocialNetworkFields.TYPE: network.type.value,
            SocialNetworkFields.URL: network.url,
            SocialNetworkFields.LABEL: network.label,
            SocialNetworkFields.ENABLED: network.enabled,
            SocialNetworkFields.UPDATED_AT: to_storage(network.updated_at),
        }

    def find_all(self) -> List[SocialNetwork]:
        order = [network_type.value for network_type in SocialNetworkType]
        networks = [self._to_entity(doc) for doc in self._collection.find()]
        return sorted(networks, key=lambda network: order.index(network.type.value))

    def replace_all(self, networks: List[SocialNetwork]) -> List[SocialNetwork]:
        self._collection.delete_many({})
        if networks:
            self._collection.insert_many([self._to_document(network) for network in networks])
        return self.find_all()

    def delete_all(self) -> int:
        return self._collection.delete_many({}).deleted_count
