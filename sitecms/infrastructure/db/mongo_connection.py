"""
MongoDB Client
==============

Singleton MongoDB client manager shared by all repositories.
"""
import logging
from typing import Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from sitecms.core.config import get_settings

logger = logging.getLogger(__name__)


class MongoClientManager:
    """
    MongoDB client manager.

    Manages the MongoDB connection and provides access to collections. A
    ready-made client (e.g. ``mongomock.MongoClient()``) can be passed in
    place of a connection to ``MONGO_URI``.
    """

    def __init__(self, client: Optional[MongoClient] = None, database_name: Optional[str] = None):
        self._client: Optional[MongoClient] = client
        self._database_name = database_name
        self._database: Optional[Database] = None

    def _initialize_client(self) -> None:
        """Initialize MongoDB client connection."""
        settings = get_settings()
        if self._client is None:
            self._client = MongoClient(settings.mongo_uri, tz_aware=True)
        db_name = self._database_name or settings.mongo_database_name
        self._database = self._client[db_name]
        logger.info("Connected to MongoDB database '%s'", db_name)

    def get_database(self) -> Database:
        """Get MongoDB database instance."""
        if self._database is None:
            self._initialize_client()
        return self._database

    def get_collection(self, collection_name: str) -> Collection:
        """
        Get a MongoDB collection.

        Args:
            collection_name: Name of the collection

        Returns:
            MongoDB Collection object
        """
        return self.get_database()[collection_name]

    def ping(self) -> bool:
        """Check that the server answers."""
        try:
            self.get_database().command("ping")
            return True
        except PyMongoError as exc:
            logger.warning("MongoDB ping failed: %s", exc)
            return False

    def close(self) -> None:
        """Close MongoDB connection."""
        if self._client is not None:
            self._client.close()
            self._client = None
            self._database = None


_manager: Optional[MongoClientManager] = None


def get_mongo_client() -> MongoClientManager:
    """Get singleton MongoDB client manager."""
    global _manager
    if _manager is None:
        _manager = MongoClientManager()
    return _manager
