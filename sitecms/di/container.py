# Standard library imports
from typing import Optional

# Local application imports
from .base_container import BaseContainer
from .providers import (
    AppointmentProvider,
    CommerceProvider,
    ConfigTransferProvider,
    DatabaseProvider,
    EmailProvider,
    RepositoryProvider,
    SettingsProvider,
)
from ..infrastructure.db.mongo_connection import MongoClientManager


class DIContainer(BaseContainer):
    """
    Main dependency injection container.
    Composes all providers in the correct order.

    Registration order is important:
    1. Database connections (DatabaseProvider)
    2. Repositories and file storage (RepositoryProvider) - depend on database
    3. Email (EmailProvider) - notification use cases shared by later services
    4. Services (Settings, Commerce, Appointment, ConfigTransfer providers)
    """

    def __init__(self, mongo_client: Optional[MongoClientManager] = None) -> None:
        super().__init__()
        self._mongo_client = mongo_client
        self.setup()

    def setup(self) -> None:
        """
        Setup dependency registrations by composing all providers.
        Order matters: database → repositories → email → services
        """
        DatabaseProvider.register(self, self._mongo_client)
        RepositoryProvider.register(self)
        EmailProvider.register(self)

        SettingsProvider.register(self)
        CommerceProvider.register(self)
        AppointmentProvider.register(self)
        ConfigTransferProvider.register(self)


# Global container instance (singleton pattern)
_container: Optional[DIContainer] = None


def get_container() -> DIContainer:
    """
    Get the global DI container instance (singleton pattern)

    Returns:
        DIContainer instance with all dependencies registered
    """
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


def set_container(container: Optional[DIContainer]) -> None:
    """Replace the global container; None drops it so the next lookup rebuilds it."""
    global _container
    _container = container
