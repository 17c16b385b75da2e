"""
Providers Package
=================

Dependency injection providers for registering dependencies.
"""
from .appointment_provider import AppointmentProvider
from .commerce_provider import CommerceProvider
from .config_transfer_provider import ConfigTransferProvider
from .database_provider import DatabaseProvider
from .email_provider import EmailProvider
from .repository_provider import RepositoryProvider
from .settings_provider import SettingsProvider

__all__ = [
    "AppointmentProvider",
    "CommerceProvider",
    "ConfigTransferProvider",
    "DatabaseProvider",
    "EmailProvider",
    "RepositoryProvider",
    "SettingsProvider",
]
