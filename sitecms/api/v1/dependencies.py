"""
Dependency Container
====================

Dependency injection helpers for FastAPI.
Provides singleton instances of the application services.
"""
from sitecms.application.services.appointment_service import AppointmentService
from sitecms.application.services.catalog_service import CatalogService
from sitecms.application.services.config_transfer_service import ConfigTransferService
from sitecms.application.services.email_service import EmailService
from sitecms.application.services.order_service import OrderService
from sitecms.application.services.page_service import PageService
from sitecms.application.services.settings_service import SettingsService
from sitecms.di.container import get_container
from sitecms.infrastructure.storage.file_storage import FileStorage


def get_settings_service() -> SettingsService:
    return get_container().get(SettingsService)


def get_page_service() -> PageService:
    return get_container().get(PageService)


def get_catalog_service() -> CatalogService:
    return get_container().get(CatalogService)


def get_order_service() -> OrderService:
    return get_container().get(OrderService)


def get_appointment_service() -> AppointmentService:
    return get_container().get(AppointmentService)


def get_email_service() -> EmailService:
    return get_container().get(EmailService)


def get_config_transfer_service() -> ConfigTransferService:
    return get_container().get(ConfigTransferService)


def get_file_storage() -> FileStorage:
    """
    Get the uploaded files storage (singleton).

    Returns:
        FileStorage rooted at PUBLIC_DIR
    """
    return get_container().get(FileStorage)
