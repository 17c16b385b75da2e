"""
API v1 Package
===============

Version 1 API controllers.
"""
from .auth_controller import router as auth_router
from .logs_controller import router as logs_router
from .settings_controller import router as settings_router
from .settings_controller import social_router as social_networks_router
from .page_controller import menu_router, pages_router
from .catalog_controller import categories_router, products_router
from .order_controller import router as orders_router
from .appointment_controller import activities_router, availability_router, appointments_router
from .email_controller import router as email_router
from .config_controller import router as config_router
from .public_controller import router as public_router

__all__ = [
    "auth_router",
    "logs_router",
    "settings_router",
    "social_networks_router",
    "menu_router",
    "pages_router",
    "categories_router",
    "products_router",
    "orders_router",
    "activities_router",
    "availability_router",
    "appointments_router",
    "email_router",
    "config_router",
    "public_router",
]
