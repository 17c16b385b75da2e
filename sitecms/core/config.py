# Standard library imports
import os
import secrets
from typing import Final, List, Optional
from dotenv import load_dotenv


class Settings:
    """
    Application settings loaded from environment variables.

    This class centralizes all configuration settings for the application.
    All settings are loaded from environment variables with sensible defaults.
    """

    def __init__(self) -> None:
        # Load environment variables from .env file
        load_dotenv()

        # Timezone Configuration
        # Weekly availability slots and "now" are expressed in this timezone
        self.timezone: Final[str] = os.getenv("TIMEZONE", "UTC")

        # Database Configuration
        self.mongo_uri: Final[str] = os.getenv("MONGO_URI", "mongodb://localhost:27017")
        self.mongo_database_name: Final[str] = os.getenv("DB_NAME", "sitecms")

        # Admin Authentication
        self.admin_password: Final[str] = os.getenv("ADMIN_PASSWORD", "")
        self.session_secret: Final[str] = os.getenv("SESSION_SECRET") or secrets.token_urlsafe(32)
        self.session_max_age_seconds: Final[int] = int(
            os.getenv("SESSION_MAX_AGE_SECONDS", "86400")
        )
        self.session_cookie_name: Final[str] = os.getenv("SESSION_COOKIE_NAME", "sitecms_session")
        self.session_cookie_secure: Final[bool] = os.getenv(
            "SESSION_COOKIE_SECURE", "false"
        ).lower() in ("true", "1", "yes")

        # Email Configuration
        self.smtp_encryption_key: Final[Optional[str]] = os.getenv("SMTP_ENCRYPTION_KEY") or None

        # File Storage
        self.public_dir: Final[str] = os.getenv(
            "PUBLIC_DIR",
            os.path.join(os.getcwd(), "public")
        )
        self.temp_dir: Final[str] = os.getenv(
            "TEMP_DIR",
            os.path.join(os.getcwd(), "temp")
        )
        self.api_base_url: Final[str] = os.getenv("API_BASE_URL", "").rstrip("/")

        # Logging Configuration
        self.log_folder: Final[str] = os.getenv(
            "LOG_FOLDER",
            os.path.join(os.getcwd(), "logs")
        )
        self.log_level: Final[str] = os.getenv("LOG_LEVEL", "info")
        self.log_buffer_size: Final[int] = int(os.getenv("LOG_BUFFER_SIZE", "100"))
        self.log_flush_interval_seconds: Final[float] = float(
            os.getenv("LOG_FLUSH_INTERVAL_SECONDS", "5")
        )
        self.log_to_file: Final[bool] = os.getenv(
            "LOG_TO_FILE", "true"
        ).lower() in ("true", "1", "yes")

        # Appointment Reminder Job
        # 0 disables the background reminder loop
        self.reminder_check_interval_seconds: Final[int] = int(
            os.getenv("REMINDER_CHECK_INTERVAL_SECONDS", "300")
        )

        # CORS
        self.cors_origins: Final[List[str]] = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ]

        # Collection Names
        self.products_collection: Final[str] = os.getenv("PRODUCTS_COLLECTION", "products")
        self.categories_collection: Final[str] = os.getenv("CATEGORIES_COLLECTION", "categories")
        self.orders_collection: Final[str] = os.getenv("ORDERS_COLLECTION", "orders")
        self.activities_collection: Final[str] = os.getenv("ACTIVITIES_COLLECTION", "activities")
        self.appointments_collection: Final[str] = os.getenv("APPOINTMENTS_COLLECTION", "appointments")
        self.availability_collection: Final[str] = os.getenv("AVAILABILITY_COLLECTION", "availability")
        self.menu_items_collection: Final[str] = os.getenv("MENU_ITEMS_COLLECTION", "menu_items")
        self.page_contents_collection: Final[str] = os.getenv("PAGE_CONTENTS_COLLECTION", "page_contents")
        self.settings_collection: Final[str] = os.getenv("SETTINGS_COLLECTION", "website_settings")
        self.social_networks_collection: Final[str] = os.getenv("SOCIAL_NETWORKS_COLLECTION", "social_networks")
        self.email_logs_collection: Final[str] = os.getenv("EMAIL_LOGS_COLLECTION", "email_logs")

    @property
    def backups_dir(self) -> str:
        """Folder where pre-import backups are written."""
        return os.path.join(self.temp_dir, "backups")


# Global settings instance (singleton pattern)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings (singleton pattern)

    Returns:
        Settings instance with all configuration values
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
