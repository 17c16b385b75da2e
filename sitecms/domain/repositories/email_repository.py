"""
Email Repository Interfaces
===========================

Abstract interfaces for email configuration (SMTP, administrator address,
templates) and the log of sent emails.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from sitecms.domain.models.email import (
    EmailLog,
    EmailSettings,
    EmailTemplate,
    EmailTemplateType,
    SmtpSettings,
)


class EmailSettingsRepository(ABC):
    """
    Abstract repository for email configuration.

    Templates that were never saved are returned as their default.
    """

    @abstractmethod
    def get_smtp_settings(self) -> SmtpSettings:
        """
        Load the SMTP configuration.

        Returns:
            SmtpSettings with the clear-text password, defaults when unset
        """
        pass

    @abstractmethod
    def save_smtp_settings(self, settings: SmtpSettings) -> None:
        pass

    @abstractmethod
    def get_email_settings(self) -> Optional[EmailSettings]:
        pass

    @abstractmethod
    def save_email_settings(self, settings: EmailSettings) -> None:
        pass

    @abstractmethod
    def get_template(self, template_type: EmailTemplateType) -> EmailTemplate:
        pass

    @abstractmethod
    def get_all_templates(self) -> List[EmailTemplate]:
        pass

    @abstractmethod
    def save_template(self, template: EmailTemplate) -> None:
        pass


class EmailLogRepository(ABC):
    """Abstract repository for email send attempts."""

    @abstractmethod
    def create(self, log: EmailLog) -> EmailLog:
        pass

    @abstractmethod
    def find_by_reference(self, reference_id: str) -> List[EmailLog]:
        """
        Find the emails sent about an order or appointment.

        Args:
            reference_id: Order or appointment ID

        Returns:
            Email logs, most recent first
        """
        pass

    @abstractmethod
    def find_recent(self, limit: int) -> List[EmailLog]:
        """Latest send attempts, most recent first."""
        pass
