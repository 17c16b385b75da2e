"""
Email Models
============

Email templates, SMTP configuration, administrator address and the log of
sent emails.
"""
import re
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from sitecms.utils.datetime_utils import now, to_iso

SUBJECT_MAX_LENGTH = 200
BODY_MAX_LENGTH = 10000
HOSTNAME_PATTERN = re.compile(
    r"^[a-zA-Z0-9]([a-zA-Z0-9-]*[a-zA-Z0-9])?(\.[a-zA-Z0-9]([a-zA-Z0-9-]*[a-zA-Z0-9])?)*$"
)
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PASSWORD_MASK = "********"


class EmailTemplateType(str, Enum):
    ADMIN = "admin"
    PURCHASER = "purchaser"
    APPOINTMENT_BOOKING = "appointment-booking"
    APPOINTMENT_ADMIN_CONFIRMATION = "appointment-admin-confirmation"
    APPOINTMENT_ADMIN_NEW = "appointment-admin-new"
    APPOINTMENT_REMINDER = "appointment-reminder"
    APPOINTMENT_CANCELLATION = "appointment-cancellation"

    @classmethod
    def from_string(cls, value: str) -> "EmailTemplateType":
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Invalid template type '{value}'") from None

    @property
    def is_appointment(self) -> bool:
        return self.value.startswith("appointment-")


class EncryptionType(str, Enum):
    NONE = "none"
    SSL = "ssl"
    TLS = "tls"


DEFAULT_TEMPLATES: Dict[EmailTemplateType, tuple] = {
    EmailTemplateType.ADMIN: (
        "New order {{order_id}}",
        "New order received!\n\n"
        "Order number: {{order_id}}\n"
        "Date: {{order_date}}\n\n"
        "Customer:\n"
        "{{customer_firstname}} {{customer_lastname}}\n"
        "Email: {{customer_email}}\n"
        "Phone: {{customer_phone}}\n\n"
        "Ordered products:\n"
        "{{products_list}}\n\n"
        "Total: {{order_total}}",
    ),
    EmailTemplateType.PURCHASER: (
        "Your order {{order_id}} is confirmed",
        "Hello {{customer_firstname}},\n\n"
        "Thank you for your order!\n\n"
        "Order number: {{order_id}}\n"
        "Date: {{order_date}}\n\n"
        "Order summary:\n"
        "{{products_list}}\n\n"
        "Total: {{order_total}}\n\n"
        "Kind regards,\n"
        "The team",
    ),
    EmailTemplateType.APPOINTMENT_BOOKING: (
        "Appointment confirmation: {{appointment_activity}}",
        "Hello {{customer_name}},\n\n"
        "Your appointment has been booked!\n\n"
        "Activity: {{appointment_activity}}\n"
        "Date: {{appointment_date}}\n"
        "Time: {{appointment_time}}\n"
        "Duration: {{appointment_duration}}\n\n"
        "Your details:\n"
        "Name: {{customer_name}}\n"
        "Email: {{customer_email}}\n"
        "Phone: {{customer_phone}}\n"
        "Notes: {{customer_notes}}\n\n"
        "Kind regards,\n"
        "The team",
    ),
    EmailTemplateType.APPOINTMENT_ADMIN_CONFIRMATION: (
        "Your appointment has been confirmed: {{appointment_activity}}",
        "Hello {{customer_name}},\n\n"
        "Good news! Our team has confirmed your appointment.\n\n"
        "Activity: {{appointment_activity}}\n"
        "Date: {{appointment_date}}\n"
        "Time: {{appointment_time}}\n"
        "Duration: {{appointment_duration}}\n\n"
        "We look forward to seeing you!\n\n"
        "Kind regards,\n"
        "The team",
    ),
    EmailTemplateType.APPOINTMENT_ADMIN_NEW: (
        "New booking: {{appointment_activity}} - {{customer_name}}",
        "New appointment booking\n\n"
        "A new appointment has been booked:\n\n"
        "Activity: {{appointment_activity}}\n"
        "Date: {{appointment_date}}\n"
        "Time: {{appointment_time}}\n"
        "Duration: {{appointment_duration}}\n\n"
        "Client:\n"
        "Name: {{customer_name}}\n"
        "Email: {{customer_email}}\n"
        "Phone: {{customer_phone}}\n"
        "Notes: {{customer_notes}}\n\n"
        "Status: awaiting confirmation\n\n"
        "Log in to the administration to confirm or cancel this appointment.",
    ),
    EmailTemplateType.APPOINTMENT_REMINDER: (
        "Reminder: {{appointment_activity}} appointment",
        "Hello {{customer_name}},\n\n"
        "This is a reminder of your appointment.\n\n"
        "Activity: {{appointment_activity}}\n"
        "Date: {{appointment_date}}\n"
        "Time: {{appointment_time}}\n"
        "Duration: {{appointment_duration}}\n\n"
        "See you soon!",
    ),
    EmailTemplateType.APPOINTMENT_CANCELLATION: (
        "Appointment cancelled: {{appointment_activity}}",
        "Hello {{customer_name}},\n\n"
        "Your appointment has been cancelled.\n\n"
        "Activity: {{appointment_activity}}\n"
        "Planned date: {{appointment_date}}\n"
        "Planned time: {{appointment_time}}\n\n"
        "We hope to see you again soon.\n"
        "Kind regards,\n"
        "The team",
    ),
}


@dataclass(frozen=True)
class EmailTemplate:
    type: EmailTemplateType
    subject: str
    body: str
    enabled: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", EmailTemplateType.from_string(self.type))
        if not self.subject or not self.subject.strip():
            raise ValueError("Subject cannot be empty")
        if len(self.subject) > SUBJECT_MAX_LENGTH:
            raise ValueError(f"Subject cannot exceed {SUBJECT_MAX_LENGTH} characters")
        if not self.body or not self.body.strip():
            raise ValueError("Body cannot be empty")
        if len(self.body) > BODY_MAX_LENGTH:
            raise ValueError(f"Body cannot exceed {BODY_MAX_LENGTH} characters")
        if not isinstance(self.enabled, bool):
            raise ValueError("Enabled must be a boolean")

    @classmethod
    def create_default(cls, template_type: EmailTemplateType) -> "EmailTemplate":
        template_type = EmailTemplateType.from_string(template_type)
        subject, body = DEFAULT_TEMPLATES[template_type]
        return cls(type=template_type, subject=subject, body=body, enabled=False)

    def with_changes(self, **changes) -> "EmailTemplate":
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "subject": self.subject,
            "body": self.body,
            "enabled": self.enabled,
        }


@dataclass(frozen=True)
class SmtpSettings:
    host: str = ""
    port: int = 587
    username: str = ""
    password: str = ""
    encryption: EncryptionType = EncryptionType.TLS

    def __post_init__(self) -> None:
        host = (self.host or "").strip()
        if host and not HOSTNAME_PATTERN.match(host):
            raise ValueError("Invalid hostname format")
        if isinstance(self.port, bool) or not isinstance(self.port, int) or not 1 <= self.port <= 65535:
            raise ValueError("Port must be between 1 and 65535")
        try:
            encryption = EncryptionType(self.encryption)
        except ValueError:
            raise ValueError("Invalid encryption type") from None
        object.__setattr__(self, "host", host)
        object.__setattr__(self, "username", (self.username or "").strip())
        object.__setattr__(self, "password", self.password or "")
        object.__setattr__(self, "encryption", encryption)

    @classmethod
    def create_default(cls) -> "SmtpSettings":
        return cls()

    def is_configured(self) -> bool:
        return bool(self.host and self.username and self.password)

    def with_changes(self, **changes) -> "SmtpSettings":
        return replace(self, **changes)

    def to_public_dict(self) -> Dict[str, Any]:
        return {
            "host": self.host,
            "port": self.port,
            "username": self.username,
            "password": PASSWORD_MASK if self.password else "",
            "encryption": self.encryption.value,
            "isConfigured": self.is_configured(),
        }


def clean_email_address(email: Optional[str]) -> str:
    email = (email or "").strip().lower()
    if not EMAIL_PATTERN.match(email):
        raise ValueError("Invalid email address")
    return email


@dataclass(frozen=True)
class EmailSettings:
    """Address receiving administrator notifications."""
    administrator_email: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "administrator_email", clean_email_address(self.administrator_email))

    def to_dict(self) -> Dict[str, Any]:
        return {"administratorEmail": self.administrator_email}


class EmailLogStatus(str, Enum):
    SENT = "sent"
    FAILED = "failed"


@dataclass
class EmailLog:
    """One attempt to send an email about an order or an appointment."""
    reference_id: str
    template_type: EmailTemplateType
    recipient: str
    subject: str
    status: EmailLogStatus
    error_message: Optional[str] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    sent_at: datetime = field(default_factory=lambda: now())

    def __post_init__(self) -> None:
        self.template_type = EmailTemplateType(self.template_type)
        self.status = EmailLogStatus(self.status)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "referenceId": self.reference_id,
            "templateType": self.template_type.value,
            "recipient": self.recipient,
            "subject": self.subject,
            "status": self.status.value,
            "errorMessage": self.error_message,
            "sentAt": to_iso(self.sent_at),
        }
