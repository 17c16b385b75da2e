"""
Appointment Model
=================

A booking of an activity by a client at a given date and time.

Appointments carry a ``version`` incremented by every state change; the
repository uses it for optimistic locking.
"""
import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Dict, Optional, Set

from sitecms.domain.models.activity import RequiredFieldsConfig
from sitecms.utils.datetime_utils import now

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
CLIENT_TEXT_MAX_LENGTH = 500


class AppointmentStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"

    @classmethod
    def from_string(cls, value: str) -> "AppointmentStatus":
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Invalid appointment status '{value}'") from None

    def can_transition_to(self, target: "AppointmentStatus") -> bool:
        return target in APPOINTMENT_STATUS_TRANSITIONS[self]


APPOINTMENT_STATUS_TRANSITIONS: Dict[AppointmentStatus, Set[AppointmentStatus]] = {
    AppointmentStatus.PENDING: {AppointmentStatus.CONFIRMED, AppointmentStatus.CANCELLED},
    AppointmentStatus.CONFIRMED: {AppointmentStatus.CANCELLED},
    AppointmentStatus.CANCELLED: set(),
}


def _optional_text(value: Optional[str], label: str) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    if len(value) > CLIENT_TEXT_MAX_LENGTH:
        raise ValueError(f"Client {label} must be at most {CLIENT_TEXT_MAX_LENGTH} characters")
    return value or None


@dataclass(frozen=True)
class ClientInfo:
    """Contact details entered by the client when booking."""
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    custom_field: Optional[str] = None
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        name = (self.name or "").strip()
        if not name:
            raise ValueError("Client name is required")
        email = (self.email or "").strip().lower()
        if not email:
            raise ValueError("Client email is required")
        if not EMAIL_PATTERN.match(email):
            raise ValueError("Client email is invalid")
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "email", email)
        object.__setattr__(self, "phone", _optional_text(self.phone, "phone"))
        object.__setattr__(self, "address", _optional_text(self.address, "address"))
        object.__setattr__(self, "custom_field", _optional_text(self.custom_field, "custom field"))
        object.__setattr__(self, "notes", _optional_text(self.notes, "notes"))

    def check_required(self, required: RequiredFieldsConfig) -> None:
        """Raise ValueError when a field the activity requires is empty."""
        missing = []
        if required.requires("phone") and not self.phone:
            missing.append("phone")
        if required.requires("address") and not self.address:
            missing.append("address")
        if required.requires("custom") and not self.custom_field:
            missing.append(required.custom_field_label or "custom")
        if missing:
            raise ValueError(f"Missing required client field(s): {', '.join(missing)}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "address": self.address,
            "customField": self.custom_field,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClientInfo":
        return cls(
            name=data.get("name"),
            email=data.get("email"),
            phone=data.get("phone"),
            address=data.get("address"),
            custom_field=data.get("customField", data.get("custom_field")),
            notes=data.get("notes"),
        )


@dataclass
class Appointment:
    """
    Appointment domain model.

    Activity name and duration are copied at booking time so later edits of
    the activity do not move existing appointments.
    """
    activity_id: str
    activity_name: str
    activity_duration_minutes: int
    client_info: ClientInfo
    date_time: datetime
    status: AppointmentStatus = AppointmentStatus.PENDING
    version: int = 1
    reminder_sent: bool = False
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=lambda: now())
    updated_at: datetime = field(default_factory=lambda: now())

    def __post_init__(self) -> None:
        if not self.activity_id:
            raise ValueError("Activity ID is required")
        if not self.activity_name or not self.activity_name.strip():
            raise ValueError("Activity name is required")
        if isinstance(self.activity_duration_minutes, bool) \
                or not isinstance(self.activity_duration_minutes, int) \
                or self.activity_duration_minutes <= 0:
            raise ValueError("Activity duration must be a positive number of minutes")
        if not isinstance(self.date_time, datetime):
            raise ValueError("Appointment date and time are required")
        if self.date_time.tzinfo is None:
            raise ValueError("Appointment date and time must be timezone-aware")
        self.status = AppointmentStatus(self.status)

    @property
    def end_date_time(self) -> datetime:
        return self.date_time + timedelta(minutes=self.activity_duration_minutes)

    @property
    def is_cancelled(self) -> bool:
        return self.status == AppointmentStatus.CANCELLED

    def can_transition_to(self, target: AppointmentStatus) -> bool:
        return self.status.can_transition_to(target)

    def _transition(self, target: AppointmentStatus) -> None:
        if not self.can_transition_to(target):
            raise ValueError(
                f"Cannot change appointment status from {self.status.value} to {target.value}"
            )
        self.status = target
        self.version += 1
        self.updated_at = now()

    def confirm(self) -> None:
        self._transition(AppointmentStatus.CONFIRMED)

    def cancel(self) -> None:
        self._transition(AppointmentStatus.CANCELLED)

    def mark_reminder_sent(self) -> None:
        self.reminder_sent = True
        self.version += 1
        self.updated_at = now()

    def overlaps(self, other: "Appointment") -> bool:
        return self.date_time < other.end_date_time and other.date_time < self.end_date_time

    def overlaps_interval(self, start: datetime, end: datetime) -> bool:
        return self.date_time < end and start < self.end_date_time
