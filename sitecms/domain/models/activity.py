"""
Activity Model
==============

Bookable activity (a service offered by appointment) with its booking form
and reminder configuration.
"""
import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from sitecms.utils.datetime_utils import now

COLOR_PATTERN = re.compile(r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$")
ACTIVITY_NAME_MAX_LENGTH = 100
ACTIVITY_DESCRIPTION_MAX_LENGTH = 2000
DEFAULT_ACTIVITY_COLOR = "#3b82f6"

CLIENT_FIELDS = ("name", "email", "phone", "address", "custom")
MANDATORY_CLIENT_FIELDS = ("name", "email")
CUSTOM_FIELD_LABEL_MAX_LENGTH = 100

REMINDER_MIN_HOURS = 1
REMINDER_MAX_HOURS = 168
DEFAULT_REMINDER_HOURS = 24


@dataclass(frozen=True)
class RequiredFieldsConfig:
    """Client fields an activity's booking form asks for."""
    fields: Tuple[str, ...] = MANDATORY_CLIENT_FIELDS
    custom_field_label: Optional[str] = None

    def __post_init__(self) -> None:
        unknown = [name for name in self.fields if name not in CLIENT_FIELDS]
        if unknown:
            raise ValueError(f"Unknown required field(s): {', '.join(unknown)}")
        # name and email are always collected
        ordered = tuple(name for name in CLIENT_FIELDS if name in self.fields or name in MANDATORY_CLIENT_FIELDS)
        object.__setattr__(self, "fields", ordered)

        label = (self.custom_field_label or "").strip() or None
        if "custom" in ordered and not label:
            raise ValueError("A label is required for the custom field")
        if label is not None and len(label) > CUSTOM_FIELD_LABEL_MAX_LENGTH:
            raise ValueError(f"Custom field label must be at most {CUSTOM_FIELD_LABEL_MAX_LENGTH} characters")
        object.__setattr__(self, "custom_field_label", label if "custom" in ordered else None)

    @classmethod
    def default(cls) -> "RequiredFieldsConfig":
        return cls()

    def requires(self, name: str) -> bool:
        return name in self.fields

    def to_dict(self) -> Dict[str, Any]:
        return {"fields": list(self.fields), "customFieldLabel": self.custom_field_label}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "RequiredFieldsConfig":
        if not data:
            return cls.default()
        return cls(
            fields=tuple(data.get("fields") or MANDATORY_CLIENT_FIELDS),
            custom_field_label=data.get("customFieldLabel", data.get("custom_field_label")),
        )


@dataclass(frozen=True)
class ReminderSettings:
    """Whether and how long before the appointment a reminder email is sent."""
    enabled: bool = True
    hours_before: int = DEFAULT_REMINDER_HOURS

    def __post_init__(self) -> None:
        if not isinstance(self.enabled, bool):
            raise ValueError("Reminder enabled flag must be a boolean")
        if isinstance(self.hours_before, bool) or not isinstance(self.hours_before, int) \
                or not REMINDER_MIN_HOURS <= self.hours_before <= REMINDER_MAX_HOURS:
            raise ValueError(
                f"Reminder hours must be between {REMINDER_MIN_HOURS} and {REMINDER_MAX_HOURS}"
            )

    @classmethod
    def with_hours(cls, hours: int) -> "ReminderSettings":
        return cls(enabled=True, hours_before=hours)

    @classmethod
    def disabled(cls) -> "ReminderSettings":
        return cls(enabled=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"enabled": self.enabled, "hoursBefore": self.hours_before}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ReminderSettings":
        if not data:
            return cls()
        return cls(
            enabled=data.get("enabled", True),
            hours_before=data.get("hoursBefore", data.get("hours_before", DEFAULT_REMINDER_HOURS)),
        )


@dataclass
class Activity:
    """
    Bookable activity.

    ``duration_minutes`` fixes the length of each appointment and
    ``minimum_booking_notice_hours`` how far in advance it must be booked.
    """
    name: str
    duration_minutes: int
    color: str = DEFAULT_ACTIVITY_COLOR
    price: float = 0.0
    description: Optional[str] = None
    required_fields: RequiredFieldsConfig = field(default_factory=RequiredFieldsConfig.default)
    reminder_settings: ReminderSettings = field(default_factory=ReminderSettings)
    minimum_booking_notice_hours: int = 0
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=lambda: now())
    updated_at: datetime = field(default_factory=lambda: now())

    def __post_init__(self) -> None:
        self.name = self._clean_name(self.name)
        self.duration_minutes = self._check_duration(self.duration_minutes)
        self.color = self._check_color(self.color)
        self.price = self._check_price(self.price)
        self.description = self._clean_description(self.description)
        self.minimum_booking_notice_hours = self._check_notice(self.minimum_booking_notice_hours)

    @staticmethod
    def _clean_name(name: Optional[str]) -> str:
        if name is None or not str(name).strip():
            raise ValueError("Activity name is required")
        name = str(name).strip()
        if len(name) > ACTIVITY_NAME_MAX_LENGTH:
            raise ValueError(f"Activity name must be at most {ACTIVITY_NAME_MAX_LENGTH} characters")
        return name

    @staticmethod
    def _check_duration(duration: int) -> int:
        if isinstance(duration, bool) or not isinstance(duration, int) or duration <= 0:
            raise ValueError("Activity duration must be a positive number of minutes")
        return duration

    @staticmethod
    def _check_color(color: str) -> str:
        if not isinstance(color, str) or not COLOR_PATTERN.match(color):
            raise ValueError("Activity color must be a hex color like #3b82f6")
        return color.lower()

    @staticmethod
    def _check_price(price: float) -> float:
        if isinstance(price, bool) or not isinstance(price, (int, float)) or price < 0:
            raise ValueError("Activity price cannot be negative")
        return float(price)

    @staticmethod
    def _clean_description(description: Optional[str]) -> Optional[str]:
        if description is None:
            return None
        description = str(description).strip()
        if len(description) > ACTIVITY_DESCRIPTION_MAX_LENGTH:
            raise ValueError(
                f"Activity description must be at most {ACTIVITY_DESCRIPTION_MAX_LENGTH} characters"
            )
        return description or None

    @staticmethod
    def _check_notice(hours: int) -> int:
        if isinstance(hours, bool) or not isinstance(hours, int) or hours < 0:
            raise ValueError("Minimum booking notice must be a non-negative number of hours")
        return hours

    def update(self, changes: Dict[str, Any]) -> None:
        """
        Apply a partial update.

        Args:
            changes: Mapping of attribute name to new value; only the keys
                present are changed (a None description clears it)
        """
        if "name" in changes:
            self.name = self._clean_name(changes["name"])
        if "duration_minutes" in changes:
            self.duration_minutes = self._check_duration(changes["duration_minutes"])
        if "color" in changes:
            self.color = self._check_color(changes["color"])
        if "price" in changes:
            self.price = self._check_price(changes["price"])
        if "description" in changes:
            self.description = self._clean_description(changes["description"])
        if "required_fields" in changes:
            self.required_fields = changes["required_fields"]
        if "reminder_settings" in changes:
            self.reminder_settings = changes["reminder_settings"]
        if "minimum_booking_notice_hours" in changes:
            self.minimum_booking_notice_hours = self._check_notice(changes["minimum_booking_notice_hours"])
        self.updated_at = now()
