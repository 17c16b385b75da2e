"""
Availability Models
===================

Weekly opening slots and the exceptions (holidays, closures, partial-day
blocks) that together define when appointments can be booked.

Times are "HH:MM" strings in the application timezone; days of week run from
0 (Sunday) to 6 (Saturday).
"""
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional

from sitecms.utils.datetime_utils import now

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
EXCEPTION_REASON_MAX_LENGTH = 200


def to_minutes(hhmm: str) -> int:
    hours, minutes = hhmm.split(":")
    return int(hours) * 60 + int(minutes)


def from_minutes(total: int) -> str:
    return f"{total // 60:02d}:{total % 60:02d}"


def _check_time(value: str, label: str) -> str:
    if not isinstance(value, str) or not TIME_PATTERN.match(value):
        raise ValueError(f"{label} must be in HH:MM format")
    return value


def day_of_week(day: date) -> int:
    """Day of week with 0 = Sunday."""
    return (day.weekday() + 1) % 7


@dataclass(frozen=True)
class WeeklySlot:
    """Recurring opening interval on one day of the week."""
    day_of_week: int
    start_time: str
    end_time: str

    def __post_init__(self) -> None:
        if isinstance(self.day_of_week, bool) or not isinstance(self.day_of_week, int) \
                or not 0 <= self.day_of_week <= 6:
            raise ValueError("Day of week must be an integer between 0 (Sunday) and 6 (Saturday)")
        _check_time(self.start_time, "Start time")
        _check_time(self.end_time, "End time")
        if to_minutes(self.end_time) <= to_minutes(self.start_time):
            raise ValueError("End time must be after start time")

    @property
    def day_name(self) -> str:
        return DAY_NAMES[self.day_of_week]

    @property
    def start_minutes(self) -> int:
        return to_minutes(self.start_time)

    @property
    def end_minutes(self) -> int:
        return to_minutes(self.end_time)

    def duration_minutes(self) -> int:
        return self.end_minutes - self.start_minutes

    def overlaps(self, other: "WeeklySlot") -> bool:
        """True when both slots are on the same day and their intervals intersect."""
        if self.day_of_week != other.day_of_week:
            return False
        return self.start_minutes < other.end_minutes and other.start_minutes < self.end_minutes

    def to_dict(self) -> dict:
        return {
            "dayOfWeek": self.day_of_week,
            "startTime": self.start_time,
            "endTime": self.end_time,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WeeklySlot":
        return cls(
            day_of_week=data.get("dayOfWeek", data.get("day_of_week")),
            start_time=data.get("startTime", data.get("start_time")),
            end_time=data.get("endTime", data.get("end_time")),
        )


@dataclass(frozen=True)
class AvailabilityException:
    """
    Closure over a date range, either whole days or a time window.

    When ``start_time``/``end_time`` are set the window applies on every
    covered day: from ``start_time`` on the first day, until ``end_time`` on
    the last day, and the whole of any day in between.
    """
    start_date: date
    end_date: date
    reason: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.start_date, date) or not isinstance(self.end_date, date):
            raise ValueError("Exception dates are required")
        if isinstance(self.start_date, datetime) or isinstance(self.end_date, datetime):
            object.__setattr__(self, "start_date", _as_date(self.start_date))
            object.__setattr__(self, "end_date", _as_date(self.end_date))
        if self.end_date < self.start_date:
            raise ValueError("Exception end date must be on or after start date")

        if (self.start_time is None) != (self.end_time is None):
            raise ValueError("Exception start and end times must be provided together")
        if self.start_time is not None:
            _check_time(self.start_time, "Exception start time")
            _check_time(self.end_time, "Exception end time")
            if self.is_single_day and to_minutes(self.end_time) <= to_minutes(self.start_time):
                raise ValueError("Exception end time must be after start time")

        reason = (self.reason or "").strip() or None
        if reason is not None and len(reason) > EXCEPTION_REASON_MAX_LENGTH:
            raise ValueError(f"Exception reason must be at most {EXCEPTION_REASON_MAX_LENGTH} characters")
        object.__setattr__(self, "reason", reason)

    @property
    def is_all_day(self) -> bool:
        return self.start_time is None

    @property
    def is_single_day(self) -> bool:
        return self.start_date == self.end_date

    def covers_date(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def overlaps_with_interval(self, day: date, start_time: str, end_time: str) -> bool:
        """
        Check whether the interval ``start_time``-``end_time`` on ``day`` is blocked.

        Args:
            day: Calendar date of the interval
            start_time: Interval start "HH:MM"
            end_time: Interval end "HH:MM"

        Returns:
            True when the exception blocks any part of the interval
        """
        if not self.covers_date(day):
            return False
        if self.is_all_day:
            return True

        start = to_minutes(start_time)
        end = to_minutes(end_time)
        ex_start = to_minutes(self.start_time)
        ex_end = to_minutes(self.end_time)

        if self.is_single_day:
            return ex_start < end and start < ex_end
        if day == self.start_date:
            return end > ex_start
        if day == self.end_date:
            return start < ex_end
        return True

    def to_dict(self) -> dict:
        return {
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "startTime": self.start_time,
            "endTime": self.end_time,
            "reason": self.reason,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AvailabilityException":
        start = data.get("startDate") or data.get("start_date") or data.get("date")
        end = data.get("endDate") or data.get("end_date") or start
        return cls(
            start_date=_as_date(start),
            end_date=_as_date(end),
            reason=data.get("reason"),
            start_time=data.get("startTime", data.get("start_time")),
            end_time=data.get("endTime", data.get("end_time")),
        )


def _as_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            raise ValueError(f"Invalid date '{value}'") from None
    raise ValueError("Exception dates are required")


@dataclass
class Availability:
    """Weekly schedule plus exceptions. There is one per website."""
    weekly_slots: List[WeeklySlot] = field(default_factory=list)
    exceptions: List[AvailabilityException] = field(default_factory=list)
    updated_at: datetime = field(default_factory=lambda: now())

    def __post_init__(self) -> None:
        self._check_slots(self.weekly_slots)
        self.weekly_slots = list(self.weekly_slots)
        self.exceptions = list(self.exceptions)

    @classmethod
    def empty(cls) -> "Availability":
        return cls()

    @staticmethod
    def _check_slots(slots: List[WeeklySlot]) -> None:
        for index, slot in enumerate(slots):
            for other in slots[index + 1:]:
                if slot.overlaps(other):
                    raise ValueError(
                        f"Slot {slot.start_time}-{slot.end_time} overlaps "
                        f"{other.start_time}-{other.end_time} on {slot.day_name}"
                    )

    def add_weekly_slot(self, slot: WeeklySlot) -> None:
        for existing in self.weekly_slots:
            if existing.overlaps(slot):
                raise ValueError(
                    f"Slot {slot.start_time}-{slot.end_time} overlaps an existing slot on {slot.day_name}"
                )
        self.weekly_slots.append(slot)
        self.updated_at = now()

    def remove_weekly_slot(self, slot: WeeklySlot) -> None:
        self.weekly_slots = [existing for existing in self.weekly_slots if existing != slot]
        self.updated_at = now()

    def add_exception(self, exception: AvailabilityException) -> None:
        for existing in self.exceptions:
            if existing.covers_date(exception.start_date):
                raise ValueError(
                    f"An exception already exists for {exception.start_date.isoformat()}"
                )
        self.exceptions.append(exception)
        self.updated_at = now()

    def remove_exception(self, day: date) -> None:
        """Remove every exception covering ``day``."""
        self.exceptions = [ex for ex in self.exceptions if not ex.covers_date(day)]
        self.updated_at = now()

    def is_date_excluded(self, day: date) -> bool:
        """True when an all-day exception covers ``day``."""
        return any(ex.is_all_day and ex.covers_date(day) for ex in self.exceptions)

    def is_interval_blocked(self, day: date, start_time: str, end_time: str) -> bool:
        return any(ex.overlaps_with_interval(day, start_time, end_time) for ex in self.exceptions)

    def get_slots_for_day(self, dow: int) -> List[WeeklySlot]:
        return sorted(
            (slot for slot in self.weekly_slots if slot.day_of_week == dow),
            key=lambda slot: slot.start_minutes,
        )

    def contains_interval(self, day: date, start_time: str, end_time: str) -> bool:
        """True when a weekly slot of ``day`` fully contains the interval."""
        start = to_minutes(start_time)
        end = to_minutes(end_time)
        return any(
            slot.start_minutes <= start and end <= slot.end_minutes
            for slot in self.get_slots_for_day(day_of_week(day))
        )

    def update(
        self,
        weekly_slots: List[WeeklySlot],
        exceptions: List[AvailabilityException],
    ) -> None:
        """Replace slots and exceptions; slots must not overlap each other."""
        self._check_slots(weekly_slots)
        self.weekly_slots = list(weekly_slots)
        self.exceptions = list(exceptions)
        self.updated_at = now()
