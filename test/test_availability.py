"""Tests for weekly availability, exceptions and slot computation."""
from datetime import date, datetime, time, timedelta, timezone

import pytest

from sitecms.application.services.appointment_service import AppointmentService
from sitecms.domain.models.availability import (
    Availability,
    AvailabilityException,
    WeeklySlot,
    day_of_week,
)

MONDAY = 1


@pytest.fixture
def service(container) -> AppointmentService:
    return container.get(AppointmentService)


def open_mondays(service, *ranges):
    slots = [WeeklySlot(MONDAY, start, end) for start, end in ranges]
    service.update_availability(slots, [])


# =============================================================================
# Weekly slots
# =============================================================================


class TestWeeklySlot:
    def test_time_format(self):
        with pytest.raises(ValueError):
            WeeklySlot(MONDAY, "9:00", "12:00")
        with pytest.raises(ValueError):
            WeeklySlot(MONDAY, "24:00", "23:00")

    def test_end_after_start(self):
        with pytest.raises(ValueError):
            WeeklySlot(MONDAY, "12:00", "12:00")

    def test_day_range(self):
        with pytest.raises(ValueError):
            WeeklySlot(7, "09:00", "12:00")
        assert WeeklySlot(0, "09:00", "12:00").day_name == "Sunday"

    def test_overlap_needs_same_day(self):
        morning = WeeklySlot(MONDAY, "09:00", "12:00")
        assert morning.overlaps(WeeklySlot(MONDAY, "11:00", "13:00"))
        assert not morning.overlaps(WeeklySlot(MONDAY, "12:00", "13:00"))
        assert not morning.overlaps(WeeklySlot(2, "09:00", "12:00"))
        assert morning.duration_minutes() == 180

    def test_overlapping_slots_rejected(self):
        with pytest.raises(ValueError):
            Availability(weekly_slots=[
                WeeklySlot(MONDAY, "09:00", "12:00"),
                WeeklySlot(MONDAY, "11:30", "14:00"),
            ])

    def test_day_of_week_starts_on_sunday(self):
        assert day_of_week(date(2026, 10, 18)) == 0
        assert day_of_week(date(2026, 10, 19)) == MONDAY


# =============================================================================
# Exceptions
# =============================================================================


class TestAvailabilityException:
    def test_end_date_not_before_start(self):
        with pytest.raises(ValueError):
            AvailabilityException(date(2026, 12, 26), date(2026, 12, 24))

    def test_times_come_in_pairs(self):
        with pytest.raises(ValueError):
            AvailabilityException(date(2026, 12, 24), date(2026, 12, 24), start_time="10:00")

    def test_single_day_window(self):
        exception = AvailabilityException(
            date(2026, 12, 24), date(2026, 12, 24), start_time="14:00", end_time="16:00"
        )
        assert exception.overlaps_with_interval(date(2026, 12, 24), "15:00", "17:00")
        assert not exception.overlaps_with_interval(date(2026, 12, 24), "16:00", "17:00")
        assert not exception.overlaps_with_interval(date(2026, 12, 25), "15:00", "17:00")

    def test_multi_day_window(self):
        exception = AvailabilityException(
            date(2026, 12, 24), date(2026, 12, 26), start_time="14:00", end_time="10:00"
        )
        assert not exception.overlaps_with_interval(date(2026, 12, 24), "09:00", "10:00")
        assert exception.overlaps_with_interval(date(2026, 12, 24), "15:00", "16:00")
        assert exception.overlaps_with_interval(date(2026, 12, 25), "09:00", "10:00")
        assert exception.overlaps_with_interval(date(2026, 12, 26), "09:00", "10:00")
        assert not exception.overlaps_with_interval(date(2026, 12, 26), "10:00", "11:00")

    def test_all_day_excludes_date(self):
        availability = Availability(exceptions=[AvailabilityException(date(2026, 12, 25), date(2026, 12, 25))])
        assert availability.is_date_excluded(date(2026, 12, 25))
        assert not availability.is_date_excluded(date(2026, 12, 26))

    def test_from_dict_defaults_end_date(self):
        exception = AvailabilityException.from_dict({"startDate": "2026-12-25", "reason": "Christmas"})
        assert exception.end_date == date(2026, 12, 25)
        assert exception.reason == "Christmas"


# =============================================================================
# Slot computation
# =============================================================================


class TestAvailableSlots:
    def test_slots_every_interval_within_opening_hours(self, service, next_monday):
        open_mondays(service, ("09:00", "10:00"))
        activity = service.create_activity(name="Massage", duration_minutes=30)

        slots = service.get_available_slots(activity.id, next_monday)

        assert [slot["start_time"] for slot in slots] == ["09:00", "09:15", "09:30"]
        assert slots[-1]["end_time"] == "10:00"

    def test_no_slots_on_closed_day(self, service, next_monday):
        open_mondays(service, ("09:00", "10:00"))
        activity = service.create_activity(name="Massage", duration_minutes=30)
        assert service.get_available_slots(activity.id, next_monday + timedelta(days=1)) == []

    def test_excluded_date_has_no_slots(self, service, next_monday):
        service.update_availability(
            [WeeklySlot(MONDAY, "09:00", "12:00")],
            [AvailabilityException(next_monday, next_monday, reason="Closed")],
        )
        activity = service.create_activity(name="Massage", duration_minutes=30)
        assert service.get_available_slots(activity.id, next_monday) == []

    def test_partial_exception_blocks_overlapping_slots(self, service, next_monday):
        service.update_availability(
            [WeeklySlot(MONDAY, "09:00", "10:00")],
            [AvailabilityException(next_monday, next_monday, start_time="09:00", end_time="09:30")],
        )
        activity = service.create_activity(name="Massage", duration_minutes=30)
        slots = service.get_available_slots(activity.id, next_monday)
        assert [slot["start_time"] for slot in slots] == ["09:30"]

    def test_booked_appointments_remove_slots(self, service, next_monday):
        open_mondays(service, ("09:00", "10:30"))
        activity = service.create_activity(name="Massage", duration_minutes=30)
        start = datetime.combine(next_monday, time(9, 30), tzinfo=timezone.utc)
        service.book_appointment(activity.id, {"name": "Marie", "email": "marie@example.com"}, start)

        slots = service.get_available_slots(activity.id, next_monday)

        assert [slot["start_time"] for slot in slots] == ["09:00", "10:00"]

    def test_cancelled_appointments_free_their_slot(self, service, next_monday):
        open_mondays(service, ("09:00", "09:30"))
        activity = service.create_activity(name="Massage", duration_minutes=30)
        start = datetime.combine(next_monday, time(9, 0), tzinfo=timezone.utc)
        appointment = service.book_appointment(activity.id, {"name": "Marie", "email": "marie@example.com"}, start)
        assert service.get_available_slots(activity.id, next_monday) == []

        service.cancel_appointment(appointment.id)

        assert len(service.get_available_slots(activity.id, next_monday)) == 1

    def test_unknown_activity(self, service, next_monday):
        from sitecms.core.errors import NotFoundError

        with pytest.raises(NotFoundError):
            service.get_available_slots("missing", next_monday)
