"""
Get Available Slots Use Case
============================

Computes the start times a client can book for an activity on a given day.

Candidates are generated every SLOT_GENERATION_INTERVAL_MINUTES inside each
weekly slot of the day, as long as the whole activity fits before the slot
ends. A candidate is dropped when it is in the past or within the minimum
booking notice, blocked by an availability exception, or overlaps a
non-cancelled appointment.
"""
from datetime import date, timedelta
from typing import Dict, List

from sitecms.core.errors import NotFoundError
from sitecms.domain.models.availability import day_of_week, from_minutes
from sitecms.domain.repositories.appointment_repository import (
    ActivityRepository,
    AppointmentRepository,
    AvailabilityRepository,
)
from sitecms.utils.datetime_utils import at_time, now

SLOT_GENERATION_INTERVAL_MINUTES = 15


class GetAvailableSlotsUseCase:
    def __init__(
        self,
        activity_repository: ActivityRepository,
        appointment_repository: AppointmentRepository,
        availability_repository: AvailabilityRepository,
    ):
        self._activities = activity_repository
        self._appointments = appointment_repository
        self._availability = availability_repository

    def execute(self, activity_id: str, day: date) -> List[Dict[str, str]]:
        """
        Args:
            activity_id: Activity to book
            day: Calendar day in the application timezone

        Returns:
            {start_time, end_time} pairs ("HH:MM"), in chronological order

        Raises:
            NotFoundError: If the activity does not exist
        """
        activity = self._activities.find_by_id(activity_id)
        if activity is None:
            raise NotFoundError(f"Activity '{activity_id}' not found")

        availability = self._availability.get()
        if availability is None or availability.is_date_excluded(day):
            return []

        day_start = at_time(day, "00:00")
        booked = [
            appointment
            for appointment in self._appointments.find_by_date_range(day_start, day_start + timedelta(days=1))
            if not appointment.is_cancelled
        ]
        current = now()
        earliest = current + timedelta(hours=activity.minimum_booking_notice_hours)
        duration = activity.duration_minutes

        slots = []
        for weekly_slot in availability.get_slots_for_day(day_of_week(day)):
            candidate = weekly_slot.start_minutes
            while candidate + duration <= weekly_slot.end_minutes:
                start_time = from_minutes(candidate)
                end_time = from_minutes(candidate + duration)
                start = at_time(day, start_time)
                end = start + timedelta(minutes=duration)
                candidate += SLOT_GENERATION_INTERVAL_MINUTES

                if start < current or start < earliest:
                    continue
                if availability.is_interval_blocked(day, start_time, end_time):
                    continue
                if any(appointment.overlaps_interval(start, end) for appointment in booked):
                    continue
                slots.append({"start_time": start_time, "end_time": end_time})
        return slots
