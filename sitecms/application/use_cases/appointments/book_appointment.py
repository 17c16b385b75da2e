"""
Book Appointment Use Case
=========================

Public booking of an activity by a client.
"""
import logging
from datetime import datetime, timedelta
from typing import Any, Dict

from sitecms.application.use_cases.email.send_appointment_email import SendAppointmentEmailUseCase
from sitecms.core.errors import NotFoundError
from sitecms.domain.models.appointment import Appointment, ClientInfo
from sitecms.domain.models.email import EmailTemplateType
from sitecms.domain.repositories.appointment_repository import (
    ActivityRepository,
    AppointmentRepository,
    AvailabilityRepository,
)
from sitecms.utils.datetime_utils import local, now

logger = logging.getLogger(__name__)


class CreateAppointmentUseCase:
    """
    Book an appointment.

    The requested time must respect the activity's minimum notice, fit in
    one weekly slot, not be blocked by an exception and not overlap another
    active appointment. The booking is saved as pending.
    """

    def __init__(
        self,
        activity_repository: ActivityRepository,
        appointment_repository: AppointmentRepository,
        availability_repository: AvailabilityRepository,
        send_email: SendAppointmentEmailUseCase,
    ):
        self._activities = activity_repository
        self._appointments = appointment_repository
        self._availability = availability_repository
        self._send_email = send_email

    def execute(self, activity_id: str, client_info: Dict[str, Any], date_time: datetime) -> Appointment:
        """
        Args:
            activity_id: Activity to book
            client_info: Client fields (name, email, phone, address, customField, notes)
            date_time: Requested start (timezone-aware)

        Raises:
            NotFoundError: If the activity does not exist
            ValueError: If the client details or the requested time are rejected
        """
        activity = self._activities.find_by_id(activity_id)
        if activity is None:
            raise NotFoundError(f"Activity '{activity_id}' not found")

        client = ClientInfo.from_dict(client_info or {})
        client.check_required(activity.required_fields)

        if date_time.tzinfo is None:
            raise ValueError("Appointment date and time must include a timezone")
        start = local(date_time)
        end = start + timedelta(minutes=activity.duration_minutes)

        current = now()
        if start < current:
            raise ValueError("Appointments cannot be booked in the past")
        if start < current + timedelta(hours=activity.minimum_booking_notice_hours):
            raise ValueError(
                f"Appointments must be booked at least "
                f"{activity.minimum_booking_notice_hours} hour(s) in advance"
            )

        availability = self._availability.get()
        day = start.date()
        start_time, end_time = start.strftime("%H:%M"), end.strftime("%H:%M")
        if availability is None or end.date() != day \
                or not availability.contains_interval(day, start_time, end_time):
            raise ValueError("The requested time is outside opening hours")
        if availability.is_date_excluded(day) or availability.is_interval_blocked(day, start_time, end_time):
            raise ValueError("The requested time is not available")
        if self._appointments.has_overlapping_appointment(start, end):
            raise ValueError("This time slot is no longer available")

        appointment = self._appointments.create(Appointment(
            activity_id=activity.id,
            activity_name=activity.name,
            activity_duration_minutes=activity.duration_minutes,
            client_info=client,
            date_time=start,
        ))
        logger.info("Appointment %s booked for '%s' at %s", appointment.id, activity.name, start.isoformat())

        self._send_email.notify(EmailTemplateType.APPOINTMENT_BOOKING, appointment)
        self._send_email.notify(EmailTemplateType.APPOINTMENT_ADMIN_NEW, appointment)
        return appointment
