"""
Appointment Service
===================

Application service that coordinates activities, availability, bookings
and reminders.
"""
from datetime import date, datetime
from typing import Any, Dict, List

from sitecms.application.use_cases.appointments.book_appointment import CreateAppointmentUseCase
from sitecms.application.use_cases.appointments.change_appointment_status import (
    CancelAppointmentUseCase,
    ConfirmAppointmentUseCase,
    DeleteAppointmentUseCase,
)
from sitecms.application.use_cases.appointments.get_available_slots import GetAvailableSlotsUseCase
from sitecms.application.use_cases.appointments.get_calendar_events import (
    GetAppointmentsByDateRangeUseCase,
    GetCalendarEventsUseCase,
)
from sitecms.application.use_cases.appointments.manage_activities import (
    CreateActivityUseCase,
    DeleteActivityUseCase,
    UpdateActivityUseCase,
)
from sitecms.application.use_cases.appointments.manage_availability import (
    GetAvailabilityUseCase,
    UpdateAvailabilityUseCase,
)
from sitecms.application.use_cases.appointments.send_appointment_reminders import (
    ReminderRunResult,
    SendAppointmentRemindersUseCase,
)
from sitecms.application.use_cases.email.send_appointment_email import SendAppointmentEmailUseCase
from sitecms.core.errors import NotFoundError
from sitecms.domain.models.activity import Activity
from sitecms.domain.models.appointment import Appointment
from sitecms.domain.models.availability import Availability, AvailabilityException, WeeklySlot
from sitecms.domain.repositories.appointment_repository import (
    ActivityRepository,
    AppointmentRepository,
    AvailabilityRepository,
)


class AppointmentService:
    """
    Application service for the appointment module.

    This service coordinates the activity, availability and booking use
    cases and exposes the reminder job run by the scheduler.
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
        self._create_activity = CreateActivityUseCase(activity_repository)
        self._update_activity = UpdateActivityUseCase(activity_repository)
        self._delete_activity = DeleteActivityUseCase(activity_repository, appointment_repository)
        self._get_availability = GetAvailabilityUseCase(availability_repository)
        self._update_availability = UpdateAvailabilityUseCase(availability_repository)
        self._get_slots = GetAvailableSlotsUseCase(
            activity_repository, appointment_repository, availability_repository
        )
        self._create_appointment = CreateAppointmentUseCase(
            activity_repository, appointment_repository, availability_repository, send_email
        )
        self._confirm = ConfirmAppointmentUseCase(appointment_repository, send_email)
        self._cancel = CancelAppointmentUseCase(appointment_repository, send_email)
        self._delete_appointment = DeleteAppointmentUseCase(appointment_repository)
        self._by_date_range = GetAppointmentsByDateRangeUseCase(appointment_repository)
        self._calendar_events = GetCalendarEventsUseCase(appointment_repository, activity_repository)
        self._send_reminders = SendAppointmentRemindersUseCase(
            appointment_repository, activity_repository, send_email
        )

    # Activities

    def list_activities(self) -> List[Activity]:
        return self._activities.find_all()

    def get_activity(self, activity_id: str) -> Activity:
        activity = self._activities.find_by_id(activity_id)
        if activity is None:
            raise NotFoundError(f"Activity '{activity_id}' not found")
        return activity

    def create_activity(self, **fields: Any) -> Activity:
        return self._create_activity.execute(**fields)

    def update_activity(self, activity_id: str, changes: Dict[str, Any]) -> Activity:
        return self._update_activity.execute(activity_id, changes)

    def delete_activity(self, activity_id: str) -> None:
        self._delete_activity.execute(activity_id)

    # Availability

    def get_availability(self) -> Availability:
        return self._get_availability.execute()

    def update_availability(
        self,
        weekly_slots: List[WeeklySlot],
        exceptions: List[AvailabilityException],
    ) -> Availability:
        return self._update_availability.execute(weekly_slots, exceptions)

    def get_available_slots(self, activity_id: str, day: date) -> List[Dict[str, str]]:
        """
        Free start times of ``activity_id`` on ``day``.

        Returns:
            List of {start_time, end_time} pairs in HH:MM
        """
        return self._get_slots.execute(activity_id, day)

    # Appointments

    def book_appointment(self, activity_id: str, client_info: Dict[str, Any], date_time: datetime) -> Appointment:
        return self._create_appointment.execute(activity_id, client_info, date_time)

    def get_appointment(self, appointment_id: str) -> Appointment:
        appointment = self._appointments.find_by_id(appointment_id)
        if appointment is None:
            raise NotFoundError(f"Appointment '{appointment_id}' not found")
        return appointment

    def confirm_appointment(self, appointment_id: str) -> Appointment:
        return self._confirm.execute(appointment_id)

    def cancel_appointment(self, appointment_id: str) -> Appointment:
        return self._cancel.execute(appointment_id)

    def delete_appointment(self, appointment_id: str) -> None:
        self._delete_appointment.execute(appointment_id)

    def list_appointments(self, start: datetime, end: datetime) -> List[Appointment]:
        return self._by_date_range.execute(start, end)

    def get_calendar_events(self, start: datetime, end: datetime) -> List[Dict[str, Any]]:
        return self._calendar_events.execute(start, end)

    def send_reminders(self) -> ReminderRunResult:
        return self._send_reminders.execute()
