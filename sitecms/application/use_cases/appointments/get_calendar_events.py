"""
Calendar Use Cases
==================

Appointments over a date range, raw or as calendar events for the admin
calendar view.
"""
from datetime import datetime
from typing import Any, Dict, List

from sitecms.domain.models.activity import DEFAULT_ACTIVITY_COLOR
from sitecms.domain.models.appointment import Appointment
from sitecms.domain.repositories.appointment_repository import ActivityRepository, AppointmentRepository
from sitecms.utils.datetime_utils import to_iso


def _check_range(start: datetime, end: datetime) -> None:
    if start >= end:
        raise ValueError("Start date must be before end date")


class GetAppointmentsByDateRangeUseCase:
    def __init__(self, appointment_repository: AppointmentRepository):
        self._appointments = appointment_repository

    def execute(self, start: datetime, end: datetime) -> List[Appointment]:
        _check_range(start, end)
        return self._appointments.find_by_date_range(start, end)


class GetCalendarEventsUseCase:
    def __init__(self, appointment_repository: AppointmentRepository, activity_repository: ActivityRepository):
        self._appointments = appointment_repository
        self._activities = activity_repository

    def execute(self, start: datetime, end: datetime) -> List[Dict[str, Any]]:
        """
        Returns:
            Events with id, title ("<activity> - <client>"), start, end,
            color and extended_props (status, client_info, activity_id)
        """
        _check_range(start, end)
        colors = {activity.id: activity.color for activity in self._activities.find_all()}
        return [
            {
                "id": appointment.id,
                "title": f"{appointment.activity_name} - {appointment.client_info.name}",
                "start": to_iso(appointment.date_time),
                "end": to_iso(appointment.end_date_time),
                "color": colors.get(appointment.activity_id, DEFAULT_ACTIVITY_COLOR),
                "extended_props": {
                    "status": appointment.status.value,
                    "client_info": appointment.client_info.to_dict(),
                    "activity_id": appointment.activity_id,
                },
            }
            for appointment in self._appointments.find_by_date_range(start, end)
        ]
