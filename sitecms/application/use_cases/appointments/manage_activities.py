"""
Activity Use Cases
==================
"""
import logging
from typing import Any, Dict

from sitecms.core.errors import NotFoundError
from sitecms.domain.models.activity import Activity
from sitecms.domain.repositories.appointment_repository import ActivityRepository, AppointmentRepository
from sitecms.utils.datetime_utils import now

logger = logging.getLogger(__name__)


class CreateActivityUseCase:
    def __init__(self, activity_repository: ActivityRepository):
        self._repository = activity_repository

    def execute(self, **fields: Any) -> Activity:
        """
        Args:
            **fields: Activity attributes (name, duration_minutes, color, price,
                description, required_fields, reminder_settings,
                minimum_booking_notice_hours)
        """
        activity = self._repository.create(Activity(**fields))
        logger.info("Activity '%s' created (%d min)", activity.name, activity.duration_minutes)
        return activity


class UpdateActivityUseCase:
    def __init__(self, activity_repository: ActivityRepository):
        self._repository = activity_repository

    def execute(self, activity_id: str, changes: Dict[str, Any]) -> Activity:
        activity = self._repository.find_by_id(activity_id)
        if activity is None:
            raise NotFoundError(f"Activity '{activity_id}' not found")
        activity.update(changes)
        return self._repository.update(activity)


class DeleteActivityUseCase:
    """Activities with upcoming appointments cannot be deleted."""

    def __init__(self, activity_repository: ActivityRepository, appointment_repository: AppointmentRepository):
        self._activities = activity_repository
        self._appointments = appointment_repository

    def execute(self, activity_id: str) -> None:
        if self._activities.find_by_id(activity_id) is None:
            raise NotFoundError(f"Activity '{activity_id}' not found")
        if self._appointments.has_future_appointments(activity_id, now()):
            raise ValueError("Cannot delete an activity with upcoming appointments")
        self._activities.delete(activity_id)
        logger.info("Activity '%s' deleted", activity_id)
