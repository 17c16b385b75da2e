"""
Appointment Repository Interfaces
=================================

Abstract interfaces for activities, appointments and the availability
schedule. Implementations should be in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from sitecms.domain.models.activity import Activity
from sitecms.domain.models.appointment import Appointment
from sitecms.domain.models.availability import Availability


class ActivityRepository(ABC):
    """Abstract repository for activity persistence operations."""

    @abstractmethod
    def create(self, activity: Activity) -> Activity:
        pass

    @abstractmethod
    def update(self, activity: Activity) -> Activity:
        """
        Update an existing activity.

        Raises:
            NotFoundError: If the activity does not exist
        """
        pass

    @abstractmethod
    def find_by_id(self, activity_id: str) -> Optional[Activity]:
        pass

    @abstractmethod
    def find_all(self) -> List[Activity]:
        """Find all activities, ordered by name."""
        pass

    @abstractmethod
    def delete(self, activity_id: str) -> bool:
        pass

    @abstractmethod
    def delete_all(self) -> int:
        pass


class AppointmentRepository(ABC):
    """
    Abstract repository for appointment persistence operations.

    Updates go through ``update_with_optimistic_lock``: the caller changes
    the appointment (which increments its version) and the write only
    succeeds if the stored version is still the previous one.
    """

    @abstractmethod
    def create(self, appointment: Appointment) -> Appointment:
        """
        Create a new appointment.

        Args:
            appointment: Appointment entity to create

        Returns:
            Created appointment entity
        """
        pass

    @abstractmethod
    def find_by_id(self, appointment_id: str) -> Optional[Appointment]:
        """
        Find an appointment by its ID.

        Returns:
            Appointment entity if found, None otherwise
        """
        pass

    @abstractmethod
    def update_with_optimistic_lock(self, appointment: Appointment) -> Appointment:
        """
        Persist an appointment whose version was just incremented.

        Args:
            appointment: Appointment entity after the state change

        Returns:
            Updated appointment entity

        Raises:
            ConcurrencyError: If the stored version is not ``version - 1``
        """
        pass

    @abstractmethod
    def find_by_date_range(self, start: datetime, end: datetime) -> List[Appointment]:
        """
        Find the appointments overlapping ``[start, end)``, cancelled included.

        Returns:
            List of appointments ordered by date
        """
        pass

    @abstractmethod
    def has_overlapping_appointment(
        self,
        start: datetime,
        end: datetime,
        exclude_id: Optional[str] = None,
    ) -> bool:
        """
        Check whether a non-cancelled appointment overlaps ``[start, end)``.

        Args:
            start: Start of the interval
            end: End of the interval
            exclude_id: Appointment to ignore (the one being changed)

        Returns:
            True if an overlapping appointment exists
        """
        pass

    @abstractmethod
    def has_future_appointments(self, activity_id: str, after: datetime) -> bool:
        """Check for non-cancelled appointments of an activity starting after ``after``."""
        pass

    @abstractmethod
    def find_pending_reminders(self, before: datetime) -> List[Appointment]:
        """
        Find appointments that may need a reminder.

        Args:
            before: Latest appointment start considered

        Returns:
            Pending or confirmed appointments, reminder not sent, starting
            at or before ``before``
        """
        pass

    @abstractmethod
    def delete(self, appointment_id: str) -> bool:
        pass


class AvailabilityRepository(ABC):
    """Abstract repository for the single availability schedule."""

    @abstractmethod
    def get(self) -> Optional[Availability]:
        """
        Load the schedule.

        Returns:
            Availability if one was saved, None otherwise
        """
        pass

    @abstractmethod
    def save(self, availability: Availability) -> Availability:
        pass

    @abstractmethod
    def delete(self) -> bool:
        pass
