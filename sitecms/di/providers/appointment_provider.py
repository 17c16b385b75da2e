from typing import TYPE_CHECKING

from ...application.services.appointment_service import AppointmentService
from ...application.services.reminder_scheduler import ReminderScheduler
from ...application.use_cases.email.send_appointment_email import SendAppointmentEmailUseCase
from ...core.config import get_settings
from ...domain.repositories.appointment_repository import (
    ActivityRepository,
    AppointmentRepository,
    AvailabilityRepository,
)

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class AppointmentProvider:
    """Appointment provider - registers the appointment service and its reminder job"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        service = AppointmentService(
            activity_repository=container.get(ActivityRepository),
            appointment_repository=container.get(AppointmentRepository),
            availability_repository=container.get(AvailabilityRepository),
            send_email=container.get(SendAppointmentEmailUseCase),
        )
        container.register_singleton(AppointmentService, service)

        container.register_singleton(
            ReminderScheduler,
            ReminderScheduler(service, get_settings().reminder_check_interval_seconds)
        )
