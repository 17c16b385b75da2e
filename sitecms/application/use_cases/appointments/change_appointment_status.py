"""
Appointment Status Use Cases
============================

Confirmation, cancellation and deletion of appointments by the
administrator. Status changes go through the optimistic lock.
"""
import logging

from sitecms.application.use_cases.email.send_appointment_email import SendAppointmentEmailUseCase
from sitecms.core.errors import NotFoundError
from sitecms.domain.models.appointment import Appointment
from sitecms.domain.models.email import EmailTemplateType
from sitecms.domain.repositories.appointment_repository import AppointmentRepository

logger = logging.getLogger(__name__)


class _ChangeStatusUseCase:
    template_type: EmailTemplateType

    def __init__(self, appointment_repository: AppointmentRepository, send_email: SendAppointmentEmailUseCase):
        self._appointments = appointment_repository
        self._send_email = send_email

    def _apply(self, appointment: Appointment) -> None:
        raise NotImplementedError

    def execute(self, appointment_id: str) -> Appointment:
        """
        Raises:
            NotFoundError: If the appointment does not exist
            ValueError: If the transition is not allowed
            ConcurrencyError: If the appointment changed in the meantime
        """
        appointment = self._appointments.find_by_id(appointment_id)
        if appointment is None:
            raise NotFoundError(f"Appointment '{appointment_id}' not found")
        self._apply(appointment)
        updated = self._appointments.update_with_optimistic_lock(appointment)
        logger.info("Appointment %s is now %s", updated.id, updated.status.value)
        self._send_email.notify(self.template_type, updated)
        return updated


class ConfirmAppointmentUseCase(_ChangeStatusUseCase):
    template_type = EmailTemplateType.APPOINTMENT_ADMIN_CONFIRMATION

    def _apply(self, appointment: Appointment) -> None:
        appointment.confirm()


class CancelAppointmentUseCase(_ChangeStatusUseCase):
    template_type = EmailTemplateType.APPOINTMENT_CANCELLATION

    def _apply(self, appointment: Appointment) -> None:
        appointment.cancel()


class DeleteAppointmentUseCase:
    def __init__(self, appointment_repository: AppointmentRepository):
        self._appointments = appointment_repository

    def execute(self, appointment_id: str) -> None:
        if not self._appointments.delete(appointment_id):
            raise NotFoundError(f"Appointment '{appointment_id}' not found")
