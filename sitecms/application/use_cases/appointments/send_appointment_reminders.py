"""
Send Appointment Reminders Use Case
===================================

Periodic job sending the reminder email of upcoming confirmed
appointments, ``hours_before`` hours ahead as configured per activity.
"""
import logging
from dataclasses import dataclass
from datetime import timedelta

from sitecms.application.use_cases.email.send_appointment_email import SendAppointmentEmailUseCase
from sitecms.core.errors import ConcurrencyError
from sitecms.domain.models.activity import REMINDER_MAX_HOURS
from sitecms.domain.models.appointment import AppointmentStatus
from sitecms.domain.models.email import EmailTemplateType
from sitecms.domain.repositories.appointment_repository import ActivityRepository, AppointmentRepository
from sitecms.utils.datetime_utils import now

logger = logging.getLogger(__name__)


@dataclass
class ReminderRunResult:
    checked: int = 0
    sent: int = 0
    failed: int = 0


class SendAppointmentRemindersUseCase:
    """
    Pending and confirmed appointments are candidates; only confirmed ones
    get the email. An appointment is marked as reminded once its email was
    sent (or its template is disabled), or when it is already past, so it
    is not picked up again.
    """

    def __init__(
        self,
        appointment_repository: AppointmentRepository,
        activity_repository: ActivityRepository,
        send_email: SendAppointmentEmailUseCase,
    ):
        self._appointments = appointment_repository
        self._activities = activity_repository
        self._send_email = send_email

    def execute(self) -> ReminderRunResult:
        result = ReminderRunResult()
        current = now()
        candidates = self._appointments.find_pending_reminders(current + timedelta(hours=REMINDER_MAX_HOURS))
        activities = {}

        for appointment in candidates:
            if appointment.activity_id not in activities:
                activities[appointment.activity_id] = self._activities.find_by_id(appointment.activity_id)
            activity = activities[appointment.activity_id]
            if activity is None or not activity.reminder_settings.enabled:
                continue
            if appointment.date_time - timedelta(hours=activity.reminder_settings.hours_before) > current:
                continue
            if appointment.status != AppointmentStatus.CONFIRMED:
                continue
            result.checked += 1

            if appointment.date_time > current:
                sent = self._send_email.execute(EmailTemplateType.APPOINTMENT_REMINDER, appointment)
                if sent is not None and not sent.success:
                    result.failed += 1
                    logger.warning("Reminder for appointment %s failed: %s", appointment.id, sent.error_message)
                    continue
                if sent is not None:
                    result.sent += 1

            appointment.mark_reminder_sent()
            try:
                self._appointments.update_with_optimistic_lock(appointment)
            except ConcurrencyError:
                logger.warning("Appointment %s changed while sending its reminder", appointment.id)

        if result.checked:
            logger.info(
                "Reminders: %d due, %d sent, %d failed", result.checked, result.sent, result.failed
            )
        return result
