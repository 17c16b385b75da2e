"""Tests for booking, status changes, calendar events and reminders."""
from datetime import datetime, time, timedelta, timezone

import pytest

from sitecms.application.services.appointment_service import AppointmentService
from sitecms.application.services.email_service import EmailService
from sitecms.core.errors import ConcurrencyError, NotFoundError
from sitecms.domain.models.activity import ReminderSettings, RequiredFieldsConfig
from sitecms.domain.models.appointment import Appointment, AppointmentStatus, ClientInfo
from sitecms.domain.models.availability import WeeklySlot
from sitecms.domain.repositories.appointment_repository import AppointmentRepository
from sitecms.domain.repositories.email_repository import EmailLogRepository
from sitecms.infrastructure.email.smtp_email_sender import SendResult, SmtpEmailSender

MONDAY = 1
CLIENT = {"name": "Marie Dupont", "email": "marie@example.com"}


@pytest.fixture
def service(container) -> AppointmentService:
    service = container.get(AppointmentService)
    service.update_availability([WeeklySlot(MONDAY, "09:00", "12:00")], [])
    return service


@pytest.fixture
def activity(service):
    return service.create_activity(name="Massage", duration_minutes=60, color="#10b981")


@pytest.fixture
def outbox(container, monkeypatch):
    """Configure SMTP and capture every email instead of sending it."""
    sent = []

    def fake_send(settings, sender, recipient, subject, body):
        sent.append({"sender": sender, "recipient": recipient, "subject": subject, "body": body})
        return SendResult(True)

    monkeypatch.setattr(container.get(SmtpEmailSender), "send", fake_send)
    container.get(EmailService).update_smtp_settings("smtp.example.com", 587, "shop@example.com", "secret", "tls")
    return sent


def at(day, hour, minute=0):
    return datetime.combine(day, time(hour, minute), tzinfo=timezone.utc)


# =============================================================================
# Booking
# =============================================================================


class TestBooking:
    def test_book_within_opening_hours(self, service, activity, next_monday):
        appointment = service.book_appointment(activity.id, CLIENT, at(next_monday, 10))

        assert appointment.status == AppointmentStatus.PENDING
        assert appointment.activity_name == "Massage"
        assert appointment.end_date_time == at(next_monday, 11)
        assert service.get_appointment(appointment.id).client_info.email == "marie@example.com"

    def test_outside_opening_hours(self, service, activity, next_monday):
        with pytest.raises(ValueError, match="outside opening hours"):
            service.book_appointment(activity.id, CLIENT, at(next_monday, 11, 30))
        with pytest.raises(ValueError, match="outside opening hours"):
            service.book_appointment(activity.id, CLIENT, at(next_monday + timedelta(days=1), 10))

    def test_overlapping_booking_refused(self, service, activity, next_monday):
        service.book_appointment(activity.id, CLIENT, at(next_monday, 10))
        with pytest.raises(ValueError, match="no longer available"):
            service.book_appointment(activity.id, CLIENT, at(next_monday, 10, 30))

    def test_cancelled_booking_frees_the_time(self, service, activity, next_monday):
        first = service.book_appointment(activity.id, CLIENT, at(next_monday, 10))
        service.cancel_appointment(first.id)
        second = service.book_appointment(activity.id, CLIENT, at(next_monday, 10))
        assert second.id != first.id

    def test_past_time_refused(self, service, activity):
        with pytest.raises(ValueError, match="past"):
            service.book_appointment(activity.id, CLIENT, datetime.now(timezone.utc) - timedelta(hours=1))

    def test_minimum_notice(self, service, next_monday):
        activity = service.create_activity(name="Coaching", duration_minutes=30, minimum_booking_notice_hours=24 * 30)
        with pytest.raises(ValueError, match="in advance"):
            service.book_appointment(activity.id, CLIENT, at(next_monday, 9))

    def test_required_client_fields(self, service, next_monday):
        activity = service.create_activity(
            name="Home visit",
            duration_minutes=60,
            required_fields=RequiredFieldsConfig(fields=("name", "email", "address")),
        )
        with pytest.raises(ValueError, match="address"):
            service.book_appointment(activity.id, CLIENT, at(next_monday, 9))

        appointment = service.book_appointment(
            activity.id, dict(CLIENT, address="1 rue de la Paix"), at(next_monday, 9)
        )
        assert appointment.client_info.address == "1 rue de la Paix"

    def test_naive_time_refused(self, service, activity, next_monday):
        with pytest.raises(ValueError, match="timezone"):
            service.book_appointment(activity.id, CLIENT, datetime.combine(next_monday, time(10)))

    def test_unknown_activity(self, service, next_monday):
        with pytest.raises(NotFoundError):
            service.book_appointment("missing", CLIENT, at(next_monday, 10))

    def test_activity_with_upcoming_appointment_cannot_be_deleted(self, service, activity, next_monday):
        service.book_appointment(activity.id, CLIENT, at(next_monday, 10))
        with pytest.raises(ValueError, match="upcoming"):
            service.delete_activity(activity.id)


# =============================================================================
# Status changes
# =============================================================================


class TestStatusChanges:
    def test_confirm_and_cancel(self, service, activity, next_monday):
        appointment = service.book_appointment(activity.id, CLIENT, at(next_monday, 10))

        confirmed = service.confirm_appointment(appointment.id)
        assert confirmed.status == AppointmentStatus.CONFIRMED
        assert confirmed.version == 2

        cancelled = service.cancel_appointment(appointment.id)
        assert cancelled.status == AppointmentStatus.CANCELLED
        assert service.get_appointment(appointment.id).version == 3

    def test_cancelled_cannot_be_confirmed(self, service, activity, next_monday):
        appointment = service.book_appointment(activity.id, CLIENT, at(next_monday, 10))
        service.cancel_appointment(appointment.id)
        with pytest.raises(ValueError):
            service.confirm_appointment(appointment.id)

    def test_stale_version_is_rejected(self, container, service, activity, next_monday):
        repository = container.get(AppointmentRepository)
        appointment = service.book_appointment(activity.id, CLIENT, at(next_monday, 10))
        stale = repository.find_by_id(appointment.id)

        service.confirm_appointment(appointment.id)
        stale.cancel()

        with pytest.raises(ConcurrencyError):
            repository.update_with_optimistic_lock(stale)

    def test_delete(self, service, activity, next_monday):
        appointment = service.book_appointment(activity.id, CLIENT, at(next_monday, 10))
        service.delete_appointment(appointment.id)
        with pytest.raises(NotFoundError):
            service.get_appointment(appointment.id)
        with pytest.raises(NotFoundError):
            service.delete_appointment(appointment.id)

    def test_booking_emails_client_and_administrator(self, container, service, activity, next_monday, outbox):
        email_service = container.get(EmailService)
        email_service.update_email_settings("owner@example.com")
        email_service.update_template("appointment-booking", enabled=True)
        email_service.update_template("appointment-admin-new", enabled=True)

        service.book_appointment(activity.id, CLIENT, at(next_monday, 10))

        assert sorted(mail["recipient"] for mail in outbox) == ["marie@example.com", "owner@example.com"]
        assert all(mail["sender"] == "shop@example.com" for mail in outbox)


# =============================================================================
# Calendar
# =============================================================================


class TestCalendar:
    def test_events_in_range(self, service, activity, next_monday):
        appointment = service.book_appointment(activity.id, CLIENT, at(next_monday, 10))

        events = service.get_calendar_events(at(next_monday, 0), at(next_monday, 23))

        assert len(events) == 1
        event = events[0]
        assert event["id"] == appointment.id
        assert event["color"] == "#10b981"
        assert event["start"].endswith("Z")
        assert event["extended_props"]["status"] == "pending"

    def test_range_must_be_ordered(self, service, next_monday):
        with pytest.raises(ValueError):
            service.list_appointments(at(next_monday, 12), at(next_monday, 8))


# =============================================================================
# Reminders
# =============================================================================


def create_due_appointment(container, activity, status=AppointmentStatus.CONFIRMED, hours_ahead=2):
    repository = container.get(AppointmentRepository)
    appointment = repository.create(Appointment(
        activity_id=activity.id,
        activity_name=activity.name,
        activity_duration_minutes=activity.duration_minutes,
        client_info=ClientInfo(**CLIENT),
        date_time=datetime.now(timezone.utc).replace(microsecond=0) + timedelta(hours=hours_ahead),
        status=status,
    ))
    return appointment


class TestReminders:
    @pytest.fixture
    def reminder_activity(self, service):
        return service.create_activity(
            name="Massage",
            duration_minutes=60,
            reminder_settings=ReminderSettings(enabled=True, hours_before=24),
        )

    def test_confirmed_due_appointment_gets_one_reminder(self, container, service, reminder_activity, outbox):
        container.get(EmailService).update_template("appointment-reminder", enabled=True)
        appointment = create_due_appointment(container, reminder_activity)

        result = service.send_reminders()

        assert (result.checked, result.sent, result.failed) == (1, 1, 0)
        assert outbox[0]["recipient"] == "marie@example.com"
        assert "Massage" in outbox[0]["subject"] + outbox[0]["body"]
        assert service.get_appointment(appointment.id).reminder_sent

        assert service.send_reminders().checked == 0
        assert len(outbox) == 1

    def test_pending_appointments_are_skipped(self, container, service, reminder_activity, outbox):
        container.get(EmailService).update_template("appointment-reminder", enabled=True)
        appointment = create_due_appointment(container, reminder_activity, status=AppointmentStatus.PENDING)

        assert service.send_reminders().checked == 0
        assert outbox == []
        assert not service.get_appointment(appointment.id).reminder_sent

    def test_not_yet_due(self, container, service, reminder_activity, outbox):
        container.get(EmailService).update_template("appointment-reminder", enabled=True)
        create_due_appointment(container, reminder_activity, hours_ahead=48)

        assert service.send_reminders().checked == 0

    def test_disabled_template_marks_without_sending(self, container, service, reminder_activity, outbox):
        appointment = create_due_appointment(container, reminder_activity)

        result = service.send_reminders()

        assert (result.checked, result.sent) == (1, 0)
        assert outbox == []
        assert service.get_appointment(appointment.id).reminder_sent

    def test_failed_send_is_retried_later(self, container, service, reminder_activity, monkeypatch):
        monkeypatch.setattr(
            container.get(SmtpEmailSender), "send", lambda *args, **kwargs: SendResult(False, "Connection refused")
        )
        email_service = container.get(EmailService)
        email_service.update_smtp_settings("smtp.example.com", 587, "shop@example.com", "secret", "tls")
        email_service.update_template("appointment-reminder", enabled=True)
        appointment = create_due_appointment(container, reminder_activity)

        result = service.send_reminders()

        assert result.failed == 1
        assert not service.get_appointment(appointment.id).reminder_sent
        logs = container.get(EmailLogRepository).find_by_reference(appointment.id)
        assert logs[0].status.value == "failed"

    def test_reminders_disabled_for_activity(self, container, service, outbox):
        activity = service.create_activity(
            name="Yoga", duration_minutes=60, reminder_settings=ReminderSettings.disabled()
        )
        container.get(EmailService).update_template("appointment-reminder", enabled=True)
        create_due_appointment(container, activity)

        assert service.send_reminders().checked == 0
        assert outbox == []
