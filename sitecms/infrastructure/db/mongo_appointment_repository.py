"""
MongoDB Appointment Repositories
================================

Concrete implementations of ActivityRepository, AppointmentRepository and
AvailabilityRepository using MongoDB.
"""
import logging
from datetime import datetime
from typing import List, Optional

from pymongo import ASCENDING, ReturnDocument

from sitecms.core.config import get_settings
from sitecms.core.errors import ConcurrencyError, NotFoundError
from sitecms.domain.constants.appointment_fields import (
    ActivityFields,
    AppointmentFields,
    AvailabilityFields,
)
from sitecms.domain.models.activity import Activity, ReminderSettings, RequiredFieldsConfig
from sitecms.domain.models.appointment import Appointment, AppointmentStatus, ClientInfo
from sitecms.domain.models.availability import Availability, AvailabilityException, WeeklySlot
from sitecms.domain.repositories.appointment_repository import (
    ActivityRepository,
    AppointmentRepository,
    AvailabilityRepository,
)
from sitecms.infrastructure.db.mongo_connection import MongoClientManager
from sitecms.utils.datetime_utils import from_storage, now, to_storage

logger = logging.getLogger(__name__)

ACTIVE_STATUSES = [AppointmentStatus.PENDING.value, AppointmentStatus.CONFIRMED.value]


class MongoActivityRepository(ActivityRepository):
    """MongoDB implementation of ActivityRepository."""

    def __init__(self, client: MongoClientManager, collection_name: Optional[str] = None):
        self._collection = client.get_collection(
            collection_name or get_settings().activities_collection
        )

    def _to_entity(self, doc: dict) -> Activity:
        """Convert MongoDB document to Activity entity."""
        return Activity(
            id=doc[ActivityFields.ID],
            name=doc.get(ActivityFields.NAME),
            duration_minutes=int(doc.get(ActivityFields.DURATION_MINUTES, 0)),
            color=doc.get(ActivityFields.COLOR),
            price=doc.get(ActivityFields.PRICE, 0.0),
            description=doc.get(ActivityFields.DESCRIPTION),
            required_fields=RequiredFieldsConfig.from_dict(doc.get(ActivityFields.REQUIRED_FIELDS)),
            reminder_settings=ReminderSettings.from_dict(doc.get(ActivityFields.REMINDER_SETTINGS)),
            minimum_booking_notice_hours=int(doc.get(ActivityFields.MINIMUM_BOOKING_NOTICE_HOURS, 0)),
            created_at=from_storage(doc.get(ActivityFields.CREATED_AT)) or now(),
            updated_at=from_storage(doc.get(ActivityFields.UPDATED_AT)) or now(),
        )

    def _to_document(self, activity: Activity) -> dict:
        """Convert Activity entity to MongoDB document."""
        return {
            ActivityFields.ID: activity.id,
            ActivityFields.NAME: activity.name,
            ActivityFields.DURATION_MINUTES: activity.duration_minutes,
            ActivityFields.COLOR: activity.color,
            ActivityFields.PRICE: activity.price,
            ActivityFields.DESCRIPTION: activity.description,
            ActivityFields.REQUIRED_FIELDS: activity.required_fields.to_dict(),
            ActivityFields.REMINDER_SETTINGS: activity.reminder_settings.to_dict(),
            ActivityFields.MINIMUM_BOOKING_NOTICE_HOURS: activity.minimum_booking_notice_hours,
            ActivityFields.CREATED_AT: to_storage(activity.created_at),
            ActivityFields.UPDATED_AT: to_storage(activity.updated_at),
        }

    def create(self, activity: Activity) -> Activity:
        self._collection.insert_one(self._to_document(activity))
        return activity

    def update(self, activity: Activity) -> Activity:
        doc = self._to_document(activity)
        result = self._collection.find_one_and_update(
            {ActivityFields.ID: activity.id},
            {"$set": {k: v for k, v in doc.items() if k not in (ActivityFields.ID, ActivityFields.CREATED_AT)}},
            return_document=ReturnDocument.AFTER,
        )
        if not result:
            raise NotFoundError(f"Activity '{activity.id}' not found")
        return self._to_entity(result)

    def find_by_id(self, activity_id: str) -> Optional[Activity]:
        doc = self._collection.find_one({ActivityFields.ID: activity_id})
        return self._to_entity(doc) if doc else None

    def find_all(self) -> List[Activity]:
        docs = self._collection.find().sort(ActivityFields.NAME, ASCENDING)
        return [self._to_entity(doc) for doc in docs]

    def delete(self, activity_id: str) -> bool:
        return self._collection.delete_one({ActivityFields.ID: activity_id}).deleted_count > 0

    def delete_all(self) -> int:
        return self._collection.delete_many({}).deleted_count


class MongoAppointmentRepository(AppointmentRepository):
    """
    MongoDB implementation of AppointmentRepository.

    The appointment end is stored next to its start so overlap checks are a
    single range query.
    """

    def __init__(self, client: MongoClientManager, collection_name: Optional[str] = None):
        self._collection = client.get_collection(
            collection_name or get_settings().appointments_collection
        )

    def _to_entity(self, doc: dict) -> Appointment:
        """Convert MongoDB document to Appointment entity."""
        return Appointment(
            id=doc[AppointmentFields.ID],
            activity_id=doc.get(AppointmentFields.ACTIVITY_ID),
            activity_name=doc.get(AppointmentFields.ACTIVITY_NAME),
            activity_duration_minutes=int(doc.get(AppointmentFields.ACTIVITY_DURATION_MINUTES, 0)),
            client_info=ClientInfo.from_dict(doc.get(AppointmentFields.CLIENT_INFO) or {}),
            date_time=from_storage(doc.get(AppointmentFields.DATE_TIME)),
            status=AppointmentStatus.from_string(doc.get(AppointmentFields.STATUS, "pending")),
            version=int(doc.get(AppointmentFields.VERSION, 1)),
            reminder_sent=bool(doc.get(AppointmentFields.REMINDER_SENT, False)),
            created_at=from_storage(doc.get(AppointmentFields.CREATED_AT)) or now(),
            updated_at=from_storage(doc.get(AppointmentFields.UPDATED_AT)) or now(),
        )

    def _to_document(self, appointment: Appointment) -> dict:
        """Convert Appointment entity to MongoDB document."""
        return {
            AppointmentFields.ID: appointment.id,
            AppointmentFields.ACTIVITY_ID: appointment.activity_id,
            AppointmentFields.ACTIVITY_NAME: appointment.activity_name,
            AppointmentFields.ACTIVITY_DURATION_MINUTES: appointment.activity_duration_minutes,
            AppointmentFields.CLIENT_INFO: appointment.client_info.to_dict(),
            AppointmentFields.DATE_TIME: to_storage(appointment.date_time),
            AppointmentFields.END_DATE_TIME: to_storage(appointment.end_date_time),
            AppointmentFields.STATUS: appointment.status.value,
            AppointmentFields.VERSION: appointment.version,
            AppointmentFields.REMINDER_SENT: appointment.reminder_sent,
            AppointmentFields.CREATED_AT: to_storage(appointment.created_at),
            AppointmentFields.UPDATED_AT: to_storage(appointment.updated_at),
        }

    def create(self, appointment: Appointment) -> Appointment:
        self._collection.insert_one(self._to_document(appointment))
        return appointment

    def find_by_id(self, appointment_id: str) -> Optional[Appointment]:
        doc = self._collection.find_one({AppointmentFields.ID: appointment_id})
        return self._to_entity(doc) if doc else None

    def update_with_optimistic_lock(self, appointment: Appointment) -> Appointment:
        doc = self._to_document(appointment)
        result = self._collection.find_one_and_update(
            {
                AppointmentFields.ID: appointment.id,
                AppointmentFields.VERSION: appointment.version - 1,
            },
            {"$set": {k: v for k, v in doc.items() if k not in (AppointmentFields.ID, AppointmentFields.CREATED_AT)}},
            return_document=ReturnDocument.AFTER,
        )
        if not result:
            logger.warning(
                "Optimistic lock failed for appointment %s (expected version %d)",
                appointment.id, appointment.version - 1,
            )
            raise ConcurrencyError(
                "The appointment was modified by another request. Please reload and try again."
            )
        return self._to_entity(result)

    def find_by_date_range(self, start: datetime, end: datetime) -> List[Appointment]:
        docs = self._collection.find({
            AppointmentFields.DATE_TIME: {"$lt": to_storage(end)},
            AppointmentFields.END_DATE_TIME: {"$gt": to_storage(start)},
        }).sort(AppointmentFields.DATE_TIME, ASCENDING)
        return [self._to_entity(doc) for doc in docs]

    def has_overlapping_appointment(
        self,
        start: datetime,
        end: datetime,
        exclude_id: Optional[str] = None,
    ) -> bool:
        query = {
            AppointmentFields.STATUS: {"$in": ACTIVE_STATUSES},
            AppointmentFields.DATE_TIME: {"$lt": to_storage(end)},
            AppointmentFields.END_DATE_TIME: {"$gt": to_storage(start)},
        }
        if exclude_id:
            query[AppointmentFields.ID] = {"$ne": exclude_id}
        return self._collection.count_documents(query, limit=1) > 0

    def has_future_appointments(self, activity_id: str, after: datetime) -> bool:
        count = self._collection.count_documents(
            {
                AppointmentFields.ACTIVITY_ID: activity_id,
                AppointmentFields.STATUS: {"$in": ACTIVE_STATUSES},
                AppointmentFields.DATE_TIME: {"$gt": to_storage(after)},
            },
            limit=1,
        )
        return count > 0

    def find_pending_reminders(self, before: datetime) -> List[Appointment]:
        docs = self._collection.find({
            AppointmentFields.REMINDER_SENT: False,
            AppointmentFields.STATUS: {"$in": ACTIVE_STATUSES},
            AppointmentFields.DATE_TIME: {"$lte": to_storage(before)},
        }).sort(AppointmentFields.DATE_TIME, ASCENDING)
        return [self._to_entity(doc) for doc in docs]

    def delete(self, appointment_id: str) -> bool:
        return self._collection.delete_one({AppointmentFields.ID: appointment_id}).deleted_count > 0


class MongoAvailabilityRepository(AvailabilityRepository):
    """
    MongoDB implementation of AvailabilityRepository.

    The schedule is stored as a single document with a fixed ID.
    """

    def __init__(self, client: MongoClientManager, collection_name: Optional[str] = None):
        self._collection = client.get_collection(
            collection_name or get_settings().availability_collection
        )

    def _to_entity(self, doc: dict) -> Availability:
        return Availability(
            weekly_slots=[WeeklySlot.from_dict(slot) for slot in doc.get(AvailabilityFields.WEEKLY_SLOTS, [])],
            exceptions=[
                AvailabilityException.from_dict(exception)
                for exception in doc.get(AvailabilityFields.EXCEPTIONS, [])
            ],
            updated_at=from_storage(doc.get(AvailabilityFields.UPDATED_AT)) or now(),
        )

    def get(self) -> Optional[Availability]:
        doc = self._collection.find_one({AvailabilityFields.ID: AvailabilityFields.SINGLETON_ID})
        return self._to_entity(doc) if doc else None

    def save(self, availability: Availability) -> Availability:
        self._collection.replace_one(
            {AvailabilityFields.ID: AvailabilityFields.SINGLETON_ID},
            {
                AvailabilityFields.ID: AvailabilityFields.SINGLETON_ID,
                AvailabilityFields.WEEKLY_SLOTS: [slot.to_dict() for slot in availability.weekly_slots],
                AvailabilityFields.EXCEPTIONS: [ex.to_dict() for ex in availability.exceptions],
                AvailabilityFields.UPDATED_AT: to_storage(availability.updated_at),
            },
            upsert=True,
        )
        return availability

    def delete(self) -> bool:
        result = self._collection.delete_one({AvailabilityFields.ID: AvailabilityFields.SINGLETON_ID})
        return result.deleted_count > 0
