"""
MongoDB Email Log Repository
============================

Concrete implementation of EmailLogRepository using MongoDB.
"""
from typing import List, Optional

from pymongo import DESCENDING

from sitecms.core.config import get_settings
from sitecms.domain.constants.setting_fields import EmailLogFields
from sitecms.domain.models.email import EmailLog
from sitecms.domain.repositories.email_repository import EmailLogRepository
from sitecms.infrastructure.db.mongo_connection import MongoClientManager
from sitecms.utils.datetime_utils import from_storage, now, to_storage


class MongoEmailLogRepository(EmailLogRepository):
    """MongoDB implementation of EmailLogRepository."""

    def __init__(self, client: MongoClientManager, collection_name: Optional[str] = None):
        self._collection = client.get_collection(
            collection_name or get_settings().email_logs_collection
        )

    def _to_entity(self, doc: dict) -> EmailLog:
        return EmailLog(
            id=doc[EmailLogFields.ID],
            reference_id=doc.get(EmailLogFields.REFERENCE_ID),
            template_type=doc.get(EmailLogFields.TEMPLATE_TYPE),
            recipient=doc.get(EmailLogFields.RECIPIENT),
            subject=doc.get(EmailLogFields.SUBJECT),
            status=doc.get(EmailLogFields.STATUS),
            error_message=doc.get(EmailLogFields.ERROR_MESSAGE),
            sent_at=from_storage(doc.get(EmailLogFields.SENT_AT)) or now(),
        )

    def create(self, log: EmailLog) -> EmailLog:
        self._collection.insert_one({
            EmailLogFields.ID: log.id,
            EmailLogFields.REFERENCE_ID: log.reference_id,
            EmailLogFields.TEMPLATE_TYPE: log.template_type.value,
            EmailLogFields.RECIPIENT: log.recipient,
            EmailLogFields.SUBJECT: log.subject,
            EmailLogFields.STATUS: log.status.value,
            EmailLogFields.ERROR_MESSAGE: log.error_message,
            EmailLogFields.SENT_AT: to_storage(log.sent_at),
        })
        return log

    def find_by_reference(self, reference_id: str) -> List[EmailLog]:
        docs = self._collection.find({EmailLogFields.REFERENCE_ID: reference_id}).sort(
            EmailLogFields.SENT_AT, DESCENDING
        )
        return [self._to_entity(doc) for doc in docs]

    def find_recent(self, limit: int) -> List[EmailLog]:
        docs = self._collection.find().sort(EmailLogFields.SENT_AT, DESCENDING).limit(limit)
        return [self._to_entity(doc) for doc in docs]
