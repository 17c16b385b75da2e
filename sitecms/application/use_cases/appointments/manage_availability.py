"""
Availability Use Cases
======================
"""
import logging
from typing import List

from sitecms.domain.models.availability import Availability, AvailabilityException, WeeklySlot
from sitecms.domain.repositories.appointment_repository import AvailabilityRepository

logger = logging.getLogger(__name__)


class GetAvailabilityUseCase:
    def __init__(self, availability_repository: AvailabilityRepository):
        self._repository = availability_repository

    def execute(self) -> Availability:
        return self._repository.get() or Availability.empty()


class UpdateAvailabilityUseCase:
    """Replace the weekly slots and exceptions."""

    def __init__(self, availability_repository: AvailabilityRepository):
        self._repository = availability_repository

    def execute(self, weekly_slots: List[WeeklySlot], exceptions: List[AvailabilityException]) -> Availability:
        availability = self._repository.get() or Availability.empty()
        availability.update(weekly_slots, exceptions)
        saved = self._repository.save(availability)
        logger.info(
            "Availability updated: %d weekly slot(s), %d exception(s)",
            len(saved.weekly_slots), len(saved.exceptions),
        )
        return saved
