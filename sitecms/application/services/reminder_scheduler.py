"""
Reminder Scheduler
==================

Background asyncio task running the appointment reminder job periodically.
"""
import asyncio
import logging
from typing import Optional

from sitecms.application.services.appointment_service import AppointmentService

logger = logging.getLogger(__name__)


class ReminderScheduler:
    """Runs ``AppointmentService.send_reminders`` every ``interval_seconds``."""

    def __init__(self, appointment_service: AppointmentService, interval_seconds: int):
        self._service = appointment_service
        self._interval = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def enabled(self) -> bool:
        return self._interval > 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> None:
        try:
            # pymongo and smtplib block; keep them off the event loop
            await asyncio.to_thread(self._service.send_reminders)
        except Exception as e:
            logger.error("Reminder job failed: %s", e, exc_info=True)

    async def _loop(self) -> None:
        while True:
            await self.run_once()
            await asyncio.sleep(self._interval)

    def start(self) -> None:
        if not self.enabled:
            logger.info("Appointment reminder job disabled")
            return
        if self.running:
            return
        self._task = asyncio.create_task(self._loop())
        logger.info("Appointment reminder job started (every %ds)", self._interval)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Appointment reminder job stopped")
