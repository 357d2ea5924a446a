"""In-process reservation sweeper

Two independent repeating asyncio tasks call into the reservation service:
overdue cancellation and reminder emails. Every tick opens its own session,
and a failing tick is logged without affecting the next tick or the other
task. Both operations are idempotent, so a tick abandoned on shutdown leaves
nothing half-done that the next run cannot redo.
"""

import asyncio
from typing import Awaitable, Callable, Dict, Optional

import structlog

from app.config import settings
from app.services.clock import Clock, SystemClock
from app.services.email import EmailSender, SmtpEmailSender
from app.services.reservations import ReservationService

logger = structlog.get_logger()


async def run_cancel_overdue(session_factory, clock: Clock = None, email_sender: EmailSender = None) -> int:
    """One overdue-cancellation pass in a fresh unit of work"""
    async with session_factory() as db:
        service = ReservationService(db, clock=clock, email_sender=email_sender)
        return await service.cancel_overdue_reservations()


async def run_send_reminders(session_factory, clock: Clock = None, email_sender: EmailSender = None) -> int:
    """One reminder-email pass in a fresh unit of work"""
    async with session_factory() as db:
        service = ReservationService(db, clock=clock, email_sender=email_sender)
        return await service.send_reminder_emails()


class ReservationSweeper:
    """Owns the two periodic reservation jobs for the lifetime of the app"""

    def __init__(
        self,
        session_factory,
        clock: Optional[Clock] = None,
        email_sender: Optional[EmailSender] = None,
        cancel_delay: float = None,
        cancel_interval: float = None,
        reminder_delay: float = None,
        reminder_interval: float = None,
    ):
        self.session_factory = session_factory
        self.clock = clock or SystemClock()
        self.email_sender = email_sender or SmtpEmailSender()
        self.cancel_delay = settings.sweeper_cancel_delay_seconds if cancel_delay is None else cancel_delay
        self.cancel_interval = settings.sweeper_cancel_interval_seconds if cancel_interval is None else cancel_interval
        self.reminder_delay = settings.sweeper_reminder_delay_seconds if reminder_delay is None else reminder_delay
        self.reminder_interval = (
            settings.sweeper_reminder_interval_seconds if reminder_interval is None else reminder_interval
        )
        self._tasks: Dict[str, asyncio.Task] = {}
        self.tick_counts: Dict[str, int] = {"cancel_overdue": 0, "send_reminders": 0}
        self.failure_counts: Dict[str, int] = {"cancel_overdue": 0, "send_reminders": 0}

    @property
    def running(self) -> bool:
        return any(not task.done() for task in self._tasks.values())

    def start(self) -> None:
        if self.running:
            return
        logger.info("Reservation sweeper started")
        self._tasks = {
            "cancel_overdue": asyncio.create_task(
                self._repeat("cancel_overdue", self._cancel_overdue, self.cancel_delay, self.cancel_interval)
            ),
            "send_reminders": asyncio.create_task(
                self._repeat("send_reminders", self._send_reminders, self.reminder_delay, self.reminder_interval)
            ),
        }

    async def stop(self) -> None:
        if not self._tasks:
            return
        logger.info("Reservation sweeper stopping")
        for task in self._tasks.values():
            task.cancel()
        await asyncio.gather(*self._tasks.values(), return_exceptions=True)
        self._tasks = {}

    async def _cancel_overdue(self) -> int:
        return await run_cancel_overdue(self.session_factory, self.clock, self.email_sender)

    async def _send_reminders(self) -> int:
        return await run_send_reminders(self.session_factory, self.clock, self.email_sender)

    async def _repeat(
        self,
        name: str,
        job: Callable[[], Awaitable[int]],
        delay: float,
        interval: float,
    ) -> None:
        await asyncio.sleep(delay)
        while True:
            self.tick_counts[name] += 1
            try:
                count = await job()
                logger.debug("Sweeper tick finished", job=name, count=count)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                self.failure_counts[name] += 1
                logger.error("Sweeper tick failed", job=name, error=str(e), exc_info=True)
            await asyncio.sleep(interval)
