"""Background job tasks"""

import asyncio
import structlog

from app.jobs.celery_app import celery_app

logger = structlog.get_logger()


_loop = None


def run_async(coro):
    """Helper to run async functions in sync context.

    One loop per worker process; the pooled database connections are bound
    to the loop that opened them.
    """
    global _loop
    if _loop is None or _loop.is_closed():
        _loop = asyncio.new_event_loop()
    return _loop.run_until_complete(coro)


@celery_app.task(name="cancel_overdue_reservations")
def cancel_overdue_reservations():
    """Cancel reservations whose guests are more than 15 minutes late"""
    logger.info("Cancelling overdue reservations")

    async def _cancel():
        from app.database import SessionLocal
        from app.jobs.sweeper import run_cancel_overdue

        return await run_cancel_overdue(SessionLocal)

    count = run_async(_cancel())
    logger.info("Overdue reservations cancelled", count=count)
    return count


@celery_app.task(name="send_reservation_reminders")
def send_reservation_reminders():
    """Send reminders for reservations starting in about an hour"""
    logger.info("Sending reservation reminders")

    async def _send():
        from app.database import SessionLocal
        from app.jobs.sweeper import run_send_reminders

        return await run_send_reminders(SessionLocal)

    count = run_async(_send())
    logger.info("Reservation reminders sent", count=count)
    return count
