"""Shared FastAPI dependencies for the reservation service"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.services.clock import Clock, SystemClock
from app.services.email import EmailSender, SmtpEmailSender
from app.services.reservations import ReservationService

_system_clock = SystemClock()
_email_sender = SmtpEmailSender()


def get_clock() -> Clock:
    return _system_clock


def get_email_sender() -> EmailSender:
    return _email_sender


async def get_reservation_service(
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
    email_sender: EmailSender = Depends(get_email_sender),
) -> ReservationService:
    """Reservation service bound to the request's session"""
    return ReservationService(db, clock=clock, email_sender=email_sender)
