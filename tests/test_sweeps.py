"""Tests for no-show cancellation and reminder emails"""

from datetime import datetime

import pytest
from sqlalchemy import select

from app.models.audit import AuditLog
from app.models.reservation import Reservation
from app.schemas.reservation import ReservationCreate

DINNER = datetime(2026, 10, 19, 18, 0)


def booking(at=DINNER, phone="5550606", email="dora@example.com") -> ReservationCreate:
    return ReservationCreate(
        customer_name="Dora Reis",
        customer_phone=phone,
        customer_email=email,
        number_of_guests=2,
        reservation_time=at,
    )


async def reload(db, reservation_id) -> Reservation:
    return await db.get(Reservation, reservation_id, populate_existing=True)


# ============ OVERDUE ============

@pytest.mark.asyncio
async def test_overdue_reservation_is_cancelled_once(service, table_ids, clock, test_db):
    late_id = (await service.create_reservation(booking())).id
    later_id = (await service.create_reservation(booking(at=datetime(2026, 10, 19, 19, 0)))).id

    clock.set(datetime(2026, 10, 19, 18, 16))
    assert await service.cancel_overdue_reservations() == 1
    assert await service.cancel_overdue_reservations() == 0

    late = await reload(test_db, late_id)
    assert late.status == "cancelled"
    assert late.cancel_reason == "no-show"
    assert late.cancelled_at == datetime(2026, 10, 19, 18, 16)

    later = await reload(test_db, later_id)
    assert later.status == "pending"

    audit = (await test_db.execute(
        select(AuditLog).where(AuditLog.action == "cancel_overdue_reservation")
    )).scalar_one()
    assert audit.actor_type == "system"
    assert audit.resource_id == late_id


@pytest.mark.asyncio
async def test_overdue_grace_period_is_exclusive(service, table_ids, clock):
    await service.create_reservation(booking())

    clock.set(datetime(2026, 10, 19, 18, 15))
    assert await service.cancel_overdue_reservations() == 0


@pytest.mark.asyncio
async def test_confirmed_reservations_are_swept_too(service, table_ids, clock, test_db):
    reservation_id = (await service.create_reservation(booking())).id
    await service.confirm_reservation(reservation_id)

    clock.set(datetime(2026, 10, 19, 19, 0))
    assert await service.cancel_overdue_reservations() == 1
    assert (await reload(test_db, reservation_id)).status == "cancelled"


@pytest.mark.asyncio
async def test_arrived_reservations_are_not_swept(service, table_ids, clock, test_staff, test_db):
    reservation_id = (await service.create_reservation(booking())).id
    await service.arrive_reservation(reservation_id, test_staff)

    clock.set(datetime(2026, 10, 19, 19, 0))
    assert await service.cancel_overdue_reservations() == 0
    assert (await reload(test_db, reservation_id)).status == "arrived"


# ============ REMINDERS ============

@pytest.mark.asyncio
async def test_reminder_sent_once_an_hour_ahead(service, table_ids, clock, email_sender, test_db):
    reservation_id = (await service.create_reservation(booking())).id
    await service.confirm_reservation(reservation_id)
    assert len(email_sender.sent) == 1

    clock.set(datetime(2026, 10, 19, 17, 0))
    assert await service.send_reminder_emails() == 1
    assert await service.send_reminder_emails() == 0

    assert len(email_sender.sent) == 2
    assert email_sender.sent[1]["subject"].startswith("Reminder")
    assert (await reload(test_db, reservation_id)).reminder_sent == datetime(2026, 10, 19, 17, 0)


@pytest.mark.asyncio
async def test_reminder_outside_window_is_skipped(service, table_ids, clock, email_sender):
    reservation_id = (await service.create_reservation(booking())).id
    await service.confirm_reservation(reservation_id)

    # Window is (17:35, 17:45]
    clock.set(datetime(2026, 10, 19, 16, 45))
    assert await service.send_reminder_emails() == 0
    assert len(email_sender.sent) == 1


@pytest.mark.asyncio
async def test_pending_reservations_get_no_reminder(service, table_ids, clock, email_sender):
    await service.create_reservation(booking())

    clock.set(datetime(2026, 10, 19, 17, 0))
    assert await service.send_reminder_emails() == 0
    assert email_sender.sent == []


@pytest.mark.asyncio
async def test_reminder_without_email_is_skipped(service, table_ids, clock, email_sender):
    reservation_id = (await service.create_reservation(booking(email=None))).id
    await service.confirm_reservation(reservation_id)

    clock.set(datetime(2026, 10, 19, 17, 0))
    assert await service.send_reminder_emails() == 0


@pytest.mark.asyncio
async def test_failed_reminder_is_retried_next_run(service, table_ids, clock, email_sender, test_db):
    reservation_id = (await service.create_reservation(booking())).id
    await service.confirm_reservation(reservation_id)

    email_sender.fail = True
    clock.set(datetime(2026, 10, 19, 17, 0))
    assert await service.send_reminder_emails() == 0
    assert (await reload(test_db, reservation_id)).reminder_sent is None

    email_sender.fail = False
    clock.set(datetime(2026, 10, 19, 17, 5))
    assert await service.send_reminder_emails() == 1
    assert (await reload(test_db, reservation_id)).reminder_sent == datetime(2026, 10, 19, 17, 5)
