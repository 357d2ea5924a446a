"""Tests for confirm, arrive and cancel"""

import re
from datetime import datetime
from uuid import uuid4

import pytest
from sqlalchemy import select

from app.config import settings
from app.models.order import Order, OrderTable
from app.models.reservation import Reservation
from app.models.table import Table
from app.schemas.reservation import ReservationCreate
from app.services.errors import (
    Forbidden,
    InvalidStateTransition,
    ReservationNotFound,
)
from app.services.reservations import ReservationService

DINNER = datetime(2026, 10, 19, 18, 0)


def booking(guests=4, **overrides) -> ReservationCreate:
    data = {
        "customer_name": "Carla Dias",
        "customer_phone": "+1 555 0404",
        "customer_email": "carla@example.com",
        "number_of_guests": guests,
        "reservation_time": DINNER,
    }
    data.update(overrides)
    return ReservationCreate(**data)


async def reload(db, reservation_id) -> Reservation:
    return await db.get(Reservation, reservation_id, populate_existing=True)


# ============ CONFIRM ============

@pytest.mark.asyncio
async def test_confirm_sends_confirmation_email(service, table_ids, email_sender, clock):
    reservation = await service.create_reservation(booking())

    confirmed = await service.confirm_reservation(reservation.id)

    assert confirmed.status == "confirmed"
    assert confirmed.confirmed_at == clock.now()
    assert confirmed.confirmation_sent == clock.now()
    assert len(email_sender.sent) == 1
    assert email_sender.sent[0]["to"] == "carla@example.com"
    assert reservation.reservation_number in email_sender.sent[0]["subject"]


@pytest.mark.asyncio
async def test_confirm_twice_is_invalid(service, table_ids):
    reservation = await service.create_reservation(booking())
    await service.confirm_reservation(reservation.id)

    with pytest.raises(InvalidStateTransition):
        await service.confirm_reservation(reservation.id)


@pytest.mark.asyncio
async def test_confirm_unknown_reservation(service, table_ids):
    with pytest.raises(ReservationNotFound):
        await service.confirm_reservation(uuid4())


@pytest.mark.asyncio
async def test_confirm_survives_email_failure(service, table_ids, email_sender):
    """A broken mail relay never blocks the status change"""
    reservation = await service.create_reservation(booking())
    email_sender.fail = True

    confirmed = await service.confirm_reservation(reservation.id)

    assert confirmed.status == "confirmed"
    assert confirmed.confirmation_sent is None


@pytest.mark.asyncio
async def test_confirm_without_email_address(service, table_ids, email_sender):
    reservation = await service.create_reservation(booking(customer_email=None))

    confirmed = await service.confirm_reservation(reservation.id)

    assert confirmed.status == "confirmed"
    assert email_sender.sent == []


# ============ ARRIVE ============

@pytest.mark.asyncio
async def test_arrive_opens_one_order_for_combined_tables(service, table_ids, test_staff, test_db):
    reservation = await service.create_reservation(booking(guests=12))
    assert reservation.table_ids == [table_ids[6], table_ids[7]]
    await service.confirm_reservation(reservation.id, test_staff)

    order = await service.arrive_reservation(reservation.id, test_staff)

    assert re.match(r"^ORD\d{14}$", order.order_number)
    assert order.reservation_id == reservation.id
    assert order.customer_id == reservation.customer_id
    assert order.number_of_guests == 12
    assert order.created_by == test_staff.id

    arrived = await reload(test_db, reservation.id)
    assert arrived.status == "arrived"
    assert arrived.order_id == order.id

    orders = (await test_db.execute(select(Order))).scalars().all()
    assert len(orders) == 1
    links = (await test_db.execute(select(OrderTable))).scalars().all()
    assert sorted(link.table_id for link in links) == sorted([table_ids[6], table_ids[7]])

    tables = (await test_db.execute(
        select(Table).where(Table.id.in_([table_ids[6], table_ids[7]])).execution_options(populate_existing=True)
    )).scalars().all()
    assert {table.status for table in tables} == {"occupied"}


@pytest.mark.asyncio
async def test_arrive_from_pending_follows_setting(service, table_ids, test_staff, test_db, clock, email_sender):
    first = await service.create_reservation(booking())
    order = await service.arrive_reservation(first.id, test_staff)
    assert order.order_number.startswith("ORD")

    strict = ReservationService(
        test_db,
        clock=clock,
        email_sender=email_sender,
        config=settings.model_copy(update={"reservation_allow_arrive_from_pending": False}),
    )
    second = await strict.create_reservation(booking(customer_phone="5550505"))
    with pytest.raises(InvalidStateTransition):
        await strict.arrive_reservation(second.id, test_staff)


@pytest.mark.asyncio
async def test_arrive_requires_staff(service, table_ids):
    reservation = await service.create_reservation(booking())

    with pytest.raises(Forbidden):
        await service.arrive_reservation(reservation.id, None)


@pytest.mark.asyncio
async def test_cancelled_reservation_cannot_arrive(service, table_ids, test_staff):
    reservation = await service.create_reservation(booking())
    await service.cancel_reservation(reservation.id, user=test_staff)

    with pytest.raises(InvalidStateTransition):
        await service.arrive_reservation(reservation.id, test_staff)


@pytest.mark.asyncio
async def test_arrived_reservation_cannot_be_cancelled(service, table_ids, test_staff):
    reservation = await service.create_reservation(booking())
    await service.arrive_reservation(reservation.id, test_staff)

    with pytest.raises(InvalidStateTransition):
        await service.cancel_reservation(reservation.id, user=test_staff)


# ============ CANCEL ============

@pytest.mark.asyncio
async def test_customer_cancels_with_enough_notice(service, table_ids, clock):
    reservation = await service.create_reservation(booking())
    clock.set(datetime(2026, 10, 19, 17, 30))

    assert await service.can_customer_cancel(reservation.id, "+15550404")
    cancelled = await service.cancel_reservation(reservation.id, customer_phone="+1 555 0404")

    assert cancelled.status == "cancelled"
    assert cancelled.cancel_reason == "Cancelled by customer"
    assert cancelled.cancelled_at == datetime(2026, 10, 19, 17, 30)


@pytest.mark.asyncio
async def test_customer_cannot_cancel_late_but_staff_can(service, table_ids, clock, test_staff):
    """25 minutes before the booking only staff may cancel"""
    reservation = await service.create_reservation(booking())
    clock.set(datetime(2026, 10, 19, 17, 35))

    assert not await service.can_customer_cancel(reservation.id, "+15550404")
    with pytest.raises(Forbidden):
        await service.cancel_reservation(reservation.id, customer_phone="+15550404")

    cancelled = await service.cancel_reservation(reservation.id, user=test_staff, cancel_reason="Kitchen closed")
    assert cancelled.status == "cancelled"
    assert cancelled.cancel_reason == "Kitchen closed"


@pytest.mark.asyncio
async def test_customer_cancel_needs_matching_phone(service, table_ids):
    reservation = await service.create_reservation(booking())

    assert not await service.can_customer_cancel(reservation.id, "5559999")
    with pytest.raises(Forbidden):
        await service.cancel_reservation(reservation.id, customer_phone="5559999")
    with pytest.raises(Forbidden):
        await service.cancel_reservation(reservation.id)


@pytest.mark.asyncio
async def test_staff_cancel_default_reason(service, table_ids, test_staff, test_db):
    reservation = await service.create_reservation(booking())
    await service.cancel_reservation(reservation.id, user=test_staff)

    cancelled = await reload(test_db, reservation.id)
    assert cancelled.cancel_reason == "Cancelled by staff"
    assert cancelled.version == 2


@pytest.mark.asyncio
async def test_cancel_twice_is_invalid(service, table_ids, test_staff):
    reservation = await service.create_reservation(booking())
    await service.cancel_reservation(reservation.id, user=test_staff)

    with pytest.raises(InvalidStateTransition):
        await service.cancel_reservation(reservation.id, user=test_staff)
