"""Tests for the capacity guard"""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from app.models.order import Order, OrderStatus
from app.models.reservation import Reservation, ReservationStatus
from app.models.table import Table
from app.schemas.reservation import ReservationCreate
from app.services.errors import CapacityExceeded

DINNER = datetime(2026, 10, 19, 18, 0)


@pytest.fixture
async def hundred_seats(test_db):
    """Ten tables of ten in one hall"""
    for number in range(1, 11):
        test_db.add(Table(
            id=uuid4(),
            table_number=number,
            capacity=10,
            location="Hall",
            status="available",
            is_active=True,
        ))
    await test_db.commit()


async def add_booked_guests(db, *parties, at=DINNER, status=ReservationStatus.CONFIRMED):
    """Insert reservations directly; capacity only looks at guests and times"""
    for index, guests in enumerate(parties):
        reservation = Reservation.new_pending(
            reservation_number=f"RESTEST{uuid4().hex[:8]}{index}",
            number_of_guests=guests,
            reservation_time=at,
        )
        reservation.status = status.value
        db.add(reservation)
    await db.commit()


def party(guests: int, at=DINNER) -> ReservationCreate:
    return ReservationCreate(
        customer_name="Bruno Costa",
        customer_phone="5550303",
        number_of_guests=guests,
        reservation_time=at,
    )


@pytest.mark.asyncio
async def test_booking_allowed_under_threshold(service, test_db, hundred_seats):
    """44 booked + 4 new = 48%"""
    await add_booked_guests(test_db, 20, 20, 4)

    assert await service.capacity.projected_capacity_percent(DINNER, 4) == pytest.approx(48.0)
    reservation = await service.create_reservation(party(4))
    assert reservation.status == "pending"


@pytest.mark.asyncio
async def test_booking_allowed_exactly_at_threshold(service, test_db, hundred_seats):
    await add_booked_guests(test_db, 20, 20, 6)

    reservation = await service.create_reservation(party(4))
    assert reservation.number_of_guests == 4


@pytest.mark.asyncio
async def test_booking_rejected_over_threshold(service, test_db, hundred_seats):
    """47 booked + 4 new = 51%"""
    await add_booked_guests(test_db, 20, 20, 7)

    assert await service.capacity.would_exceed(DINNER, 4)
    with pytest.raises(CapacityExceeded):
        await service.create_reservation(party(4))


@pytest.mark.asyncio
async def test_only_active_reservations_near_the_time_count(service, test_db, hundred_seats):
    await add_booked_guests(test_db, 20, 20, status=ReservationStatus.CANCELLED)
    await add_booked_guests(test_db, 20, at=datetime(2026, 10, 19, 19, 0))
    await add_booked_guests(test_db, 20, at=datetime(2026, 10, 19, 17, 0))
    await add_booked_guests(test_db, 10, at=datetime(2026, 10, 19, 18, 45), status=ReservationStatus.ARRIVED)

    assert await service.capacity.reserved_guests(DINNER) == 10


@pytest.mark.asyncio
async def test_no_tables_means_no_capacity(service, test_db):
    assert await service.capacity.total_capacity() == 0
    assert await service.get_current_capacity_percent() == 0.0
    assert await service.capacity.would_exceed(DINNER, 1)

    with pytest.raises(CapacityExceeded):
        await service.create_reservation(party(2))


@pytest.mark.asyncio
async def test_current_capacity_counts_walk_ins(service, test_db, hundred_seats, clock):
    clock.set(datetime(2026, 10, 19, 18, 10))
    await add_booked_guests(test_db, 20)
    test_db.add(Order(
        order_number="ORDWALKIN01",
        number_of_guests=6,
        status=OrderStatus.OPEN.value,
    ))
    test_db.add(Order(
        order_number="ORDWALKIN02",
        number_of_guests=50,
        status=OrderStatus.COMPLETED.value,
    ))
    await test_db.commit()

    assert await service.get_current_capacity_percent() == pytest.approx(26.0)


@pytest.mark.asyncio
async def test_current_capacity_is_clamped(service, test_db, clock):
    clock.set(datetime(2026, 10, 19, 18, 0))
    test_db.add(Table(table_number=1, capacity=4, location="Bar", status="available", is_active=True))
    await test_db.commit()
    await add_booked_guests(test_db, 12)

    assert await service.get_current_capacity_percent() == 100.0


@pytest.mark.asyncio
async def test_capacity_slots_overlap_for_bookings_within_one_buffer(service):
    monitor = service.capacity
    keys = monitor.slot_keys(DINNER)

    assert keys == [keys[1] - 1, keys[1], keys[1] + 1]
    for minutes in (-59, -1, 1, 59):
        nearby = monitor.slot_keys(DINNER + timedelta(minutes=minutes))
        assert set(keys) & set(nearby)

    # Three hours away never competes for the same seats
    assert not set(keys) & set(monitor.slot_keys(DINNER + timedelta(hours=3)))


@pytest.mark.asyncio
async def test_capacity_slot_lock_is_a_no_op_without_postgres(service, hundred_seats):
    reservation = await service.create_reservation(party(10))
    assert reservation.status == "pending"
