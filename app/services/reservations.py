"""Reservation lifecycle service

Owns every write to reservation status. Confirm, arrive, cancel and the
background sweeps all funnel through ``_transition`` with the row locked and
the version column checked on commit, so a reservation can never be both
auto-cancelled and seated.
"""

import math
import secrets
import uuid
from datetime import datetime, timedelta, time as time_type
from typing import List, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError
import structlog

from app.config import settings
from app.models.audit import AuditLog
from app.models.customer import Customer
from app.models.order import Order
from app.models.reservation import (
    Reservation,
    ReservationTable,
    ReservationStatus,
    ACTIVE_STATUSES,
    OPEN_STATUSES,
)
from app.models.table import Table, TableStatus
from app.models.user import User
from app.schemas.reservation import (
    ReservationCreate,
    ReservationQuery,
    ReservationDetail,
    ReservationListItem,
    PagedReservationResponse,
    ReservationDashboard,
    ReservationTimeline,
    TimeSlot,
    TableSlotStatus,
    TableSuggestion,
)
from app.services.availability import AvailabilityChecker
from app.services.capacity import CapacityMonitor
from app.services.clock import Clock, SystemClock
from app.services.email import (
    EmailSender,
    SmtpEmailSender,
    render_confirmation_email,
    render_reminder_email,
)
from app.services.errors import (
    CapacityExceeded,
    Forbidden,
    InvalidReservationTime,
    InvalidStateTransition,
    MissingCustomerInfo,
    NoTableAvailable,
    ReservationNotFound,
)
from app.services.orders import OrderCreator
from app.services.suggestions import TableCandidate, TableSuggestionEngine

logger = structlog.get_logger()

Status = ReservationStatus

ALLOWED_TRANSITIONS = {
    Status.PENDING: frozenset({Status.CONFIRMED, Status.ARRIVED, Status.CANCELLED}),
    Status.CONFIRMED: frozenset({Status.ARRIVED, Status.CANCELLED}),
    Status.ARRIVED: frozenset(),
    Status.CANCELLED: frozenset(),
}

NO_SHOW_REASON = "no-show"

# pg_advisory_xact_lock class id for capacity slots
CAPACITY_LOCK_CLASS = 4201


def normalize_phone(phone: Optional[str]) -> str:
    return "".join((phone or "").split())


def table_suggestion(table: Table) -> TableSuggestion:
    return TableSuggestion(
        table_id=table.id,
        table_number=table.table_number,
        table_name=table.display_name,
        capacity=table.capacity,
        location=table.location,
    )


def to_detail(reservation: Reservation, order: Optional[Order] = None) -> ReservationDetail:
    customer = reservation.customer
    return ReservationDetail(
        id=reservation.id,
        reservation_number=reservation.reservation_number,
        customer_id=reservation.customer_id,
        customer_name=customer.full_name if customer else None,
        customer_phone=customer.phone if customer else None,
        customer_email=customer.email if customer else None,
        number_of_guests=reservation.number_of_guests,
        reservation_time=reservation.reservation_time,
        status=reservation.status,
        notes=reservation.notes,
        preferred_area=reservation.preferred_area,
        cancel_reason=reservation.cancel_reason,
        cancelled_at=reservation.cancelled_at,
        tables=[table_suggestion(link.table) for link in reservation.tables],
        order_id=reservation.order_id,
        order_number=order.order_number if order else None,
        created_by=reservation.created_by,
        confirmation_sent=reservation.confirmation_sent,
        reminder_sent=reservation.reminder_sent,
        created_at=reservation.created_at,
        updated_at=reservation.updated_at,
    )


def to_list_item(reservation: Reservation) -> ReservationListItem:
    customer = reservation.customer
    return ReservationListItem(
        id=reservation.id,
        reservation_number=reservation.reservation_number,
        customer_id=reservation.customer_id,
        customer_name=customer.full_name if customer else None,
        customer_phone=customer.phone if customer else None,
        number_of_guests=reservation.number_of_guests,
        reservation_time=reservation.reservation_time,
        status=reservation.status,
        table_count=len(reservation.tables),
        table_names=", ".join(link.table.display_name for link in reservation.tables),
        created_at=reservation.created_at,
    )


class ReservationService:
    """Reservation lifecycle manager bound to one unit of work"""

    def __init__(
        self,
        db: AsyncSession,
        clock: Optional[Clock] = None,
        email_sender: Optional[EmailSender] = None,
        order_creator: Optional[OrderCreator] = None,
        config=settings,
    ):
        self.db = db
        self.clock = clock or SystemClock()
        self.email_sender = email_sender or SmtpEmailSender()
        self.order_creator = order_creator or OrderCreator(db, self.clock)
        self.config = config

        self.availability = AvailabilityChecker(db, config.reservation_buffer_minutes)
        self.capacity = CapacityMonitor(
            db,
            self.clock,
            buffer_minutes=config.reservation_buffer_minutes,
            threshold_percent=config.reservation_capacity_threshold_percent,
        )
        self.suggestions = TableSuggestionEngine(db, self.availability, self.capacity)

    # ============ VALIDATION ============

    def validate_reservation_time(self, reservation_time: datetime) -> bool:
        """At least the lead time ahead and inside daily service hours"""
        earliest = self.clock.now() + timedelta(minutes=self.config.reservation_min_lead_minutes)
        if reservation_time < earliest:
            return False
        opens = time_type(self.config.service_open_hour, 0)
        closes = time_type(self.config.service_close_hour, 0)
        return opens <= reservation_time.time() < closes

    async def can_customer_cancel(self, reservation_id: uuid.UUID, customer_phone: str) -> bool:
        result = await self.db.execute(select(Reservation).where(Reservation.id == reservation_id))
        reservation = result.scalar_one_or_none()
        if reservation is None or reservation.status not in OPEN_STATUSES:
            return False
        return self._customer_may_cancel(reservation, customer_phone)

    def _customer_may_cancel(self, reservation: Reservation, customer_phone: Optional[str]) -> bool:
        customer = reservation.customer
        phone = normalize_phone(customer_phone)
        if customer is None or not phone or normalize_phone(customer.phone) != phone:
            return False
        notice = reservation.reservation_time - self.clock.now()
        return notice >= timedelta(minutes=self.config.reservation_customer_cancel_minutes)

    # ============ TABLES & CAPACITY ============

    async def suggest_tables(
        self,
        number_of_guests: int,
        reservation_time: datetime,
        preferred_area: Optional[str] = None,
    ) -> List[TableCandidate]:
        return await self.suggestions.suggest(number_of_guests, reservation_time, preferred_area)

    async def is_table_available(self, table_id: uuid.UUID, reservation_time: datetime) -> bool:
        return await self.availability.is_available(table_id, reservation_time)

    async def get_current_capacity_percent(self) -> float:
        return await self.capacity.current_capacity_percent()

    # ============ CREATE ============

    async def create_reservation(
        self,
        data: ReservationCreate,
        created_by: Optional[User] = None,
    ) -> Reservation:
        """Book the best available table(s) for the party as a pending reservation"""
        if data.customer_id is None and not (data.customer_name and data.customer_phone):
            raise MissingCustomerInfo()
        if not self.validate_reservation_time(data.reservation_time):
            raise InvalidReservationTime()
        await self._lock_capacity_slots(data.reservation_time)
        if await self.capacity.would_exceed(data.reservation_time, data.number_of_guests):
            raise CapacityExceeded()

        candidates = await self.suggestions.suggest(
            data.number_of_guests, data.reservation_time, data.preferred_area
        )
        if not candidates:
            raise NoTableAvailable()

        customer = await self._resolve_customer(data)
        reservation_number = await self._generate_reservation_number()

        for candidate in candidates:
            tables = await self._lock_tables(candidate.table_ids)
            busy = await self.availability.busy_table_ids(
                data.reservation_time, table_ids=candidate.table_ids
            )
            if busy:
                logger.info(
                    "Candidate tables taken concurrently, trying next",
                    table_ids=[str(t) for t in busy],
                )
                continue

            reservation = Reservation.new_pending(
                reservation_number=reservation_number,
                number_of_guests=data.number_of_guests,
                reservation_time=data.reservation_time,
                customer_id=customer.id,
                notes=data.notes,
                preferred_area=data.preferred_area,
                created_by=created_by.id if created_by else None,
            )
            reservation.customer = customer
            for sort_order, table in enumerate(tables, start=1):
                reservation.tables.append(
                    ReservationTable(table_id=table.id, table=table, sort_order=sort_order)
                )
            self.db.add(reservation)
            self._audit("create_reservation", reservation, created_by, {
                "to": Status.PENDING.value,
                "tables": [table.table_number for table in tables],
            })
            await self.db.commit()

            logger.info(
                "Reservation created",
                reservation_number=reservation.reservation_number,
                guests=reservation.number_of_guests,
                reservation_time=reservation.reservation_time.isoformat(),
                tables=[table.table_number for table in tables],
            )
            return reservation

        await self.db.rollback()
        raise NoTableAvailable()

    async def _resolve_customer(self, data: ReservationCreate) -> Customer:
        if data.customer_id is not None:
            customer = await self.db.get(Customer, data.customer_id)
            if customer is None:
                raise MissingCustomerInfo("Customer not found")
            return customer

        phone = normalize_phone(data.customer_phone)
        result = await self.db.execute(
            select(Customer).where(Customer.phone == phone).order_by(Customer.created_at).limit(1)
        )
        customer = result.scalar_one_or_none()
        if customer is None:
            customer = Customer(
                id=uuid.uuid4(),
                full_name=data.customer_name.strip(),
                phone=phone,
                email=data.customer_email,
            )
            self.db.add(customer)
        elif data.customer_email and not customer.email:
            customer.email = data.customer_email
        return customer

    async def _generate_reservation_number(self) -> str:
        prefix = f"RES{self.clock.now():%y%m%d}"
        while True:
            candidate = f"{prefix}{secrets.randbelow(10000):04d}"
            result = await self.db.execute(
                select(func.count(Reservation.id)).where(Reservation.reservation_number == candidate)
            )
            if not result.scalar():
                return candidate

    async def _lock_capacity_slots(self, at: datetime) -> None:
        """Serialize creates whose capacity windows overlap until this transaction ends.

        Table row locks only cover bookings that compete for the same table.
        Slots are taken in ascending order so two creates never deadlock.
        """
        if self.db.get_bind().dialect.name != "postgresql":
            return
        for key in self.capacity.slot_keys(at):
            await self.db.execute(select(func.pg_advisory_xact_lock(CAPACITY_LOCK_CLASS, key)))

    async def _lock_tables(self, table_ids: List[uuid.UUID]) -> List[Table]:
        """Row-lock tables in id order so concurrent bookings serialize per table"""
        result = await self.db.execute(
            select(Table).where(Table.id.in_(table_ids)).order_by(Table.id).with_for_update()
        )
        locked = {table.id: table for table in result.scalars().all()}
        return [locked[table_id] for table_id in table_ids if table_id in locked]

    # ============ TRANSITIONS ============

    async def confirm_reservation(self, reservation_id: uuid.UUID, user: Optional[User] = None) -> Reservation:
        """Pending -> Confirmed, then send the confirmation email"""
        reservation = await self._get_for_update(reservation_id)
        previous = self._transition(reservation, Status.CONFIRMED)
        now = self.clock.now()
        reservation.confirmed_at = now
        self._audit("confirm_reservation", reservation, user, {"from": previous, "to": reservation.status})
        await self._commit()

        logger.info("Reservation confirmed", reservation_number=reservation.reservation_number)

        if await self._send_confirmation(reservation):
            reservation.confirmation_sent = now
            await self._commit()
        return reservation

    async def arrive_reservation(self, reservation_id: uuid.UUID, staff: Optional[User]) -> Order:
        """Guests are here: open an order on the assigned tables"""
        if staff is None or not staff.has_permission("reservation", "arrive"):
            raise Forbidden("Only staff can check in a reservation.")

        reservation = await self._get_for_update(reservation_id)
        if (
            reservation.status == Status.PENDING.value
            and not self.config.reservation_allow_arrive_from_pending
        ):
            raise InvalidStateTransition("The reservation must be confirmed before arrival.")
        previous = self._transition(reservation, Status.ARRIVED)

        tables = await self._lock_tables(reservation.table_ids)
        order = await self.order_creator.create_for_reservation(reservation, tables, created_by=staff.id)
        reservation.order_id = order.id
        self._audit("arrive_reservation", reservation, staff, {
            "from": previous,
            "to": reservation.status,
            "order_number": order.order_number,
        })
        await self._commit()

        logger.info(
            "Reservation arrived",
            reservation_number=reservation.reservation_number,
            order_number=order.order_number,
        )
        return order

    async def cancel_reservation(
        self,
        reservation_id: uuid.UUID,
        user: Optional[User] = None,
        customer_phone: Optional[str] = None,
        cancel_reason: Optional[str] = None,
    ) -> Reservation:
        """Staff may cancel any time; customers need the booking phone and enough notice"""
        reservation = await self._get_for_update(reservation_id)

        if user is not None and user.has_permission("reservation", "cancel_any"):
            default_reason = "Cancelled by staff"
        elif self._customer_may_cancel(reservation, customer_phone):
            default_reason = "Cancelled by customer"
        else:
            raise Forbidden(
                f"Reservations can only be cancelled by the booking customer at least "
                f"{self.config.reservation_customer_cancel_minutes} minutes in advance."
            )

        previous = self._transition(reservation, Status.CANCELLED)
        reservation.cancelled_at = self.clock.now()
        reservation.cancel_reason = cancel_reason or default_reason
        self._audit("cancel_reservation", reservation, user, {
            "from": previous,
            "to": reservation.status,
            "reason": reservation.cancel_reason,
        })
        await self._commit()

        logger.info(
            "Reservation cancelled",
            reservation_number=reservation.reservation_number,
            reason=reservation.cancel_reason,
        )
        return reservation

    def _transition(self, reservation: Reservation, target: ReservationStatus) -> str:
        """Apply a status change if the lifecycle allows it; returns the old status"""
        current = Status(reservation.status)
        if target not in ALLOWED_TRANSITIONS[current]:
            raise InvalidStateTransition(
                f"Cannot change reservation {reservation.reservation_number} "
                f"from {current.value} to {target.value}."
            )
        reservation.status = target.value
        return current.value

    async def _get_for_update(self, reservation_id: uuid.UUID) -> Reservation:
        result = await self.db.execute(
            select(Reservation)
            .where(Reservation.id == reservation_id)
            .with_for_update(of=Reservation)
            .execution_options(populate_existing=True)
        )
        reservation = result.scalar_one_or_none()
        if reservation is None:
            raise ReservationNotFound()
        return reservation

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except StaleDataError as e:
            await self.db.rollback()
            raise InvalidStateTransition(
                "The reservation was changed by another request. Please reload and retry."
            ) from e

    def _audit(self, action: str, reservation: Reservation, user: Optional[User], data: dict) -> None:
        self.db.add(AuditLog(
            actor_id=user.id if user else None,
            actor_type="user" if user else "customer",
            actor_name=(user.full_name or user.email) if user else None,
            action=action,
            resource_type="reservation",
            resource_id=reservation.id,
            data_json=data,
        ))

    # ============ BACKGROUND SWEEPS ============

    async def cancel_overdue_reservations(self) -> int:
        """Cancel pending/confirmed reservations whose guests never showed up"""
        now = self.clock.now()
        cutoff = now - timedelta(minutes=self.config.reservation_no_show_minutes)
        result = await self.db.execute(
            select(Reservation.id)
            .where(
                Reservation.status.in_(OPEN_STATUSES),
                Reservation.reservation_time < cutoff,
            )
            .order_by(Reservation.reservation_time)
        )
        reservation_ids = list(result.scalars().all())
        await self.db.rollback()

        cancelled = 0
        for reservation_id in reservation_ids:
            try:
                reservation = await self._get_for_update(reservation_id)
            except ReservationNotFound:
                continue

            # Re-check inside the row lock; an arrival may have won the race
            if reservation.status not in OPEN_STATUSES or reservation.reservation_time >= cutoff:
                await self.db.rollback()
                continue

            previous = self._transition(reservation, Status.CANCELLED)
            reservation.cancelled_at = now
            reservation.cancel_reason = NO_SHOW_REASON
            self.db.add(AuditLog(
                actor_type="system",
                actor_name="reservation-sweeper",
                action="cancel_overdue_reservation",
                resource_type="reservation",
                resource_id=reservation.id,
                data_json={"from": previous, "to": reservation.status, "reason": NO_SHOW_REASON},
            ))
            try:
                await self._commit()
            except InvalidStateTransition:
                logger.warning("Overdue reservation changed during sweep", reservation_id=str(reservation_id))
                continue
            cancelled += 1

        if cancelled:
            logger.info("Cancelled overdue reservations", count=cancelled)
        return cancelled

    async def send_reminder_emails(self, window_seconds: float = None) -> int:
        """Email confirmed guests once, when their booking is about an hour away"""
        if window_seconds is None:
            window_seconds = self.config.sweeper_reminder_interval_seconds
        now = self.clock.now()
        window_end = now + timedelta(minutes=self.config.reservation_reminder_minutes)
        window_start = window_end - timedelta(seconds=window_seconds)

        result = await self.db.execute(
            select(Reservation.id).where(
                Reservation.status == Status.CONFIRMED.value,
                Reservation.reminder_sent.is_(None),
                Reservation.reservation_time > window_start,
                Reservation.reservation_time <= window_end,
            )
        )
        reservation_ids = list(result.scalars().all())
        await self.db.rollback()

        sent = 0
        for reservation_id in reservation_ids:
            try:
                reservation = await self._get_for_update(reservation_id)
            except ReservationNotFound:
                continue
            if reservation.status != Status.CONFIRMED.value or reservation.reminder_sent is not None:
                await self.db.rollback()
                continue

            customer = reservation.customer
            if customer is None or not customer.email:
                logger.info("No email for reminder", reservation_number=reservation.reservation_number)
                await self.db.rollback()
                continue

            try:
                delivered = await self.email_sender.send(
                    customer.email,
                    f"Reminder: your reservation {reservation.reservation_number}",
                    render_reminder_email(reservation, customer.full_name),
                )
            except Exception as e:
                logger.error(
                    "Failed to send reservation reminder",
                    reservation_number=reservation.reservation_number,
                    error=str(e),
                )
                await self.db.rollback()
                continue

            if not delivered:
                await self.db.rollback()
                continue

            reservation.reminder_sent = now
            try:
                await self._commit()
            except InvalidStateTransition:
                logger.warning("Reservation changed while sending reminder", reservation_id=str(reservation_id))
                continue
            sent += 1

            logger.info("Sent reservation reminder", reservation_number=reservation.reservation_number)

        return sent

    async def _send_confirmation(self, reservation: Reservation) -> bool:
        customer = reservation.customer
        if customer is None or not customer.email:
            return False
        try:
            return await self.email_sender.send(
                customer.email,
                f"Reservation {reservation.reservation_number} confirmed",
                render_confirmation_email(
                    reservation,
                    customer.full_name,
                    [link.table.display_name for link in reservation.tables],
                ),
            )
        except Exception as e:
            logger.error(
                "Failed to send reservation confirmation",
                reservation_number=reservation.reservation_number,
                error=str(e),
            )
            return False

    # ============ QUERIES ============

    async def get_reservation(self, reservation_id: uuid.UUID) -> ReservationDetail:
        result = await self.db.execute(select(Reservation).where(Reservation.id == reservation_id))
        return await self._detail_or_404(result.scalar_one_or_none())

    async def get_reservation_by_number(self, reservation_number: str) -> ReservationDetail:
        result = await self.db.execute(
            select(Reservation).where(Reservation.reservation_number == reservation_number.strip().upper())
        )
        return await self._detail_or_404(result.scalar_one_or_none())

    async def _detail_or_404(self, reservation: Optional[Reservation]) -> ReservationDetail:
        if reservation is None:
            raise ReservationNotFound()
        order = await self.db.get(Order, reservation.order_id) if reservation.order_id else None
        return to_detail(reservation, order)

    async def list_reservations(self, query: ReservationQuery) -> PagedReservationResponse:
        stmt = select(Reservation).outerjoin(Customer, Customer.id == Reservation.customer_id)
        count_stmt = (
            select(func.count(Reservation.id))
            .select_from(Reservation)
            .outerjoin(Customer, Customer.id == Reservation.customer_id)
        )

        filters = []
        if query.from_date:
            filters.append(Reservation.reservation_time >= query.from_date)
        if query.to_date:
            filters.append(Reservation.reservation_time <= query.to_date)
        if query.status and query.status.lower() != "all":
            filters.append(Reservation.status == query.status.lower())
        if query.customer_name:
            filters.append(Customer.full_name.ilike(f"%{query.customer_name}%"))
        if query.customer_phone:
            filters.append(Customer.phone.contains(normalize_phone(query.customer_phone)))

        if filters:
            stmt = stmt.where(*filters)
            count_stmt = count_stmt.where(*filters)

        total = (await self.db.execute(count_stmt)).scalar() or 0

        sort_column = Reservation.created_at if query.sort_by == "created_at" else Reservation.reservation_time
        stmt = stmt.order_by(sort_column.desc() if query.is_descending else sort_column.asc())
        stmt = stmt.offset((query.page_number - 1) * query.page_size).limit(query.page_size)

        reservations = (await self.db.execute(stmt)).scalars().all()
        total_pages = math.ceil(total / query.page_size) if total else 0

        return PagedReservationResponse(
            items=[to_list_item(r) for r in reservations],
            total=total,
            page_number=query.page_number,
            page_size=query.page_size,
            total_pages=total_pages,
            has_previous=query.page_number > 1,
            has_next=query.page_number < total_pages,
        )

    async def get_customer_reservations(self, customer_phone: str) -> List[ReservationListItem]:
        result = await self.db.execute(
            select(Reservation)
            .join(Customer, Customer.id == Reservation.customer_id)
            .where(Customer.phone == normalize_phone(customer_phone))
            .order_by(Reservation.reservation_time.desc())
        )
        return [to_list_item(r) for r in result.scalars().all()]

    async def _reservations_on(self, day) -> List[Reservation]:
        start = datetime.combine(day, time_type.min)
        result = await self.db.execute(
            select(Reservation)
            .where(
                Reservation.reservation_time >= start,
                Reservation.reservation_time < start + timedelta(days=1),
            )
            .order_by(Reservation.reservation_time)
        )
        return list(result.scalars().all())

    async def get_dashboard(self, day) -> ReservationDashboard:
        reservations = await self._reservations_on(day)
        now = self.clock.now()
        upcoming_until = now + timedelta(minutes=self.config.reservation_reminder_minutes)
        overdue_before = now - timedelta(minutes=self.config.reservation_no_show_minutes)

        def count(status: ReservationStatus) -> int:
            return sum(1 for r in reservations if r.status == status.value)

        return ReservationDashboard(
            date=day,
            total_reservations=len(reservations),
            pending_count=count(Status.PENDING),
            confirmed_count=count(Status.CONFIRMED),
            arrived_count=count(Status.ARRIVED),
            cancelled_count=count(Status.CANCELLED),
            current_capacity_percent=round(await self.capacity.current_capacity_percent(), 2),
            upcoming_reservations=[
                to_list_item(r) for r in reservations
                if r.status in OPEN_STATUSES and now <= r.reservation_time <= upcoming_until
            ],
            overdue_reservations=[
                to_list_item(r) for r in reservations
                if r.status in OPEN_STATUSES and r.reservation_time < overdue_before
            ],
        )

    async def get_timeline(self, day) -> ReservationTimeline:
        """Slots across service hours; a booking holds its tables for one buffer length"""
        tables = (await self.db.execute(
            select(Table).where(Table.is_active.is_(True)).order_by(Table.table_number)
        )).scalars().all()
        reservations = [r for r in await self._reservations_on(day) if r.status in ACTIVE_STATUSES]

        hold = timedelta(minutes=self.config.reservation_buffer_minutes)
        step = timedelta(minutes=self.config.reservation_timeline_slot_minutes)
        slot_start = datetime.combine(day, time_type(self.config.service_open_hour, 0))
        closing = datetime.combine(day, time_type(self.config.service_close_hour, 0))
        now = self.clock.now()

        slots = []
        while slot_start < closing:
            slot_end = slot_start + step
            entries = []
            for table in tables:
                entry = TableSlotStatus(table_id=table.id, table_name=table.display_name)
                for reservation in reservations:
                    if table.id not in reservation.table_ids:
                        continue
                    if reservation.reservation_time < slot_end and reservation.reservation_time + hold > slot_start:
                        customer = reservation.customer
                        entry.reservation_id = reservation.id
                        entry.reservation_number = reservation.reservation_number
                        entry.customer_name = customer.full_name if customer else None
                        entry.status = reservation.status
                        break
                else:
                    if table.status == TableStatus.OCCUPIED.value and slot_start <= now < slot_end:
                        entry.status = "in_order"
                entries.append(entry)
            slots.append(TimeSlot(start_time=slot_start, end_time=slot_end, tables=entries))
            slot_start = slot_end

        return ReservationTimeline(date=day, time_slots=slots)
