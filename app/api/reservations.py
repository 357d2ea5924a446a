"""Reservation API endpoints"""

from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
import structlog

from app.models.user import User
from app.schemas.reservation import (
    ReservationCreate,
    ReservationDetail,
    ReservationListItem,
    ReservationQuery,
    PagedReservationResponse,
    ReservationDashboard,
    ReservationTimeline,
    CancelReservationRequest,
    CustomerCancelRequest,
    TableCandidateResponse,
    CapacityResponse,
    TableAvailabilityResponse,
    ArriveResponse,
)
from app.services.clock import to_local_naive
from app.services.reservations import ReservationService, to_detail, table_suggestion
from app.api.auth import get_optional_user, require_permission
from app.api.deps import get_reservation_service, get_clock

router = APIRouter()
logger = structlog.get_logger()


# ============ PUBLIC / CUSTOMER ============

@router.post("", response_model=ReservationDetail, status_code=201)
async def create_reservation(
    reservation_data: ReservationCreate,
    current_user: Optional[User] = Depends(get_optional_user),
    service: ReservationService = Depends(get_reservation_service),
):
    """Book a table; tables are assigned automatically"""
    reservation = await service.create_reservation(reservation_data, created_by=current_user)
    return to_detail(reservation)


@router.get("/suggest-tables", response_model=List[TableCandidateResponse])
async def suggest_tables(
    number_of_guests: int = Query(..., ge=1, le=20),
    reservation_time: datetime = Query(...),
    preferred_area: Optional[str] = None,
    service: ReservationService = Depends(get_reservation_service),
):
    """Ranked table suggestions; empty when nothing is free"""
    reservation_time = to_local_naive(reservation_time)
    candidates = await service.suggest_tables(number_of_guests, reservation_time, preferred_area)
    return [
        TableCandidateResponse(
            tables=[table_suggestion(table) for table in candidate.tables],
            total_capacity=candidate.total_capacity,
            location=candidate.location,
            is_combination=candidate.is_combination,
        )
        for candidate in candidates
    ]


@router.get("/capacity", response_model=CapacityResponse)
async def get_current_capacity(
    service: ReservationService = Depends(get_reservation_service),
):
    """Current occupancy percentage"""
    percent = await service.get_current_capacity_percent()
    threshold = service.config.reservation_capacity_threshold_percent
    return CapacityResponse(
        capacity_percent=round(percent, 2),
        is_available=percent < threshold,
        threshold_percent=threshold,
    )


@router.get("/tables/{table_id}/availability", response_model=TableAvailabilityResponse)
async def check_table_availability(
    table_id: UUID,
    at: datetime = Query(..., alias="reservation_time"),
    service: ReservationService = Depends(get_reservation_service),
):
    """Whether a table is free around the given time"""
    at = to_local_naive(at)
    available = await service.is_table_available(table_id, at)
    return TableAvailabilityResponse(table_id=table_id, reservation_time=at, available=available)


@router.get("/my-reservations", response_model=List[ReservationListItem])
async def get_my_reservations(
    phone: str = Query(..., min_length=1),
    service: ReservationService = Depends(get_reservation_service),
):
    """Customer lookup by phone"""
    if not phone.strip():
        raise HTTPException(status_code=400, detail="Invalid phone number")
    return await service.get_customer_reservations(phone)


@router.get("/by-number/{reservation_number}", response_model=ReservationDetail)
async def get_reservation_by_number(
    reservation_number: str,
    service: ReservationService = Depends(get_reservation_service),
):
    """Get reservation by its reservation number"""
    return await service.get_reservation_by_number(reservation_number)


@router.post("/{reservation_id}/customer-cancel", response_model=ReservationDetail)
async def customer_cancel_reservation(
    reservation_id: UUID,
    request: CustomerCancelRequest,
    service: ReservationService = Depends(get_reservation_service),
):
    """Customer cancellation, allowed until shortly before the booking"""
    reservation = await service.cancel_reservation(
        reservation_id,
        customer_phone=request.phone,
        cancel_reason=request.cancel_reason,
    )
    return to_detail(reservation)


# ============ STAFF ============

@router.get("", response_model=PagedReservationResponse)
async def list_reservations(
    from_date: Optional[datetime] = None,
    to_date: Optional[datetime] = None,
    status: Optional[str] = None,
    customer_name: Optional[str] = None,
    customer_phone: Optional[str] = None,
    page_number: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    sort_by: str = Query("reservation_time", pattern="^(reservation_time|created_at)$"),
    is_descending: bool = False,
    current_user: User = Depends(require_permission("reservation", "list")),
    service: ReservationService = Depends(get_reservation_service),
):
    """List reservations with filters and pagination"""
    query = ReservationQuery(
        from_date=from_date,
        to_date=to_date,
        status=status,
        customer_name=customer_name,
        customer_phone=customer_phone,
        page_number=page_number,
        page_size=page_size,
        sort_by=sort_by,
        is_descending=is_descending,
    )
    return await service.list_reservations(query)


@router.get("/dashboard", response_model=ReservationDashboard)
async def get_dashboard(
    day: Optional[date] = Query(None, alias="date"),
    current_user: User = Depends(require_permission("reservation", "dashboard")),
    service: ReservationService = Depends(get_reservation_service),
    clock=Depends(get_clock),
):
    """Daily reservation statistics"""
    return await service.get_dashboard(day or clock.now().date())


@router.get("/timeline", response_model=ReservationTimeline)
async def get_timeline(
    day: Optional[date] = Query(None, alias="date"),
    current_user: User = Depends(require_permission("reservation", "dashboard")),
    service: ReservationService = Depends(get_reservation_service),
    clock=Depends(get_clock),
):
    """Per-table timeline for a service day"""
    return await service.get_timeline(day or clock.now().date())


@router.put("/{reservation_id}/confirm", response_model=ReservationDetail)
async def confirm_reservation(
    reservation_id: UUID,
    current_user: User = Depends(require_permission("reservation", "confirm")),
    service: ReservationService = Depends(get_reservation_service),
):
    """Confirm a pending reservation and email the guest"""
    reservation = await service.confirm_reservation(reservation_id, current_user)
    return to_detail(reservation)


@router.post("/{reservation_id}/arrive", response_model=ArriveResponse)
async def arrive_reservation(
    reservation_id: UUID,
    current_user: User = Depends(require_permission("reservation", "arrive")),
    service: ReservationService = Depends(get_reservation_service),
):
    """Check the party in and open their order"""
    order = await service.arrive_reservation(reservation_id, current_user)
    return ArriveResponse(
        reservation_id=reservation_id,
        order_id=order.id,
        order_number=order.order_number,
    )


@router.delete("/{reservation_id}", response_model=ReservationDetail)
async def cancel_reservation(
    reservation_id: UUID,
    request: Optional[CancelReservationRequest] = None,
    current_user: User = Depends(require_permission("reservation", "cancel_any")),
    service: ReservationService = Depends(get_reservation_service),
):
    """Staff cancellation"""
    reservation = await service.cancel_reservation(
        reservation_id,
        user=current_user,
        cancel_reason=request.cancel_reason if request else None,
    )
    return to_detail(reservation)


@router.get("/{reservation_id}", response_model=ReservationDetail)
async def get_reservation(
    reservation_id: UUID,
    service: ReservationService = Depends(get_reservation_service),
):
    """Get reservation details"""
    return await service.get_reservation(reservation_id)
