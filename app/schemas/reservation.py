"""Reservation schemas"""

from datetime import date as date_type, datetime
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, EmailStr, Field, field_validator

from app.services.clock import to_local_naive


class ReservationCreate(BaseModel):
    """Create reservation request"""
    customer_id: Optional[UUID] = None
    customer_name: Optional[str] = Field(default=None, min_length=2, max_length=50)
    customer_phone: Optional[str] = Field(default=None, max_length=20)
    customer_email: Optional[EmailStr] = None
    number_of_guests: int = Field(ge=1, le=20)
    reservation_time: datetime
    notes: Optional[str] = Field(default=None, max_length=500)
    preferred_area: Optional[str] = Field(default=None, max_length=50)

    @field_validator("reservation_time")
    @classmethod
    def reservation_time_local(cls, value: datetime) -> datetime:
        return to_local_naive(value)


class CancelReservationRequest(BaseModel):
    """Staff cancellation"""
    cancel_reason: Optional[str] = Field(default=None, max_length=500)


class CustomerCancelRequest(BaseModel):
    """Customer cancellation, authorized by the booking phone number"""
    phone: str = Field(max_length=20)
    cancel_reason: Optional[str] = Field(default=None, max_length=500)


class ReservationQuery(BaseModel):
    """Filters and paging for the staff reservation list"""
    from_date: Optional[datetime] = None
    to_date: Optional[datetime] = None
    status: Optional[str] = None  # pending, confirmed, arrived, cancelled, all
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    page_number: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1, le=100)
    sort_by: str = Field(default="reservation_time", pattern="^(reservation_time|created_at)$")
    is_descending: bool = False

    @field_validator("from_date", "to_date")
    @classmethod
    def dates_local(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_local_naive(value)


class TableSuggestion(BaseModel):
    """Suggested or assigned table"""
    table_id: UUID
    table_number: int
    table_name: str
    capacity: int
    location: Optional[str]


class TableCandidateResponse(BaseModel):
    """A ranked suggestion: one table or a same-area group"""
    tables: List[TableSuggestion]
    total_capacity: int
    location: Optional[str]
    is_combination: bool


class ReservationDetail(BaseModel):
    """Reservation with customer, tables and linked order"""
    id: UUID
    reservation_number: str
    customer_id: Optional[UUID]
    customer_name: Optional[str]
    customer_phone: Optional[str]
    customer_email: Optional[str]
    number_of_guests: int
    reservation_time: datetime
    status: str
    notes: Optional[str]
    preferred_area: Optional[str]
    cancel_reason: Optional[str]
    cancelled_at: Optional[datetime]
    tables: List[TableSuggestion] = []
    order_id: Optional[UUID]
    order_number: Optional[str]
    created_by: Optional[UUID]
    confirmation_sent: Optional[datetime]
    reminder_sent: Optional[datetime]
    created_at: datetime
    updated_at: datetime


class ReservationListItem(BaseModel):
    """Row in reservation lists"""
    id: UUID
    reservation_number: str
    customer_id: Optional[UUID]
    customer_name: Optional[str]
    customer_phone: Optional[str]
    number_of_guests: int
    reservation_time: datetime
    status: str
    table_count: int
    table_names: str
    created_at: datetime


class PagedReservationResponse(BaseModel):
    """Paginated reservation list"""
    items: List[ReservationListItem]
    total: int
    page_number: int
    page_size: int
    total_pages: int
    has_previous: bool
    has_next: bool


class ReservationDashboard(BaseModel):
    """Daily statistics for the host stand"""
    date: date_type
    total_reservations: int
    pending_count: int
    confirmed_count: int
    arrived_count: int
    cancelled_count: int
    current_capacity_percent: float
    upcoming_reservations: List[ReservationListItem] = []
    overdue_reservations: List[ReservationListItem] = []


class TableSlotStatus(BaseModel):
    """What one table is doing during one slot"""
    table_id: UUID
    table_name: str
    reservation_id: Optional[UUID] = None
    reservation_number: Optional[str] = None
    customer_name: Optional[str] = None
    status: str = "available"  # available, pending, confirmed, arrived, in_order


class TimeSlot(BaseModel):
    start_time: datetime
    end_time: datetime
    tables: List[TableSlotStatus] = []


class ReservationTimeline(BaseModel):
    """Per-table calendar view of one service day"""
    date: date_type
    time_slots: List[TimeSlot] = []


class CapacityResponse(BaseModel):
    capacity_percent: float
    is_available: bool
    threshold_percent: float


class TableAvailabilityResponse(BaseModel):
    table_id: UUID
    reservation_time: datetime
    available: bool


class ArriveResponse(BaseModel):
    reservation_id: UUID
    order_id: UUID
    order_number: str
