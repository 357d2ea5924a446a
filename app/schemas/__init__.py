"""Pydantic schemas for request/response validation"""

from app.schemas.auth import (
    TokenPayload,
    UserResponse,
)
from app.schemas.table import (
    TableCreate,
    TableUpdate,
    TableResponse,
)
from app.schemas.reservation import (
    ReservationCreate,
    CancelReservationRequest,
    CustomerCancelRequest,
    ReservationQuery,
    TableSuggestion,
    TableCandidateResponse,
    ReservationDetail,
    ReservationListItem,
    PagedReservationResponse,
    ReservationDashboard,
    TableSlotStatus,
    TimeSlot,
    ReservationTimeline,
    CapacityResponse,
    TableAvailabilityResponse,
    ArriveResponse,
)

__all__ = [
    "TokenPayload",
    "UserResponse",
    "TableCreate",
    "TableUpdate",
    "TableResponse",
    "ReservationCreate",
    "CancelReservationRequest",
    "CustomerCancelRequest",
    "ReservationQuery",
    "TableSuggestion",
    "TableCandidateResponse",
    "ReservationDetail",
    "ReservationListItem",
    "PagedReservationResponse",
    "ReservationDashboard",
    "TableSlotStatus",
    "TimeSlot",
    "ReservationTimeline",
    "CapacityResponse",
    "TableAvailabilityResponse",
    "ArriveResponse",
]
