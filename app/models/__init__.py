"""Database models"""

from app.models.customer import Customer
from app.models.table import Table, TableStatus
from app.models.reservation import Reservation, ReservationTable, ReservationStatus
from app.models.order import Order, OrderTable, OrderStatus
from app.models.audit import AuditLog
from app.models.user import User, UserRole

__all__ = [
    "Customer",
    "Table",
    "TableStatus",
    "Reservation",
    "ReservationTable",
    "ReservationStatus",
    "Order",
    "OrderTable",
    "OrderStatus",
    "AuditLog",
    "User",
    "UserRole",
]
