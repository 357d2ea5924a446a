"""Reservation domain errors

Every error is a recoverable, caller-visible failure. The API layer maps
them onto 4xx responses through ``code`` and ``status_code``.
"""


class ReservationError(Exception):
    """Base class for reservation failures"""

    code = "RESERVATION_ERROR"
    status_code = 400
    default_message = "Reservation request failed"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidReservationTime(ReservationError):
    code = "INVALID_RESERVATION_TIME"
    default_message = (
        "Reservations must be made at least 30 minutes ahead "
        "and fall within service hours."
    )


class MissingCustomerInfo(ReservationError):
    code = "MISSING_CUSTOMER_INFO"
    default_message = "Provide either customer_id or both customer_name and customer_phone."


class CapacityExceeded(ReservationError):
    code = "CAPACITY_EXCEEDED"
    status_code = 409
    default_message = "The restaurant is fully booked for this time slot."


class NoTableAvailable(ReservationError):
    code = "NO_TABLE_AVAILABLE"
    status_code = 409
    default_message = "No table is available for this party at the requested time."


class InvalidStateTransition(ReservationError):
    code = "INVALID_STATE"
    status_code = 409
    default_message = "The reservation cannot change to the requested status."


class Forbidden(ReservationError):
    code = "FORBIDDEN"
    status_code = 403
    default_message = "You are not allowed to perform this action."


class ReservationNotFound(ReservationError):
    code = "NOT_FOUND"
    status_code = 404
    default_message = "Reservation not found"
