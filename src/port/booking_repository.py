from typing import Protocol

from domain.model.booking import Booking


class BookingRepository(Protocol):
    """Protocol defining the interface for booking data access."""
    def save(self, booking: Booking) -> bool:
        """Persist a new booking. Return True on success."""
        ...

    def get_by_id(self, booking_id: str) -> Booking | None: ...

    def attach_payment_intent(self, booking_id: str, intent_id: str) -> bool:
        """Link a processor payment intent to a booking. Return True if updated."""
        ...
