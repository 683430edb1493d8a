"""In-memory implementation of BookingRepository for testing."""

from dataclasses import replace
from datetime import datetime, timezone

from domain.model.booking import Booking


class FakeBookingRepository:
    def __init__(self):
        self.store: dict[str, Booking] = {}

    def save(self, booking: Booking) -> bool:
        self.store[booking.id] = replace(booking)
        return True

    def get_by_id(self, booking_id: str) -> Booking | None:
        booking = self.store.get(booking_id)
        return replace(booking) if booking else None

    def attach_payment_intent(self, booking_id: str, intent_id: str) -> bool:
        booking = self.store.get(booking_id)
        if not booking:
            return False
        booking.payment_intent_id = intent_id
        booking.updated_at = datetime.now(timezone.utc)
        return True
