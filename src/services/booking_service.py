"""Booking service — companionship and home-nursing requests."""

import asyncio
import logging
import uuid
from datetime import datetime, timezone

from domain.model.booking import Booking, BookingService
from domain.model.errors import DomainError, ValidationError
from port.booking_repository import BookingRepository

logger = logging.getLogger(__name__)

_TYPE_LABELS = {
    BookingService.COMPANIONSHIP: "Companion type",
    BookingService.HOME_NURSING: "Nurse type",
}


async def create_booking(
    repo: BookingRepository,
    user_id: str,
    service: BookingService,
    service_type: str | None,
    date: datetime | None,
    notes: str | None = None,
) -> Booking:
    """Create a booking for an authenticated user.

    Raises:
        ValidationError: service type or date missing
        DomainError: the booking could not be stored
    """
    if not service_type or not service_type.strip() or date is None:
        raise ValidationError(f"{_TYPE_LABELS[service]} and date are required")

    now = datetime.now(timezone.utc)
    booking = Booking(
        id=uuid.uuid4().hex,
        user_id=user_id,
        service=service,
        service_type=service_type.strip(),
        date=date,
        created_at=now,
        updated_at=now,
        notes=notes or None,
    )
    if not await asyncio.to_thread(repo.save, booking):
        raise DomainError("Failed to save booking")

    logger.info("Booking created", extra={
        "bookingId": booking.id, "userId": user_id, "service": service.value,
    })
    return booking
