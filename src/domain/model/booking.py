"""Booking domain model — companionship and home-nursing requests."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class BookingService(str, Enum):
    """Bookable elder-care services."""
    COMPANIONSHIP = 'companionship'
    HOME_NURSING = 'home_nursing'


@dataclass
class Booking:
    """A booking request made by an authenticated user."""
    id: str
    user_id: str
    service: BookingService
    service_type: str
    date: datetime
    created_at: datetime
    updated_at: datetime
    notes: str | None = None
    payment_intent_id: str | None = None
