"""Pydantic models for API request/response."""

from datetime import datetime
from typing import Any, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from domain.model.booking import Booking
from domain.model.user import UserProfile


# ── Users ────────────────────────────────────────────────


class UserResponse(BaseModel):
    """Public user profile. Never carries the password hash."""
    id: str
    name: str
    email: str
    phone: str
    role: str = Field("user", description="user or provider")
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "UserResponse":
        return cls(
            id=profile.id,
            name=profile.name,
            email=profile.email,
            phone=profile.phone,
            role=profile.role.value,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )


class RegisterRequest(BaseModel):
    """Request model for user registration.

    Fields are optional at the schema level so that a missing field is
    reported with the service's own message.
    """
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("role", "userType"),
        description="user (default) or provider",
    )


class LoginRequest(BaseModel):
    """Request model for user login."""
    email: Optional[str] = None
    password: Optional[str] = None


class AuthResponse(BaseModel):
    """Response model for register and login."""
    message: str
    token: str
    user: UserResponse


class MeResponse(BaseModel):
    user: UserResponse


class UpdateProfileRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = Field(None, min_length=1)


class ChangePasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_password: str = Field(..., validation_alias=AliasChoices("current_password", "currentPassword"))
    new_password: str = Field(..., validation_alias=AliasChoices("new_password", "newPassword"))


class MessageResponse(BaseModel):
    message: str


# ── Payments ─────────────────────────────────────────────


class PaymentIntentRequest(BaseModel):
    """Request model for opening a payment intent.

    amount is validated by the payment service, not by the schema, so that
    every bad amount maps to the same "Invalid amount" error.
    """
    amount: Any = Field(None, description="Amount in major currency units")
    booking_id: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("booking_id", "bookingId"),
        description="Booking this payment is for",
    )


class PaymentIntentResponse(BaseModel):
    """Only what the client needs to confirm the payment."""
    client_secret: str = Field(..., serialization_alias="clientSecret")
    intent_id: str = Field(..., serialization_alias="intentId")


# ── Bookings ─────────────────────────────────────────────


class CompanionshipRequest(BaseModel):
    companion_type: Optional[str] = Field(
        None, validation_alias=AliasChoices("companion_type", "companionType"),
    )
    date: Optional[datetime] = None
    notes: Optional[str] = None


class HomeNursingRequest(BaseModel):
    nurse_type: Optional[str] = Field(
        None, validation_alias=AliasChoices("nurse_type", "nurseType"),
    )
    date: Optional[datetime] = None
    notes: Optional[str] = None


class BookingResponse(BaseModel):
    id: str
    user_id: str
    service: str
    service_type: str
    date: datetime
    notes: Optional[str] = None
    payment_intent_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, booking: Booking) -> "BookingResponse":
        return cls(
            id=booking.id,
            user_id=booking.user_id,
            service=booking.service.value,
            service_type=booking.service_type,
            date=booking.date,
            notes=booking.notes,
            payment_intent_id=booking.payment_intent_id,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )


class CompanionshipResponse(BaseModel):
    message: str
    companionship: BookingResponse


class HomeNursingResponse(BaseModel):
    message: str
    home_nursing: BookingResponse = Field(..., serialization_alias="homeNursing")
