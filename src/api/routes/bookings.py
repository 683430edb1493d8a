"""Booking routes for companionship and home-nursing requests.

Endpoints:
- POST /companionship: Book a companion
- POST /home-nursing: Book a nurse
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_booking_repo
from api.models import (
    BookingResponse,
    CompanionshipRequest,
    CompanionshipResponse,
    HomeNursingRequest,
    HomeNursingResponse,
    UserResponse,
)
from api.security import get_current_user_required
from domain.model.booking import Booking, BookingService
from domain.model.errors import DomainError, ValidationError
from port.booking_repository import BookingRepository
from services.booking_service import create_booking

logger = logging.getLogger(__name__)

router = APIRouter(tags=["bookings"])


async def _create(repo: BookingRepository, user_id: str, service: BookingService,
                  service_type, date, notes) -> Booking:
    try:
        return await create_booking(repo, user_id, service, service_type, date, notes)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DomainError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server error")


@router.post("/companionship", response_model=CompanionshipResponse, status_code=status.HTTP_201_CREATED)
async def book_companionship(
    request: CompanionshipRequest,
    current_user: UserResponse = Depends(get_current_user_required),
    repo: BookingRepository = Depends(get_booking_repo),
):
    booking = await _create(
        repo, current_user.id, BookingService.COMPANIONSHIP,
        request.companion_type, request.date, request.notes,
    )
    return CompanionshipResponse(
        message="Companionship request submitted",
        companionship=BookingResponse.from_domain(booking),
    )


@router.post("/home-nursing", response_model=HomeNursingResponse, status_code=status.HTTP_201_CREATED)
async def book_home_nursing(
    request: HomeNursingRequest,
    current_user: UserResponse = Depends(get_current_user_required),
    repo: BookingRepository = Depends(get_booking_repo),
):
    booking = await _create(
        repo, current_user.id, BookingService.HOME_NURSING,
        request.nurse_type, request.date, request.notes,
    )
    return HomeNursingResponse(
        message="Home nursing request submitted",
        home_nursing=BookingResponse.from_domain(booking),
    )
