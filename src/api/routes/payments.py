"""Payment authorization route."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, status

from api.dependencies import get_payment_service
from api.models import PaymentIntentRequest, PaymentIntentResponse, UserResponse
from api.security import get_current_user_required
from domain.model.errors import InvalidAmountError, NotFoundError, PaymentError
from services.payment_service import PaymentAuthorizationService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["payments"])


@router.post("/create-payment-intent", response_model=PaymentIntentResponse)
async def create_payment_intent(
    request: PaymentIntentRequest,
    current_user: UserResponse = Depends(get_current_user_required),
    service: PaymentAuthorizationService = Depends(get_payment_service),
    idempotency_key: Optional[str] = Header(None, alias="Idempotency-Key"),
):
    """Open a payment intent and return its client secret.

    Raises:
        HTTPException: 400 invalid amount, 404 unknown booking, 500 processor failure
    """
    try:
        intent = await service.create_intent(
            request.amount,
            user_id=current_user.id,
            booking_id=request.booking_id,
            idempotency_key=idempotency_key,
        )
    except InvalidAmountError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PaymentError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    return PaymentIntentResponse(client_secret=intent.client_secret, intent_id=intent.id)
