"""Payment authorization service — validates amounts and opens payment intents.

The processor is reached through PaymentGatewayPort. Each created intent is
recorded locally against the paying user (and booking, when given) so a
booking can later be reconciled with its payment.
"""

import asyncio
import logging
from datetime import datetime, timezone

from domain.model.errors import NotFoundError, PaymentError
from domain.model.payment import PaymentIntent, PaymentRecord, parse_amount, to_minor_units
from port.booking_repository import BookingRepository
from port.payment_gateway import PaymentGatewayError, PaymentGatewayPort
from port.payment_repository import PaymentRepository

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = "inr"


class PaymentAuthorizationService:
    def __init__(
        self,
        gateway: PaymentGatewayPort,
        payments: PaymentRepository,
        bookings: BookingRepository,
        currency: str = DEFAULT_CURRENCY,
    ):
        self.gateway = gateway
        self.payments = payments
        self.bookings = bookings
        self.currency = currency

    async def create_intent(
        self,
        amount,
        user_id: str,
        booking_id: str | None = None,
        idempotency_key: str | None = None,
    ) -> PaymentIntent:
        """Open a payment intent for `amount` major units on behalf of user_id.

        Raises:
            InvalidAmountError: amount missing or out of range (processor not called)
            NotFoundError: booking_id unknown or owned by someone else
            PaymentError: processor failure (the cause is logged, not exposed), or an
                idempotency key replayed by a user other than the intent's owner
        """
        value = parse_amount(amount)
        minor_amount = to_minor_units(value)

        if booking_id:
            booking = await asyncio.to_thread(self.bookings.get_by_id, booking_id)
            if booking is None or booking.user_id != user_id:
                raise NotFoundError("Booking not found")

        metadata = {"user_id": user_id}
        if booking_id:
            metadata["booking_id"] = booking_id

        try:
            intent = await self.gateway.create_intent(
                amount=minor_amount,
                currency=self.currency,
                metadata=metadata,
                idempotency_key=idempotency_key,
            )
        except PaymentGatewayError as e:
            logger.error("Payment intent creation failed", extra={
                "userId": user_id, "bookingId": booking_id, "amount": minor_amount,
                "error": str(e),
            })
            raise PaymentError() from e

        # A replayed idempotency key returns the intent already on record
        existing = await asyncio.to_thread(self.payments.get_by_intent_id, intent.id)
        if existing is not None and existing.user_id != user_id:
            logger.warning("Idempotency key replayed by a different user", extra={
                "intentId": intent.id, "userId": user_id, "ownerId": existing.user_id,
            })
            raise PaymentError()

        if existing is None:
            record = PaymentRecord(
                intent_id=intent.id,
                user_id=user_id,
                amount=intent.amount,
                currency=intent.currency,
                status=intent.status,
                created_at=datetime.now(timezone.utc),
                booking_id=booking_id,
                idempotency_key=idempotency_key,
            )
            if not await asyncio.to_thread(self.payments.save, record):
                logger.error("Payment intent created but not recorded", extra={
                    "intentId": intent.id, "userId": user_id, "bookingId": booking_id,
                })
        if booking_id:
            await asyncio.to_thread(self.bookings.attach_payment_intent, booking_id, intent.id)

        logger.info("Payment intent created", extra={
            "intentId": intent.id, "userId": user_id, "bookingId": booking_id,
            "amount": intent.amount, "currency": intent.currency,
        })
        return intent
