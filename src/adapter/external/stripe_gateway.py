"""Stripe adapter — implements PaymentGatewayPort with the Stripe PaymentIntents API."""

import logging

import stripe

from domain.model.payment import PaymentIntent
from port.payment_gateway import PaymentGatewayError

logger = logging.getLogger(__name__)


class StripePaymentGateway:
    """Adapter that opens Stripe payment intents without blocking the event loop."""

    def __init__(self, api_key: str, client: stripe.StripeClient | None = None):
        if not api_key and client is None:
            raise ValueError("Stripe secret key is required")
        self._client = client or stripe.StripeClient(api_key, http_client=stripe.HTTPXClient())

    async def create_intent(
        self,
        amount: int,
        currency: str,
        metadata: dict[str, str] | None = None,
        idempotency_key: str | None = None,
    ) -> PaymentIntent:
        """Create a PaymentIntent with automatic payment methods enabled.

        Raises:
            PaymentGatewayError: Stripe rejected the request or was unreachable.
        """
        params = {
            "amount": amount,
            "currency": currency,
            "automatic_payment_methods": {"enabled": True},
        }
        if metadata:
            params["metadata"] = metadata
        options = {"idempotency_key": idempotency_key} if idempotency_key else {}

        try:
            intent = await self._client.v1.payment_intents.create_async(params=params, options=options)
        except stripe.StripeError as e:
            logger.error("Stripe payment intent creation failed", extra={
                "amount": amount,
                "currency": currency,
                "stripe_error_type": type(e).__name__,
                "stripe_code": getattr(e, "code", None),
                "http_status": getattr(e, "http_status", None),
                "request_id": getattr(e, "request_id", None),
            }, exc_info=True)
            raise PaymentGatewayError(str(e)) from e

        logger.debug("Stripe payment intent created", extra={
            "intentId": intent.id, "amount": intent.amount, "currency": intent.currency,
        })

        return PaymentIntent(
            id=intent.id,
            client_secret=intent.client_secret,
            amount=intent.amount,
            currency=intent.currency,
            status=intent.status,
        )
