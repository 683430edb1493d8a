"""Payment gateway port — outbound interface to the payment processor."""

from typing import Protocol

from domain.model.payment import PaymentIntent


class PaymentGatewayError(Exception):
    """Processor rejected the request or could not be reached."""


class PaymentGatewayPort(Protocol):
    """Port for opening payment intents with an external processor."""

    async def create_intent(
        self,
        amount: int,
        currency: str,
        metadata: dict[str, str] | None = None,
        idempotency_key: str | None = None,
    ) -> PaymentIntent:
        """Open an intent for `amount` minor units with automatic payment methods.

        Raises:
            PaymentGatewayError: on any processor or transport failure
        """
        ...
