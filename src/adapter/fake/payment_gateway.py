"""In-memory implementation of PaymentGatewayPort for testing."""

import uuid

from domain.model.payment import PaymentIntent
from port.payment_gateway import PaymentGatewayError


class FakePaymentGateway:
    """Fake processor that records calls and returns deterministic-looking intents.

    Replays with the same idempotency key return the original intent, as the
    real processor does.
    """

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls: list[dict] = []
        self._by_key: dict[str, PaymentIntent] = {}

    async def create_intent(
        self,
        amount: int,
        currency: str,
        metadata: dict[str, str] | None = None,
        idempotency_key: str | None = None,
    ) -> PaymentIntent:
        self.calls.append({
            'amount': amount,
            'currency': currency,
            'metadata': metadata or {},
            'idempotency_key': idempotency_key,
        })
        if self.error is not None:
            raise PaymentGatewayError(str(self.error)) from self.error

        if idempotency_key and idempotency_key in self._by_key:
            return self._by_key[idempotency_key]

        intent_id = f"pi_{uuid.uuid4().hex[:24]}"
        intent = PaymentIntent(
            id=intent_id,
            client_secret=f"{intent_id}_secret_{uuid.uuid4().hex[:24]}",
            amount=amount,
            currency=currency,
            status='requires_payment_method',
        )
        if idempotency_key:
            self._by_key[idempotency_key] = intent
        return intent
