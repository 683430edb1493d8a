from typing import Protocol

from domain.model.payment import PaymentRecord


class PaymentRepository(Protocol):
    """Protocol for the local record of created payment intents."""
    def save(self, record: PaymentRecord) -> bool:
        """Upsert a record keyed by intent_id. Return True on success."""
        ...

    def get_by_intent_id(self, intent_id: str) -> PaymentRecord | None: ...
