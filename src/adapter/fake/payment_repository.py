"""In-memory implementation of PaymentRepository for testing."""

from dataclasses import replace

from domain.model.payment import PaymentRecord


class FakePaymentRepository:
    def __init__(self):
        self.store: dict[str, PaymentRecord] = {}

    def save(self, record: PaymentRecord) -> bool:
        self.store[record.intent_id] = replace(record)
        return True

    def get_by_intent_id(self, intent_id: str) -> PaymentRecord | None:
        record = self.store.get(intent_id)
        return replace(record) if record else None
