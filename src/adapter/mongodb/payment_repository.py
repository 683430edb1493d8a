"""MongoDB implementation of PaymentRepository."""

from logging import getLogger
from pymongo.database import Database
from pymongo.errors import PyMongoError
from adapter.mongodb import PAYMENTS_COLLECTION_NAME
from domain.model.payment import PaymentRecord

logger = getLogger(__name__)


class MongoPaymentRepository:
    def __init__(self, db: Database):
        self.collection = db[PAYMENTS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        from adapter.mongodb.indexes import create_index_safe

        try:
            results = [
                create_index_safe(self.collection, [('user_id', 1)], 'idx_payments_user'),
                create_index_safe(self.collection, [('booking_id', 1)], 'idx_payments_booking', sparse=True),
            ]
            return all(results)
        except PyMongoError as e:
            logger.error("Failed to create payment indexes", extra={"error": str(e)})
            return False

    @staticmethod
    def _to_domain(doc: dict) -> PaymentRecord:
        return PaymentRecord(
            intent_id=doc['_id'],
            user_id=doc['user_id'],
            amount=doc['amount'],
            currency=doc['currency'],
            status=doc['status'],
            created_at=doc['created_at'],
            booking_id=doc.get('booking_id'),
            idempotency_key=doc.get('idempotency_key'),
        )

    def save(self, record: PaymentRecord) -> bool:
        """Upsert by intent id; a replayed intent overwrites its own record."""
        doc = {
            'user_id': record.user_id,
            'amount': record.amount,
            'currency': record.currency,
            'status': record.status,
            'booking_id': record.booking_id,
            'idempotency_key': record.idempotency_key,
        }
        try:
            self.collection.update_one(
                {'_id': record.intent_id},
                {'$set': doc, '$setOnInsert': {'created_at': record.created_at}},
                upsert=True,
            )
        except PyMongoError as e:
            logger.error("Failed to save payment record", extra={
                "intentId": record.intent_id, "error": str(e),
            })
            return False
        return True

    def get_by_intent_id(self, intent_id: str) -> PaymentRecord | None:
        try:
            doc = self.collection.find_one({'_id': intent_id})
        except PyMongoError as e:
            logger.error("Failed to get payment record", extra={"intentId": intent_id, "error": str(e)})
            raise
        return self._to_domain(doc) if doc else None
