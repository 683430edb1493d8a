"""MongoDB implementation of BookingRepository."""

from datetime import datetime, timezone
from logging import getLogger
from pymongo.database import Database
from pymongo.errors import PyMongoError
from adapter.mongodb import BOOKINGS_COLLECTION_NAME
from domain.model.booking import Booking, BookingService

logger = getLogger(__name__)


class MongoBookingRepository:
    def __init__(self, db: Database):
        self.collection = db[BOOKINGS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        from adapter.mongodb.indexes import create_index_safe

        try:
            return create_index_safe(
                self.collection, [('user_id', 1), ('created_at', -1)], 'idx_bookings_user_created',
            )
        except PyMongoError as e:
            logger.error("Failed to create bookings indexes", extra={"error": str(e)})
            return False

    @staticmethod
    def _to_document(booking: Booking) -> dict:
        return {
            '_id': booking.id,
            'user_id': booking.user_id,
            'service': booking.service.value,
            'service_type': booking.service_type,
            'date': booking.date,
            'notes': booking.notes,
            'payment_intent_id': booking.payment_intent_id,
            'created_at': booking.created_at,
            'updated_at': booking.updated_at,
        }

    @staticmethod
    def _to_domain(doc: dict) -> Booking:
        return Booking(
            id=doc['_id'],
            user_id=doc['user_id'],
            service=BookingService(doc['service']),
            service_type=doc['service_type'],
            date=doc['date'],
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            notes=doc.get('notes'),
            payment_intent_id=doc.get('payment_intent_id'),
        )

    def save(self, booking: Booking) -> bool:
        try:
            self.collection.insert_one(self._to_document(booking))
        except PyMongoError as e:
            logger.error("Failed to save booking", extra={"bookingId": booking.id, "error": str(e)})
            return False
        logger.info("Booking saved", extra={
            "bookingId": booking.id, "userId": booking.user_id, "service": booking.service.value,
        })
        return True

    def get_by_id(self, booking_id: str) -> Booking | None:
        try:
            doc = self.collection.find_one({'_id': booking_id})
        except PyMongoError as e:
            logger.error("Failed to get booking", extra={"bookingId": booking_id, "error": str(e)})
            raise
        return self._to_domain(doc) if doc else None

    def attach_payment_intent(self, booking_id: str, intent_id: str) -> bool:
        try:
            result = self.collection.update_one(
                {'_id': booking_id},
                {'$set': {'payment_intent_id': intent_id, 'updated_at': datetime.now(timezone.utc)}},
            )
        except PyMongoError as e:
            logger.error("Failed to link payment intent", extra={
                "bookingId": booking_id, "intentId": intent_id, "error": str(e),
            })
            return False
        return result.matched_count > 0
