USERS_COLLECTION_NAME = 'users'
BOOKINGS_COLLECTION_NAME = 'bookings'
PAYMENTS_COLLECTION_NAME = 'payment_intents'
