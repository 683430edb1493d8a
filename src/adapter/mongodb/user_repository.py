"""MongoDB implementation of UserRepository."""

import uuid
from datetime import datetime, timezone
from logging import getLogger
from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError
from adapter.mongodb import USERS_COLLECTION_NAME
from domain.model.errors import DuplicateError
from domain.model.user import User, UserRole

logger = getLogger(__name__)

_PROFILE_FIELDS = ('name', 'phone')


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            if not create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True):
                logger.error("Unique email index is missing; duplicate registrations are possible")
                return False
            return create_index_safe(self.collection, [('created_at', -1)], 'idx_users_created_at')
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            name=doc['name'],
            email=doc['email'],
            phone=doc.get('phone', ''),
            password_hash=doc['password_hash'],
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            role=UserRole(doc.get('role', UserRole.USER.value)),
        )

    def create(
        self, name: str, email: str, phone: str, password_hash: str,
        role: UserRole = UserRole.USER,
    ) -> User:
        """Insert a new user; the unique email index rejects duplicates atomically."""
        user_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc)
        user_doc = {
            '_id': user_id,
            'name': name,
            'email': email,
            'phone': phone,
            'password_hash': password_hash,
            'role': UserRole(role).value,
            'created_at': now,
            'updated_at': now,
        }
        try:
            self.collection.insert_one(user_doc)
        except DuplicateKeyError:
            logger.warning("User creation failed: email already exists", extra={"email": email})
            raise DuplicateError("User already exists") from None
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"email": email, "error": str(e)})
            raise

        logger.info("User created", extra={"userId": user_id, "email": email})
        return self._to_domain(user_doc)

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'email': email})
        except PyMongoError as e:
            logger.error("Failed to get user by email", extra={"email": email, "error": str(e)})
            raise
        return self._to_domain(doc) if doc else None

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            raise
        return self._to_domain(doc) if doc else None

    def update_password_hash(self, user_id: str, password_hash: str) -> bool:
        """Replace the stored password hash. Return True if a user was updated."""
        try:
            result = self.collection.update_one(
                {'_id': user_id},
                {'$set': {'password_hash': password_hash, 'updated_at': datetime.now(timezone.utc)}}
            )
        except PyMongoError as e:
            logger.error("Failed to update password", extra={"userId": user_id, "error": str(e)})
            raise
        return result.matched_count > 0

    def update_profile(self, user_id: str, fields: dict) -> User | None:
        """Update plain profile attributes. The password hash is never touched here."""
        updates = {k: v for k, v in fields.items() if k in _PROFILE_FIELDS}
        updates['updated_at'] = datetime.now(timezone.utc)
        try:
            doc = self.collection.find_one_and_update(
                {'_id': user_id},
                {'$set': updates},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error("Failed to update profile", extra={"userId": user_id, "error": str(e)})
            raise
        return self._to_domain(doc) if doc else None
