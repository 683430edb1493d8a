"""In-memory implementation of UserRepository for testing."""

import threading
import uuid
from datetime import datetime, timezone

from domain.model.errors import DuplicateError
from domain.model.user import User, UserRole

_PROFILE_FIELDS = {'name', 'phone'}


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}
        # Stands in for the unique index on email
        self._lock = threading.Lock()

    # ── write operations ─────────────────────────────────────

    def create(
        self, name: str, email: str, phone: str, password_hash: str,
        role: UserRole = UserRole.USER,
    ) -> User:
        with self._lock:
            if any(u.email == email for u in self.store.values()):
                raise DuplicateError("User already exists")

            user_id = uuid.uuid4().hex
            now = datetime.now(timezone.utc)

            user = User(
                id=user_id,
                name=name,
                email=email,
                phone=phone,
                password_hash=password_hash,
                created_at=now,
                updated_at=now,
                role=role,
            )
            self.store[user_id] = user
            return user

    def update_password_hash(self, user_id: str, password_hash: str) -> bool:
        user = self.store.get(user_id)
        if not user:
            return False

        user.password_hash = password_hash
        user.updated_at = datetime.now(timezone.utc)
        return True

    def update_profile(self, user_id: str, fields: dict) -> User | None:
        user = self.store.get(user_id)
        if not user:
            return None

        for key, value in fields.items():
            if key in _PROFILE_FIELDS:
                setattr(user, key, value)
        user.updated_at = datetime.now(timezone.utc)
        return user

    def delete(self, user_id: str) -> bool:
        return self.store.pop(user_id, None) is not None

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        for user in self.store.values():
            if user.email == email:
                return user
        return None

    def get_by_id(self, user_id: str) -> User | None:
        return self.store.get(user_id)
