from typing import Protocol

from domain.model.user import User, UserRole


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Implementations must enforce email uniqueness atomically at write time.
    """
    def create(
        self, name: str, email: str, phone: str, password_hash: str, role: UserRole,
    ) -> User:
        """Create a new user. Raise DuplicateError if the email is taken."""
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def update_password_hash(self, user_id: str, password_hash: str) -> bool:
        """Replace the stored password hash. Return True if a user was updated."""
        ...

    def update_profile(self, user_id: str, fields: dict) -> User | None:
        """Update plain profile attributes. Return the updated User or None if not found."""
        ...
