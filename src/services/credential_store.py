"""Credential store — user identity records and password hashing.

Pure business logic with no HTTP dependencies. bcrypt and repository calls
are blocking, so each one runs in a worker thread and only suspends the
request that issued it.
"""

import asyncio
import logging

import bcrypt

from domain.model.errors import ValidationError
from domain.model.user import User, UserProfile, UserRole, to_profile
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

# 2^10 iterations: tens of milliseconds per hash on commodity hardware
BCRYPT_ROUNDS = 10

# bcrypt ignores (or rejects) input beyond this many bytes
BCRYPT_MAX_PASSWORD_BYTES = 72


def _validate_password(password: str) -> bytes:
    if not password:
        raise ValidationError("Password is required")
    encoded = password.encode("utf-8")
    if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes")
    return encoded


def _parse_role(role: UserRole | str | None) -> UserRole:
    if role is None or role == "":
        return UserRole.USER
    try:
        return UserRole(role)
    except ValueError:
        raise ValidationError("Role must be 'user' or 'provider'") from None


class CredentialStore:
    """Owns user identity records and the only code paths that hash passwords."""

    def __init__(self, repo: UserRepository, rounds: int = BCRYPT_ROUNDS):
        self.repo = repo
        self.rounds = rounds
        self._dummy_hash: bytes | None = None

    def _hash(self, encoded: bytes) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(encoded, salt).decode("utf-8")

    def _dummy(self) -> bytes:
        # Compared against when the account does not exist, so unknown emails
        # cost the same as wrong passwords
        if self._dummy_hash is None:
            self._dummy_hash = bcrypt.hashpw(b"dummy-password", bcrypt.gensalt(rounds=self.rounds))
        return self._dummy_hash

    # ── writes ────────────────────────────────────────────────

    async def create(
        self,
        name: str,
        email: str,
        phone: str,
        password: str,
        role: UserRole | str | None = None,
    ) -> User:
        """Hash the password and persist a new identity.

        Raises:
            ValidationError: empty or over-long password, unknown role
            DuplicateError: email already registered (raised by the store)
        """
        encoded = _validate_password(password)
        user_role = _parse_role(role)
        password_hash = await asyncio.to_thread(self._hash, encoded)
        return await asyncio.to_thread(
            self.repo.create,
            name=name,
            email=email,
            phone=phone,
            password_hash=password_hash,
            role=user_role,
        )

    async def change_password(self, user_id: str, password: str) -> bool:
        """Rehash and store a new password. Return False if the user does not exist."""
        encoded = _validate_password(password)
        password_hash = await asyncio.to_thread(self._hash, encoded)
        updated = await asyncio.to_thread(self.repo.update_password_hash, user_id, password_hash)
        if updated:
            logger.info("Password changed", extra={"userId": user_id})
        return updated

    async def update_profile(
        self, user_id: str, name: str | None = None, phone: str | None = None,
    ) -> UserProfile | None:
        """Update name and/or phone; the password hash is left as is."""
        fields = {k: v for k, v in (("name", name), ("phone", phone)) if v is not None}
        if not fields:
            raise ValidationError("Nothing to update")
        user = await asyncio.to_thread(self.repo.update_profile, user_id, fields)
        return to_profile(user) if user else None

    # ── reads ─────────────────────────────────────────────────

    async def find_by_email(self, email: str) -> User | None:
        return await asyncio.to_thread(self.repo.get_by_email, email)

    async def find_by_id(self, user_id: str) -> UserProfile | None:
        """Look up an identity by id and return its public profile."""
        user = await asyncio.to_thread(self.repo.get_by_id, user_id)
        return to_profile(user) if user else None

    async def get_identity(self, user_id: str) -> User | None:
        """Private record (with hash) for flows that must re-check a password."""
        return await asyncio.to_thread(self.repo.get_by_id, user_id)

    async def verify_password(self, user: User | None, password: str) -> bool:
        """Check a plaintext password against the stored bcrypt hash.

        `user` may be None (unknown account); a dummy hash is checked so the
        call takes as long as a real mismatch.
        """
        encoded = (password or "").encode("utf-8")
        if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
            return False
        if user is None:
            await asyncio.to_thread(bcrypt.checkpw, encoded, self._dummy())
            return False
        return await asyncio.to_thread(
            bcrypt.checkpw, encoded, user.password_hash.encode("utf-8"),
        )
