"""Auth service — registration and login business logic.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import logging

from domain.model.errors import DuplicateError, ValidationError
from domain.model.user import UserProfile, UserRole, to_profile
from services.credential_store import CredentialStore
from services.token_service import TokenService

logger = logging.getLogger(__name__)


def _require(**fields: str | None) -> None:
    missing = [name for name, value in fields.items() if not value or not str(value).strip()]
    if missing:
        raise ValidationError(f"All fields are required (missing: {', '.join(missing)})")


async def register(
    store: CredentialStore,
    tokens: TokenService,
    name: str,
    email: str,
    phone: str,
    password: str,
    role: UserRole | str | None = None,
) -> tuple[UserProfile, str]:
    """Register a new user and issue a session token.

    The store's unique email constraint is authoritative; the lookup below
    only short-circuits the expensive hash for an obvious duplicate.

    Raises:
        ValidationError: missing field, bad password or role
        DuplicateError: email already registered
    """
    _require(name=name, email=email, phone=phone, password=password)

    if await store.find_by_email(email):
        raise DuplicateError("User already exists")

    user = await store.create(name=name, email=email, phone=phone, password=password, role=role)
    token = tokens.issue(user.id)

    logger.info("User registered", extra={"userId": user.id, "role": user.role.value})
    return to_profile(user), token


async def authenticate(
    store: CredentialStore,
    tokens: TokenService,
    email: str,
    password: str,
) -> tuple[UserProfile, str]:
    """Authenticate by email and password and issue a session token.

    Unknown email and wrong password are indistinguishable to the caller.

    Raises:
        ValidationError: invalid credentials (deliberately vague)
    """
    user = await store.find_by_email(email) if email else None
    if not await store.verify_password(user, password):
        logger.info("Login rejected", extra={"knownAccount": user is not None})
        raise ValidationError("Invalid credentials")

    token = tokens.issue(user.id)
    logger.info("User logged in", extra={"userId": user.id})
    return to_profile(user), token


async def change_password(
    store: CredentialStore,
    user_id: str,
    current_password: str,
    new_password: str,
) -> None:
    """Replace a user's password after re-checking the current one.

    Raises:
        ValidationError: current password wrong, new password invalid
    """
    user = await store.get_identity(user_id)
    if not await store.verify_password(user, current_password):
        raise ValidationError("Current password is incorrect")
    await store.change_password(user_id, new_password)
