"""Token service — issues and validates stateless signed session tokens (JWT)."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from jose import ExpiredSignatureError, JWTError, jwt

from domain.model.errors import ExpiredTokenError, InvalidTokenError, MalformedTokenError
from utils.settings import Settings

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
DEFAULT_TOKEN_LIFETIME = timedelta(days=7)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """Signs and verifies session tokens carrying `sub`, `iat` and `exp` claims.

    There is no revocation store: a token is valid until its `exp`.
    """

    def __init__(
        self,
        secret_key: str,
        lifetime: timedelta = DEFAULT_TOKEN_LIFETIME,
        algorithm: str = JWT_ALGORITHM,
        clock: Callable[[], datetime] = _utcnow,
    ):
        if not secret_key:
            raise ValueError("Token signing key must not be empty")
        self._secret_key = secret_key
        self.lifetime = lifetime
        self.algorithm = algorithm
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret_key=settings.signing_key,
            lifetime=settings.token_lifetime,
            algorithm=settings.jwt_algorithm,
        )

    def issue(self, user_id: str) -> str:
        """Create a signed token for user_id expiring after the configured lifetime."""
        now = self._clock()
        payload = {
            "sub": user_id,
            "iat": int(now.timestamp()),
            "exp": int((now + self.lifetime).timestamp()),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def validate(self, token: str) -> str:
        """Verify a token and return its subject id.

        Raises:
            MalformedTokenError: not a decodable token, or required claims missing
            ExpiredTokenError: `exp` is in the past, whatever the signature
            InvalidTokenError: signature or claims did not verify
        """
        try:
            claims = jwt.get_unverified_claims(token)
        except JWTError as e:
            logger.debug("Malformed session token", extra={"reason": str(e)})
            raise MalformedTokenError("Malformed token") from None

        subject = claims.get("sub")
        expires_at = claims.get("exp")
        if not isinstance(subject, str) or not subject:
            raise MalformedTokenError("Token has no subject")
        if isinstance(expires_at, bool) or not isinstance(expires_at, (int, float)):
            raise MalformedTokenError("Token has no expiry")

        if expires_at <= self._clock().timestamp():
            logger.debug("Expired session token", extra={"userId": subject})
            raise ExpiredTokenError("Token expired")

        try:
            jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise ExpiredTokenError("Token expired") from None
        except JWTError as e:
            logger.debug("Session token failed verification", extra={"reason": str(e)})
            raise InvalidTokenError("Invalid token") from None

        return subject
