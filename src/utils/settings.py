"""Application configuration.

All environment-level configuration is read here, once, into a Settings
object. Services receive the object (or values taken from it) at construction
time and never read os.environ themselves.
"""

import logging
import re
from datetime import timedelta
from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Known weak default, development only
FALLBACK_JWT_SECRET = "fallback-secret"

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {"": "seconds", "s": "seconds", "m": "minutes", "h": "hours", "d": "days"}


def parse_duration(value: str) -> timedelta:
    """Parse a lifetime such as '7d', '12h', '30m', '45s' or a bare number of seconds."""
    match = _DURATION_RE.match(str(value))
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    lifetime = timedelta(**{_DURATION_UNITS[unit]: int(amount)})
    if lifetime <= timedelta(0):
        raise ValueError("Duration must be positive")
    return lifetime


class Settings(BaseSettings):
    """Process-wide configuration loaded from environment variables and .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    # --- Session tokens ---
    jwt_secret: Optional[SecretStr] = Field(
        default=None,
        validation_alias=AliasChoices("jwt_secret", "JWT_SECRET", "JWT_SECRET_KEY"),
    )
    jwt_expires_in: str = "7d"
    jwt_algorithm: str = "HS256"

    # --- Credentials ---
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)

    # --- Payments ---
    stripe_secret_key: Optional[SecretStr] = None
    payment_currency: str = "inr"

    # --- MongoDB ---
    mongodb_uri: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("mongodb_uri", "MONGODB_URI", "MONGODB_URL", "MONGO_URL"),
    )
    mongodb_database: str = "eldercare"

    # --- HTTP ---
    port: int = 5000
    cors_origins: str = "*"

    @field_validator("jwt_expires_in")
    @classmethod
    def _check_lifetime(cls, v: str) -> str:
        parse_duration(v)
        return v

    @field_validator("payment_currency")
    @classmethod
    def _normalize_currency(cls, v: str) -> str:
        v = v.strip().lower()
        if len(v) != 3 or not v.isalpha():
            raise ValueError("payment_currency must be a three-letter ISO code")
        return v

    @property
    def token_lifetime(self) -> timedelta:
        return parse_duration(self.jwt_expires_in)

    @property
    def signing_key(self) -> str:
        """Signing key for session tokens, falling back to the development key."""
        if self.jwt_secret is None or not self.jwt_secret.get_secret_value():
            return FALLBACK_JWT_SECRET
        return self.jwt_secret.get_secret_value()

    @property
    def uses_fallback_signing_key(self) -> bool:
        return self.signing_key == FALLBACK_JWT_SECRET


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide Settings, built on first use."""
    settings = Settings()
    if settings.uses_fallback_signing_key:
        logger.warning(
            "JWT_SECRET is not set; signing session tokens with the development fallback key. "
            "Generate a secure key with: openssl rand -hex 32"
        )
    return settings
