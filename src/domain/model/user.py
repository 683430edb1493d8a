from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class UserRole(str, Enum):
    """Account role tag."""
    USER = 'user'
    PROVIDER = 'provider'


@dataclass
class User:
    """Private identity record, including the password hash.

    Never returned to clients directly; convert with to_profile().
    """
    id: str
    name: str
    email: str
    phone: str
    password_hash: str
    created_at: datetime
    updated_at: datetime
    role: UserRole = UserRole.USER


@dataclass(frozen=True)
class UserProfile:
    """Public projection of a User (no password hash)."""
    id: str
    name: str
    email: str
    phone: str
    role: UserRole
    created_at: datetime
    updated_at: datetime


def to_profile(user: User) -> UserProfile:
    """Project a private User record onto its public profile."""
    return UserProfile(
        id=user.id,
        name=user.name,
        email=user.email,
        phone=user.phone,
        role=user.role,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )
