from functools import lru_cache

from fastapi import Depends, HTTPException

from adapter.external.stripe_gateway import StripePaymentGateway
from adapter.mongodb.connection import get_mongodb_client, get_database_name
from adapter.mongodb.booking_repository import MongoBookingRepository
from adapter.mongodb.payment_repository import MongoPaymentRepository
from adapter.mongodb.user_repository import MongoUserRepository
from port.booking_repository import BookingRepository
from port.payment_gateway import PaymentGatewayPort
from port.payment_repository import PaymentRepository
from port.user_repository import UserRepository
from services.credential_store import CredentialStore
from services.payment_service import PaymentAuthorizationService
from services.token_service import TokenService
from utils.settings import Settings, get_settings


def _get_db():
    """Get MongoDB database, raising 503 if unavailable."""
    client = get_mongodb_client()
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[get_database_name()]


def get_user_repo() -> UserRepository:
    return MongoUserRepository(_get_db())


def get_booking_repo() -> BookingRepository:
    return MongoBookingRepository(_get_db())


def get_payment_repo() -> PaymentRepository:
    return MongoPaymentRepository(_get_db())


@lru_cache(maxsize=1)
def _stripe_gateway(api_key: str) -> StripePaymentGateway:
    return StripePaymentGateway(api_key)


def get_payment_gateway(settings: Settings = Depends(get_settings)) -> PaymentGatewayPort:
    if settings.stripe_secret_key is None or not settings.stripe_secret_key.get_secret_value():
        raise HTTPException(status_code=503, detail="Payment service unavailable")
    return _stripe_gateway(settings.stripe_secret_key.get_secret_value())


def get_credential_store(
    repo: UserRepository = Depends(get_user_repo),
    settings: Settings = Depends(get_settings),
) -> CredentialStore:
    return CredentialStore(repo, rounds=settings.bcrypt_rounds)


def get_token_service(settings: Settings = Depends(get_settings)) -> TokenService:
    return TokenService.from_settings(settings)


def get_payment_service(
    gateway: PaymentGatewayPort = Depends(get_payment_gateway),
    payments: PaymentRepository = Depends(get_payment_repo),
    bookings: BookingRepository = Depends(get_booking_repo),
    settings: Settings = Depends(get_settings),
) -> PaymentAuthorizationService:
    return PaymentAuthorizationService(
        gateway=gateway,
        payments=payments,
        bookings=bookings,
        currency=settings.payment_currency,
    )
