"""Shared dependency overrides for route tests: fakes instead of MongoDB and Stripe."""

from dataclasses import dataclass

from adapter.fake.booking_repository import FakeBookingRepository
from adapter.fake.payment_gateway import FakePaymentGateway
from adapter.fake.payment_repository import FakePaymentRepository
from adapter.fake.user_repository import FakeUserRepository
from api.dependencies import (
    get_booking_repo,
    get_payment_gateway,
    get_payment_repo,
    get_user_repo,
)
from utils.settings import Settings, get_settings

TEST_SETTINGS = Settings(
    _env_file=None,
    jwt_secret='route-test-signing-key',
    bcrypt_rounds=4,
    payment_currency='inr',
)


@dataclass
class Fakes:
    users: FakeUserRepository
    bookings: FakeBookingRepository
    payments: FakePaymentRepository
    gateway: FakePaymentGateway


def install_fakes(app) -> Fakes:
    """Point every store and the processor at in-memory fakes."""
    fakes = Fakes(
        users=FakeUserRepository(),
        bookings=FakeBookingRepository(),
        payments=FakePaymentRepository(),
        gateway=FakePaymentGateway(),
    )
    app.dependency_overrides[get_settings] = lambda: TEST_SETTINGS
    app.dependency_overrides[get_user_repo] = lambda: fakes.users
    app.dependency_overrides[get_booking_repo] = lambda: fakes.bookings
    app.dependency_overrides[get_payment_repo] = lambda: fakes.payments
    app.dependency_overrides[get_payment_gateway] = lambda: fakes.gateway
    return fakes


def register(client, email='alice@example.com', password='s3cret-pass', **extra) -> dict:
    body = {'name': 'Alice', 'email': email, 'password': password, 'phone': '555-0100'}
    body.update(extra)
    response = client.post('/api/auth/register', json=body)
    assert response.status_code == 201, response.text
    return response.json()


def bearer(token: str) -> dict:
    return {'Authorization': f'Bearer {token}'}
