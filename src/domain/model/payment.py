"""Payment domain model — amounts, intents and local intent records."""

import math
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from numbers import Real

from domain.model.errors import InvalidAmountError

# One unit of currency, in major units
MINIMUM_AMOUNT = Decimal(1)

# Largest amount the processor accepts for a single intent
MAXIMUM_MINOR_UNITS = 99_999_999

_MINOR_UNITS_PER_MAJOR = Decimal(100)

MAXIMUM_AMOUNT = Decimal(MAXIMUM_MINOR_UNITS) / _MINOR_UNITS_PER_MAJOR


def parse_amount(amount) -> Decimal:
    """Validate a requested amount (major units) and return it as a Decimal.

    Raises:
        InvalidAmountError: amount missing, not a finite number, or outside
            MINIMUM_AMOUNT..MAXIMUM_AMOUNT
    """
    if amount is None or isinstance(amount, bool):
        raise InvalidAmountError()
    if isinstance(amount, float) and not math.isfinite(amount):
        raise InvalidAmountError()
    if not isinstance(amount, (Real, Decimal, str)):
        raise InvalidAmountError()
    try:
        value = Decimal(str(amount))
    except InvalidOperation:
        raise InvalidAmountError() from None
    if not value.is_finite() or not MINIMUM_AMOUNT <= value <= MAXIMUM_AMOUNT:
        raise InvalidAmountError()
    return value


def to_minor_units(amount: Decimal) -> int:
    """Convert major units to the processor's integer minor units, rounding half-up.

    Raises:
        InvalidAmountError: result does not fit in MAXIMUM_MINOR_UNITS
    """
    try:
        minor = int((amount * _MINOR_UNITS_PER_MAJOR).quantize(Decimal(1), rounding=ROUND_HALF_UP))
    except InvalidOperation:
        raise InvalidAmountError() from None
    if minor > MAXIMUM_MINOR_UNITS:
        raise InvalidAmountError()
    return minor


@dataclass(frozen=True)
class PaymentIntent:
    """Processor-side payment intent, reduced to what the client needs."""
    id: str
    client_secret: str
    amount: int
    currency: str
    status: str


@dataclass
class PaymentRecord:
    """Local association between a processor intent and the user (and booking) it pays for."""
    intent_id: str
    user_id: str
    amount: int
    currency: str
    status: str
    created_at: datetime
    booking_id: str | None = None
    idempotency_key: str | None = None
