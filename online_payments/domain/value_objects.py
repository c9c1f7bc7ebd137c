"""
Value Objects - Immutable Domain Concepts

Value objects have no identity - two value objects are equal if their values are equal.

Example:
- Money(2000, INR) == Money(2000.00, INR) ✓
- Two payments for the same amount are still different payments ✗
"""

from __future__ import annotations

import uuid
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator


class Currency(str, Enum):
    """ISO 4217 currency codes."""

    INR = "INR"
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]


_SYMBOLS = {
    Currency.INR: "₹",
    Currency.USD: "$",
    Currency.EUR: "€",
    Currency.GBP: "£",
}


class Money(BaseModel):
    """
    Money value object with currency.

    Amounts are always quantized to two decimal places.
    """

    amount: Decimal
    currency: Currency = Currency.INR

    model_config = ConfigDict(frozen=True)

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: Decimal) -> Decimal:
        """Ensure proper decimal precision for currency."""
        return v.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

    @classmethod
    def zero(cls, currency: Currency = Currency.INR) -> Money:
        return cls(amount=Decimal("0"), currency=currency)

    def __add__(self, other: Money) -> Money:
        """Add money (only same currency)."""
        if self.currency != other.currency:
            raise ValueError(
                f"Cannot add {self.currency.value} to {other.currency.value} - convert first"
            )
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def __str__(self) -> str:
        return f"{self.currency.symbol}{self.amount}"

    def __repr__(self) -> str:
        return f"Money({self.amount}, {self.currency.value})"


class PaymentIdentifier(BaseModel):
    """
    Unique identifier for a payment.

    A random UUID4 string, generated once when the payment is created.
    """

    value: str

    model_config = ConfigDict(frozen=True)

    @field_validator("value")
    @classmethod
    def validate_format(cls, v: str) -> str:
        try:
            uuid.UUID(v)
        except ValueError:
            raise ValueError(f"Payment ID must be a UUID, got {v!r}") from None
        return v

    @classmethod
    def generate(cls) -> PaymentIdentifier:
        return cls(value=str(uuid.uuid4()))

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"PaymentIdentifier({self.value})"
