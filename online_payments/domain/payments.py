"""
Payment Records - One attempted transaction and its lifecycle.

A payment is a single record with a tagged instrument:
- card     -> CardInstrument (only the masked number is kept)
- wallet   -> WalletInstrument (wallet email)
- transfer -> TransferInstrument (UPI-style user@bank handle)

State machine:
PENDING → SUCCESS
    ↓
  FAILED

SUCCESS and FAILED are terminal. Every instrument knows how to describe
itself on a receipt (ReceiptSource), so the receipt is built the same way
for all three kinds.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Protocol, Union

from pydantic import BaseModel, ConfigDict, Field

from online_payments.domain.value_objects import Money, PaymentIdentifier


class PaymentStatus(str, Enum):
    """Payment lifecycle states."""

    PENDING = "Pending"
    SUCCESS = "Success"
    FAILED = "Failed"

    @property
    def is_terminal(self) -> bool:
        return self is not PaymentStatus.PENDING


class PaymentKind(str, Enum):
    """Payment methods offered by the menu."""

    CARD = "card"
    WALLET = "wallet"
    TRANSFER = "transfer"

    @property
    def display_name(self) -> str:
        """Record name used in log lines and history listings."""
        return _DISPLAY_NAMES[self]

    @property
    def label(self) -> str:
        return _LABELS[self]


_DISPLAY_NAMES = {
    PaymentKind.CARD: "CardPayment",
    PaymentKind.WALLET: "WalletPayment",
    PaymentKind.TRANSFER: "TransferPayment",
}

_LABELS = {
    PaymentKind.CARD: "Card",
    PaymentKind.WALLET: "Wallet",
    PaymentKind.TRANSFER: "UPI",
}


class ReceiptSource(Protocol):
    """Anything that can describe itself on a receipt."""

    @property
    def receipt_title(self) -> str: ...

    @property
    def instrument_label(self) -> str: ...

    @property
    def instrument_display(self) -> str: ...


class CardInstrument(BaseModel):
    """Card details. The full number is never stored."""

    kind: Literal[PaymentKind.CARD] = PaymentKind.CARD
    last4: str = Field(min_length=4, max_length=4)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_number(cls, number: str) -> CardInstrument:
        return cls(last4=number[-4:])

    @property
    def masked_number(self) -> str:
        return f"**** **** **** {self.last4}"

    @property
    def receipt_title(self) -> str:
        return "CARD RECEIPT"

    @property
    def instrument_label(self) -> str:
        return "Card Number"

    @property
    def instrument_display(self) -> str:
        return self.masked_number


class WalletInstrument(BaseModel):
    kind: Literal[PaymentKind.WALLET] = PaymentKind.WALLET
    email: str

    model_config = ConfigDict(frozen=True)

    @property
    def receipt_title(self) -> str:
        return "WALLET RECEIPT"

    @property
    def instrument_label(self) -> str:
        return "Wallet Email"

    @property
    def instrument_display(self) -> str:
        return self.email


class TransferInstrument(BaseModel):
    kind: Literal[PaymentKind.TRANSFER] = PaymentKind.TRANSFER
    handle: str

    model_config = ConfigDict(frozen=True)

    @property
    def receipt_title(self) -> str:
        return "UPI RECEIPT"

    @property
    def instrument_label(self) -> str:
        return "UPI ID"

    @property
    def instrument_display(self) -> str:
        return self.handle


Instrument = Annotated[
    Union[CardInstrument, WalletInstrument, TransferInstrument],
    Field(discriminator="kind"),
]


def build_instrument(kind: PaymentKind, value: str) -> Instrument:
    """Build the instrument variant for ``kind`` from an already validated raw value."""
    if kind is PaymentKind.CARD:
        return CardInstrument.from_number(value)
    if kind is PaymentKind.WALLET:
        return WalletInstrument(email=value)
    return TransferInstrument(handle=value)


class Receipt(BaseModel):
    """Post-success summary shown to the user. Never persisted."""

    title: str
    payment_id: str
    date: datetime
    amount: Money
    instrument_label: str
    instrument_value: str
    status: PaymentStatus

    model_config = ConfigDict(frozen=True)

    def lines(self) -> list[tuple[str, str]]:
        """Label/value pairs in display order."""
        return [
            ("Payment ID", self.payment_id),
            ("Date", self.date.strftime("%Y-%m-%d %H:%M:%S")),
            ("Amount", str(self.amount)),
            (self.instrument_label, self.instrument_value),
            ("Status", self.status.value),
        ]


@dataclass
class Payment:
    """
    Payment record.

    Invariant: payment_id never changes once generated.
    Invariant: status leaves PENDING exactly once.
    """

    amount: Money
    instrument: Instrument
    payment_id: PaymentIdentifier = field(default_factory=PaymentIdentifier.generate)
    created_at: datetime = field(default_factory=datetime.now)
    status: PaymentStatus = PaymentStatus.PENDING

    @classmethod
    def create(cls, kind: PaymentKind, amount: Money, instrument_value: str) -> Payment:
        """Factory method: a new PENDING payment for ``kind``."""
        return cls(amount=amount, instrument=build_instrument(kind, instrument_value))

    @property
    def kind(self) -> PaymentKind:
        return self.instrument.kind

    @property
    def kind_name(self) -> str:
        return self.kind.display_name

    def mark_success(self) -> None:
        self._transition(PaymentStatus.SUCCESS)

    def mark_failed(self) -> None:
        self._transition(PaymentStatus.FAILED)

    def _transition(self, target: PaymentStatus) -> None:
        if self.status.is_terminal:
            raise PaymentError(
                f"Cannot move payment from {self.status.value} to {target.value}",
                payment_id=str(self.payment_id),
            )
        self.status = target

    def receipt(self) -> Receipt:
        source: ReceiptSource = self.instrument
        return Receipt(
            title=source.receipt_title,
            payment_id=str(self.payment_id),
            date=self.created_at,
            amount=self.amount,
            instrument_label=source.instrument_label,
            instrument_value=source.instrument_display,
            status=self.status,
        )


class PaymentError(Exception):
    """Domain error for payment operations."""

    def __init__(self, message: str, payment_id: str | None = None):
        self.payment_id = payment_id
        super().__init__(message)
