"""
Transaction Processor - drives one payment attempt end-to-end.

Flow for ``attempt``:
1. Limit check       -> INVALID_AMOUNT / LIMIT_EXCEEDED (nothing created)
2. Instrument check  -> INVALID_INSTRUMENT (nothing created)
3. Declined          -> FAILED payment, logged, appended to history
4. Confirmed         -> SUCCESS payment, receipt, logged, appended to history

Rejections in steps 1-2 leave no trace: no record, no log line, no history
entry. A declined confirmation does leave a FAILED record.

Outcomes are returned as an AttemptResult, never raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

import structlog

from online_payments.domain.payments import Payment, PaymentKind, PaymentStatus, Receipt
from online_payments.domain.users import User
from online_payments.domain.validators import validate_instrument
from online_payments.domain.value_objects import Currency, Money
from online_payments.infrastructure.transaction_log import TransactionLog
from online_payments.infrastructure.user_store import InMemoryUserStore

logger = structlog.get_logger()

DEFAULT_MAX_AMOUNT = Decimal("5000")
HALF_CENT = Decimal("0.005")


class AttemptError(str, Enum):
    """Recoverable reasons an attempt was rejected before a payment existed."""

    INVALID_AMOUNT = "invalid_amount"
    LIMIT_EXCEEDED = "limit_exceeded"
    INVALID_INSTRUMENT = "invalid_instrument"


@dataclass(frozen=True)
class AttemptResult:
    """Outcome of one attempt. Exactly one of ``payment`` / ``error`` is set."""

    kind: PaymentKind
    payment: Payment | None = None
    error: AttemptError | None = None
    receipt: Receipt | None = None
    logged: bool = False

    @property
    def ok(self) -> bool:
        return self.payment is not None and self.payment.status is PaymentStatus.SUCCESS

    @property
    def declined(self) -> bool:
        return self.payment is not None and self.payment.status is PaymentStatus.FAILED


class TransactionProcessor:
    """Limit check, validation, confirmation, logging and history append for payments."""

    def __init__(
        self,
        store: InMemoryUserStore,
        transaction_log: TransactionLog,
        max_amount: Decimal = DEFAULT_MAX_AMOUNT,
        currency: Currency = Currency.INR,
    ):
        self.store = store
        self.transaction_log = transaction_log
        self.max_amount = max_amount
        self.currency = currency

    def check_amount(self, amount: Decimal) -> AttemptError | None:
        """Step 1 on its own, so a caller can reject before asking for instrument data."""
        amount = Decimal(str(amount))
        if not amount.is_finite() or amount <= 0:
            return AttemptError.INVALID_AMOUNT
        if amount > self.max_amount:
            return AttemptError.LIMIT_EXCEEDED
        # Stored amounts are rounded half up to cents; below half a cent is nothing to pay.
        if amount < HALF_CENT:
            return AttemptError.INVALID_AMOUNT
        return None

    def validate_instrument(self, kind: PaymentKind, value: str | None) -> bool:
        return validate_instrument(kind, value)

    def attempt(
        self,
        user: User,
        kind: PaymentKind,
        amount: Decimal,
        instrument: str,
        confirmed: bool,
    ) -> AttemptResult:
        amount = Decimal(str(amount))
        error = self.check_amount(amount)
        if error is None and not self.validate_instrument(kind, instrument):
            error = AttemptError.INVALID_INSTRUMENT

        if error is not None:
            logger.info(
                "payment.rejected",
                phone_number=user.phone_number,
                kind=kind.value,
                amount=str(amount),
                reason=error.value,
            )
            return AttemptResult(kind=kind, error=error)

        payment = Payment.create(kind, Money(amount=amount, currency=self.currency), instrument)

        receipt = None
        if confirmed:
            payment.mark_success()
            receipt = payment.receipt()
            event = "payment.completed"
        else:
            payment.mark_failed()
            event = "payment.declined"

        logged = self.transaction_log.append(payment, user.phone_number)
        self.store.append_history(user, payment)

        logger.info(
            event,
            phone_number=user.phone_number,
            payment_id=str(payment.payment_id),
            kind=kind.value,
            amount=str(payment.amount.amount),
            status=payment.status.value,
            logged=logged,
        )
        return AttemptResult(kind=kind, payment=payment, receipt=receipt, logged=logged)
