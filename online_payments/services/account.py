"""Read-only views over a user's account: profile summary and history rows."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from online_payments.domain.payments import PaymentStatus
from online_payments.domain.users import User
from online_payments.domain.value_objects import Currency, Money


class ProfileSummary(BaseModel):
    phone_number: str
    email: str
    bank_name: str
    bank_account_number: str
    ifsc: str
    total_transactions: int
    total_amount: Money

    model_config = ConfigDict(frozen=True)


class HistoryRow(BaseModel):
    payment_id: str
    amount: Money
    date: datetime
    kind_name: str
    status: PaymentStatus

    model_config = ConfigDict(frozen=True)


def build_profile(user: User, currency: Currency = Currency.INR) -> ProfileSummary:
    """
    Summarize a user's profile.

    ``total_amount`` sums every payment in history, declined ones included.
    """
    total = Money.zero(currency)
    for payment in user.payment_history:
        total = total + payment.amount

    return ProfileSummary(
        phone_number=user.phone_number,
        email=user.email,
        bank_name=user.bank_name,
        bank_account_number=user.bank_account_number,
        ifsc=user.ifsc,
        total_transactions=len(user.payment_history),
        total_amount=total,
    )


def history_rows(user: User) -> list[HistoryRow]:
    """One row per payment, oldest first."""
    return [
        HistoryRow(
            payment_id=str(p.payment_id),
            amount=p.amount,
            date=p.created_at,
            kind_name=p.kind_name,
            status=p.status,
        )
        for p in user.payment_history
    ]
