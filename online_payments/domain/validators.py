"""
Validators - Syntactic checks for payment instruments.

Deliberately naive: no Luhn check, no issuer lookup, no RFC 5322 parsing.
A malformed or empty value is never an error, it is simply invalid.
"""

from online_payments.domain.payments import PaymentKind

CARD_NUMBER_LENGTH = 16
DIGITS = frozenset("0123456789")


def validate_card(number: str | None) -> bool:
    """Card number: exactly 16 characters, all ASCII decimal digits."""
    if not number:
        return False
    return len(number) == CARD_NUMBER_LENGTH and all(c in DIGITS for c in number)


def validate_email(address: str | None) -> bool:
    """Wallet email: contains both '@' and '.', anywhere."""
    if not address:
        return False
    return "@" in address and "." in address


def validate_handle(handle: str | None) -> bool:
    """UPI handle (user@bank): contains '@'."""
    if not handle:
        return False
    return "@" in handle


_VALIDATORS = {
    PaymentKind.CARD: validate_card,
    PaymentKind.WALLET: validate_email,
    PaymentKind.TRANSFER: validate_handle,
}


def validate_instrument(kind: PaymentKind, value: str | None) -> bool:
    """Validate the instrument field for the given payment kind."""
    return _VALIDATORS[kind](value)
