"""
Users - registered account holders and their credentials.

Passwords are never stored: a user carries a salted PBKDF2-SHA256 digest,
and login recomputes the digest from the candidate password.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets
from dataclasses import dataclass, field

from online_payments.domain.payments import Payment

SALT_BYTES = 16
DEFAULT_ITERATIONS = 120_000


@dataclass(frozen=True)
class PasswordDigest:
    """Salt, iteration count and derived key of a password."""

    salt: bytes
    iterations: int
    digest: bytes

    def __repr__(self) -> str:
        return f"PasswordDigest(iterations={self.iterations})"


def hash_password(
    password: str, salt: bytes | None = None, iterations: int = DEFAULT_ITERATIONS
) -> PasswordDigest:
    """Derive a salted digest of ``password``. A fresh random salt is used unless given."""
    salt = salt if salt is not None else secrets.token_bytes(SALT_BYTES)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return PasswordDigest(salt=salt, iterations=iterations, digest=digest)


def verify_password(password: str, stored: PasswordDigest) -> bool:
    """Recompute the digest with the stored salt and compare in constant time."""
    candidate = hash_password(password, salt=stored.salt, iterations=stored.iterations)
    return hmac.compare_digest(candidate.digest, stored.digest)


@dataclass
class User:
    """
    A registered user.

    History is append-only and kept in insertion (chronological) order.
    """

    phone_number: str
    password: PasswordDigest = field(repr=False)
    email: str = ""
    bank_name: str = ""
    bank_account_number: str = ""
    ifsc: str = ""
    payment_history: list[Payment] = field(default_factory=list)

    def check_password(self, password: str) -> bool:
        return verify_password(password, self.password)

    def record_payment(self, payment: Payment) -> None:
        self.payment_history.append(payment)
