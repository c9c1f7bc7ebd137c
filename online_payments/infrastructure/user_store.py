"""
User Store and Session - in-memory registry of users plus the one active login.

State lives only for the lifetime of the process. The store is an explicit
object handed to whoever needs it, so tests can build a fresh one per case.
"""

from __future__ import annotations

import threading

import structlog

from online_payments.domain.payments import Payment
from online_payments.domain.users import DEFAULT_ITERATIONS, User, hash_password

logger = structlog.get_logger()


class RegistrationError(Exception):
    """Raised when a registration is refused by the store's policy."""

    def __init__(self, message: str, phone_number: str | None = None):
        self.phone_number = phone_number
        super().__init__(message)


class InMemoryUserStore:
    """
    Registered users in insertion order.

    Duplicate phone numbers are accepted unless ``allow_duplicate_phone`` is
    False; with duplicates, credential lookup returns the earliest match.
    """

    def __init__(
        self,
        allow_duplicate_phone: bool = True,
        password_hash_iterations: int = DEFAULT_ITERATIONS,
    ):
        self.allow_duplicate_phone = allow_duplicate_phone
        self.password_hash_iterations = password_hash_iterations
        self._users: list[User] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._users)

    @property
    def users(self) -> list[User]:
        return list(self._users)

    def register(
        self,
        phone_number: str,
        password: str,
        email: str = "",
        bank_name: str = "",
        bank_account_number: str = "",
        ifsc: str = "",
    ) -> User:
        """Create a user with an empty payment history."""
        user = User(
            phone_number=phone_number,
            password=hash_password(password, iterations=self.password_hash_iterations),
            email=email,
            bank_name=bank_name,
            bank_account_number=bank_account_number,
            ifsc=ifsc,
        )
        with self._lock:
            if not self.allow_duplicate_phone and any(
                u.phone_number == phone_number for u in self._users
            ):
                logger.warning("user.duplicate_phone_rejected", phone_number=phone_number)
                raise RegistrationError(
                    f"Phone number {phone_number} is already registered",
                    phone_number=phone_number,
                )
            self._users.append(user)

        logger.info("user.registered", phone_number=phone_number, total_users=len(self._users))
        return user

    def find_by_credentials(self, phone_number: str, password: str) -> User | None:
        """First user (insertion order) whose phone and password both match exactly."""
        for user in self.users:
            if user.phone_number == phone_number and user.check_password(password):
                return user
        return None

    def append_history(self, user: User, payment: Payment) -> None:
        with self._lock:
            user.record_payment(payment)


class Session:
    """
    Single active session over a user store.

    At most one user is authenticated at a time; logging in replaces any
    previous user, logging out clears it.
    """

    def __init__(self, store: InMemoryUserStore):
        self.store = store
        self._current: User | None = None

    @property
    def current_user(self) -> User | None:
        return self._current

    @property
    def is_authenticated(self) -> bool:
        return self._current is not None

    def login(self, phone_number: str, password: str) -> User | None:
        user = self.store.find_by_credentials(phone_number, password)
        if user is None:
            logger.info("session.login_failed", phone_number=phone_number)
            return None

        self._current = user
        logger.info("session.login", phone_number=phone_number)
        return user

    def logout(self) -> None:
        if self._current is not None:
            logger.info("session.logout", phone_number=self._current.phone_number)
        self._current = None
