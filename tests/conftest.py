"""
Pytest configuration and fixtures for online payments tests.
"""

import logging
from decimal import Decimal

import pytest
import structlog

from online_payments.domain.payments import PaymentKind
from online_payments.domain.users import User
from online_payments.infrastructure.transaction_log import InMemoryTransactionLog
from online_payments.infrastructure.user_store import InMemoryUserStore, Session
from online_payments.services.processor import TransactionProcessor

TEST_HASH_ITERATIONS = 1_000

VALID_INSTRUMENTS = {
    PaymentKind.CARD: "4111111111111111",
    PaymentKind.WALLET: "jane@example.com",
    PaymentKind.TRANSFER: "jane@okbank",
}


@pytest.fixture
def restore_logging():
    """Undo root logger and structlog changes made by setup_logging."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def user_store() -> InMemoryUserStore:
    """Empty user store with duplicate phone numbers allowed."""
    return InMemoryUserStore(password_hash_iterations=TEST_HASH_ITERATIONS)


@pytest.fixture
def strict_user_store() -> InMemoryUserStore:
    """User store that refuses duplicate phone numbers."""
    return InMemoryUserStore(
        allow_duplicate_phone=False,
        password_hash_iterations=TEST_HASH_ITERATIONS,
    )


@pytest.fixture
def session(user_store) -> Session:
    return Session(user_store)


@pytest.fixture
def transaction_log() -> InMemoryTransactionLog:
    return InMemoryTransactionLog()


@pytest.fixture
def processor(user_store, transaction_log) -> TransactionProcessor:
    return TransactionProcessor(
        store=user_store,
        transaction_log=transaction_log,
        max_amount=Decimal("5000"),
    )


@pytest.fixture
def user(user_store) -> User:
    """A registered user, as created from the registration menu."""
    return create_user(user_store)


def create_user(
    store: InMemoryUserStore,
    phone_number: str = "9999999999",
    password: str = "pass1",
    email: str = "jane@example.com",
) -> User:
    """Helper to register a user with realistic bank details."""
    return store.register(
        phone_number=phone_number,
        password=password,
        email=email,
        bank_name="State Bank",
        bank_account_number="123456789012",
        ifsc="SBIN0001234",
    )
