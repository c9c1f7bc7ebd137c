"""
Transaction Log - append-only, human-readable record of created payments.

One pipe-delimited line per payment that was actually created
(SUCCESS or FAILED):

    2026-10-19 14:03:11 | 9999999999 | CardPayment | Amount: ₹2000.00 | Status: Success | ID: 5c3e...

Nothing parses these lines back; they exist for a human to read.

Writes are best-effort: I/O errors never propagate, they are logged as
warnings and reported through the return value of ``append``.
"""

from __future__ import annotations

import threading
from datetime import datetime
from pathlib import Path
from typing import Protocol

import structlog

from online_payments.domain.payments import Payment

logger = structlog.get_logger()

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_log_line(payment: Payment, phone_number: str, logged_at: datetime | None = None) -> str:
    """Render one transaction log line (without trailing newline)."""
    logged_at = logged_at or datetime.now()
    return (
        f"{logged_at.strftime(TIMESTAMP_FORMAT)} | {phone_number} | {payment.kind_name} | "
        f"Amount: {payment.amount} | Status: {payment.status.value} | ID: {payment.payment_id}"
    )


class TransactionLog(Protocol):
    """Interface for the transaction log sink."""

    def append(self, payment: Payment, phone_number: str) -> bool:
        """Append one line for ``payment``. Returns False if the write failed."""
        ...

    def tail(self, limit: int = 20) -> list[str]:
        """Most recent lines, oldest first."""
        ...


class FileTransactionLog:
    """Transaction log backed by a plaintext file opened in append mode."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def append(self, payment: Payment, phone_number: str) -> bool:
        line = format_log_line(payment, phone_number)
        with self._lock:
            try:
                with self.path.open("a", encoding="utf-8") as f:
                    f.write(line + "\n")
            except OSError as e:
                logger.warning(
                    "transaction_log.write_failed",
                    path=str(self.path),
                    payment_id=str(payment.payment_id),
                    error=str(e),
                )
                return False
        return True

    def tail(self, limit: int = 20) -> list[str]:
        if limit <= 0 or not self.path.exists():
            return []
        with self.path.open("r", encoding="utf-8") as f:
            lines = [line.rstrip("\n") for line in f if line.strip()]
        return lines[-limit:]


class InMemoryTransactionLog:
    """
    In-memory transaction log for testing.

    Useful for:
    - Unit tests (no files, assert on exact lines)
    - Local experiments where nothing should touch disk
    """

    def __init__(self):
        self._lines: list[str] = []
        self._lock = threading.Lock()

    def append(self, payment: Payment, phone_number: str) -> bool:
        with self._lock:
            self._lines.append(format_log_line(payment, phone_number))
        return True

    def tail(self, limit: int = 20) -> list[str]:
        if limit <= 0:
            return []
        return self._lines[-limit:]

    @property
    def lines(self) -> list[str]:
        """Helper for testing: every line written so far."""
        return list(self._lines)
