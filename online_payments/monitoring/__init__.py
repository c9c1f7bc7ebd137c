"""Monitoring - structured logging setup."""

from online_payments.monitoring.logging import setup_logging

__all__ = ["setup_logging"]
