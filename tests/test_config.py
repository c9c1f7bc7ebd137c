"""
Tests for environment-driven settings.
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from online_payments.config import Settings


class TestSettings:
    @pytest.mark.unit
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)

        assert settings.max_transaction_amount == Decimal("5000")
        assert settings.currency == "INR"
        assert settings.transaction_log_path == "PaymentLog.txt"
        assert settings.allow_duplicate_phone is True
        assert settings.log_format == "console"

    @pytest.mark.unit
    def test_environment_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("ONLINE_PAYMENTS_MAX_TRANSACTION_AMOUNT", "250")
        monkeypatch.setenv("ONLINE_PAYMENTS_ALLOW_DUPLICATE_PHONE", "false")
        monkeypatch.setenv("ONLINE_PAYMENTS_LOG_LEVEL", "debug")
        monkeypatch.setenv("ONLINE_PAYMENTS_APP_ENV", "production")

        settings = Settings(_env_file=None)

        assert settings.max_transaction_amount == Decimal("250")
        assert settings.allow_duplicate_phone is False
        assert settings.log_level == "DEBUG"
        assert settings.app_env == "production"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "field, value",
        [
            ("log_level", "LOUD"),
            ("log_format", "xml"),
            ("currency", "XYZ"),
            ("max_transaction_amount", Decimal("0")),
            ("password_hash_iterations", 0),
        ],
    )
    def test_invalid_values_rejected(self, field: str, value) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: value})
