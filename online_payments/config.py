"""Application settings using Pydantic for environment-based configuration."""
from decimal import Decimal
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from online_payments.domain.value_objects import Currency


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application Configuration
    app_name: str = Field(default="online-payments", description="Application name")
    app_env: str = Field(default="development", description="Environment (development/production)")
    log_level: str = Field(default="WARNING", description="Logging level")
    log_format: str = Field(default="console", description="Log renderer (console/json)")

    # Payment Processing
    max_transaction_amount: Decimal = Field(
        default=Decimal("5000"), description="Maximum amount for a single payment"
    )
    currency: str = Field(default="INR", description="Currency code for all payments")
    transaction_log_path: str = Field(
        default="PaymentLog.txt", description="Append-only transaction log file"
    )

    # Users
    allow_duplicate_phone: bool = Field(
        default=True, description="Allow several users to register the same phone number"
    )
    password_hash_iterations: int = Field(
        default=120_000, description="PBKDF2 iterations for password digests"
    )

    model_config = SettingsConfigDict(
        env_prefix="ONLINE_PAYMENTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of: {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v.lower() not in ("console", "json"):
            raise ValueError("Invalid log format. Must be 'console' or 'json'")
        return v.lower()

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        """Validate currency against the supported ISO 4217 codes."""
        valid = [c.value for c in Currency]
        if v.upper() not in valid:
            raise ValueError(f"Unsupported currency. Must be one of: {valid}")
        return v.upper()

    @field_validator("max_transaction_amount")
    @classmethod
    def validate_max_amount(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError(f"Maximum transaction amount must be positive, got {v}")
        return v

    @field_validator("password_hash_iterations")
    @classmethod
    def validate_iterations(cls, v: int) -> int:
        if v < 1:
            raise ValueError("password_hash_iterations must be at least 1")
        return v


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
