"""
Configuration Management for BankCLI

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Every knob the ledger exposes (data file location, validation policy,
amount limits, save behavior, logging) is declared in one place and
validated at startup.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from bankcli.models.policy import SavePolicy, ValidationPolicy


class LedgerSettings(BaseSettings):
    """Ledger data file and business rule limits."""

    model_config = SettingsConfigDict(
        env_prefix="BANKCLI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    data_path: Path = Field(
        default=Path("bank-data.json"),
        description="Path of the JSON file holding the ledger"
    )
    validation_policy: ValidationPolicy = Field(
        default=ValidationPolicy.LEGACY,
        description="Validation applied to deposit/withdraw/transfer amounts"
    )

    # Holder name rules
    max_holder_name_length: int = Field(
        default=50,
        ge=1,
        le=200,
        description="Maximum length of an account holder name"
    )

    # Initial deposit range (always enforced)
    min_initial_deposit: float = Field(
        default=0.0,
        description="Smallest accepted initial deposit"
    )
    max_initial_deposit: float = Field(
        default=1000000.0,
        description="Largest accepted initial deposit"
    )

    # Transaction amount range (enforced only under the strict policy)
    min_transaction_amount: float = Field(
        default=0.01,
        description="Smallest accepted amount under the strict policy"
    )
    max_transaction_amount: float = Field(
        default=1000000.0,
        description="Largest accepted amount under the strict policy"
    )

    @model_validator(mode='after')
    def validate_ranges(self) -> 'LedgerSettings':
        """Make sure every min/max pair is ordered."""
        if self.min_initial_deposit > self.max_initial_deposit:
            raise ValueError("min_initial_deposit cannot exceed max_initial_deposit")
        if self.min_transaction_amount > self.max_transaction_amount:
            raise ValueError("min_transaction_amount cannot exceed max_transaction_amount")
        return self


class PersistenceSettings(BaseSettings):
    """Ledger writer configuration."""

    model_config = SettingsConfigDict(
        env_prefix="BANKCLI_SAVE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    policy: SavePolicy = Field(
        default=SavePolicy.COALESCE,
        description="What to do with a save requested while another is running"
    )
    retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="How many times a failing write is attempted"
    )
    retry_min_wait: float = Field(
        default=0.1,
        ge=0.0,
        description="Minimum backoff between write attempts (seconds)"
    )
    retry_max_wait: float = Field(
        default=2.0,
        ge=0.0,
        description="Maximum backoff between write attempts (seconds)"
    )


class LoggingSettings(BaseSettings):
    """Structured logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="BANKCLI_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    level: str = Field(
        default="WARNING",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    renderer: str = Field(
        default="console",
        pattern="^(json|console)$",
        description="Log output format"
    )

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalize and check the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def ledger(self) -> LedgerSettings:
        return LedgerSettings()

    @property
    def persistence(self) -> PersistenceSettings:
        return PersistenceSettings()

    @property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()
