"""Configuration system for the Ledgerwise engine.

This module provides Pydantic Settings-based configuration with environment
variable support and defaults matching the engine's documented thresholds.

Usage:
    from ledgerwise_core.config import EngineConfig

    # Load from environment variables and .env file
    config = EngineConfig()

    # Access recommendation thresholds
    print(config.thresholds.savings_rate_success)

    # Access projection defaults
    print(config.projection.months)
"""

import logging
from decimal import Decimal

import structlog
from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


class ThresholdConfig(BaseSettings):
    """Thresholds used by the budget aggregator and recommendation engine.

    Environment Variables:
        LEDGERWISE_THRESHOLD_NEAR_LIMIT_PERCENT: Budget percentage flagged as near limit
        LEDGERWISE_THRESHOLD_SAVINGS_RATE_WARNING: Savings rate below which advice is danger
        LEDGERWISE_THRESHOLD_SAVINGS_RATE_SUCCESS: Savings rate at which advice is success
        LEDGERWISE_THRESHOLD_EMERGENCY_FUND_WARNING_MONTHS: Months below which advice is danger
        LEDGERWISE_THRESHOLD_EMERGENCY_FUND_SUCCESS_MONTHS: Months at which advice is success
        LEDGERWISE_THRESHOLD_GOAL_CONTRIBUTION_RATIO: Share of monthly net a goal may demand
    """

    model_config = SettingsConfigDict(
        env_prefix="LEDGERWISE_THRESHOLD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    near_limit_percent: Decimal = Field(
        default=Decimal("80"),
        gt=0,
        le=100,
        description="Budget percentage at which status becomes near limit",
    )
    savings_rate_warning: Decimal = Field(
        default=Decimal("10"),
        description="Savings rate (%) below which the recommendation is danger",
    )
    savings_rate_success: Decimal = Field(
        default=Decimal("20"),
        description="Savings rate (%) at or above which the recommendation is success",
    )
    emergency_fund_warning_months: Decimal = Field(
        default=Decimal("3"),
        ge=0,
        description="Months of cover below which the recommendation is danger",
    )
    emergency_fund_success_months: Decimal = Field(
        default=Decimal("6"),
        ge=0,
        description="Months of cover at or above which the recommendation is success",
    )
    goal_contribution_ratio: Decimal = Field(
        default=Decimal("0.5"),
        gt=0,
        description="Fraction of monthly net a goal's contribution may use before warning",
    )

    @model_validator(mode="after")
    def validate_ordering(self) -> "ThresholdConfig":
        """Warning thresholds must not exceed success thresholds."""
        if self.savings_rate_warning > self.savings_rate_success:
            raise ValueError("savings_rate_warning must not exceed savings_rate_success")
        if self.emergency_fund_warning_months > self.emergency_fund_success_months:
            raise ValueError(
                "emergency_fund_warning_months must not exceed emergency_fund_success_months"
            )
        return self


class ProjectionConfig(BaseSettings):
    """Default scenario inputs for the planner.

    Environment Variables:
        LEDGERWISE_PROJECTION_SAVINGS_RATE_PERCENT: Share of net income saved
        LEDGERWISE_PROJECTION_EXPECTED_ANNUAL_RETURN_PERCENT: Annual return on investments
        LEDGERWISE_PROJECTION_MONTHS: Projection horizon
        LEDGERWISE_PROJECTION_EXTRA_MONTHLY_SAVINGS: Fixed amount saved on top each month
    """

    model_config = SettingsConfigDict(
        env_prefix="LEDGERWISE_PROJECTION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    savings_rate_percent: Decimal = Field(default=Decimal("20"))
    expected_annual_return_percent: Decimal = Field(default=Decimal("7"))
    months: int = Field(default=12, gt=0, le=1200)
    extra_monthly_savings: Decimal = Field(default=Decimal("0"))


class EngineConfig(BaseSettings):
    """Root configuration for the Ledgerwise engine.

    Environment Variables:
        LEDGERWISE_ENV: Environment name (development, staging, production, test)
        LEDGERWISE_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)

    Example:
        # Load all configuration from environment
        config = EngineConfig()

        # Override specific settings
        config = EngineConfig(
            thresholds=ThresholdConfig(near_limit_percent=Decimal("90")),
            projection=ProjectionConfig(months=24),
        )
    """

    model_config = SettingsConfigDict(
        env_prefix="LEDGERWISE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env: str = Field(
        default="development",
        description="Environment name (development, staging, production, test)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    thresholds: ThresholdConfig = Field(default_factory=ThresholdConfig)
    projection: ProjectionConfig = Field(default_factory=ProjectionConfig)

    @field_validator("env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment name."""
        valid_envs = {"development", "staging", "production", "test"}
        v_lower = v.lower().strip()
        if v_lower not in valid_envs:
            raise ValueError(f"Invalid environment: {v}. Must be one of: {valid_envs}")
        return v_lower

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper().strip()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {valid_levels}")
        return v_upper

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"

    @property
    def is_debug(self) -> bool:
        """Check if debug logging is enabled."""
        return self.log_level == "DEBUG"


def load_config(**overrides) -> EngineConfig:
    """Build an EngineConfig, reporting bad settings as ConfigurationError."""
    try:
        return EngineConfig(**overrides)
    except ValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first.get("loc", ()))
        raise ConfigurationError(
            f"Invalid engine configuration: {first.get('msg')}",
            config_key=key or None,
            actual=first.get("input"),
            details={"error_count": e.error_count()},
        ) from e


def configure_logging(config: EngineConfig) -> None:
    """Route structlog output through a level filter taken from config."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, config.log_level)
        ),
        cache_logger_on_first_use=False,
    )
