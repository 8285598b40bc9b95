"""Process configuration read from the environment."""

from __future__ import annotations

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

TOKEN_ENV = "TELEGRAM_BOT_TOKEN"


class ConfigurationError(RuntimeError):
    """Raised when the process cannot start because of invalid configuration."""


class BotSettings(BaseSettings):
    """Everything the bot needs to know before it starts listening.

    Environment variables:
        - TELEGRAM_BOT_TOKEN: bot credential (required)
        - BNM_REQUEST_TIMEOUT: seconds to wait for BNM and Telegram calls (default: 10)
        - BOT_POLL_TIMEOUT: Telegram long-poll duration in seconds (default: 30)
        - BOT_RESTART_DELAY: pause before restarting the listening loop (default: 5)
        - BOT_HEALTH_INTERVAL: seconds between health snapshots (default: 300)
        - BOT_MEMORY_LIMIT_MB: RSS above which garbage collection is forced (default: 256)
        - BOT_LOG_LEVEL: logging level (default: "INFO")
    """

    model_config = SettingsConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
        frozen=True,
    )

    token: SecretStr = Field(alias=TOKEN_ENV, min_length=1)
    request_timeout: float = Field(default=10.0, gt=0, alias="BNM_REQUEST_TIMEOUT")
    poll_timeout: int = Field(default=30, gt=0, alias="BOT_POLL_TIMEOUT")
    restart_delay: float = Field(default=5.0, gt=0, alias="BOT_RESTART_DELAY")
    health_interval: float = Field(default=300.0, gt=0, alias="BOT_HEALTH_INTERVAL")
    memory_limit_mb: float = Field(default=256.0, gt=0, alias="BOT_MEMORY_LIMIT_MB")
    log_level: str = Field(default="INFO", alias="BOT_LOG_LEVEL")

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper() or "INFO"


def load_settings() -> BotSettings:
    """Read :class:`BotSettings` from the environment.

    Validation problems are reported as :class:`ConfigurationError` so the
    CLI can refuse to start with a readable message.
    """

    try:
        return BotSettings()
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {problems}") from exc


__all__ = ["BotSettings", "ConfigurationError", "TOKEN_ENV", "load_settings"]
