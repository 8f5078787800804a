"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from batch_nutrition.domain.nutrition import (
    DEFAULT_OVERRUN_PERCENT,
    DEFAULT_SERVING_SIZE_DESCRIPTION,
    DEFAULT_SERVING_SIZE_G,
    DEFAULT_YIELD_LOSS_PERCENT,
    CalculationOptions,
)

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    environment: str = _ENVIRONMENT
    debug: bool = False
    default_yield_loss_percent: float = DEFAULT_YIELD_LOSS_PERCENT
    default_overrun_percent: float = DEFAULT_OVERRUN_PERCENT
    default_serving_size_g: float = DEFAULT_SERVING_SIZE_G
    default_serving_size_description: str = DEFAULT_SERVING_SIZE_DESCRIPTION

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def default_options(self) -> CalculationOptions:
        """Return calculation options built from the configured defaults."""
        return CalculationOptions(
            yield_loss_percent=self.default_yield_loss_percent,
            overrun_percent=self.default_overrun_percent,
            serving_size_g=self.default_serving_size_g,
            serving_size_description=self.default_serving_size_description,
        )
