from __future__ import annotations

from dataclasses import dataclass

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CAL_USERNAME = "zinyando"
DEFAULT_CAL_EVENT_TYPE_SLUG = "salon-appointment"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL_CHAT: str = "gpt-4o"
    OPENAI_TEMPERATURE_CHAT: float = 0.3
    CHAT_MAX_TOOL_ROUNDS: int = 5

    BUSINESS_NAME: str = "Salon"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    CAL_API_KEY: str | None = None
    CAL_USERNAME: str | None = None
    CAL_EVENT_TYPE_SLUG: str | None = None
    CAL_API_BASE_URL: str = "https://api.cal.com"
    CAL_HTTP_TIMEOUT_SECONDS: float = 10.0
    SALON_LOCATION: str = "Salon Location"


@dataclass(frozen=True)
class CalComConfig:
    """Scheduling account settings resolved once at startup."""

    username: str
    event_type_slug: str
    api_key: str | None = None
    base_url: str = "https://api.cal.com"
    timeout_seconds: float = 10.0
    location_address: str = "Salon Location"


def resolve_cal_com_config(source: Settings) -> CalComConfig:
    # Empty strings count as unset, matching how blank env vars behave.
    return CalComConfig(
        username=(source.CAL_USERNAME or "").strip() or DEFAULT_CAL_USERNAME,
        event_type_slug=(source.CAL_EVENT_TYPE_SLUG or "").strip() or DEFAULT_CAL_EVENT_TYPE_SLUG,
        api_key=(source.CAL_API_KEY or "").strip() or None,
        base_url=source.CAL_API_BASE_URL.rstrip("/"),
        timeout_seconds=source.CAL_HTTP_TIMEOUT_SECONDS,
        location_address=source.SALON_LOCATION,
    )


settings = Settings()
