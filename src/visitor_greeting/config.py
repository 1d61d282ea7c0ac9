import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # App
    app_env: str = os.getenv("APP_ENV", "production")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_json: bool = os.getenv("LOG_JSON", "false").lower() == "true"

    # OpenWeather
    openweather_api_key: str | None = os.getenv("OPENWEATHER_API_KEY")
    openweather_base_url: str = os.getenv(
        "OPENWEATHER_BASE_URL", "https://api.openweathermap.org/data"
    )

    # OpenAI
    openai_api_key: str | None = os.getenv("OPENAI_API_KEY")
    openai_model: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    openai_temperature: float = float(os.getenv("OPENAI_TEMPERATURE", "0.9"))
    openai_max_tokens: int = int(os.getenv("OPENAI_MAX_TOKENS", "150"))
    openai_timeout: float = float(os.getenv("OPENAI_TIMEOUT", "10"))

    # Location
    location_cache_ttl: float = float(os.getenv("LOCATION_CACHE_TTL", "3600"))  # 1 hour
    location_ttl_jitter: float = float(os.getenv("LOCATION_TTL_JITTER", "0.1"))
    location_provider_timeout: float = float(os.getenv("LOCATION_PROVIDER_TIMEOUT", "3.5"))

    # Weather
    weather_cache_ttl: float = float(os.getenv("WEATHER_CACHE_TTL", "3600"))
    weather_provider_timeout: float = float(os.getenv("WEATHER_PROVIDER_TIMEOUT", "5.0"))

    # Greeting
    greeting_cache_ttl: float = float(os.getenv("GREETING_CACHE_TTL", "1800"))  # 30 minutes
    greeting_bucket_seconds: int = int(os.getenv("GREETING_BUCKET_SECONDS", "1800"))

    # Admin
    admin_token: str | None = os.getenv("ADMIN_TOKEN")

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    @property
    def is_development(self) -> bool:
        """Check if the service runs in local development mode.

        Returns:
            True if APP_ENV is "development", False otherwise
        """
        return self.app_env == "development"

    @property
    def has_weather_key(self) -> bool:
        return bool(self.openweather_api_key)

    @property
    def has_openai_key(self) -> bool:
        return bool(self.openai_api_key)

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.app_env not in ("development", "production", "test"):
            raise ValueError(
                f"APP_ENV must be one of [development, production, test], got {self.app_env!r}"
            )

        if not 0 <= self.location_ttl_jitter < 1:
            raise ValueError("LOCATION_TTL_JITTER must be in the range [0, 1)")

        for name in (
            "location_cache_ttl",
            "location_provider_timeout",
            "weather_cache_ttl",
            "weather_provider_timeout",
            "greeting_cache_ttl",
            "greeting_bucket_seconds",
            "openai_timeout",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name.upper()} must be positive")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
