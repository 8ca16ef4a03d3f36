"""
Application settings loaded from environment variables.

Uses pydantic-settings for type-safe configuration with .env file support.
A ``Settings`` instance is built once at startup and handed to each route
through ``app.state.settings``.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Global application settings."""

    # App
    APP_NAME: str = "InfoHub"
    HOST: str = "0.0.0.0"
    PORT: int = 3001
    LOG_LEVEL: str = "INFO"

    # Weather (OpenWeatherMap)
    OPENWEATHER_API_KEY: str = ""
    OPENWEATHER_API_URL: str = "https://api.openweathermap.org/data/2.5/weather"

    # Currency
    EXCHANGE_RATE_API_KEY: str = ""
    EXCHANGE_RATE_API_URL: str = "https://v6.exchangerate-api.com/v6"
    EXCHANGE_RATE_HOST_URL: str = "https://api.exchangerate.host/latest"

    # Quotes
    QUOTE_API_URL: str = ""
    QUOTABLE_API_URL: str = ""
    QUOTE_TIMEOUT_SECONDS: float = 5.0

    # None = no caller-imposed timeout on weather/currency calls
    UPSTREAM_TIMEOUT_SECONDS: float | None = None

    # CORS
    CORS_ORIGINS: list[str] = ["*"]

    # Client shell
    INFOHUB_API_URL: str = "http://localhost:3001"
    POLL_INTERVAL_SECONDS: float = 10.0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @property
    def quote_api_url(self) -> str:
        """External quote endpoint, preferring QUOTE_API_URL."""
        return self.QUOTE_API_URL or self.QUOTABLE_API_URL

    @property
    def open_weather_key_present(self) -> bool:
        return bool(self.OPENWEATHER_API_KEY)

    @property
    def exchange_rate_key_present(self) -> bool:
        return bool(self.EXCHANGE_RATE_API_KEY)

    @property
    def quote_api_url_present(self) -> bool:
        return bool(self.quote_api_url)


settings = Settings()
