from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration using pydantic-settings."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False
    )

    # Store
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis Stack connection URL",
    )
    key_prefix: str = Field(
        default="bites", description="Namespace prepended to every store key"
    )

    # Duplicate detection
    bloom_error_rate: float = Field(
        default=0.001,
        gt=0.0,
        lt=1.0,
        description="Target false-positive rate of the duplicate filter",
    )
    bloom_capacity: int = Field(
        default=1_000_000, ge=1, description="Expected number of restaurants"
    )

    # Weather provider
    weather_api_url: str = Field(
        default="https://api.openweathermap.org/data/2.5/weather",
        description="Current-weather endpoint",
    )
    weather_api_key: str = Field(default="", description="Weather provider API key")
    weather_cache_ttl: int = Field(
        default=60, ge=1, description="Seconds a weather payload stays cached"
    )
    weather_timeout: float = Field(
        default=10.0, gt=0.0, description="Weather provider timeout in seconds"
    )

    # Pagination
    default_page_size: int = Field(default=10, ge=1, le=100)
    max_page_size: int = Field(default=100, ge=1)

    # Application
    app_env: str = Field(
        default="development", description="Environment (development, production)"
    )
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Root log level")
    port: int = Field(default=3000, description="Listening port")
    allowed_origins: str = Field(
        default="http://localhost:3000,http://127.0.0.1:3000",
        description="Comma-separated CORS allowed origins",
    )

    @property
    def cors_origins(self) -> list[str]:
        """Parse allowed origins into a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",")]


# Global settings instance
settings = Settings()
