"""Configuration management using pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from intent_bench.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Harness settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Chat completion oracle
    openrouter_api_key: str = Field(
        default="",
        description="Bearer credential for the chat completion endpoint",
    )
    openrouter_model: str = Field(
        default="openai/gpt-4o-mini",
        description="Model identifier sent with every chat request",
    )
    openrouter_url: str = Field(
        default="https://openrouter.ai/api/v1/chat/completions",
        description="Chat completion endpoint",
    )
    openrouter_referer: str = Field(
        default="https://example.com",
        description="Value of the HTTP-Referer header",
    )
    openrouter_title: str = Field(
        default="Intent Matching Benchmark",
        description="Value of the X-Title header",
    )
    chat_timeout_seconds: float = Field(
        default=45.0,
        gt=0,
        description="Client-side timeout per chat call",
    )
    chat_max_tokens: int = Field(
        default=8,
        ge=1,
        description="Output token cap; the answer is a bare integer",
    )
    chat_temperature: float = Field(
        default=0.0,
        ge=0.0,
        description="Sampling temperature (0 = deterministic)",
    )
    calls_per_sample: int = Field(
        default=2,
        ge=1,
        description="Independent oracle calls per sample (consistency probe)",
    )

    # Chat harness inputs
    pre_path: str = Field(
        default="intents_pre_loaded.csv",
        description="Pre-loaded intents CSV",
    )
    pos_path: str = Field(
        default="intents_pos_loaded.csv",
        description="Post-loaded intents CSV",
    )

    # Classification service oracle
    find_service_url: str = Field(
        default="http://localhost:16081/api/find-service",
        description="URL of the /api/find-service endpoint",
    )
    find_service_timeout_ms: int = Field(
        default=15000,
        gt=0,
        description="Timeout in milliseconds per classification request",
    )
    find_service_in: str = Field(
        default="assets/intents_pos_loaded.csv",
        description="Input CSV for the classification service harness",
    )
    find_service_out: str = Field(
        default="assets/found_services.csv",
        description="Result CSV written by the classification service harness",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_json: bool = Field(
        default=False,
        description="Emit JSON structured logs",
    )

    def require_api_key(self) -> str:
        """Return the chat credential or fail the run."""
        key = self.openrouter_api_key.strip()
        if not key:
            raise ConfigurationError("Set OPENROUTER_API_KEY in the environment")
        return key


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
