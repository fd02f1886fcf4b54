from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class LlmConfig(BaseSettings):
    """Configuration settings for the chat completion service.

    The API key is optional at load time so the process can start without
    it; requests fail with a configuration error until it is provided.
    """

    # FIREWORK_API_KEY is the name used by earlier deployments.
    api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("FIREWORKS_API_KEY", "FIREWORK_API_KEY"),
    )
    api_url: str = Field(
        "https://api.fireworks.ai/inference/v1/chat/completions",
        alias="FIREWORKS_API_URL",
    )
    model: str = Field("accounts/fireworks/models/deepseek-v3", alias="FIREWORKS_MODEL")
    timeout: float = Field(60.0, alias="FIREWORKS_TIMEOUT")

    @field_validator("api_key")
    def strip_api_key(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None

    @field_validator("timeout")
    def validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("FIREWORKS_TIMEOUT must be positive")
        return value

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)


@lru_cache()
def get_llm_config() -> LlmConfig:
    """Return a cached language model configuration."""

    return LlmConfig()
