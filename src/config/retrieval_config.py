from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class RetrievalConfig(BaseSettings):
    """Configuration settings for the document lookup service.

    Both the deployment token and the deployment identifier are optional.
    When either is missing, retrieval is skipped and chat requests are
    answered from the language model alone.
    """

    deployment_token: Optional[str] = Field(default=None, alias="ABACUS_DEPLOYMENT_TOKEN")
    deployment_id: Optional[str] = Field(default=None, alias="ABACUS_DEPLOYMENT_ID")
    api_url: str = Field(
        "https://api.abacus.ai/api/v0/lookup_matches",
        alias="ABACUS_API_URL",
    )
    timeout: float = Field(10.0, alias="ABACUS_TIMEOUT")

    @field_validator("deployment_token", "deployment_id")
    def strip_credentials(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None

    @field_validator("timeout")
    def validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("ABACUS_TIMEOUT must be positive")
        return value

    @property
    def is_configured(self) -> bool:
        return bool(self.deployment_token and self.deployment_id)

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)


@lru_cache()
def get_retrieval_config() -> RetrievalConfig:
    """Return a cached retrieval configuration."""

    return RetrievalConfig()
