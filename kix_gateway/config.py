"""
KIX-AI-Gateway - Configuration Management
"""
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_PROMPT = """JSON input contains ticket header and articles.
Each article has a Body (message text) and SenderType (external or internal).

Summarize in the following format. Use max 2 sentences per article (not per person).
Allow ckeditor formatting.

Format:

Request:
Short summary of initial request.

Current Status:
Brief status of the ticket.

Communication History:
[Date] (external/internal): Summary

Potential Solution Approaches:
Possible solutions or next steps.
"""

REQUIRED_PARAMETERS = (
    "kix_api_url",
    "kix_api_user_name",
    "kix_api_user_pass",
    "azure_openai_endpoint",
    "azure_openai_api_key",
    "azure_openai_deployment_name",
)


class Settings(BaseSettings):
    """Application settings"""

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # KIX
    kix_api_url: str = Field(..., min_length=1)
    kix_api_user_name: str = Field(..., min_length=1)
    kix_api_user_pass: str = Field(..., min_length=1)
    kix_summary_field: str = "AI_Summary"
    kix_api_timeout: float = 30.0

    # Azure OpenAI
    azure_openai_endpoint: str = Field(..., min_length=1)
    azure_openai_api_key: str = Field(..., min_length=1)
    azure_openai_deployment_name: str = Field(..., min_length=1)
    azure_openai_api_version: str = "2024-10-21"
    azure_openai_temperature: float = Field(0.3, ge=0)
    azure_openai_prompt: str = DEFAULT_PROMPT
    azure_openai_max_payload_chars: Optional[int] = Field(None, gt=0)

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        frozen=True
    )

    @field_validator("kix_api_url", "azure_openai_endpoint")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


def missing_parameters(error: ValidationError) -> List[str]:
    """
    Names of the required environment variables a settings error complains about

    Args:
        error: ValidationError raised while building Settings

    Returns:
        Upper-case variable names, in declaration order
    """
    failing = {str(err["loc"][0]) for err in error.errors() if err.get("loc")}
    return [name.upper() for name in REQUIRED_PARAMETERS if name in failing]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
