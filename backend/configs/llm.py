"""
Chat model configuration settings.

Holds the completion model identity and the token window the context
assembler budgets against.

Dependencies: pydantic, pydantic_settings
System role: LLM configuration for answer generation
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    """Completion model and context window configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LLM_",
        case_sensitive=False,
        extra="ignore",
    )

    model_id: str = Field(default="gemini-2.5-flash", description="Google Gemini chat model ID")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0, description="Sampling temperature")
    max_output_tokens: int | None = Field(
        default=None,
        description="Upper bound on generated tokens (None for provider default)",
    )

    model_window: int = Field(
        default=128000,
        description="Model context window in estimated tokens",
    )
    response_reserve: int = Field(
        default=1000,
        description="Tokens held back from the window for the model's answer",
    )
