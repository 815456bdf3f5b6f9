"""LLM connection configuration model."""

from pydantic import BaseModel, Field


class LlmConfig(BaseModel, frozen=True):
    """Settings shared by every model tier when calling the upstream LLM.

    The credential itself is never stored in config: ``api_key_env`` names the
    environment variable it is read from at wiring time.
    """

    api_key_env: str = Field(default="DEEPSEEK_API_KEY", min_length=1)
    api_base: str | None = None
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=2000, ge=1)
    timeout_seconds: float = Field(default=30.0, gt=0.0)
