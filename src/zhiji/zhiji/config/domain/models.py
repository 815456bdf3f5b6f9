"""Model tier configuration — maps public model ids to LiteLLM models."""

from pydantic import BaseModel, Field

type ModelId = str


class ModelTier(BaseModel, frozen=True):
    """One selectable model. ``api_key_env`` overrides ``llm.api_key_env``."""

    model: str = Field(min_length=1)
    price_usd: float = Field(ge=0.0)
    label: str | None = None
    api_key_env: str | None = None


class ModelsConfig(BaseModel, frozen=True):
    """Selectable model tiers plus the id used when a request names none."""

    default: ModelId = Field(min_length=1)
    tiers: dict[ModelId, ModelTier] = Field(min_length=1)
