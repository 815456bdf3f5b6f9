"""Top-level AppConfig aggregate — the root configuration object."""

from pydantic import BaseModel, Field

from zhiji.config.domain.llm import LlmConfig
from zhiji.config.domain.models import ModelsConfig, ModelTier
from zhiji.config.domain.scoring import ScoringConfig
from zhiji.config.domain.server import ServerConfig, StorageConfig


class AppConfig(BaseModel, frozen=True):
    """Root configuration aggregate for a zhiji deployment."""

    name: str = Field(min_length=1)
    version: str = Field(min_length=1)
    models: ModelsConfig
    llm: LlmConfig = LlmConfig()
    scoring: ScoringConfig = ScoringConfig()
    server: ServerConfig = ServerConfig()
    storage: StorageConfig = StorageConfig()


# Used when no config file is supplied. Tiers mirror the choices offered by
# the submission form; DeepSeek reads the shared llm.api_key_env credential.
DEFAULT_CONFIG = AppConfig(
    name="zhiji",
    version="1.0.0",
    models=ModelsConfig(
        default="gpt-5",
        tiers={
            "gpt-5": ModelTier(
                model="openai/gpt-5",
                price_usd=0.048,
                label="GPT-5",
                api_key_env="OPENAI_API_KEY",
            ),
            "claude-4.1-opus": ModelTier(
                model="anthropic/claude-opus-4-1",
                price_usd=0.09,
                label="Claude 4.1 Opus",
                api_key_env="ANTHROPIC_API_KEY",
            ),
            "deepseek-3.1": ModelTier(
                model="deepseek/deepseek-chat",
                price_usd=0.002,
                label="DeepSeek 3.1",
            ),
            "qwen3": ModelTier(
                model="dashscope/qwen3-max",
                price_usd=0.003,
                label="Qwen3",
                api_key_env="DASHSCOPE_API_KEY",
            ),
        },
    ),
)
