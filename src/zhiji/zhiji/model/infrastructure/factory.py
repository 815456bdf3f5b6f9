"""LiteLLMModelCallerFactory — constructs LiteLLMModelCaller instances per request."""

import os
from collections.abc import Mapping

import litellm

from zhiji.config.domain.config import AppConfig
from zhiji.config.domain.models import ModelTier
from zhiji.model.domain.caller import ModelCaller
from zhiji.model.domain.observer import ModelObserver
from zhiji.model.infrastructure.litellm import LiteLLMModelCaller


class LiteLLMModelCallerFactory:
    """Resolves a public model id to its configured tier and builds a caller.

    Unknown model ids resolve to the configured default tier. Credentials are
    looked up in ``environ`` (the process environment unless overridden) each
    time a caller is created.
    """

    def __init__(
        self,
        config: AppConfig,
        observer: ModelObserver,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        litellm.suppress_debug_info = True
        # Providers without JSON mode silently ignore response_format.
        litellm.drop_params = True
        self._config = config
        self._observer = observer
        self._environ = environ if environ is not None else os.environ

    def resolve(self, model_id: str) -> tuple[str, ModelTier]:
        """Return the (model id, tier) pair that will serve *model_id*."""
        tiers = self._config.models.tiers
        if model_id in tiers:
            return model_id, tiers[model_id]

        default_id = self._config.models.default
        self._observer.model_tier_unknown(
            model_id=model_id, fallback_model_id=default_id
        )
        return default_id, tiers[default_id]

    def create(self, model_id: str) -> ModelCaller:
        """Construct a new LiteLLMModelCaller for the tier named by *model_id*."""
        resolved_id, tier = self.resolve(model_id)
        key_env = tier.api_key_env or self._config.llm.api_key_env
        return LiteLLMModelCaller(
            model_id=resolved_id,
            tier=tier,
            llm=self._config.llm,
            api_key=self._environ.get(key_env) or None,
            observer=self._observer,
        )
