"""ModelCallerFactory Protocol — structural interface for constructing ModelCaller instances."""

from typing import Protocol

from zhiji.model.domain.caller import ModelCaller


class ModelCallerFactory(Protocol):
    """Constructs a ModelCaller for the model tier named by a request's model id."""

    def create(self, model_id: str) -> ModelCaller: ...
