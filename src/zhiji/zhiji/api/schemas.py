"""Request models for the public HTTP API."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from zhiji.evaluation.domain.input import EvaluationInput


class EvaluationRequest(BaseModel):
    """Body of ``POST /api/evaluations``.

    Absent ``features``/``constraints`` become empty lists and an absent
    ``modelId`` becomes the configured default before the pipeline runs.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        protected_namespaces=(),
    )

    project_name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    target_users: str | None = None
    features: list[str] | None = None
    constraints: list[str] | None = None
    model_id: str | None = None

    def to_input(self, default_model_id: str) -> EvaluationInput:
        return EvaluationInput(
            project_name=self.project_name,
            description=self.description,
            target_users=self.target_users or None,
            features=self.features or [],
            constraints=self.constraints or [],
            model_id=self.model_id or default_model_id,
        )
