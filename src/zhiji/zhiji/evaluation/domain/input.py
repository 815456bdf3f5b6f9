"""EvaluationInput — one user's description of a proposed AI-agent project."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class EvaluationInput(BaseModel):
    """Immutable project description consumed by the evaluation pipeline.

    Wire names are camelCase (``projectName``, ``targetUsers``, ``modelId``);
    snake_case names are accepted when constructing in Python.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        protected_namespaces=(),
    )

    project_name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    target_users: str | None = None
    features: list[str] = Field(default_factory=list)
    constraints: list[str] = Field(default_factory=list)
    model_id: str = Field(min_length=1)
