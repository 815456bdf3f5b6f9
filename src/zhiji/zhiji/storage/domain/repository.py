"""EvaluationRepository Protocol — structural interface for evaluation persistence."""

from typing import Protocol

from zhiji.evaluation.domain.input import EvaluationInput
from zhiji.evaluation.domain.result import EvaluationResult
from zhiji.storage.domain.record import StoredEvaluation


class EvaluationRepository(Protocol):
    """Append-only store of submissions and their results.

    ``create`` records a submission as processing; ``complete`` attaches the
    one result produced for it and marks it completed. A submission whose
    result could not be stored is marked failed with ``fail``.
    """

    def create(self, evaluation_input: EvaluationInput, user_id: str) -> str: ...

    def complete(self, evaluation_id: str, result: EvaluationResult) -> None: ...

    def fail(self, evaluation_id: str) -> None: ...

    def get(self, evaluation_id: str) -> StoredEvaluation | None: ...

    def list_recent(self, limit: int = 10) -> list[StoredEvaluation]: ...

    def ping(self) -> bool: ...
