"""Error types raised by storage infrastructure."""

from zhiji.core.errors import ZhijiError


class StorageError(ZhijiError):
    """Raised when an evaluation cannot be written to or read from the store."""

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        super().__init__(f"Failed to {operation}: {reason}")


class EvaluationNotFoundError(ZhijiError):
    """Raised when completing an evaluation id that was never created."""

    def __init__(self, evaluation_id: str) -> None:
        self.evaluation_id = evaluation_id
        super().__init__(f"Failed to find evaluation: {evaluation_id}")
