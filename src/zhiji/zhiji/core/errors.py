"""Base exception class for all zhiji-specific errors."""


class ZhijiError(Exception):
    """Base class for all zhiji errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
