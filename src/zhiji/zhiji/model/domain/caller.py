"""ModelCaller Protocol — structural interface for upstream LLM access."""

from typing import Any, Protocol

type RawResponse = dict[str, Any]


class ModelCaller(Protocol):
    """Sends one prompt to an evaluator model and returns its decoded JSON reply.

    Returns ``None`` when there is no usable answer: no credential, a network
    or HTTP failure, a timeout, or a reply that is not a JSON object.
    """

    async def call(self, prompt: str) -> RawResponse | None: ...
