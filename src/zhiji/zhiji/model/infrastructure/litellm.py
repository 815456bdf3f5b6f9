"""LiteLLMModelCaller — ModelCaller implementation using LiteLLM chat completions."""

import json
import re
import time

import litellm

from zhiji.config.domain.llm import LlmConfig
from zhiji.config.domain.models import ModelTier
from zhiji.evaluation.domain.prompt import SYSTEM_PROMPT
from zhiji.model.domain.caller import RawResponse
from zhiji.model.domain.observer import ModelObserver

_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


def decode_json_object(content: str | None) -> RawResponse | None:
    """Decode *content* as a JSON object, tolerating a surrounding Markdown fence.

    Returns None for empty content, invalid JSON, or JSON that is not an object.
    """
    if not content:
        return None
    text = content.strip()
    fenced = _CODE_FENCE.match(text)
    if fenced:
        text = fenced.group(1)
    try:
        decoded = json.loads(text)
    except json.JSONDecodeError:
        return None
    return decoded if isinstance(decoded, dict) else None


class LiteLLMModelCaller:
    """ModelCaller that sends the prompt to one configured model tier via LiteLLM.

    One instance is constructed per request. The public ``model_id`` is
    injected at construction time so that observer events carry it without
    polluting the ``call()`` signature. Every failure is reported to the
    observer and returned as None; nothing is raised to the caller.
    """

    def __init__(
        self,
        model_id: str,
        tier: ModelTier,
        llm: LlmConfig,
        api_key: str | None,
        observer: ModelObserver,
    ) -> None:
        self._model_id = model_id
        self._tier = tier
        self._llm = llm
        self._api_key = api_key
        self._observer = observer

    async def call(self, prompt: str) -> RawResponse | None:
        if not self._api_key:
            self._observer.model_call_skipped(
                model_id=self._model_id, reason="no API key configured"
            )
            return None

        self._observer.model_call_started(
            model_id=self._model_id, model=self._tier.model
        )

        start = time.monotonic()
        try:
            response = await litellm.acompletion(
                model=self._tier.model,
                api_key=self._api_key,
                api_base=self._llm.api_base,
                temperature=self._llm.temperature,
                max_tokens=self._llm.max_tokens,
                timeout=self._llm.timeout_seconds,
                response_format={"type": "json_object"},
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
            )
            content: str | None = response.choices[0].message.content
        except Exception as exc:  # noqa: BLE001
            self._observer.model_call_failed(model_id=self._model_id, reason=str(exc))
            return None

        duration_ms = int((time.monotonic() - start) * 1000)

        payload = decode_json_object(content)
        if payload is None:
            self._observer.model_call_failed(
                model_id=self._model_id,
                reason="Failed to parse model reply as a JSON object",
            )
            return None

        self._observer.model_call_completed(
            model_id=self._model_id, duration_ms=duration_ms
        )
        return payload
