"""EvaluationPipeline — orchestrates prompt, model call, parse-or-fallback and scoring."""

import asyncio
import time
from collections.abc import Callable

import structlog

from zhiji.config.domain.scoring import DEFAULT_WEIGHTS, ScoreWeights
from zhiji.evaluation.domain.fallback import FallbackEstimator
from zhiji.evaluation.domain.input import EvaluationInput
from zhiji.evaluation.domain.metrics import EvaluationMetrics
from zhiji.evaluation.domain.observer import EvaluationObserver
from zhiji.evaluation.domain.parser import ParseFailure, parse_metrics
from zhiji.evaluation.domain.prompt import build_prompt
from zhiji.evaluation.domain.result import EvaluationResult, MetricsSource
from zhiji.evaluation.domain.scoring import aggregate
from zhiji.model.domain.caller import ModelCaller, RawResponse

DEFAULT_TIMEOUT_SECONDS = 60.0
# Added to the LLM client timeout so the pipeline bound only trips when the
# client fails to enforce its own.
TIMEOUT_GRACE_SECONDS = 5.0

log = structlog.get_logger()


class EvaluationPipeline:
    """Evaluates one project description per ``run`` call.

    The pipeline never fails outward: an unavailable model, a timeout, an
    exception from the caller or an unusable reply all degrade to the
    FallbackEstimator, so every run yields a complete EvaluationResult. There
    is no retry; the model gets exactly one attempt bounded by
    ``timeout_seconds``. An observer that raises is logged and otherwise
    ignored.
    """

    def __init__(
        self,
        caller: ModelCaller,
        estimator: FallbackEstimator,
        observer: EvaluationObserver,
        weights: ScoreWeights = DEFAULT_WEIGHTS,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._caller = caller
        self._estimator = estimator
        self._observer = observer
        self._weights = weights
        self._timeout_seconds = timeout_seconds

    async def run(self, evaluation_input: EvaluationInput) -> EvaluationResult:
        self._notify(
            self._observer.evaluation_started,
            project_name=evaluation_input.project_name,
            model_id=evaluation_input.model_id,
        )
        start = time.monotonic()

        prompt = build_prompt(evaluation_input)
        raw = await self._call_model(evaluation_input=evaluation_input, prompt=prompt)
        metrics, source = self._resolve_metrics(
            evaluation_input=evaluation_input, raw=raw
        )
        total_score = aggregate(metrics, self._weights)

        self._notify(
            self._observer.evaluation_completed,
            project_name=evaluation_input.project_name,
            total_score=total_score,
            source=source.value,
            duration_ms=int((time.monotonic() - start) * 1000),
        )
        return EvaluationResult(metrics=metrics, total_score=total_score, source=source)

    async def _call_model(
        self, evaluation_input: EvaluationInput, prompt: str
    ) -> RawResponse | None:
        """Make the single model call; every failure mode collapses to None."""
        try:
            async with asyncio.timeout(self._timeout_seconds):
                raw = await self._caller.call(prompt)
        except TimeoutError:
            reason = f"model call timed out after {self._timeout_seconds}s"
        except Exception as exc:  # noqa: BLE001
            reason = f"model caller raised {type(exc).__name__}: {exc}"
        else:
            if raw is not None:
                return raw
            reason = "model caller returned no answer"

        self._notify(
            self._observer.evaluation_model_unavailable,
            project_name=evaluation_input.project_name,
            reason=reason,
        )
        return None

    def _resolve_metrics(
        self, evaluation_input: EvaluationInput, raw: RawResponse | None
    ) -> tuple[EvaluationMetrics, MetricsSource]:
        if raw is None:
            return self._estimator.estimate(evaluation_input), MetricsSource.FALLBACK

        match parse_metrics(raw):
            case ParseFailure(reason=reason):
                self._notify(
                    self._observer.evaluation_response_rejected,
                    project_name=evaluation_input.project_name,
                    reason=reason,
                )
                return (
                    self._estimator.estimate(evaluation_input),
                    MetricsSource.FALLBACK,
                )
            case EvaluationMetrics() as metrics:
                return metrics, MetricsSource.MODEL

    def _notify(self, event: Callable[..., None], **fields: object) -> None:
        try:
            event(**fields)
        except Exception as exc:  # noqa: BLE001
            log.warning(
                "evaluation.observer_failed",
                observer_event=getattr(event, "__name__", repr(event)),
                error=f"{type(exc).__name__}: {exc}",
            )
