"""CLI entrypoint for zhiji — typer app with serve, evaluate and show commands."""

import asyncio
import json
import random
import sys
from pathlib import Path

import structlog
import typer
from pydantic import ValidationError

from zhiji.config.domain.config import DEFAULT_CONFIG, AppConfig
from zhiji.config.infrastructure.observer import StructlogConfigObserver
from zhiji.config.infrastructure.yaml_loader import YamlConfigLoader
from zhiji.core.errors import ZhijiError
from zhiji.evaluation.application.pipeline import (
    TIMEOUT_GRACE_SECONDS,
    EvaluationPipeline,
)
from zhiji.evaluation.domain.fallback import FallbackEstimator
from zhiji.evaluation.domain.input import EvaluationInput
from zhiji.evaluation.domain.metrics import EvaluationMetrics
from zhiji.evaluation.domain.recommendation import recommend
from zhiji.evaluation.domain.result import EvaluationResult
from zhiji.evaluation.infrastructure.observer import StructlogEvaluationObserver
from zhiji.model.infrastructure.factory import LiteLLMModelCallerFactory
from zhiji.model.infrastructure.observer import StructlogModelObserver
from zhiji.storage.infrastructure.sqlite import SqliteEvaluationRepository

app = typer.Typer(add_completion=False)

_CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="Path to zhiji config YAML (built-in defaults if omitted)",
)
_LOG_FORMAT_OPTION = typer.Option(
    "console", "--log-format", help="Log format: 'console' or 'json'"
)


def configure_structlog(log_format: str) -> None:
    """Configure structlog based on the requested format. Logs go to stderr."""
    if log_format == "console":
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer()
    elif log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        typer.echo(f"Invalid log format: {log_format!r}. Must be 'console' or 'json'.")
        raise typer.Exit(code=1)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(0),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def _load_config(config_path: Path | None) -> AppConfig:
    if config_path is None:
        return DEFAULT_CONFIG
    loader = YamlConfigLoader(observer=StructlogConfigObserver())
    return loader.load(path=config_path)


# ---------------------------------------------------------------------------
# ANSI helpers
# ---------------------------------------------------------------------------
_RESET = "\033[0m"
_BOLD = "\033[1m"
_DIM = "\033[2m"
_CYAN = "\033[36m"
_YELLOW = "\033[33m"
_GREEN = "\033[32m"
_RED = "\033[31m"
_WHITE = "\033[97m"

_SUB_SCORES: list[tuple[str, str]] = [
    ("Clarity", "clarity_score"),
    ("Capability", "capability_score"),
    ("Objectivity", "objectivity_score"),
    ("Data", "data_score"),
    ("Tolerance", "tolerance_score"),
]


def _score_color(score: int) -> str:
    if score >= 85:
        return _GREEN
    if score >= 70:
        return _YELLOW
    return _RED


def _rule(width: int = 72, color: str = _DIM) -> None:
    typer.echo(f"{color}{'─' * width}{_RESET}")


def _bar(score: int, width: int = 30) -> str:
    filled = round(score * width / 100)
    return "█" * filled + "·" * (width - filled)


def _print_metrics(metrics: EvaluationMetrics) -> None:
    for label, attr in _SUB_SCORES:
        score: int = getattr(metrics, attr)
        color = _score_color(score)
        typer.echo(
            f"  {label:<12} {color}{score:>3}{_RESET}  {_DIM}{_bar(score)}{_RESET}"
        )

    typer.echo("")
    typer.echo(
        f"  {_DIM}Matrix{_RESET}       difficulty {_WHITE}{metrics.matrix_x}{_RESET}"
        f"  ·  value {_WHITE}{metrics.matrix_y}{_RESET}"
        f"  ·  zone {_CYAN}{_BOLD}{metrics.zone.value}{_RESET}"
    )

    sections = (("Suggestions", metrics.suggestions), ("Risks", metrics.risks))
    for title, items in sections:
        if not items:
            continue
        typer.echo("")
        typer.echo(f"{_CYAN}{_BOLD}  {title}{_RESET}")
        for item in items:
            typer.echo(f"  • {item}")

    if metrics.reasoning:
        typer.echo("")
        typer.echo(f"{_CYAN}{_BOLD}  Reasoning{_RESET}")
        typer.echo(f"  {metrics.reasoning}")


def _print_report(
    project_name: str, total_score: int, metrics: EvaluationMetrics, source: str
) -> None:
    color = _score_color(total_score)
    verdict = recommend(total_score).value.replace("_", " ")

    typer.echo("")
    _rule()
    typer.echo(f"{_CYAN}{_BOLD}  zhiji  ·  {project_name}{_RESET}")
    _rule()
    typer.echo(
        f"  {_DIM}Total{_RESET}        {color}{_BOLD}{total_score}{_RESET}"
        f"  {color}{verdict}{_RESET}  {_DIM}({source}){_RESET}"
    )
    typer.echo("")
    _print_metrics(metrics)
    _rule()
    typer.echo("")


async def _evaluate(
    config: AppConfig, evaluation_input: EvaluationInput
) -> EvaluationResult:
    factory = LiteLLMModelCallerFactory(
        config=config, observer=StructlogModelObserver()
    )
    pipeline = EvaluationPipeline(
        caller=factory.create(evaluation_input.model_id),
        estimator=FallbackEstimator(rng=random.Random()),
        observer=StructlogEvaluationObserver(),
        weights=config.scoring.weights,
        timeout_seconds=config.llm.timeout_seconds + TIMEOUT_GRACE_SECONDS,
    )
    return await pipeline.run(evaluation_input)


@app.command()
def serve(
    config_path: Path | None = _CONFIG_OPTION,
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", help="Bind port"),
    log_format: str = _LOG_FORMAT_OPTION,
) -> None:
    """Run the HTTP API."""
    import uvicorn

    from zhiji.api.app import create_app

    configure_structlog(log_format=log_format)
    try:
        config = _load_config(config_path)
        repository = SqliteEvaluationRepository(path=config.storage.path)
    except ZhijiError as exc:
        typer.echo(str(exc))
        raise typer.Exit(code=1) from exc

    api = create_app(
        config=config,
        repository=repository,
        caller_factory=LiteLLMModelCallerFactory(
            config=config, observer=StructlogModelObserver()
        ),
        observer=StructlogEvaluationObserver(),
    )
    uvicorn.run(
        api,
        host=host or config.server.host,
        port=port or config.server.port,
        log_config=None,
    )


@app.command()
def evaluate(
    project_name: str = typer.Option(..., "--name", "-n", help="Project name"),
    description: str = typer.Option(
        ..., "--description", "-d", help="Project description"
    ),
    target_users: str | None = typer.Option(
        None, "--target-users", help="Intended users"
    ),
    features: list[str] = typer.Option(
        [], "--feature", "-f", help="Key feature (repeatable)"
    ),
    constraints: list[str] = typer.Option(
        [], "--constraint", help="Technical constraint (repeatable)"
    ),
    model_id: str | None = typer.Option(None, "--model", "-m", help="Model tier id"),
    config_path: Path | None = _CONFIG_OPTION,
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    log_format: str = _LOG_FORMAT_OPTION,
) -> None:
    """Evaluate one project without persisting it."""
    configure_structlog(log_format=log_format)
    try:
        config = _load_config(config_path)
        evaluation_input = EvaluationInput(
            project_name=project_name,
            description=description,
            target_users=target_users,
            features=features,
            constraints=constraints,
            model_id=model_id or config.models.default,
        )
        result = asyncio.run(
            _evaluate(config=config, evaluation_input=evaluation_input)
        )
    except ValidationError as exc:
        typer.echo(f"Invalid project description: {exc}")
        sys.exit(1)
    except KeyboardInterrupt:
        typer.echo("Evaluation interrupted.")
        sys.exit(1)
    except ZhijiError as exc:
        typer.echo(str(exc))
        sys.exit(1)

    if as_json:
        typer.echo(json.dumps(result.to_wire(), indent=2, ensure_ascii=False))
        return
    _print_report(
        project_name=project_name,
        total_score=result.total_score,
        metrics=result.metrics,
        source=result.source.value,
    )


@app.command()
def show(
    evaluation_id: str = typer.Argument(..., help="Stored evaluation id"),
    config_path: Path | None = _CONFIG_OPTION,
    as_json: bool = typer.Option(False, "--json", help="Print the record as JSON"),
    log_format: str = _LOG_FORMAT_OPTION,
) -> None:
    """Print a stored evaluation."""
    configure_structlog(log_format=log_format)
    try:
        config = _load_config(config_path)
        repository = SqliteEvaluationRepository(path=config.storage.path)
        record = repository.get(evaluation_id)
    except ZhijiError as exc:
        typer.echo(str(exc))
        raise typer.Exit(code=1) from exc

    if record is None:
        typer.echo(f"Evaluation not found: {evaluation_id}")
        raise typer.Exit(code=1)

    if as_json:
        payload = record.model_dump(mode="json", by_alias=True)
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return
    if record.metrics is None or record.total_score is None or record.source is None:
        typer.echo(f"{record.project_name}: {record.status.value}")
        return
    _print_report(
        project_name=record.project_name,
        total_score=record.total_score,
        metrics=record.metrics,
        source=record.source.value,
    )


if __name__ == "__main__":
    app()
