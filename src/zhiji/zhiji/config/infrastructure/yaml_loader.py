"""YAML config loader — parses, interpolates env vars, validates, and emits observer events."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from zhiji.config.domain.config import AppConfig
from zhiji.config.domain.observer import ConfigObserver
from zhiji.config.infrastructure.env_interpolation import (
    collect_missing_vars,
    interpolate,
)
from zhiji.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
    MissingEnvVarsError,
)

# Above this the model's scores drift noticeably between identical submissions.
_STABLE_TEMPERATURE_LIMIT = 1.0


class YamlConfigLoader:
    """Loads, interpolates, validates, and returns an AppConfig from a YAML file."""

    def __init__(self, observer: ConfigObserver) -> None:
        self._observer = observer

    def load(self, path: Path) -> AppConfig:
        """
        Load, interpolate, validate, and return an AppConfig from a YAML file.

        Raises:
            ConfigLoadError: if the file is missing or is not valid YAML.
            MissingEnvVarsError: if any ${ENV_VAR} references are unset (all collected first).
            ConfigValidationError: if the schema is violated, the score weights do
                not sum to 1.00, or the default model id names no tier.
        """
        raw = _parse_yaml(path=path)
        _check_missing_env_vars(raw=raw)
        interpolated = interpolate(raw)
        cfg = _build_config(resolved=interpolated)
        _check_default_tier(cfg=cfg)
        _emit_warnings(cfg=cfg, observer=self._observer)
        self._observer.config_loaded(name=cfg.name, version=cfg.version)
        return cfg


def _parse_yaml(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except FileNotFoundError as exc:
        raise ConfigLoadError(path=path) from exc
    except yaml.YAMLError as exc:
        raise ConfigLoadError(path=path, reason="invalid YAML") from exc

    if not isinstance(raw, dict):
        raise ConfigLoadError(path=path, reason="top-level mapping expected")
    return raw


def _check_missing_env_vars(raw: Any) -> None:
    """Raise MissingEnvVarsError if any ${ENV_VAR} references in raw are unset."""
    missing = collect_missing_vars(raw)
    if missing:
        raise MissingEnvVarsError(missing)


def _build_config(resolved: Any) -> AppConfig:
    try:
        return AppConfig.model_validate(resolved)
    except ValidationError as exc:
        raise ConfigValidationError(str(exc)) from exc


def _check_default_tier(cfg: AppConfig) -> None:
    if cfg.models.default not in cfg.models.tiers:
        known = ", ".join(sorted(cfg.models.tiers))
        raise ConfigValidationError(
            f"default model '{cfg.models.default}' is not a configured tier"
            f" (known: {known})"
        )


def _emit_warnings(cfg: AppConfig, observer: ConfigObserver) -> None:
    if cfg.llm.temperature > _STABLE_TEMPERATURE_LIMIT:
        observer.config_temperature_warning(cfg.llm.temperature)
