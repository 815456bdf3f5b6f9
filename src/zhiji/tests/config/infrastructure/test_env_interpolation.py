"""Tests for ${ENV_VAR} interpolation of raw config data."""

import pytest

from zhiji.config.infrastructure.env_interpolation import (
    collect_missing_vars,
    interpolate,
)


class TestCollectMissingVars:
    def test_set_var_not_reported(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ZHIJI_SET", "value")
        assert collect_missing_vars({"key": "${ZHIJI_SET}"}) == []

    def test_unset_var_reported(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("ZHIJI_UNSET", raising=False)
        assert collect_missing_vars({"key": "${ZHIJI_UNSET}"}) == ["ZHIJI_UNSET"]

    def test_var_with_default_not_reported(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("ZHIJI_UNSET", raising=False)
        assert collect_missing_vars({"key": "${ZHIJI_UNSET:-fallback}"}) == []

    def test_all_missing_vars_collected_across_nesting(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("ZHIJI_A", raising=False)
        monkeypatch.delenv("ZHIJI_B", raising=False)
        data = {"outer": {"inner": ["${ZHIJI_A}", "x-${ZHIJI_B}-y"]}}
        assert collect_missing_vars(data) == ["ZHIJI_A", "ZHIJI_B"]

    def test_repeated_var_reported_once(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("ZHIJI_A", raising=False)
        assert collect_missing_vars(["${ZHIJI_A}", "${ZHIJI_A}"]) == ["ZHIJI_A"]

    def test_non_string_scalars_ignored(self) -> None:
        assert collect_missing_vars({"port": 8787, "debug": True, "x": None}) == []


class TestInterpolate:
    def test_substitutes_set_var(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ZHIJI_HOST", "example.org")
        assert interpolate("https://${ZHIJI_HOST}/api") == "https://example.org/api"

    def test_env_value_wins_over_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ZHIJI_HOST", "example.org")
        assert interpolate("${ZHIJI_HOST:-localhost}") == "example.org"

    def test_default_used_when_unset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("ZHIJI_HOST", raising=False)
        assert interpolate("${ZHIJI_HOST:-localhost}") == "localhost"

    def test_empty_default_allowed(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("ZHIJI_HOST", raising=False)
        assert interpolate("${ZHIJI_HOST:-}") == ""

    def test_recurses_into_lists_and_dicts(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("ZHIJI_ORIGIN", "https://zhiji.example")
        data = {"server": {"allowed_origins": ["${ZHIJI_ORIGIN}"], "port": 9000}}
        assert interpolate(data) == {
            "server": {"allowed_origins": ["https://zhiji.example"], "port": 9000}
        }

    def test_text_without_references_unchanged(self) -> None:
        assert interpolate("plain $text {braces}") == "plain $text {braces}"
