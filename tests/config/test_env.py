from __future__ import annotations

import os

import pytest

from subsync.config import (
    ConfigurationError,
    MissingConfigurationError,
    optional_env_var,
    require_env_var,
    require_env_vars,
)


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_A", raising=False)
    monkeypatch.setenv("MISSING_B", "  ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert exc.value.names == ("MISSING_A", "MISSING_B")
    assert "MISSING_A, MISSING_B" in str(exc.value)
    assert isinstance(exc.value, ConfigurationError)


def test_require_env_var_handles_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    with pytest.raises(MissingConfigurationError):
        require_env_var("EXAMPLE_VAR")


def test_require_env_var_reads_single_value(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TEMP_VAR", "123")

    assert os.getenv("TEMP_VAR") == "123"
    assert require_env_var("TEMP_VAR") == "123"


def test_optional_env_var_falls_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OPTIONAL_VAR", raising=False)
    assert optional_env_var("OPTIONAL_VAR", "fallback") == "fallback"

    monkeypatch.setenv("OPTIONAL_VAR", "  ")
    assert optional_env_var("OPTIONAL_VAR") is None

    monkeypatch.setenv("OPTIONAL_VAR", " set ")
    assert optional_env_var("OPTIONAL_VAR", "fallback") == "set"
