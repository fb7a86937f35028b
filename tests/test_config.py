from __future__ import annotations

import pytest

from line_navigator.config import (
    DEFAULT_KEY_BINDINGS,
    ConfigError,
    NavigatorConfig,
)


def test_defaults() -> None:
    config = NavigatorConfig()

    assert config.enabled
    assert dict(config.key_bindings) == dict(DEFAULT_KEY_BINDINGS)
    assert config.override_word_commands
    assert config.empty_ends_word_run
    assert config.max_scan_steps is None
    assert config.scroll_margin == 3


def test_key_bindings_are_read_only() -> None:
    config = NavigatorConfig()

    with pytest.raises(TypeError):
        config.key_bindings["scroll_line_up"] = "k"  # type: ignore[index]


def test_with_bindings_merges() -> None:
    config = NavigatorConfig().with_bindings(scroll_line_up="alt+k")

    assert dict(config.key_bindings) == {
        "scroll_line_down": "ctrl+down",
        "scroll_line_up": "alt+k",
    }
    assert NavigatorConfig().key_bindings["scroll_line_up"] == "ctrl+up"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_scan_steps": 0},
        {"scroll_margin": -1},
        {"key_bindings": {"scroll_line_up": "  "}},
    ],
)
def test_invalid_values_raise(kwargs) -> None:
    with pytest.raises(ConfigError):
        NavigatorConfig(**kwargs)


def test_from_mapping_rejects_unknown_keys() -> None:
    with pytest.raises(ConfigError) as excinfo:
        NavigatorConfig.from_mapping({"enabled": False, "wrap": True})

    assert "wrap" in str(excinfo.value)


def test_from_mapping() -> None:
    config = NavigatorConfig.from_mapping({"enabled": False, "max_scan_steps": 20})

    assert not config.enabled
    assert config.max_scan_steps == 20


def test_from_env(monkeypatch) -> None:
    monkeypatch.setenv("LINE_NAVIGATOR_ENABLED", "no")
    monkeypatch.setenv("LINE_NAVIGATOR_KEY_SCROLL_LINE_UP", " alt+k ")
    monkeypatch.setenv("LINE_NAVIGATOR_EMPTY_ENDS_WORD_RUN", "false")
    monkeypatch.setenv("LINE_NAVIGATOR_MAX_SCAN_STEPS", "50")
    monkeypatch.setenv("LINE_NAVIGATOR_SCROLL_MARGIN", "1")

    config = NavigatorConfig.from_env()

    assert not config.enabled
    assert config.key_bindings["scroll_line_up"] == "alt+k"
    assert config.key_bindings["scroll_line_down"] == "ctrl+down"
    assert not config.empty_ends_word_run
    assert config.max_scan_steps == 50
    assert config.scroll_margin == 1


def test_from_env_defaults_when_unset(monkeypatch) -> None:
    for name in ("ENABLED", "MAX_SCAN_STEPS", "SCROLL_MARGIN", "KEY_SCROLL_LINE_UP"):
        monkeypatch.delenv(f"LINE_NAVIGATOR_{name}", raising=False)

    config = NavigatorConfig.from_env()

    assert config.enabled
    assert config.max_scan_steps is None
    assert config.scroll_margin == 3


def test_from_env_rejects_non_integer(monkeypatch) -> None:
    monkeypatch.setenv("LINE_NAVIGATOR_MAX_SCAN_STEPS", "lots")

    with pytest.raises(ConfigError):
        NavigatorConfig.from_env()
