"""Feature configuration for the line navigator."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from types import MappingProxyType
from typing import Any, Mapping, Optional

from line_navigator.runtime.telemetry import env, env_flag

DEFAULT_KEY_BINDINGS: Mapping[str, str] = MappingProxyType(
    {
        "scroll_line_down": "ctrl+down",
        "scroll_line_up": "ctrl+up",
    }
)


class ConfigError(ValueError):
    """Raised for malformed configuration values."""


@dataclass(frozen=True, slots=True)
class NavigatorConfig:
    """Knobs for the navigator feature and its scans."""

    enabled: bool = True
    key_bindings: Mapping[str, str] = field(
        default_factory=lambda: dict(DEFAULT_KEY_BINDINGS)
    )
    override_word_commands: bool = True
    # Forward word runs end once a blank line / line end was crossed first.
    empty_ends_word_run: bool = True
    max_scan_steps: Optional[int] = None
    scroll_margin: int = 3

    def __post_init__(self) -> None:
        if self.max_scan_steps is not None and self.max_scan_steps <= 0:
            raise ConfigError("max_scan_steps must be positive")
        if self.scroll_margin < 0:
            raise ConfigError("scroll_margin cannot be negative")
        for command, chord in self.key_bindings.items():
            if not command or not str(chord).strip():
                raise ConfigError(f"Invalid key binding {command!r} -> {chord!r}")
        object.__setattr__(
            self, "key_bindings", MappingProxyType(dict(self.key_bindings))
        )

    def with_bindings(self, **bindings: str) -> "NavigatorConfig":
        merged = {**self.key_bindings, **bindings}
        return replace(self, key_bindings=merged)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "NavigatorConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {unknown}")
        return cls(**dict(data))

    @classmethod
    def from_env(cls) -> "NavigatorConfig":
        """Build a config from ``LINE_NAVIGATOR_*`` environment variables.

        ``KEY_<COMMAND>`` variables (e.g. ``LINE_NAVIGATOR_KEY_SCROLL_LINE_UP``)
        rebind individual commands of the navigator keymap.
        """

        defaults = cls()
        bindings = dict(defaults.key_bindings)
        for command in DEFAULT_KEY_BINDINGS:
            chord = env(f"KEY_{command.upper()}")
            if chord:
                bindings[command] = chord.strip()

        return cls(
            enabled=env_flag("ENABLED", defaults.enabled),
            key_bindings=bindings,
            override_word_commands=env_flag(
                "OVERRIDE_WORD_COMMANDS", defaults.override_word_commands
            ),
            empty_ends_word_run=env_flag(
                "EMPTY_ENDS_WORD_RUN", defaults.empty_ends_word_run
            ),
            max_scan_steps=_env_int("MAX_SCAN_STEPS", defaults.max_scan_steps),
            scroll_margin=_env_int("SCROLL_MARGIN", defaults.scroll_margin) or 0,
        )


def _env_int(name: str, fallback: Optional[int]) -> Optional[int]:
    raw = env(name)
    if raw is None or not raw.strip():
        return fallback
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"LINE_NAVIGATOR_{name} must be an integer") from exc


DEFAULT_CONFIG = NavigatorConfig()

__all__ = ["ConfigError", "DEFAULT_CONFIG", "DEFAULT_KEY_BINDINGS", "NavigatorConfig"]
