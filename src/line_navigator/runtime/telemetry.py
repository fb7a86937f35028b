"""telelog wiring shared by every line_navigator module.

Callers use four functions:

``configure(...)`` -- pick a preset or hand over a ``telelog.Config``
``get_logger(name)`` -- cached logger bound to the active config
``record_event(name, ...)`` -- one structured event at a given level
``span(name, ...)`` -- profiled block, optionally tracked as a component

Settings come from ``LINE_NAVIGATOR_*`` environment variables; ``env`` and
``env_flag`` read them for the rest of the package too.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import (
    Any,
    Callable,
    Dict,
    Iterator,
    List,
    MutableMapping,
    Optional,
    Tuple,
    cast,
)

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "LINE_NAVIGATOR_"
TRUTHY = frozenset({"1", "true", "yes", "on"})

# Each preset is a list of ``telelog.Config`` builder calls.
PRESETS: Dict[str, List[Tuple[str, Any]]] = {
    "development": [
        ("with_min_level", "DEBUG"),
        ("with_console_output", True),
        ("with_colored_output", True),
    ],
    "production": [
        ("with_min_level", "INFO"),
        ("with_console_output", False),
        ("with_buffering", True),
    ],
    "quiet": [
        ("with_min_level", "ERROR"),
        ("with_console_output", False),
    ],
}

_loggers: MutableMapping[str, Any] = {}
_active: Optional[Any] = None


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(ENV_PREFIX + name, default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.strip().lower() in TRUTHY


def default_logger_name() -> str:
    return env("LOGGER") or "line_navigator"


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _fields(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _text(value)) for key, value in data.items()]


def _build(calls: List[Tuple[str, Any]]) -> Any:
    config = tl.Config()
    for method, value in calls:
        getattr(config, method)(value)
    return config


def _preset_calls(preset: str) -> List[Tuple[str, Any]]:
    try:
        calls = list(PRESETS[preset.lower()])
    except KeyError:
        raise ValueError(
            f"Unknown preset '{preset}' (expected one of {sorted(PRESETS)})"
        ) from None
    if preset.lower() == "production":
        calls.append(("with_file_output", env("LOG_FILE") or "line_navigator.log"))
    return calls


def _env_calls() -> List[Tuple[str, Any]]:
    calls: List[Tuple[str, Any]] = [
        ("with_min_level", (env("LOG_LEVEL") or "WARNING").upper())
    ]
    console = not env_flag("DISABLE_CONSOLE", False)
    calls.append(("with_console_output", console))
    if console:
        calls.append(("with_colored_output", not env_flag("NO_COLOR", False)))
    if env_flag("LOG_JSON", False):
        calls.append(("with_json_format", True))
    log_file = env("LOG_FILE")
    if log_file:
        calls.append(("with_file_output", log_file))
    if env_flag("LOG_BUFFERED", False):
        calls.append(("with_buffering", True))
        calls.append(("with_buffer_size", int(env("LOG_BUFFER_SIZE") or "2048")))
    return calls


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Install a new telelog configuration and drop cached loggers.

    With neither argument the configuration is rebuilt from the environment.
    ``config`` and ``preset`` cannot be combined.
    """

    global _active
    if config is not None and preset:
        raise ValueError("Pass either `config` or `preset`, not both.")

    if preset:
        config = _build(_preset_calls(preset))
    elif config is None:
        config = _build(_env_calls())

    _active = config
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    if _active is None:
        configure()
    logger_name = name or default_logger_name()
    log = _loggers.get(logger_name)
    if log is None:
        log = _loggers[logger_name] = tl.Logger.with_config(logger_name, _active)
    return log


def _emitter(log: Any, level: str) -> Tuple[Callable[..., None], bool]:
    """Logger method for ``level`` and whether it takes key/value pairs."""

    name = str(level).lower()
    structured = getattr(log, f"{name}_with", None)
    if structured is not None:
        return structured, True
    plain = getattr(log, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return plain, False


def _emit(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    method, structured = _emitter(log, level)
    if structured:
        method(message, _fields(payload))
    else:
        method(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    """Yielded by ``span``; collects metadata reported if the block fails."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload["reason"] = reason
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def _logger_context(log: Any, values: Dict[str, str]) -> Iterator[None]:
    for key, value in values.items():
        log.add_context(key, value)
    try:
        yield
    finally:
        for key in values:
            log.remove_context(key)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block under ``name``.

    ``component=True`` tracks the block as component ``name``; a string names
    the component explicitly. ``metadata`` is attached to the logger context
    while the block runs. Exceptions are reported through ``SpanHandle.fail``
    and re-raised.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else component or None
    context = {key: _text(value) for key, value in (metadata or {}).items()}
    handle = SpanHandle(
        logger=log,
        span_name=name,
        component_name=component_name,
        metadata=dict(context),
    )

    with ExitStack() as stack:
        stack.enter_context(_logger_context(log, context))
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


__all__ = [
    "PRESETS",
    "SpanHandle",
    "configure",
    "default_logger_name",
    "env",
    "env_flag",
    "get_logger",
    "record_event",
    "span",
]
