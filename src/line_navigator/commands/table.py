"""Named editor commands and reversible overrides of them."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Dict, Iterator, Mapping, Optional

from line_navigator.host import EditorHost
from line_navigator.runtime.telemetry import span

CommandHandler = Callable[[EditorHost], None]


@dataclass(frozen=True, slots=True)
class Command:
    """Callable plus the metadata shown in command listings."""

    name: str
    handler: CommandHandler
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Command name cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __call__(self, editor: EditorHost) -> None:
        self.handler(editor)


class CommandTable:
    """Mapping of command name to ``Command`` that a host dispatches through."""

    def __init__(self, commands: Optional[Mapping[str, Command]] = None) -> None:
        self._commands: Dict[str, Command] = dict(commands or {})

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __iter__(self) -> Iterator[str]:
        return iter(self._commands)

    def __len__(self) -> int:
        return len(self._commands)

    def get(self, name: str) -> Optional[Command]:
        return self._commands.get(name)

    def __getitem__(self, name: str) -> Command:
        try:
            return self._commands[name]
        except KeyError as exc:
            raise KeyError(f"Command '{name}' is not registered") from exc

    def register(self, command: Command, *, replace: bool = False) -> Command:
        if not replace and command.name in self._commands:
            raise ValueError(f"Command '{command.name}' already registered")
        self._commands[command.name] = command
        return command

    def unregister(self, name: str) -> Optional[Command]:
        return self._commands.pop(name, None)

    def execute(self, name: str, editor: EditorHost) -> None:
        command = self[name]
        with span(
            f"commands::{name}",
            logger_name="line_navigator.commands",
            component="commands",
        ):
            command(editor)

    def copy(self) -> "CommandTable":
        return CommandTable(self._commands)


class CommandOverrides:
    """A set of commands installed over a table, undone as a unit.

    ``install`` remembers what each name pointed at before (including "not
    registered") and ``uninstall`` puts exactly that back.
    """

    def __init__(self, commands: Mapping[str, Command]) -> None:
        self._commands = dict(commands)
        self._saved: Dict[str, Optional[Command]] = {}
        self._table: Optional[CommandTable] = None

    @property
    def installed(self) -> bool:
        return self._table is not None

    def names(self) -> tuple[str, ...]:
        return tuple(self._commands)

    def install(self, table: CommandTable) -> None:
        if self._table is not None:
            raise RuntimeError("Overrides are already installed")
        with span(
            "commands::install_overrides",
            logger_name="line_navigator.commands",
            component="commands",
            metadata={"commands": ",".join(self._commands)},
        ):
            self._saved = {name: table.get(name) for name in self._commands}
            for command in self._commands.values():
                table.register(command, replace=True)
            self._table = table

    def uninstall(self) -> None:
        table = self._table
        if table is None:
            return
        with span(
            "commands::uninstall_overrides",
            logger_name="line_navigator.commands",
            component="commands",
            metadata={"commands": ",".join(self._commands)},
        ):
            for name, previous in self._saved.items():
                if previous is None:
                    table.unregister(name)
                else:
                    table.register(previous, replace=True)
            self._saved = {}
            self._table = None


__all__ = ["Command", "CommandHandler", "CommandOverrides", "CommandTable"]
