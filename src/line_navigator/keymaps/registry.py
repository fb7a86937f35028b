"""Registry of named keymaps and their bindings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional

from line_navigator.runtime.telemetry import span

from .models import Binding


@dataclass(slots=True)
class RegistryStats:
    binding_count: int
    keymaps: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Raised when a new binding collides with one already in its keymap."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        conflicts_tuple = tuple(conflicts)
        message = (
            f"Binding '{binding.id}' conflicts with {[b.id for b in conflicts_tuple]}"
        )
        super().__init__(message)
        self.binding = binding
        self.conflicts = conflicts_tuple


class KeymapRegistry:
    """Owns bindings grouped into an ordered stack of named keymaps.

    Keymaps added later sit on top of the stack and win during resolution.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._bindings: Dict[str, Binding] = {}
        self._keymaps: Dict[str, Dict[str, set[str]]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def keymaps(self) -> tuple[str, ...]:
        """Keymap names from top of the stack to bottom."""

        return tuple(reversed(self._keymaps))

    def has_keymap(self, name: str) -> bool:
        return name in self._keymaps

    def get_binding(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def add_keymap(self, name: str, bindings: Iterable[Binding] = ()) -> None:
        """Push ``name`` on top of the stack and register ``bindings`` in it."""

        with span(
            "keymaps::add_keymap",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"keymap": name},
        ):
            if name in self._keymaps:
                raise ValueError(f"Keymap '{name}' already registered")
            self._keymaps[name] = {}
            self._touch()
            try:
                for binding in bindings:
                    if binding.keymap != name:
                        raise ValueError(
                            f"Binding '{binding.id}' targets keymap "
                            f"'{binding.keymap}', not '{name}'"
                        )
                    self.register_binding(binding)
            except Exception:
                self.remove_keymap(name)
                raise

    def remove_keymap(self, name: str) -> tuple[Binding, ...]:
        with span(
            "keymaps::remove_keymap",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"keymap": name},
        ):
            index = self._keymaps.pop(name, None)
            if index is None:
                return ()
            removed = tuple(
                self._bindings.pop(binding_id)
                for bucket in index.values()
                for binding_id in sorted(bucket)
            )
            self._touch()
            return removed

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "keymap": binding.keymap},
        ) as handle:
            if binding.keymap not in self._keymaps:
                handle.add_metadata("missing_keymap", binding.keymap)
                raise KeyError(
                    f"Binding '{binding.id}' targets unknown keymap '{binding.keymap}'"
                )

            conflicts = self.detect_conflicts(binding)
            if conflicts and not replace:
                handle.add_metadata(
                    "conflicts", ",".join(conflict.id for conflict in conflicts)
                )
                raise KeymapConflictError(binding, conflicts)

            if replace:
                for conflict in conflicts:
                    self._drop(conflict)
                existing = self._bindings.get(binding.id)
                if existing:
                    self._drop(existing)
            elif binding.id in self._bindings:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            self._bindings[binding.id] = binding
            self._keymaps[binding.keymap].setdefault(binding.key_signature, set()).add(
                binding.id
            )
            self._touch()
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.get(binding_id)
        if binding is None:
            return None
        self._drop(binding)
        self._touch()
        return binding

    def iter_bindings(self, keymap: Optional[str] = None) -> Iterator[Binding]:
        names = self.keymaps() if keymap is None else (keymap,)
        for name in names:
            for bucket in self._keymaps.get(name, {}).values():
                for binding_id in sorted(bucket):
                    yield self._bindings[binding_id]

    def stats(self) -> RegistryStats:
        return RegistryStats(binding_count=len(self._bindings), keymaps=self.keymaps())

    def detect_conflicts(self, binding: Binding) -> list[Binding]:
        bucket = self._keymaps.get(binding.keymap, {}).get(binding.key_signature, set())
        return [
            self._bindings[match_id]
            for match_id in sorted(bucket)
            if match_id != binding.id
        ]

    def _drop(self, binding: Binding) -> None:
        self._bindings.pop(binding.id, None)
        signatures = self._keymaps.get(binding.keymap)
        if not signatures:
            return
        bucket = signatures.get(binding.key_signature)
        if bucket is None:
            return
        bucket.discard(binding.id)
        if not bucket:
            signatures.pop(binding.key_signature, None)

    def _touch(self) -> None:
        self._revision += 1


__all__ = ["KeymapConflictError", "KeymapRegistry", "RegistryStats"]
