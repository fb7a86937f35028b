"""Resolve key-token sequences against the keymap stack."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Optional, Sequence

from line_navigator.runtime.telemetry import span

from .models import Binding
from .registry import KeymapRegistry


@dataclass(slots=True)
class TrieNode:
    bindings: list[str] = field(default_factory=list)
    children: Dict[str, "TrieNode"] = field(default_factory=dict)

    def child(self, token: str) -> "TrieNode":
        return self.children.setdefault(token, TrieNode())


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Outcome of one resolution attempt."""

    status: Literal["match", "pending", "miss"]
    binding: Optional[Binding] = None
    consumed: int = 0
    next_expected: tuple[str, ...] = ()
    timeout_ms: Optional[int] = None


class KeymapResolver:
    """Walks one trie per keymap, top of the stack first.

    The first keymap with an exact match wins. If no keymap matches but some
    keymap has a longer sequence starting with the tokens, the result is
    ``pending``.
    """

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._cache: Dict[str, tuple[int, TrieNode]] = {}

    def resolve(self, tokens: Sequence[str]) -> ResolutionResult:
        normalized = tuple(tokens)
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"tokens": " ".join(normalized)},
        ) as handle:
            pending: list[TrieNode] = []
            for keymap in self._registry.keymaps():
                node = self._walk(self._trie(keymap), normalized)
                if node is None:
                    continue
                if node.bindings:
                    binding = self._best(node)
                    handle.add_metadata("status", "match")
                    handle.add_metadata("binding_id", binding.id)
                    return ResolutionResult(
                        status="match", binding=binding, consumed=len(normalized)
                    )
                if node.children:
                    pending.append(node)

            if pending:
                handle.add_metadata("status", "pending")
                next_tokens = sorted({t for node in pending for t in node.children})
                return ResolutionResult(
                    status="pending",
                    consumed=len(normalized),
                    next_expected=tuple(next_tokens),
                    timeout_ms=self._pending_timeout(pending),
                )

            handle.add_metadata("status", "miss")
            return ResolutionResult(status="miss")

    def reset(self) -> None:
        self._cache.clear()

    def _trie(self, keymap: str) -> TrieNode:
        revision = self._registry.revision()
        cached = self._cache.get(keymap)
        if cached and cached[0] == revision:
            return cached[1]

        root = TrieNode()
        for binding in self._registry.iter_bindings(keymap):
            node = root
            for token in binding.sequence.tokens:
                node = node.child(token)
            node.bindings.append(binding.id)
        self._cache[keymap] = (revision, root)
        return root

    @staticmethod
    def _walk(root: TrieNode, tokens: Sequence[str]) -> Optional[TrieNode]:
        node = root
        for token in tokens:
            child = node.children.get(token)
            if child is None:
                return None
            node = child
        return node

    def _best(self, node: TrieNode) -> Binding:
        candidates = [self._registry.get_binding(bid) for bid in node.bindings]
        candidates.sort(key=lambda binding: (-binding.priority, binding.id))
        return candidates[0]

    def _pending_timeout(self, nodes: list[TrieNode]) -> Optional[int]:
        timeouts: list[int] = []
        stack = [child for node in nodes for child in node.children.values()]
        while stack:
            current = stack.pop()
            for binding_id in current.bindings:
                binding = self._registry.get_binding(binding_id)
                timeouts.append(binding.sequence.timeout_ms)
            stack.extend(current.children.values())
        return min(timeouts) if timeouts else None


__all__ = ["KeymapResolver", "ResolutionResult"]
