"""Prefix-trie automaton the translator walks one keystroke at a time."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Protocol, Union

from .models import KeyStroke, Remapping, coerce_key_strokes


class State(Protocol):
    """Walk position inside a keymap automaton."""

    def press(self, key: KeyStroke) -> Optional["Transition"]:
        ...


@dataclass(frozen=True, slots=True)
class Transition:
    """Edge taken on a keystroke.

    ``value`` is set when a mapping completes on this key, ``next_state``
    when longer mappings are still reachable. Both may be set at once.
    """

    value: Optional[Remapping] = None
    next_state: Optional[State] = None


@dataclass(slots=True)
class TrieNode:
    """Single trie node holding an optional remapping and child edges."""

    value: Optional[Remapping] = None
    children: Dict[KeyStroke, "TrieNode"] = field(default_factory=dict)

    def child(self, key: KeyStroke) -> "TrieNode":
        return self.children.setdefault(key, TrieNode())

    def press(self, key: KeyStroke) -> Optional[Transition]:
        node = self.children.get(key)
        if node is None:
            return None
        return Transition(
            value=node.value,
            next_state=node if node.children else None,
        )

    def is_empty(self) -> bool:
        return self.value is None and not self.children


class KeyMap:
    """Root of a keymap trie; itself a ``State`` queried at walk start."""

    def __init__(self, mappings: Optional[Dict[str, Remapping]] = None) -> None:
        self._root = TrieNode()
        self._count = 0
        self._revision = 0
        for keys, remapping in (mappings or {}).items():
            self.map(keys, remapping)

    @property
    def revision(self) -> int:
        return self._revision

    def press(self, key: KeyStroke) -> Optional[Transition]:
        return self._root.press(key)

    def map(
        self, keys: Union[str, Iterable[KeyStroke]], remapping: Remapping
    ) -> None:
        strokes = coerce_key_strokes(keys)
        if not strokes:
            raise ValueError("a mapping needs at least one keystroke")
        node = self._root
        for stroke in strokes:
            node = node.child(stroke)
        if node.value is None:
            self._count += 1
        node.value = remapping
        self._revision += 1

    def unmap(self, keys: Union[str, Iterable[KeyStroke]]) -> Optional[Remapping]:
        strokes = coerce_key_strokes(keys)
        path = [self._root]
        for stroke in strokes:
            node = path[-1].children.get(stroke)
            if node is None:
                return None
            path.append(node)

        leaf = path[-1]
        removed = leaf.value
        if removed is None or leaf is self._root:
            return None
        leaf.value = None
        # prune branches that no longer lead anywhere
        for parent, stroke in zip(reversed(path[:-1]), reversed(strokes)):
            if not parent.children[stroke].is_empty():
                break
            del parent.children[stroke]
        self._count -= 1
        self._revision += 1
        return removed

    def get(self, keys: Union[str, Iterable[KeyStroke]]) -> Optional[Remapping]:
        node: Optional[TrieNode] = self._root
        for stroke in coerce_key_strokes(keys):
            node = node.children.get(stroke) if node else None
        return node.value if node else None

    def clear(self) -> None:
        self._root = TrieNode()
        self._count = 0
        self._revision += 1

    def __contains__(self, keys: object) -> bool:
        if not isinstance(keys, (str, tuple, list)):
            return False
        return self.get(keys) is not None

    def __len__(self) -> int:
        return self._count


@dataclass(frozen=True, slots=True)
class UnionState:
    """Walk position advancing through two automata in lockstep."""

    primary: State
    secondary: State

    def press(self, key: KeyStroke) -> Optional[Transition]:
        return union_transitions(self.primary.press(key), self.secondary.press(key))


def union_states(
    primary: Optional[State], secondary: Optional[State]
) -> Optional[State]:
    if primary is None:
        return secondary
    if secondary is None:
        return primary
    return UnionState(primary, secondary)


def union_transitions(
    primary: Optional[Transition], secondary: Optional[Transition]
) -> Optional[Transition]:
    """Merge two candidate transitions; the primary's value wins a tie."""

    if primary is None:
        return secondary
    if secondary is None:
        return primary
    value = primary.value if primary.value is not None else secondary.value
    return Transition(
        value=value,
        next_state=union_states(primary.next_state, secondary.next_state),
    )


__all__ = [
    "KeyMap",
    "State",
    "Transition",
    "TrieNode",
    "UnionState",
    "union_states",
    "union_transitions",
]
