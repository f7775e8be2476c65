"""Keystroke types, keymap automata and the global fallback table."""

from .models import (
    KeyNotationError,
    KeyStroke,
    Remapping,
    RemappedKeyStroke,
    SpecialKey,
    parse_key_strokes,
)
from .automaton import KeyMap, State, Transition, union_states, union_transitions
from .global_map import GlobalMap

__all__ = [
    "GlobalMap",
    "KeyMap",
    "KeyNotationError",
    "KeyStroke",
    "Remapping",
    "RemappedKeyStroke",
    "SpecialKey",
    "State",
    "Transition",
    "parse_key_strokes",
    "union_states",
    "union_transitions",
]
