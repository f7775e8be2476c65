"""Last-resort single-key reinterpretation for keys stranded by a dead end."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterator, Mapping

from .models import KeyStroke, SpecialKey


class GlobalMap(Mapping[KeyStroke, KeyStroke]):
    """Read-only one-to-one key table shared by every translator."""

    def __init__(self, entries: Mapping[KeyStroke, KeyStroke] | None = None) -> None:
        self._entries = MappingProxyType(dict(entries or {}))

    @classmethod
    def default(cls) -> "GlobalMap":
        """Terminal control codes vim treats as their named keys."""

        return cls(
            {
                KeyStroke.char("[", ctrl=True): KeyStroke.special(SpecialKey.ESC),
                KeyStroke.char("m", ctrl=True): KeyStroke.special(SpecialKey.RETURN),
                KeyStroke.char("i", ctrl=True): KeyStroke.special(SpecialKey.TAB),
                KeyStroke.char("h", ctrl=True): KeyStroke.special(SpecialKey.BACKSPACE),
            }
        )

    @classmethod
    def from_notation(cls, entries: Mapping[str, str]) -> "GlobalMap":
        return cls(
            {KeyStroke.parse(source): KeyStroke.parse(target) for source, target in entries.items()}
        )

    def lookup(self, key: KeyStroke) -> KeyStroke:
        return self._entries.get(key, key)

    def __getitem__(self, key: KeyStroke) -> KeyStroke:
        return self._entries[key]

    def __iter__(self) -> Iterator[KeyStroke]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        pairs = ", ".join(f"{k.token}->{v.token}" for k, v in self._entries.items())
        return f"GlobalMap({pairs})"


__all__ = ["GlobalMap"]
