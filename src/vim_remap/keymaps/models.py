"""Keystroke and remapping value types plus vim key-notation parsing."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Literal, Optional, Union


class KeyNotationError(ValueError):
    """Raised when a vim key-notation token cannot be parsed."""


class SpecialKey(Enum):
    """Named keys that have no printable character."""

    ESC = "Esc"
    RETURN = "CR"
    TAB = "Tab"
    BACKSPACE = "BS"
    DELETE = "Del"
    INSERT = "Insert"
    HOME = "Home"
    END = "End"
    PAGE_UP = "PageUp"
    PAGE_DOWN = "PageDown"
    ARROW_UP = "Up"
    ARROW_DOWN = "Down"
    ARROW_LEFT = "Left"
    ARROW_RIGHT = "Right"
    F1 = "F1"
    F2 = "F2"
    F3 = "F3"
    F4 = "F4"
    F5 = "F5"
    F6 = "F6"
    F7 = "F7"
    F8 = "F8"
    F9 = "F9"
    F10 = "F10"
    F11 = "F11"
    F12 = "F12"
    LEADER = "Leader"


# Notation names are case-insensitive in vim; aliases map onto SpecialKey or a
# printable character that has no safe bare spelling.
_SPECIAL_ALIASES: dict[str, Union[SpecialKey, str]] = {
    "esc": SpecialKey.ESC,
    "escape": SpecialKey.ESC,
    "cr": SpecialKey.RETURN,
    "enter": SpecialKey.RETURN,
    "return": SpecialKey.RETURN,
    "tab": SpecialKey.TAB,
    "bs": SpecialKey.BACKSPACE,
    "backspace": SpecialKey.BACKSPACE,
    "del": SpecialKey.DELETE,
    "delete": SpecialKey.DELETE,
    "insert": SpecialKey.INSERT,
    "home": SpecialKey.HOME,
    "end": SpecialKey.END,
    "pageup": SpecialKey.PAGE_UP,
    "pagedown": SpecialKey.PAGE_DOWN,
    "up": SpecialKey.ARROW_UP,
    "down": SpecialKey.ARROW_DOWN,
    "left": SpecialKey.ARROW_LEFT,
    "right": SpecialKey.ARROW_RIGHT,
    "leader": SpecialKey.LEADER,
    "space": " ",
    "lt": "<",
    "bslash": "\\",
    "bar": "|",
}
_SPECIAL_ALIASES.update({f"f{n}": SpecialKey[f"F{n}"] for n in range(1, 13)})

_CHAR_NAMES = {" ": "Space", "<": "lt", "\\": "Bslash", "|": "Bar"}

_MODIFIER_PREFIXES = {"c": "ctrl", "a": "alt", "m": "alt"}


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """A single key press: a printable character or a ``SpecialKey``.

    Equality and hashing cover ``kind``, ``value`` and the modifiers, so
    keystrokes double as trie edges.
    """

    kind: Literal["char", "special"]
    value: Union[str, SpecialKey]
    ctrl: bool = False
    alt: bool = False

    def __post_init__(self) -> None:
        if self.kind == "char":
            if not isinstance(self.value, str) or len(self.value) != 1:
                raise ValueError(
                    f"char keystroke needs exactly one character, got {self.value!r}"
                )
        elif self.kind == "special":
            if not isinstance(self.value, SpecialKey):
                raise ValueError(f"special keystroke needs a SpecialKey, got {self.value!r}")
        else:
            raise ValueError(f"unknown keystroke kind {self.kind!r}")

    @classmethod
    def char(cls, value: str, *, ctrl: bool = False, alt: bool = False) -> "KeyStroke":
        return cls("char", value, ctrl=ctrl, alt=alt)

    @classmethod
    def special(
        cls, value: Union[SpecialKey, str], *, ctrl: bool = False, alt: bool = False
    ) -> "KeyStroke":
        key = value if isinstance(value, SpecialKey) else SpecialKey[value.upper()]
        return cls("special", key, ctrl=ctrl, alt=alt)

    @classmethod
    def parse(cls, token: str) -> "KeyStroke":
        """Parse a single token such as ``a``, ``<Esc>`` or ``<C-w>``."""

        strokes = parse_key_strokes(token)
        if len(strokes) != 1:
            raise KeyNotationError(f"{token!r} is not a single keystroke")
        return strokes[0]

    @property
    def token(self) -> str:
        modifiers = ("C-" if self.ctrl else "") + ("A-" if self.alt else "")
        if isinstance(self.value, SpecialKey):
            return f"<{modifiers}{self.value.value}>"
        name = _CHAR_NAMES.get(self.value)
        if modifiers or name:
            return f"<{modifiers}{name or self.value}>"
        return self.value

    def __str__(self) -> str:
        return self.token


def _parse_bracketed(body: str) -> Optional[KeyStroke]:
    ctrl = alt = False
    name = body
    while len(name) > 2 and name[1] == "-" and name[0].lower() in _MODIFIER_PREFIXES:
        if _MODIFIER_PREFIXES[name[0].lower()] == "ctrl":
            ctrl = True
        else:
            alt = True
        name = name[2:]

    if len(name) == 1 and (ctrl or alt):
        # vim treats <C-X> and <C-x> alike.
        return KeyStroke.char(name.lower() if ctrl else name, ctrl=ctrl, alt=alt)

    target = _SPECIAL_ALIASES.get(name.lower())
    if target is None:
        return None
    if isinstance(target, SpecialKey):
        return KeyStroke("special", target, ctrl=ctrl, alt=alt)
    return KeyStroke.char(target, ctrl=ctrl, alt=alt)


def parse_key_strokes(text: str) -> tuple[KeyStroke, ...]:
    """Split vim key notation (``"<Leader>w"``, ``"jj"``) into keystrokes.

    A ``<`` that does not open a recognised ``<...>`` name is the literal
    key, and so are the characters after it.
    """

    strokes: list[KeyStroke] = []
    index = 0
    while index < len(text):
        char = text[index]
        if char == "<":
            end = text.find(">", index + 2)
            stroke = _parse_bracketed(text[index + 1 : end]) if end != -1 else None
            if stroke is not None:
                strokes.append(stroke)
                index = end + 1
                continue
        strokes.append(KeyStroke.char(char))
        index += 1
    return tuple(strokes)


def coerce_key_strokes(keys: Union[str, Iterable[KeyStroke]]) -> tuple[KeyStroke, ...]:
    if isinstance(keys, str):
        return parse_key_strokes(keys)
    return tuple(keys)


@dataclass(frozen=True, slots=True)
class Remapping:
    """Replacement keys for a completed mapping.

    ``recursive`` replacements are fed back through the translator; the
    others are literal output. An empty replacement behaves like ``<Nop>``.
    """

    key_strokes: tuple[KeyStroke, ...]
    recursive: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "key_strokes", tuple(self.key_strokes))

    @classmethod
    def parse(cls, text: str, *, recursive: bool = True) -> "Remapping":
        return cls(parse_key_strokes(text), recursive=recursive)

    @property
    def notation(self) -> str:
        return "".join(stroke.token for stroke in self.key_strokes)


@dataclass(frozen=True, slots=True)
class RemappedKeyStroke:
    """A keystroke flowing out of the translator, tagged for replay."""

    key: KeyStroke
    recursive: bool

    def __str__(self) -> str:
        return self.key.token


__all__ = [
    "KeyNotationError",
    "KeyStroke",
    "Remapping",
    "RemappedKeyStroke",
    "SpecialKey",
    "coerce_key_strokes",
    "parse_key_strokes",
]
