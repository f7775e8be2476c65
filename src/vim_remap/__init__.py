"""Incremental key-sequence translation for modal editors."""

from .config import TranslatorSettings
from .replay import RecursiveMappingError, RemapReplayer
from .translator import KeyStrokeTranslator

__all__ = [
    "KeyStrokeTranslator",
    "RecursiveMappingError",
    "RemapReplayer",
    "TranslatorSettings",
    "config",
    "keymaps",
    "replay",
    "runtime",
    "translator",
]

__version__ = "0.1.0"
