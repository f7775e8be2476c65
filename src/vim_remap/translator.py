"""Incremental resolution of keystrokes against (possibly ambiguous) keymaps."""

from __future__ import annotations

from typing import Optional

from vim_remap.config import TranslatorSettings
from vim_remap.keymaps import (
    KeyStroke,
    Remapping,
    RemappedKeyStroke,
    SpecialKey,
    State,
    Transition,
    union_transitions,
)
from vim_remap.runtime.telemetry import span

LEADER_KEY = KeyStroke.special(SpecialKey.LEADER)


class KeyStrokeTranslator:
    """Decides, key by key, whether input belongs to a multi-key mapping.

    Feed keys with ``process_key_stroke`` and read the outcome from
    ``resulting_key_strokes``. Keys pressed while a mapping is still open are
    held in ``original_key_strokes`` until the walk completes or dead-ends.
    Output stays available until the next mapping attempt starts.
    """

    def __init__(
        self,
        settings: Optional[TranslatorSettings] = None,
        *,
        logger_name: str | None = None,
    ) -> None:
        self.settings = settings or TranslatorSettings()
        self._logger_name = logger_name
        self._current_state: Optional[State] = None
        self._pending_value: Optional[Remapping] = None
        self._unconsumed: list[RemappedKeyStroke] = []
        self._resulting: list[RemappedKeyStroke] = []
        self._mapping_succeeded = False

    @property
    def is_pending(self) -> bool:
        return self._current_state is not None

    def process_key_stroke(self, keymap: State, key: KeyStroke) -> bool:
        """Advance the walk by ``key``; False when no mapping involves it."""

        with span(
            "translator::process_key",
            logger_name=self._logger_name,
            component="translator",
            metadata={"key": key.token, "pending": self.is_pending},
        ) as handle:
            origin = keymap if self._current_state is None else self._current_state
            leader_trans: Optional[Transition] = None
            if key == self.settings.leader:
                leader_trans = origin.press(LEADER_KEY)
            trans = origin.press(key)

            if self._current_state is None:
                if trans is None and leader_trans is None:
                    handle.add_metadata("outcome", "ignored")
                    return False
                # a new attempt discards whatever the previous one left behind
                self._resulting.clear()
                self._unconsumed.clear()
                self._mapping_succeeded = False

            trans = union_transitions(trans, leader_trans)
            if trans is None:
                self._unconsumed.append(RemappedKeyStroke(key, True))
                self._flush_unconsumed()
                self._flush_pending_value()
                self._current_state = None
                self._mapping_succeeded = False
                handle.add_metadata("outcome", "dead_end")
                return True

            if trans.value is not None:
                self._pending_value = trans.value
                self._unconsumed.append(RemappedKeyStroke(key, False))
                self._mapping_succeeded = True
            else:
                # until something has matched, held keys are replayed literally
                recursive = bool(self._unconsumed) or self._pending_value is not None
                self._unconsumed.append(RemappedKeyStroke(key, recursive))

            if trans.next_state is None:
                self._flush_pending_value()
                self._unconsumed.clear()
                self._current_state = None
                handle.add_metadata("outcome", "match")
            else:
                self._current_state = trans.next_state
                handle.add_metadata("outcome", "pending")
            return True

    def abort(self) -> bool:
        """End an open walk as a dead end with no breaking key.

        Used when a pending mapping goes stale. Returns False when idle.
        """

        if self._current_state is None:
            return False
        with span(
            "translator::abort",
            logger_name=self._logger_name,
            component="translator",
            metadata={"held": len(self._unconsumed)},
        ):
            self._flush_unconsumed()
            self._flush_pending_value()
            self._current_state = None
            self._mapping_succeeded = False
            return True

    def reset(self) -> None:
        self._current_state = None
        self._pending_value = None
        self._unconsumed.clear()
        self._resulting.clear()
        self._mapping_succeeded = False

    def original_key_strokes(self) -> tuple[RemappedKeyStroke, ...]:
        return tuple(self._unconsumed)

    def resulting_key_strokes(self) -> tuple[RemappedKeyStroke, ...]:
        return tuple(self._resulting)

    def take_resulting_key_strokes(self) -> tuple[RemappedKeyStroke, ...]:
        """Destructive variant of ``resulting_key_strokes``."""

        result = tuple(self._resulting)
        self._resulting.clear()
        return result

    def did_mapping_succeed(self) -> bool:
        return self._mapping_succeeded

    def _flush_unconsumed(self) -> None:
        reinterpreted = []
        for stroke in self._unconsumed:
            replacement = self.settings.global_map.lookup(stroke.key)
            # lookup hands back the key itself when the global map has no entry
            if replacement is not stroke.key:
                stroke = RemappedKeyStroke(replacement, False)
            reinterpreted.append(stroke)
        self._resulting[:0] = reinterpreted
        self._unconsumed.clear()

    def _flush_pending_value(self) -> None:
        if self._pending_value is None:
            return
        recursive = self._pending_value.recursive
        self._resulting[:0] = [
            RemappedKeyStroke(stroke, recursive)
            for stroke in self._pending_value.key_strokes
        ]
        self._pending_value = None


__all__ = ["KeyStrokeTranslator", "LEADER_KEY"]
