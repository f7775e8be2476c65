"""Caller-side loop: feed keys, replay recursive output, expire stale walks."""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Iterable, Optional

from vim_remap.config import TranslatorSettings
from vim_remap.keymaps import KeyStroke, RemappedKeyStroke, State
from vim_remap.runtime import telemetry

from .translator import KeyStrokeTranslator

KeymapProvider = Callable[[], State]
KeySink = Callable[[KeyStroke], None]


class RecursiveMappingError(RuntimeError):
    """Raised when recursive mappings keep expanding past the depth limit."""

    def __init__(self, key: KeyStroke, depth: int) -> None:
        super().__init__(f"Recursive mapping of '{key.token}' exceeded depth {depth}")
        self.key = key
        self.depth = depth


@dataclass
class PendingTimeout:
    deadline: float
    timeout_ms: int


def _discard(_key: KeyStroke) -> None:  # pragma: no cover - default sink
    return None


class RemapReplayer:
    """Drives a ``KeyStrokeTranslator`` on behalf of an input handler.

    Keys the translator does not absorb, and non-recursive output, go to
    ``sink``. Recursive output is fed back through the translator using the
    keymap current at that moment.
    """

    def __init__(
        self,
        translator: KeyStrokeTranslator,
        keymap_provider: KeymapProvider,
        sink: KeySink = _discard,
        *,
        clock: Callable[[], float] = time.monotonic,
        logger_name: str | None = None,
    ) -> None:
        self.translator = translator
        self._keymap_provider = keymap_provider
        self._sink = sink
        self._clock = clock
        self._logger_name = logger_name
        self._pending_timeout: Optional[PendingTimeout] = None

    @property
    def settings(self) -> TranslatorSettings:
        return self.translator.settings

    @property
    def timeout_pending(self) -> bool:
        return self._pending_timeout is not None

    def feed(self, key: KeyStroke) -> list[KeyStroke]:
        """Process one physical key press and return the keys emitted."""

        emitted = self._run([(RemappedKeyStroke(key, True), 0)])
        self._after_feed()
        return emitted

    def feed_all(self, keys: Iterable[KeyStroke]) -> list[KeyStroke]:
        emitted: list[KeyStroke] = []
        for key in keys:
            emitted.extend(self.feed(key))
        return emitted

    def process_timeouts(self) -> list[KeyStroke]:
        timer = self._pending_timeout
        if timer is None or self._clock() < timer.deadline:
            return []
        return self._expire(timer)

    def force_timeout(self) -> list[KeyStroke]:
        timer = self._pending_timeout
        if timer is None:
            return []
        return self._expire(timer)

    def cancel_timeout(self) -> None:
        self._pending_timeout = None

    def _expire(self, timer: PendingTimeout) -> list[KeyStroke]:
        self._pending_timeout = None
        held = len(self.translator.original_key_strokes())
        if not self.translator.abort():
            return []
        telemetry.record_event(
            "replay.timeout",
            level="debug",
            data={"timeout_ms": timer.timeout_ms, "held": held},
            logger_name=self._logger_name,
        )
        flushed = self.translator.take_resulting_key_strokes()
        emitted = self._run([(stroke, 1) for stroke in flushed])
        self._after_feed()
        return emitted

    def _run(self, work: Iterable[tuple[RemappedKeyStroke, int]]) -> list[KeyStroke]:
        queue: Deque[tuple[RemappedKeyStroke, int]] = deque(work)
        emitted: list[KeyStroke] = []
        max_depth = self.settings.max_map_depth
        while queue:
            stroke, depth = queue.popleft()
            if not stroke.recursive:
                self._emit(stroke.key, emitted)
                continue
            if depth > max_depth:
                telemetry.record_event(
                    "replay.recursion_limit",
                    level="warning",
                    data={"key": stroke.key.token, "depth": max_depth},
                    logger_name=self._logger_name,
                )
                self.translator.reset()
                raise RecursiveMappingError(stroke.key, max_depth)

            absorbed = self.translator.process_key_stroke(
                self._keymap_provider(), stroke.key
            )
            if not absorbed:
                self._emit(stroke.key, emitted)
            elif not self.translator.is_pending:
                produced = self.translator.take_resulting_key_strokes()
                queue.extendleft(reversed([(item, depth + 1) for item in produced]))
        return emitted

    def _emit(self, key: KeyStroke, emitted: list[KeyStroke]) -> None:
        emitted.append(key)
        self._sink(key)

    def _after_feed(self) -> None:
        if self.translator.is_pending and self.settings.timeout_enabled:
            self._arm_timeout(self.settings.timeout_ms)
        else:
            self.cancel_timeout()

    def _arm_timeout(self, timeout_ms: int) -> None:
        self._pending_timeout = PendingTimeout(
            deadline=self._clock() + (timeout_ms / 1000.0),
            timeout_ms=timeout_ms,
        )


__all__ = ["RecursiveMappingError", "RemapReplayer", "PendingTimeout"]
