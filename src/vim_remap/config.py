"""Translator settings, optionally sourced from ``VIM_REMAP_*`` variables."""

from __future__ import annotations

from dataclasses import dataclass, field

from vim_remap.keymaps import GlobalMap, KeyStroke
from vim_remap.runtime.telemetry import ENV_PREFIX, env, env_flag

DEFAULT_LEADER = KeyStroke.char("\\")
DEFAULT_TIMEOUT_MS = 1000
DEFAULT_MAX_MAP_DEPTH = 1000


def _positive_int(name: str, default: int) -> int:
    raw = env(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{ENV_PREFIX}{name} must be positive, got {value}")
    return value


@dataclass(frozen=True, slots=True)
class TranslatorSettings:
    """Configuration owned by the host and read by translators.

    ``leader`` is the key that also walks ``<Leader>`` edges. ``global_map``
    reinterprets keys stranded by a dead end. ``timeout_ms`` bounds how long a
    pending mapping waits for its next key when ``timeout_enabled`` is set.
    """

    leader: KeyStroke = DEFAULT_LEADER
    global_map: GlobalMap = field(default_factory=GlobalMap.default)
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    timeout_enabled: bool = True
    max_map_depth: int = DEFAULT_MAX_MAP_DEPTH

    def __post_init__(self) -> None:
        if self.timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")
        if self.max_map_depth <= 0:
            raise ValueError("max_map_depth must be positive")

    @classmethod
    def from_env(cls, *, global_map: GlobalMap | None = None) -> "TranslatorSettings":
        leader_raw = env("LEADER")
        leader = KeyStroke.parse(leader_raw) if leader_raw else DEFAULT_LEADER
        return cls(
            leader=leader,
            global_map=global_map if global_map is not None else GlobalMap.default(),
            timeout_ms=_positive_int("TIMEOUT_MS", DEFAULT_TIMEOUT_MS),
            timeout_enabled=env_flag("TIMEOUT", True),
            max_map_depth=_positive_int("MAX_MAP_DEPTH", DEFAULT_MAX_MAP_DEPTH),
        )


__all__ = ["TranslatorSettings", "DEFAULT_LEADER"]
