from __future__ import annotations

from .engine import DispatchTable, NormalizedEvent, compile_rules, match
from .mapping import ConfigError, EventKind, KeyChord, KeyPress, Wildcard

__all__ = [
    "ConfigError",
    "DispatchTable",
    "EventKind",
    "KeyChord",
    "KeyPress",
    "NormalizedEvent",
    "Wildcard",
    "compile_rules",
    "match",
]
