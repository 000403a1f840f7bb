from __future__ import annotations

from .dsl import parse_keychord, parse_keystroke, parse_midi_entry, parse_rule
from .errors import (
    ConfigError,
    InvalidChannel,
    InvalidConfig,
    InvalidKeyStroke,
    InvalidNumber,
    InvalidValue,
    UnknownMidiType,
)
from .frontend import MappingFrontend
from .ir import EventKind, KeyChord, KeyPress, MatchSpec, RuleIR, Selector, Wildcard

__all__ = [
    "ConfigError",
    "EventKind",
    "InvalidChannel",
    "InvalidConfig",
    "InvalidKeyStroke",
    "InvalidNumber",
    "InvalidValue",
    "KeyChord",
    "KeyPress",
    "MappingFrontend",
    "MatchSpec",
    "RuleIR",
    "Selector",
    "UnknownMidiType",
    "Wildcard",
    "parse_keychord",
    "parse_keystroke",
    "parse_midi_entry",
    "parse_rule",
]
