from __future__ import annotations

from .backend import DispatchBackend, compile_rules
from .compiler import CompiledConfig, compile_config_file
from .events import NormalizedEvent, event_from_message
from .matcher import match
from .runtime import KeyDispatcher, KeyInjector, format_chord, format_event
from .table import DispatchTable

__all__ = [
    "CompiledConfig",
    "DispatchBackend",
    "DispatchTable",
    "KeyDispatcher",
    "KeyInjector",
    "NormalizedEvent",
    "compile_config_file",
    "compile_rules",
    "event_from_message",
    "format_chord",
    "format_event",
    "match",
]
