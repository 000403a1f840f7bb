from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional, Tuple, TypeAlias, Union

from pydantic import BaseModel, ConfigDict, Field


class EventKind(str, Enum):
    """MIDI message kinds the engine can map (mido message type names)."""

    NOTE_OFF = "note_off"
    NOTE_ON = "note_on"
    CONTROL_CHANGE = "control_change"
    PROGRAM_CHANGE = "program_change"


# Short kind names accepted in the `type` field of a midi entry.
KIND_ALIASES = {
    "on": EventKind.NOTE_ON,
    "off": EventKind.NOTE_OFF,
    "cc": EventKind.CONTROL_CHANGE,
    "pg": EventKind.PROGRAM_CHANGE,
}

NOTE_KINDS = frozenset({EventKind.NOTE_ON, EventKind.NOTE_OFF})


class Wildcard(str, Enum):
    """Selector matching every channel or every value."""

    ANY = "any"


# A channel (1..16) or value (0..127) selector: an exact number or Wildcard.ANY.
Selector: TypeAlias = Union[int, Wildcard]


class KeyPress(BaseModel):
    """One key tap with the modifiers held during it."""

    model_config = ConfigDict(frozen=True)

    key: str
    modifiers: Tuple[str, ...] = ()


class KeyChord(BaseModel):
    """Key presses fired, in order, for one match."""

    model_config = ConfigDict(frozen=True)

    presses: Tuple[KeyPress, ...] = Field(min_length=1)


class KindSource(BaseModel):
    """How a midi entry names its event kind."""

    model_config = ConfigDict(frozen=True)


class ExplicitKind(KindSource):
    """`type` field, lowercased."""

    name: str


class ShorthandCC(KindSource):
    number: Any = None


class ShorthandOn(KindSource):
    number: Any = None


class ShorthandOff(KindSource):
    number: Any = None


class MatchSpec(BaseModel):
    """One compiled matcher: event shape -> chord."""

    model_config = ConfigDict(frozen=True)

    kind: EventKind
    number: int
    channels: Tuple[Selector, ...]
    values: Tuple[Selector, ...]
    chord: KeyChord


class RuleIR(BaseModel):
    """One authored rule: a chord and the matchers that trigger it."""

    chord: KeyChord
    matchers: List[MatchSpec] = Field(default_factory=list)
    source: Optional[Any] = None
