from __future__ import annotations

from typing import Optional

import mido
from pydantic import BaseModel, ConfigDict, Field

from midikeys.mapping.ir import EventKind


class NormalizedEvent(BaseModel):
    """A decoded MIDI event in the shape the matcher looks up.

    `channel` is 1-based (1..16) like the configuration; `kind` may name a
    message type no rule can map, in which case nothing matches.
    """

    model_config = ConfigDict(frozen=True)

    kind: str
    number: int
    channel: int = Field(ge=1, le=16)
    value: int = 0


# message type -> (number attribute, value attribute); program changes have no
# value, so they normalize to 0 and rules for them only accept an any-value
_FIELDS = {
    EventKind.NOTE_ON: ("note", "velocity"),
    EventKind.NOTE_OFF: ("note", "velocity"),
    EventKind.CONTROL_CHANGE: ("control", "value"),
    EventKind.PROGRAM_CHANGE: ("program", None),
}


def event_from_message(message: mido.Message) -> Optional[NormalizedEvent]:
    """Normalize a mido message; None for message types rules cannot map."""

    try:
        kind = EventKind(message.type)
    except ValueError:
        return None

    number_attr, value_attr = _FIELDS[kind]
    return NormalizedEvent(
        kind=kind.value,
        number=getattr(message, number_attr),
        channel=message.channel + 1,
        value=getattr(message, value_attr) if value_attr else 0,
    )
