from __future__ import annotations

from typing import List, Optional

from midikeys.mapping.ir import EventKind, KeyChord, Wildcard

from .events import NormalizedEvent
from .table import DispatchTable


def match(table: DispatchTable, event: NormalizedEvent) -> Optional[List[KeyChord]]:
    """Resolve an event against the table.

    Lookup order is kind, number, then channel (exact before Wildcard.ANY),
    then value inside the chosen channel bucket (exact before Wildcard.ANY).
    Once a channel bucket is chosen, its value tier alone decides the result.
    Returns the chords in rule order, or None.
    """

    try:
        kind = EventKind(event.kind)
    except ValueError:
        return None

    by_number = table.numbers(kind)
    if by_number is None:
        return None

    by_channel = by_number.get(event.number)
    if by_channel is None:
        return None

    by_value = by_channel.get(event.channel)
    if by_value is None:
        by_value = by_channel.get(Wildcard.ANY)
    if by_value is None:
        return None

    chords = by_value.get(event.value)
    if chords is None:
        chords = by_value.get(Wildcard.ANY)
    if chords is None:
        return None

    return list(chords)
