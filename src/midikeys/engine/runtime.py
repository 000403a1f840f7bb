from __future__ import annotations

import logging
from typing import List, Optional, Protocol, Sequence

import mido

from midikeys.mapping.ir import EventKind, KeyChord, KeyPress

from .events import NormalizedEvent, event_from_message
from .matcher import match
from .table import DispatchTable


logger = logging.getLogger(__name__)


class KeyInjector(Protocol):
    """Sends one key tap to the OS (implemented outside this package)."""

    def tap(self, key: str, modifiers: Sequence[str]) -> None: ...


class KeyDispatcher:
    """Run matched chords through a KeyInjector.

    A press that raises is logged and skipped; the remaining presses and later
    events are still processed. The table is only read, so one dispatcher can
    serve whichever thread delivers MIDI callbacks.
    """

    def __init__(self, table: DispatchTable, injector: KeyInjector, *, monitor: bool = False) -> None:
        self._table = table
        self._injector = injector
        self._monitor = monitor

    def handle(self, event: NormalizedEvent) -> Optional[List[KeyChord]]:
        chords = match(self._table, event)
        if chords:
            for chord in chords:
                for press in chord.presses:
                    self._tap(press)
        if self._monitor:
            logger.info(format_monitor_line(event, chords))
        return chords

    def handle_message(self, message: mido.Message) -> Optional[List[KeyChord]]:
        """mido input callback: normalize, then handle. Unmappable messages are only monitored."""

        event = event_from_message(message)
        if event is None:
            if self._monitor:
                logger.info(f"MIDI: {message}")
            return None
        return self.handle(event)

    def _tap(self, press: KeyPress) -> None:
        try:
            self._injector.tap(press.key, list(press.modifiers))
        except Exception as exc:
            logger.warning(f"Key press {format_press(press)!r} failed: {exc}")


_SHORT_KINDS = {
    EventKind.CONTROL_CHANGE.value: ("cc", "value"),
    EventKind.NOTE_ON.value: ("on", "velocity"),
    EventKind.NOTE_OFF.value: ("off", "velocity"),
}


def format_event(event: NormalizedEvent) -> str:
    """Describe an event with the field names a config rule would use."""

    name = getattr(event.kind, "value", event.kind)
    kind, label = _SHORT_KINDS.get(name, (name, "value"))
    return ", ".join(
        [
            f"{kind:>3}",
            f"{event.number:>3}",
            f"ch: {event.channel:>2}",
            f"{label:>8}: {event.value:>3}",
        ]
    )


def format_press(press: KeyPress) -> str:
    key = _capitalize(press.key)
    if not press.modifiers:
        return key
    return "+".join(_capitalize(m) for m in press.modifiers) + " + " + key


def format_chord(chord: KeyChord) -> str:
    return ", ".join(format_press(p) for p in chord.presses)


def format_monitor_line(event: NormalizedEvent, chords: Optional[Sequence[KeyChord]]) -> str:
    line = f"MIDI: {format_event(event)}"
    if chords:
        line += " => Key: " + ", ".join(format_chord(c) for c in chords)
    return line


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]
