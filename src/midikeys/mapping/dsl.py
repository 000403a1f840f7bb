from __future__ import annotations

import logging
import re
from typing import Any, Mapping, Sequence, Tuple, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from .config import KeyStrokeConfig, MidiEntryConfig
from .errors import InvalidChannel, InvalidConfig, InvalidKeyStroke, InvalidNumber, InvalidValue, UnknownMidiType
from .ir import (
    KIND_ALIASES,
    NOTE_KINDS,
    EventKind,
    ExplicitKind,
    KeyChord,
    KeyPress,
    KindSource,
    MatchSpec,
    RuleIR,
    Selector,
    ShorthandCC,
    ShorthandOff,
    ShorthandOn,
    Wildcard,
)
from .keys import is_valid_key, is_valid_modifier


logger = logging.getLogger(__name__)

_KEY_SEP = re.compile(r"\s?[\s+\-]\s?")
_ANY = re.compile(r"^a(ll|ny)$", re.IGNORECASE)
_DIGITS = re.compile(r"[+-]?[0-9]+")

MAX_CHANNEL = 16
MAX_DATA = 127

_M = TypeVar("_M", bound=BaseModel)


def parse_keystroke(expr: str, *, strict_modifiers: bool = False) -> KeyPress:
    """Parse `[modifier ('+'|'-'|' ') ...] key` into a KeyPress."""

    parts = _KEY_SEP.split(expr)
    modifiers = parts[:-1]
    key = parts[-1].strip()
    invalid_mods = [m for m in modifiers if not is_valid_modifier(m)]

    if not key:
        raise InvalidKeyStroke(f'Invalid key stroke: "{expr}". No key specified', expr)
    if not is_valid_key(key):
        message = f'Invalid key stroke: "{expr}". Invalid key: "{key}"'
        if invalid_mods:
            message += ' and invalid modifiers: "{}"'.format('", "'.join(invalid_mods))
        raise InvalidKeyStroke(message, expr)
    if invalid_mods:
        if strict_modifiers:
            raise InvalidKeyStroke(
                'Invalid key stroke: "{}". Invalid modifiers: "{}"'.format(expr, '", "'.join(invalid_mods)),
                expr,
            )
        logger.warning(f"Key stroke {expr!r} uses unrecognized modifiers: {', '.join(invalid_mods)}")

    return KeyPress(key=key, modifiers=tuple(modifiers))


def parse_keychord(expr: Union[str, Sequence[str]], *, strict_modifiers: bool = False) -> KeyChord:
    """Parse one key stroke or a list of them into a KeyChord."""

    exprs = [expr] if isinstance(expr, str) else list(expr)
    if not exprs:
        raise InvalidKeyStroke("Invalid key stroke: empty key list. No key specified", list(exprs))
    return KeyChord(presses=tuple(parse_keystroke(e, strict_modifiers=strict_modifiers) for e in exprs))


def kind_source(entry: MidiEntryConfig) -> KindSource:
    """Decide once how the entry names its kind."""

    if isinstance(entry.type, str):
        return ExplicitKind(name=entry.type.lower())
    if entry.cc is not None:
        return ShorthandCC(number=entry.cc)
    if entry.on is not None:
        return ShorthandOn(number=entry.on)
    if entry.off is not None:
        return ShorthandOff(number=entry.off)
    return ExplicitKind(name=str(entry.type))


def resolve_kind(source: KindSource, entry: MidiEntryConfig) -> Tuple[EventKind, Any, Any]:
    """Return (kind, raw number, raw value) for a midi entry."""

    if isinstance(source, ShorthandCC):
        return EventKind.CONTROL_CHANGE, source.number, entry.value
    if isinstance(source, ShorthandOn):
        return EventKind.NOTE_ON, source.number, entry.velocity
    if isinstance(source, ShorthandOff):
        return EventKind.NOTE_OFF, source.number, entry.velocity
    if isinstance(source, ExplicitKind):
        kind = _lookup_kind(source.name)
        if kind is None:
            raise UnknownMidiType(
                f"Invalid midi definition. Invalid MIDI type: {source.name}",
                _raw(entry),
            )
        raw_value = _note_value(entry) if kind in NOTE_KINDS else entry.value
        return kind, entry.number, raw_value
    raise TypeError(f"unsupported kind source: {source!r}")


def parse_midi_entry(entry: Union[MidiEntryConfig, Mapping[str, Any]], chord: KeyChord) -> MatchSpec:
    """Parse one midi entry into a MatchSpec carrying `chord`."""

    if not isinstance(entry, MidiEntryConfig):
        entry = validate(MidiEntryConfig, entry)

    kind, raw_number, raw_value = resolve_kind(kind_source(entry), entry)
    value_field = "velocity" if kind in NOTE_KINDS else "value"

    return MatchSpec(
        kind=kind,
        number=parse_number(raw_number, kind, entry),
        channels=(parse_channel(entry.channel, kind, entry),),
        values=(parse_value(raw_value, kind, value_field, entry),),
        chord=chord,
    )


def parse_rule(rule: Union[KeyStrokeConfig, Mapping[str, Any]], *, strict_modifiers: bool = False) -> RuleIR:
    """Parse a `{key, midi}` rule into a RuleIR."""

    if not isinstance(rule, KeyStrokeConfig):
        rule = validate(KeyStrokeConfig, rule)

    chord = parse_keychord(rule.key, strict_modifiers=strict_modifiers)
    matchers = [parse_midi_entry(entry, chord) for entry in rule.midi]
    return RuleIR(chord=chord, matchers=matchers, source=rule.model_dump(exclude_none=True))


def validate(model: Type[_M], data: Any) -> _M:
    """Validate raw config data, reporting structural problems as InvalidConfig."""

    try:
        return model.model_validate(data)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}" for err in exc.errors()
        )
        raise InvalidConfig(f"Invalid configuration. {problems}", data) from exc


def is_any(raw: Any) -> bool:
    return raw is None or (isinstance(raw, str) and _ANY.match(raw) is not None)


def parse_number(raw: Any, kind: EventKind, entry: MidiEntryConfig) -> int:
    number = _to_int(raw)
    if number is None or not 0 <= number <= MAX_DATA:
        raise InvalidNumber(f"Invalid {kind.value} definition. Invalid number: {raw}", _raw(entry))
    return number


def parse_channel(raw: Any, kind: EventKind, entry: MidiEntryConfig) -> Selector:
    if is_any(raw):
        return Wildcard.ANY
    channel = _to_int(raw)
    if channel is None or not 1 <= channel <= MAX_CHANNEL:
        raise InvalidChannel(f"Invalid {kind.value} definition. Invalid channel: {raw}", _raw(entry))
    return channel


def parse_value(raw: Any, kind: EventKind, field: str, entry: MidiEntryConfig) -> Selector:
    if is_any(raw):
        return Wildcard.ANY
    if kind is EventKind.PROGRAM_CHANGE:
        raise InvalidValue(f"Invalid {kind.value} definition. Program changes carry no {field}: {raw}", _raw(entry))
    value = _to_int(raw)
    if value is None or not 0 <= value <= MAX_DATA:
        raise InvalidValue(f"Invalid {kind.value} definition. Invalid {field}: {raw}", _raw(entry))
    return value


def _lookup_kind(name: str) -> EventKind | None:
    try:
        return EventKind(name)
    except ValueError:
        return KIND_ALIASES.get(name)


def _to_int(raw: Any) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and _DIGITS.fullmatch(raw.strip()):
        return int(raw.strip())
    return None


def _note_value(entry: MidiEntryConfig) -> Any:
    # explicit note types only; the on/off shorthands read velocity alone
    return entry.velocity if entry.velocity is not None else entry.value


def _raw(entry: MidiEntryConfig) -> dict:
    return entry.model_dump(exclude_none=True)
