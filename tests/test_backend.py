from __future__ import annotations

import pytest

from midikeys.engine.backend import DispatchBackend, compile_rules
from midikeys.mapping.dsl import parse_rule
from midikeys.mapping.errors import InvalidChannel, InvalidKeyStroke
from midikeys.mapping.ir import EventKind, KeyChord, KeyPress, Wildcard


def _chord(*keys: str) -> KeyChord:
    return KeyChord(presses=tuple(KeyPress(key=k) for k in keys))


def test_compile_builds_nested_tiers() -> None:
    table = compile_rules(
        [
            {"key": "a", "midi": [{"cc": 1, "channel": 1, "value": 127}]},
            {"key": "b", "midi": [{"on": 60}]},
        ]
    )

    assert set(table.kinds) == {EventKind.CONTROL_CHANGE, EventKind.NOTE_ON}
    assert table.numbers(EventKind.CONTROL_CHANGE)[1][1][127] == (_chord("a"),)
    assert table.numbers(EventKind.NOTE_ON)[60][Wildcard.ANY][Wildcard.ANY] == (_chord("b"),)
    assert table.numbers(EventKind.NOTE_OFF) is None
    assert len(table) == 2


def test_compile_accumulates_in_rule_order() -> None:
    table = compile_rules(
        [
            {"key": "a", "midi": [{"cc": 1, "channel": 2}]},
            {"key": "b", "midi": [{"cc": 1, "channel": "2", "value": "any"}]},
            {"key": "c", "midi": [{"cc": 1, "channel": 2, "value": 5}]},
        ]
    )

    by_value = table.numbers(EventKind.CONTROL_CHANGE)[1][2]
    assert by_value[Wildcard.ANY] == (_chord("a"), _chord("b"))
    assert by_value[5] == (_chord("c"),)


def test_compile_no_cross_kind_leakage() -> None:
    table = compile_rules(
        [
            {"key": "a", "midi": [{"on": 60}, {"off": 60}, {"type": "pg", "number": 60}]},
        ]
    )

    for kind in (EventKind.NOTE_ON, EventKind.NOTE_OFF, EventKind.PROGRAM_CHANGE):
        assert list(table.numbers(kind)) == [60]
    for kind, number, _channel, _value, chords in table.entries():
        assert chords == (_chord("a"),)


def test_compile_table_is_read_only() -> None:
    table = compile_rules([{"key": "a", "midi": [{"cc": 1}]}])
    by_number = table.numbers(EventKind.CONTROL_CHANGE)

    with pytest.raises(TypeError):
        by_number[2] = {}  # type: ignore[index]
    with pytest.raises(TypeError):
        by_number[1][Wildcard.ANY][3] = ()  # type: ignore[index]
    assert isinstance(by_number[1][Wildcard.ANY][Wildcard.ANY], tuple)


def test_compile_fails_before_building() -> None:
    with pytest.raises(InvalidChannel):
        compile_rules(
            [
                {"key": "a", "midi": [{"cc": 1}]},
                {"key": "b", "midi": [{"cc": 2, "channel": 0}]},
            ]
        )

    with pytest.raises(InvalidKeyStroke):
        compile_rules([{"key": "shift+", "midi": [{"cc": 1}]}])


def test_compile_accepts_rule_ir() -> None:
    rule = parse_rule({"key": ["shift+a", "b"], "midi": [{"on": 60, "velocity": "any"}]})
    table = DispatchBackend().compile([rule])

    chords = table.numbers(EventKind.NOTE_ON)[60][Wildcard.ANY][Wildcard.ANY]
    assert chords[0].presses == (KeyPress(key="a", modifiers=("shift",)), KeyPress(key="b"))


def test_compile_is_deterministic() -> None:
    rules = [
        {"key": "a", "midi": [{"cc": 1, "channel": 3, "value": 1}]},
        {"key": "b", "midi": [{"cc": 1}]},
    ]

    assert list(compile_rules(rules).entries()) == list(compile_rules(rules).entries())


def test_compile_empty() -> None:
    table = compile_rules([])
    assert not table
    assert len(table) == 0
