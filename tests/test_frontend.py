from __future__ import annotations

import json
from pathlib import Path

import pytest

from midikeys.mapping.errors import InvalidConfig
from midikeys.mapping.frontend import MappingFrontend
from midikeys.mapping.ir import EventKind, Wildcard


def _keys(rule) -> list[str]:
    return [p.key for p in rule.chord.presses]


def test_parse_config_basic() -> None:
    path = Path(__file__).with_name("midikeys.toml")
    frontend = MappingFrontend()
    config = frontend.load_file(path)
    rules = frontend.parse_config(config)

    assert frontend.preferred_input(config) == "nanoKONTROL2 SLIDER/KNOB"
    assert len(rules) == 3

    space = rules[0]
    assert _keys(space) == ["space"]
    assert [(m.kind, m.number, m.channels, m.values) for m in space.matchers] == [
        (EventKind.CONTROL_CHANGE, 41, (1,), (127,))
    ]

    sequence = rules[1]
    assert _keys(sequence) == ["a", "b"]
    assert sequence.chord.presses[0].modifiers == ("shift",)
    assert [(m.kind, m.number, m.channels, m.values) for m in sequence.matchers] == [
        (EventKind.NOTE_ON, 60, (Wildcard.ANY,), (Wildcard.ANY,)),
        (EventKind.CONTROL_CHANGE, 42, (Wildcard.ANY,), (127,)),
    ]

    program = rules[2]
    assert program.matchers[0].kind == EventKind.PROGRAM_CHANGE
    assert program.chord.presses[0].modifiers == ("command",)


def test_load_commented_json() -> None:
    path = Path(__file__).with_name("midikeys_config.jsonc")
    frontend = MappingFrontend()
    config = frontend.load_file(path)
    rules = frontend.parse_config(config)

    assert frontend.preferred_input(config) == "Launch Control XL"
    assert [_keys(r) for r in rules] == [["space"], ["z"]]
    assert rules[1].chord.presses[0].modifiers == ("ctrl",)


def test_load_json(tmp_path: Path) -> None:
    path = tmp_path / "midikeys.json"
    path.write_text(
        json.dumps({"keyStrokes": [{"key": "enter", "midi": [{"cc": 1}]}]}),
        encoding="utf-8",
    )

    frontend = MappingFrontend()
    config = frontend.load_file(path)

    assert frontend.preferred_input(config) is None
    assert _keys(frontend.parse_config(config)[0]) == ["enter"]


def test_load_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "empty.json"
    path.write_text("  \n", encoding="utf-8")

    frontend = MappingFrontend()
    assert frontend.parse_config(frontend.load_file(path)) == []


def test_load_malformed_file(tmp_path: Path) -> None:
    path = tmp_path / "broken.toml"
    path.write_text("keyStrokes = [", encoding="utf-8")

    with pytest.raises(InvalidConfig):
        MappingFrontend().load_file(path)


def test_parse_config_structure_error() -> None:
    with pytest.raises(InvalidConfig) as exc_info:
        MappingFrontend().parse_config({"keyStrokes": {"key": "a"}})

    assert "keyStrokes" in str(exc_info.value)
