from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Sequence, Union

from midikeys.mapping.dsl import parse_rule
from midikeys.mapping.ir import EventKind, KeyChord, MatchSpec, RuleIR, Selector

from .table import DispatchTable


logger = logging.getLogger(__name__)

RuleDef = Union[RuleIR, Mapping[str, Any]]


class DispatchBackend:
    """Compile IR rules into an immutable DispatchTable."""

    def __init__(self, *, strict_modifiers: bool = False) -> None:
        self._strict_modifiers = strict_modifiers

    def compile(self, rules: Sequence[RuleDef]) -> DispatchTable:
        # Parse everything first so a bad rule never leaves a partial table behind.
        parsed = [self._to_ir(rule) for rule in rules]

        building: Dict[EventKind, Dict[int, Dict[Selector, Dict[Selector, List[KeyChord]]]]] = {}
        for rule in parsed:
            for spec in rule.matchers:
                _insert(building, spec)

        table = DispatchTable.freeze(building)
        logger.debug(f"Compiled {len(parsed)} rules into {table!r}")
        return table

    def _to_ir(self, rule: RuleDef) -> RuleIR:
        if isinstance(rule, RuleIR):
            return rule
        return parse_rule(rule, strict_modifiers=self._strict_modifiers)


def compile_rules(rules: Sequence[RuleDef], *, strict_modifiers: bool = False) -> DispatchTable:
    """Compile raw `{key, midi}` rules (or RuleIR) into a DispatchTable."""

    return DispatchBackend(strict_modifiers=strict_modifiers).compile(rules)


def _insert(building: Dict[EventKind, Dict[int, Dict[Selector, Dict[Selector, List[KeyChord]]]]], spec: MatchSpec) -> None:
    by_channel = building.setdefault(spec.kind, {}).setdefault(spec.number, {})
    for channel in spec.channels:
        by_value = by_channel.setdefault(channel, {})
        for value in spec.values:
            by_value.setdefault(value, []).append(spec.chord)
