from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Tuple

from midikeys.mapping.ir import EventKind, KeyChord, Selector


ValueTier = Mapping[Selector, Tuple[KeyChord, ...]]
ChannelTier = Mapping[Selector, ValueTier]
NumberTier = Mapping[int, ChannelTier]


class DispatchTable:
    """Compiled, read-only lookup: kind -> number -> channel -> value -> chords.

    Built by DispatchBackend; query it with `midikeys.engine.matcher.match`.
    """

    __slots__ = ("_kinds",)

    def __init__(self, kinds: Mapping[EventKind, NumberTier]) -> None:
        self._kinds = kinds

    @classmethod
    def freeze(cls, building: Dict[EventKind, Dict[int, Dict[Selector, Dict[Selector, List[KeyChord]]]]]) -> DispatchTable:
        """Wrap a table built from nested dicts and lists into read-only views."""

        return cls(_freeze(building))

    def numbers(self, kind: EventKind) -> NumberTier | None:
        return self._kinds.get(kind)

    @property
    def kinds(self) -> Tuple[EventKind, ...]:
        return tuple(self._kinds)

    def entries(self) -> Iterator[Tuple[EventKind, int, Selector, Selector, Tuple[KeyChord, ...]]]:
        """Yield every (kind, number, channel, value, chords) bucket."""

        for kind, by_number in self._kinds.items():
            for number, by_channel in by_number.items():
                for channel, by_value in by_channel.items():
                    for value, chords in by_value.items():
                        yield kind, number, channel, value, chords

    def __len__(self) -> int:
        return sum(1 for _ in self.entries())

    def __bool__(self) -> bool:
        return bool(self._kinds)

    def __repr__(self) -> str:
        return f"DispatchTable(kinds={[k.value for k in self._kinds]}, buckets={len(self)})"


def _freeze(tier: Any) -> Any:
    if isinstance(tier, list):
        return tuple(tier)
    return MappingProxyType({key: _freeze(sub) for key, sub in tier.items()})
