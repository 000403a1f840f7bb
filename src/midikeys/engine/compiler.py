from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional
import argparse
import logging
import sys

from midikeys.mapping.errors import ConfigError
from midikeys.mapping.frontend import MappingFrontend
from midikeys.mapping.ir import Selector, Wildcard

from .backend import DispatchBackend
from .runtime import format_chord
from .table import DispatchTable


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompiledConfig:
    preferred_input: Optional[str]
    table: DispatchTable


def compile_config_file(path: str | Path, *, strict_modifiers: bool = False) -> CompiledConfig:
    """End-to-end compilation: config file -> DispatchTable."""

    path = Path(path)

    frontend = MappingFrontend(strict_modifiers=strict_modifiers)
    config = frontend.load_file(path)
    rules = frontend.parse_config(config)

    backend = DispatchBackend(strict_modifiers=strict_modifiers)
    table = backend.compile(rules)
    logger.info(f"Compiled {len(rules)} key strokes from {path}")

    return CompiledConfig(preferred_input=frontend.preferred_input(config), table=table)


def describe_table(table: DispatchTable) -> List[str]:
    """One line per compiled (kind, number, channel, value) bucket."""

    lines: List[str] = []
    for kind, number, channel, value, chords in table.entries():
        keys = " | ".join(format_chord(c) for c in chords)
        lines.append(
            f"{kind.value:>14} {number:>3}  ch: {_selector(channel):>3}  value: {_selector(value):>3}  => {keys}"
        )
    return lines


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Check a MIDI-to-keystroke config and show the compiled dispatch table."
    )
    parser.add_argument("config", help="Config path (.toml or .json)")
    parser.add_argument(
        "--strict-modifiers",
        action="store_true",
        help="Reject unrecognized modifier names instead of warning",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        compiled = compile_config_file(args.config, strict_modifiers=args.strict_modifiers)
    except ConfigError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Cannot read config file {args.config}: {exc}", file=sys.stderr)
        return 1

    print(f"Preferred input: {compiled.preferred_input or '<none>'}")
    for line in describe_table(compiled.table):
        print(line)
    return 0


def _selector(selector: Selector) -> str:
    return "any" if selector is Wildcard.ANY else str(selector)


if __name__ == "__main__":
    raise SystemExit(main())
