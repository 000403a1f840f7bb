from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List
import tomllib

import json5

from .config import Config
from .dsl import parse_rule, validate
from .errors import InvalidConfig
from .ir import RuleIR


class MappingFrontend:
    """Parse config (TOML or JSON) into MIDI-to-key IR rules."""

    def __init__(self, *, strict_modifiers: bool = False) -> None:
        self._strict_modifiers = strict_modifiers

    def load_file(self, path: str | Path) -> Dict[str, Any]:
        """Load a TOML or JSON (comments allowed) config file into a dict. Empty files load as {}."""

        path = Path(path)
        text = path.read_text(encoding="utf-8").strip()
        if not text:
            return {}
        try:
            if path.suffix.lower() == ".toml":
                return tomllib.loads(text)
            return json5.loads(text)
        except ValueError as exc:
            raise InvalidConfig(f"Invalid configuration file {path}: {exc}") from exc

    def parse_config(self, config: Dict[str, Any]) -> List[RuleIR]:
        cfg = validate(Config, config)
        return [parse_rule(rule, strict_modifiers=self._strict_modifiers) for rule in cfg.key_strokes]

    def preferred_input(self, config: Dict[str, Any]) -> str | None:
        return validate(Config, config).preferred_input
