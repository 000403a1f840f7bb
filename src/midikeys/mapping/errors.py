from __future__ import annotations

import json
from typing import Any


class ConfigError(ValueError):
    """A configuration rule that cannot be compiled.

    `source` holds the raw rule or midi entry the error was found in.
    """

    def __init__(self, message: str, source: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.source = source

    def __str__(self) -> str:
        if self.source is None:
            return self.message
        return f"{self.message}:\n{_dump(self.source)}"


class InvalidConfig(ConfigError):
    """The document does not have the keyStrokes/midi structure."""


class InvalidKeyStroke(ConfigError):
    pass


class UnknownMidiType(ConfigError):
    pass


class InvalidNumber(ConfigError):
    pass


class InvalidChannel(ConfigError):
    pass


class InvalidValue(ConfigError):
    pass


def _dump(source: Any) -> str:
    try:
        return json.dumps(source, default=str)
    except ValueError:
        return repr(source)
