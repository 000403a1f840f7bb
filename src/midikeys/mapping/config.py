from __future__ import annotations

from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class MidiEntryConfig(BaseModel):
    """One `midi` entry; field values stay raw until the DSL parses them."""

    model_config = ConfigDict(extra="ignore")

    type: Optional[Any] = None
    cc: Optional[Any] = None
    on: Optional[Any] = None
    off: Optional[Any] = None
    number: Optional[Any] = None
    channel: Optional[Any] = None
    value: Optional[Any] = None
    velocity: Optional[Any] = None


class KeyStrokeConfig(BaseModel):
    key: Union[str, List[str]]
    midi: List[MidiEntryConfig]


class Config(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    preferred_input: Optional[str] = Field(default=None, alias="preferredInput")
    key_strokes: List[KeyStrokeConfig] = Field(default_factory=list, alias="keyStrokes")
