from __future__ import annotations

from typing import FrozenSet


# Modifier names understood by the keystroke injector.
MODIFIER_NAMES: FrozenSet[str] = frozenset({"alt", "shift", "command", "ctrl"})

# Multi-character key names understood by the keystroke injector. Any single
# character is accepted as a key as-is.
KEY_NAMES: FrozenSet[str] = frozenset(
    {
        "backspace",
        "delete",
        "enter",
        "tab",
        "escape",
        "up",
        "down",
        "right",
        "left",
        "home",
        "end",
        "pageup",
        "pagedown",
        *(f"f{i}" for i in range(1, 13)),
        "command",
        "alt",
        "control",
        "shift",
        "right_shift",
        "space",
        "printscreen",  # no macOS
        "insert",  # no macOS
        "audio_mute",
        "audio_vol_down",
        "audio_vol_up",
        "audio_play",
        "audio_stop",
        "audio_pause",
        "audio_prev",
        "audio_next",
        "audio_rewind",  # linux only
        "audio_forward",  # linux only
        "audio_repeat",  # linux only
        "audio_random",  # linux only
        *(f"numpad_{i}" for i in range(10)),  # no linux
        "lights_mon_up",
        "lights_mon_down",
        "lights_kbd_toggle",
        "lights_kbd_up",
        "lights_kbd_down",
    }
)


def is_valid_key(key: str) -> bool:
    return len(key) == 1 or key in KEY_NAMES


def is_valid_modifier(modifier: str) -> bool:
    return modifier in MODIFIER_NAMES
