"""Mapping between keyboard characters and the 16-key CHIP-8 keypad."""

from __future__ import annotations

# Keyboard layout:      CHIP-8 keypad:
#   1 2 3 4               1 2 3 C
#   q w e r               4 5 6 D
#   a s d f               7 8 9 E
#   z x c v               A 0 B F
KEYMAP: dict[str, int] = {
    "1": 0x1,
    "2": 0x2,
    "3": 0x3,
    "4": 0xC,
    "q": 0x4,
    "w": 0x5,
    "e": 0x6,
    "r": 0xD,
    "a": 0x7,
    "s": 0x8,
    "d": 0x9,
    "f": 0xE,
    "z": 0xA,
    "x": 0x0,
    "c": 0xB,
    "v": 0xF,
}


def map_key(char: str) -> int | None:
    """Return the keypad value for a keyboard character, or None if unmapped."""
    return KEYMAP.get(char)


def key_label(key: int | None) -> str:
    """Return the label shown for a held key: a space and its hex digit.

    An empty string is returned when no keypad key is held.
    """
    if key is None or not 0 <= key <= 0xF:
        return ""
    return f" {key:X}"