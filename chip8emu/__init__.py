"""A CHIP-8 emulator: CPU core, disassembler, keypad map, terminal and window front ends."""

__version__ = "0.1.1"

__all__ = ["cli", "cpu", "disassembler", "keypad", "terminal", "window"]