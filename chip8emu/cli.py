"""Command-line entry point for the emulator."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from chip8emu.cpu import CPU
from chip8emu.terminal import TerminalApp
from chip8emu.window import WindowApp

WINDOW_ROM = "roms/PONG.c8"


def read_rom_file(filename: str | Path) -> bytes:
    """Return the whole contents of a ROM file."""
    return Path(filename).read_bytes()


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chip8",
        description="A CHIP-8 emulator (terminal mode by default)",
    )
    parser.add_argument(
        "--window",
        action="store_true",
        help="Run in window mode instead of terminal mode",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the emulator; return the process exit status."""
    args = _parser().parse_args(argv)
    try:
        if args.window:
            cpu = CPU()
            cpu.load_program(read_rom_file(WINDOW_ROM))
            WindowApp(cpu).run()
        else:
            TerminalApp(CPU()).run()
    except OSError as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())