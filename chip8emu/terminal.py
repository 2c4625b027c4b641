"""A text-mode front end: ROM picker, disassembly, CPU state and display."""

from __future__ import annotations

import curses
import enum
import time
from dataclasses import dataclass
from pathlib import Path

from chip8emu.cpu import CPU, DISPLAY_HEIGHT, DISPLAY_WIDTH
from chip8emu.disassembler import Disassembly, disassemble_program
from chip8emu.keypad import KEYMAP, key_label, map_key

RENDER_INTERVAL = 0.016
KEY_TIMEOUT = 0.1
IDLE_SLEEP = 0.0005
SCROLL_STEP = 10
PIXEL_ON = "\u2588"
PIXEL_OFF = " "

ROM_TITLE = "Select ROM - Use ↑/↓ to navigate, Enter to load, Esc to quit"
LISTING_TITLE = "pgup/pgdown to scroll"
CPU_TITLE = "CPU info"
DISPLAY_TITLE = "UI - Press ESC to return to ROM selection"


class AppState(enum.Enum):
    """Which screen the application is showing."""

    ROM_SELECTION = enum.auto()
    EMULATING = enum.auto()


class KeyKind(enum.Enum):
    """Whether a key went down, auto-repeated, or came up."""

    PRESS = enum.auto()
    REPEAT = enum.auto()
    RELEASE = enum.auto()


@dataclass(frozen=True)
class KeyEvent:
    """A keyboard event.

    ``code`` is a single character, or one of ``"up"``, ``"down"``,
    ``"enter"``, ``"esc"``, ``"pageup"`` and ``"pagedown"``.
    """

    code: str
    kind: KeyKind = KeyKind.PRESS


_CURSES_KEYS = {
    curses.KEY_UP: "up",
    curses.KEY_DOWN: "down",
    curses.KEY_PPAGE: "pageup",
    curses.KEY_NPAGE: "pagedown",
    curses.KEY_ENTER: "enter",
    10: "enter",
    13: "enter",
    27: "esc",
}


def _event_from_curses(code: int) -> KeyEvent | None:
    if code in _CURSES_KEYS:
        return KeyEvent(_CURSES_KEYS[code])
    if 0 <= code < 0x110000 and chr(code).isprintable():
        return KeyEvent(chr(code))
    return None


def _put(screen, y: int, x: int, text: str, attr: int = 0) -> None:
    try:
        screen.addstr(y, x, text, attr)
    except curses.error:
        pass


def _draw_panel(screen, rect, title, lines, selected=None) -> None:
    top, left, height, width = rect
    if height < 2 or width < 2:
        return
    inner = width - 2
    _put(screen, top, left, "┌" + "─" * inner + "┐")
    for row in range(1, height - 1):
        _put(screen, top + row, left, "│")
        _put(screen, top + row, left + width - 1, "│")
    _put(screen, top + height - 1, left, "└" + "─" * inner + "┘")
    _put(screen, top, left + 1, title[:inner])
    for row, text in enumerate(lines[: height - 2]):
        attr = curses.A_REVERSE if row == selected else curses.A_NORMAL
        _put(screen, top + 1 + row, left + 1, text[:inner], attr)


class TerminalApp:
    """Lets the user pick a ROM, then runs it with a live debugger view."""

    def __init__(self, cpu: CPU, rom_dir: str | Path = "roms") -> None:
        self.cpu = cpu
        self.rom_dir = Path(rom_dir)
        self.items: list[Disassembly] = []
        self.offset = 0
        self.current_key: int | None = None
        self.last_key_time = time.monotonic()
        self.app_state = AppState.ROM_SELECTION
        self.selected_rom = 0
        self.rom_files = self._scan_rom_directory()

    def _scan_rom_directory(self) -> list[str]:
        try:
            entries = list(self.rom_dir.iterdir())
        except OSError:
            return []
        return sorted(entry.name for entry in entries if entry.is_file())

    def load_selected_rom(self) -> None:
        """Load the highlighted ROM and switch to emulation.

        Does nothing when no ROM is listed; raises OSError if it cannot be read.
        """
        if self.selected_rom >= len(self.rom_files):
            return
        data = (self.rom_dir / self.rom_files[self.selected_rom]).read_bytes()
        self.cpu.load_program(data)
        self.items = disassemble_program(self.cpu)
        self.offset = 0
        self.app_state = AppState.EMULATING

    def process_input_event(self, event: KeyEvent) -> bool:
        """Handle one key event; return True when the application should quit."""
        if self.app_state is AppState.ROM_SELECTION:
            return self._select_rom(event)
        self._emulation_input(event)
        return False

    def _select_rom(self, event: KeyEvent) -> bool:
        if event.kind is not KeyKind.PRESS:
            return False
        match event.code:
            case "up":
                if self.selected_rom > 0:
                    self.selected_rom -= 1
            case "down":
                if self.selected_rom + 1 < len(self.rom_files):
                    self.selected_rom += 1
            case "enter":
                try:
                    self.load_selected_rom()
                except OSError as error:
                    print(f"Error loading ROM: {error}")
            case "esc":
                print("Escape pressed, exiting...\n")
                return True
        return False

    def _emulation_input(self, event: KeyEvent) -> None:
        if event.kind is KeyKind.RELEASE:
            if event.code in KEYMAP:
                self.current_key = None
            return
        key = map_key(event.code)
        if key is not None:
            self.current_key = key
            self.last_key_time = time.monotonic()
            return
        match event.code:
            case "pageup":
                if self.offset != 0:
                    self.offset = max(0, self.offset - SCROLL_STEP)
            case "pagedown":
                if self.offset + 1 < self.cpu.program_size:
                    self.offset += SCROLL_STEP
            case "esc":
                self.cpu.reset()
                self.items.clear()
                self.offset = 0
                self.app_state = AppState.ROM_SELECTION

    def disassembly_lines(self) -> list[str]:
        """Return the program listing from the current scroll offset on."""
        return [
            f"{item.memory_location:#x} 0x{item.opcode:04X} {item.assembly}"
            for item in self.items[self.offset :]
        ]

    def cpu_info_lines(self) -> list[str]:
        """Return the lines of the CPU state panel."""
        cpu = self.cpu
        return [
            f"Opcode: {cpu.opcode:#x}",
            f"Program Counter: {cpu.program_counter:#x}",
            f"Register [I]: {cpu.i_register:#x}",
            *(f"Register {index}: {value:#x}" for index, value in enumerate(cpu.registers)),
            f"Delay Counter: {cpu.delay_timer:#x}",
            f"Sound Counter: {cpu.sound_timer:#x}",
            f"Key: {key_label(cpu.key_press)}",
        ]

    def display_lines(self) -> list[str]:
        """Return the CHIP-8 display as one text line per pixel row."""
        gfx = self.cpu.gfx
        return [
            "".join(PIXEL_ON if gfx[x][y] else PIXEL_OFF for x in range(DISPLAY_WIDTH))
            for y in range(DISPLAY_HEIGHT)
        ]

    def _step(self, now: float) -> None:
        if self.current_key is not None and now - self.last_key_time > KEY_TIMEOUT:
            self.current_key = None
        self.cpu.press_key(self.current_key)
        self.cpu.do_cycle()

    def _render(self, screen) -> None:
        screen.erase()
        height, width = screen.getmaxyx()
        if self.app_state is AppState.ROM_SELECTION:
            _draw_panel(
                screen, (0, 0, height, width), ROM_TITLE, self.rom_files, self.selected_rom
            )
        else:
            top, left = 1, 1
            inner_h, inner_w = max(height - 2, 0), max(width - 2, 0)
            first = inner_w * 20 // 100
            second = inner_w * 20 // 100
            third = inner_w - first - second
            _draw_panel(screen, (top, left, inner_h, first), LISTING_TITLE, self.disassembly_lines())
            _draw_panel(screen, (top, left + first, inner_h, second), CPU_TITLE, self.cpu_info_lines())
            _draw_panel(
                screen,
                (top, left + first + second, inner_h, third),
                DISPLAY_TITLE,
                ["", *self.display_lines()],
            )
        screen.refresh()

    def _loop(self, screen) -> None:
        curses.curs_set(0)
        screen.nodelay(True)
        screen.keypad(True)
        last_render = 0.0
        while True:
            code = screen.getch()
            if code != -1:
                event = _event_from_curses(code)
                if event is not None and self.process_input_event(event):
                    break
            now = time.monotonic()
            if self.app_state is AppState.EMULATING:
                self._step(now)
            if now - last_render >= RENDER_INTERVAL:
                self._render(screen)
                last_render = now
            time.sleep(IDLE_SLEEP)

    def run(self) -> None:
        """Take over the terminal until the user quits."""
        curses.wrapper(self._loop)