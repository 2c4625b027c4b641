"""The CHIP-8 virtual machine: memory, registers, timers, display and opcodes."""

from __future__ import annotations

import random

MEMORY_SIZE = 4096
PROGRAM_START = 0x200
DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32
REGISTER_COUNT = 16
FLAG = 0xF

FONT_SET = bytes(
    [
        0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
        0x20, 0x60, 0x20, 0x20, 0x70,  # 1
        0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
        0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
        0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
        0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
        0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
        0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
        0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
        0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
        0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
        0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
        0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
        0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
        0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
        0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
    ]
)


class UnknownOpcodeError(RuntimeError):
    """Raised when the CPU meets an opcode it does not implement."""

    def __init__(self, address: int, opcode: int) -> None:
        self.address = address
        self.opcode = opcode
        super().__init__(f"{address:#x} 0x{opcode:04X} not implemented yet")


def _blank_display() -> list[list[bool]]:
    return [[False] * DISPLAY_HEIGHT for _ in range(DISPLAY_WIDTH)]


class CPU:
    """A CHIP-8 interpreter.

    ``gfx`` is indexed as ``gfx[x][y]`` with 64 columns of 32 pixels.
    """

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Return the machine to its power-on state, fonts loaded."""
        self.opcode = 0
        self.memory = bytearray(MEMORY_SIZE)
        self.registers = bytearray(REGISTER_COUNT)
        self.i_register = 0
        self.program_counter = PROGRAM_START
        self.gfx = _blank_display()
        self.delay_timer = 0
        self.sound_timer = 0
        self.stack: list[int] = []
        self.key_press: int | None = None
        self.waiting_for_key: int | None = None
        self.program_size = 0
        self.memory[: len(FONT_SET)] = FONT_SET

    def load_program(self, data: bytes) -> None:
        """Copy a ROM image to 0x200 and point the program counter at it."""
        end = PROGRAM_START + len(data)
        if end > MEMORY_SIZE:
            raise ValueError(
                f"program of {len(data)} bytes does not fit in memory"
            )
        self.memory[PROGRAM_START:end] = data
        self.program_size = end
        self.program_counter = PROGRAM_START

    def press_key(self, key: int | None) -> None:
        """Set the key currently held down, or None for no key."""
        self.key_press = key

    def do_cycle(self) -> None:
        """Tick the timers, then fetch and execute one instruction."""
        if self.sound_timer > 0:
            self.sound_timer -= 1
        if self.delay_timer > 0:
            self.delay_timer -= 1

        if self.waiting_for_key is not None:
            if self.key_press is None:
                return
            self.registers[self.waiting_for_key] = self.key_press
            self.waiting_for_key = None

        self._fetch_opcode(self.program_counter)
        self.execute_opcode()

    def _fetch_opcode(self, address: int) -> None:
        self.opcode = (self.memory[address] << 8) | self.memory[address + 1]
        self._advance(2)

    def _advance(self, amount: int) -> None:
        self.program_counter = (self.program_counter + amount) & 0xFFFF

    def _skip_if(self, condition: bool) -> None:
        if condition:
            self._advance(2)

    def _unknown(self) -> None:
        raise UnknownOpcodeError(self.program_counter, self.opcode)

    def execute_opcode(self) -> None:
        """Execute the instruction held in ``opcode``."""
        op = self.opcode
        x = (op & 0x0F00) >> 8
        y = (op & 0x00F0) >> 4
        nn = op & 0x00FF
        nnn = op & 0x0FFF
        n = op & 0x000F
        v = self.registers

        match op & 0xF000:
            case 0x0000:
                if nnn == 0x0E0:
                    self.gfx = _blank_display()
                elif nnn == 0x0EE:
                    if not self.stack:
                        raise IndexError("return with an empty call stack")
                    self.program_counter = self.stack.pop()
                # any other 0NNN is a no-op
            case 0x1000:
                self.program_counter = nnn
            case 0x2000:
                self.stack.append(self.program_counter)
                self.program_counter = nnn
            case 0x3000:
                self._skip_if(v[x] == nn)
            case 0x4000:
                self._skip_if(v[x] != nn)
            case 0x5000:
                self._skip_if(v[x] == v[y])
            case 0x6000:
                v[x] = nn
            case 0x7000:
                v[x] = (v[x] + nn) & 0xFF
            case 0x8000:
                self._arithmetic(x, y, n)
            case 0x9000:
                self._skip_if(v[x] != v[y])
            case 0xA000:
                self.i_register = nnn
            case 0xB000:
                self.program_counter = v[0] + nnn
            case 0xC000:
                v[x] = nn & random.getrandbits(8)
            case 0xD000:
                self._draw(v[x], v[y], n)
            case 0xE000:
                if nn == 0x9E:
                    self._skip_if(self.key_press == v[x])
                elif nn == 0xA1:
                    self._skip_if(self.key_press != v[x])
                else:
                    self._unknown()
            case _:
                self._misc(x, nn)

    def _arithmetic(self, x: int, y: int, n: int) -> None:
        v = self.registers
        vx, vy = v[x], v[y]
        match n:
            case 0x0:
                v[x] = vy
            case 0x1:
                v[x] = vx | vy
            case 0x2:
                v[x] = vx & vy
            case 0x3:
                v[x] = vx ^ vy
            case 0x4:
                total = vx + vy
                v[x] = total & 0xFF
                v[FLAG] = int(total > 0xFF)
            case 0x5:
                v[x] = (vx - vy) & 0xFF
                v[FLAG] = int(vx >= vy)
            case 0x6:
                v[x] = vy >> 1
                v[FLAG] = vy & 0x1
            case 0x7:
                v[x] = (vy - vx) & 0xFF
                v[FLAG] = int(vy >= vx)
            case 0xE:
                v[x] = (vy << 1) & 0xFF
                v[FLAG] = (vy & 0x80) >> 7
            case _:
                self._unknown()

    def _draw(self, vx: int, vy: int, rows: int) -> None:
        v = self.registers
        v[FLAG] = 0
        for row in range(rows):
            sprite = self.memory[self.i_register + row]
            y_pos = (vy + row) % DISPLAY_HEIGHT
            for column in range(8):
                x_pos = (vx + column) % DISPLAY_WIDTH
                pixel = bool((sprite >> (7 - column)) & 1)
                if pixel and self.gfx[x_pos][y_pos]:
                    v[FLAG] = 1
                self.gfx[x_pos][y_pos] ^= pixel

    def _misc(self, x: int, nn: int) -> None:
        v = self.registers
        match nn:
            case 0x07:
                v[x] = self.delay_timer
            case 0x0A:
                if self.key_press is not None:
                    v[x] = self.key_press
                    self.waiting_for_key = None
                else:
                    self.waiting_for_key = x
                    self._advance(-2)
            case 0x15:
                self.delay_timer = v[x]
            case 0x18:
                self.sound_timer = v[x]
            case 0x1E:
                self.i_register = (self.i_register + v[x]) & 0xFFFF
            case 0x29:
                self.i_register = v[x] * 5
            case 0x33:
                value = v[x]
                i = self.i_register
                self.memory[i : i + 3] = bytes(
                    (value // 100, value % 100 // 10, value % 10)
                )
            case 0x55:
                i = self.i_register
                self.memory[i : i + x + 1] = v[: x + 1]
                if i + x + 1 > MEMORY_SIZE:
                    raise IndexError("register store past end of memory")
            case 0x65:
                i = self.i_register
                if i + x + 1 > MEMORY_SIZE:
                    raise IndexError("register load past end of memory")
                v[: x + 1] = self.memory[i : i + x + 1]
            case _:
                self._unknown()