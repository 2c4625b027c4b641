"""Turn CHIP-8 opcodes into readable assembly text."""

from __future__ import annotations

from dataclasses import dataclass

from chip8emu.cpu import CPU, PROGRAM_START

_NOT_IMPLEMENTED = "Not implemented yet"


@dataclass(frozen=True)
class Disassembly:
    """One decoded instruction and where it lives in memory."""

    memory_location: int
    opcode: int
    assembly: str


def _hex(value: int) -> str:
    return f"0x{value:X}"


def _assembly(opcode: int) -> str:
    x = (opcode & 0x0F00) >> 8
    y = (opcode & 0x00F0) >> 4
    nn = opcode & 0x00FF
    nnn = opcode & 0x0FFF
    n = opcode & 0x000F

    match opcode & 0xF000:
        case 0x0000:
            if nnn == 0x0E0:
                return "ERASE"
            if nnn == 0x0EE:
                return "Return"
            return f"NOP {_hex(nnn)}"
        case 0x1000:
            return f"GOTO {_hex(nnn)}"
        case 0x2000:
            return f"DO {_hex(nnn)}"
        case 0x3000:
            return f"SKF V{x}={_hex(nn)}"
        case 0x4000:
            return f"SKF V{x}≠{_hex(nn)}"
        case 0x5000:
            return f"SKF V{x}=V{y}"
        case 0x6000:
            return f"V{x}={_hex(nn)}"
        case 0x7000:
            return f"V{x}+={_hex(nn)}"
        case 0x8000:
            arithmetic = {
                0x0: f"V{x}=V{y}",
                0x1: f"V{x}|=V{y}",
                0x2: f"V{x}&=V{y}",
                0x3: f"V{x}^=V{y}",
                0x4: f"V{x}+=V{y}",
                0x5: f"V{x}-=V{y}",
                0x6: f"V{x}=V{y}>>1",
                0x7: f"V{x}=V{y}-V{x}",
                0xE: f"V{x}=V{y}<<1",
            }
            return arithmetic.get(n, f"{_hex(opcode)} not handled yet")
        case 0x9000:
            return f"SKF V{x}≠V{y}"
        case 0xA000:
            return f"I={_hex(nnn)}"
        case 0xB000:
            return f"GOTO V0+{_hex(nnn)}"
        case 0xC000:
            return f"V{x}=RND.{_hex(nn)}"
        case 0xD000:
            return f"Draw {n} Rows @X{x},Y{y}"
        case 0xE000:
            keys = {0x9E: f"SKF V{x}=KEY", 0xA1: f"SKF V{x}≠KEY"}
            return keys.get(nn, _NOT_IMPLEMENTED)
        case _:
            misc = {
                0x07: f"V{x}=TIME",
                0x0A: f"V{x}=KEY",
                0x15: f"TIME=V{x}",
                0x18: f"TONE=V{x}",
                0x1E: f"I=I+V{x}",
                0x29: f"I=DSP,V{x}",
                0x33: f"MI=DEQ,V{x}",
                0x55: f"MI=V0:V{x}",
                0x65: f"V0:V{x}=MI",
            }
            return misc.get(nn, _NOT_IMPLEMENTED)


def decode(opcode: int, memory_location: int) -> Disassembly:
    """Decode a single opcode found at ``memory_location``."""
    return Disassembly(memory_location, opcode, _assembly(opcode))


def disassemble_program(cpu: CPU) -> list[Disassembly]:
    """Decode every instruction of the program loaded in ``cpu``.

    The program counter is left pointing at the start of the program.
    """
    memory = cpu.memory
    listing = [
        decode((memory[address] << 8) | memory[address + 1], address)
        for address in range(PROGRAM_START, cpu.program_size, 2)
    ]
    cpu.program_counter = PROGRAM_START
    return listing