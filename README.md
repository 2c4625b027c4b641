# chip8emu

A CHIP-8 emulator. It has a CPU core covering the classic instruction set, a
disassembler, and two front ends:

- **Terminal mode** (the default) is a full-screen curses interface. You pick a
  ROM from the `roms/` directory under the current working directory, then
  watch it run beside its disassembly, the CPU registers and timers, and the
  64×32 display.
- **Window mode** opens a pygame window, scaled 16 times, and runs
  `roms/PONG.c8` from the current working directory.

## Installation

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

Terminal mode uses the standard-library `curses` module, so it needs a
platform where that module is available.

## Usage

Put your ROM files in a `roms/` directory inside the current working
directory, then start the emulator:

```
chip8
```

To run in a graphical window:

```
chip8 --window
```

The command exits with status 1 and an error message if a file it needs
cannot be read (for example when `roms/PONG.c8` is missing in window mode).

### Terminal mode controls

ROM selection:

| Key        | Action          |
|------------|-----------------|
| ↑ / ↓      | Move selection  |
| Enter      | Load ROM        |
| Esc        | Quit            |

While emulating:

| Key             | Action                            |
|-----------------|-----------------------------------|
| PgUp / PgDn     | Scroll the disassembly by 10 lines |
| Esc             | Reset and return to ROM selection |

Terminals do not report key releases, so a keypad key counts as held for
100 ms after its last press or auto-repeat.

### Keypad

The 16-key CHIP-8 keypad is mapped onto the left side of a QWERTY keyboard:

```
Keyboard        CHIP-8
1 2 3 4         1 2 3 C
q w e r    ->   4 5 6 D
a s d f         7 8 9 E
z x c v         A 0 B F
```

In window mode, close the window or hold Esc to exit.

## Library use

The core can be driven directly:

```python
from chip8emu.cpu import CPU
from chip8emu.disassembler import disassemble_program

cpu = CPU()
cpu.load_program(bytes([0x60, 0x05, 0x70, 0x01]))
for line in disassemble_program(cpu):
    print(hex(line.memory_location), line.assembly)   # 0x200 V0=0x5, 0x202 V0+=0x1

cpu.do_cycle()  # V0 = 0x5
cpu.do_cycle()  # V0 += 0x1
print(cpu.registers[0])  # 6
```

- `chip8emu.cpu.CPU` holds memory, registers, timers, the call stack and the
  display (`gfx[x][y]`). `do_cycle()` ticks the timers and runs one
  instruction; `press_key()` sets the key held down; `reset()` restores the
  power-on state.
- An opcode the CPU does not know raises `chip8emu.cpu.UnknownOpcodeError`.
- `chip8emu.disassembler.decode(opcode, memory_location)` returns a
  `Disassembly` with the instruction's assembly text.
- `chip8emu.keypad.map_key()` and `key_label()` convert between keyboard
  characters and keypad values.

## Limitations

- There is no sound: the sound timer counts down but nothing is played.
- Only the classic CHIP-8 instructions are run; extended instruction sets
  are not supported.
- Window mode always runs `roms/PONG.c8`; there is no option to choose
  another ROM there.
- Timers tick once per executed cycle rather than at a fixed 60 Hz.