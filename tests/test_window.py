from chip8emu.cpu import CPU
from chip8emu.disassembler import disassemble_program
from chip8emu.window import HEIGHT, PIXEL_OFF, PIXEL_ON, WIDTH, WindowApp


def _app(program=b""):
    cpu = CPU()
    if program:
        cpu.load_program(program)
    return WindowApp(cpu)


def test_blank_display_is_all_off():
    buffer = _app().frame_buffer()
    assert len(buffer) == WIDTH * HEIGHT
    assert set(buffer) == {PIXEL_OFF}


def test_lit_pixel_uses_row_major_index():
    app = _app()
    app.cpu.gfx[2][12] = True
    buffer = app.frame_buffer()
    assert buffer[12 * WIDTH + 2] == 0xFFF
    assert buffer.count(PIXEL_ON) == 1


def test_corner_pixels():
    app = _app()
    app.cpu.gfx[0][0] = True
    app.cpu.gfx[WIDTH - 1][HEIGHT - 1] = True
    buffer = app.frame_buffer()
    assert buffer[0] == PIXEL_ON
    assert buffer[-1] == PIXEL_ON
    assert buffer.count(PIXEL_ON) == 2


def test_buffer_follows_drawn_sprite():
    app = _app(bytes([0xA0, 0x00, 0xD0, 0x05]))
    app.cpu.do_cycle()
    app.cpu.do_cycle()
    buffer = app.frame_buffer()
    lit = [i for i, colour in enumerate(buffer) if colour == PIXEL_ON]
    expected = [
        y * WIDTH + x for y in range(HEIGHT) for x in range(WIDTH) if app.cpu.gfx[x][y]
    ]
    assert lit == expected
    assert lit


def test_items_hold_program_disassembly():
    program = bytes([0x00, 0xE0, 0x12, 0x00])
    app = _app(program)
    other = CPU()
    other.load_program(program)
    assert app.items == disassemble_program(other)
    assert app.cpu.program_counter == 0x200
    assert app.offset == 0