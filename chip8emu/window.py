"""A graphical front end that shows the CHIP-8 display in a window."""

from __future__ import annotations

from chip8emu.cpu import CPU, DISPLAY_HEIGHT, DISPLAY_WIDTH
from chip8emu.disassembler import disassemble_program
from chip8emu.keypad import KEYMAP

WIDTH = DISPLAY_WIDTH
HEIGHT = DISPLAY_HEIGHT
SCALE = 16
TITLE = "Test - ESC to exit"
PIXEL_ON = 0xFFF
PIXEL_OFF = 0x000


def _rgb(colour: int) -> tuple[int, int, int]:
    return (colour >> 16) & 0xFF, (colour >> 8) & 0xFF, colour & 0xFF


class WindowApp:
    """Runs a CPU and draws its display, scaled up, in a window."""

    def __init__(self, cpu: CPU) -> None:
        self.cpu = cpu
        self.offset = 0
        self.items = disassemble_program(cpu)

    def frame_buffer(self) -> list[int]:
        """Return the display as row-major colour values, one per pixel."""
        gfx = self.cpu.gfx
        return [
            PIXEL_ON if gfx[x][y] else PIXEL_OFF
            for y in range(HEIGHT)
            for x in range(WIDTH)
        ]

    def run(self) -> None:
        """Emulate until the window is closed or Escape is held."""
        import pygame

        pygame.init()
        try:
            screen = pygame.display.set_mode((WIDTH * SCALE, HEIGHT * SCALE))
            pygame.display.set_caption(TITLE)
            surface = pygame.Surface((WIDTH, HEIGHT))
            bindings = [
                (getattr(pygame, f"K_{char}"), code) for char, code in KEYMAP.items()
            ]
            on, off = _rgb(PIXEL_ON), _rgb(PIXEL_OFF)

            while True:
                if any(event.type == pygame.QUIT for event in pygame.event.get()):
                    break
                pressed = pygame.key.get_pressed()
                if pressed[pygame.K_ESCAPE]:
                    break

                held = next((code for key, code in bindings if pressed[key]), None)
                self.cpu.press_key(held)
                self.cpu.do_cycle()

                for index, colour in enumerate(self.frame_buffer()):
                    y, x = divmod(index, WIDTH)
                    surface.set_at((x, y), on if colour == PIXEL_ON else off)
                pygame.transform.scale(surface, screen.get_size(), screen)
                pygame.display.flip()
        finally:
            pygame.quit()