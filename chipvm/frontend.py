"""pygame window, host keyboard translation and pacing loop."""

import time
from typing import Optional

import pygame

from chipvm.config import EmulatorConfig
from chipvm.constants import SCREEN_HEIGHT, SCREEN_WIDTH
from chipvm.logging import get_logger
from chipvm.machine import Machine
from chipvm.rendering import create_color_scheme, display_to_rgb

logger = get_logger("chipvm.frontend")

# Keypad             Keyboard
# +-+-+-+-+          +-+-+-+-+
# |1|2|3|C|          |1|2|3|4|
# |4|5|6|D|          |Q|W|E|R|
# |7|8|9|E|    =>    |A|S|D|F|
# |A|0|B|F|          |Z|X|C|V|
# +-+-+-+-+          +-+-+-+-+
KEY_MAP = {
    pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
    pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
    pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
    pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
}


def translate_key(key: int) -> Optional[int]:
    """Map a pygame key code to a keypad index, or None if unmapped."""
    index = KEY_MAP.get(key)
    if index is None:
        logger.warning(f"Unmapped key pressed: {key}")
    return index


def handle_event(machine: Machine, event) -> bool:
    """Apply one pygame event to the machine. Returns False to quit."""
    if event.type == pygame.QUIT:
        return False
    if event.type == pygame.WINDOWFOCUSLOST:
        # KEYUP events are not delivered to an unfocused window
        machine.keypad.release_all()
    elif event.type in (pygame.KEYDOWN, pygame.KEYUP):
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            return False
        index = translate_key(event.key)
        if index is not None:
            machine.keypad.set(index, event.type == pygame.KEYDOWN)
    return True


def present(screen, machine: Machine, config: EmulatorConfig):
    """Blit the framebuffer to the window surface."""
    on_color, off_color = create_color_scheme(config.color_scheme)
    frame = display_to_rgb(machine.display.pixels, config.scale, on_color, off_color)
    # surfarray expects (width, height, 3)
    pygame.surfarray.blit_array(screen, frame.swapaxes(0, 1))
    pygame.display.flip()


def run_window(machine: Machine, config: EmulatorConfig):
    """Run the machine in a window until it is closed or the cycle budget runs out."""
    pygame.init()
    screen = pygame.display.set_mode((SCREEN_WIDTH * config.scale, SCREEN_HEIGHT * config.scale))
    pygame.display.set_caption("chipvm")

    running = True
    try:
        while running:
            for event in pygame.event.get():
                if not handle_event(machine, event):
                    running = False
                    break
            if not running:
                break

            machine.step()
            if machine.display.take_redraw():
                present(screen, machine, config)

            if config.cycles is not None and machine.cycles >= config.cycles:
                break
            time.sleep(config.cycle_delay)
    finally:
        pygame.quit()
