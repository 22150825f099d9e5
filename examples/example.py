"""Headless demo: count from 0 to 255 on screen with BCD digits."""

import time

from chipvm import Machine, render_ascii


def assemble(*instructions):
    return b"".join(instruction.to_bytes(2, "big") for instruction in instructions)


COUNTER_PROGRAM = assemble(
    0x6400,  # V4 = 0 (counter)
    0x00E0,  # clear
    0xA300,  # I = 0x300
    0xF433,  # BCD V4 -> [I..I+2]
    0xF265,  # V0..V2 = digits
    0x6500,  # V5 = x
    0x6600,  # V6 = y
    0xF029,  # I = glyph(V0)
    0xD565,  # draw
    0x7505,  # x += 5
    0xF129,  # I = glyph(V1)
    0xD565,
    0x7505,
    0xF229,  # I = glyph(V2)
    0xD565,
    0x7401,  # counter += 1
    0x1202,  # loop
)


if __name__ == "__main__":
    machine = Machine()
    machine.load(COUNTER_PROGRAM)

    start = time.time()
    machine.step()
    print(f"First cycle (includes compilation): {time.time() - start:.3f}s")

    cycles = 16 * 42
    start = time.time()
    machine.run(cycles, progress=True)
    elapsed = time.time() - start
    print(f"{cycles} cycles in {elapsed:.3f}s ({cycles / elapsed:,.0f} cycles/s)")

    print(render_ascii(machine.display.pixels))
    print(f"V4 = {int(machine.state.V[4])}")
