"""Tests for display operations (DXYN) and the Display framebuffer."""

import jax.numpy as jnp
from chipvm import Display, execute
from conftest import setup_sprite_in_memory


class TestBasicSprites:
    """Test basic sprite drawing."""

    def test_basic_sprite_draw(self, fresh_state):
        """Test basic sprite drawing without collision."""
        state = fresh_state

        # Simple 2x2 box sprite
        sprite = [0xC0, 0xC0]  # 11000000, 11000000
        state = setup_sprite_in_memory(state, 0x300, sprite)

        state = execute(state, 0x600A)  # V0 = 10
        state = execute(state, 0x6105)  # V1 = 5
        state = execute(state, 0xA300)  # I = 0x300

        state = execute(state, 0xD012)

        # Display is indexed [row, column]
        assert state.display[5, 10]
        assert state.display[5, 11]
        assert state.display[6, 10]
        assert state.display[6, 11]
        assert not state.display[5, 12]
        assert jnp.sum(state.display) == 4

        assert state.V[15] == 0
        assert bool(state.draw_flag)

    def test_collision_detection(self, fresh_state):
        """Test collision flag when sprite overlaps existing pixels."""
        state = setup_sprite_in_memory(fresh_state, 0x400, [0x80])

        state = execute(state, 0x6014)  # V0 = 20
        state = execute(state, 0x610A)  # V1 = 10
        state = execute(state, 0xA400)  # I = 0x400

        state = execute(state, 0xD011)
        assert state.display[10, 20]
        assert state.V[15] == 0

        state = execute(state, 0xD011)
        assert not state.display[10, 20]
        assert state.V[15] == 1

    def test_xor_twice_restores_blank_screen(self, fresh_state):
        """Drawing the same sprite twice clears every pixel it set."""
        sprite = [0xF0, 0x90, 0xF0]
        state = setup_sprite_in_memory(fresh_state, 0x500, sprite)
        state = execute(state, 0x6008)
        state = execute(state, 0x610F)
        state = execute(state, 0xA500)

        state = execute(state, 0xD013)
        assert jnp.sum(state.display) == 10
        assert state.V[15] == 0

        state = execute(state, 0xD013)
        assert jnp.sum(state.display) == 0
        assert state.V[15] == 1

    def test_partial_overlap_keeps_other_pixels(self, fresh_state):
        """Only overlapping pixels flip off; VF reports the overlap."""
        state = setup_sprite_in_memory(fresh_state, 0x600, [0xC0, 0x60])
        state = execute(state, 0xA600)
        state = execute(state, 0xD001)  # 11 at row 0
        state = execute(state, 0xA601)
        state = execute(state, 0xD001)  # 011 at row 0

        assert state.display[0, 0]
        assert not state.display[0, 1]
        assert state.display[0, 2]
        assert state.V[15] == 1

    def test_font_glyph_draw(self, fresh_state):
        """Font glyph 0 draws a 4x5 ring."""
        state = execute(fresh_state, 0xA000)
        state = execute(state, 0xD005)

        assert jnp.sum(state.display) == 14
        assert not state.display[2, 1]


class TestScreenWrapping:
    """Sprites wrap around both edges."""

    def test_wrap_right_edge(self, fresh_state):
        """Columns past 63 continue at column 0."""
        state = setup_sprite_in_memory(fresh_state, 0x600, [0xFF])
        state = execute(state, 0x603C)  # V0 = 60
        state = execute(state, 0x6100)  # V1 = 0
        state = execute(state, 0xA600)

        state = execute(state, 0xD011)

        for col in (60, 61, 62, 63, 0, 1, 2, 3):
            assert state.display[0, col], f"column {col} not drawn"
        assert jnp.sum(state.display) == 8

    def test_wrap_bottom_edge(self, fresh_state):
        """Rows past 31 continue at row 0."""
        state = setup_sprite_in_memory(fresh_state, 0x700, [0x80, 0x80, 0x80])
        state = execute(state, 0x6000)  # V0 = 0
        state = execute(state, 0x611E)  # V1 = 30
        state = execute(state, 0xA700)

        state = execute(state, 0xD013)

        assert state.display[30, 0]
        assert state.display[31, 0]
        assert state.display[0, 0]

    def test_coordinate_wrapping(self, fresh_state):
        """Start coordinates beyond the screen wrap with modulo."""
        state = setup_sprite_in_memory(fresh_state, 0x800, [0x80])
        state = execute(state, 0x6046)  # V0 = 70 (70 % 64 = 6)
        state = execute(state, 0x6125)  # V1 = 37 (37 % 32 = 5)
        state = execute(state, 0xA800)

        state = execute(state, 0xD011)

        assert state.display[5, 6]

    def test_zero_height_draws_nothing(self, fresh_state):
        state = execute(fresh_state, 0xA000)
        state = execute(state, 0xD000)
        assert jnp.sum(state.display) == 0
        assert state.V[15] == 0

    def test_vf_cleared_without_collision(self, fresh_state):
        """VF is overwritten with 0 when nothing collides."""
        state = setup_sprite_in_memory(fresh_state, 0xB00, [0x80])
        state = execute(state, 0x6F01)  # VF = 1
        state = execute(state, 0xAB00)

        state = execute(state, 0xD011)

        assert state.V[15] == 0

    def test_sprite_rows_wrap_past_end_of_memory(self, fresh_state):
        """Row 1 of a sprite at 0xFFF is read from 0x000."""
        state = setup_sprite_in_memory(fresh_state, 0xFFF, [0x80])
        state = execute(state, 0xAFFF)

        state = execute(state, 0xD002)  # V0 = V1 = 0

        assert state.display[0, 0]
        assert not state.display[0, 1]
        assert state.display[1, 0:4].all()  # 0xF0, top of the "0" glyph
        assert not state.display[1, 4]
        assert jnp.sum(state.display) == 5


class TestDisplayComponent:
    """Test the mutable Display framebuffer."""

    def test_starts_blank_and_dirty(self):
        display = Display()
        assert jnp.sum(display.pixels) == 0
        assert display.take_redraw()
        assert not display.take_redraw()

    def test_draw_twice_collides(self):
        display = Display()
        display.take_redraw()

        assert display.draw(3, 4, [0xA0, 0x40]) is False
        assert display.pixels[4, 3]
        assert display.pixels[4, 5]
        assert display.pixels[5, 4]
        assert display.take_redraw()

        assert display.draw(3, 4, [0xA0, 0x40]) is True
        assert jnp.sum(display.pixels) == 0

    def test_draw_wraps(self):
        display = Display()
        display.draw(63, 31, [0xC0, 0xC0])
        assert display.pixels[31, 63]
        assert display.pixels[31, 0]
        assert display.pixels[0, 63]
        assert display.pixels[0, 0]

    def test_clear(self):
        display = Display()
        display.draw(0, 0, [0xFF])
        display.take_redraw()

        display.clear()

        assert jnp.sum(display.pixels) == 0
        assert display.take_redraw()

    def test_empty_sprite(self):
        display = Display()
        assert display.draw(0, 0, []) is False
        assert jnp.sum(display.pixels) == 0
