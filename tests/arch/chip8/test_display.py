# tests/arch/chip8/test_display.py
"""
retro_chip8.arch.chip8.display の単体テスト。
"""
import pytest

from retro_chip8.common.errors import DisplayRangeError
from retro_chip8.arch.chip8.display import DisplayBuffer

# @intent:test_suite XOR合成、衝突判定、端でのクリップ/回り込みを検証します。


@pytest.fixture
def display():
    return DisplayBuffer()


class TestDisplayBuffer:
    def test_initially_blank(self, display):
        assert display.is_blank()
        assert display.snapshot() == bytes(256)

    def test_aligned_draw_sets_bits_msb_first(self, display):
        collision = display.draw(8, 1, [0b10100000])
        assert collision is False
        assert display.pixel(8, 1)
        assert not display.pixel(9, 1)
        assert display.pixel(10, 1)
        assert display.snapshot()[1 * 8 + 1] == 0b10100000

    def test_unaligned_draw_spans_two_bytes(self, display):
        display.draw(4, 0, [0xFF])
        frame = display.snapshot()
        assert frame[0] == 0x0F
        assert frame[1] == 0xF0

    def test_drawing_same_sprite_twice_cancels_and_collides(self, display):
        sprite = [0xF0, 0x90, 0xF0]
        assert display.draw(13, 7, sprite) is False
        assert display.draw(13, 7, sprite) is True
        assert display.is_blank()

    def test_collision_only_when_lit_pixel_turns_off(self, display):
        display.draw(0, 0, [0b11000000])
        assert display.draw(0, 0, [0b00110000]) is False
        assert display.draw(0, 0, [0b00010000]) is True
        assert display.snapshot()[0] == 0b11100000

    def test_collision_in_spilled_byte(self, display):
        display.draw(8, 0, [0x80])
        assert display.draw(7, 0, [0xC0]) is True
        assert display.pixel(7, 0)
        assert not display.pixel(8, 0)

    def test_clipped_at_right_edge_by_default(self, display):
        display.draw(60, 0, [0xFF])
        for x in range(60, 64):
            assert display.pixel(x, 0)
        for x in range(0, 4):
            assert not display.pixel(x, 0)

    def test_wraps_at_right_edge_when_enabled(self):
        display = DisplayBuffer(wrap_horizontal=True)
        display.draw(60, 2, [0xFF])
        for x in list(range(60, 64)) + list(range(0, 4)):
            assert display.pixel(x, 2)
        assert not display.pixel(4, 2)

    def test_wrapped_pixels_stay_on_the_same_row(self):
        display = DisplayBuffer(wrap_horizontal=True)
        display.draw(62, 31, [0xF0])
        assert display.pixel(62, 31) and display.pixel(63, 31)
        assert display.pixel(0, 31) and display.pixel(1, 31)
        assert not display.pixel(0, 0)

    def test_rows_below_bottom_are_clipped(self, display):
        display.draw(0, 30, [0xFF, 0xFF, 0xFF, 0xFF])
        assert display.pixel(0, 30)
        assert display.pixel(0, 31)
        assert not display.pixel(0, 0)
        assert not display.pixel(0, 1)

    def test_empty_sprite_draws_nothing(self, display):
        assert display.draw(0, 0, []) is False
        assert display.is_blank()

    def test_clear(self, display):
        display.draw(0, 0, [0xFF])
        display.clear()
        assert display.is_blank()

    def test_snapshot_is_a_copy(self, display):
        frame = display.snapshot()
        display.draw(0, 0, [0xFF])
        assert frame[0] == 0

    @pytest.mark.parametrize("x, y", [(64, 0), (0, 32), (-1, 0), (0, -1)])
    def test_out_of_range_position(self, display, x, y):
        with pytest.raises(DisplayRangeError, match="out of range"):
            display.draw(x, y, [0x80])
        with pytest.raises(DisplayRangeError):
            display.pixel(x, y)

    @pytest.mark.parametrize("bad_row", [0x100, 0x1FF, -1])
    def test_sprite_row_wider_than_a_byte_is_rejected(self, display, bad_row):
        with pytest.raises(DisplayRangeError, match="8-bit"):
            display.draw(0, 0, [0xFF, bad_row])
        assert display.is_blank()
