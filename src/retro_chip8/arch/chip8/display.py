# src/retro_chip8/arch/chip8/display.py
"""
CHIP-8 ディスプレイバッファ。

64x32のモノクロ画面を1ピクセル1ビットで保持します（1バイト = 横8ピクセル、MSBが左端）。
ピクセル (x, y) はバイト x // 8 + y * 8 のビット (7 - x % 8) に格納されます。
CPUへの依存はありません。
"""
from typing import Iterable

from retro_chip8.common.errors import DisplayRangeError
from retro_chip8.arch.chip8.constants import (
    DISPLAY_WIDTH, DISPLAY_HEIGHT, DISPLAY_ROW_BYTES, DISPLAY_BUFFER_SIZE
)


# @intent:responsibility パックされたピクセルストアを所有し、消去・XOR描画・スナップショットを提供します。
class DisplayBuffer:
    """
    パックされたビットマップ画面。

    wrap_horizontal が False の場合、行の最後のバイトに掛かったスプライトの
    右側部分は描画されません（クリップ）。True の場合は同じ行の先頭バイトへ回り込みます。
    縦方向は常にクリップされます。
    """
    def __init__(self, wrap_horizontal: bool = False):
        self._buffer = bytearray(DISPLAY_BUFFER_SIZE)
        self.wrap_horizontal = wrap_horizontal

    # @intent:responsibility 全ピクセルを消灯します。
    def clear(self) -> None:
        self._buffer[:] = bytes(DISPLAY_BUFFER_SIZE)

    @staticmethod
    def _check_position(x: int, y: int) -> None:
        if not (0 <= x < DISPLAY_WIDTH and 0 <= y < DISPLAY_HEIGHT):
            raise DisplayRangeError(
                f"Position ({x}, {y}) out of range for a {DISPLAY_WIDTH}x{DISPLAY_HEIGHT} display."
            )

    def _xor(self, index: int, bits: int) -> bool:
        """バイト index に bits をXORし、点灯していたビットが消えたかを返す。"""
        before = self._buffer[index]
        self._buffer[index] = before ^ bits
        return (before & bits) != 0

    # @intent:responsibility スプライトをXOR合成し、衝突（点灯ピクセルの消灯）の有無を返します。
    # @intent:pre-condition x0, y0 は呼び出し元で画面サイズの剰余を取った値である必要があります。
    def draw(self, x0: int, y0: int, sprite: Iterable[int]) -> bool:
        """
        sprite の各バイトを1行として (x0, y0) から下方向に描画します。
        x0 が8の倍数でない場合、各バイトは隣接する2つのバッファバイトに分割して書き込まれます。
        画面下端を越える行は描画されません。
        8bitに収まらない行が含まれる場合は、何も描画せずにDisplayRangeErrorを送出します。
        """
        self._check_position(x0, y0)
        rows = list(sprite)
        for bits in rows:
            if not 0 <= bits <= 0xFF:
                raise DisplayRangeError(f"Sprite row {bits:#x} is not an 8-bit value.")
        column, offset = divmod(x0, 8)
        collision = False

        for row, bits in enumerate(rows):
            y = y0 + row
            if y >= DISPLAY_HEIGHT:
                break
            index = y * DISPLAY_ROW_BYTES + column
            if offset == 0:
                collision |= self._xor(index, bits)
                continue

            collision |= self._xor(index, bits >> offset)
            spill = (bits << (8 - offset)) & 0xFF
            if column < DISPLAY_ROW_BYTES - 1:
                collision |= self._xor(index + 1, spill)
            elif self.wrap_horizontal:
                collision |= self._xor(y * DISPLAY_ROW_BYTES, spill)

        return collision

    # @intent:responsibility 単一ピクセルの点灯状態を返します。
    def pixel(self, x: int, y: int) -> bool:
        self._check_position(x, y)
        column, offset = divmod(x, 8)
        return bool(self._buffer[y * DISPLAY_ROW_BYTES + column] & (0x80 >> offset))

    # @intent:responsibility パックされたバッファのコピー（256バイト）を返します。
    def snapshot(self) -> bytes:
        return bytes(self._buffer)

    def is_blank(self) -> bool:
        return not any(self._buffer)
