# src/retro_chip8/ui/screen.py
"""
Screen モジュール。

パックされた64x32の画面バッファを、拡大した矩形の集まりとして描画するウィジェットを提供します。
"""
from PySide6.QtWidgets import QWidget
from PySide6.QtCore import QSize, Slot
from PySide6.QtGui import QColor, QPainter, QPaintEvent

from retro_chip8.arch.chip8.constants import DISPLAY_BUFFER_SIZE, DISPLAY_HEIGHT, DISPLAY_ROW_BYTES, DISPLAY_WIDTH
from retro_chip8.host.scheduler import DisplaySink


# @intent:responsibility 最後に受け取ったフレームを保持し、点灯ピクセルをscale四方の矩形で描画します。
class ScreenWidget(QWidget):
    def __init__(self, scale: int = 8, foreground: str = "#FFFFFF", background: str = "#000000", parent=None):
        super().__init__(parent)
        if scale <= 0:
            raise ValueError(f"Scale must be positive, got {scale}.")
        self._scale = scale
        self._foreground = QColor(foreground)
        self._background = QColor(background)
        self._frame = bytes(DISPLAY_BUFFER_SIZE)
        self.setFixedSize(self.sizeHint())

    @property
    def frame(self) -> bytes:
        return self._frame

    @property
    def scale(self) -> int:
        return self._scale

    def sizeHint(self) -> QSize:
        return QSize(DISPLAY_WIDTH * self._scale, DISPLAY_HEIGHT * self._scale)

    # @intent:responsibility 新しいフレームを保持し、再描画をスケジュールします。
    @Slot(bytes)
    def set_frame(self, frame: bytes) -> None:
        if len(frame) != DISPLAY_BUFFER_SIZE:
            raise ValueError(f"Frame must be {DISPLAY_BUFFER_SIZE} bytes, got {len(frame)}.")
        self._frame = bytes(frame)
        self.update()

    # @intent:responsibility 1bit/ピクセルのフレームから点灯しているピクセル座標を列挙します。
    def lit_pixels(self):
        frame = self._frame
        for y in range(DISPLAY_HEIGHT):
            row = y * DISPLAY_ROW_BYTES
            for column in range(DISPLAY_ROW_BYTES):
                byte = frame[row + column]
                if not byte:
                    continue
                for bit in range(8):
                    if byte & (0x80 >> bit):
                        yield column * 8 + bit, y

    def paintEvent(self, event: QPaintEvent):
        painter = QPainter(self)
        painter.fillRect(self.rect(), self._background)
        scale = self._scale
        for x, y in self.lit_pixels():
            painter.fillRect(x * scale, y * scale, scale, scale, self._foreground)
        painter.end()


# @intent:responsibility スケジューラからのフラッシュ要求をScreenWidgetに中継します。
class ScreenSink(DisplaySink):
    def __init__(self, widget: ScreenWidget):
        self.widget = widget
        self.frames_flushed = 0

    def flush(self, frame: bytes) -> None:
        self.frames_flushed += 1
        self.widget.set_frame(frame)
