"""
CHIP-8のフレームバッファを描画するウィジェット。
"""
from typing import Optional

from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtGui import QPainter, QPaintEvent
from PySide6.QtCore import QSize

from chip8_tracer.arch.chip8.framebuffer import Framebuffer
from chip8_tracer.ui.fonts import PIXEL_ON_COLOR, PIXEL_OFF_COLOR

# @intent:responsibility フレームバッファの内容を拡大表示します。フレームバッファは読み取りのみ行います。
class DisplayView(QWidget):
    def __init__(self, scale: int = 10, parent=None):
        super().__init__(parent)
        self._framebuffer: Optional[Framebuffer] = None
        self._scale = scale
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)

    def set_framebuffer(self, framebuffer: Framebuffer) -> None:
        self._framebuffer = framebuffer
        self.update()

    def sizeHint(self) -> QSize:
        if self._framebuffer is None:
            return QSize(64 * self._scale, 32 * self._scale)
        return QSize(self._framebuffer.width * self._scale, self._framebuffer.height * self._scale)

    # @intent:responsibility ウィジェットの大きさに合わせた1画素あたりのピクセル数を返します。
    def pixel_size(self) -> int:
        if self._framebuffer is None:
            return self._scale
        return max(1, min(self.width() // self._framebuffer.width, self.height() // self._framebuffer.height))

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        painter.fillRect(self.rect(), PIXEL_OFF_COLOR)
        if self._framebuffer is not None:
            size = self.pixel_size()
            for y, row in enumerate(self._framebuffer.rows()):
                for x, lit in enumerate(row):
                    if lit:
                        painter.fillRect(x * size, y * size, size, size, PIXEL_ON_COLOR)
        painter.end()
