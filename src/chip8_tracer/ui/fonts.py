"""
UIフォント・配色管理モジュール。
"""
from PySide6.QtGui import QColor, QFont, QFontDatabase

# @intent:constant 画面表示の配色（点灯画素・消灯画素）。
PIXEL_ON_COLOR = QColor("#33FF66")
PIXEL_OFF_COLOR = QColor("#101010")

# @intent:responsibility 指定サイズのシステム等幅フォントを返します。
def get_monospace_font(size: int = 10) -> QFont:
    font = QFontDatabase.systemFont(QFontDatabase.FixedFont)
    font.setPointSize(size)
    return font
