"""
逆アセンブルコードを表示するウィジェット。
"""
from PySide6.QtWidgets import QWidget, QVBoxLayout, QTableWidget, QTableWidgetItem, QHeaderView
from PySide6.QtGui import QColor

from chip8_tracer.core.cpu import AbstractCpu
from chip8_tracer.ui.fonts import get_monospace_font

# @intent:responsibility 逆アセンブルされたコードを表形式で表示し、現在のPCをハイライトするUIウィジェットを提供します。
class CodeView(QWidget):
    def __init__(self, window: int = 64, parent=None):
        super().__init__(parent)
        self.layout = QVBoxLayout(self)
        self.layout.setContentsMargins(0, 0, 0, 0)

        self.table = QTableWidget()
        self.table.setColumnCount(3)
        self.table.setHorizontalHeaderLabels(["Address", "Word", "Mnemonic"])
        self.table.horizontalHeader().setSectionResizeMode(0, QHeaderView.ResizeToContents)
        self.table.horizontalHeader().setSectionResizeMode(1, QHeaderView.ResizeToContents)
        self.table.horizontalHeader().setSectionResizeMode(2, QHeaderView.Stretch)
        self.table.setFont(get_monospace_font(10))
        self.table.verticalHeader().setVisible(False)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        self.table.setSelectionBehavior(QTableWidget.SelectRows)
        self.table.setShowGrid(False)
        self.table.setStyleSheet("background-color: #101010; color: #BBBBBB;")
        self.layout.addWidget(self.table)

        self._window = window # PCから前後に表示するバイト数
        self.disassembled_data = []

    # @intent:responsibility 指定されたPC周辺のメモリを逆アセンブルして表示を更新します。
    def update_code(self, cpu: AbstractCpu, pc: int) -> None:
        # 命令境界に合わせるため、PCと同じ偶奇のアドレスから開始する
        start = max(pc - self._window, pc % 2)
        self.disassembled_data = cpu.disassemble(start, self._window * 2)
        self.table.setRowCount(len(self.disassembled_data))

        highlight = QColor("#404000")
        normal = QColor("#101010")
        current_row = -1
        for row, (addr, word, mnemonic) in enumerate(self.disassembled_data):
            items = [QTableWidgetItem(f"{addr:03X}"), QTableWidgetItem(word), QTableWidgetItem(mnemonic)]
            for col, item in enumerate(items):
                item.setBackground(highlight if addr == pc else normal)
                self.table.setItem(row, col, item)
            if addr == pc:
                current_row = row

        if current_row != -1:
            self.table.scrollToItem(self.table.item(current_row, 0), QTableWidget.PositionAtCenter)

    def reset_cache(self) -> None:
        self.disassembled_data = []
        self.table.setRowCount(0)
