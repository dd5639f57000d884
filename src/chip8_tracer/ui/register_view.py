# src/chip8_tracer/ui/register_view.py
"""
レジスタ表示ウィジェット。
CPUが返すレジスタレイアウト（グループとビット幅）から表示欄を組み立てます。
"""
from typing import Dict, Optional
from PySide6.QtWidgets import QWidget, QVBoxLayout, QGridLayout, QLabel, QGroupBox
from PySide6.QtCore import Qt

from chip8_tracer.core.cpu import AbstractCpu
from chip8_tracer.ui.fonts import get_monospace_font

# @intent:responsibility グループごとにレジスタ名と16進値を並べて表示します。
class RegisterView(QWidget):
    COLUMNS = 4 # 1行に並べるレジスタ数

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setStyleSheet("background-color: #101010; color: #BBBBBB;")
        self._root = QVBoxLayout(self)
        self._root.setContentsMargins(4, 4, 4, 4)
        self._font = get_monospace_font(10)
        self._cpu: Optional[AbstractCpu] = None
        # レジスタ名 -> (値ラベル, 16進桁数)
        self._fields: Dict[str, tuple] = {}

    def set_cpu(self, cpu: AbstractCpu) -> None:
        self._cpu = cpu
        self._rebuild()

    # @intent:responsibility 既存の表示欄を破棄し、CPUのレイアウトから作り直します。
    def _rebuild(self) -> None:
        while self._root.count():
            item = self._root.takeAt(0)
            if item.widget():
                item.widget().deleteLater()
        self._fields.clear()

        for group in self._cpu.get_register_layout():
            box = QGroupBox(group.group_name)
            grid = QGridLayout(box)
            grid.setHorizontalSpacing(10)
            for index, reg in enumerate(group.registers):
                digits = (reg.width + 3) // 4
                name = QLabel(reg.name)
                value = QLabel("0x" + "0" * digits)
                value.setFont(self._font)
                value.setStyleSheet("color: #33FF66;")
                value.setAlignment(Qt.AlignRight | Qt.AlignVCenter)
                row, col = divmod(index, self.COLUMNS)
                grid.addWidget(name, row, col * 2)
                grid.addWidget(value, row, col * 2 + 1)
                self._fields[reg.name] = (value, digits)
            self._root.addWidget(box)
        self._root.addStretch()

    def update_registers(self) -> None:
        if self._cpu is None:
            return
        for name, current in self._cpu.get_register_map().items():
            field = self._fields.get(name)
            if field is not None:
                label, digits = field
                label.setText(f"0x{current:0{digits}X}")

    # @intent:responsibility レジスタ名に対応する表示中の文字列を返します。
    def displayed_value(self, name: str) -> str:
        return self._fields[name][0].text()
