# tests/ui/test_code_view_logic.py
"""
CodeViewの更新ロジック（逆アセンブル範囲とPCのハイライト）を検証するテスト。
UIウィジェットですが、QApplicationがあればロジックのテストは可能です。
"""
import os
import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication

from chip8_tracer.ui.code_view import CodeView
from chip8_tracer.arch.chip8.cpu import Chip8Cpu

# PySide6のテストにはQApplicationのインスタンスが必要
@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app

class TestCodeViewLogic:
    @pytest.fixture
    def setup_code_view(self, qapp):
        cpu = Chip8Cpu()
        cpu.load_rom(bytes([0x00, 0xE0, 0x60, 0x05, 0x12, 0x00]))
        code_view = CodeView(window=8)
        return code_view, cpu

    def test_initial_update(self, setup_code_view):
        code_view, cpu = setup_code_view
        code_view.update_code(cpu, 0x200)

        assert len(code_view.disassembled_data) == 8
        assert code_view.disassembled_data[0][0] == 0x1F8
        assert code_view.table.rowCount() == len(code_view.disassembled_data)

    def test_current_row_contents(self, setup_code_view):
        code_view, cpu = setup_code_view
        code_view.update_code(cpu, 0x202)

        rows = {code_view.table.item(r, 0).text(): r for r in range(code_view.table.rowCount())}
        row = rows["202"]
        assert code_view.table.item(row, 1).text() == "6005"
        assert code_view.table.item(row, 2).text() == "LD V0, #05"

    def test_window_is_clamped_at_start_of_memory(self, setup_code_view):
        code_view, cpu = setup_code_view
        code_view.update_code(cpu, 0x004)
        assert code_view.disassembled_data[0][0] == 0x000

    def test_odd_pc_keeps_alignment(self, setup_code_view):
        code_view, cpu = setup_code_view
        code_view.update_code(cpu, 0x003)
        assert all(addr % 2 == 1 for addr, _, _ in code_view.disassembled_data)

    def test_reset_cache(self, setup_code_view):
        code_view, cpu = setup_code_view
        code_view.update_code(cpu, 0x200)
        code_view.reset_cache()
        assert code_view.disassembled_data == []
        assert code_view.table.rowCount() == 0
