# chip8_tracer/core/state.py
"""
Core Layer (CPU状態)

命令サイクルが参照する最小限のレジスタ（pc, sp）を定義します。
"""
from dataclasses import dataclass

# @intent:responsibility 全アーキテクチャ共通のレジスタを保持します。固有のレジスタはサブクラスで追加します。
@dataclass
class CpuState:
    pc: int = 0x0000
    sp: int = 0x0000 # CHIP-8ではコールスタックの深さ
