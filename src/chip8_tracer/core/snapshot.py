# chip8_tracer/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1命令実行後のCPUとバスの状態を記録した不変のデータ構造を定義します。
UIへの情報提供と、デバッグ時の状態記録に用いる責務を負います。
"""
from dataclasses import dataclass, field
from typing import List, Optional

from chip8_tracer.core.state import CpuState
from chip8_tracer.common.types import Nibbles
from chip8_tracer.transport.bus import BusAccess


# @intent:responsibility デコードされた命令の詳細を記録します。
@dataclass(frozen=True) # 不変データ構造
class Operation:
    """
    デコードされた命令の詳細（命令語、ニーモニック、オペランド）を記録するデータクラス。
    命令語から各フィールド (x, y, n, nn, nnn) を取り出すプロパティを提供します。
    """
    opcode: int # 例: 0x6A2F
    mnemonic: str # 例: "LD"
    operands: List[str] = field(default_factory=list) # 例: ["VA", "#2F"]
    pattern: int = 0 # 一致した命令パターン（ディスパッチキー）
    cycle_count: int = 1
    length: int = 2 # 命令のバイト長（CHIP-8は常に2）

    @property
    def opcode_hex(self) -> str:
        return f"{self.opcode:04X}"

    @property
    def nibbles(self) -> Nibbles:
        op = self.opcode
        return ((op >> 12) & 0xF, (op >> 8) & 0xF, (op >> 4) & 0xF, op & 0xF)

    @property
    def x(self) -> int:
        return (self.opcode >> 8) & 0xF

    @property
    def y(self) -> int:
        return (self.opcode >> 4) & 0xF

    @property
    def n(self) -> int:
        return self.opcode & 0xF

    @property
    def nn(self) -> int:
        return self.opcode & 0xFF

    @property
    def nnn(self) -> int:
        return self.opcode & 0xFFF

    # @intent:responsibility 表示用のアセンブリ表記を返します。
    def text(self) -> str:
        if self.operands:
            return f"{self.mnemonic} " + ", ".join(self.operands)
        return self.mnemonic

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True) # 不変データ構造
class Metadata:
    """
    実行に関するメタデータ（累計命令数、命令アドレスなど）を記録するデータクラス。
    """
    cycle_count: int
    address: int = 0 # 実行した命令のアドレス
    symbol_info: Optional[str] = None # 例: "0x0200: LD V0, #05"

# @intent:responsibility ある一時点におけるCPUとバスの状態を不変に記録します。
@dataclass(frozen=True) # 不変データ構造
class Snapshot:
    """
    ある一時点における、CPUとバスの状態を記録した不変のデータ構造。
    stateは生成時点の複製であり、以後の実行による変更の影響を受けません。
    """
    state: CpuState
    operation: Operation
    metadata: Metadata
    bus_activity: List[BusAccess] = field(default_factory=list)
    display_changed: bool = False # この命令でフレームバッファが変更されたか
