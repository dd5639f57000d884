# chip8_tracer/core/cpu.py
"""
Core Layer (命令サイクル)

命令サイクル（フェッチ → デコード → PC更新 → 実行 → 記録）の骨組みを定義します。
命令語の読み方と各命令の意味はアーキテクチャ側のサブクラスが与えます。
"""
from abc import ABC, abstractmethod
from copy import deepcopy
from typing import Dict, List

from chip8_tracer.transport.bus import Bus
from chip8_tracer.core.snapshot import Metadata, Operation, Snapshot
from chip8_tracer.core.state import CpuState
from chip8_tracer.common.errors import Chip8Error
from chip8_tracer.common.types import DisassemblyLine, RegisterLayoutInfo

# @intent:responsibility 命令サイクルの共通手順と、UI・デバッガ向けの観測インターフェースを定義します。
class AbstractCpu(ABC):
    """
    状態オブジェクトは get_state() で参照させ、置き換えは reset() と restore_state() に限ります。
    """
    def __init__(self, bus: Bus):
        self._bus = bus
        self._state: CpuState = self._create_initial_state()
        self._cycle_count = 0

    @abstractmethod
    def _create_initial_state(self) -> CpuState:
        pass

    def reset(self) -> None:
        self._state = self._create_initial_state()
        self._cycle_count = 0

    def get_state(self) -> CpuState:
        return self._state

    # @intent:responsibility 保存済みの状態の複製をCPUに設定します。
    def restore_state(self, state: CpuState) -> None:
        self._state = deepcopy(state)

    def get_bus(self) -> Bus:
        return self._bus

    # @intent:responsibility リセット以降に実行した命令サイクル数を返します。
    def get_cycle_count(self) -> int:
        return self._cycle_count

    # @intent:post-condition PCは変更しません。
    @abstractmethod
    def _fetch(self) -> int:
        pass

    # @intent:post-condition 解釈できない命令語ではChip8Errorを送出し、状態は変更しません。
    @abstractmethod
    def _decode(self, opcode: int) -> Operation:
        pass

    @abstractmethod
    def _execute(self, operation: Operation) -> None:
        pass

    # @intent:responsibility 1命令を実行し、実行後の状態とバスアクセスを記録したSnapshotを返します。
    def step(self) -> Snapshot:
        """
        フェッチとデコードは状態を変えずに行い、PCを進めてから命令を実行します。
        実行中にChip8Errorが発生した場合はPCを命令の先頭に戻して再送出するため、
        ホストは同じ命令を報告・再試行でき、リセットも選べます。
        """
        self._bus.get_and_clear_activity_log()
        address = self._state.pc

        operation = self._decode(self._fetch())

        self._update_pc(operation)
        try:
            self._execute(operation)
        except Chip8Error:
            self._state.pc = address
            raise

        return self._create_snapshot(address, operation)

    def _update_pc(self, operation: Operation) -> None:
        self._state.pc = (self._state.pc + operation.length) & 0xFFFF

    def _create_snapshot(self, address: int, operation: Operation) -> Snapshot:
        self._cycle_count += operation.cycle_count
        return Snapshot(
            state=deepcopy(self._state),
            operation=operation,
            metadata=Metadata(
                cycle_count=self._cycle_count,
                address=address,
                symbol_info=f"{address:#06x}: {operation.text()}",
            ),
            bus_activity=self._bus.get_and_clear_activity_log(),
            display_changed=self._display_changed(operation),
        )

    # @intent:responsibility 命令が画面を変更したかどうかを返します。画面を持たないCPUでは常にFalse。
    def _display_changed(self, operation: Operation) -> bool:
        return False

    # --- 観測インターフェース（UI・デバッガ向け） ---

    # @intent:responsibility レジスタ名から現在値への辞書を返します。
    @abstractmethod
    def get_register_map(self) -> Dict[str, int]:
        pass

    # @intent:responsibility レジスタの表示グループとビット幅を返します。
    @abstractmethod
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        pass

    @abstractmethod
    def get_flag_state(self) -> Dict[str, bool]:
        pass

    # @intent:responsibility メモリ範囲を (address, hex_bytes, mnemonic) の列に変換します。バスのログは汚しません。
    @abstractmethod
    def disassemble(self, start_addr: int, length: int) -> List[DisassemblyLine]:
        pass
