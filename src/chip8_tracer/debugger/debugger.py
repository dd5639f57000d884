# chip8_tracer/debugger/debugger.py
"""
デバッガモジュール。

CPUを1命令ずつ、または条件成立まで連続して実行させ、実行したSnapshotを
上限付きの履歴として保持します。停止理由はloggingで報告します。
"""
import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Dict, List, Optional

from chip8_tracer.core.cpu import AbstractCpu
from chip8_tracer.core.snapshot import Snapshot
from chip8_tracer.common.errors import Chip8Error
from chip8_tracer.transport.bus import BusAccessType

logger = logging.getLogger(__name__)

class BreakpointConditionType(Enum):
    PC_MATCH = "PC_MATCH"               # 命令の実行前: PCがvalueに一致
    MEMORY_READ = "MEMORY_READ"         # 実行後: addressが読まれた（命令フェッチを含む）
    MEMORY_WRITE = "MEMORY_WRITE"       # 実行後: addressに書き込まれた
    REGISTER_VALUE = "REGISTER_VALUE"   # 実行後: register_nameがvalueになっている
    REGISTER_CHANGE = "REGISTER_CHANGE" # 実行後: register_nameの値が変わった
    OPCODE_MATCH = "OPCODE_MATCH"       # 実行後: ニーモニックがmnemonicに一致

# @intent:data_structure 1つのブレークポイント。種別ごとに使うフィールドだけを設定します。
@dataclass(frozen=True)
class BreakpointCondition:
    condition_type: BreakpointConditionType
    value: Optional[int] = None
    address: Optional[int] = None
    register_name: Optional[str] = None  # 例: "V3", "I"
    mnemonic: Optional[str] = None       # 例: "DRW"
    enabled: bool = True

# @intent:responsibility CPUの実行制御、ブレークポイント判定、実行履歴の保持を行います。
class Debugger:
    def __init__(self, cpu: AbstractCpu, history_limit: int = 1024):
        if history_limit <= 0:
            raise ValueError("history_limit must be positive.")
        self._cpu = cpu
        self._breakpoints: List[BreakpointCondition] = []
        self._running = False
        self._registers_before: Dict[str, int] = cpu.get_register_map()
        self._last_snapshot: Optional[Snapshot] = None
        self._last_error: Optional[Chip8Error] = None
        # 古いSnapshotから破棄される
        self._history: Deque[Snapshot] = deque(maxlen=history_limit)

    # --- ブレークポイント管理 ---

    def add_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition not in self._breakpoints:
            self._breakpoints.append(condition)

    # @intent:responsibility 既存のブレークポイントを同じ位置で置き換えます（有効/無効の切り替えなど）。
    def update_breakpoint(self, old_condition: BreakpointCondition, new_condition: BreakpointCondition) -> None:
        try:
            self._breakpoints[self._breakpoints.index(old_condition)] = new_condition
        except ValueError:
            logger.debug("Breakpoint %s not registered; update ignored", old_condition)

    def remove_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition in self._breakpoints:
            self._breakpoints.remove(condition)

    def get_breakpoints(self) -> List[BreakpointCondition]:
        return list(self._breakpoints)

    # --- 状態参照 ---

    def get_history(self) -> List[Snapshot]:
        return list(self._history)

    def clear_history(self) -> None:
        self._history.clear()

    def get_last_snapshot(self) -> Optional[Snapshot]:
        return self._last_snapshot

    def get_last_error(self) -> Optional[Chip8Error]:
        return self._last_error

    def is_running(self) -> bool:
        return self._running

    # --- 条件判定 ---

    def _active(self, condition_type: BreakpointConditionType) -> List[BreakpointCondition]:
        return [bp for bp in self._breakpoints if bp.enabled and bp.condition_type == condition_type]

    def _hits_pc(self, pc: int) -> bool:
        return any(bp.value == pc for bp in self._active(BreakpointConditionType.PC_MATCH))

    # @intent:responsibility 実行済みの命令に対して、PC_MATCH以外の条件が成立したかを判定します。
    def _hits_after(self, snapshot: Snapshot, registers: Dict[str, int]) -> bool:
        reads = {a.address for a in snapshot.bus_activity if a.access_type == BusAccessType.READ}
        writes = {a.address for a in snapshot.bus_activity if a.access_type == BusAccessType.WRITE}
        before = self._registers_before

        if any(bp.address in reads for bp in self._active(BreakpointConditionType.MEMORY_READ)):
            return True
        if any(bp.address in writes for bp in self._active(BreakpointConditionType.MEMORY_WRITE)):
            return True
        for bp in self._active(BreakpointConditionType.REGISTER_VALUE):
            if bp.register_name in registers and registers[bp.register_name] == bp.value:
                return True
        for bp in self._active(BreakpointConditionType.REGISTER_CHANGE):
            name = bp.register_name
            if name in registers and name in before and registers[name] != before[name]:
                return True
        return any(
            snapshot.operation.mnemonic == bp.mnemonic
            for bp in self._active(BreakpointConditionType.OPCODE_MATCH)
        )

    # --- 実行制御 ---

    def step_instruction(self) -> Snapshot:
        """
        1命令を実行して履歴に追加します。
        Chip8Errorはlast_errorに記録した上で呼び出し元へ伝播します。
        """
        self._registers_before = self._cpu.get_register_map()
        try:
            snapshot = self._cpu.step()
        except Chip8Error as e:
            self._last_error = e
            raise
        self._last_error = None
        self._last_snapshot = snapshot
        self._history.append(snapshot)
        return snapshot

    def run(self, max_steps: Optional[int] = None) -> Optional[Snapshot]:
        """
        ブレークポイント、Chip8Error、stop()、max_stepsのいずれかで停止するまで実行し、
        最後に実行した命令のSnapshotを返します。
        開始位置のPC_MATCHは無視するため、停止した位置からそのまま再開できます。
        """
        self._running = True
        steps = 0
        while self._running and (max_steps is None or steps < max_steps):
            pc = self._cpu.get_state().pc
            if steps > 0 and self._hits_pc(pc):
                logger.info("Breakpoint hit at PC: %#06x", pc)
                break

            try:
                snapshot = self.step_instruction()
            except Chip8Error as e:
                logger.warning("Execution stopped at PC %#06x: %s", pc, e)
                break
            steps += 1

            if self._hits_after(snapshot, self._cpu.get_register_map()):
                logger.info("Breakpoint hit after PC: %#06x (%s)", snapshot.metadata.address, snapshot.operation.text())
                break

        self._running = False
        return self._last_snapshot

    def stop(self) -> None:
        self._running = False
