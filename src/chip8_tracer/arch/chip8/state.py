# src/chip8_tracer/arch/chip8/state.py
"""
CHIP-8 CPU固有の状態定義。
"""
from dataclasses import dataclass, field
from typing import List

from chip8_tracer.core.state import CpuState
from chip8_tracer.common.errors import RegisterIndexOutOfRange
from chip8_tracer.arch.chip8.constants import PROGRAM_START, REGISTER_COUNT, FLAG_REGISTER

# @intent:responsibility CHIP-8の全てのレジスタ（V0-VF, I, PC）、コールスタック、タイマーの状態を保持します。
@dataclass
class Chip8CpuState(CpuState):
    """
    CHIP-8 CPUのレジスタ状態を保持するデータクラス。
    spは常にstackの深さと一致します。
    """
    pc: int = PROGRAM_START
    v: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT) # V0-VF (8bit)
    i: int = 0x0000    # Index Register (16bit)
    stack: List[int] = field(default_factory=list) # Return addresses
    delay_timer: int = 0x00
    sound_timer: int = 0x00

    # @intent:accessor レジスタ番号を境界チェック付きで読み出します。
    def get_v(self, index: int) -> int:
        if not 0 <= index < REGISTER_COUNT:
            raise RegisterIndexOutOfRange(index)
        return self.v[index]

    # @intent:accessor レジスタ番号を境界チェック付きで書き込みます。値は8ビットに切り詰めます。
    def set_v(self, index: int, value: int) -> None:
        if not 0 <= index < REGISTER_COUNT:
            raise RegisterIndexOutOfRange(index)
        self.v[index] = value & 0xFF

    @property
    def vf(self) -> int:
        return self.v[FLAG_REGISTER]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[FLAG_REGISTER] = value & 0xFF
