from dataclasses import dataclass, field
from typing import Optional

from chip8_tracer.arch.chip8.constants import MEMORY_SIZE, PROGRAM_START, STACK_LIMIT, TIMER_HZ

@dataclass
class QuirkConfig:
    shift_uses_vy: bool = False
    memory_increments_index: bool = False
    reset_vf_on_logic: bool = False

@dataclass
class MachineConfig:
    memory_size: int = MEMORY_SIZE
    load_address: int = PROGRAM_START
    stack_limit: Optional[int] = STACK_LIMIT  # None: 上限なし
    cycles_per_frame: int = 10       # ホストが1フレーム(1/timer_hz秒)に実行する命令数
    timer_hz: int = TIMER_HZ
    seed: Optional[int] = None       # Cxnn 用の乱数シード
    quirks: QuirkConfig = field(default_factory=QuirkConfig)
