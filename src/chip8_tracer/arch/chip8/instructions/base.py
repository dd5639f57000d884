# src/chip8_tracer/arch/chip8/instructions/base.py
"""
CHIP-8命令実装用の共通ユーティリティ。
"""
import random
from dataclasses import dataclass, field
from typing import Optional

from chip8_tracer.core.snapshot import Operation
from chip8_tracer.transport.bus import Bus
from chip8_tracer.common.errors import AddressOutOfRange, StackOverflow, StackUnderflow
from chip8_tracer.arch.chip8.state import Chip8CpuState
from chip8_tracer.arch.chip8.framebuffer import Framebuffer
from chip8_tracer.arch.chip8.keypad import Keypad
from chip8_tracer.arch.chip8.constants import MEMORY_SIZE, STACK_LIMIT

# @intent:data_structure 実装間で挙動が分かれる命令（Quirk）の切り替え。既定値は標準的な解釈です。
@dataclass(frozen=True)
class Quirks:
    shift_uses_vy: bool = False            # 8xy6/8xyE: Vyをシフトした結果をVxへ
    memory_increments_index: bool = False  # Fx55/Fx65: 実行後 I = I + x + 1
    reset_vf_on_logic: bool = False        # 8xy1/2/3: VFを0にする

# @intent:responsibility 命令ハンドラが操作するCPU外部の装置一式をまとめます。
@dataclass
class Peripherals:
    bus: Bus
    framebuffer: Framebuffer = field(default_factory=Framebuffer)
    keypad: Keypad = field(default_factory=Keypad)
    rng: random.Random = field(default_factory=random.Random)
    quirks: Quirks = field(default_factory=Quirks)
    stack_limit: Optional[int] = STACK_LIMIT
    memory_size: int = MEMORY_SIZE

# --- オペランド表記 ---
def fmt_v(index: int) -> str:
    return f"V{index:X}"

def fmt_byte(value: int) -> str:
    return f"#{value:02X}"

def fmt_addr(value: int) -> str:
    return f"#{value:03X}"

# @intent:utility_function デコード関数が共通で用いるOperationの生成ヘルパーです。
def make_operation(opcode: int, pattern: int, mnemonic: str, *operands: str) -> Operation:
    return Operation(opcode=opcode, mnemonic=mnemonic, operands=list(operands), pattern=pattern)

# @intent:utility_function 次の命令をスキップします（フェッチ済みのPCをさらに2進める）。
def skip_next(state: Chip8CpuState) -> None:
    state.pc = (state.pc + 2) & 0xFFFF

# @intent:utility_function 戻りアドレスをスタックに積みます。上限がある場合は超過前に検出します。
def push(state: Chip8CpuState, hw: Peripherals, address: int) -> None:
    if hw.stack_limit is not None and len(state.stack) >= hw.stack_limit:
        raise StackOverflow(hw.stack_limit)
    state.stack.append(address & 0xFFFF)
    state.sp = len(state.stack)

def pop(state: Chip8CpuState) -> int:
    if not state.stack:
        raise StackUnderflow()
    address = state.stack.pop()
    state.sp = len(state.stack)
    return address

# @intent:utility_function メモリ範囲 [start, start+count) がアドレス空間内にあることを確認します。
# @intent:post-condition 範囲外の場合はメモリに触れる前にAddressOutOfRangeを送出します。
def check_range(hw: Peripherals, start: int, count: int) -> None:
    if start < 0 or start + count > hw.memory_size:
        raise AddressOutOfRange(start, count)
