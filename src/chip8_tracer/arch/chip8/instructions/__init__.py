# src/chip8_tracer/arch/chip8/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
from typing import Optional

from chip8_tracer.core.snapshot import Operation
from chip8_tracer.common.errors import UnknownOpcode
from chip8_tracer.arch.chip8.state import Chip8CpuState
from .base import Peripherals, Quirks
from .maps import DECODE_MAP, EXECUTE_MAP

# @intent:responsibility 16ビットの命令語をニブル単位のパターン照合でデコードします。
# @intent:post-condition どのパターンにも一致しない場合はUnknownOpcodeを送出します。
def decode_opcode(opcode: int, pc: Optional[int] = None) -> Operation:
    """
    CHIP-8の命令語をデコードし、Operationオブジェクトを返します。
    pcはエラー報告用に命令のアドレスを伝えるためだけに使います。
    """
    for (mask, pattern), decoder in DECODE_MAP.items():
        if opcode & mask == pattern:
            return decoder(opcode, pattern)
    nibbles = ((opcode >> 12) & 0xF, (opcode >> 8) & 0xF, (opcode >> 4) & 0xF, opcode & 0xF)
    raise UnknownOpcode(opcode, nibbles, pc)

# @intent:responsibility デコードされたCHIP-8命令を実行します。
def execute_instruction(operation: Operation, state: Chip8CpuState, hw: Peripherals) -> None:
    """
    デコードされたCHIP-8命令を実行し、CPUの状態と周辺装置を変更します。
    """
    executor = EXECUTE_MAP.get(operation.pattern)
    if executor is None:
        raise UnknownOpcode(operation.opcode, operation.nibbles)
    executor(state, hw, operation)
