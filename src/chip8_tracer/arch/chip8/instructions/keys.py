# src/chip8_tracer/arch/chip8/instructions/keys.py
"""
キー入力命令（Ex9E, ExA1, Fx0A）の実装。ハンドラはキーパッドを読むだけで変更しません。
"""
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.arch.chip8.state import Chip8CpuState
from .base import Peripherals, make_operation, fmt_v, skip_next

# --- SKP Vx (Ex9E) ---
def decode_skp(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "SKP", fmt_v((opcode >> 8) & 0xF))

def execute_skp(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    if hw.keypad.is_pressed(state.get_v(op.x) & 0xF):
        skip_next(state)

# --- SKNP Vx (ExA1) ---
def decode_sknp(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "SKNP", fmt_v((opcode >> 8) & 0xF))

def execute_sknp(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    if not hw.keypad.is_pressed(state.get_v(op.x) & 0xF):
        skip_next(state)

# --- LD Vx, K (Fx0A) ---
def decode_ld_key(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "LD", fmt_v((opcode >> 8) & 0xF), "K")

# @intent:responsibility キー入力待ち。押下がなければPCを2戻し、次のadvanceで同じ命令を再実行させます。
# @intent:rationale スレッドをブロックせず、毎サイクル制御をホストへ返すポーリング方式です。
def execute_ld_key(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    key = hw.keypad.first_pressed()
    if key is None:
        state.pc = (state.pc - 2) & 0xFFFF
        return
    state.set_v(op.x, key)
