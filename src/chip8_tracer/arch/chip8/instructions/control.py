# src/chip8_tracer/arch/chip8/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ）の実装。

ハンドラの実行時点でPCは既に次の命令を指しています。
ジャンプ・呼び出し・復帰はその値を上書きするだけです。
"""
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.arch.chip8.state import Chip8CpuState
from .base import Peripherals, make_operation, fmt_v, fmt_byte, fmt_addr, skip_next, push, pop

# --- NOP (0000) / SYS (0nnn) ---
def decode_nop(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "NOP")

# @intent:responsibility NOP命令を実行します（何もしません）。
def execute_nop(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    # Intentional: NOP (No Operation)
    pass

# @intent:responsibility SYS (機械語ルーチン呼び出し) 命令をデコードします。インタプリタでは実行しません。
def decode_sys(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "SYS", fmt_addr(opcode & 0xFFF))

# --- RET (00EE) ---
def decode_ret(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "RET")

# @intent:responsibility スタックから戻りアドレスをポップしてPCに設定します。空の場合はStackUnderflow。
def execute_ret(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    state.pc = pop(state)

# --- JP addr (1nnn) ---
def decode_jp(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "JP", fmt_addr(opcode & 0xFFF))

def execute_jp(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    state.pc = op.nnn

# --- CALL addr (2nnn) ---
def decode_call(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "CALL", fmt_addr(opcode & 0xFFF))

# @intent:responsibility 次の命令のアドレスをプッシュしてからジャンプします。
def execute_call(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    push(state, hw, state.pc)
    state.pc = op.nnn

# --- SE Vx, byte (3xnn) ---
def decode_se_byte(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "SE", fmt_v((opcode >> 8) & 0xF), fmt_byte(opcode & 0xFF))

def execute_se_byte(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    if state.get_v(op.x) == op.nn:
        skip_next(state)

# --- SNE Vx, byte (4xnn) ---
def decode_sne_byte(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "SNE", fmt_v((opcode >> 8) & 0xF), fmt_byte(opcode & 0xFF))

def execute_sne_byte(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    if state.get_v(op.x) != op.nn:
        skip_next(state)

# --- SE Vx, Vy (5xy0) ---
def decode_se_reg(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "SE", fmt_v((opcode >> 8) & 0xF), fmt_v((opcode >> 4) & 0xF))

def execute_se_reg(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    if state.get_v(op.x) == state.get_v(op.y):
        skip_next(state)

# --- SNE Vx, Vy (9xy0) ---
def decode_sne_reg(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "SNE", fmt_v((opcode >> 8) & 0xF), fmt_v((opcode >> 4) & 0xF))

def execute_sne_reg(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    if state.get_v(op.x) != state.get_v(op.y):
        skip_next(state)

# --- JP V0, addr (Bnnn) ---
def decode_jp_v0(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "JP", "V0", fmt_addr(opcode & 0xFFF))

def execute_jp_v0(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    state.pc = (state.get_v(0) + op.nnn) & 0xFFFF
