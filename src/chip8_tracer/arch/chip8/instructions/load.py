# src/chip8_tracer/arch/chip8/instructions/load.py
"""
インデックスレジスタ・タイマー・メモリ転送命令（Annn, Fx07, Fx15, Fx18, Fx1E, Fx29, Fx33, Fx55, Fx65）の実装。
"""
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.arch.chip8.state import Chip8CpuState
from chip8_tracer.arch.chip8.constants import FONT_START, FONT_GLYPH_SIZE
from .base import Peripherals, make_operation, fmt_v, fmt_addr, check_range

def _vx(opcode: int) -> str:
    return fmt_v((opcode >> 8) & 0xF)

# --- LD I, addr (Annn) ---
def decode_ld_i(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "LD", "I", fmt_addr(opcode & 0xFFF))

def execute_ld_i(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    state.i = op.nnn

# --- LD Vx, DT (Fx07) ---
def decode_ld_vx_dt(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "LD", _vx(opcode), "DT")

def execute_ld_vx_dt(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    state.set_v(op.x, state.delay_timer)

# --- LD DT, Vx (Fx15) ---
def decode_ld_dt(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "LD", "DT", _vx(opcode))

def execute_ld_dt(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    state.delay_timer = state.get_v(op.x)

# --- LD ST, Vx (Fx18) ---
def decode_ld_st(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "LD", "ST", _vx(opcode))

def execute_ld_st(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    state.sound_timer = state.get_v(op.x)

# --- ADD I, Vx (Fx1E) ---
def decode_add_i(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "ADD", "I", _vx(opcode))

# @intent:responsibility I = I + Vx。16ビットで折り返し、VFは変更しません。
def execute_add_i(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    state.i = (state.i + state.get_v(op.x)) & 0xFFFF

# --- LD F, Vx (Fx29) ---
def decode_ld_f(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "LD", "F", _vx(opcode))

# @intent:responsibility Iを数字Vxの組み込みグリフのアドレスに設定します。
def execute_ld_f(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    state.i = (FONT_START + state.get_v(op.x) * FONT_GLYPH_SIZE) & 0xFFFF

# --- LD B, Vx (Fx33) ---
def decode_ld_b(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "LD", "B", _vx(opcode))

# @intent:responsibility Vxの10進表記（百・十・一の位）をI, I+1, I+2に格納します。
def execute_ld_b(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    value = state.get_v(op.x)
    check_range(hw, state.i, 3)
    hw.bus.write(state.i, value // 100)
    hw.bus.write(state.i + 1, (value // 10) % 10)
    hw.bus.write(state.i + 2, value % 10)

# --- LD [I], Vx (Fx55) ---
def decode_store(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "LD", "[I]", _vx(opcode))

# @intent:responsibility V0..Vx（両端を含む）をIから始まるメモリへ格納します。
def execute_store(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    count = op.x + 1
    check_range(hw, state.i, count)
    values = [state.get_v(r) for r in range(count)]
    for offset, value in enumerate(values):
        hw.bus.write(state.i + offset, value)
    if hw.quirks.memory_increments_index:
        state.i = (state.i + count) & 0xFFFF

# --- LD Vx, [I] (Fx65) ---
def decode_load(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "LD", _vx(opcode), "[I]")

# @intent:responsibility Iから始まるメモリをV0..Vx（両端を含む）へ読み込みます。
def execute_load(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    count = op.x + 1
    check_range(hw, state.i, count)
    for offset in range(count):
        state.set_v(offset, hw.bus.read(state.i + offset))
    if hw.quirks.memory_increments_index:
        state.i = (state.i + count) & 0xFFFF
