# src/chip8_tracer/arch/chip8/instructions/alu.py
"""
算術論理演算命令（6xnn, 7xnn, 8xy*, Cxnn）の実装。

フラグを設定する命令は、Vxへの書き込みの後にVFを書き込みます。
x == F の場合はフラグ値が残ります。
"""
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.arch.chip8.state import Chip8CpuState
from .base import Peripherals, make_operation, fmt_v, fmt_byte

def _xy(opcode: int):
    return fmt_v((opcode >> 8) & 0xF), fmt_v((opcode >> 4) & 0xF)

# --- LD Vx, byte (6xnn) ---
def decode_ld_byte(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "LD", fmt_v((opcode >> 8) & 0xF), fmt_byte(opcode & 0xFF))

def execute_ld_byte(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    state.set_v(op.x, op.nn)

# --- ADD Vx, byte (7xnn) ---
def decode_add_byte(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "ADD", fmt_v((opcode >> 8) & 0xF), fmt_byte(opcode & 0xFF))

# @intent:responsibility 8ビットで折り返す加算。キャリーフラグは変更しません。
def execute_add_byte(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    state.set_v(op.x, state.get_v(op.x) + op.nn)

# --- LD Vx, Vy (8xy0) ---
def decode_ld_reg(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "LD", *_xy(opcode))

def execute_ld_reg(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    state.set_v(op.x, state.get_v(op.y))

# --- OR / AND / XOR (8xy1, 8xy2, 8xy3) ---
def decode_or(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "OR", *_xy(opcode))

def decode_and(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "AND", *_xy(opcode))

def decode_xor(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "XOR", *_xy(opcode))

# @intent:utility_function 論理演算の結果を格納し、Quirk指定時はVFをクリアします。
def _store_logic(state: Chip8CpuState, hw: Peripherals, x: int, result: int) -> None:
    state.set_v(x, result)
    if hw.quirks.reset_vf_on_logic:
        state.vf = 0

def execute_or(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    _store_logic(state, hw, op.x, state.get_v(op.x) | state.get_v(op.y))

def execute_and(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    _store_logic(state, hw, op.x, state.get_v(op.x) & state.get_v(op.y))

def execute_xor(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    _store_logic(state, hw, op.x, state.get_v(op.x) ^ state.get_v(op.y))

# --- ADD Vx, Vy (8xy4) ---
def decode_add_reg(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "ADD", *_xy(opcode))

# @intent:responsibility Vx = Vx + Vy。桁あふれした場合 VF = 1、それ以外は 0。
def execute_add_reg(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    res = state.get_v(op.x) + state.get_v(op.y)
    state.set_v(op.x, res)
    state.vf = 1 if res > 0xFF else 0

# --- SUB Vx, Vy (8xy5) ---
def decode_sub(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "SUB", *_xy(opcode))

# @intent:responsibility Vx = Vx - Vy。借りが発生しなかった場合 (Vx >= Vy) VF = 1。
def execute_sub(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    v1 = state.get_v(op.x)
    v2 = state.get_v(op.y)
    state.set_v(op.x, v1 - v2)
    state.vf = 1 if v1 >= v2 else 0

# --- SHR Vx {, Vy} (8xy6) ---
def decode_shr(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "SHR", *_xy(opcode))

# @intent:responsibility 右シフト。VFにはシフト前の最下位ビットが入ります。
def execute_shr(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    src = state.get_v(op.y) if hw.quirks.shift_uses_vy else state.get_v(op.x)
    state.set_v(op.x, src >> 1)
    state.vf = src & 0x01

# --- SUBN Vx, Vy (8xy7) ---
def decode_subn(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "SUBN", *_xy(opcode))

# @intent:responsibility Vx = Vy - Vx。借りが発生しなかった場合 (Vy >= Vx) VF = 1。
def execute_subn(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    v1 = state.get_v(op.x)
    v2 = state.get_v(op.y)
    state.set_v(op.x, v2 - v1)
    state.vf = 1 if v2 >= v1 else 0

# --- SHL Vx {, Vy} (8xyE) ---
def decode_shl(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "SHL", *_xy(opcode))

# @intent:responsibility 左シフト。VFにはシフト前の最上位ビットが入ります。
def execute_shl(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    src = state.get_v(op.y) if hw.quirks.shift_uses_vy else state.get_v(op.x)
    state.set_v(op.x, src << 1)
    state.vf = (src >> 7) & 0x01

# --- RND Vx, byte (Cxnn) ---
def decode_rnd(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "RND", fmt_v((opcode >> 8) & 0xF), fmt_byte(opcode & 0xFF))

def execute_rnd(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    state.set_v(op.x, hw.rng.randrange(0x100) & op.nn)
