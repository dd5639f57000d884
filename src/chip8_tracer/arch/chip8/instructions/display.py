# src/chip8_tracer/arch/chip8/instructions/display.py
"""
画面命令（00E0, Dxyn）の実装。
"""
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.arch.chip8.state import Chip8CpuState
from .base import Peripherals, make_operation, fmt_v, check_range

# --- CLS (00E0) ---
def decode_cls(opcode: int, pattern: int) -> Operation:
    return make_operation(opcode, pattern, "CLS")

def execute_cls(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    hw.framebuffer.clear()

# --- DRW Vx, Vy, n (Dxyn) ---
def decode_drw(opcode: int, pattern: int) -> Operation:
    return make_operation(
        opcode, pattern, "DRW",
        fmt_v((opcode >> 8) & 0xF), fmt_v((opcode >> 4) & 0xF), f"{opcode & 0xF:X}"
    )

# @intent:responsibility Iから読んだnバイトのスプライトを(Vx, Vy)にXOR描画し、衝突をVFに設定します。
# @intent:post-condition VFはスプライト全体の描画後に一度だけ書き込まれます。
def execute_drw(state: Chip8CpuState, hw: Peripherals, op: Operation) -> None:
    x = state.get_v(op.x)
    y = state.get_v(op.y)
    check_range(hw, state.i, op.n)
    sprite = [hw.bus.read(state.i + row) for row in range(op.n)]
    collision = hw.framebuffer.draw_sprite(x, y, sprite)
    state.vf = 1 if collision else 0
