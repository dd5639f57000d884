# src/chip8_tracer/arch/chip8/constants.py
"""
CHIP-8 仮想マシンの固定パラメータ。
"""

# @intent:constant メモリ空間とプログラム配置。
MEMORY_SIZE = 0x1000
PROGRAM_START = 0x200

# @intent:constant 組み込みフォント。16進数字1文字あたり5バイト、0x000から配置します。
FONT_START = 0x000
FONT_GLYPH_SIZE = 5
FONT_SET = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])
FONT_END = FONT_START + len(FONT_SET)  # 0x050 (exclusive)

# @intent:constant レジスタ・スタック・入力。
REGISTER_COUNT = 16
FLAG_REGISTER = 0xF
STACK_LIMIT = 16
KEY_COUNT = 16

# @intent:constant 表示装置。
DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32

# @intent:constant ホストが駆動する慣例的なレート。
TIMER_HZ = 60
