# src/chip8_tracer/arch/chip8/instructions/maps.py
"""
命令パターンと命令実装のマッピング定義。

CHIP-8の命令語はレジスタ番号やアドレスを含むため、完全一致ではなく
(mask, pattern) の組で照合します。maskで0になっているニブルがワイルドカードです。
"""
from . import control
from . import alu
from . import load
from . import display
from . import keys

# @intent:map (mask, pattern) からデコード関数へのマッピングテーブル。
# @intent:rationale 辞書の挿入順が照合順です。完全一致の命令を0nnnより先に置きます。
DECODE_MAP = {
    (0xFFFF, 0x0000): control.decode_nop,
    (0xFFFF, 0x00E0): display.decode_cls,
    (0xFFFF, 0x00EE): control.decode_ret,
    (0xF000, 0x0000): control.decode_sys,
    (0xF000, 0x1000): control.decode_jp,
    (0xF000, 0x2000): control.decode_call,
    (0xF000, 0x3000): control.decode_se_byte,
    (0xF000, 0x4000): control.decode_sne_byte,
    (0xF00F, 0x5000): control.decode_se_reg,

    (0xF000, 0x6000): alu.decode_ld_byte,
    (0xF000, 0x7000): alu.decode_add_byte,
    (0xF00F, 0x8000): alu.decode_ld_reg,
    (0xF00F, 0x8001): alu.decode_or,
    (0xF00F, 0x8002): alu.decode_and,
    (0xF00F, 0x8003): alu.decode_xor,
    (0xF00F, 0x8004): alu.decode_add_reg,
    (0xF00F, 0x8005): alu.decode_sub,
    (0xF00F, 0x8006): alu.decode_shr,
    (0xF00F, 0x8007): alu.decode_subn,
    (0xF00F, 0x800E): alu.decode_shl,
    (0xF00F, 0x9000): control.decode_sne_reg,

    (0xF000, 0xA000): load.decode_ld_i,
    (0xF000, 0xB000): control.decode_jp_v0,
    (0xF000, 0xC000): alu.decode_rnd,
    (0xF000, 0xD000): display.decode_drw,

    (0xF0FF, 0xE09E): keys.decode_skp,
    (0xF0FF, 0xE0A1): keys.decode_sknp,

    (0xF0FF, 0xF007): load.decode_ld_vx_dt,
    (0xF0FF, 0xF00A): keys.decode_ld_key,
    (0xF0FF, 0xF015): load.decode_ld_dt,
    (0xF0FF, 0xF018): load.decode_ld_st,
    (0xF0FF, 0xF01E): load.decode_add_i,
    (0xF0FF, 0xF029): load.decode_ld_f,
    (0xF0FF, 0xF033): load.decode_ld_b,
    (0xF0FF, 0xF055): load.decode_store,
    (0xF0FF, 0xF065): load.decode_load,
}

# @intent:map 命令パターン（Operation.pattern）から実行関数へのマッピングテーブル。
# @intent:rationale 0000とSYS(0nnn)はどちらもパターン値0x0000を持ち、同じNOP実行関数を共有します。
EXECUTE_MAP = {
    0x0000: control.execute_nop,
    0x00E0: display.execute_cls,
    0x00EE: control.execute_ret,
    0x1000: control.execute_jp,
    0x2000: control.execute_call,
    0x3000: control.execute_se_byte,
    0x4000: control.execute_sne_byte,
    0x5000: control.execute_se_reg,

    0x6000: alu.execute_ld_byte,
    0x7000: alu.execute_add_byte,
    0x8000: alu.execute_ld_reg,
    0x8001: alu.execute_or,
    0x8002: alu.execute_and,
    0x8003: alu.execute_xor,
    0x8004: alu.execute_add_reg,
    0x8005: alu.execute_sub,
    0x8006: alu.execute_shr,
    0x8007: alu.execute_subn,
    0x800E: alu.execute_shl,
    0x9000: control.execute_sne_reg,

    0xA000: load.execute_ld_i,
    0xB000: control.execute_jp_v0,
    0xC000: alu.execute_rnd,
    0xD000: display.execute_drw,

    0xE09E: keys.execute_skp,
    0xE0A1: keys.execute_sknp,

    0xF007: load.execute_ld_vx_dt,
    0xF00A: keys.execute_ld_key,
    0xF015: load.execute_ld_dt,
    0xF018: load.execute_ld_st,
    0xF01E: load.execute_add_i,
    0xF029: load.execute_ld_f,
    0xF033: load.execute_ld_b,
    0xF055: load.execute_store,
    0xF065: load.execute_load,
}
