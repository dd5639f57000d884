"""
CHIP-8 Disassembler

メモリ上のバイナリデータを解析し、CHIP-8のアセンブリ言語（ニーモニック）に変換します。
Instruction Layerのデコードロジックを再利用しますが、バスアクセスログを汚さないように
Bus.peekで読み込みます。
"""
from typing import List

from chip8_tracer.transport.bus import Bus
from chip8_tracer.common.errors import UnknownOpcode
from chip8_tracer.common.types import DisassemblyLine
from chip8_tracer.arch.chip8.instructions import decode_opcode

# @intent:responsibility 指定されたメモリ範囲を逆アセンブルし、表示用データを生成します。
def disassemble(bus: Bus, start_addr: int, length: int) -> List[DisassemblyLine]:
    """
    指定された範囲のメモリを2バイト単位で逆アセンブルします。
    デコードできない語は "DW #HHHH" として出力します。

    Returns:
        List of (address, hex_bytes, mnemonic) tuples.
    """
    result = []
    end_addr = min(start_addr + length, bus.get_size())
    current_addr = start_addr

    while current_addr + 1 < end_addr:
        opcode = (bus.peek(current_addr) << 8) | bus.peek(current_addr + 1)
        try:
            mnemonic_str = decode_opcode(opcode, current_addr).text()
        except UnknownOpcode:
            mnemonic_str = f"DW #{opcode:04X}"
        result.append((current_addr, f"{opcode:04X}", mnemonic_str))
        current_addr += 2

    return result
