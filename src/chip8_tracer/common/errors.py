"""
エラー分類を定義するモジュール。

コアが検出する異常は全てChip8Errorのサブクラスとして送出されます。
いずれもプロセスを終了させるものではなく、ホスト側が停止・リセット・続行を判断します。
"""
from typing import Optional

from chip8_tracer.common.types import Nibbles


# @intent:responsibility コアが送出する全ての回復可能なエラーの基底クラスです。
class Chip8Error(Exception):
    """CHIP-8コアの回復可能なエラー。"""


# @intent:responsibility ROMがプログラム領域に収まらない場合のエラーです。
class OutOfMemory(Chip8Error):
    def __init__(self, rom_size: int, load_address: int, memory_size: int):
        self.rom_size = rom_size
        self.load_address = load_address
        self.memory_size = memory_size
        super().__init__(
            f"ROM of {rom_size} bytes does not fit at {load_address:#05x} "
            f"(memory size {memory_size} bytes, {memory_size - load_address} bytes available)."
        )


# @intent:responsibility どの命令パターンにも一致しない命令語を検出した場合のエラーです。
class UnknownOpcode(Chip8Error):
    """
    デコードに失敗した命令語。フェッチしたアドレス、命令語、ニブル列を保持します。
    """
    def __init__(self, opcode: int, nibbles: Nibbles, address: Optional[int] = None):
        self.opcode = opcode
        self.nibbles = nibbles
        self.address = address
        location = f" at {address:#05x}" if address is not None else ""
        fields = ", ".join(f"{d:X}" for d in nibbles)
        super().__init__(f"Unknown opcode {opcode:#06x}{location} (nibbles: {fields})")


# @intent:responsibility 空のスタックからのサブルーチン復帰を検出した場合のエラーです。
class StackUnderflow(Chip8Error):
    def __init__(self) -> None:
        super().__init__("Return from subroutine with an empty call stack.")


# @intent:responsibility スタック深さの上限を超えるサブルーチン呼び出しを検出した場合のエラーです。
class StackOverflow(Chip8Error):
    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Call stack exceeded its limit of {limit} return addresses.")


# @intent:responsibility 範囲外のキー番号が指定された場合のエラーです。
class InvalidKey(Chip8Error):
    def __init__(self, index: int):
        self.index = index
        super().__init__(f"Key index {index} is outside the keypad range 0-15.")


# @intent:responsibility レジスタファイルの範囲外を指すインデックスを検出した場合のエラーです。
# @intent:rationale 正しくデコードされていれば発生しない内部不整合を示します。
class RegisterIndexOutOfRange(Chip8Error):
    def __init__(self, index: int):
        self.index = index
        super().__init__(f"Register index {index} is outside V0-VF.")


# @intent:responsibility 命令がメモリ範囲外を読み書きしようとした場合のエラーです。
# @intent:rationale バス層の範囲外アクセスと同じくIndexErrorとしても捕捉できます。
class AddressOutOfRange(Chip8Error, IndexError):
    def __init__(self, address: int, count: int = 1):
        self.address = address
        self.count = count
        super().__init__(f"Memory access of {count} byte(s) at {address:#06x} exceeds the address space.")
