"""
共通の型定義を提供するモジュール。
プロジェクト全体で使用される汎用的な型エイリアスなどを定義します。
"""
from typing import Callable, List, NamedTuple, Tuple

# @intent:data_structure 命令語を上位から4ビットずつ分割したニブル列 (d1, d2, d3, d4)。
Nibbles = Tuple[int, int, int, int]

# @intent:data_structure 逆アセンブル結果の1行 (address, hex_bytes, mnemonic)。
DisassemblyLine = Tuple[int, str, str]

# @intent:data_structure サウンドタイマーが0に到達したときに呼び出されるホスト側コールバック。
ToneListener = Callable[[], None]

# @intent:data_structure 単一のレジスタの表示定義。UIが動的にフィールドを生成するために使用される。
class RegisterInfo(NamedTuple):
    name: str
    width: int  # ビット幅 (8 or 16)

# @intent:data_structure レジスタグループの表示定義。関連するレジスタ（例: "General", "Pointers"）をまとめる。
class RegisterLayoutInfo(NamedTuple):
    group_name: str
    registers: List[RegisterInfo]
