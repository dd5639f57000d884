"""
物理キーボードからCHIP-8キーパッドへの対応表。

    1 2 3 4        1 2 3 C
    Q W E R   ->   4 5 6 D
    A S D F        7 8 9 E
    Z X C V        A 0 B F
"""
from typing import Any, Dict, Optional

from PySide6.QtCore import Qt

# @intent:utility_function Qtのキー列挙値・整数のどちらでも整数のキーコードに揃えます。
def key_code(key: Any) -> int:
    return key.value if hasattr(key, "value") else int(key)

_LAYOUT = {
    Qt.Key_1: 0x1, Qt.Key_2: 0x2, Qt.Key_3: 0x3, Qt.Key_4: 0xC,
    Qt.Key_Q: 0x4, Qt.Key_W: 0x5, Qt.Key_E: 0x6, Qt.Key_R: 0xD,
    Qt.Key_A: 0x7, Qt.Key_S: 0x8, Qt.Key_D: 0x9, Qt.Key_F: 0xE,
    Qt.Key_Z: 0xA, Qt.Key_X: 0x0, Qt.Key_C: 0xB, Qt.Key_V: 0xF,
}

# @intent:map Qtのキーコードからキーパッド番号へのマッピングテーブル。
KEY_MAP: Dict[int, int] = {key_code(k): pad for k, pad in _LAYOUT.items()}

def to_pad_key(qt_key: Any) -> Optional[int]:
    return KEY_MAP.get(key_code(qt_key))
