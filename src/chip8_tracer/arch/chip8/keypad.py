# src/chip8_tracer/arch/chip8/keypad.py
"""
CHIP-8 16キー入力パッドの押下状態。
"""
from typing import List, Optional

from chip8_tracer.common.errors import InvalidKey
from chip8_tracer.arch.chip8.constants import KEY_COUNT

# @intent:responsibility 16個のキーの押下フラグを保持します。変更はホストからのset_keyのみです。
class Keypad:
    def __init__(self):
        self._keys: List[bool] = [False] * KEY_COUNT

    # @intent:pre-condition indexは0-15である必要があります。範囲外の場合はInvalidKeyを送出し、状態は変更しません。
    def set_key(self, index: int, pressed: bool) -> None:
        if not isinstance(index, int) or not 0 <= index < KEY_COUNT:
            raise InvalidKey(index)
        self._keys[index] = bool(pressed)

    def is_pressed(self, index: int) -> bool:
        if not 0 <= index < KEY_COUNT:
            raise InvalidKey(index)
        return self._keys[index]

    # @intent:responsibility 押下中のキーのうち最小の番号を返します。押下なしの場合はNone。
    def first_pressed(self) -> Optional[int]:
        for index, pressed in enumerate(self._keys):
            if pressed:
                return index
        return None

    def release_all(self) -> None:
        self._keys = [False] * KEY_COUNT

    def snapshot(self) -> List[bool]:
        return list(self._keys)
