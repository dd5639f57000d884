# src/chip8_tracer/arch/chip8/framebuffer.py
"""
CHIP-8 モノクロ表示装置（64x32）。

画素はy*W+xで並ぶboolの列です。内容を変更できるのはclearとdraw_spriteのみで、
ホストには読み取り専用のビューを提供します。
"""
from typing import List, Sequence, Tuple

from chip8_tracer.arch.chip8.constants import DISPLAY_WIDTH, DISPLAY_HEIGHT

# @intent:responsibility フレームバッファの保持、消去、スプライト描画（XOR・ラップアラウンド・衝突検出）を提供します。
class Framebuffer:
    def __init__(self, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT):
        if width <= 0 or height <= 0:
            raise ValueError("Framebuffer dimensions must be positive.")
        self._width = width
        self._height = height
        self._pixels: List[bool] = [False] * (width * height)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    # @intent:responsibility 全画素を消灯します。
    def clear(self) -> None:
        self._pixels = [False] * (self._width * self._height)

    # @intent:responsibility スプライトを(x, y)にXOR描画し、衝突の有無を返します。
    # @intent:post-condition 既に点灯していた画素が1つでも消灯した場合のみTrueを返します。
    def draw_sprite(self, x: int, y: int, sprite: Sequence[int]) -> bool:
        """
        spriteの各バイトを横8画素（MSBが左端）として描画します。
        座標は画面端で折り返します（クリップしません）。
        衝突はスプライト全体を描画し終えてから判定結果として返します。
        """
        collision = False
        for row, line in enumerate(sprite):
            py = (y + row) % self._height
            for col in range(8):
                if not (line >> (7 - col)) & 1:
                    continue
                px = (x + col) % self._width
                index = py * self._width + px
                if self._pixels[index]:
                    collision = True
                self._pixels[index] = not self._pixels[index]
        return collision

    def get_pixel(self, x: int, y: int) -> bool:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self._width}x{self._height} display.")
        return self._pixels[y * self._width + x]

    # @intent:responsibility ホスト向けに画素列の不変コピーを返します。
    def pixels(self) -> Tuple[bool, ...]:
        return tuple(self._pixels)

    # @intent:responsibility 行ごとに分割した画素列を返します。描画ホスト向け。
    def rows(self) -> List[Tuple[bool, ...]]:
        w = self._width
        return [tuple(self._pixels[y * w:(y + 1) * w]) for y in range(self._height)]

    # @intent:responsibility 点灯画素を'#'、消灯画素を'.'としたテキスト表現を返します。
    def render_text(self, on: str = "#", off: str = ".") -> str:
        return "\n".join("".join(on if p else off for p in row) for row in self.rows())
