# src/chip8_tracer/arch/chip8/timers.py
"""
遅延タイマーとサウンドタイマーのカウントダウン。

タイマーは命令実行とは独立したレート（慣例的に60Hz）でホストから駆動されます。
"""
from typing import List

from chip8_tracer.common.types import ToneListener
from chip8_tracer.arch.chip8.state import Chip8CpuState

# @intent:responsibility タイマーを1ティック進め、サウンドタイマーの終了を通知します。
class TimerUnit:
    """
    サウンドタイマーが1から0へ遷移したとき、トーン終了イベントをラッチし、
    登録済みのリスナーを呼び出します。ラッチは consume_tone_event で一度だけ読み出せます。
    """
    def __init__(self):
        self._tone_event = False
        self._listeners: List[ToneListener] = []

    def add_listener(self, listener: ToneListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: ToneListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # @intent:post-condition 各タイマーは0未満にならず、0に到達したら再設定されるまで0のままです。
    def tick(self, state: Chip8CpuState) -> None:
        if state.delay_timer > 0:
            state.delay_timer -= 1

        if state.sound_timer > 0:
            state.sound_timer -= 1
            if state.sound_timer == 0:
                self._tone_event = True
                for listener in list(self._listeners):
                    listener()

    # @intent:responsibility トーン終了イベントを読み出してクリアします。
    def consume_tone_event(self) -> bool:
        fired = self._tone_event
        self._tone_event = False
        return fired

    def reset(self) -> None:
        self._tone_event = False
