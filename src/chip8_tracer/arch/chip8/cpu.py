# src/chip8_tracer/arch/chip8/cpu.py
"""
CHIP-8 CPUエミュレーションの中心モジュール。

Chip8Cpuは仮想マシン全体（メモリ、レジスタ、スタック、タイマー、画面、キーパッド）を所有し、
ホストに対して load_rom / advance / advance_timers / set_key / reset の窓口を提供します。
コア自身は時間を計らず、スレッドも持ちません。
"""
import random
from typing import Dict, List, Optional

from chip8_tracer.core.snapshot import Operation, Snapshot
from chip8_tracer.core.cpu import AbstractCpu
from chip8_tracer.common.errors import OutOfMemory, AddressOutOfRange
from chip8_tracer.common.types import DisassemblyLine, RegisterLayoutInfo, RegisterInfo, ToneListener
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.state import Chip8CpuState
from chip8_tracer.arch.chip8.framebuffer import Framebuffer
from chip8_tracer.arch.chip8.keypad import Keypad
from chip8_tracer.arch.chip8.timers import TimerUnit
from chip8_tracer.arch.chip8.memory import build_memory_bus, load_font, clear_ram
from chip8_tracer.arch.chip8.instructions import decode_opcode, execute_instruction, Peripherals, Quirks
from chip8_tracer.arch.chip8.constants import PROGRAM_START, REGISTER_COUNT, STACK_LIMIT
from chip8_tracer.arch.chip8 import disassembler

# @intent:responsibility CHIP-8 CPUの具体的なエミュレーションロジック（フェッチ、デコード、実行）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8仮想マシンをエミュレートするクラス。
    busを省略した場合は標準の4KBメモリマップを生成します。
    """
    def __init__(
        self,
        bus: Optional[Bus] = None,
        quirks: Optional[Quirks] = None,
        stack_limit: Optional[int] = STACK_LIMIT,
        load_address: int = PROGRAM_START,
        seed: Optional[int] = None,
    ):
        # _create_initial_stateより先に必要
        self._load_address = load_address
        bus = bus if bus is not None else build_memory_bus()
        super().__init__(bus)
        self._hw = Peripherals(
            bus=bus,
            framebuffer=Framebuffer(),
            keypad=Keypad(),
            rng=random.Random(seed),
            quirks=quirks or Quirks(),
            stack_limit=stack_limit,
            memory_size=bus.get_size(),
        )
        self._timers = TimerUnit()

    def _create_initial_state(self) -> Chip8CpuState:
        return Chip8CpuState(pc=self._load_address)

    # @intent:responsibility 構築直後の状態に戻します。フォントは保持し、それ以外は全て消去します。
    def reset(self) -> None:
        super().reset()
        clear_ram(self._bus)
        load_font(self._bus)
        self._bus.get_and_clear_activity_log()
        self._hw.framebuffer.clear()
        self._hw.keypad.release_all()
        self._timers.reset()

    # --- Host interface ---

    # @intent:responsibility ROMイメージをロードアドレスから書き込みます。
    # @intent:pre-condition ROM全体がメモリに収まる必要があります。収まらない場合は何も書き込まずOutOfMemoryを送出します。
    def load_rom(self, data: bytes) -> None:
        data = bytes(data) # 0..255以外の値はここでValueErrorになり、何も書き込まれない
        memory_size = self._hw.memory_size
        if self._load_address + len(data) > memory_size:
            raise OutOfMemory(len(data), self._load_address, memory_size)
        for offset, byte in enumerate(data):
            self._bus.load(self._load_address + offset, byte)

    # @intent:responsibility 1命令を実行します。stepの別名です。
    def advance(self) -> Snapshot:
        return self.step()

    # @intent:responsibility 遅延・サウンドタイマーを1ティック進めます。ホストが一定レートで呼び出します。
    def advance_timers(self) -> None:
        self._timers.tick(self._state)

    def set_key(self, index: int, pressed: bool) -> None:
        self._hw.keypad.set_key(index, pressed)

    # @intent:responsibility ホスト向けに画面を返します。ホストは読み取りのみ行います。
    def get_framebuffer(self) -> Framebuffer:
        return self._hw.framebuffer

    def get_keypad(self) -> Keypad:
        return self._hw.keypad

    def get_quirks(self) -> Quirks:
        return self._hw.quirks

    def consume_tone_event(self) -> bool:
        return self._timers.consume_tone_event()

    def add_tone_listener(self, listener: ToneListener) -> None:
        self._timers.add_listener(listener)

    def remove_tone_listener(self, listener: ToneListener) -> None:
        self._timers.remove_listener(listener)

    # @intent:responsibility サウンドタイマーが動作中（ホストがトーンを鳴らすべき状態）かを返します。
    def is_tone_active(self) -> bool:
        return self._state.sound_timer > 0

    # --- Instruction cycle ---

    # @intent:responsibility PCから2バイトをビッグエンディアンで読み、命令語を返します。
    def _fetch(self) -> int:
        pc = self._state.pc
        if pc + 1 >= self._hw.memory_size:
            raise AddressOutOfRange(pc, 2)
        return (self._bus.read(pc) << 8) | self._bus.read(pc + 1)

    def _decode(self, opcode: int) -> Operation:
        return decode_opcode(opcode, self._state.pc)

    def _execute(self, operation: Operation) -> None:
        execute_instruction(operation, self._state, self._hw)

    def _display_changed(self, operation: Operation) -> bool:
        return operation.pattern in (0x00E0, 0xD000)

    # --- Inspection ---

    # @intent:responsibility UI表示用に、現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        regs = {f"V{n:X}": s.v[n] for n in range(REGISTER_COUNT)}
        regs.update({"I": s.i, "PC": s.pc, "SP": s.sp, "DT": s.delay_timer, "ST": s.sound_timer})
        return regs

    # @intent:responsibility UIのレジスタ表示レイアウト（グループ化）を定義します。
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"V{n:X}", 8) for n in range(REGISTER_COUNT)]),
            RegisterLayoutInfo("Pointers", [
                RegisterInfo("I", 16), RegisterInfo("PC", 16), RegisterInfo("SP", 8)
            ]),
            RegisterLayoutInfo("Timers", [
                RegisterInfo("DT", 8), RegisterInfo("ST", 8)
            ]),
        ]

    # @intent:responsibility CHIP-8はフラグレジスタを持たないため、VFとサウンド状態をフラグとして提供します。
    def get_flag_state(self) -> Dict[str, bool]:
        s = self._state
        return {"VF": s.vf != 0, "SOUND": s.sound_timer > 0}

    def disassemble(self, start_addr: int, length: int) -> List[DisassemblyLine]:
        return disassembler.disassemble(self._bus, start_addr, length)
