# src/chip8_tracer/arch/chip8/memory.py
"""
CHIP-8のメモリマップ構築。

0x000-0x04F: 組み込みフォント (ROM、命令からの書き込みは無視)
0x050-END  : RAM (0x200以降がプログラム領域)
"""
from chip8_tracer.transport.bus import Bus, RAM, ROM
from chip8_tracer.arch.chip8.constants import MEMORY_SIZE, FONT_START, FONT_END, FONT_SET

# @intent:responsibility フォントROMとRAMを登録したBusを生成し、フォントを書き込みます。
def build_memory_bus(memory_size: int = MEMORY_SIZE) -> Bus:
    if memory_size <= FONT_END:
        raise ValueError(f"Memory size {memory_size} leaves no room above the font region.")
    bus = Bus()
    bus.register_device(FONT_START, FONT_END - 1, ROM(FONT_END - FONT_START))
    bus.register_device(FONT_END, memory_size - 1, RAM(memory_size - FONT_END))
    load_font(bus)
    return bus

# @intent:responsibility フォントを0x000から書き込みます。リセット時にも使用します。
def load_font(bus: Bus) -> None:
    for offset, data in enumerate(FONT_SET):
        bus.load(FONT_START + offset, data)

# @intent:responsibility RAMデバイスの内容を消去します。フォントROMは保持されます。
def clear_ram(bus: Bus) -> None:
    for _, _, device in bus.get_devices():
        if isinstance(device, RAM) and not isinstance(device, ROM):
            device.clear()
