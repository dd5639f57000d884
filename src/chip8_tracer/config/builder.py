from typing import Tuple
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.arch.chip8.memory import build_memory_bus
from chip8_tracer.arch.chip8.instructions import Quirks
from .models import MachineConfig

# @intent:responsibility マシン構成（Config）に基づいて、Bus、Device、CPUを生成・接続します。
class SystemBuilder:
    def build_system(self, config: MachineConfig) -> Tuple[Chip8Cpu, Bus]:
        bus = build_memory_bus(config.memory_size)
        cpu = Chip8Cpu(
            bus,
            quirks=self.build_quirks(config),
            stack_limit=config.stack_limit,
            load_address=config.load_address,
            seed=config.seed,
        )
        return cpu, bus

    def build_quirks(self, config: MachineConfig) -> Quirks:
        q = config.quirks
        return Quirks(
            shift_uses_vy=q.shift_uses_vy,
            memory_increments_index=q.memory_increments_index,
            reset_vf_on_logic=q.reset_vf_on_logic,
        )
