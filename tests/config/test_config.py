# tests/config/test_config.py
"""
chip8_tracer.configパッケージ（ローダーとビルダー）の単体テスト。
"""
import pytest

from chip8_tracer.config.loader import ConfigLoader
from chip8_tracer.config.builder import SystemBuilder
from chip8_tracer.config.models import MachineConfig, QuirkConfig
from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.common.errors import StackOverflow
from chip8_tracer.arch.chip8.constants import MEMORY_SIZE, PROGRAM_START, STACK_LIMIT, TIMER_HZ

YAML_TEXT = """
memory_size: 0x2000
load_address: 0x200
stack_limit: 4
cycles_per_frame: 12
timer_hz: 60
seed: 7
quirks:
  shift_uses_vy: true
  memory_increments_index: yes
"""

class TestConfigLoader:
    def test_defaults(self):
        config = ConfigLoader().load_from_string("")
        assert config == MachineConfig()

    # @intent:test_case_defaults 既定の構成がCHIP-8の定数と一致することを検証します。
    def test_defaults_follow_machine_constants(self):
        config = MachineConfig()
        assert config.memory_size == MEMORY_SIZE
        assert config.load_address == PROGRAM_START
        assert config.stack_limit == STACK_LIMIT
        assert config.timer_hz == TIMER_HZ == 60

    def test_load_from_string(self):
        config = ConfigLoader().load_from_string(YAML_TEXT)
        assert config.memory_size == 0x2000
        assert config.stack_limit == 4
        assert config.cycles_per_frame == 12
        assert config.seed == 7
        assert config.quirks == QuirkConfig(shift_uses_vy=True, memory_increments_index=True)

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "machine.yaml"
        path.write_text(YAML_TEXT)
        config = ConfigLoader().load_from_file(str(path))
        assert config.memory_size == 0x2000

    def test_hex_strings(self):
        config = ConfigLoader().parse({"load_address": "0x600"})
        assert config.load_address == 0x600

    def test_unbounded_stack(self):
        config = ConfigLoader().parse({"stack_limit": None})
        assert config.stack_limit is None

    def test_unknown_keys_warn(self):
        with pytest.warns(UserWarning, match="Unknown machine config key 'speed'"):
            ConfigLoader().parse({"speed": 3})
        with pytest.warns(UserWarning, match="Unknown quirk 'vblank'"):
            ConfigLoader().parse({"quirks": {"vblank": True}})

    @pytest.mark.parametrize("data", [
        {"load_address": 0x1000},
        {"stack_limit": 0},
        {"cycles_per_frame": 0},
        {"timer_hz": -1},
        {"memory_size": True},
        {"seed": "abc"},
    ])
    def test_invalid_values(self, data):
        with pytest.raises(ValueError):
            ConfigLoader().parse(data)

    def test_non_mapping(self):
        with pytest.raises(ValueError, match="must be a mapping"):
            ConfigLoader().load_from_string("- 1\n- 2\n")

class TestSystemBuilder:
    def test_build_system(self):
        config = ConfigLoader().load_from_string(YAML_TEXT)
        cpu, bus = SystemBuilder().build_system(config)
        assert isinstance(cpu, Chip8Cpu)
        assert cpu.get_bus() is bus
        assert bus.get_size() == 0x2000
        assert cpu.get_quirks().shift_uses_vy
        assert cpu.get_quirks().memory_increments_index
        assert not cpu.get_quirks().reset_vf_on_logic

    def test_stack_limit_is_applied(self):
        cpu, _ = SystemBuilder().build_system(MachineConfig(stack_limit=2))
        cpu.load_rom(bytes([0x22, 0x00]))
        cpu.advance()
        cpu.advance()
        with pytest.raises(StackOverflow):
            cpu.advance()

    def test_seed_is_applied(self):
        results = []
        for _ in range(2):
            cpu, _ = SystemBuilder().build_system(MachineConfig(seed=42))
            cpu.load_rom(bytes([0xC0, 0xFF]))
            cpu.advance()
            results.append(cpu.get_state().v[0])
        assert results[0] == results[1]
