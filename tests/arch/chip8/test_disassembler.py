import unittest
from chip8_tracer.arch.chip8.memory import build_memory_bus
from chip8_tracer.arch.chip8.disassembler import disassemble

class TestChip8Disassembler(unittest.TestCase):
    def setUp(self):
        self.bus = build_memory_bus()

    def _put(self, address, data):
        for i, b in enumerate(data):
            self.bus.load(address + i, b)

    def test_basic_program(self):
        self._put(0x200, [
            0x00, 0xE0,  # CLS
            0xA2, 0x2A,  # LD I, #22A
            0x60, 0x0C,  # LD V0, #0C
            0xD0, 0x15,  # DRW V0, V1, 5
            0xF2, 0x33,  # LD B, V2
            0xF3, 0x65,  # LD V3, [I]
            0x22, 0x40,  # CALL #240
            0x00, 0xEE,  # RET
        ])
        result = disassemble(self.bus, 0x200, 16)
        self.assertEqual([line[2] for line in result], [
            "CLS",
            "LD I, #22A",
            "LD V0, #0C",
            "DRW V0, V1, 5",
            "LD B, V2",
            "LD V3, [I]",
            "CALL #240",
            "RET",
        ])
        self.assertEqual(result[1], (0x202, "A22A", "LD I, #22A"))

    def test_unknown_word_is_data(self):
        self._put(0x200, [0xFF, 0xFF, 0x81, 0x2E])
        result = disassemble(self.bus, 0x200, 4)
        self.assertEqual(result[0], (0x200, "FFFF", "DW #FFFF"))
        self.assertEqual(result[1][2], "SHL V1, V2")

    def test_does_not_log_bus_activity(self):
        self.bus.get_and_clear_activity_log()
        disassemble(self.bus, 0x200, 32)
        self.assertEqual(self.bus.get_and_clear_activity_log(), [])

    def test_stops_at_end_of_memory(self):
        result = disassemble(self.bus, 0xFFC, 16)
        self.assertEqual([line[0] for line in result], [0xFFC, 0xFFE])

    def test_odd_start_address(self):
        result = disassemble(self.bus, 0x201, 4)
        self.assertEqual([line[0] for line in result], [0x201, 0x203])

if __name__ == '__main__':
    unittest.main()
