import unittest
import warnings
from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.arch.chip8.instructions import Quirks
from chip8_tracer.common.errors import AddressOutOfRange

class TestChip8LoadInstructions(unittest.TestCase):
    def setUp(self):
        self.cpu = Chip8Cpu()
        self.bus = self.cpu.get_bus()
        self.state = self.cpu.get_state()

    def _execute(self, opcode):
        self.bus.load(0x200, opcode >> 8)
        self.bus.load(0x201, opcode & 0xFF)
        self.state.pc = 0x200
        return self.cpu.advance()

    def test_ld_i(self):
        self._execute(0xA123)
        self.assertEqual(self.state.i, 0x123)

    def test_timers(self):
        self.state.v[4] = 0x3C
        self._execute(0xF415) # LD DT, V4
        self.assertEqual(self.state.delay_timer, 0x3C)
        self._execute(0xF418) # LD ST, V4
        self.assertEqual(self.state.sound_timer, 0x3C)
        self.state.delay_timer = 0x11
        self._execute(0xF507) # LD V5, DT
        self.assertEqual(self.state.v[5], 0x11)

    def test_add_i(self):
        self.state.i = 0x0FFF
        self.state.v[2] = 0x02
        self.state.vf = 0x00
        self._execute(0xF21E)
        self.assertEqual(self.state.i, 0x1001)
        self.assertEqual(self.state.vf, 0x00)

        self.state.i = 0xFFFF
        self._execute(0xF21E)
        self.assertEqual(self.state.i, 0x0001) # 16ビットで折り返す

    def test_ld_f(self):
        self.state.v[3] = 0x0A
        self._execute(0xF329)
        self.assertEqual(self.state.i, 0x32)
        self.assertEqual([self.bus.peek(0x32 + k) for k in range(5)], [0xF0, 0x90, 0xF0, 0x90, 0x90])

    def test_ld_b(self):
        self.state.v[7] = 234
        self.state.i = 0x300
        self._execute(0xF733)
        self.assertEqual([self.bus.peek(0x300 + k) for k in range(3)], [2, 3, 4])
        self.assertEqual(self.state.i, 0x300)

    def test_ld_b_out_of_range(self):
        self.state.i = 0xFFE
        with self.assertRaises(AddressOutOfRange):
            self._execute(0xF733)
        self.assertEqual(self.bus.peek(0xFFE), 0)
        self.assertEqual(self.state.pc, 0x200)

    def test_store_and_load(self):
        self.state.v[:4] = [1, 2, 3, 4]
        self.state.i = 0x400
        self._execute(0xF355) # LD [I], V3
        self.assertEqual([self.bus.peek(0x400 + k) for k in range(5)], [1, 2, 3, 4, 0])
        self.assertEqual(self.state.i, 0x400)

        self.state.v[:4] = [0, 0, 0, 0]
        self._execute(0xF265) # LD V2, [I]
        self.assertEqual(self.state.v[:4], [1, 2, 3, 0])
        self.assertEqual(self.state.i, 0x400)

    def test_store_quirk_increments_index(self):
        cpu = Chip8Cpu(quirks=Quirks(memory_increments_index=True))
        state = cpu.get_state()
        state.i = 0x400
        cpu.load_rom(bytes([0xF3, 0x55, 0xF1, 0x65]))
        cpu.advance()
        self.assertEqual(state.i, 0x404)
        cpu.advance()
        self.assertEqual(state.i, 0x406)

    def test_store_out_of_range_touches_nothing(self):
        self.state.v[0] = 0xAA
        self.state.i = 0xFFF
        with self.assertRaises(AddressOutOfRange):
            self._execute(0xF155)
        self.assertEqual(self.bus.peek(0xFFF), 0)

    def test_store_into_font_region_is_ignored(self):
        self.state.v[0] = 0x00
        self.state.i = 0x000
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            self._execute(0xF055)
        self.assertTrue(any(issubclass(w.category, RuntimeWarning) for w in caught))
        self.assertEqual(self.bus.peek(0x000), 0xF0)

if __name__ == '__main__':
    unittest.main()
