import unittest
from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.arch.chip8.instructions import decode_opcode
from chip8_tracer.common.errors import StackOverflow, StackUnderflow, UnknownOpcode

class TestChip8ControlInstructions(unittest.TestCase):
    def setUp(self):
        self.cpu = Chip8Cpu()
        self.bus = self.cpu.get_bus()
        self.state = self.cpu.get_state()

    def _put(self, address, *words):
        for i, word in enumerate(words):
            self.bus.load(address + i * 2, word >> 8)
            self.bus.load(address + i * 2 + 1, word & 0xFF)

    def _execute(self, opcode):
        self._put(0x200, opcode)
        self.state.pc = 0x200
        return self.cpu.advance()

    def test_nop_and_sys(self):
        snapshot = self._execute(0x0000)
        self.assertEqual(snapshot.operation.mnemonic, "NOP")
        self.assertEqual(self.state.pc, 0x202)

        snapshot = self._execute(0x0123)
        self.assertEqual(snapshot.operation.text(), "SYS #123")
        self.assertEqual(self.state.pc, 0x202)

    def test_jp(self):
        self._execute(0x1ABC)
        self.assertEqual(self.state.pc, 0xABC)

    def test_jp_v0(self):
        self.state.v[0] = 0x10
        self._execute(0xB300)
        self.assertEqual(self.state.pc, 0x310)

    # @intent:test_case_call_ret CALLで次の命令アドレスが積まれ、RETでそこへ戻ることを検証します。
    def test_call_and_ret(self):
        self._put(0x200, 0x2300)
        self._put(0x300, 0x00EE)

        self.cpu.advance()
        self.assertEqual(self.state.pc, 0x300)
        self.assertEqual(self.state.stack, [0x202])
        self.assertEqual(self.state.sp, 1)

        self.cpu.advance()
        self.assertEqual(self.state.pc, 0x202)
        self.assertEqual(self.state.stack, [])
        self.assertEqual(self.state.sp, 0)

    def test_ret_with_empty_stack(self):
        with self.assertRaises(StackUnderflow):
            self._execute(0x00EE)
        self.assertEqual(self.state.pc, 0x200)

    def test_call_overflow(self):
        # 自分自身を呼び続ける
        self._put(0x200, 0x2200)
        for _ in range(16):
            self.cpu.advance()
        self.assertEqual(len(self.state.stack), 16)
        with self.assertRaises(StackOverflow):
            self.cpu.advance()
        self.assertEqual(len(self.state.stack), 16)
        self.assertEqual(self.state.pc, 0x200)

    def test_unbounded_stack(self):
        cpu = Chip8Cpu(stack_limit=None)
        cpu.load_rom(bytes([0x22, 0x00]))
        for _ in range(40):
            cpu.advance()
        self.assertEqual(cpu.get_state().sp, 40)

    def test_skip_byte(self):
        self.state.v[1] = 0x42
        self._execute(0x3142) # SE V1, #42
        self.assertEqual(self.state.pc, 0x204)
        self._execute(0x3143)
        self.assertEqual(self.state.pc, 0x202)
        self._execute(0x4143) # SNE V1, #43
        self.assertEqual(self.state.pc, 0x204)
        self._execute(0x4142)
        self.assertEqual(self.state.pc, 0x202)

    def test_skip_reg(self):
        self.state.v[1] = 0x42
        self.state.v[2] = 0x42
        self._execute(0x5120) # SE V1, V2
        self.assertEqual(self.state.pc, 0x204)
        self._execute(0x9120) # SNE V1, V2
        self.assertEqual(self.state.pc, 0x202)
        self.state.v[2] = 0x00
        self._execute(0x9120)
        self.assertEqual(self.state.pc, 0x204)

    # @intent:test_case_unknown 未定義命令では状態を変更せずにUnknownOpcodeが送出されることを検証します。
    def test_unknown_opcode(self):
        for opcode in (0xFFFF, 0x5121, 0x800F, 0xE000):
            with self.subTest(opcode=hex(opcode)):
                self._put(0x200, opcode)
                self.state.pc = 0x200
                self.state.v[1] = 0x33
                with self.assertRaises(UnknownOpcode) as ctx:
                    self.cpu.advance()
                self.assertEqual(ctx.exception.opcode, opcode)
                self.assertEqual(ctx.exception.address, 0x200)
                self.assertEqual(self.state.pc, 0x200)
                self.assertEqual(self.state.v[1], 0x33)

    def test_unknown_opcode_nibbles(self):
        with self.assertRaises(UnknownOpcode) as ctx:
            decode_opcode(0xFFFF)
        self.assertEqual(ctx.exception.nibbles, (0xF, 0xF, 0xF, 0xF))
        self.assertIsNone(ctx.exception.address)

if __name__ == '__main__':
    unittest.main()
