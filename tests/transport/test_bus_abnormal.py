import unittest
from chip8_tracer.transport.bus import Bus, RAM, ROM

class TestBusAbnormal(unittest.TestCase):
    def setUp(self):
        self.bus = Bus()
        self.bus.register_device(0x0000, 0x004F, ROM(0x50))
        self.bus.register_device(0x0050, 0x0FFF, RAM(0xFB0))

    def test_read_out_of_bounds(self):
        with self.assertRaises(IndexError):
            self.bus.read(0x1000)

    def test_write_out_of_bounds(self):
        with self.assertRaises(IndexError):
            self.bus.write(0x1000, 0xFF)

    def test_write_non_byte(self):
        with self.assertRaises(ValueError):
            self.bus.write(0x0200, 0x100)

    def test_register_device_invalid_range(self):
        with self.assertRaises(ValueError):
            self.bus.register_device(0x2000, 0x1000, RAM(0x100))
        with self.assertRaises(ValueError):
            self.bus.register_device(-1, 0x100, RAM(0x100))

    def test_register_device_size_mismatch(self):
        with self.assertRaises(ValueError):
            self.bus.register_device(0x1000, 0x10FF, RAM(0x200))

    def test_rom_write_is_logged_but_ignored(self):
        with self.assertWarns(RuntimeWarning):
            self.bus.write(0x0010, 0xAA)
        self.assertEqual(self.bus.peek(0x0010), 0x00)
        self.assertEqual(len(self.bus.get_and_clear_activity_log()), 1)

if __name__ == '__main__':
    unittest.main()
