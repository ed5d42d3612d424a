import os
import tempfile
import unittest
from unittest import mock

from meowchip.config import Config, parse_color
from meowchip.constants import COLORS, MAX_ROM_SIZE
from meowchip.errors import RomNotFound, RomTooLarge, RomUnreadable
from meowchip.rom import read_rom


class TestReadRom(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = self._tmp.name

    def tearDown(self):
        self._tmp.cleanup()

    def write(self, name, data):
        path = os.path.join(self.dir, name)
        with open(path, "wb") as f:
            f.write(data)
        return path

    def test_reads_bytes(self):
        path = self.write("ibm.ch8", b"\x00\xE0\x12\x00")
        self.assertEqual(read_rom(path), b"\x00\xE0\x12\x00")

    def test_largest_rom(self):
        path = self.write("big.ch8", b"\x01" * MAX_ROM_SIZE)
        self.assertEqual(len(read_rom(path)), MAX_ROM_SIZE)

    def test_missing(self):
        with self.assertRaises(RomNotFound) as cm:
            read_rom(os.path.join(self.dir, "nope.ch8"))
        self.assertTrue(cm.exception.path.endswith("nope.ch8"))

    def test_directory_is_not_a_rom(self):
        with self.assertRaises(RomNotFound):
            read_rom(self.dir)

    def test_too_large(self):
        path = self.write("huge.ch8", b"\x00" * (MAX_ROM_SIZE + 1))
        with self.assertRaises(RomTooLarge) as cm:
            read_rom(path)
        self.assertEqual(cm.exception.size, MAX_ROM_SIZE + 1)
        self.assertIn("huge.ch8", str(cm.exception))

    def test_unreadable(self):
        path = self.write("locked.ch8", b"\x00\xE0")
        with mock.patch("builtins.open", side_effect=PermissionError("denied")):
            with self.assertRaises(RomUnreadable):
                read_rom(path)

    def test_path_through_a_file(self):
        path = self.write("plain.ch8", b"\x00\xE0")
        with self.assertRaises(RomNotFound):
            read_rom(os.path.join(path, "inner.ch8"))

    def test_name_too_long(self):
        with self.assertRaises(RomUnreadable) as cm:
            read_rom(os.path.join(self.dir, "x" * 5000 + ".ch8"))
        self.assertIsInstance(cm.exception.__cause__, OSError)

    def test_stat_permission_denied(self):
        path = self.write("hidden.ch8", b"\x00\xE0")
        with mock.patch("pathlib.Path.stat", side_effect=PermissionError("denied")):
            with self.assertRaises(RomUnreadable):
                read_rom(path)


class TestConfig(unittest.TestCase):
    def test_defaults(self):
        cfg = Config()
        self.assertEqual(cfg.scale, 10)
        self.assertEqual(cfg.foreground, (255, 255, 255))
        self.assertEqual(cfg.background, (0, 0, 0))
        self.assertTrue(cfg.outlines)
        self.assertEqual(cfg.window_size, (640, 320))

    def test_frozen(self):
        with self.assertRaises(Exception):
            Config().scale = 3

    def test_validation(self):
        with self.assertRaises(ValueError):
            Config(scale=0)
        with self.assertRaises(ValueError):
            Config(clock_hz=30)
        with self.assertRaises(ValueError):
            Config(foreground=(256, 0, 0))

    def test_parse_color(self):
        self.assertEqual(parse_color("Red"), COLORS["red"])
        self.assertEqual(parse_color("#10ff80"), (0x10, 0xFF, 0x80))
        self.assertEqual(parse_color("0000FF"), (0, 0, 255))
        with self.assertRaises(ValueError):
            parse_color("#12345")
        with self.assertRaises(ValueError):
            parse_color("chartreuse")


if __name__ == "__main__":
    unittest.main()
