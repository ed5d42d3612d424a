import contextlib
import io
import os
import tempfile
import unittest

from meowchip.cli import build_parser, main
from meowchip.constants import (
    EXIT_OK, EXIT_ROM_ERROR, EXIT_RUNTIME_ERROR, MAX_ROM_SIZE,
)

# CLS; V0=5; V1=10; I=$200; DRW V0, V1, 5; JP $20A
DEMO = bytes([0x00, 0xE0, 0x60, 0x05, 0x61, 0x0A, 0xA2, 0x00,
              0xD0, 0x15, 0x12, 0x0A])


class TestMain(unittest.TestCase):
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

    def run_main(self, *argv):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            code = main(["-q", *argv])
        return code, out.getvalue()

    def test_missing_argument(self):
        self.assertEqual(self.run_main()[0], EXIT_ROM_ERROR)

    def test_missing_file(self):
        code, _ = self.run_main(os.path.join(self.dir, "missing.ch8"))
        self.assertEqual(code, EXIT_ROM_ERROR)

    def test_name_too_long(self):
        code, _ = self.run_main(os.path.join(self.dir, "x" * 5000 + ".ch8"))
        self.assertEqual(code, EXIT_ROM_ERROR)

    def test_oversized_file(self):
        path = self.write("huge.ch8", b"\x00" * (MAX_ROM_SIZE + 1))
        self.assertEqual(self.run_main(path)[0], EXIT_ROM_ERROR)

    def test_headless_run(self):
        path = self.write("demo.ch8", DEMO)
        code, out = self.run_main("--headless", "--frames", "2", path)
        self.assertEqual(code, EXIT_OK)
        lines = out.splitlines()
        self.assertEqual(lines[0], "SCREEN (frame 2):")
        screen = lines[1:33]
        self.assertEqual(len(screen), 32)
        self.assertEqual(screen[11], "." * 5 + "███" + "." * 56)
        self.assertEqual(screen[0], "." * 64)

    def test_runtime_error(self):
        path = self.write("ret.ch8", b"\x00\xEE")
        code, _ = self.run_main("--headless", path)
        self.assertEqual(code, EXIT_RUNTIME_ERROR)

    def test_strict_mode(self):
        path = self.write("alu.ch8", b"\x81\x24\x12\x00")
        self.assertEqual(self.run_main("--headless", "--frames", "1", path)[0],
                         EXIT_OK)
        self.assertEqual(self.run_main("--headless", "--strict", path)[0],
                         EXIT_RUNTIME_ERROR)

    def test_disassemble(self):
        path = self.write("demo.ch8", DEMO + b"\x7F")
        code, out = self.run_main("--disassemble", path)
        self.assertEqual(code, EXIT_OK)
        lines = out.splitlines()
        self.assertEqual(lines[0], "$200: 00E0  CLS")
        self.assertEqual(lines[4], "$208: D015  DRW V0, V1, 5")
        self.assertEqual(lines[-1], "$20C: 7F  DB $7F")


class TestParser(unittest.TestCase):
    def test_options(self):
        args = build_parser().parse_args(
            ["--scale", "4", "--fg", "amber", "--bg", "#102030",
             "--no-outlines", "--clock", "1000", "game.ch8"])
        self.assertEqual(args.rom, "game.ch8")
        self.assertEqual(args.scale, 4)
        self.assertEqual(args.foreground, (255, 176, 0))
        self.assertEqual(args.background, (0x10, 0x20, 0x30))
        self.assertFalse(args.outlines)
        self.assertEqual(args.clock_hz, 1000)

    def test_defaults(self):
        args = build_parser().parse_args(["game.ch8"])
        self.assertEqual(args.foreground, (255, 255, 255))
        self.assertEqual(args.background, (0, 0, 0))
        self.assertTrue(args.outlines)
        self.assertFalse(args.headless)

    def test_bad_color(self):
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as cm:
                build_parser().parse_args(["--fg", "nope", "game.ch8"])
        self.assertEqual(cm.exception.code, 2)


if __name__ == "__main__":
    unittest.main()
