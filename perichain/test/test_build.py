# run the build tool end to end on description files in a scratch directory

import io
import os
import tempfile
import unittest

from ..host.build import main
from ..rom import parse_listing
from ..registry import names

PERILIST = """DPI
board: baseboard4
#
v0.1
-
-
-
-
enumerator
#servos
servo4
null
"""

class TestBuild(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = self._tmp.name

    def tearDown(self):
        self._tmp.cleanup()

    def path(self, name):
        return os.path.join(self.dir, name)

    def write(self, name, text):
        with open(self.path(name), "w") as f:
            f.write(text)
        return self.path(name)

    def read(self, name):
        with open(self.path(name), "r") as f:
            return f.read()

    def build(self, *extra, perilist=PERILIST):
        self.write("perilist", perilist)
        out = io.StringIO()
        argv = ["-q",
            "--includes-tmp", self.path("includes.tmp"),
            "--enumerator", self.path("enumerator.lst"),
        ] + list(extra) + [self.path("perilist")]
        return main(argv, stdout=out), out.getvalue()

    def test_build(self):
        ret, wiring = self.build()
        self.assertEqual(ret, 0)

        self.assertIn("    // enumerator\n    enumerator p00(", wiring)
        self.assertIn("    // servo4\n    servo4 p01(", wiring)
        self.assertIn("    assign `PIN_00 = p01servo[0];\n", wiring)
        self.assertIn("    null p02(", wiring)
        self.assertTrue(wiring.endswith("\nendmodule\n"))

        self.assertEqual(self.read("includes.tmp"), "`include \"enumerator.v\"\n"
            "`include \"servo4.v\"\n`include \"null.v\"\n")

        rom = parse_listing(self.read("enumerator.lst"))
        expected = (b"DPI\0board: baseboard4\0#\0v0.1\0-\0-\0-\0-\0"
            b"enumerator\0servo4\0null\0")
        self.assertEqual(rom[:len(expected)], expected)
        self.assertEqual(rom[len(expected):], bytes(len(rom)-len(expected)))
        self.assertEqual(len(self.read("enumerator.lst").splitlines()), 16)

    def test_optional_outputs(self):
        self.write("protomain", "module main();\n    wire x;\n")
        ret, wiring = self.build(
            "--protomain", self.path("protomain"),
            "-o", self.path("main.v"),
            "--includes", self.path("includes.v"),
            "--sysdefs", self.path("sysdefs.h"),
            "--init-records", "64")
        self.assertEqual(ret, 0)
        self.assertEqual(wiring, "")

        main_v = self.read("main.v")
        self.assertTrue(main_v.startswith("module main();\n    wire x;\n\n"))
        self.assertTrue(main_v.endswith("\nendmodule\n"))

        includes = self.read("includes.v").splitlines()
        self.assertEqual(includes[0], "`include \"sysdefs.h\"")
        self.assertEqual(includes[-3:], ["`include \"enumerator.v\"",
            "`include \"null.v\"", "`include \"servo4.v\""])

        self.assertIn("`define CMD_OP_FIELD", self.read("sysdefs.h"))
        self.assertEqual(len(self.read("enumerator.lst").splitlines()), 64)

    def test_unknown_peripheral(self):
        with self.assertLogs("perichain.host.build", "ERROR") as cm:
            ret, wiring = self.build(perilist=PERILIST+"servo5\nnull\n")
        self.assertEqual(ret, 1)
        self.assertIn("Unknown peripheral: servo5", cm.output[0])
        self.assertEqual(wiring, "")
        # nothing gets written when the build fails
        self.assertFalse(os.path.exists(self.path("enumerator.lst")))
        self.assertFalse(os.path.exists(self.path("includes.tmp")))

    def test_header_bytes_verbatim(self):
        header = (b"(c) 2020 \xa9 Demand\nDPI\rrev\n"
            + PERILIST.encode().split(b"\n", 2)[2])
        with open(self.path("perilist"), "wb") as f:
            f.write(header)
        ret = main(["-q",
            "--includes-tmp", self.path("includes.tmp"),
            "--enumerator", self.path("enumerator.lst"),
            self.path("perilist")], stdout=io.StringIO())
        self.assertEqual(ret, 0)
        rom = parse_listing(self.read("enumerator.lst"))
        self.assertTrue(rom.startswith(b"(c) 2020 \xa9 Demand\0DPI\rrev\0#\0"))
        self.assertIn(b"-\0enumerator\0servo4\0null\0", rom)

    def test_short_header(self):
        with self.assertLogs("perichain.host.build", "ERROR") as cm:
            ret, _ = self.build(perilist="DPI\nbaseboard4\n")
        self.assertEqual(ret, 1)
        self.assertIn("Not enough header strings", cm.output[0])

    def test_rom_overflow(self):
        with self.assertLogs("perichain.host.build", "ERROR") as cm:
            ret, _ = self.build(perilist=PERILIST+"enumerator\n"*200)
        self.assertEqual(ret, 1)
        self.assertIn("Enumerator ROM overflow", cm.output[0])

    def test_past_init_records(self):
        # fits in the ROM but not in the default 16 records
        with self.assertLogs("perichain.host.build", "ERROR") as cm:
            ret, _ = self.build(perilist=PERILIST+"enumerator\n"*60)
        self.assertEqual(ret, 1)
        self.assertIn("16 init records only hold 512", cm.output[0])
        self.assertNotIn("ROM overflow", cm.output[0])
        self.assertIn("--init-records 64", cm.output[1])
        ret, _ = self.build("--init-records", "64",
            perilist=PERILIST+"enumerator\n"*60)
        self.assertEqual(ret, 0)

    def test_missing_file(self):
        with self.assertLogs("perichain.host.build", "ERROR"):
            ret = main(["-q", self.path("nope")], stdout=io.StringIO())
        self.assertEqual(ret, 1)

    def test_bad_arguments(self):
        with self.assertRaises(SystemExit):
            main(["-q"], stdout=io.StringIO())
        with self.assertRaises(SystemExit):
            main(["-q", "--init-records", "0", "perilist"],
                stdout=io.StringIO())

    def test_list(self):
        out = io.StringIO()
        self.assertEqual(main(["-q", "--list"], stdout=out), 0)
        lines = out.getvalue().splitlines()
        self.assertEqual([l.split()[0] for l in lines], list(names()))
        self.assertTrue(any(l.split()[:3] == ["drv4", "out4", "drv3"]
            for l in lines))

if __name__ == "__main__":
    unittest.main()
