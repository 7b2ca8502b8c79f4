"""Command line entry points."""
import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

from geogrid.config import load_toml_config, write_toml
from geogrid.main import main, parse_size


class TestParseSize(unittest.TestCase):

    def test_parse(self):
        self.assertEqual(parse_size("2048x1365"), (2048, 1365))
        self.assertEqual(parse_size("800X600"), (800, 600))
        self.assertEqual(parse_size("abc"), (2048, 2048))
        self.assertEqual(parse_size("0x10"), (2048, 10))
        self.assertEqual(parse_size("0x-5"), (2048, 2048))
        self.assertEqual(parse_size("-640x480"), (2048, 480))


class TestCli(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name)
        self.config = self.root / "config.toml"
        write_toml({"style": {"seed": 123456789, "theme": "olives", "complexity": 2}, "output": {"dir": "out"}}, self.config)
        patcher = mock.patch.dict(os.environ, {"GEN_SEED": ""})
        patcher.start()
        self.addCleanup(patcher.stop)

    def run_cli(self, *argv):
        buf = io.StringIO()
        with redirect_stdout(buf):
            code = main(["--config", str(self.config), *argv])
        return code, buf.getvalue()

    def test_hash(self):
        code, out = self.run_cli("hash")
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "21i3v9-0-2-0-0-a")

    def test_decode(self):
        code, out = self.run_cli("decode", "10-6-5-2-4-5")
        self.assertEqual(code, 0)
        self.assertIn("francoPhile", out)
        self.assertIn("#E63946", out)

    def test_decode_invalid(self):
        code, out = self.run_cli("decode", "5-999-2")
        self.assertEqual(code, 1)
        self.assertEqual(out, "")

    def test_render(self):
        code, out = self.run_cli("render", "--hash", "a-0-2")
        self.assertEqual(code, 0)
        svg = self.root / "out" / "geogrid-a-0-2-0-0-a.svg"
        self.assertTrue(svg.exists())

    def test_render_invalid_hash_writes_nothing(self):
        code, _ = self.run_cli("render", "--hash", "x-y-z")
        self.assertEqual(code, 1)
        self.assertFalse((self.root / "out").exists())

    def test_seedlist(self):
        code, _ = self.run_cli("seedlist", "4", "--min", "10", "--max", "20")
        self.assertEqual(code, 0)
        seeds = load_toml_config(self.config)["style"]["seedlist"]
        self.assertEqual(len(seeds), 4)
        self.assertTrue(all(10 <= s <= 20 for s in seeds))

    def test_seedlist_rejects_negative_range(self):
        """A negative range would leave a seed list no command can load."""
        with self.assertLogs("geogrid.main", level="ERROR"):
            code, _ = self.run_cli("seedlist", "3", "--min", "-10", "--max", "-1")
        self.assertEqual(code, 1)
        self.assertNotIn("seedlist", load_toml_config(self.config)["style"])
        self.assertEqual(self.run_cli("hash")[0], 0)

    def test_seedlist_rejects_bad_count_and_range(self):
        for argv in (("0",), ("2", "--min", "9", "--max", "3")):
            with self.assertLogs("geogrid.main", level="ERROR"):
                self.assertEqual(self.run_cli("seedlist", *argv)[0], 1)

    def test_negative_seed_in_config_fails_cleanly(self):
        write_toml({"style": {"seedlist": [-2, 5]}}, self.config)
        with self.assertLogs("geogrid.main", level="ERROR") as logs:
            code, out = self.run_cli("hash")
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("non-negative", logs.output[0])

    def test_export_negative_size_uses_default(self):
        def fake_svg_to_png(source, target, width, height):
            target.write_bytes(b"\x89PNG fake")
            return target

        with mock.patch("geogrid.export.svg_to_png", side_effect=fake_svg_to_png) as convert:
            code, out = self.run_cli("export", "0x-5")
        self.assertEqual(code, 0)
        self.assertEqual(convert.call_args.kwargs, {"width": 2048, "height": 2048})
        png = self.root / "out" / "geogrid-21i3v9-0-2-0-0-a-2048x2048.png"
        self.assertTrue(png.exists())
        self.assertIn(png.name, out)

    def test_render_no_grid(self):
        self.assertEqual(self.run_cli("render", "--out", str(self.root / "grid.svg"))[0], 0)
        self.assertEqual(self.run_cli("render", "--no-grid", "--out", str(self.root / "plain.svg"))[0], 0)
        self.assertIn("<line", (self.root / "grid.svg").read_text(encoding="utf-8"))
        self.assertNotIn("<line", (self.root / "plain.svg").read_text(encoding="utf-8"))

    def test_favorites_flow(self):
        code, out = self.run_cli("fav", "add", "--name", "first")
        self.assertEqual(code, 0)
        code, out = self.run_cli("fav", "list")
        self.assertIn("21i3v9-0-2-0-0-a", out)
        self.assertIn("first", out)
        self.assertEqual(self.run_cli("fav", "rename", "--hash", "21i3v9-0-2-0-0-a", "--name", "x")[0], 0)
        self.assertEqual(self.run_cli("fav", "remove", "--hash", "21i3v9-0-2-0-0-a")[0], 0)
        self.assertEqual(self.run_cli("fav", "remove", "--hash", "21i3v9-0-2-0-0-a")[0], 1)


if __name__ == "__main__":
    unittest.main()
