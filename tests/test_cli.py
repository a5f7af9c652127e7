"""Tests for CLI argument handling."""

import logging
import os
import shutil
import struct
import sys
import tempfile
import unittest
from unittest import mock

import yaml


def _write_face(path, size=16, four_cc=b"DXT1", payload=b"\x5a" * 8):
    header = bytearray(124)
    struct.pack_into("<I", header, 0, 124)
    struct.pack_into("<I", header, 8, size)
    struct.pack_into("<I", header, 12, size)
    struct.pack_into("<I", header, 24, size.bit_length())
    struct.pack_into("<I", header, 72, 32)
    header[80:84] = four_cc
    with open(path, "wb") as f:
        f.write(b"DDS " + bytes(header) + payload)


class TestCLI(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.faces = []
        for label in ("px", "nx", "py", "ny", "pz", "nz"):
            path = os.path.join(self.tmpdir, f"{label}.dds")
            _write_face(path)
            self.faces.append(path)
        self.output = os.path.join(self.tmpdir, "cube.dds")

    def tearDown(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def _run(self, argv):
        from ddscubemap import cli
        with mock.patch.object(sys, "argv", ["ddscubemap"] + argv):
            with mock.patch("ddscubemap.cli.setup_logging"):
                return cli.main()

    def test_help_exits_zero_without_processing(self):
        for flag in ("-h", "--help", "-help"):
            with mock.patch("ddscubemap.assembler.CubemapAssembler") as assembler_cls:
                with mock.patch("sys.stdout"):
                    with self.assertRaises(SystemExit) as ctx:
                        self._run([flag])
            self.assertEqual(ctx.exception.code, 0)
            assembler_cls.assert_not_called()

    def test_success_writes_cubemap(self):
        self._run(self.faces + ["-o", self.output])
        self.assertEqual(os.path.getsize(self.output), 128 + 6 * 8)
        with open(self.output, "rb") as f:
            f.seek(112)
            caps2 = struct.unpack("<I", f.read(4))[0]
        self.assertTrue(caps2 & 0xFE00)

    def test_output_flag_may_precede_faces(self):
        self._run(["--output", self.output] + self.faces)
        self.assertTrue(os.path.exists(self.output))

    def test_wrong_face_count_is_usage_error(self):
        for faces in (self.faces[:5], self.faces + self.faces[:1], []):
            with mock.patch("ddscubemap.assembler.CubemapAssembler") as assembler_cls:
                with mock.patch("sys.stderr"):
                    with self.assertRaises(SystemExit) as ctx:
                        self._run(faces + ["-o", self.output])
            self.assertEqual(ctx.exception.code, 1)
            assembler_cls.assert_not_called()
        self.assertFalse(os.path.exists(self.output))

    def test_missing_output_is_usage_error(self):
        with mock.patch("ddscubemap.assembler.CubemapAssembler") as assembler_cls:
            with mock.patch("sys.stderr"):
                with self.assertRaises(SystemExit) as ctx:
                    self._run(list(self.faces))
        self.assertEqual(ctx.exception.code, 1)
        assembler_cls.assert_not_called()

    def test_unknown_option_is_usage_error(self):
        with mock.patch("sys.stderr"):
            with self.assertRaises(SystemExit) as ctx:
                self._run(self.faces + ["-o", self.output, "--bogus"])
        self.assertEqual(ctx.exception.code, 1)

    def test_processing_error_exits_one(self):
        _write_face(self.faces[4], four_cc=b"DXT5")
        with mock.patch("sys.stderr"):
            with self.assertRaises(SystemExit) as ctx:
                self._run(self.faces + ["-o", self.output])
        self.assertEqual(ctx.exception.code, 1)

    def test_overrides_reach_assembler_config(self):
        log_file = os.path.join(self.tmpdir, "logs", "run.log")
        with mock.patch("ddscubemap.assembler.CubemapAssembler") as assembler_cls:
            self._run(self.faces + [
                "-o", self.output, "--log-level", "DEBUG",
                "--log-file", log_file, "--progress",
            ])
        cfg = assembler_cls.call_args[0][0]
        self.assertEqual(cfg.log_level, "DEBUG")
        self.assertEqual(cfg.log_file, log_file)
        self.assertTrue(cfg.show_progress)
        assembler_cls.return_value.run.assert_called_once_with(self.faces, self.output)

    def test_config_file_is_loaded(self):
        cfg_path = os.path.join(self.tmpdir, "ddscubemap.yaml")
        with open(cfg_path, "w", encoding="utf-8") as f:
            yaml.safe_dump({"warn_on_incomplete_mips": False}, f)
        with mock.patch("ddscubemap.assembler.CubemapAssembler") as assembler_cls:
            self._run(self.faces + ["-o", self.output, "-c", cfg_path])
        self.assertFalse(assembler_cls.call_args[0][0].warn_on_incomplete_mips)

    def test_missing_config_file_exits_one(self):
        with mock.patch("sys.stderr"):
            with self.assertRaises(SystemExit) as ctx:
                self._run(self.faces + ["-o", self.output, "-c",
                                        os.path.join(self.tmpdir, "nope.yaml")])
        self.assertEqual(ctx.exception.code, 1)

    def test_cli_configures_root_logging(self):
        from ddscubemap import cli

        root = logging.getLogger()
        saved_handlers = list(root.handlers)
        saved_level = root.level
        pkg_logger = logging.getLogger("ddscubemap")
        saved_pkg_level = pkg_logger.level
        for handler in saved_handlers:
            root.removeHandler(handler)
        try:
            with mock.patch.object(sys, "argv",
                                   ["ddscubemap"] + self.faces + ["-o", self.output]):
                with mock.patch("sys.stderr"):
                    cli.main()
            formats = [h.formatter._fmt for h in root.handlers if h.formatter]
            level = root.level
        finally:
            for handler in list(root.handlers):
                root.removeHandler(handler)
                handler.close()
            for handler in saved_handlers:
                root.addHandler(handler)
            root.setLevel(saved_level)
            pkg_logger.setLevel(saved_pkg_level)
        self.assertTrue(formats)
        self.assertTrue(all("%(asctime)s" in fmt for fmt in formats))
        self.assertEqual(level, logging.INFO)

    def test_generate_config_respects_config_path(self):
        out_cfg = os.path.join(self.tmpdir, "generated.yaml")
        with mock.patch("sys.stdout"):
            self._run(["--generate-config", "-c", out_cfg])
        self.assertTrue(os.path.exists(out_cfg))
        with open(out_cfg, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        self.assertEqual(data["log_level"], "INFO")


if __name__ == "__main__":
    unittest.main(verbosity=2)
