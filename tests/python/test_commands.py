"""Unit tests for the command-line interface."""

import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest import mock

from bindgen_args.commands import main


class TestCommands(unittest.TestCase):
    """Test CLI commands."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def run_cli(self, *argv: str) -> str:
        stdout = io.StringIO()
        with mock.patch("sys.argv", ["bgargs", *argv]), redirect_stdout(stdout):
            main()
        return stdout.getvalue()

    def write_options(self, content: str) -> str:
        path = os.path.join(self.tmp.name, "bindgen.toml")
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        return path

    def test_split(self):
        """Test splitting a string from the command line."""
        output = self.run_cli("split", "cc -I 'my dir' -DX")
        self.assertEqual(["cc", "-I", "my dir", "-DX"], json.loads(output))

    def test_split_option_like_string(self):
        """Test splitting a string that starts with a dash."""
        self.assertEqual(
            ["-I/usr/include"], json.loads(self.run_cli("split", "-I/usr/include"))
        )
        self.assertEqual(
            ["-DFOO", "-I", "/usr/include"],
            json.loads(self.run_cli("split", "-DFOO", "-I", "/usr/include")),
        )

    def test_split_after_double_dash(self):
        """Test that a leading -- is dropped."""
        self.assertEqual(["-h"], json.loads(self.run_cli("split", "--", "-h")))

    def test_unknown_option_rejected(self):
        """Test that other commands still reject unknown options."""
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as cm:
                self.run_cli("check", "--bogus")
        self.assertEqual(2, cm.exception.code)

    def test_usage(self):
        """Test that no arguments prints usage."""
        self.assertIn("Usage: bgargs", self.run_cli())
        self.assertIn("Usage: bgargs", self.run_cli("help"))

    def test_version(self):
        """Test the version command."""
        self.assertEqual("0.1\n", self.run_cli("version"))

    def test_check(self):
        """Test checking a valid options file."""
        path = self.write_options('headers = "a.h"\nclang_args = "-DX -DY"\n')
        output = self.run_cli("check", path)
        self.assertIn("1      Headers", output)
        self.assertIn("4      Clang args", output)

    def test_check_invalid(self):
        """Test that an invalid options file exits with status 1."""
        path = self.write_options('colour = "red"\n')
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as cm:
                self.run_cli("check", path)
        self.assertEqual(1, cm.exception.code)

    def test_args(self):
        """Test printing the argument vector."""
        path = self.write_options('headers = "a.h"\nclang_args = "-D\'A B\'"\n')
        lines = self.run_cli("args", path).splitlines()
        self.assertEqual(["-DA B", "-I", os.path.abspath(self.tmp.name), "a.h"], lines)

    def test_args_output(self):
        """Test writing the argument vector to a file."""
        path = self.write_options('clang_args = "-v"\n')
        output = os.path.join(self.tmp.name, "args.json")
        self.run_cli("args", path, "-o", output)

        with open(output, "r", encoding="utf-8") as f:
            self.assertEqual("-v", json.load(f)[0])

    @mock.patch("bindgen_args.options.shutil.which", return_value=None)
    def test_args_without_clang(self, _which):
        """Test that missing clang exits with status 1."""
        path = self.write_options('clang_args = "-v"\n')
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as cm:
                self.run_cli("args", "-s", path)
        self.assertEqual(1, cm.exception.code)


if __name__ == "__main__":
    unittest.main()
