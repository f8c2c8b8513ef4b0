"""Unit tests for diagnostics reporting."""

import io
import unittest

from rich.console import Console

from bindgen_args.diagnostics import (
    CollectingDiagnostics,
    ConsoleDiagnostics,
    Location,
)


class TestLocation(unittest.TestCase):
    """Test location formatting."""

    def test_str(self):
        """Test that the key is shown when present."""
        self.assertEqual("opts.toml", str(Location("opts.toml")))
        self.assertEqual("opts.toml[link]", str(Location("opts.toml", "link")))


class TestConsoleDiagnostics(unittest.TestCase):
    """Test printing diagnostics."""

    def setUp(self):
        self.output = io.StringIO()
        self.diagnostics = ConsoleDiagnostics(
            Console(file=self.output, color_system=None, width=200)
        )

    def test_error(self):
        """Test that errors are printed and counted."""
        self.diagnostics.error(Location("b.toml", "link"), "Invalid link type: x")
        self.assertEqual(
            "b.toml[link]: error: Invalid link type: x\n", self.output.getvalue()
        )
        self.assertEqual(1, self.diagnostics.error_count)
        self.assertEqual(0, self.diagnostics.warning_count)

    def test_warning(self):
        """Test that warnings are printed and counted."""
        self.diagnostics.warning(Location("b.toml"), "clang_args is empty")
        self.assertEqual(
            "b.toml: warning: clang_args is empty\n", self.output.getvalue()
        )
        self.assertEqual(1, self.diagnostics.warning_count)

    def test_markup_is_escaped(self):
        """Test that brackets in messages are printed literally."""
        self.diagnostics.error(Location("x.toml"), "bad [red] value")
        self.assertIn("bad [red] value", self.output.getvalue())


class TestCollectingDiagnostics(unittest.TestCase):
    """Test in-memory diagnostics."""

    def test_split_by_level(self):
        """Test that reports are kept in order and split by level."""
        diagnostics = CollectingDiagnostics()
        diagnostics.warning(Location("a"), "w")
        diagnostics.error(Location("a", "k"), "e")

        self.assertEqual(["warning", "error"], [r.level for r in diagnostics.reports])
        self.assertEqual(["e"], [r.message for r in diagnostics.errors])
        self.assertEqual(["w"], [r.message for r in diagnostics.warnings])


if __name__ == "__main__":
    unittest.main()
