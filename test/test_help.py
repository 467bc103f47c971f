"""
Help/version rendering behavioral tests.

Scope
- Validate width detection and its fallback.
- Validate word wrapping and that no rendered help line exceeds the width.
- Validate the help layout (usage, sections, hidden arguments, choices, defaults).

Conventions
- Test method names follow CamelCase per project convention.
- Rendering is checked through plain strings (format_help/format_version).
"""

from __future__ import annotations

import unittest
from unittest import TestCase, mock

from argbind import FALLBACK_WIDTH, Parser, detect_width, resolve_width, wrap
from argbind.faults import NoTerminalError


def tool(**options):
    parser = Parser("tool", descr="Copy files from one place to another, keeping their metadata intact.", **options)
    parser.add_argument("-v", "--verbose", action="store_true", descr="print every file as it is copied")
    parser.add_argument("-m", "--mode", choices=("fast", "safe"), default="safe", descr="copy strategy")
    parser.add_argument("--secret", action="store_true", hidden=True)
    parser.add_argument("source", nargs="+", descr="files or directories to copy")
    parser.add_argument("target", descr="destination directory")
    return parser


class TestWidth(TestCase):
    """Behavioral tests for terminal width detection."""

    def testNoTerminalRaises(self):
        with mock.patch("os.get_terminal_size", side_effect=OSError):
            with self.assertRaises(NoTerminalError):
                detect_width()

    def testDetectedWidth(self):
        with mock.patch("os.get_terminal_size", return_value=mock.Mock(columns=123)):
            self.assertEqual(detect_width(), 123)

    def testFallbackWidth(self):
        with mock.patch("argbind.help.detect_width", side_effect=NoTerminalError("no terminal")):
            self.assertEqual(resolve_width(), FALLBACK_WIDTH)
        self.assertEqual(FALLBACK_WIDTH, 80)

    def testExplicitWidth(self):
        self.assertEqual(resolve_width(40), 40)
        with self.assertRaises(ValueError):
            resolve_width(0)


class TestWrap(TestCase):
    """Behavioral tests for word wrapping."""

    def testWordsKeptWhole(self):
        lines = wrap("the quick brown fox jumps over the lazy dog", 10)
        self.assertGreater(len(lines), 1)
        self.assertTrue(all(len(line) <= 10 for line in lines))
        self.assertEqual(" ".join(lines), "the quick brown fox jumps over the lazy dog")

    def testLongWordsFolded(self):
        lines = wrap("abcdefghijkl", 5)
        self.assertTrue(all(len(line) <= 5 for line in lines))
        self.assertEqual("".join(lines), "abcdefghijkl")

    def testEmptyText(self):
        self.assertEqual(wrap("", 10), [])


class TestHelp(TestCase):
    """Behavioral tests for the help layout."""

    def testSectionsInOrder(self):
        text = tool().format_help(80)
        usage = text.index("usage: tool")
        positionals = text.index("positional arguments:")
        optionals = text.index("optional arguments:")
        self.assertLess(usage, positionals)
        self.assertLess(positionals, optionals)
        self.assertIn("Copy files", text)

    def testNoLineExceedsWidth(self):
        for width in (30, 40, 60, 80, 120):
            with self.subTest(width=width):
                text = tool().format_help(width)
                self.assertTrue(all(len(line) <= width for line in text.splitlines()), text)

    def testArgumentEntries(self):
        text = tool().format_help(100)
        self.assertIn("-h, --help", text)
        self.assertIn("-v, --verbose", text)
        self.assertIn("{fast,safe}", text)
        self.assertIn("(default: safe)", text)
        self.assertIn("<source> [<source> ...]", text)
        self.assertIn("destination directory", text)

    def testDescriptionsFollowWrap(self):
        parser = Parser("tool", helper=False)
        descr = "a fairly long description that has to be folded over several lines of help"
        parser.add_argument("-v", "--verbose", action="store_true", descr=descr)
        text = parser.format_help(60)
        lines = [line.strip() for line in text.splitlines()]
        for line in wrap(descr, 60 - 20):
            self.assertTrue(any(candidate.endswith(line) for candidate in lines), line)

    def testHiddenArgumentOmitted(self):
        self.assertNotIn("--secret", tool().format_help(100))

    def testCustomUsageAndEpilog(self):
        parser = Parser("tool", usage="tool [options] FILE", epilog="see the manual for more")
        text = parser.format_help(80)
        self.assertIn("usage: tool [options] FILE", text)
        self.assertTrue(text.rstrip().endswith("see the manual for more"))

    def testFancyPanelFitsWidth(self):
        text = tool(fancy=True).format_help(60)
        self.assertIn("TOOL HELP", text)
        self.assertTrue(all(len(line) <= 60 for line in text.splitlines()))

    def testDefaultWidthFallsBack(self):
        with mock.patch("argbind.help.detect_width", side_effect=NoTerminalError("no terminal")):
            text = tool().format_help()
        self.assertTrue(all(len(line) <= FALLBACK_WIDTH for line in text.splitlines()))


class TestVersion(TestCase):
    """Behavioral tests for version output."""

    def testVersionLine(self):
        self.assertEqual(Parser("tool", version="1.2.3").format_version(40).strip(), "tool 1.2.3")

    def testMissingVersion(self):
        self.assertEqual(Parser("tool").format_version(40).strip(), "tool 0.0.0")


if __name__ == "__main__":
    unittest.main()
