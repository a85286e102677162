"""
Help text formatter tests.

Scope
- Validate the line layout (names, metavars, padding, descriptions).
- Validate script name discovery and banner substitution.
- Validate styling switches and rich Text descriptions.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import sys
import unittest
from unittest import TestCase, mock

from rich.text import Text

from gnuopt import (
    DEFAULT_BANNER,
    HelpTextFormatter,
    OPTIONAL_ARGUMENT,
    Option,
    REQUIRED_ARGUMENT,
    discover_script_name,
)


class TestLayout(TestCase):
    """Line layout of the option listing."""

    def setUp(self):
        self.formatter = HelpTextFormatter("Usage: %s [options]\n", script_name="tool")

    def testBannerAndLabel(self):
        self.assertEqual(self.formatter.format([]), "Usage: tool [options]\nOptions:\n")

    def testMetavars(self):
        text = self.formatter.format([
            Option("a"),
            Option("o", None, REQUIRED_ARGUMENT),
            Option(None, "color", OPTIONAL_ARGUMENT),
        ])
        lines = text.splitlines()[2:]
        self.assertEqual(lines[0], "  -a ".ljust(25) + " ")
        self.assertEqual(lines[1], "  -o <arg>".ljust(25) + " ")
        self.assertEqual(lines[2], "  --color [<arg>]".ljust(25) + " ")

    def testDescriptionColumn(self):
        text = self.formatter.format([Option("v", "verbose", description="talk more")])
        self.assertIn("\n" + "  -v, --verbose ".ljust(25) + " talk more\n", text)

    def testLongHeadIsNotTruncated(self):
        option = Option(None, "a-very-long-option-name", REQUIRED_ARGUMENT, description="x")
        self.assertIn("  --a-very-long-option-name <arg> x\n", self.formatter.format([option]))

    def testPadding(self):
        self.formatter.padding = 10
        self.assertIn("  -a ".ljust(10) + " first\n", self.formatter.format([Option("a", description="first")]))
        self.assertIn("  -a ".ljust(30) + " first\n", self.formatter.format([Option("a", description="first")], 30))
        self.assertEqual(self.formatter.padding, 10)

    def testPaddingValidation(self):
        with self.assertRaises(ValueError):
            self.formatter.padding = -1
        with self.assertRaises(TypeError):
            self.formatter.padding = "25"

    def testBannerValidation(self):
        with self.assertRaises(TypeError):
            self.formatter.banner = None

    def testTextDescription(self):
        option = Option("a", description=Text("styled", "bold"))
        text = self.formatter.render([option])
        self.assertTrue(text.plain.endswith(" styled\n"))
        self.assertTrue(any(span.style == "bold" for span in text.spans))


class TestStyling(TestCase):
    """Palette switches."""

    options = [Option("o", "output", REQUIRED_ARGUMENT, description="where")]

    def testPlainHasNoStyles(self):
        text = HelpTextFormatter(script_name="tool").render(self.options)
        self.assertEqual(text.spans, [])

    def testColorfulHasStyles(self):
        text = HelpTextFormatter(script_name="tool", colorful=True).render(self.options)
        self.assertTrue(text.spans)
        self.assertEqual(text.plain, HelpTextFormatter(script_name="tool").format(self.options))

    def testStylesOverride(self):
        main = sys.modules["__main__"]
        with mock.patch.object(main, "__styles__", {"metavar": "underline"}, create=True):
            text = HelpTextFormatter(script_name="tool", colorful=True).render(self.options)
        self.assertTrue(any(span.style == "underline" for span in text.spans))


class TestScriptName(TestCase):
    """Script name discovery."""

    def testDefaultBanner(self):
        text = HelpTextFormatter(script_name="tool").format([])
        self.assertEqual(text, DEFAULT_BANNER.replace("%s", "tool") + "Options:\n")

    def testFromArgv(self):
        with mock.patch.object(sys, "argv", ["/usr/local/bin/mytool", "-a"]):
            self.assertEqual(discover_script_name(), "mytool")
            self.assertEqual(HelpTextFormatter().script_name, "mytool")

    def testFromMain(self):
        main = sys.modules["__main__"]
        with mock.patch.object(main, "__prog__", "custom", create=True):
            self.assertEqual(discover_script_name(), "custom")

    def testFallback(self):
        with mock.patch.object(sys, "argv", []):
            self.assertEqual(discover_script_name(), "getopt")

    def testOverride(self):
        formatter = HelpTextFormatter(script_name="first")
        formatter.script_name = "second"
        self.assertEqual(formatter.script_name, "second")
        with self.assertRaises(TypeError):
            formatter.script_name = 1


if __name__ == "__main__":
    unittest.main()
