"""
Usage renderer behavioral tests (sections, rows, wrapping, option checks).

Scope
- Validate the title, description, synopsis, option sections and footer.
- Validate row layout (alias column, type labels, description column).
- Validate rejected options.

Conventions
- Test method names follow CamelCase per project convention.
- Output is rendered without colors unless a test asks for them.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from cliargs import Definitions
from cliargs.usage import render


class TestRender(TestCase):
    """Behavioral tests for render."""

    def setUp(self):
        self.definitions = Definitions([
            {"name": "verbose", "alias": "v", "type": bool, "description": "print more", "group": "main"},
            {"name": "files", "type": str, "multiple": True, "description": "input files", "group": "main"},
            {"name": "depth", "alias": "d", "type": int, "type_label": "levels"},
            {"name": "secret", "description": "internal use"},
        ])

    def testEmpty(self):
        self.assertEqual(render(Definitions()), "")

    def testRows(self):
        usage = render(self.definitions)
        self.assertIn("options:", usage)
        self.assertIn("  -v, --verbose" + " " * 9 + "print more", usage)
        self.assertIn("      --files str[]" + " " * 5 + "input files", usage)
        self.assertIn("  -d, --depth levels", usage)
        self.assertIn("      --secret" + " " * 10 + "internal use", usage)

    def testSections(self):
        usage = render(
            self.definitions,
            {"title": "tool", "description": "does things", "footer": "see the manual"},
            synopsis=["tool [options] <files>...", "tool --help"],
        )
        lines = usage.splitlines()
        self.assertEqual(lines[0], "tool")
        self.assertIn("does things", lines)
        self.assertIn("usage:", lines)
        self.assertIn("  tool [options] <files>...", lines)
        self.assertIn("  tool --help", lines)
        self.assertEqual(lines[-1], "see the manual")
        self.assertLess(usage.index("usage:"), usage.index("options:"))

    def testHide(self):
        usage = render(self.definitions, hide="secret")
        self.assertNotIn("--secret", usage)
        self.assertIn("--verbose", usage)

    def testGroups(self):
        usage = render(self.definitions, groups={"main": "Main options", "_none": "Other options"})
        self.assertLess(usage.index("Main options:"), usage.index("Other options:"))
        self.assertLess(usage.index("--files"), usage.index("Other options:"))
        self.assertGreater(usage.index("--depth"), usage.index("Other options:"))

    def testEmptyGroupSkipped(self):
        usage = render(self.definitions, groups={"server": "Server options", "main": "Main options"})
        self.assertNotIn("Server options", usage)
        self.assertNotIn("--depth", usage)

    def testLongNamesWrapToNextLine(self):
        definitions = Definitions([{"name": "a-really-long-option-name", "type": int, "description": "tuned"}])
        lines = render(definitions).splitlines()
        index = lines.index("      --a-really-long-option-name int")
        self.assertEqual(lines[index + 1], " " * 24 + "tuned")

    def testDescriptionHangingIndent(self):
        definitions = Definitions([{"name": "file", "description": "word " * 20}])
        lines = render(definitions, width=40).splitlines()[1:]
        self.assertGreater(len(lines), 1)
        for line in lines[1:]:
            self.assertTrue(line.startswith(" " * 24))
            self.assertLessEqual(len(line), 40)

    def testColorful(self):
        self.assertNotIn("\x1b[", render(self.definitions))
        self.assertIn("\x1b[", render(self.definitions, colorful=True))

    def testRejectedOptions(self):
        with self.assertRaises(TypeError):
            render(self.definitions, titel="tool")
        with self.assertRaises(TypeError):
            render(self.definitions, width=10)
        with self.assertRaises(TypeError):
            render(self.definitions, groups=["main"])
        with self.assertRaises(TypeError):
            render(self.definitions, "tool")


if __name__ == "__main__":
    unittest.main()
