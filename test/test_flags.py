"""
Flag parser behavioral tests (schemas, aliases, values, diagnostics).

Scope
- Validate schema construction rules (names, duplicates, implicit help).
- Validate value rules for options, flags and collect options.
- Validate token grammar: inline, spaced, clusters, "--", stop_early.
- Validate unknown-flag diagnostics and their positions.

Conventions
- Test method names follow CamelCase per project convention.
"""
from __future__ import annotations

import unittest
from unittest import TestCase

from gvasm import Option, Flag, Schema, parse


def _schema(**options):
    return Schema(
        Option("output", "o"),
        Option("define", "d", collect=True),
        Option("execute", "x"),
        Flag("watch", "w"),
        **options,
    )


class TestSchema(TestCase):
    """Behavioral tests for Schema/Option/Flag construction."""

    def testHelpIsImplicit(self):
        schema = Schema()
        self.assertEqual(schema.lookup("h").name, "help")
        self.assertIs(schema.lookup("h"), schema.lookup("help"))

    def testDuplicateKeysRejected(self):
        with self.assertRaises(ValueError):
            Schema(Option("output", "o"), Flag("overwrite", "o"))

    def testHelpKeyCannotBeStolen(self):
        with self.assertRaises(ValueError):
            Schema(Option("height", "h"))

    def testNamesRejectDashesAndUnderscores(self):
        with self.assertRaises(ValueError):
            Option("--output")
        with self.assertRaises(ValueError):
            Flag("over_write")

    def testDuplicateAliasRejected(self):
        with self.assertRaises(ValueError):
            Option("output", "o", "o")

    def testNonSwitchRejected(self):
        with self.assertRaises(TypeError):
            Schema("output")

    def testIntrospection(self):
        option = Option("define", "d", collect=True)
        self.assertEqual(option.name, "define")
        self.assertEqual(option.aliases, ("d",))
        self.assertTrue(option.collect)
        self.assertIn("collect=True", repr(option))


class TestValues(TestCase):
    """Behavioral tests for the value rules."""

    def testFlagsDefaultToFalse(self):
        raw, unknowns = parse([], _schema())
        self.assertIs(raw.get("watch"), False)
        self.assertIs(raw.get("help"), False)
        self.assertNotIn("output", raw.values)
        self.assertEqual(unknowns, ())

    def testFlagPresenceSetsTrue(self):
        raw, _ = parse(["-w"], _schema())
        self.assertIs(raw.get("watch"), True)

    def testFlagInlineFalse(self):
        raw, _ = parse(["--watch=false"], _schema())
        self.assertIs(raw.get("watch"), False)

    def testFlagConsumesLiteralBoolean(self):
        raw, _ = parse(["--watch", "false", "a.gvasm"], _schema())
        self.assertIs(raw.get("watch"), False)
        self.assertEqual(raw.operands, ("a.gvasm",))

    def testOptionSpacedAndInline(self):
        for tokens in (["-o", "out.gba"], ["--output", "out.gba"], ["--output=out.gba"], ["-o=out.gba"], ["-oout.gba"], ["--o", "out.gba"]):
            with self.subTest(tokens=tokens):
                raw, _ = parse(tokens, _schema())
                self.assertEqual(raw.get("output"), "out.gba")

    def testLastOccurrenceWins(self):
        raw, _ = parse(["-o", "a.gba", "--output", "b.gba", "-o", "c.gba"], _schema())
        self.assertEqual(raw.get("output"), "c.gba")

    def testCollectPreservesOrder(self):
        raw, _ = parse(["-d", "FOO=1", "--define", "BAR=bar", "-d=BAZ=2"], _schema())
        self.assertEqual(raw.get("define"), ("FOO=1", "BAR=bar", "BAZ=2"))

    def testOptionWithoutValueIsEmpty(self):
        raw, _ = parse(["-o"], _schema())
        self.assertEqual(raw.get("output"), "")

    def testOptionDoesNotConsumeFlag(self):
        raw, _ = parse(["-o", "-w"], _schema())
        self.assertEqual(raw.get("output"), "")
        self.assertIs(raw.get("watch"), True)

    def testOptionTakesDash(self):
        raw, _ = parse(["-o", "-"], _schema())
        self.assertEqual(raw.get("output"), "-")

    def testValuesAreReadOnly(self):
        raw, _ = parse(["-w"], _schema())
        with self.assertRaises(TypeError):
            raw.values["watch"] = False  # type: ignore[index]


class TestTokens(TestCase):
    """Behavioral tests for the token grammar."""

    def testOperandsKeepOrder(self):
        raw, _ = parse(["a", "-w", "b", "-o", "x", "c"], _schema())
        self.assertEqual(raw.operands, ("a", "b", "c"))

    def testCluster(self):
        raw, _ = parse(["-wd", "FOO=1"], _schema())
        self.assertIs(raw.get("watch"), True)
        self.assertEqual(raw.get("define"), ("FOO=1",))

    def testClusterOptionTakesRest(self):
        raw, _ = parse(["-wx", "open {}"], _schema())
        self.assertEqual(raw.get("execute"), "open {}")
        raw, _ = parse(["-woout.gba"], _schema())
        self.assertEqual(raw.get("output"), "out.gba")

    def testDoubleDashEndsFlags(self):
        raw, unknowns = parse(["-w", "--", "-o", "--bogus"], _schema())
        self.assertEqual(raw.operands, ("-o", "--bogus"))
        self.assertNotIn("output", raw.values)
        self.assertEqual(unknowns, ())

    def testLoneDashIsOperand(self):
        raw, _ = parse(["-"], _schema())
        self.assertEqual(raw.operands, ("-",))

    def testStopEarly(self):
        raw, unknowns = parse(["-h", "foo", "-h", "--bar"], Schema(stop_early=True))
        self.assertIs(raw.get("help"), True)
        self.assertEqual(raw.operands, ("foo", "-h", "--bar"))
        self.assertEqual(unknowns, ())

    def testStopEarlyAfterOperandOnly(self):
        raw, _ = parse(["foo", "--help"], Schema(stop_early=True))
        self.assertIs(raw.get("help"), False)
        self.assertEqual(raw.operands, ("foo", "--help"))


class TestUnknown(TestCase):
    """Behavioral tests for unknown-flag diagnostics."""

    def testUnknownShortFlag(self):
        raw, unknowns = parse(["a.gvasm", "-z", "b"], _schema(), index=2)
        self.assertEqual(len(unknowns), 1)
        self.assertEqual(unknowns[0].name, "-z")
        self.assertEqual(unknowns[0].token, "-z")
        self.assertEqual(unknowns[0].index, 3)
        # the unknown flag never consumes the following token
        self.assertEqual(raw.operands, ("a.gvasm", "b"))

    def testUnknownLongFlagWithValue(self):
        raw, unknowns = parse(["--bogus=1"], _schema())
        self.assertEqual([unknown.name for unknown in unknowns], ["--bogus"])
        self.assertEqual(raw.operands, ())

    def testUnknownInsideCluster(self):
        raw, unknowns = parse(["-wzo", "out.gba"], _schema())
        self.assertEqual([unknown.name for unknown in unknowns], ["-z"])
        self.assertIs(raw.get("watch"), True)
        self.assertEqual(raw.get("output"), "out.gba")

    def testEveryUnknownIsReported(self):
        _, unknowns = parse(["-z", "--nope", "-q"], _schema())
        self.assertEqual([unknown.name for unknown in unknowns], ["-z", "--nope", "-q"])
        self.assertEqual([unknown.index for unknown in unknowns], [1, 2, 3])


if __name__ == "__main__":
    unittest.main()
