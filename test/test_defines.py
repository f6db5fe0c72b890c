"""
Define grammar tests ("-d NAME=value").

Scope
- Integer detection: optional leading '-' and ASCII digits only.
- Everything else stays a string, verbatim (including '=' and empty values).
- Malformed tokens raise DefineParseError carrying the offending token.
"""
from __future__ import annotations

import unittest
from unittest import TestCase

from gvasm import Define, DefineParseError, FaultCode, parse_define, parse_defines


class TestDefine(TestCase):

    def testIntegerValue(self):
        self.assertEqual(parse_define("FOO=1"), Define("FOO", 1))
        self.assertEqual(parse_define("NEG=-5"), Define("NEG", -5))
        self.assertIsInstance(parse_define("FOO=1").value, int)

    def testStringValue(self):
        self.assertEqual(parse_define("BAR=bar"), Define("BAR", "bar"))

    def testNotQuiteIntegers(self):
        for value in ("+5", " 5", "5 ", "1.5", "0x10", "1e3", "-", "１"):
            with self.subTest(value=value):
                self.assertEqual(parse_define("X=" + value), Define("X", value))

    def testLongIntegerValue(self):
        self.assertEqual(parse_define("X=" + "1" * 5000), Define("X", (10 ** 5000 - 1) // 9))
        self.assertEqual(parse_define("X=-" + "0" * 4999 + "7"), Define("X", -7))
        self.assertEqual(parse_define("X=" + "9" * 1001).value, 10 ** 1001 - 1)

    def testEmptyValue(self):
        self.assertEqual(parse_define("EMPTY="), Define("EMPTY", ""))

    def testEqualsInsideValue(self):
        self.assertEqual(parse_define("A=b=c"), Define("A", "b=c"))

    def testMissingEquals(self):
        with self.assertRaises(DefineParseError) as context:
            parse_define("FOO")
        self.assertEqual(context.exception.options["input"], "FOO")
        self.assertIs(context.exception.options["code"], FaultCode.INVALID_DEFINE)

    def testEmptyName(self):
        with self.assertRaises(DefineParseError) as context:
            parse_define("=1")
        self.assertEqual(context.exception.options["input"], "=1")

    def testRejectsNonString(self):
        with self.assertRaises(TypeError):
            parse_define(1)


class TestDefines(TestCase):

    def testOrderAndDuplicatesPreserved(self):
        self.assertEqual(
            parse_defines(["A=1", "B=x", "A=2"]),
            (Define("A", 1), Define("B", "x"), Define("A", 2)),
        )

    def testEmpty(self):
        self.assertEqual(parse_defines(()), ())

    def testFirstMalformedAborts(self):
        with self.assertRaises(DefineParseError) as context:
            parse_defines(["A=1", "oops", "=x"])
        self.assertEqual(context.exception.options["input"], "oops")


if __name__ == "__main__":
    unittest.main()
