# python
"""
Numeric literal parser tests (bases, signs, bounds, floats).

Scope
- Validate base detection and digit rules for integer literals.
- Validate clamping on overflow and zero on syntax errors, for every width.
- Validate float parsing, float32 rounding and float overflow.
- Validate fault codes and the "<name>: '<token>'" detail.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import math
import unittest
from unittest import TestCase

from argsift import (
    FaultCode,
    NumericType,
    TYPES,
    INT8,
    INT64,
    UINT8,
    FLOAT32,
    detect_base,
    parse,
    resolve,
    parse_int,
    parse_int8,
    parse_int16,
    parse_int32,
    parse_int64,
    parse_uint,
    parse_uint8,
    parse_uint16,
    parse_uint32,
    parse_uint64,
    parse_float32,
    parse_float64,
)


class TestBaseDetection(TestCase):
    """Behavioral tests for detect_base()."""

    def testPrefixes(self):
        self.assertEqual(detect_base("0x1F"), ("1F", 16))
        self.assertEqual(detect_base("0X1F"), ("1F", 16))
        self.assertEqual(detect_base("0b101"), ("101", 2))
        self.assertEqual(detect_base("0o17"), ("17", 8))

    def testLeadingZeroIsOctal(self):
        self.assertEqual(detect_base("017"), ("17", 8))
        self.assertEqual(detect_base("0"), ("0", 8))

    def testDecimal(self):
        self.assertEqual(detect_base("42"), ("42", 10))
        self.assertEqual(detect_base("-12"), ("-12", 10))


class TestIntegerParsing(TestCase):
    """Behavioral tests for the integer parsers."""

    def testDecimalAndPrefixedValues(self):
        self.assertEqual(parse_int64("-n", "42"), (42, None))
        self.assertEqual(parse_int64("-n", "-42"), (-42, None))
        self.assertEqual(parse_int64("-n", "+7"), (7, None))
        self.assertEqual(parse_int64("-n", "0x1f"), (31, None))
        self.assertEqual(parse_int64("-n", "0b101"), (5, None))
        self.assertEqual(parse_int64("-n", "0o17"), (15, None))
        self.assertEqual(parse_int64("-n", "017"), (15, None))
        self.assertEqual(parse_int64("-n", "0"), (0, None))

    def testSignBeforePrefixIsSyntaxError(self):
        value, fault = parse_int64("-n", "-0x1f")
        self.assertEqual(value, 0)
        self.assertIn(FaultCode.SYNTAX, fault)

    def testDigitsOutsideBaseAreRejected(self):
        for token in ("09", "0b2", "0xg", "1a", "", " 1", "1_000", "1.0"):
            with self.subTest(token=token):
                value, fault = parse_int32("-n", token)
                self.assertEqual(value, 0)
                self.assertEqual(fault.codes, (FaultCode.INVALID_INT32, FaultCode.SYNTAX))

    def testSyntaxFaultMessage(self):
        _, fault = parse_int64("-n", "abc")
        self.assertEqual(str(fault), "invalid int64: syntax: -n: 'abc'")

    def testInt64Bounds(self):
        self.assertEqual(parse_int64("-n", "9223372036854775807"), (9223372036854775807, None))
        self.assertEqual(parse_int64("-n", "-9223372036854775808"), (-9223372036854775808, None))

        value, fault = parse_int64("-n", "9223372036854775808")
        self.assertEqual(value, 9223372036854775807)
        self.assertEqual(fault.codes, (FaultCode.INVALID_INT64, FaultCode.RANGE))

        value, fault = parse_int64("-n", "-9223372036854775809")
        self.assertEqual(value, -9223372036854775808)
        self.assertEqual(str(fault), "invalid int64: range: -n: '-9223372036854775809'")

    def testNarrowSignedBounds(self):
        self.assertEqual(parse_int8("-n", "127"), (127, None))
        self.assertEqual(parse_int8("-n", "0x80")[0], 127)
        self.assertEqual(parse_int8("-n", "-129")[0], -128)
        self.assertEqual(parse_int16("-n", "40000")[0], 32767)
        self.assertEqual(parse_int32("-n", "-2147483649")[0], -2147483648)

    def testNativeIntIsSixtyFourBits(self):
        self.assertEqual(parse_int("-n", "9223372036854775807"), (9223372036854775807, None))
        value, fault = parse_int("-n", "9223372036854775808")
        self.assertEqual(value, 9223372036854775807)
        self.assertEqual(fault.codes, (FaultCode.INVALID_INT, FaultCode.RANGE))

    def testUnsignedRejectsSigns(self):
        for token in ("-1", "+1"):
            with self.subTest(token=token):
                value, fault = parse_uint8("-n", token)
                self.assertEqual(value, 0)
                self.assertEqual(fault.codes, (FaultCode.INVALID_UINT8, FaultCode.SYNTAX))

    def testUnsignedBounds(self):
        self.assertEqual(parse_uint8("-n", "255"), (255, None))
        self.assertEqual(parse_uint8("-n", "256")[0], 255)
        self.assertEqual(parse_uint16("-n", "0xffff"), (65535, None))
        self.assertEqual(parse_uint32("-n", "4294967296")[0], 4294967295)
        self.assertEqual(parse_uint64("-n", "18446744073709551615"), (18446744073709551615, None))
        value, fault = parse_uint("-n", "18446744073709551616")
        self.assertEqual(value, 18446744073709551615)
        self.assertEqual(fault.codes, (FaultCode.INVALID_UINT, FaultCode.RANGE))


class TestFloatParsing(TestCase):
    """Behavioral tests for the float parsers."""

    def testDecimalLiterals(self):
        self.assertEqual(parse_float64("-n", "1.5"), (1.5, None))
        self.assertEqual(parse_float64("-n", "-2"), (-2.0, None))
        self.assertEqual(parse_float64("-n", ".5"), (0.5, None))
        self.assertEqual(parse_float64("-n", "1e3"), (1000.0, None))

    def testHexLiteral(self):
        self.assertEqual(parse_float64("-n", "0x1.8p3"), (12.0, None))

    def testInfinityAndNan(self):
        self.assertEqual(parse_float64("-n", "inf"), (math.inf, None))
        self.assertEqual(parse_float64("-n", "-Infinity"), (-math.inf, None))
        value, fault = parse_float64("-n", "NaN")
        self.assertTrue(math.isnan(value))
        self.assertIsNone(fault)

    def testSyntaxError(self):
        for token in ("", "abc", "1.2.3", "1e", "0x1.8"):
            with self.subTest(token=token):
                value, fault = parse_float64("-n", token)
                self.assertEqual(value, 0.0)
                self.assertEqual(fault.codes, (FaultCode.INVALID_FLOAT64, FaultCode.SYNTAX))

    def testOverflowGivesInfinity(self):
        value, fault = parse_float64("-n", "1e400")
        self.assertEqual(value, math.inf)
        self.assertEqual(fault.codes, (FaultCode.INVALID_FLOAT64, FaultCode.RANGE))

        value, fault = parse_float64("-n", "-1e400")
        self.assertEqual(value, -math.inf)
        self.assertIn(FaultCode.RANGE, fault)

    def testFloat32Rounding(self):
        value, fault = parse_float32("-n", "0.1")
        self.assertIsNone(fault)
        self.assertNotEqual(value, 0.1)
        self.assertAlmostEqual(value, 0.1, places=7)

    def testFloat32Overflow(self):
        value, fault = parse_float32("-n", "1e39")
        self.assertEqual(value, math.inf)
        self.assertEqual(fault.codes, (FaultCode.INVALID_FLOAT32, FaultCode.RANGE))


class TestNumericTypes(TestCase):
    """Behavioral tests for the type registry."""

    def testRegistry(self):
        self.assertEqual(len(TYPES), 12)
        self.assertIs(resolve("int8"), INT8)
        self.assertIs(resolve(UINT8), UINT8)

    def testUnknownType(self):
        with self.assertRaises(ValueError):
            resolve("int128")
        with self.assertRaises(TypeError):
            resolve(int)

    def testBoundsAndZero(self):
        self.assertEqual(INT64.bounds, (-(2 ** 63), 2 ** 63 - 1))
        self.assertEqual(UINT8.bounds, (0, 255))
        self.assertIsNone(FLOAT32.bounds)
        self.assertEqual(FLOAT32.zero, 0.0)
        self.assertEqual(INT8.zero, 0)

    def testSealed(self):
        with self.assertRaises(TypeError):
            type("Wider", (NumericType,), {})

    def testGenericParse(self):
        self.assertEqual(parse("int8", "-n", "0x7f"), (127, None))
        self.assertEqual(str(parse("uint8", "-n", "-1")[1]), "invalid uint8: syntax: -n: '-1'")

    def testParserNames(self):
        self.assertEqual(parse_uint16.__name__, "parse_uint16")


if __name__ == "__main__":
    unittest.main()
