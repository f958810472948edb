# python
"""
Fault model tests (codes, records, chains, triggering).

Scope
- Validate FaultCode labels and host normalization via __main__.__codes__.
- Validate record/chain rendering and code queries.
- Validate combine() flattening and trigger() in raise and shell modes.

Conventions
- Test method names follow CamelCase per project convention.
- Shell mode output is captured by swapping the module console for a recording one.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase, mock

from rich.console import Console

from argsift import faults
from argsift import FaultCode, ArgumentFault, FaultChain, combine, trigger


class TestFaultCode(TestCase):
    """Behavioral tests for FaultCode."""

    def testLabels(self):
        self.assertEqual(FaultCode.MISSING.label, "missing argument")
        self.assertEqual(FaultCode.INVALID_ENV.label, "invalid environment variable")
        self.assertEqual(FaultCode.INVALID_UINT16.label, "invalid uint16")

    def testCodesAreUnique(self):
        self.assertEqual(len({int(code) for code in FaultCode}), len(FaultCode))

    def testNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.RANGE.normalize(), "22102")

    def testNormalizeUsesHostCodes(self):
        main = __import__("__main__")
        with mock.patch.object(main, "__codes__", {FaultCode.RANGE: "E-RANGE"}, create=True):
            self.assertEqual(FaultCode.RANGE.normalize(), "E-RANGE")


class TestArgumentFault(TestCase):
    """Behavioral tests for ArgumentFault."""

    def testMessage(self):
        fault = ArgumentFault(FaultCode.INVALID_INT64, FaultCode.SYNTAX, detail="-n: 'abc'")
        self.assertEqual(str(fault), "invalid int64: syntax: -n: 'abc'")

    def testMessageWithoutDetail(self):
        self.assertEqual(str(ArgumentFault(FaultCode.NO_ARGS)), "no program arguments")

    def testContains(self):
        fault = ArgumentFault(FaultCode.INVALID_INT64, FaultCode.RANGE)
        self.assertIn(FaultCode.RANGE, fault)
        self.assertNotIn(FaultCode.SYNTAX, fault)

    def testValidation(self):
        with self.assertRaises(TypeError):
            ArgumentFault()
        with self.assertRaises(TypeError):
            ArgumentFault(22101)
        with self.assertRaises(TypeError):
            ArgumentFault(FaultCode.SYNTAX, detail=1)


class TestFaultChain(TestCase):
    """Behavioral tests for FaultChain and combine()."""

    def setUp(self):
        self.first = ArgumentFault(FaultCode.MISSING, detail="'-n value'")
        self.second = ArgumentFault(FaultCode.UNEXPECTED, detail="[x]")

    def testMessageJoinsRecordsInOrder(self):
        chain = FaultChain([self.first, self.second])
        self.assertEqual(str(chain), "missing argument: '-n value': unexpected argument: [x]")
        self.assertEqual(list(chain), [self.first, self.second])
        self.assertEqual(len(chain), 2)

    def testContains(self):
        chain = FaultChain([self.first, self.second])
        self.assertIn(FaultCode.UNEXPECTED, chain)
        self.assertNotIn(FaultCode.AMBIGUOUS, chain)
        self.assertEqual(chain.codes, (FaultCode.MISSING, FaultCode.UNEXPECTED))

    def testNeverEmpty(self):
        with self.assertRaises(ValueError):
            FaultChain([])
        with self.assertRaises(TypeError):
            FaultChain(["missing"])

    def testCombine(self):
        self.assertIsNone(combine())
        self.assertIsNone(combine(None, None))
        chain = combine(None, FaultChain([self.first]), self.second)
        self.assertEqual(list(chain), [self.first, self.second])

    def testCombineRejectsOtherValues(self):
        with self.assertRaises(TypeError):
            combine("missing")

    def testReplaceKeepsRecords(self):
        chain = FaultChain([self.first], prog="demo")
        other = chain.__replace__(shell=True)
        self.assertEqual(other.faults, chain.faults)
        self.assertEqual(dict(other.options), {"prog": "demo", "shell": True})
        self.assertNotIn("shell", chain.options)


class TestTrigger(TestCase):
    """Behavioral tests for trigger()."""

    def setUp(self):
        self.chain = FaultChain([ArgumentFault(FaultCode.MISSING, detail="FILE")])
        self.buffer = io.StringIO()
        patcher = mock.patch.object(faults, "console", Console(file=self.buffer, width=120))
        patcher.start()
        self.addCleanup(patcher.stop)

    def testRaisesOutsideShell(self):
        with self.assertRaises(FaultChain) as context:
            trigger(self.chain, prog="demo")
        self.assertEqual(str(context.exception), "missing argument: FILE")
        self.assertEqual(context.exception.options["prog"], "demo")

    def testShellExits(self):
        with self.assertRaises(SystemExit) as context:
            trigger(self.chain, prog="demo", shell=True)
        self.assertEqual(context.exception.code, 1)
        output = self.buffer.getvalue()
        self.assertIn("demo", output)
        self.assertIn("missing argument: FILE", output)

    def testShellDeferred(self):
        trigger(self.chain, prog="demo", shell=True, deferred=True, colorful=False, usage="Usage: demo FILE")
        output = self.buffer.getvalue()
        self.assertIn(str(FaultCode.MISSING.value), output)
        self.assertIn("Usage: demo FILE", output)

    def testFancyPanel(self):
        trigger(self.chain, prog="demo", shell=True, deferred=True, fancy=True)
        self.assertIn("missing argument", self.buffer.getvalue())

    def testRejectsNonFaults(self):
        with self.assertRaises(TypeError):
            trigger("missing")


if __name__ == "__main__":
    unittest.main()
