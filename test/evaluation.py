# python
"""
Entry point behavioral tests (evaluate, Result, Status, Slot).

Scope
- Validate the outcome statuses: success, schema error, input error and resource
  error, with their messages and attached faults.
- Validate output slots: declaration order, the variadic tail slot, discarded
  slots, untouched slots on failure and the slot count check.
- Validate argument vector normalisation (iterable, shell-like string, sys.argv).
- Validate the strict option and debug logging.

Conventions
- Test method names follow CamelCase per project convention.
- Failures are inspected through Result data; only caller mistakes raise.
"""

from __future__ import annotations

import sys
import unittest
from unittest import TestCase, mock

from synopsis import (
    compile,
    evaluate,
    NoValue,
    Result,
    Slot,
    Status,
    Unset,
    DuplicatedAliasError,
    SchemaParsingError,
    TooManyPositionalsError,
    UnknownFlagError,
)


class TestEvaluateOutcome(TestCase):
    """Statuses, messages and faults."""

    def testSuccess(self):
        result = evaluate(["-b"], "[-a] [-b]")
        self.assertIs(result.status, Status.SUCCESS)
        self.assertEqual(result.values, (False, True))
        self.assertIsNone(result.message)
        self.assertIsNone(result.fault)
        self.assertTrue(result)

    def testSchemaError(self):
        result = evaluate([], "[a")
        self.assertIs(result.status, Status.SCHEMA_ERROR)
        self.assertEqual(
            result.message, 'Schema parsing error. Expected EOI but received LBRAK, starting from "[a"'
        )
        self.assertIsInstance(result.fault, SchemaParsingError)
        self.assertIsNone(result.values)
        self.assertFalse(result)

    def testSchemaErrorWinsOverInput(self):
        self.assertIs(evaluate(["-x.y", "="], "[a] b").status, Status.SCHEMA_ERROR)

    def testSchemaErrorLeavesTheVectorUnread(self):
        consumed = []

        def vector():
            consumed.append(True)
            yield "x"

        self.assertIs(evaluate(vector(), "a]").status, Status.SCHEMA_ERROR)
        self.assertEqual(consumed, [])

    def testUnknownFlag(self):
        result = evaluate(["---nope"], "-f|--flag")
        self.assertIs(result.status, Status.INPUT_ERROR)
        self.assertEqual(result.message, 'Ambiguous argument "---nope" provided')
        self.assertIsInstance(result.fault, UnknownFlagError)

    def testTooManyPositionals(self):
        result = evaluate(["1", "2"], "a")
        self.assertIs(result.status, Status.INPUT_ERROR)
        self.assertEqual(result.message, "Too many positional arguments provided")
        self.assertIsInstance(result.fault, TooManyPositionalsError)

    def testInputLexingErrorIsAnInputError(self):
        result = evaluate(["-a.b"], "[-a]")
        self.assertIs(result.status, Status.INPUT_ERROR)
        self.assertEqual(result.message, 'Ambiguous argument "-a.b"')

    def testResourceErrorWhileBinding(self):
        with mock.patch("synopsis.evaluation.bind", side_effect=MemoryError):
            result = evaluate(["x"], "a")
        self.assertEqual(result, Result(Status.RESOURCE_ERROR))
        self.assertIsNone(result.message)

    def testResourceErrorWhileCompiling(self):
        with mock.patch("synopsis.evaluation.compile", side_effect=MemoryError):
            result = evaluate([], "")
        self.assertIs(result.status, Status.RESOURCE_ERROR)

    def testStatusValues(self):
        self.assertEqual(
            [int(status) for status in (Status.SUCCESS, Status.RESOURCE_ERROR, Status.SCHEMA_ERROR, Status.INPUT_ERROR)],
            [0, 1, 2, 3],
        )

    def testEvaluationIsRepeatable(self):
        argv = ["-a=1", "-a=2", "x"]
        snapshot = list(argv)
        first = evaluate(argv, "-a=val... ...")
        second = evaluate(argv, "-a=val... ...")
        self.assertEqual(first, second)
        self.assertEqual(argv, snapshot)


class TestEvaluateSlots(TestCase):
    """Writing bound values to output handles."""

    def testSlotsReceiveValuesInDeclarationOrder(self):
        flag, verbose, level, defines, name, files = slots = [Slot() for _ in range(6)]
        result = evaluate(
            ["-f=x", "-D=a", "-D=b", "bob", "a.txt", "b.txt"],
            "-f|--flag=val [-v] [-l[=val]] [-D=val...] name ...",
            slots,
        )
        self.assertTrue(result)
        self.assertEqual(flag.value, "x")
        self.assertIs(verbose.value, False)
        self.assertIsNone(level.value)
        self.assertEqual(defines.value, ["a", "b"])
        self.assertEqual(name.value, "bob")
        self.assertEqual(files.value, ["a.txt", "b.txt"])
        self.assertEqual(result.values, tuple(slot.value for slot in slots))

    def testSentinelReachesTheSlot(self):
        slot = Slot()
        evaluate(["-a"], "[-a[=val]]", [slot])
        self.assertIs(slot.value, NoValue)

    def testVariadicTailSlot(self):
        a, b, tail = slots = compile("a [b] ...").slots()
        self.assertTrue(evaluate(["1", "2", "3"], "a [b] ...", slots))
        self.assertEqual((a.value, b.value, tail.value), ("1", "2", ["3"]))

    def testNoneSlotDiscardsItsValue(self):
        slot = Slot()
        result = evaluate(["x", "y"], "a b", [None, slot])
        self.assertEqual(slot.value, "y")
        self.assertEqual(result.values, ("x", "y"))

    def testAnyCallableIsASlot(self):
        received = []
        evaluate(["-a=1", "-a=2"], "-a=val...", [received.append])
        self.assertEqual(received, [["1", "2"]])

    def testSlotsUntouchedOnFailure(self):
        slot = Slot()
        result = evaluate(["1", "2"], "a", [slot])
        self.assertFalse(result)
        self.assertIs(slot.value, Unset)

    def testSlotCountMustMatchArity(self):
        with self.assertRaises(TypeError):
            evaluate(["x"], "a ...", [Slot()])
        with self.assertRaises(TypeError):
            evaluate([], "", [Slot()])

    def testSlotsMustBeCallable(self):
        with self.assertRaises(TypeError):
            evaluate(["x"], "a", ["nope"])

    def testSlotRepr(self):
        slot = Slot()
        self.assertEqual(repr(slot), "Slot(Unset)")
        slot("x")
        self.assertEqual(repr(slot), "Slot('x')")


class TestEvaluateVector(TestCase):
    """Argument vector normalisation."""

    def testShellLikeString(self):
        self.assertEqual(evaluate("-a=1 'b c'", "-a=val x").values, ("1", "b c"))

    def testDefaultsToProcessArguments(self):
        with mock.patch.object(sys, "argv", ["prog", "-v", "file"]):
            self.assertEqual(evaluate(Unset, "[-v] name").values, (True, "file"))

    def testTupleVector(self):
        self.assertEqual(evaluate(("x",), "a").values, ("x",))

    def testRejectsNonIterableVector(self):
        with self.assertRaises(TypeError):
            evaluate(5, "a")  # type: ignore[arg-type]

    def testRejectsNonStringSchema(self):
        with self.assertRaises(TypeError):
            evaluate([], None)  # type: ignore[arg-type]


class TestEvaluateOptions(TestCase):
    """Strict aliases and logging."""

    def testFirstGroupWinsByDefault(self):
        self.assertEqual(evaluate(["-a"], "[-a] [-a]").values, (True, False))

    def testStrictAliases(self):
        result = evaluate(["-a"], "[-a] [-a]", strict=True)
        self.assertIs(result.status, Status.SCHEMA_ERROR)
        self.assertIsInstance(result.fault, DuplicatedAliasError)

    def testDebugLogging(self):
        with self.assertLogs("synopsis", level="DEBUG") as captured:
            evaluate(["x"], "a")
        self.assertTrue(any("compiled" in line for line in captured.output))
        self.assertTrue(any("bound 1 value" in line for line in captured.output))


if __name__ == "__main__":
    unittest.main()
