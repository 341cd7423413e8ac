"""
Tests for the NoValue and Unset sentinels and the printable and ordinal helpers.

This module verifies semantic guarantees of `NoValueType`:
- Singleton identity and truthiness (the flag was given).
- Distinctness from None, "" and its own printed form.
- Rich rendering integration.
- Copying, deep copying and pickling preserve identity.
- Finality (type cannot be subclassed).
"""
import copy
import pickle
import unittest
from threading import Thread, Lock
from unittest import TestCase

from rich.console import Console

from synopsis.utils import *


class NoValueTest(TestCase):
    """
    Test suite for the `NoValue` singleton.
    """

    def setUp(self) -> None:
        self.novalue: NoValueType = NoValueType()

    def testSingleton(self) -> None:
        """
        The constructor and the exported constant are the same object.
        """
        self.assertIs(self.novalue, NoValueType())
        self.assertIs(NoValue, self.novalue)

    def testTruthy(self) -> None:
        """
        `if value:` reads as "the flag is set".
        """
        self.assertTrue(self.novalue)

    def testDistinctFromOrdinaryValues(self) -> None:
        self.assertIsNot(self.novalue, None)
        self.assertNotEqual(self.novalue, "")
        self.assertNotEqual(self.novalue, "(no value)")
        self.assertNotEqual(self.novalue, True)

    def testRepr(self) -> None:
        self.assertEqual(repr(self.novalue), "(no value)")

    def testRichConsolePrint(self) -> None:
        """
        Console.print(...) renders '(no value)' without ANSI when color is disabled.
        """
        console = Console(color_system=None, force_terminal=False)
        with console.capture() as capture:
            console.print(self.novalue)
        self.assertEqual(capture.get().strip(), "(no value)")

    def testCopyDeepcopyPickle(self) -> None:
        """
        copy(), deepcopy() and pickle round-trips keep the identity.
        """
        self.assertIs(copy.copy(self.novalue), self.novalue)
        self.assertIs(copy.deepcopy([self.novalue])[0], self.novalue)
        self.assertIs(pickle.loads(pickle.dumps(self.novalue)), self.novalue)

    def testNoInstanceAttributes(self) -> None:
        with self.assertRaises(AttributeError):
            self.novalue.value = 1  # type: ignore[attr-defined]

    def testThreadSafetySingleton(self) -> None:
        results: list[NoValueType] = []
        lock: Lock = Lock()

        def worker():
            instance = NoValueType()
            with lock:
                results.append(instance)

        threads: list[Thread] = [Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(len(results), 8)
        self.assertTrue(all(instance is self.novalue for instance in results))

    def testFinalClass(self) -> None:
        with self.assertRaises(TypeError):
            type("NoValueType", (NoValueType,), {})


class UnsetTest(TestCase):
    """
    `Unset` is the falsy "not provided" marker.
    """

    def testSingletonAndFalsy(self) -> None:
        self.assertIs(Unset, UnsetType())
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testFinalClass(self) -> None:
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})


class PrintableTest(TestCase):
    """
    Control characters are escaped, everything else is kept.
    """

    def testEscapesControlCharacters(self) -> None:
        self.assertEqual(printable("a\nb\tc\x00"), "a\\nb\\tc\\x00")

    def testKeepsPrintableText(self) -> None:
        self.assertEqual(printable(" -a=\"é\" "), " -a=\"é\" ")


class OrdinalTest(TestCase):
    """
    Ordinal labels used by fault hints.
    """

    def testWords(self) -> None:
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(10), "tenth")

    def testSuffixes(self) -> None:
        for number, label in ((11, "11th"), (12, "12th"), (13, "13th"), (21, "21st"),
                              (22, "22nd"), (23, "23rd"), (101, "101st"), (111, "111th")):
            with self.subTest(number=number):
                self.assertEqual(ordinal(number), label)

    def testRejectsInvalidNumbers(self) -> None:
        with self.assertRaises(TypeError):
            ordinal(True)
        with self.assertRaises(TypeError):
            ordinal("3")
        with self.assertRaises(ValueError):
            ordinal(0)


if __name__ == '__main__':
    unittest.main()
