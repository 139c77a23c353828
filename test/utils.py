"""
Tests for the shared helpers.

This module verifies semantic guarantees of the utilities:
- The `Unset` sentinel: singleton identity, falsy semantics, copying,
  pickling, thread safety and finality.
- arrayify() and ordinal() normalization rules.
- mirror() read-only views and rename() naming.
"""
import copy
import pickle
import unittest
from threading import Thread, Lock
from unittest import TestCase

from cliargs.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` singleton.
    """

    def testSingleton(self) -> None:
        """
        The constructor returns the exported object on every call.
        """
        self.assertIs(UnsetType(), Unset)
        self.assertIs(UnsetType(), UnsetType())

    def testFalsyButDistinct(self) -> None:
        """
        Unset is falsy without being equal to other falsy values.
        """
        self.assertFalse(Unset)
        for other in (None, 0, "", False, ()):
            self.assertNotEqual(Unset, other)
        self.assertEqual(repr(Unset), "Unset")

    def testUnion(self) -> None:
        """
        Unset participates in PEP 604 unions for isinstance checks.
        """
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("text", Unset | str)
        self.assertNotIsInstance(3, str | Unset)

    def testCopyAndPickle(self) -> None:
        """
        Copies and pickle round-trips preserve identity.
        """
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy([Unset])[0], Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testThreadSafety(self) -> None:
        """
        Concurrent construction always yields the singleton.
        """
        results, lock = [], Lock()

        def construct():
            instance = UnsetType()
            with lock:
                results.append(instance)

        threads = [Thread(target=construct) for _ in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        self.assertTrue(all(instance is Unset for instance in results))

    def testFinal(self) -> None:
        """
        The sentinel type cannot be subclassed.
        """
        with self.assertRaises(TypeError):
            type("Subclass", (UnsetType,), {})


class HelpersTest(TestCase):
    """
    Test suite for arrayify, ordinal, mirror and rename.
    """

    def testArrayify(self) -> None:
        self.assertEqual(arrayify(None), ())
        self.assertEqual(arrayify(Unset), ())
        self.assertEqual(arrayify("one"), ("one",))
        self.assertEqual(arrayify(["one", "two"]), ("one", "two"))
        self.assertEqual(arrayify(3), (3,))

    def testOrdinal(self) -> None:
        cases = {
            1: "first", 2: "second", 3: "third", 11: "eleventh", 12: "twelfth",
            20: "twentieth", 22: "twenty-second", 45: "forty-fifth", 99: "ninety-ninth",
            100: "100th", 101: "101st", 111: "111th", 112: "112th", 123: "123rd",
        }
        for number, word in cases.items():
            with self.subTest(number=number):
                self.assertEqual(ordinal(number), word)
        for number in (0, -1, 1.5):
            with self.assertRaises(ValueError):
                ordinal(number)

    def testMirror(self) -> None:
        class Record:
            group = mirror("group")
            table = mirror("table")

            def __init__(self):
                self._group = ["a", "b"]
                self._table = {"key": "value"}

        record = Record()
        self.assertEqual(record.group, ("a", "b"))
        with self.assertRaises(TypeError):
            record.table["key"] = "other"
        with self.assertRaises(AttributeError):
            record.group = ()
        with self.assertRaises(TypeError):
            mirror(3)

    def testRename(self) -> None:
        @rename("renamed")
        def original():
            pass

        self.assertEqual(original.__name__, "renamed")
        self.assertEqual(original.__qualname__, "renamed")
        self.assertIs(rename(original, "again"), original)
        with self.assertRaises(TypeError):
            rename(3, "name")
        with self.assertRaises(TypeError):
            rename(print, "name")
        with self.assertRaises(TypeError):
            rename()


if __name__ == "__main__":
    unittest.main()
