"""
Tests for the internal helpers.

This module verifies:
- Unset: singleton identity, falsy semantics, copying/pickling and finality.
- coalesce(): Unset replacement that keeps other falsy values.
- mirror(): read-only views over private fields.
- ordinal(): position labels used in fault messages.
"""
import copy
import pickle
import unittest
from unittest import TestCase

from gnuopt.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the Unset sentinel.
    """

    def testSingleton(self) -> None:
        self.assertIs(UnsetType(), Unset)
        self.assertIs(UnsetType(), UnsetType())

    def testFalsy(self) -> None:
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)
        self.assertNotEqual(Unset, None)
        self.assertNotEqual(Unset, 0)

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")
        self.assertEqual(str(Unset), "Unset")

    def testCopyPreservesIdentity(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(copy.deepcopy({"default": Unset})["default"], Unset)

    def testPicklePreservesIdentity(self) -> None:
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testUnion(self) -> None:
        # Unset works on either side of a PEP 604 union in isinstance checks
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertTrue(isinstance("name", Unset | str))
        self.assertFalse(isinstance(1, str | Unset))

    def testFinal(self) -> None:
        with self.assertRaises(TypeError):
            class Subclass(UnsetType):
                pass


class CoalesceTest(TestCase):
    """
    Test suite for coalesce().
    """

    def testUnsetIsReplaced(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testFalsyValuesAreKept(self) -> None:
        for value in (None, 0, "", False, ()):
            with self.subTest(value=value):
                self.assertIs(coalesce(value, "fallback"), value)


class MirrorTest(TestCase):
    """
    Test suite for mirror().
    """

    class Holder:
        names = mirror("names")
        mapping = mirror("mapping")
        label = mirror("label")

        def __init__(self):
            self._names = ["a", "b"]
            self._mapping = {"a": 1}
            self._label = "holder"

    def testReadOnlyViews(self) -> None:
        holder = self.Holder()
        self.assertEqual(holder.names, ("a", "b"))
        self.assertEqual(dict(holder.mapping), {"a": 1})
        with self.assertRaises(TypeError):
            holder.mapping["b"] = 2
        self.assertEqual(holder.label, "holder")

    def testNoSetter(self) -> None:
        with self.assertRaises(AttributeError):
            self.Holder().label = "other"

    def testName(self) -> None:
        self.assertEqual(self.Holder.names.fget.__name__, "names")

    def testBadName(self) -> None:
        with self.assertRaises(TypeError):
            mirror(1)


class OrdinalTest(TestCase):
    """
    Test suite for ordinal().
    """

    def testWords(self) -> None:
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(2), "second")
        self.assertEqual(ordinal(10), "tenth")

    def testSuffixes(self) -> None:
        cases = {
            11: "11th",
            12: "12th",
            13: "13th",
            21: "21st",
            22: "22nd",
            23: "23rd",
            24: "24th",
            101: "101st",
            111: "111th",
            112: "112th",
        }
        for number, expected in cases.items():
            with self.subTest(number=number):
                self.assertEqual(ordinal(number), expected)


if __name__ == "__main__":
    unittest.main()
