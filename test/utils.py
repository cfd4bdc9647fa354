# python
"""
Utilities behavioral tests (sentinel, coalesce, rename, mirror, ordinal, suggest).

Scope
- Validate the Unset sentinel contract (singleton, falsey, unions, copies).
- Validate coalesce, rename (direct and decorator forms) and mirror freezing.
- Validate ordinal spelling and did-you-mean suggestions.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import pickle
import unittest
from types import MappingProxyType
from unittest import TestCase

from argosy.utils import Unset, UnsetType, coalesce, mirror, ordinal, rename, suggest


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testFalseyAndPrintable(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testUnionInIsinstance(self):
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertTrue(isinstance("x", Unset | str))
        self.assertFalse(isinstance(3, str | Unset))

    def testNotSubclassable(self):
        with self.assertRaises(TypeError):
            class Derived(UnsetType):  # NOQA: F-841
                pass


class TestHelpers(TestCase):
    """Behavioral tests for coalesce, rename and mirror."""

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        for value in (None, 0, "", ()):
            self.assertEqual(coalesce(value, "fallback"), value)

    def testRenameDirect(self):
        def function():
            pass
        self.assertIs(rename(function, "renamed"), function)
        self.assertEqual((function.__name__, function.__qualname__), ("renamed", "renamed"))

    def testRenameDecorator(self):
        @rename("renamed")
        def function():
            pass
        self.assertEqual(function.__name__, "renamed")

    def testRenameErrors(self):
        with self.assertRaises(TypeError):
            rename(42, "name")
        with self.assertRaises(TypeError):
            rename(lambda: None, 42)
        with self.assertRaises(TypeError):
            rename()

    def testMirrorFreezes(self):
        class Holder:
            items = mirror("items")
            table = mirror("table")

            def __init__(self):
                self._items = ["a", ["b"]]
                self._table = {"k": {"v"}}

        holder = Holder()
        self.assertEqual(holder.items, ("a", ("b",)))
        self.assertIsInstance(holder.table, MappingProxyType)
        self.assertEqual(holder.table["k"], frozenset({"v"}))
        with self.assertRaises(AttributeError):
            holder.items = ()

    def testMirrorNameMustBeString(self):
        with self.assertRaises(TypeError):
            mirror(1)


class TestOrdinal(TestCase):
    """Behavioral tests for ordinal()."""

    def testWords(self):
        expected = {
            1: "first",
            2: "second",
            3: "third",
            12: "twelfth",
            20: "twentieth",
            22: "twenty-second",
            40: "fortieth",
            99: "ninety-ninth",
        }
        for number, word in expected.items():
            self.assertEqual(ordinal(number), word)

    def testNumericSuffixes(self):
        expected = {100: "100th", 101: "101st", 111: "111th", 112: "112th", 123: "123rd", 1002: "1002nd"}
        for number, word in expected.items():
            self.assertEqual(ordinal(number), word)

    def testInvalidArguments(self):
        with self.assertRaises(TypeError):
            ordinal("3")
        with self.assertRaises(ValueError):
            ordinal(-1)


class TestSuggest(TestCase):
    """Behavioral tests for suggest()."""

    def testClosestFirst(self):
        matches = suggest("--verbos", ["--quiet", "--verbose", "--version"])
        self.assertEqual(matches[0], "--verbose")
        self.assertNotIn("--quiet", matches)

    def testLimit(self):
        self.assertEqual(suggest("--verbos", ["--verbose", "--version"], limit=0), [])
        self.assertEqual(len(suggest("--verbos", ["--verbose", "--version"], limit=1)), 1)

    def testNoMatch(self):
        self.assertEqual(suggest("zzz", ["--verbose"]), [])


if __name__ == "__main__":
    unittest.main()
