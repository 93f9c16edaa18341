"""
Tests for the shared helpers in argot.utils.

- Unset: singleton, falsy, printable, final.
- coalesce: only Unset is replaced.
- rename: both call forms and their argument checks.
- mirror: read-only access returning copies of containers.
- ordinal: word forms up to ten, suffixed numbers afterwards.
"""
import unittest
from unittest import TestCase

from argot.utils import *


class UnsetTest(TestCase):

    def testSingleton(self) -> None:
        self.assertIs(UnsetType(), Unset)
        self.assertIs(UnsetType(), UnsetType())

    def testFalsely(self) -> None:
        self.assertFalse(Unset)

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testNotEqualToNone(self) -> None:
        self.assertNotEqual(Unset, None)

    def testFinal(self) -> None:
        with self.assertRaises(TypeError):
            type("Subclass", (UnsetType,), {})


class CoalesceTest(TestCase):

    def testReplacesUnset(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")

    def testDefaultIsNone(self) -> None:
        self.assertIsNone(coalesce(Unset))

    def testKeepsFalseyValues(self) -> None:
        for value in (None, 0, "", False, []):
            with self.subTest(value=value):
                self.assertIs(coalesce(value, "fallback"), value)


class RenameTest(TestCase):

    def testDirectForm(self) -> None:
        def function():
            pass

        self.assertIs(rename(function, "other"), function)
        self.assertEqual(function.__name__, "other")
        self.assertEqual(function.__qualname__, "other")

    def testDecoratorForm(self) -> None:
        @rename("decorated")
        def function():
            pass

        self.assertEqual(function.__name__, "decorated")

    def testRejectsNonCallable(self) -> None:
        with self.assertRaises(TypeError):
            rename(42, "name")

    def testRejectsNonStringName(self) -> None:
        with self.assertRaises(TypeError):
            rename(lambda: None, 42)

    def testRejectsWrongArgumentCount(self) -> None:
        with self.assertRaises(TypeError):
            rename()


class MirrorTest(TestCase):

    def setUp(self) -> None:
        class Record:
            items = mirror("items")
            label = mirror("label")

            def __init__(self):
                self._items = [1, [2, 3]]
                self._label = "record"

        self.record = Record()

    def testReadsBackingField(self) -> None:
        self.assertEqual(self.record.label, "record")
        self.assertEqual(self.record.items, [1, [2, 3]])

    def testReturnsCopies(self) -> None:
        items = self.record.items
        items.append(4)
        items[1].append(5)
        self.assertEqual(self.record.items, [1, [2, 3]])

    def testReadOnly(self) -> None:
        with self.assertRaises(AttributeError):
            self.record.label = "changed"

    def testRejectsNonStringName(self) -> None:
        with self.assertRaises(TypeError):
            mirror(1)


class OrdinalTest(TestCase):

    def testWords(self) -> None:
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(2), "second")
        self.assertEqual(ordinal(10), "tenth")

    def testSuffixes(self) -> None:
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(12), "12th")
        self.assertEqual(ordinal(13), "13th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(23), "23rd")
        self.assertEqual(ordinal(111), "111th")
        self.assertEqual(ordinal(101), "101st")


if __name__ == "__main__":
    unittest.main()
