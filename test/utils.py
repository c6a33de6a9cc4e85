"""
Tests for the small helpers shared by every layer: the Unset sentinel,
coalesce(), rename(), view() and ordinal().
"""
import unittest
from types import MappingProxyType
from unittest import TestCase

from cmdopt.utils import *


class TestUnset(TestCase):

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsyButDistinct(self):
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)
        self.assertNotEqual(Unset, 0)

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testFinal(self):
        with self.assertRaises(TypeError):
            type("Subclass", (UnsetType,), {})

    def testUnionSupport(self):
        self.assertIsInstance(Unset, str | UnsetType)
        self.assertNotIsInstance(3, str | UnsetType)


class TestCoalesce(TestCase):

    def testReplacesUnsetOnly(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertEqual(coalesce(0, 5), 0)
        self.assertIsNone(coalesce(None, 5))


class TestRename(TestCase):

    def testDirectForm(self):
        function = rename(lambda: None, "named")
        self.assertEqual(function.__name__, "named")
        self.assertEqual(function.__qualname__, "named")

    def testDecoratorForm(self):
        @rename("renamed")
        def function():
            pass

        self.assertEqual(function.__name__, "renamed")

    def testArgumentsChecked(self):
        with self.assertRaises(TypeError):
            rename(3, "name")
        with self.assertRaises(TypeError):
            rename()


class TestView(TestCase):

    def testImmutableViews(self):
        class Holder:
            items = view("items")
            mapping = view("mapping")
            members = view("members")
            text = view("text")

            def __init__(self):
                self._items = [1, 2]
                self._mapping = {"a": 1}
                self._members = {1}
                self._text = "abc"

        holder = Holder()
        self.assertEqual(holder.items, (1, 2))
        self.assertIsInstance(holder.mapping, MappingProxyType)
        self.assertEqual(holder.members, frozenset({1}))
        self.assertEqual(holder.text, "abc")
        with self.assertRaises(AttributeError):
            holder.items = ()


class TestOrdinal(TestCase):

    def testWords(self):
        self.assertEqual([ordinal(number) for number in (1, 2, 3, 10)], ["first", "second", "third", "tenth"])

    def testSuffixes(self):
        self.assertEqual(
            [ordinal(number) for number in (11, 12, 13, 21, 22, 23, 101, 111, 112)],
            ["11th", "12th", "13th", "21st", "22nd", "23rd", "101st", "111th", "112th"]
        )

    def testRejectsInvalidNumbers(self):
        with self.assertRaises(ValueError):
            ordinal(0)
        with self.assertRaises(TypeError):
            ordinal(True)
        with self.assertRaises(TypeError):
            ordinal("1")


if __name__ == "__main__":
    unittest.main()
