"""
Tests for the tokenizer, suggestion helpers and the Unset sentinel.
"""
import unittest
from unittest import TestCase

from commander.utils import Unset, UnsetType, Suggestion, coalesce, mirror, rename, suggestions, tokenize


class TestTokenize(TestCase):

    def testCollapsesSpaces(self):
        self.assertEqual(tokenize("  a   b c "), ["a", "b", "c"])

    def testIdempotentOnRejoin(self):
        tokens = tokenize("  a   b c ")
        self.assertEqual(tokenize(" ".join(tokens)), tokens)

    def testEmptyAndBlankLines(self):
        self.assertEqual(tokenize(""), [])
        self.assertEqual(tokenize("     "), [])

    def testNoQuoting(self):
        self.assertEqual(tokenize('say "hello world"'), ["say", '"hello', 'world"'])

    def testOnlySpacesSeparate(self):
        # tabs are not separators
        self.assertEqual(tokenize("a\tb c"), ["a\tb", "c"])

    def testRejectsNonString(self):
        with self.assertRaises(TypeError):
            tokenize(["a", "b"])


class TestSuggestions(TestCase):

    def testSimpleSuggestions(self):
        self.assertEqual(suggestions("linux", "windows"), [Suggestion("linux"), Suggestion("windows")])

    def testDescriptionDefaultsToNone(self):
        self.assertIsNone(Suggestion("linux").descr)

    def testRejectsNonStrings(self):
        with self.assertRaises(TypeError):
            suggestions("linux", 3)


class TestUnset(TestCase):

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce("", "fallback"), "")

    def testFinal(self):
        with self.assertRaises(TypeError):
            type("Subclass", (UnsetType,), {})

    def testUnionWithTypes(self):
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("text", str | Unset)


class TestRename(TestCase):

    def testSetsNames(self):
        @rename("__repr__")
        def generated(self):
            return ""

        self.assertEqual(generated.__name__, "__repr__")
        self.assertEqual(generated.__qualname__, "__repr__")


class TestMirror(TestCase):

    def testReturnsCopies(self):
        class Box:
            items = mirror("items")

            def __init__(self):
                self._items = [1, 2]

        box = Box()
        box.items.append(3)
        self.assertEqual(box.items, [1, 2])


if __name__ == "__main__":
    unittest.main()
