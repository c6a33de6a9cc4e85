"""
Tokenizer behavioral tests: "--" split, "--name" reduction, "-name=value" split
and position tracking.
"""
import unittest
from unittest import TestCase

from cmdopt import Token, tokenize


class TestTokenize(TestCase):

    def testPlainVectorUnchanged(self):
        working, remainder = tokenize(["create", "-input", "seed.json"])
        self.assertEqual(working, ("create", "-input", "seed.json"))
        self.assertEqual(remainder, ())

    def testSplitAtFirstDoubleDash(self):
        working, remainder = tokenize(["a", "--", "b", "--", "-c"])
        self.assertEqual(working, ("a",))
        self.assertEqual(remainder, ("b", "--", "-c"))

    def testTrailingDoubleDashGivesEmptyRemainder(self):
        self.assertEqual(tokenize(["a", "--"]), (("a",), ()))

    def testLeadingDoubleDashReduced(self):
        self.assertEqual(tokenize(["--verbose", "---odd"]).working, ("-verbose", "--odd"))

    def testEqualsSplitsAtFirstOccurrence(self):
        self.assertEqual(tokenize(["-out=a=b"]).working, ("-out", "a=b"))
        self.assertEqual(tokenize(["--out=file"]).working, ("-out", "file"))

    def testTrailingEqualsNotSplit(self):
        self.assertEqual(tokenize(["-out="]).working, ("-out=",))

    def testEqualsInPlainTokenNotSplit(self):
        self.assertEqual(tokenize(["key=value"]).working, ("key=value",))

    def testBareDashKept(self):
        self.assertEqual(tokenize(["-"]).working, ("-",))

    def testTokensAfterSplitAreVerbatim(self):
        self.assertEqual(tokenize(["--", "--verbose", "-x=1"]).remainder, ("--verbose", "-x=1"))

    def testIdempotentOnNormalizedVector(self):
        working, _ = tokenize(["--config=nova.json", "whitelist", "add", "GABC"])
        self.assertEqual(tokenize(list(working)).working, working)

    def testPositionsTrackOriginalArguments(self):
        working, _ = tokenize(["fund", "-input=seed.json", "-verbose"])
        self.assertEqual([token.index for token in working], [1, 2, 2, 3])

    def testTokensBehaveLikeStrings(self):
        token, = tokenize(["abc"]).working
        self.assertIsInstance(token, Token)
        self.assertEqual(token, "abc")
        self.assertEqual(hash(token), hash("abc"))
        self.assertEqual(repr(token), "'abc'")

    def testRemainderHoldsPlainStrings(self):
        self.assertIs(type(tokenize(["--", "x"]).remainder[0]), str)

    def testStringArgumentRejected(self):
        with self.assertRaises(TypeError):
            tokenize("-verbose")

    def testNonStringItemsRejected(self):
        with self.assertRaises(TypeError):
            tokenize(["-count", 3])


if __name__ == "__main__":
    unittest.main()
