"""
Matcher behavioral tests (short lookup, exact-first long lookup, segment abbreviations).

Scope
- Validate the segment-wise abbreviation rule on its own.
- Validate exact-match precedence over abbreviations and ambiguity detection.
- Validate case folding and that the catch-all is never matched by name.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from optscan import Option, OptionTable, String
from optscan.matcher import Matcher, abbreviates


class TestAbbreviates(TestCase):
    """The segment-prefix rule in isolation."""

    def testPrefixOfLastSegment(self):
        self.assertTrue(abbreviates("foo-b", "foo-bar"))

    def testEverySegmentAbbreviated(self):
        self.assertTrue(abbreviates("f-b-b", "foo-bar-baz"))

    def testTrailingSegmentsDropped(self):
        self.assertTrue(abbreviates("foo-ba", "foo-bar-baz"))
        self.assertTrue(abbreviates("foo", "foo-bar"))

    def testDashMustLineUp(self):
        self.assertFalse(abbreviates("foob", "foo-bar"))

    def testMoreSegmentsThanName(self):
        self.assertFalse(abbreviates("foo-bar-x", "foo-bar"))

    def testDivergingSegment(self):
        self.assertFalse(abbreviates("foo-c", "foo-bar"))


class TestMatcher(TestCase):
    """Resolution over a small table."""

    def setUp(self):
        self.bar = Option(long="foo-bar")
        self.baz = Option(long="foo-baz")
        self.verbose = Option("v", "verbose")
        self.matcher = Matcher(OptionTable([self.bar, self.baz, self.verbose]))

    def testShortExact(self):
        self.assertIs(self.matcher.short("v"), self.verbose)
        self.assertIsNone(self.matcher.short("x"))

    def testExactLongMatch(self):
        resolution = self.matcher.long("foo-bar")
        self.assertIs(resolution.option, self.bar)
        self.assertFalse(resolution.ambiguous)

    def testPartialSegmentIsAmbiguous(self):
        resolution = self.matcher.long("foo-b")
        self.assertIsNone(resolution.option)
        self.assertTrue(resolution.ambiguous)
        self.assertEqual(resolution.candidates, (self.bar, self.baz))

    def testSharedFirstSegmentIsAmbiguous(self):
        self.assertTrue(self.matcher.long("foo").ambiguous)

    def testUniqueAbbreviation(self):
        self.assertIs(self.matcher.long("verb").option, self.verbose)
        self.assertIs(self.matcher.long("foo-bar").option, self.bar)

    def testUnknownName(self):
        resolution = self.matcher.long("nope")
        self.assertIsNone(resolution.option)
        self.assertFalse(resolution.ambiguous)
        self.assertEqual(resolution.candidates, ())

    def testExactMatchBeatsLongerPrefix(self):
        foo = Option(long="foo")
        matcher = Matcher(OptionTable([self.bar, foo]))
        resolution = matcher.long("foo")
        self.assertIs(resolution.option, foo)
        self.assertFalse(resolution.ambiguous)

    def testCaseSensitiveByDefault(self):
        self.assertIsNone(self.matcher.long("VERBOSE").option)

    def testIgnoreCase(self):
        matcher = Matcher(self.matcher.table, ignore_case=True)
        self.assertIs(matcher.long("VERBOSE").option, self.verbose)
        self.assertIs(matcher.long("Foo-Bar").option, self.bar)

    def testCatchAllNeverMatchedByName(self):
        catchall = Option(long="", consumer=String())
        matcher = Matcher(OptionTable([self.verbose, catchall]))
        self.assertIsNone(matcher.long("").option)
        self.assertIs(matcher.long("v").option, self.verbose)


if __name__ == "__main__":
    unittest.main()
