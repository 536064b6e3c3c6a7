"""
Scanner behavioral tests (classification, cursor, in-place rotation).

Scope
- Validate token classification (positional, long, short bundles) and the '--' terminator.
- Validate lazy relocation of options ahead of positionals and the positional-only latch.
- Validate the configurable option-start characters and argument-vector requirements.

Conventions
- Test method names follow CamelCase per project convention.
- The argument vector is always a list, inspected after scanning to check permutations.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from optscan.scanner import Scanner, Token, TokenKind


def drain(scanner):
    tokens = []
    while (token := scanner.scan()) is not None:
        tokens.append(token)
    return tokens


class TestClassification(TestCase):
    """Token kinds and texts for the basic argument shapes."""

    def testPositionalOnlyVectorIsUnchanged(self):
        arguments = ["prog", "a", "b"]
        scanner = Scanner(arguments)
        self.assertEqual(drain(scanner), [
            Token(TokenKind.POSITIONAL, "a"),
            Token(TokenKind.POSITIONAL, "b"),
        ])
        self.assertEqual(arguments, ["prog", "a", "b"])
        self.assertEqual(scanner.index, 3)

    def testLongTokenKeepsEqualsTail(self):
        scanner = Scanner(["prog", "--name=x"])
        self.assertEqual(scanner.scan(), Token(TokenKind.LONG, "name=x"))
        self.assertIsNone(scanner.scan())

    def testShortBundleYieldsOneTokenPerCharacter(self):
        scanner = Scanner(["prog", "-abc"])
        self.assertEqual([token.text for token in drain(scanner)], ["abc", "bc", "c"])
        self.assertEqual(scanner.offset, 0)

    def testBundleOffsetTracksCurrentCharacter(self):
        scanner = Scanner(["prog", "-ab"])
        scanner.scan()
        self.assertEqual((scanner.index, scanner.offset), (1, 1))
        scanner.scan()
        self.assertEqual((scanner.index, scanner.offset), (1, 2))

    def testTerminatorIsNeverReturned(self):
        scanner = Scanner(["prog", "--", "-x"])
        self.assertEqual(scanner.scan(), Token(TokenKind.POSITIONAL, "-x"))
        self.assertTrue(scanner.positional_only)
        self.assertEqual(scanner.index, 2)

    def testLoneDashIsPositional(self):
        arguments = ["prog", "-", "-x"]
        scanner = Scanner(arguments)
        self.assertEqual(scanner.scan(), Token(TokenKind.SHORT, "x", 2))
        self.assertEqual(scanner.scan(), Token(TokenKind.POSITIONAL, "-"))
        self.assertEqual(arguments, ["prog", "-x", "-"])

    def testEmptyArgumentIsPositional(self):
        scanner = Scanner(["prog", ""])
        self.assertEqual(scanner.scan(), Token(TokenKind.POSITIONAL, ""))


class TestRelocation(TestCase):
    """Options found after positionals are rotated into place, one per call."""

    def testOptionRotatedIntoCurrentSlot(self):
        arguments = ["prog", "a", "b", "-x", "c"]
        scanner = Scanner(arguments)
        self.assertEqual(scanner.scan(), Token(TokenKind.SHORT, "x", 3))
        self.assertEqual(arguments, ["prog", "-x", "a", "b", "c"])
        self.assertEqual(scanner.scan(), Token(TokenKind.POSITIONAL, "a"))
        self.assertTrue(scanner.positional_only)

    def testBundleRemembersSource(self):
        scanner = Scanner(["prog", "a", "-xy"])
        self.assertEqual(scanner.scan().source, 2)
        self.assertEqual(scanner.scan(), Token(TokenKind.SHORT, "y", 2))

    def testNoReorderKeepsOrder(self):
        arguments = ["prog", "a", "-x"]
        scanner = Scanner(arguments, reorder=False)
        self.assertEqual(drain(scanner), [
            Token(TokenKind.POSITIONAL, "a"),
            Token(TokenKind.SHORT, "x"),
        ])
        self.assertEqual(arguments, ["prog", "a", "-x"])

    def testTerminatorIsRelocatedAndLatches(self):
        arguments = ["prog", "a", "--", "-x"]
        scanner = Scanner(arguments)
        self.assertEqual(drain(scanner), [
            Token(TokenKind.POSITIONAL, "a"),
            Token(TokenKind.POSITIONAL, "-x"),
        ])
        self.assertEqual(arguments, ["prog", "--", "a", "-x"])

    def testClaimRotatesValueBehindOption(self):
        arguments = ["prog", "a", "-o", "v"]
        scanner = Scanner(arguments)
        token = scanner.scan()
        scanner.claim(token.source + 1)
        self.assertEqual(arguments, ["prog", "-o", "v", "a"])
        self.assertEqual(scanner.index, 2)
        self.assertEqual(scanner.scan(), Token(TokenKind.POSITIONAL, "a"))

    def testRotateMovesNothingElse(self):
        arguments = ["prog", "a", "b", "c", "d"]
        Scanner(arguments).rotate(3, 1)
        self.assertEqual(arguments, ["prog", "c", "a", "b", "d"])


class TestConfiguration(TestCase):
    """Option-start characters and argument vector requirements."""

    def testCustomOptionStart(self):
        scanner = Scanner(["prog", "+v", "/w"], "+/")
        self.assertEqual(drain(scanner), [
            Token(TokenKind.SHORT, "v"),
            Token(TokenKind.SHORT, "w"),
        ])

    def testLongNeedsDashInOptionStart(self):
        scanner = Scanner(["prog", "--x"], "+")
        self.assertEqual(scanner.scan(), Token(TokenKind.POSITIONAL, "--x"))

    def testImmutableArgumentsRejected(self):
        with self.assertRaises(TypeError):
            Scanner(("prog", "-x"))

    def testEmptyOptionStartRejected(self):
        with self.assertRaises(ValueError):
            Scanner([], "")


if __name__ == "__main__":
    unittest.main()
