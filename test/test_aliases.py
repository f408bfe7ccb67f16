"""
Alias generation and expansion tests.

Scope
- Extraction of the one or two aliases of a usage string.
- Splitting of combined short flags and the dealing of comma lists.
- Orphan comma lists are dropped with a warning.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from simplecmds import Directive, Registry
from simplecmds.aliases import generate_alias, expand_aliases, alternate
from simplecmds.faults import NoAliasError, OrphanValuesWarning


class TestGenerateAlias(TestCase):
    """Aliases found in usage strings."""

    def testShortAndLong(self):
        self.assertEqual(generate_alias("-c --create <text>"), ("-c", "--create"))

    def testDashedLongAlias(self):
        self.assertEqual(generate_alias("-m --my-command [number]"), ("-m", "--my-command"))

    def testSourceOrderIsKept(self):
        self.assertEqual(generate_alias("--create -c <text>"), ("--create", "-c"))

    def testBareWord(self):
        self.assertEqual(generate_alias("list [string]"), ("list",))

    def testOnlyTwoAliasesAreKept(self):
        self.assertEqual(generate_alias("-a --all everything"), ("-a", "--all"))

    def testOtherDelimiters(self):
        self.assertEqual(generate_alias("+x /y"), ("+x", "/y"))

    def testSlotsAreNotAliases(self):
        with self.assertRaises(NoAliasError) as context:
            generate_alias("<text> [number]", "create")
        self.assertEqual(context.exception.command, "create")
        self.assertEqual(context.exception.field, "usage")

    def testShortLongFlagIsRejected(self):
        # "--" needs three or more characters after it.
        with self.assertRaises(NoAliasError):
            generate_alias("--ab")

    def testGeneratedAliasesMatchTheirUsage(self):
        for usage in ("-c --create <text>", "-d --delete <id> [id]", "list", "-x"):
            for alias in generate_alias(usage):
                self.assertIn(alias, usage.split())

    def testUsageMustBeString(self):
        with self.assertRaises(TypeError):
            generate_alias(None)


class TestAlternate(TestCase):
    """Positional merge of flags and values."""

    def testEvenLengths(self):
        self.assertEqual(alternate(["-a", "-b"], ["1", "2"]), ["-a", "1", "-b", "2"])

    def testMoreFlags(self):
        self.assertEqual(alternate(["-a", "-b", "-c"], ["1"]), ["-a", "1", "-b", "-c"])

    def testMoreValues(self):
        self.assertEqual(alternate(["-a"], ["1", "2", "3"]), ["-a", "1", "2", "3"])


class TestExpandAliases(TestCase):
    """Expansion of raw argument vectors."""

    def testClusterIsSplit(self):
        self.assertEqual(expand_aliases(["-cd", "5"]), ["-c", "-d", "5"])

    def testClusterWithCommaList(self):
        self.assertEqual(
            expand_aliases(["-l", "one", "-abc", "1,2,3"]),
            ["-l", "one", "-a", "1", "-b", "2", "-c", "3"],
        )

    def testClusterWithShortCommaList(self):
        self.assertEqual(expand_aliases(["-abc", "1,2"]), ["-a", "1", "-b", "2", "-c"])

    def testDelimiterIsKept(self):
        self.assertEqual(expand_aliases(["+xy"]), ["+x", "+y"])

    def testAnyDelimiterStartsCluster(self):
        self.assertEqual(expand_aliases(["-c", "/tmp"]), ["-c", "/t", "/m", "/p"])
        self.assertEqual(expand_aliases(["-c", "tmp/x"]), ["-c", "tmp/x"])

    def testPlainTokensPassThrough(self):
        self.assertEqual(expand_aliases(["--create", "hello", "-c"]), ["--create", "hello", "-c"])

    def testNegativeNumbersAreNotSplit(self):
        self.assertEqual(expand_aliases(["-n", "-50"]), ["-n", "-50"])

    def testEmptyTokensAreDropped(self):
        self.assertEqual(expand_aliases(["-c", "", "1"]), ["-c", "1"])

    def testExpansionIsIdempotent(self):
        once = expand_aliases(["-abc", "1,2,3", "-d", "x"])
        self.assertEqual(expand_aliases(once), once)

    def testOrphanCommaListIsDropped(self):
        with self.assertWarns(OrphanValuesWarning):
            self.assertEqual(expand_aliases(["-c", "1,2"]), ["-c"])

    def testRegisteredAliasIsNotSplit(self):
        registry = Registry({"ab": Directive("ab", "-ab", aliases=("-ab",))})
        self.assertEqual(expand_aliases(["-ab", "1"], registry), ["-ab", "1"])


if __name__ == "__main__":
    unittest.main()
