"""
Argument classifier tests.

Scope
- Tokens are routed to the command opened most recently.
- Values are coerced to numbers where they read as numbers.
- The first token must open a command; an empty vector is a fault too.
- Re-invoking a command keeps the last invocation and warns.

Conventions
- Test method names follow CamelCase per project convention.
- A registry is built through the public Program API.
"""
import unittest
import warnings
from unittest import TestCase

from simplecmds import Program
from simplecmds.faults import (
    FaultCode,
    MissingCommandError,
    ReinvokedCommandWarning,
    UnknownCommandError,
)
from simplecmds.parsing import parse_args


class TestParseArgs(TestCase):
    """Behavior of parse_args against a finalized registry."""

    def setUp(self):
        self.registry = (
            Program(prog="tasks")
            .command("-c --create <text>", "Create a task")
            .command("-d --delete <id>", "Delete a task")
            .finalize()
        )

    def testTokensAreRouted(self):
        self.assertEqual(
            parse_args(["-c", "5", "-d", "1", "2"], self.registry),
            {"create": [5], "delete": [1, 2]},
        )

    def testLongAliases(self):
        self.assertEqual(
            parse_args(["--create", "buy", "milk"], self.registry),
            {"create": ["buy", "milk"]},
        )

    def testValuesAreCoerced(self):
        self.assertEqual(
            parse_args(["-c", "1.5", "abc", "-3", "1e2"], self.registry),
            {"create": [1.5, "abc", -3, 100.0]},
        )

    def testCommandWithoutValues(self):
        self.assertEqual(parse_args(["-c"], self.registry), {"create": []})

    def testEveryValueIsAssignedOnce(self):
        tokens = ["-c", "a", "b", "-d", "c", "-v"]
        namespace = parse_args(tokens, self.registry)
        values = [value for args in namespace.values() for value in args]
        self.assertEqual(sorted(values), ["a", "b", "c"])

    def testUnknownFirstToken(self):
        with self.assertRaises(UnknownCommandError) as context:
            parse_args(["--craete", "-c"], self.registry)
        options = context.exception.options
        self.assertEqual(options["code"], FaultCode.UNKNOWN_COMMAND)
        self.assertEqual(options["input"], "--craete")
        self.assertEqual(options["index"], 1)
        self.assertIn("--create", options["suggestions"])

    def testMissingCommand(self):
        with self.assertRaises(MissingCommandError) as context:
            parse_args([], self.registry)
        self.assertIn("tasks --help", context.exception.options["hint"])

    def testReinvocationKeepsLastInvocation(self):
        with self.assertWarns(ReinvokedCommandWarning):
            namespace = parse_args(["-c", "1", "-d", "2", "-c", "3"], self.registry)
        self.assertEqual(namespace, {"create": [3], "delete": [2]})

    def testReinvocationWithoutValuesDoesNotWarn(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            namespace = parse_args(["-c", "-c", "3"], self.registry)
        self.assertEqual(namespace, {"create": [3]})


if __name__ == "__main__":
    unittest.main()
