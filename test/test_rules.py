"""
Rule notation and validation tests.

Scope
- Parsing of rule notations into slots, and the configuration errors they raise.
- Arity and per-position type checks, including the repeating last optional slot.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from simplecmds.faults import MalformedRuleError
from simplecmds.rules import Rule, Slot, typecheck


class TestRuleParse(TestCase):
    """Structured form of rule notations."""

    def testRequiredAndOptionalSlots(self):
        rule = Rule.parse("<number> [string]")
        self.assertEqual(rule.required, 1)
        self.assertEqual(rule.optional, 1)
        self.assertEqual(rule[0], Slot(frozenset({"number"}), True))
        self.assertEqual(rule[1], Slot(frozenset({"string"}), False))

    def testUnionSlot(self):
        rule = Rule.parse("<number,string>")
        self.assertEqual(rule[0].types, frozenset({"number", "string"}))

    def testRender(self):
        self.assertEqual(str(Rule.parse("<string,number> [boolean]")), "<string,number> [boolean]")
        self.assertEqual(repr(Rule.parse("<number>")), "rule('<number>')")

    def testBlankNotation(self):
        self.assertEqual(len(Rule.parse("")), 0)
        self.assertEqual(len(Rule.parse("   ")), 0)

    def testOptionalBeforeRequired(self):
        with self.assertRaises(MalformedRuleError) as context:
            Rule.parse("[number] <string>", "create")
        self.assertEqual(context.exception.command, "create")
        self.assertEqual(context.exception.field, "rule")

    def testWhitespaceInsideBrackets(self):
        with self.assertRaises(MalformedRuleError):
            Rule.parse("< number>")
        with self.assertRaises(MalformedRuleError):
            Rule.parse("[number, string]")

    def testMalformedSlot(self):
        with self.assertRaises(MalformedRuleError):
            Rule.parse("<number")
        with self.assertRaises(MalformedRuleError):
            Rule.parse("number")

    def testUnknownType(self):
        with self.assertRaises(MalformedRuleError):
            Rule.parse("<integer>")

    def testEmptyType(self):
        with self.assertRaises(MalformedRuleError):
            Rule.parse("<>")
        with self.assertRaises(MalformedRuleError):
            Rule.parse("<number,>")

    def testNotationMustBeString(self):
        with self.assertRaises(TypeError):
            Rule.parse(5)

    def testDirectConstructionChecksOrder(self):
        with self.assertRaises(ValueError):
            Rule([Slot(frozenset({"number"}), False), Slot(frozenset({"number"}), True)])


class TestTypecheck(TestCase):
    """Arity and type validation."""

    def testOptionalSlotOverflow(self):
        rule = Rule.parse("<number> [string]")
        self.assertTrue(typecheck(rule, [1, "a", "b", "c"]))

    def testMissingRequired(self):
        rule = Rule.parse("<number> [string]")
        self.assertFalse(typecheck(rule, []))

    def testWrongRequiredType(self):
        self.assertFalse(typecheck(Rule.parse("<number> [string]"), ["x"]))

    def testWrongOptionalType(self):
        self.assertFalse(typecheck(Rule.parse("<number> [string]"), [1, 2]))

    def testRepeatedOptionalTypeIsChecked(self):
        self.assertFalse(typecheck(Rule.parse("<number> [string]"), [1, "a", 3]))

    def testNoOptionalSlotsRejectsExtra(self):
        rule = Rule.parse("<number>")
        self.assertTrue(typecheck(rule, [1]))
        self.assertFalse(typecheck(rule, [1, 2]))

    def testAmountUpperBound(self):
        rule = Rule.parse("<number> [number]")
        self.assertTrue(typecheck(rule, [1, 2], 2))
        self.assertFalse(typecheck(rule, [1, 2, 3], 2))
        self.assertTrue(typecheck(rule, [1, 2, 3]))

    def testArityIsMonotonic(self):
        rule = Rule.parse("<number> <number> [number]")
        results = [typecheck(rule, [1] * count, 4) for count in range(6)]
        self.assertEqual(results, [False, False, True, True, True, False])

    def testBooleanSlot(self):
        rule = Rule.parse("<boolean>")
        self.assertTrue(typecheck(rule, [True]))
        self.assertFalse(typecheck(rule, [1]))

    def testUnionSlot(self):
        rule = Rule.parse("<number,string>")
        self.assertTrue(typecheck(rule, ["x"]))
        self.assertTrue(typecheck(rule, [5]))
        self.assertFalse(typecheck(rule, [True]))

    def testEmptyRuleAcceptsNothing(self):
        self.assertTrue(typecheck(Rule(), []))
        self.assertFalse(typecheck(Rule(), ["x"]))

    def testRuleMustBeRule(self):
        with self.assertRaises(TypeError):
            typecheck("<number>", [1])


if __name__ == "__main__":
    unittest.main()
