"""
Validation behavioral tests (order and choice predicates, pipeline).

Scope
- Validate Order relations and the English rendering used in messages.
- Validate OrderValidation construction, predicates and error descriptions.
- Validate ChoiceValidation construction rules and error descriptions.
- Validate Args.validated_value_of: first failure wins, coercion comes first.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from pennant import (
    Args,
    ChoiceValidation,
    CoercionError,
    Order,
    OrderValidation,
    Validation,
    ValidationError,
    ValueNotFoundError,
)


class TestOrder(TestCase):
    """Order relations compare (value, bound)."""

    def testRelations(self):
        self.assertTrue(Order.GREATER_THAN.compare(0, 1))
        self.assertFalse(Order.GREATER_THAN.compare(0, 0))
        self.assertTrue(Order.GREATER_THAN_OR_EQUAL.compare(0, 0))
        self.assertTrue(Order.LESS_THAN.compare(10, 9))
        self.assertFalse(Order.LESS_THAN.compare(10, 10))
        self.assertTrue(Order.LESS_THAN_OR_EQUAL.compare(10, 10))

    def testStr(self):
        self.assertEqual(str(Order.GREATER_THAN), "greater than")
        self.assertEqual(str(Order.GREATER_THAN_OR_EQUAL), "greater than or equal to")
        self.assertEqual(str(Order.LESS_THAN), "less than")
        self.assertEqual(str(Order.LESS_THAN_OR_EQUAL), "less than or equal to")


class TestOrderValidation(TestCase):
    """Behavioral tests for OrderValidation."""

    def testIsValidation(self):
        self.assertIsInstance(OrderValidation.greater_than(0), Validation)

    def testGreaterThan(self):
        validation = OrderValidation.greater_than(0)
        self.assertTrue(validation.is_valid(1))
        self.assertTrue(validation.is_invalid(0))
        self.assertTrue(validation.is_invalid(-1))

    def testLessThanOrEqual(self):
        validation = OrderValidation.less_than_or_equal(10)
        self.assertTrue(validation.is_valid(10))
        self.assertTrue(validation.is_invalid(11))

    def testFloatBound(self):
        validation = OrderValidation.less_than(0.5)
        self.assertTrue(validation.is_valid(0.25))
        self.assertFalse(validation.is_valid(0.5))

    def testStringBound(self):
        self.assertTrue(OrderValidation.greater_than_or_equal("b").is_valid("c"))

    def testErrorDescription(self):
        error = OrderValidation.greater_than(0).error(0)
        self.assertIsInstance(error, ValidationError)
        self.assertEqual(error.scope, "order invalid")
        self.assertEqual(error.message, "0 is not greater than 0")
        self.assertEqual(str(error), "order invalid: 0 is not greater than 0")
        self.assertEqual(error.bound, 0)
        self.assertIs(error.order, Order.GREATER_THAN)

    def testErrorDescriptionInclusive(self):
        error = OrderValidation.less_than_or_equal(10).error(11)
        self.assertEqual(str(error), "order invalid: 11 is not less than or equal to 10")

    def testUnorderableBoundRejected(self):
        with self.assertRaises(TypeError):
            OrderValidation.greater_than(1j)
        with self.assertRaises(TypeError):
            OrderValidation.greater_than(object())

    def testInvalidOrderRejected(self):
        with self.assertRaises(TypeError):
            OrderValidation(">", 0)

    def testProperties(self):
        validation = OrderValidation.less_than(3)
        self.assertIs(validation.order, Order.LESS_THAN)
        self.assertEqual(validation.bound, 3)
        self.assertEqual(repr(validation), "OrderValidation(LESS_THAN, 3)")


class TestChoiceValidation(TestCase):
    """Behavioral tests for ChoiceValidation."""

    def testMembership(self):
        validation = ChoiceValidation(["fast", "slow"])
        self.assertTrue(validation.is_valid("fast"))
        self.assertTrue(validation.is_invalid("medium"))

    def testSetChoices(self):
        self.assertTrue(ChoiceValidation({1, 2, 3}).is_valid(2))

    def testChoicesKeepOrder(self):
        self.assertEqual(ChoiceValidation(iter(["b", "a"])).choices, ("b", "a"))

    def testErrorDescription(self):
        error = ChoiceValidation(["fast", "slow"]).error("medium")
        self.assertEqual(str(error), "choice invalid: medium is not one of fast, slow")
        self.assertEqual(error.choices, ("fast", "slow"))

    def testStringChoicesRejected(self):
        with self.assertRaises(TypeError):
            ChoiceValidation("abc")

    def testNonIterableRejected(self):
        with self.assertRaises(TypeError):
            ChoiceValidation(3)

    def testDuplicatesRejected(self):
        with self.assertRaises(ValueError):
            ChoiceValidation(["a", "a"])

    def testEmptyRejected(self):
        with self.assertRaises(ValueError):
            ChoiceValidation([])
        with self.assertRaises(ValueError):
            ChoiceValidation(set())


class TestValidatedValueOf(TestCase):
    """The validation pipeline on top of the typed accessors."""

    def setUp(self) -> None:
        self.args = Args("program").option("n", "number", "A number", "N")
        self.validations = [
            OrderValidation.greater_than(0),
            OrderValidation.less_than_or_equal(10),
        ]

    def testValid(self):
        self.args.parse(["-n", "5"])
        self.assertEqual(self.args.validated_value_of("number", self.validations, int), 5)

    def testBelowBound(self):
        self.args.parse(["-n", "0"])
        with self.assertRaises(ValidationError) as context:
            self.args.validated_value_of("number", self.validations, int)
        self.assertEqual(str(context.exception), "order invalid: 0 is not greater than 0")

    def testFirstFailureWins(self):
        validations = [OrderValidation.less_than(3), OrderValidation.less_than(2)]
        self.args.parse(["-n", "5"])
        with self.assertRaises(ValidationError) as context:
            self.args.validated_value_of("number", validations, int)
        self.assertEqual(context.exception.bound, 3)

    def testCoercionBeforeValidation(self):
        self.args.parse(["-n", "abc"])
        with self.assertRaises(CoercionError):
            self.args.validated_value_of("number", self.validations, int)

    def testTypeMustMatchBound(self):
        self.args.parse(["-n", "5"])
        with self.assertRaises(TypeError):
            self.args.validated_value_of("number", self.validations)
        self.assertEqual(self.args.validated_value_of("number", self.validations, int), 5)

    def testEmptyValidations(self):
        self.args.parse(["-n", "-4"])
        self.assertEqual(self.args.validated_value_of("number", [], int), -4)

    def testMissingValue(self):
        self.args.parse([])
        with self.assertRaises(ValueNotFoundError):
            self.args.validated_value_of("number", self.validations, int)
        self.assertIsNone(self.args.optional_validated_value_of("number", self.validations, int))

    def testOptionalStillValidates(self):
        self.args.parse(["-n", "11"])
        with self.assertRaises(ValidationError):
            self.args.optional_validated_value_of("number", self.validations, int)

    def testChoiceOnStrings(self):
        self.args.parse(["-n", "seven"])
        with self.assertRaises(ValidationError) as context:
            self.args.validated_value_of("number", [ChoiceValidation(["one", "two"])])
        self.assertEqual(context.exception.scope, "choice invalid")


if __name__ == "__main__":
    unittest.main()
