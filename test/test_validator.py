"""
Validator behavioral tests (required, choices, defaults).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argbind import Argument, Registry, validate
from argbind.faults import InvalidChoiceError, MissingRequiredError


class TestRequired(TestCase):
    """Behavioral tests for required arguments."""

    def testMissingRequiredOption(self):
        specs = Registry([Argument("--mode", required=True)])
        with self.assertRaises(MissingRequiredError) as context:
            validate({}, specs)
        self.assertEqual(context.exception.qualifier, "--mode")

    def testRequiredOptionSatisfiedByDefault(self):
        specs = Registry([Argument("--mode", required=True, default="fast")])
        self.assertEqual(validate({}, specs), {"mode": "fast"})

    def testRequiredPositionalIgnoresDefault(self):
        specs = Registry([Argument("name", required=True, default="John")])
        with self.assertRaises(MissingRequiredError) as context:
            validate({}, specs)
        self.assertEqual(context.exception.qualifier, "name")

    def testPresentRequiredPasses(self):
        specs = Registry([Argument("name", required=True)])
        self.assertEqual(validate({"name": "Vader"}, specs), {"name": "Vader"})

    def testFirstMissingInRegistrationOrder(self):
        specs = Registry([Argument("--first", required=True), Argument("--second", required=True)])
        with self.assertRaises(MissingRequiredError) as context:
            validate({}, specs)
        self.assertEqual(context.exception.qualifier, "--first")


class TestChoices(TestCase):
    """Behavioral tests for choice checks."""

    def setUp(self):
        self.specs = Registry([
            Argument("--color", choices=["red", "blue"]),
            Argument("-t", "--tag", action="append", choices={"a", "b"}),
        ])

    def testValueInsideChoicesPasses(self):
        self.assertEqual(validate({"color": "red"}, self.specs), {"color": "red"})

    def testValueOutsideChoicesFails(self):
        with self.assertRaises(InvalidChoiceError) as context:
            validate({"color": "green"}, self.specs)
        self.assertEqual(context.exception.value, "green")
        self.assertEqual(context.exception.choices, ["blue", "red"])
        self.assertEqual(context.exception.qualifier, "--color")

    def testEveryListElementChecked(self):
        self.assertEqual(validate({"tag": ["a", "b"]}, self.specs), {"tag": ["a", "b"]})
        with self.assertRaises(InvalidChoiceError) as context:
            validate({"tag": ["a", "c"]}, self.specs)
        self.assertEqual(context.exception.value, "c")

    def testDefaultsAreNotChecked(self):
        specs = Registry([Argument("--color", choices=["red"], default="green")])
        self.assertEqual(validate({}, specs), {"color": "green"})


class TestDefaults(TestCase):
    """Behavioral tests for default filling."""

    def testDefaultFillsAbsentEntry(self):
        specs = Registry([Argument("--name", default="bar")])
        self.assertEqual(validate({}, specs), {"name": "bar"})

    def testBoundValueWins(self):
        specs = Registry([Argument("--name", default="bar")])
        self.assertEqual(validate({"name": "baz"}, specs), {"name": "baz"})

    def testSequenceDefaultBecomesList(self):
        specs = Registry([Argument("--items", nargs="*", default=("a", "b"))])
        self.assertEqual(validate({}, specs), {"items": ["a", "b"]})

    def testValuesUpdatedInPlace(self):
        values = {}
        specs = Registry([Argument("-u", action="store_true", default="false")])
        self.assertIs(validate(values, specs), values)
        self.assertEqual(values, {"u": "false"})


if __name__ == "__main__":
    unittest.main()
