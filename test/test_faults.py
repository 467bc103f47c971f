"""
Faults module behavioral tests (codes, options, triggering, rendering).

Scope
- Validate fault codes, option access and replacement.
- Validate trigger(): raise in library mode, render + exit in shell mode.
- Validate that signals stay outside the exception hierarchy.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import io
import unittest
from types import SimpleNamespace
from unittest import TestCase, mock

from rich.console import Console

from argbind.faults import (
    ArgumentException,
    ArgumentSignal,
    DeprecatedArgumentWarning,
    Fault,
    FaultCode,
    HelpRequested,
    InvalidChoiceError,
    UnknownOptionError,
    getdoc,
    trigger,
)


def unknown(**options):
    return UnknownOptionError(
        "unknown option '--nope' at first position",
        title="unknown option",
        code=FaultCode.UNKNOWN_OPTION,
        qualifier="--nope",
        hint="run with --help to see all options",
        **options,
    )


class TestFaultCode(TestCase):
    """Behavioral tests for FaultCode."""

    def testStableValues(self):
        self.assertEqual(FaultCode.DUPLICATE_QUALIFIER, 11101)
        self.assertEqual(FaultCode.UNKNOWN_OPTION, 11111)
        self.assertEqual(FaultCode.MISSING_ARGUMENTS, 11112)
        self.assertEqual(FaultCode.MISSING_REQUIRED, 11131)
        self.assertEqual(FaultCode.INVALID_CHOICE, 11132)

    def testNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.UNKNOWN_OPTION.normalize(), "11111")

    def testNormalizeUsesHostCodes(self):
        main = SimpleNamespace(__codes__={FaultCode.UNKNOWN_OPTION: "E-UNKNOWN"})
        with mock.patch.dict("sys.modules", {"__main__": main}):
            self.assertEqual(FaultCode.UNKNOWN_OPTION.normalize(), "E-UNKNOWN")

    def testGetDoc(self):
        self.assertIsNone(getdoc(FaultCode.INVALID_CHOICE))
        with self.assertRaises(TypeError):
            getdoc(11132)


class TestFaults(TestCase):
    """Behavioral tests for fault objects."""

    def testMessageAndOptions(self):
        fault = unknown()
        self.assertEqual(str(fault), "unknown option '--nope' at first position")
        self.assertEqual(fault.qualifier, "--nope")
        self.assertEqual(fault.options["code"], FaultCode.UNKNOWN_OPTION)
        with self.assertRaises(AttributeError):
            fault.missing

    def testOptionsAreReadOnly(self):
        with self.assertRaises(TypeError):
            unknown().options["qualifier"] = "--other"

    def testReplaceMergesOptions(self):
        fault = copy.replace(unknown(), shell=True)
        self.assertIsInstance(fault, UnknownOptionError)
        self.assertTrue(fault.options["shell"])
        self.assertEqual(fault.qualifier, "--nope")

    def testSharedFaultBase(self):
        self.assertTrue(issubclass(ArgumentException, Fault))
        self.assertTrue(issubclass(ArgumentSignal, Fault))
        self.assertTrue(issubclass(DeprecatedArgumentWarning, Fault))
        signal = copy.replace(HelpRequested("help requested", qualifier="-h"), shell=True)
        self.assertIsInstance(signal, HelpRequested)
        self.assertEqual(signal.qualifier, "-h")
        self.assertEqual(str(signal), "help requested")
        with self.assertRaises(AttributeError):
            signal.missing

    def testSignalsAreNotExceptions(self):
        self.assertFalse(issubclass(ArgumentSignal, ArgumentException))
        self.assertTrue(issubclass(HelpRequested, ArgumentSignal))
        self.assertTrue(issubclass(InvalidChoiceError, ArgumentException))


class TestTrigger(TestCase):
    """Behavioral tests for trigger()."""

    def testLibraryModeRaises(self):
        with self.assertRaises(UnknownOptionError):
            trigger(unknown())

    def testShellModeRendersAndExits(self):
        stream = io.StringIO()
        with mock.patch("argbind.faults.console", Console(file=stream, width=100)):
            with self.assertRaises(SystemExit) as context:
                trigger(unknown(), shell=True)
        self.assertEqual(context.exception.code, 1)
        output = stream.getvalue()
        self.assertIn("11111", output)
        self.assertIn("Unknown Option", output)
        self.assertIn("run with --help", output)

    def testFancyShellModeRendersPanel(self):
        stream = io.StringIO()
        with mock.patch("argbind.faults.console", Console(file=stream, width=100)):
            with self.assertRaises(SystemExit):
                trigger(unknown(), shell=True, fancy=True)
        self.assertIn("unknown option '--nope'", stream.getvalue())

    def testWarningInLibraryModeWarns(self):
        with self.assertWarns(DeprecatedArgumentWarning):
            trigger(DeprecatedArgumentWarning("option '--old' is deprecated"))

    def testWarningInShellModeRenders(self):
        stream = io.StringIO()
        with mock.patch("argbind.faults.console", Console(file=stream, width=100)):
            trigger(DeprecatedArgumentWarning("option '--old' is deprecated", title="deprecated option"), shell=True)
        self.assertIn("Deprecated Option", stream.getvalue())

    def testSignalWithoutToolInLibraryMode(self):
        self.assertIsNone(trigger(HelpRequested("help requested")))

    def testSignalShowsTool(self):
        tool = mock.Mock()
        with self.assertRaises(SystemExit) as context:
            trigger(HelpRequested("help requested"), tool=tool, shell=True)
        tool.print_help.assert_called_once_with()
        self.assertEqual(context.exception.code, 0)

    def testTriggerRejectsPlainObjects(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("x"))


if __name__ == "__main__":
    unittest.main()
