# python
"""
Faults module behavioral tests (codes, binding errors, violations).

Scope
- Validate FaultCode normalization through a host __codes__ mapping.
- Validate BindingError option exposure, defaults and pickling.
- Validate ConstraintViolation/ConstraintError records and rich rendering.

Conventions
- Test method names follow CamelCase per project convention.
- Rich output is rendered to an in-memory console (no terminal, no color).
"""

from __future__ import annotations

import io
import pickle
import sys
import unittest
from unittest import TestCase, mock

from rich.console import Console

from argosy import (
    BindingError,
    ConstraintError,
    ConstraintKind,
    ConstraintViolation,
    FaultCode,
    MissingValueError,
    UnknownOptionError,
)


def _render(renderable):
    console = Console(file=io.StringIO(), width=200)
    console.print(renderable)
    return console.file.getvalue()


class TestFaultCode(TestCase):
    """Behavioral tests for FaultCode."""

    def testNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.UNKNOWN_OPTION.normalize(), "11112")

    def testNormalizeUsesHostMapping(self):
        with mock.patch.object(sys.modules["__main__"], "__codes__", {FaultCode.REQUIRED: "E-REQ"}, create=True):
            self.assertEqual(FaultCode.REQUIRED.normalize(), "E-REQ")
            self.assertEqual(FaultCode.CONFLICTS.normalize(), "13105")

    def testConstraintKindCodes(self):
        for kind in ConstraintKind:
            self.assertIsInstance(kind.code, FaultCode)
        self.assertIs(ConstraintKind.DOMAIN.code, FaultCode.OUT_OF_DOMAIN)


class TestBindingError(TestCase):
    """Behavioral tests for BindingError and its subclasses."""

    def testOptionsExposed(self):
        error = UnknownOptionError("unknown option", token="--x", index=3, suggestions=("--y",))
        self.assertEqual(error.code, FaultCode.UNKNOWN_OPTION)
        self.assertEqual(error.token, "--x")
        self.assertEqual(error.index, 3)
        self.assertEqual(error.suggestions, ("--y",))
        self.assertEqual(error.scope, ())
        self.assertIsNone(error.target)
        self.assertIsNone(error.value)
        self.assertEqual(str(error), "unknown option")

    def testUnknownAttributeRaises(self):
        with self.assertRaises(AttributeError):
            MissingValueError("missing").nonexistent

    def testOptionsReadOnly(self):
        error = MissingValueError("missing", target="output")
        with self.assertRaises(TypeError):
            error.options["target"] = "input"  # type: ignore[index]

    def testMessageDefaultsToClassName(self):
        self.assertEqual(str(MissingValueError()), "MissingValueError")

    def testPickleRoundTrip(self):
        error = MissingValueError("missing", target="output", token="--output", index=0, scope=("build",))
        restored = pickle.loads(pickle.dumps(error))
        self.assertIsInstance(restored, MissingValueError)
        self.assertEqual(dict(restored.options), dict(error.options))
        self.assertEqual(restored.message, "missing")

    def testHierarchy(self):
        self.assertTrue(issubclass(UnknownOptionError, BindingError))
        self.assertTrue(issubclass(BindingError, Exception))

    def testRichRendering(self):
        output = _render(UnknownOptionError("unknown option '--x'", scope=("build",)))
        self.assertIn("11112", output)
        self.assertIn("UnknownOption", output)
        self.assertIn("unknown option '--x'", output)
        self.assertIn("in 'build'", output)


class TestConstraintRecords(TestCase):
    """Behavioral tests for ConstraintViolation and ConstraintError."""

    def testViolationDefaults(self):
        violation = ConstraintViolation(ConstraintKind.REQUIRED, ["name"])
        self.assertEqual(violation.targets, ("name",))
        self.assertEqual(violation.companions, ())
        self.assertEqual(violation.scope, ())
        self.assertIsNone(violation.value)
        self.assertIs(violation.code, FaultCode.REQUIRED)

    def testViolationRendering(self):
        violation = ConstraintViolation(ConstraintKind.REQUIRES_ALL, ("user",), ("password",), ("login",))
        output = _render(violation)
        self.assertIn("13103", output)
        self.assertIn("user -> password", output)
        self.assertIn("in 'login'", output)

    def testDomainRenderingShowsValue(self):
        output = _render(ConstraintViolation(ConstraintKind.DOMAIN, ("level",), value=9))
        self.assertIn("level = 9", output)

    def testConstraintError(self):
        violations = [
            ConstraintViolation(ConstraintKind.REQUIRED, ("name",)),
            ConstraintViolation(ConstraintKind.CONFLICTS, ("a", "b")),
        ]
        error = ConstraintError(violations)
        self.assertEqual(error.violations, tuple(violations))
        self.assertIsNone(error.result)
        self.assertEqual(str(error), "2 constraint violation(s)")
        output = _render(error)
        self.assertIn("13101", output)
        self.assertIn("13105", output)


if __name__ == "__main__":
    unittest.main()
