# python
"""
Specs module behavioral tests (options, positionals, subcommands, scopes).

Scope
- Validate OptionSpec construction: names, dest derivation, arity/type coupling,
  choices/domain rules, env names, default resolution.
- Validate PositionalSpec nargs rules and ValueType conversions/rendering.
- Validate ArgumentSpec scope invariants: unique switches and dests, positional
  ordering, a single default subcommand, constraint target resolution and the
  implicit Required constraints.

Conventions
- Test method names follow CamelCase per project convention.
- Specs are built directly (no builder) so every failure points at one class.
"""

from __future__ import annotations

import pathlib
import unittest
from unittest import TestCase

from rich.text import Text

from argosy import (
    Arity,
    ArgumentSpec,
    AtLeastOne,
    Conflicts,
    Constraint,
    ConstraintKind,
    ExactlyOne,
    Interval,
    MutuallyExclusive,
    OptionSpec,
    PositionalSpec,
    Required,
    RequiredIfAllAbsent,
    RequiredIfAnyAbsent,
    RequiresAll,
    Settings,
    SubcommandSpec,
    ValueType,
)


class TestOptionSpec(TestCase):
    """Behavioral tests for OptionSpec."""

    def testOptionRequiresAtLeastOneName(self):
        with self.assertRaises(TypeError):
            OptionSpec()

    def testOptionNamesMustBeSwitches(self):
        for name in ("output", "-", "--", "-ab", "---x", "--_x"):
            with self.subTest(name=name), self.assertRaises(ValueError):
                OptionSpec(name)

    def testOptionDuplicateNamesRejected(self):
        with self.assertRaises(ValueError):
            OptionSpec("-o", "-o")

    def testOptionDestFromFirstLongName(self):
        self.assertEqual(OptionSpec("-n", "--dry-run").dest, "dry_run")

    def testOptionDestFromShortName(self):
        self.assertEqual(OptionSpec("-v").dest, "v")

    def testOptionExplicitDestMustBeIdentifier(self):
        with self.assertRaises(ValueError):
            OptionSpec("--output", dest="out-file")

    def testOptionPrimaryPrefersLongName(self):
        option = OptionSpec("-o", "--output")
        self.assertEqual(option.names, ("-o", "--output"))
        self.assertEqual(option.primary, "--output")
        self.assertEqual(OptionSpec("-o").primary, "-o")

    def testOptionDescrExplicitNoneRejected(self):
        with self.assertRaises(TypeError):
            OptionSpec("--output", descr=None)

    def testOptionDescrAcceptsRichText(self):
        option = OptionSpec("--output", descr=Text("where to write"))
        self.assertIsInstance(option.descr, Text)

    def testOptionDescrDefaultsToNone(self):
        self.assertIsNone(OptionSpec("--output").descr)

    def testFlagForcesBoolType(self):
        self.assertIs(OptionSpec("--force", arity="flag").type, ValueType.BOOL)
        with self.assertRaises(TypeError):
            OptionSpec("--force", arity=Arity.FLAG, type="int")

    def testCountForcesIntType(self):
        self.assertIs(OptionSpec("-v", arity=Arity.COUNT).type, ValueType.INT)
        with self.assertRaises(TypeError):
            OptionSpec("-v", arity=Arity.COUNT, type=ValueType.STRING)

    def testUnknownArityRejected(self):
        with self.assertRaises(ValueError):
            OptionSpec("--x", arity="several")

    def testTypeTagString(self):
        self.assertIs(OptionSpec("--jobs", type="int").type, ValueType.INT)
        with self.assertRaises(ValueError):
            OptionSpec("--jobs", type="integer")

    def testNegatableOnlyOnFlags(self):
        with self.assertRaises(TypeError):
            OptionSpec("--color", negatable=True)
        self.assertTrue(OptionSpec("--color", arity=Arity.FLAG, negatable=True).negatable)

    def testPresenceOptionsRejectMetavar(self):
        with self.assertRaises(TypeError):
            OptionSpec("--force", arity=Arity.FLAG, metavar="X")

    def testChoiceRequiresChoices(self):
        with self.assertRaises(TypeError):
            OptionSpec("--format", type="choice")

    def testChoicesRequireChoiceType(self):
        with self.assertRaises(TypeError):
            OptionSpec("--format", choices=("json", "yaml"))

    def testChoicesRejectDuplicates(self):
        with self.assertRaises(ValueError):
            OptionSpec("--format", type="choice", choices=("json", "json"))

    def testEnvMustBeVariableName(self):
        with self.assertRaises(ValueError):
            OptionSpec("--level", env="1LEVEL")
        with self.assertRaises(TypeError):
            OptionSpec("--level", env=42)
        self.assertEqual(OptionSpec("--level", env="TOOL_LEVEL").env, "TOOL_LEVEL")

    def testRepeatableDefaultMustBeSequence(self):
        with self.assertRaises(TypeError):
            OptionSpec("-I", arity=Arity.MULTI, default="include")
        self.assertEqual(OptionSpec("-I", arity=Arity.MULTI, default=["a", "b"]).default, ("a", "b"))

    def testResolveDefaultPerArity(self):
        self.assertIs(OptionSpec("--force", arity=Arity.FLAG).resolve_default(), False)
        self.assertEqual(OptionSpec("-v", arity=Arity.COUNT).resolve_default(), 0)
        self.assertEqual(OptionSpec("-I", arity=Arity.MULTI).resolve_default(), ())
        self.assertIsNone(OptionSpec("--output").resolve_default())
        self.assertEqual(OptionSpec("--jobs", type="int", default=4).resolve_default(), 4)

    def testFieldsAreReadOnly(self):
        option = OptionSpec("--output")
        with self.assertRaises(AttributeError):
            option.names = ("--input",)  # type: ignore[misc]

    def testSealedAgainstSubclassing(self):
        with self.assertRaises(TypeError):
            class Derived(OptionSpec):  # NOQA: F-841
                pass

    def testReprUsesTypename(self):
        self.assertTrue(repr(OptionSpec("--output")).startswith("option-spec("))


class TestPositionalSpec(TestCase):
    """Behavioral tests for PositionalSpec."""

    def testNameMustBeIdentifier(self):
        with self.assertRaises(ValueError):
            PositionalSpec("source-file")
        with self.assertRaises(TypeError):
            PositionalSpec(42)

    def testNargsValidated(self):
        with self.assertRaises(ValueError):
            PositionalSpec("files", nargs=2)

    def testVariadicDefaultFrozen(self):
        positional = PositionalSpec("files", nargs="*", default=["a", "b"])
        self.assertEqual(positional.default, ("a", "b"))
        self.assertTrue(positional.variadic)
        with self.assertRaises(TypeError):
            PositionalSpec("files", nargs="+", default="a")

    def testMandatory(self):
        self.assertTrue(PositionalSpec("source").mandatory)
        self.assertTrue(PositionalSpec("files", nargs="+").mandatory)
        self.assertFalse(PositionalSpec("source", default="x").mandatory)
        self.assertFalse(PositionalSpec("source", nargs="?").mandatory)
        self.assertFalse(PositionalSpec("files", nargs="*").mandatory)

    def testDestIsName(self):
        self.assertEqual(PositionalSpec("source").dest, "source")

    def testResolveDefault(self):
        self.assertIsNone(PositionalSpec("source", nargs="?").resolve_default())
        self.assertEqual(PositionalSpec("files", nargs="*").resolve_default(), ())


class TestValueTypes(TestCase):
    """Behavioral tests for ValueType conversions, Interval and domains."""

    def testBoolLiterals(self):
        for raw in ("true", "1", "Yes", "ON"):
            self.assertIs(ValueType.BOOL.convert(raw), True)
        for raw in ("false", "0", "no", "Off"):
            self.assertIs(ValueType.BOOL.convert(raw), False)
        with self.assertRaises(ValueError):
            ValueType.BOOL.convert("maybe")

    def testNumericConversions(self):
        self.assertEqual(ValueType.INT.convert("-3"), -3)
        self.assertEqual(ValueType.FLOAT.convert("1.5"), 1.5)
        with self.assertRaises(ValueError):
            ValueType.INT.convert("three")

    def testChoiceConversionReturnsDeclaredMember(self):
        self.assertEqual(ValueType.CHOICE.convert("2", (1, 2, 3)), 2)
        with self.assertRaises(ValueError):
            ValueType.CHOICE.convert("4", (1, 2, 3))

    def testPathConversion(self):
        self.assertEqual(ValueType.PATH.convert("a/b"), pathlib.Path("a/b"))
        with self.assertRaises(ValueError):
            ValueType.PATH.convert("")

    def testRender(self):
        self.assertEqual(ValueType.BOOL.render(True), "true")
        self.assertEqual(ValueType.FLOAT.render(1), "1.0")
        self.assertEqual(ValueType.PATH.render(pathlib.Path("a")), "a")

    def testIntervalBounds(self):
        interval = Interval(1, 5)
        self.assertIn(1, interval)
        self.assertIn(5, interval)
        self.assertNotIn(6, interval)
        self.assertNotIn("3", interval)
        self.assertIn(-100, Interval(high=5))
        with self.assertRaises(ValueError):
            Interval(5, 1)

    def testDomainNormalization(self):
        self.assertEqual(OptionSpec("--level", type="int", domain=range(1, 11)).domain, Interval(1, 10))
        self.assertEqual(OptionSpec("--even", type="int", domain=range(0, 6, 2)).domain, frozenset((0, 2, 4)))
        self.assertEqual(OptionSpec("--mode", domain=["fast", "slow"]).domain, ("fast", "slow"))
        with self.assertRaises(ValueError):
            OptionSpec("--mode", domain=["fast", "fast"])
        with self.assertRaises(TypeError):
            OptionSpec("--mode", domain="fast")

    def testTakesValue(self):
        self.assertTrue(Arity.SINGLE.takes_value)
        self.assertTrue(Arity.MULTI.takes_value)
        self.assertFalse(Arity.FLAG.takes_value)
        self.assertFalse(Arity.COUNT.takes_value)


class TestConstraints(TestCase):
    """Behavioral tests for constraint declarations."""

    def testBaseIsAbstract(self):
        with self.assertRaises(TypeError):
            Constraint()

    def testMutuallyExclusiveNeedsTwoTargets(self):
        with self.assertRaises(TypeError):
            MutuallyExclusive("json")
        with self.assertRaises(ValueError):
            MutuallyExclusive("json", "json")

    def testRequiresAllNeedsCompanions(self):
        with self.assertRaises(TypeError):
            RequiresAll("user")

    def testConflictsDistinctTargets(self):
        with self.assertRaises(ValueError):
            Conflicts("quiet", "quiet")

    def testGroupsNeedDistinctTargets(self):
        for kind in (ExactlyOne, AtLeastOne):
            with self.assertRaises(TypeError):
                kind("file")
            with self.assertRaises(ValueError):
                kind("file", "file")
        self.assertIs(ExactlyOne("file", "url").kind, ConstraintKind.EXACTLY_ONE)

    def testConditionalRequirementReferences(self):
        for kind in (RequiredIfAnyAbsent, RequiredIfAllAbsent):
            with self.assertRaises(TypeError):
                kind("config")
            with self.assertRaises(ValueError):
                kind("config", "user", "config")
        constraint = RequiredIfAllAbsent("config", "user", "host")
        self.assertEqual((constraint.targets, constraint.companions), (("config",), ("user", "host")))

    def testEqualityAndHash(self):
        self.assertEqual(Required("name"), Required("name"))
        self.assertEqual(hash(Required("name")), hash(Required("name")))
        self.assertNotEqual(Required("name"), Required("other"))
        self.assertIs(Conflicts("a", "b").kind, ConstraintKind.CONFLICTS)

    def testTargetsMustBeStrings(self):
        with self.assertRaises(TypeError):
            Required(3)


class TestSettings(TestCase):
    """Behavioral tests for Settings validation."""

    def testDefaults(self):
        settings = Settings()
        self.assertTrue(settings.clustering)
        self.assertEqual(settings.negation, "no-")
        self.assertEqual(settings.suggestions, 5)
        self.assertEqual(settings.cutoff, 0.6)

    def testInvalidValues(self):
        with self.assertRaises(ValueError):
            Settings(negation="")
        with self.assertRaises(ValueError):
            Settings(suggestions=-1)
        with self.assertRaises(ValueError):
            Settings(cutoff=2)
        with self.assertRaises(TypeError):
            Settings(negation=1)


class TestArgumentSpec(TestCase):
    """Behavioral tests for scope-level invariants and lookup tables."""

    def testDuplicateSwitchRejected(self):
        with self.assertRaises(ValueError):
            ArgumentSpec("tool", [OptionSpec("-o", "--output"), OptionSpec("-o", dest="other")])

    def testDuplicateDestRejected(self):
        with self.assertRaises(ValueError):
            ArgumentSpec("tool", [OptionSpec("--source")], [PositionalSpec("source")])

    def testVariadicMustBeLast(self):
        with self.assertRaises(ValueError):
            ArgumentSpec("tool", positionals=[PositionalSpec("files", nargs="*"), PositionalSpec("target")])

    def testMandatoryCannotFollowOptional(self):
        with self.assertRaises(ValueError):
            ArgumentSpec("tool", positionals=[PositionalSpec("first", nargs="?"), PositionalSpec("second")])

    def testSingleDefaultSubcommand(self):
        run = SubcommandSpec("run", ArgumentSpec("run"), default=True)
        test = SubcommandSpec("test", ArgumentSpec("test"), default=True)
        with self.assertRaises(ValueError):
            ArgumentSpec("tool", subcommands=[run, test])

    def testDuplicateRouteRejected(self):
        build = SubcommandSpec("build", ArgumentSpec("build"), "b")
        bench = SubcommandSpec("bench", ArgumentSpec("bench"), "b")
        with self.assertRaises(ValueError):
            ArgumentSpec("tool", subcommands=[build, bench])

    def testSubcommandWordsValidated(self):
        with self.assertRaises(ValueError):
            SubcommandSpec("-build", ArgumentSpec("build"))
        with self.assertRaises(TypeError):
            SubcommandSpec("build", "not a spec")

    def testNegationTable(self):
        color = OptionSpec("--color", arity=Arity.FLAG, negatable=True)
        spec = ArgumentSpec("tool", [color])
        self.assertIs(spec.negations["--no-color"], color)
        self.assertEqual(spec.negated(color), ("--no-color",))
        self.assertIs(spec.lookup("--no-color"), color)

    def testNegationPrefixFromSettings(self):
        color = OptionSpec("--color", arity=Arity.FLAG, negatable=True)
        spec = ArgumentSpec("tool", [color], settings=Settings(negation="without-"))
        self.assertEqual(spec.negated(color), ("--without-color",))

    def testNegationClashRejected(self):
        color = OptionSpec("--color", arity=Arity.FLAG, negatable=True)
        with self.assertRaises(ValueError):
            ArgumentSpec("tool", [color, OptionSpec("--no-color", arity=Arity.FLAG)])

    def testNegatableNeedsLongName(self):
        with self.assertRaises(ValueError):
            ArgumentSpec("tool", [OptionSpec("-c", arity=Arity.FLAG, negatable=True)])

    def testConstraintTargetsResolveToDests(self):
        spec = ArgumentSpec(
            "tool",
            [OptionSpec("-j", "--json", arity=Arity.FLAG), OptionSpec("-y", "--yaml", arity=Arity.FLAG)],
            constraints=[MutuallyExclusive("-j", "--yaml")],
        )
        self.assertEqual(spec.constraints, (MutuallyExclusive("json", "yaml"),))

    def testUnknownConstraintTargetRejected(self):
        with self.assertRaises(ValueError):
            ArgumentSpec("tool", [OptionSpec("--json", arity=Arity.FLAG)], constraints=[Required("--yaml")])

    def testImplicitRequiredFirstAndDeduplicated(self):
        spec = ArgumentSpec(
            "tool",
            [OptionSpec("--name", required=True), OptionSpec("--a", arity=Arity.FLAG), OptionSpec("--b", arity=Arity.FLAG)],
            [PositionalSpec("source")],
            constraints=[Conflicts("a", "b"), Required("--name")],
        )
        self.assertEqual(spec.constraints, (Required("name"), Required("source"), Conflicts("a", "b")))

    def testTablesAreReadOnly(self):
        spec = ArgumentSpec("tool", [OptionSpec("--output")])
        with self.assertRaises(TypeError):
            spec.switches["--input"] = None  # type: ignore[index]

    def testIsSwitch(self):
        spec = ArgumentSpec("tool", [
            OptionSpec("-o", "--output"),
            OptionSpec("--color", arity=Arity.FLAG, negatable=True),
        ])
        for token in ("-o", "--output", "--output=x", "-ofile", "--no-color"):
            self.assertTrue(spec.is_switch(token), token)
        for token in ("-5", "value", "--input", "-x", "-"):
            self.assertFalse(spec.is_switch(token), token)

    def testLookupUnknownRaisesKeyError(self):
        with self.assertRaises(KeyError):
            ArgumentSpec("tool").lookup("--missing")

    def testFallback(self):
        run = SubcommandSpec("run", ArgumentSpec("run"), default=True)
        self.assertIs(ArgumentSpec("tool", subcommands=[run]).fallback, run)
        self.assertIsNone(ArgumentSpec("tool").fallback)

    def testProgMustBeNonEmpty(self):
        with self.assertRaises(ValueError):
            ArgumentSpec("  ")


if __name__ == "__main__":
    unittest.main()
