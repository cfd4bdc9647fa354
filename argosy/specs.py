r"""
Argosy specification model: options, positionals, subcommands, constraints.

Overview
- Specs
  • OptionSpec: named option with aliases (e.g., -o/--output), an Arity
    (flag, counter, single value, repeatable) and a ValueType.
  • PositionalSpec: positional slot filled in declaration order; exactly-one
    (nargs=None), optional ("?") or variadic ("*", "+").
  • SubcommandSpec: named route owning a nested ArgumentSpec.
  • Constraint subclasses: Required, MutuallyExclusive, RequiresAll,
    RequiresOne, Conflicts, the groups ExactlyOne and AtLeastOne, and the
    absence-triggered RequiredIfAnyAbsent and RequiredIfAllAbsent.
  • Settings: per-spec parser configuration (clustering, negation prefix,
    did-you-mean tuning).
  • ArgumentSpec: the root of one scope, holding all of the above plus
    program metadata and the lookup tables used by the tokenizer and binder.

- Immutability
  • Every spec is built through __new__ from a metadata dict that is
    sanitized in passes (shared, named, valued), then mirrored into private
    fields. SpecType exposes those fields as read-only properties, so a spec
    can be shared across any number of parse invocations.

Validation highlights
- Option names: short "-x" (one letter or digit) or long "--name"
  (r"--[^\W\d_](-?[^\W_]+)*"); unique within a scope together with the
  negated "--no-name" forms of negatable flags.
- Dests (result keys) are identifiers, unique within a scope.
- At most one variadic positional, and it must be last; a mandatory
  positional cannot follow an optional one.
- At most one default subcommand per scope.
- Constraint targets must resolve to an option or positional of the same
  scope (by dest or by any switch name).

Public API
- Enums: Arity, ValueType
- Types: Interval, Settings, OptionSpec, PositionalSpec, SubcommandSpec,
  Constraint, Required, MutuallyExclusive, RequiresAll, RequiresOne,
  Conflicts, ExactlyOne, AtLeastOne, RequiredIfAnyAbsent,
  RequiredIfAllAbsent, ArgumentSpec
"""
import functools
import operator
import pathlib
import re
from collections import namedtuple
from collections.abc import Iterable, Sequence, Set
from enum import Enum

from rich.text import Text

from .faults import ConstraintKind
from .utils import *

_SHORT = re.compile(r"-[^\W_]")
_LONG = re.compile(r"--[^\W\d_](-?[^\W_]+)*")
_ROUTE = re.compile(r"[^\W_](-?[\w.]+)*")

TRUE_LITERALS = frozenset(("true", "1", "yes", "on"))
FALSE_LITERALS = frozenset(("false", "0", "no", "off"))


class Arity(Enum):
    """
    how an option consumes values.

    - FLAG: presence-only boolean (may be negatable).
    - COUNT: presence-only counter (-vvv binds 3).
    - SINGLE: one value; the last occurrence wins.
    - MULTI: repeatable; values accumulate in appearance order.
    """
    FLAG = "flag"
    COUNT = "count"
    SINGLE = "single"
    MULTI = "multi"

    @property
    def takes_value(self):
        return self in (Arity.SINGLE, Arity.MULTI)


class ValueType(Enum):
    """
    declared value type tags and their string conversions.

    convert() turns a raw argv string into a typed value (raising ValueError
    on failure); render() turns a typed value back into the canonical string
    that convert() accepts, which is what snapshots and canonical argv use.
    """
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    CHOICE = "choice"
    PATH = "path"

    def convert(self, raw, /, choices=()):
        match self:
            case ValueType.BOOL:
                if (lowered := raw.strip().lower()) in TRUE_LITERALS:
                    return True
                if lowered in FALSE_LITERALS:
                    return False
                raise ValueError("expected one of %s" % ", ".join(sorted(TRUE_LITERALS | FALSE_LITERALS)))
            case ValueType.INT:
                return int(raw)
            case ValueType.FLOAT:
                return float(raw)
            case ValueType.CHOICE:
                for choice in choices:
                    if str(choice) == raw:
                        return choice
                raise ValueError("expected one of %s" % ", ".join(map(str, choices)))
            case ValueType.PATH:
                if not raw:
                    raise ValueError("expected a non-empty path")
                return pathlib.Path(raw)
            case _:
                return raw

    def render(self, value, /):
        match self:
            case ValueType.BOOL:
                return "true" if value else "false"
            case ValueType.FLOAT:
                return repr(float(value))
            case _:
                return str(value)


class Interval(namedtuple("Interval", ("low", "high"))):
    """
    inclusive numeric domain; either bound may be None (unbounded).
    """
    __slots__ = ()

    def __new__(cls, low=None, high=None):
        if low is not None and high is not None and low > high:
            raise ValueError("interval low bound cannot exceed its high bound")
        return super().__new__(cls, low, high)

    def __contains__(self, value):
        try:
            return (self.low is None or value >= self.low) and (self.high is None or value <= self.high)
        except TypeError:
            return False


class SpecType(type):
    """
    Metaclass giving specs read-only, introspectable fields.

    Responsibilities
    - Expose every name in __introspectable__ as a read-only property backed
      by "_<name>" (see mirror()).
    - Provide stable __repr__/__rich_repr__ for diagnostics and rich pretty
      printing.
    - Derive __typename__ from the class name (OptionSpec -> "option-spec")
      for consistent error messages.
    - Seal classes created with sealed=True against subclassing.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        if options.get("sealed", False):
            @rename("__init_subclass__")
            def __init_subclass__(cls, **options):  # NOQA: F-841
                raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
            self.__init_subclass__ = classmethod(__init_subclass__)

        return self


def _populate(self, metadata, /):
    # Mirror sanitized metadata into private fields; read-only properties expose them.
    for name, object in metadata.items():
        setattr(self, "_" + name, object)
    return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize fields shared by every argument-like spec.

    - descr: Unset | str | Text; strings are trimmed and must be non-empty.
      Unset becomes None.
    - metavar: Unset | str; trimmed, non-empty. Unset becomes None.
    - hidden: coerced to bool.
    """
    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)

    if "metavar" in metadata:
        if not isinstance(metavar := metadata["metavar"], str | Unset):
            raise TypeError(f"{cls.__typename__} 'metavar' must be a string")
        elif isinstance(metavar, str) and not (metavar := metavar.strip()):
            raise ValueError(f"{cls.__typename__} 'metavar' cannot be empty")
        metadata["metavar"] = coalesce(metavar)

    metadata["hidden"] = bool(metadata["hidden"])


def _sanitize_named_metadata(cls, metadata, /):
    r"""
    Internal: validate option names and derive the dest.

    - names: at least one; each a short "-x" or long "--name" switch,
      duplicates rejected, declaration order kept (first name is primary).
    - dest: Unset derives from the first long name ("--dry-run" -> "dry_run"),
      else from the first short name ("-v" -> "v"); an explicit dest must be
      a Python identifier.
    """
    if not metadata["names"]:
        raise TypeError(f"{cls.__typename__} must specify at least one name")

    names = []
    for name in metadata["names"]:
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} names must be strings")
        elif not (name := name.strip()):
            raise ValueError(f"{cls.__typename__} names cannot be empty-strings")
        elif not (_SHORT.fullmatch(name) or _LONG.fullmatch(name)):
            raise ValueError(f"{cls.__typename__} names must be '-x' or '--long-name' switches, got {name!r}")
        elif name in names:
            raise ValueError(f"{cls.__typename__} names cannot contain duplicates")
        names.append(name)
    metadata["names"] = tuple(names)

    if (dest := metadata["dest"]) is Unset:
        longs = [name for name in names if name.startswith("--")]
        dest = (longs[0] if longs else names[0]).lstrip("-").replace("-", "_")
    elif not isinstance(dest, str):
        raise TypeError(f"{cls.__typename__} 'dest' must be a string")
    if not dest.isidentifier():
        raise ValueError(f"{cls.__typename__} 'dest' must be an identifier, got {dest!r}")
    metadata["dest"] = dest


def _sanitize_domain(cls, domain, /):
    # Interval stays, contiguous ranges become intervals, other collections freeze.
    if domain is Unset:
        return None
    if isinstance(domain, Interval):
        return domain
    if isinstance(domain, range):
        if domain.step == 1 and len(domain):
            return Interval(domain.start, domain.stop - 1)
        return frozenset(domain)
    if isinstance(domain, Set):
        return frozenset(domain)
    if isinstance(domain, Iterable) and not isinstance(domain, str):
        sanitized = []
        for value in domain:
            if value in sanitized:
                raise ValueError(f"{cls.__typename__} 'domain' cannot contain duplicates")
            sanitized.append(value)
        return tuple(sanitized)
    raise TypeError(f"{cls.__typename__} 'domain' must be an interval, a range or a collection")


def _sanitize_valued_metadata(cls, metadata, /):
    """
    Internal: validate the value-bearing fields (type, choices, domain).

    - type: ValueType or its tag string ("int", "path", ...).
    - choices: mandatory and duplicate-free for ValueType.CHOICE, forbidden
      otherwise (use 'domain' to restrict other types).
    - domain: see _sanitize_domain().
    """
    if isinstance(type := metadata["type"], str):
        try:
            type = ValueType(type)
        except ValueError:
            raise ValueError(f"{cls.__typename__} 'type' {type!r} is not a known value type") from None
    if not isinstance(type, ValueType):
        raise TypeError(f"{cls.__typename__} 'type' must be a value type")
    metadata["type"] = type

    if not isinstance(choices := metadata["choices"], Iterable) or isinstance(choices, str):
        raise TypeError(f"{cls.__typename__} 'choices' must be iterable")
    sanitized = []
    for choice in choices:
        if str(choice) in map(str, sanitized):
            raise ValueError(f"{cls.__typename__} 'choices' cannot contain duplicates")
        sanitized.append(choice)
    if type is ValueType.CHOICE and not sanitized:
        raise TypeError(f"{cls.__typename__} of type 'choice' must declare 'choices'")
    if type is not ValueType.CHOICE and sanitized:
        raise TypeError(f"{cls.__typename__} 'choices' require type 'choice'; use 'domain' instead")
    metadata["choices"] = tuple(sanitized)

    metadata["domain"] = _sanitize_domain(cls, metadata["domain"])


class OptionSpec(metaclass=SpecType, sealed=True):
    """
    Named option specification.

    Highlights
    - names: primary switch first, then aliases ("--output", "-o").
    - dest: identity used as the result key and constraint target.
    - arity: FLAG / COUNT / SINGLE / MULTI (see Arity).
    - type: ValueType (FLAG forces BOOL, COUNT forces INT).
    - default: any value; Unset means "no declared default" (flags then
      resolve to False, counters to 0, repeatables to () and the rest to None
      with a MISSING source).
    - negatable: FLAG only; adds the "--<negation><name>" switches binding False.
    - env: environment variable consulted when the option is left unbound.
    """

    __introspectable__ = (
        "names",
        "dest",
        "arity",
        "type",
        "default",
        "choices",
        "domain",
        "required",
        "negatable",
        "env",
        "metavar",
        "descr",
        "hidden",
    )
    __displayable__ = ("names", "dest", "arity", "type", "default", "required")

    def __new__(
            cls,
            *names,
            arity=Arity.SINGLE,
            type=Unset,
            default=Unset,
            choices=(),
            domain=Unset,
            required=False,
            dest=Unset,
            negatable=False,
            env=Unset,
            metavar=Unset,
            descr=Unset,
            hidden=False
    ):
        if isinstance(arity, str):
            try:
                arity = Arity(arity)
            except ValueError:
                raise ValueError(f"{cls.__typename__} 'arity' {arity!r} is not a known arity") from None
        if not isinstance(arity, Arity):
            raise TypeError(f"{cls.__typename__} 'arity' must be an arity")

        match arity:
            case Arity.FLAG:
                if type not in (Unset, ValueType.BOOL, "bool"):
                    raise TypeError(f"flag {cls.__typename__} must be of type 'bool'")
                type = ValueType.BOOL
            case Arity.COUNT:
                if type not in (Unset, ValueType.INT, "int"):
                    raise TypeError(f"counting {cls.__typename__} must be of type 'int'")
                type = ValueType.INT
            case _:
                type = coalesce(type, ValueType.STRING)

        metadata = {
            "names": names,
            "dest": dest,
            "arity": arity,
            "type": type,
            "default": default,
            "choices": choices,
            "domain": domain,
            "required": bool(required),
            "negatable": bool(negatable),
            "env": env,
            "metavar": metavar,
            "descr": descr,
            "hidden": hidden,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_named_metadata(cls, metadata)
        _sanitize_valued_metadata(cls, metadata)

        if metadata["negatable"] and arity is not Arity.FLAG:
            raise TypeError(f"only flag {cls.__typename__}s can be negatable")
        if not arity.takes_value and metadata["metavar"] is not None:
            raise TypeError(f"{arity.value} {cls.__typename__} cannot have a 'metavar'")

        if not isinstance(env := metadata["env"], str | Unset):
            raise TypeError(f"{cls.__typename__} 'env' must be a string")
        elif isinstance(env, str) and not re.fullmatch(r"[A-Za-z_][A-Za-z0-9_]*", env):
            raise ValueError(f"{cls.__typename__} 'env' must be a valid environment variable name")
        metadata["env"] = coalesce(env)

        if arity is Arity.MULTI and default is not Unset:
            if not isinstance(default, Sequence) or isinstance(default, str):
                raise TypeError(f"repeatable {cls.__typename__} 'default' must be a sequence")
            metadata["default"] = tuple(default)

        return _populate(super().__new__(cls), metadata)

    @property
    def primary(self):
        """
        preferred switch spelling: the first long name, else the first name.
        """
        return next((name for name in self._names if name.startswith("--")), self._names[0])

    def resolve_default(self):
        """
        return the value bound when the option is left unbound.
        """
        if self._default is not Unset:
            return self._default
        match self._arity:
            case Arity.FLAG:
                return False
            case Arity.COUNT:
                return 0
            case Arity.MULTI:
                return ()
            case _:
                return None


class PositionalSpec(metaclass=SpecType, sealed=True):
    """
    Positional slot specification.

    Highlights
    - name: identity and result key (a Python identifier).
    - nargs: None (exactly one), "?" (optional), "*" (zero or more) or "+"
      (one or more). Variadic slots absorb every remaining positional value.
    - default: Unset means none; for variadic slots it must be a sequence.
    """

    __introspectable__ = (
        "name",
        "nargs",
        "type",
        "default",
        "choices",
        "domain",
        "metavar",
        "descr",
        "hidden",
    )
    __displayable__ = ("name", "nargs", "type", "default")

    def __new__(
            cls,
            name,
            /,
            type=Unset,
            nargs=None,
            default=Unset,
            choices=(),
            domain=Unset,
            *,
            metavar=Unset,
            descr=Unset,
            hidden=False
    ):
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} 'name' must be a string")
        elif not name.isidentifier():
            raise ValueError(f"{cls.__typename__} 'name' must be an identifier, got {name!r}")
        if nargs not in (None, "?", "*", "+"):
            raise ValueError(f"{cls.__typename__} 'nargs' must be None, '?', '*' or '+'")

        metadata = {
            "name": name,
            "nargs": nargs,
            "type": coalesce(type, ValueType.STRING),
            "default": default,
            "choices": choices,
            "domain": domain,
            "metavar": metavar,
            "descr": descr,
            "hidden": hidden,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_valued_metadata(cls, metadata)

        if nargs in ("*", "+") and default is not Unset:
            if not isinstance(default, Sequence) or isinstance(default, str):
                raise TypeError(f"variadic {cls.__typename__} 'default' must be a sequence")
            metadata["default"] = tuple(default)

        return _populate(super().__new__(cls), metadata)

    @property
    def dest(self):
        return self._name

    @property
    def variadic(self):
        return self._nargs in ("*", "+")

    @property
    def mandatory(self):
        """
        True when binding must supply a value (no default, nargs None or "+").
        """
        return self._nargs in (None, "+") and self._default is Unset

    def resolve_default(self):
        if self._default is not Unset:
            return self._default
        return () if self.variadic else None


class SubcommandSpec(metaclass=SpecType, sealed=True):
    """
    Named route into a nested ArgumentSpec.

    - name/aliases: route words (letters, digits, '-', '_' and '.').
    - spec: the nested ArgumentSpec, owned by this node (no back-pointer).
    - default: entered implicitly when its parent scope ends without routing.
    """

    __introspectable__ = (
        "name",
        "aliases",
        "spec",
        "default",
        "descr",
        "hidden",
    )
    __displayable__ = ("name", "aliases", "default")

    def __new__(cls, name, spec, /, *aliases, default=False, descr=Unset, hidden=False):
        if not isinstance(spec, ArgumentSpec):
            raise TypeError(f"{cls.__typename__} 'spec' must be an argument-spec")

        words = []
        for word in (name, *aliases):
            if not isinstance(word, str):
                raise TypeError(f"{cls.__typename__} names must be strings")
            elif not _ROUTE.fullmatch(word):
                raise ValueError(f"{cls.__typename__} names must be plain words, got {word!r}")
            elif word in words:
                raise ValueError(f"{cls.__typename__} names cannot contain duplicates")
            words.append(word)

        metadata = {
            "name": name,
            "aliases": tuple(aliases),
            "spec": spec,
            "default": bool(default),
            "descr": descr,
            "hidden": hidden,
        }
        _sanitize_metadata(cls, metadata)
        return _populate(super().__new__(cls), metadata)

    @property
    def words(self):
        return (self._name, *self._aliases)


class Constraint(metaclass=SpecType):
    """
    Base for semantic constraints evaluated after binding.

    Targets are given by dest or by any switch name of the same scope; the
    owning ArgumentSpec resolves them to dests (see resolve()). Two
    constraints are equal when kind, targets and companions are equal.
    """

    __introspectable__ = ("kind", "targets", "companions")
    kind = Unset

    def __new__(cls, *unused, **options):
        if cls is Constraint:
            raise TypeError("constraint is abstract; use one of its kinds")
        return super().__new__(cls)

    @classmethod
    def _build(cls, targets, companions=()):
        self = super().__new__(cls)
        for target in (*targets, *companions):
            if not isinstance(target, str) or not target:
                raise TypeError(f"{cls.__typename__} targets must be non-empty strings")
        self._kind = cls.kind
        self._targets = tuple(targets)
        self._companions = tuple(companions)
        return self

    def resolve(self, lookup, /):
        """
        return an equivalent constraint whose targets are dests.

        `lookup` maps any dest or switch name of the scope to its entry.
        """
        def dest(target):
            try:
                return lookup[target].dest
            except KeyError:
                raise ValueError(f"{type(self).__typename__} target {target!r} is not declared in this scope") from None

        return type(self)._build(tuple(map(dest, self._targets)), tuple(map(dest, self._companions)))

    def __eq__(self, other):
        if not isinstance(other, Constraint):
            return NotImplemented
        return (self._kind, self._targets, self._companions) == (other._kind, other._targets, other._companions)

    def __hash__(self):
        return hash((self._kind, self._targets, self._companions))


class Required(Constraint, sealed=True):
    """the target must hold a value after defaulting."""
    kind = ConstraintKind.REQUIRED

    def __new__(cls, target, /):
        return cls._build((target,))


class MutuallyExclusive(Constraint, sealed=True):
    """at most one of the targets may be explicitly set."""
    kind = ConstraintKind.MUTUALLY_EXCLUSIVE

    def __new__(cls, *targets):
        if len(targets) < 2:
            raise TypeError("mutually-exclusive needs at least two targets")
        if len(set(targets)) != len(targets):
            raise ValueError("mutually-exclusive targets cannot contain duplicates")
        return cls._build(targets)


class RequiresAll(Constraint, sealed=True):
    """when the target is explicitly set, every companion must be too."""
    kind = ConstraintKind.REQUIRES_ALL

    def __new__(cls, target, /, *companions):
        if not companions:
            raise TypeError("requires-all needs at least one companion")
        return cls._build((target,), companions)


class RequiresOne(Constraint, sealed=True):
    """when the target is explicitly set, at least one companion must be too."""
    kind = ConstraintKind.REQUIRES_ONE

    def __new__(cls, target, /, *companions):
        if not companions:
            raise TypeError("requires-one needs at least one companion")
        return cls._build((target,), companions)


class Conflicts(Constraint, sealed=True):
    """the two targets cannot both be explicitly set."""
    kind = ConstraintKind.CONFLICTS

    def __new__(cls, target, other, /):
        if target == other:
            raise ValueError("conflicts needs two distinct targets")
        return cls._build((target, other))


def _group(cls, targets):
    if len(targets) < 2:
        raise TypeError(f"{cls.kind.value} needs at least two targets")
    if len(set(targets)) != len(targets):
        raise ValueError(f"{cls.kind.value} targets cannot contain duplicates")
    return cls._build(targets)


def _conditional(cls, target, references):
    if not references:
        raise TypeError(f"{cls.kind.value} needs at least one reference")
    if target in references:
        raise ValueError(f"{cls.kind.value} references cannot contain the target itself")
    return cls._build((target,), references)


class ExactlyOne(Constraint, sealed=True):
    """exactly one of the targets must be explicitly set."""
    kind = ConstraintKind.EXACTLY_ONE

    def __new__(cls, *targets):
        return _group(cls, targets)


class AtLeastOne(Constraint, sealed=True):
    """at least one of the targets must be explicitly set."""
    kind = ConstraintKind.AT_LEAST_ONE

    def __new__(cls, *targets):
        return _group(cls, targets)


class RequiredIfAnyAbsent(Constraint, sealed=True):
    """the target must be explicitly set when any reference is not."""
    kind = ConstraintKind.REQUIRED_IF_ANY_ABSENT

    def __new__(cls, target, /, *references):
        return _conditional(cls, target, references)


class RequiredIfAllAbsent(Constraint, sealed=True):
    """the target must be explicitly set when no reference is."""
    kind = ConstraintKind.REQUIRED_IF_ALL_ABSENT

    def __new__(cls, target, /, *references):
        return _conditional(cls, target, references)


class Settings(metaclass=SpecType, sealed=True):
    """
    Parser configuration carried by every ArgumentSpec.

    - clustering: expand "-abc" into "-a -b -c" (GNU style).
    - negation: prefix of negated flag switches ("no-" -> "--no-color").
    - suggestions: maximum did-you-mean candidates on unknown switches and
      subcommands (0 disables them).
    - cutoff: difflib similarity threshold for suggestions (0..1).
    """

    __introspectable__ = ("clustering", "negation", "suggestions", "cutoff")

    def __new__(cls, *, clustering=True, negation="no-", suggestions=5, cutoff=0.6):
        if not isinstance(negation, str):
            raise TypeError(f"{cls.__typename__} 'negation' must be a string")
        elif not re.fullmatch(r"[^\W\d_][\w-]*", negation):
            raise ValueError(f"{cls.__typename__} 'negation' must be a word prefix like 'no-'")
        if not isinstance(suggestions, int) or isinstance(suggestions, bool) or suggestions < 0:
            raise ValueError(f"{cls.__typename__} 'suggestions' must be a non-negative integer")
        if not isinstance(cutoff, int | float) or not 0 <= cutoff <= 1:
            raise ValueError(f"{cls.__typename__} 'cutoff' must be between 0 and 1")

        return _populate(super().__new__(cls), {
            "clustering": bool(clustering),
            "negation": negation,
            "suggestions": suggestions,
            "cutoff": float(cutoff),
        })


class ArgumentSpec(metaclass=SpecType, sealed=True):
    """
    One scope of a CLI: options, positionals, subcommands and constraints.

    Construction resolves every lookup table the tokenizer and binder need
    and checks the scope invariants; after that the object is read-only and
    safe to share between threads and parse invocations.

    Tables (read-only mappings)
    - switches: every option name and alias -> OptionSpec.
    - negations: every negated switch ("--no-color") -> OptionSpec.
    - entries: every dest -> OptionSpec | PositionalSpec.
    - routes: every subcommand name and alias -> SubcommandSpec.

    constraints
    - implicit Required for required options and mandatory positionals
      (declaration order), then the declared constraints with their targets
      resolved to dests. Duplicates keep their first occurrence.
    """

    __introspectable__ = (
        "prog",
        "version",
        "descr",
        "settings",
        "options",
        "positionals",
        "subcommands",
        "constraints",
        "switches",
        "negations",
        "entries",
        "routes",
    )
    __displayable__ = ("prog", "version", "options", "positionals", "subcommands", "constraints")

    def __new__(
            cls,
            prog,
            /,
            options=(),
            positionals=(),
            subcommands=(),
            constraints=(),
            *,
            version=Unset,
            descr=Unset,
            settings=Unset
    ):
        if not isinstance(prog, str):
            raise TypeError(f"{cls.__typename__} 'prog' must be a string")
        elif not (prog := prog.strip()):
            raise ValueError(f"{cls.__typename__} 'prog' cannot be empty")
        if not isinstance(version, str | Unset):
            raise TypeError(f"{cls.__typename__} 'version' must be a string")
        if not isinstance(settings := coalesce(settings, Settings()), Settings):
            raise TypeError(f"{cls.__typename__} 'settings' must be a settings instance")

        options = tuple(options)
        positionals = tuple(positionals)
        subcommands = tuple(subcommands)

        switches = {}
        negations = {}
        entries = {}
        for option in options:
            if not isinstance(option, OptionSpec):
                raise TypeError(f"{cls.__typename__} options must be option-specs")
            for name in option.names:
                if name in switches or name in negations:
                    raise ValueError(f"{cls.__typename__} switch {name!r} is declared twice")
                switches[name] = option
            if option.negatable:
                negated = tuple(
                    "--" + settings.negation + name[2:] for name in option.names if name.startswith("--")
                )
                if not negated:
                    raise ValueError(f"negatable option {option.dest!r} needs a long name")
                for name in negated:
                    if name in switches or name in negations:
                        raise ValueError(f"{cls.__typename__} switch {name!r} is declared twice")
                    negations[name] = option
            if option.dest in entries:
                raise ValueError(f"{cls.__typename__} dest {option.dest!r} is declared twice")
            entries[option.dest] = option

        optional = False
        for index, positional in enumerate(positionals):
            if not isinstance(positional, PositionalSpec):
                raise TypeError(f"{cls.__typename__} positionals must be positional-specs")
            if positional.dest in entries:
                raise ValueError(f"{cls.__typename__} dest {positional.dest!r} is declared twice")
            if positional.variadic and index != len(positionals) - 1:
                raise ValueError(f"variadic positional {positional.dest!r} must be the last one")
            if positional.nargs in (None, "+") and optional:
                raise ValueError(f"positional {positional.dest!r} cannot follow an optional positional")
            optional |= positional.nargs in ("?", "*")
            entries[positional.dest] = positional

        routes = {}
        default = None
        for subcommand in subcommands:
            if not isinstance(subcommand, SubcommandSpec):
                raise TypeError(f"{cls.__typename__} subcommands must be subcommand-specs")
            for word in subcommand.words:
                if word in routes:
                    raise ValueError(f"{cls.__typename__} subcommand {word!r} is declared twice")
                routes[word] = subcommand
            if subcommand.default:
                if default is not None:
                    raise ValueError(f"{cls.__typename__} cannot declare two default subcommands")
                default = subcommand

        lookup = entries | switches | negations
        resolved = []
        for option in options:
            if option.required:
                resolved.append(Required(option.dest))
        for positional in positionals:
            if positional.mandatory:
                resolved.append(Required(positional.dest))
        for constraint in constraints:
            if not isinstance(constraint, Constraint):
                raise TypeError(f"{cls.__typename__} constraints must be constraint instances")
            if (constraint := constraint.resolve(lookup)) not in resolved:
                resolved.append(constraint)

        return _populate(super().__new__(cls), {
            "prog": prog,
            "version": coalesce(version),
            "descr": coalesce(descr),
            "settings": settings,
            "options": options,
            "positionals": positionals,
            "subcommands": subcommands,
            "constraints": tuple(resolved),
            "switches": switches,
            "negations": negations,
            "entries": entries,
            "routes": routes,
            "fallback": default,
        })

    @property
    def fallback(self):
        """
        the default subcommand of this scope, or None.
        """
        return self._fallback

    def negated(self, option, /):
        """
        negated switch spellings of `option` in this scope ("--no-color"), or ().
        """
        return tuple(name for name, owner in self._negations.items() if owner is option)

    def lookup(self, name, /):
        """
        resolve a dest or any switch name of this scope to its entry.

        raises KeyError when nothing matches.
        """
        if name in self._entries:
            return self._entries[name]
        if name in self._switches:
            return self._switches[name]
        return self._negations[name]

    def is_switch(self, token, /):
        """
        tell whether `token` would be read as a known option of this scope.

        recognizes exact switches, "--name=value" forms and short switches
        with an attached value or cluster ("-ofile", "-vx").
        """
        if token in self._switches or token in self._negations:
            return True
        if token.startswith("--"):
            name = token.partition("=")[0]
            return name in self._switches or name in self._negations
        if token.startswith("-") and len(token) > 2:
            return token[:2] in self._switches
        return False


__all__ = (
    "Arity",
    "ValueType",
    "Interval",
    "Settings",
    "OptionSpec",
    "PositionalSpec",
    "SubcommandSpec",
    "Constraint",
    "Required",
    "MutuallyExclusive",
    "RequiresAll",
    "RequiresOne",
    "Conflicts",
    "ExactlyOne",
    "AtLeastOne",
    "RequiredIfAnyAbsent",
    "RequiredIfAllAbsent",
    "ArgumentSpec",
    "TRUE_LITERALS",
    "FALSE_LITERALS",
)

# Remove the internal metaclass from the module namespace; it is not part of the public API.
del SpecType
