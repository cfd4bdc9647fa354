"""
Argosy faults (binding errors and constraint violations).

Scope
- FaultCode: canonical, stable numeric identifiers for every reportable issue.
  Codes are grouped by domain so logs and searches stay predictable.
- BindingError: base exception for structural/lexical failures raised while
  binding argv tokens. Binding is fail-fast, so exactly one is raised per
  invocation and no partial result is returned.
- ConstraintViolation: record for a semantic rule failure found after a
  successful bind. Violations are collected exhaustively, never raised one
  by one.
- ConstraintError: exception wrapping the ordered violations for callers
  that prefer raise-on-failure over inspecting a tuple.

Structured, not formatted
- Every fault carries its code, the target identity, the offending raw token
  and its argv index (where applicable) and the scope path, so a caller can
  render it in any format or locale.
- __rich__ is provided as a convenience for hosts printing with rich; the
  library itself never prints and never exits.

Integration
- Host applications may expose a __codes__ mapping in __main__ to relabel
  numeric codes (see FaultCode.normalize).
"""
from collections import namedtuple
from enum import Enum, IntEnum
from types import MappingProxyType

from rich.text import Text

from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes used across the engine (stable identifiers).

    grouping (by high-level domain)
    - routing (1110x)
      • UNKNOWN_SUBCOMMAND
    - switches (1111x)
      • UNKNOWN_OPTION, MISSING_VALUE
    - values and positionals (1112x)
      • EXTRA_POSITIONAL, TYPE_CONVERSION
    - constraints (1310x)
      • REQUIRED, MUTUALLY_EXCLUSIVE, REQUIRES_ALL, REQUIRES_ONE, CONFLICTS,
        OUT_OF_DOMAIN, EXACTLY_ONE, AT_LEAST_ONE, REQUIRED_IF_ANY_ABSENT,
        REQUIRED_IF_ALL_ABSENT

    rationale
    - spacing leaves room for future additions without reshuffling codes.
    - normalize() lets hosts remap codes to their own labels.
    """
    # --- routing errors (11xxx) ---
    UNKNOWN_SUBCOMMAND          = 11102

    # --- switch errors (11xxx) ---
    UNKNOWN_OPTION              = 11112
    MISSING_VALUE               = 11117

    # --- value/positional errors (11xxx) ---
    EXTRA_POSITIONAL            = 11121
    TYPE_CONVERSION             = 11126

    # --- constraint violations (13xxx) ---
    REQUIRED                    = 13101
    MUTUALLY_EXCLUSIVE          = 13102
    REQUIRES_ALL                = 13103
    REQUIRES_ONE                = 13104
    CONFLICTS                   = 13105
    OUT_OF_DOMAIN               = 13106
    EXACTLY_ONE                 = 13107
    AT_LEAST_ONE                = 13108
    REQUIRED_IF_ANY_ABSENT      = 13109
    REQUIRED_IF_ALL_ABSENT      = 13110

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ConstraintKind(Enum):
    """
    kinds of semantic constraints evaluated by the validator.

    each kind maps onto the fault code reported for its violations.
    """
    REQUIRED = "required"
    MUTUALLY_EXCLUSIVE = "mutually-exclusive"
    REQUIRES_ALL = "requires-all"
    REQUIRES_ONE = "requires-one"
    CONFLICTS = "conflicts"
    EXACTLY_ONE = "exactly-one"
    AT_LEAST_ONE = "at-least-one"
    REQUIRED_IF_ANY_ABSENT = "required-if-any-absent"
    REQUIRED_IF_ALL_ABSENT = "required-if-all-absent"
    DOMAIN = "domain"

    @property
    def code(self):
        return _CODES[self]


_CODES = {
    ConstraintKind.REQUIRED: FaultCode.REQUIRED,
    ConstraintKind.MUTUALLY_EXCLUSIVE: FaultCode.MUTUALLY_EXCLUSIVE,
    ConstraintKind.REQUIRES_ALL: FaultCode.REQUIRES_ALL,
    ConstraintKind.REQUIRES_ONE: FaultCode.REQUIRES_ONE,
    ConstraintKind.CONFLICTS: FaultCode.CONFLICTS,
    ConstraintKind.EXACTLY_ONE: FaultCode.EXACTLY_ONE,
    ConstraintKind.AT_LEAST_ONE: FaultCode.AT_LEAST_ONE,
    ConstraintKind.REQUIRED_IF_ANY_ABSENT: FaultCode.REQUIRED_IF_ANY_ABSENT,
    ConstraintKind.REQUIRED_IF_ALL_ABSENT: FaultCode.REQUIRED_IF_ALL_ABSENT,
    ConstraintKind.DOMAIN: FaultCode.OUT_OF_DOMAIN,
}


def _header(code, title):
    return Text.assemble("[", (code.normalize(), "bold cyan"), " | ", (title, "bold magenta"), "]")


class BindingError(Exception):
    """
    base type for fail-fast binding errors.

    options (all keyword, exposed read-only through `options` and properties)
    - code: FaultCode of the failure.
    - target: identity (dest) of the option/positional involved, if any.
    - token: offending raw argv token, if any.
    - index: zero-based argv index of the token, if any.
    - scope: tuple of subcommand names leading to the active scope.
    - suggestions: did-you-mean candidates (unknown option/subcommand only).
    """
    code = Unset

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        options.setdefault("code", type(self).code)
        options.setdefault("scope", ())
        options.setdefault("suggestions", ())
        super().__init__(message if message is not Unset else type(self).__name__)
        self.message = message
        self.options = MappingProxyType(options)

    def __getattr__(self, name):
        try:
            return self.__dict__["options"][name]
        except KeyError:
            if name in ("target", "token", "index", "value"):
                return None
            raise AttributeError(name) from None

    def __reduce__(self):
        return _rebuild, (type(self), self.message, dict(self.options))

    def __rich__(self):
        title = type(self).__name__.removesuffix("Error")
        where = " in '%s'" % " ".join(self.scope) if self.scope else ""
        return Text.assemble(
            _header(self.options["code"], title),
            " ",
            self.message if self.message is not Unset else "",
            (where, "dim"),
        )


def _rebuild(cls, message, options):
    return cls(message, **options)


class UnknownOptionError(BindingError):
    code = FaultCode.UNKNOWN_OPTION


class MissingValueError(BindingError):
    code = FaultCode.MISSING_VALUE


class TypeConversionError(BindingError):
    code = FaultCode.TYPE_CONVERSION


class ExtraPositionalError(BindingError):
    code = FaultCode.EXTRA_POSITIONAL


class UnknownSubcommandError(BindingError):
    code = FaultCode.UNKNOWN_SUBCOMMAND


class ConstraintViolation(namedtuple("ConstraintViolation", ("kind", "targets", "companions", "scope", "value"))):
    """
    semantic rule failure detected after a successful bind.

    fields
    - kind: ConstraintKind of the violated constraint.
    - targets: tuple of dests the constraint is about (for MutuallyExclusive,
      Conflicts and an over-filled ExactlyOne, the ones that were explicitly
      set).
    - companions: tuple of companion dests (RequiresAll/RequiresOne) or of
      the absent references (RequiredIf*Absent), else ().
    - scope: tuple of subcommand names of the scope owning the constraint.
    - value: offending value for domain violations, else None.
    """
    __slots__ = ()

    def __new__(cls, kind, targets, companions=(), scope=(), value=None):
        return super().__new__(cls, kind, tuple(targets), tuple(companions), tuple(scope), value)

    @property
    def code(self):
        return self.kind.code

    def __rich__(self):
        body = ", ".join(self.targets)
        if self.companions:
            body += " -> " + ", ".join(self.companions)
        if self.value is not None:
            body += " = %r" % (self.value,)
        where = " in '%s'" % " ".join(self.scope) if self.scope else ""
        return Text.assemble(_header(self.code, self.kind.value), " ", body, (where, "dim"))


class ConstraintError(Exception):
    """
    raised by argosy.parse() when validation reports violations.

    the ordered violations are available as `violations`; the result that
    failed validation is available as `result` for hosts that still want to
    inspect what was bound.
    """

    def __init__(self, violations, /, result=None):
        self.violations = tuple(violations)
        self.result = result
        super().__init__("%d constraint violation(s)" % len(self.violations))

    def __rich__(self):
        return Text("\n").join(violation.__rich__() for violation in self.violations)


__all__ = (
    "FaultCode",
    "ConstraintKind",
    "BindingError",
    "UnknownOptionError",
    "MissingValueError",
    "TypeConversionError",
    "ExtraPositionalError",
    "UnknownSubcommandError",
    "ConstraintViolation",
    "ConstraintError",
)
