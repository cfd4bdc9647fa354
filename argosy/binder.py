r"""
Argosy binder: turn argv into a ParseResult against an ArgumentSpec.

Overview
- Binding walks the token stream left to right, starting at the root scope.
  Every subcommand switch pushes a new scope (its Bindings) and rescopes the
  tokenizer, so root options are unknown once a subcommand is entered.
- Binding is fail-fast: the first structural problem raises a BindingError
  subclass and no partial result is returned.

Routing
- A VALUE token routes while no positional of the active scope has been
  filled; a matching subcommand wins over an unfilled positional.
- A VALUE that matches no route at a scope declaring subcommands but no
  positionals enters the default subcommand (implicitly) and is bound again
  there; without a default subcommand it is an unknown subcommand.
- At the end of input, a scope that can still route descends into its default
  subcommand, recursively.

Values
- FLAG: True when present, False when negated; an inline boolean literal
  ("--color=off") is accepted.
- COUNT: each occurrence increments; an inline integer ("--verbose=3") sets
  the count.
- SINGLE: last occurrence wins. MULTI: values accumulate in order.
- Positionals fill their slots in declaration order; a variadic slot absorbs
  every remaining value. Tokens after "--" fill open slots too and overflow
  into leftovers.

Finalization (every scope, root to leaf)
- unbound options with an `env` name take the environment value
  (ValueSource.ENVIRONMENT; repeatables split on os.pathsep),
- then declared defaults (ValueSource.DEFAULT),
- then implicit values (False, 0, (), None) with ValueSource.MISSING.

Public API
- ValueSource, Bindings, ParseResult, Binder, bind(spec, arguments)
"""
import logging
import os
from enum import Enum
from types import MappingProxyType

from .faults import *
from .specs import Arity, OptionSpec, ValueType
from .tokens import *
from .utils import *

logger = logging.getLogger(__name__)


class ValueSource(Enum):
    """
    where a bound value came from.

    USER and ENVIRONMENT count as "explicitly set" for constraints.
    """
    USER = "user"
    ENVIRONMENT = "environment"
    DEFAULT = "default"
    MISSING = "missing"

    @property
    def explicit(self):
        return self in (ValueSource.USER, ValueSource.ENVIRONMENT)


class Bindings:
    """
    values bound within one scope.

    attributes
    - name: subcommand name that opened the scope (the program name for root).
    - spec: the scope's ArgumentSpec.
    - values: read-only mapping dest -> typed value, for every declared entry.
    - sources: read-only mapping dest -> ValueSource.
    - implicit: True when the scope is a default subcommand entered without
      its name on the command line.
    """
    __slots__ = ("name", "spec", "values", "sources", "implicit")

    def __init__(self, name, spec, values, sources, /, implicit=False):
        self.name = name
        self.spec = spec
        self.values = MappingProxyType(dict(values))
        self.sources = MappingProxyType(dict(sources))
        self.implicit = implicit

    def __getitem__(self, dest):
        return self.values[dest]

    def __contains__(self, dest):
        return dest in self.values

    def __iter__(self):
        return iter(self.values)

    def __len__(self):
        return len(self.values)

    def __eq__(self, other):
        if not isinstance(other, Bindings):
            return NotImplemented
        return (self.name, dict(self.values), dict(self.sources)) == (other.name, dict(other.values), dict(other.sources))

    __hash__ = None

    def __repr__(self):
        return "bindings(name=%r, values=%r, implicit=%r)" % (self.name, dict(self.values), self.implicit)


class ParseResult:
    """
    outcome of one successful bind.

    - path: subcommand names from root to leaf (root excluded).
    - scopes: one Bindings per scope, root first.
    - leftovers: raw tokens after "--" that no positional slot absorbed.

    result[dest] looks the dest up from the leaf scope towards the root, so a
    subcommand option shadows a root option with the same dest. Two results
    are equal when their paths, per-scope values and sources, and leftovers
    are equal.
    """

    def __init__(self, scopes, leftovers=(), /):
        self.scopes = tuple(scopes)
        self.leftovers = tuple(leftovers)

    @property
    def path(self):
        return tuple(scope.name for scope in self.scopes[1:])

    @property
    def root(self):
        return self.scopes[0]

    @property
    def leaf(self):
        return self.scopes[-1]

    def _find(self, dest):
        for scope in reversed(self.scopes):
            if dest in scope:
                return scope
        raise KeyError(dest)

    def __getitem__(self, dest):
        return self._find(dest)[dest]

    def __contains__(self, dest):
        return any(dest in scope for scope in self.scopes)

    def get(self, dest, default=None):
        try:
            return self[dest]
        except KeyError:
            return default

    def source(self, dest):
        """
        ValueSource of `dest` (leaf-first lookup); KeyError when undeclared.
        """
        return self._find(dest).sources[dest]

    def to_dict(self):
        """
        flatten every scope into one dict (leaf values shadow root values).
        """
        flattened = {}
        for scope in self.scopes:
            flattened.update(scope.values)
        return flattened

    def __eq__(self, other):
        if not isinstance(other, ParseResult):
            return NotImplemented
        return (self.path, self.scopes, self.leftovers) == (other.path, other.scopes, other.leftovers)

    __hash__ = None

    def __repr__(self):
        return "parse-result(path=%r, values=%r, leftovers=%r)" % (self.path, self.to_dict(), self.leftovers)


class _Scope:
    # Mutable per-scope state while binding; frozen into Bindings at the end.
    __slots__ = ("name", "spec", "implicit", "values", "sources", "slot", "filled")

    def __init__(self, name, spec, implicit=False):
        self.name = name
        self.spec = spec
        self.implicit = implicit
        self.values = {}
        self.sources = {}
        self.slot = 0
        self.filled = False

    @property
    def routable(self):
        return bool(self.spec.routes) and not self.filled

    def freeze(self):
        return Bindings(self.name, self.spec, self.values, self.sources, implicit=self.implicit)


class Binder:
    """
    one binding run of `spec` over `arguments`.

    parameters
    - spec: root ArgumentSpec.
    - environ: mapping consulted for options declaring `env` (defaults to
      os.environ). The binder only reads it.
    """

    def __init__(self, spec, /, environ=Unset):
        self._spec = spec
        self._environ = coalesce(environ, os.environ)
        self._scopes = []
        self._leftovers = []
        self._tokens = None

    @property
    def _scope(self):
        return self._scopes[-1]

    @property
    def _path(self):
        return tuple(scope.name for scope in self._scopes[1:])

    def bind(self, arguments, /):
        """
        bind `arguments` (argv without the program name) and return a
        ParseResult; raises a BindingError subclass on the first failure.
        """
        self._scopes = [_Scope(self._spec.prog, self._spec)]
        self._leftovers = []
        self._tokens = Tokenizer(list(arguments), self._spec)

        for token in self._tokens:
            match token.kind:
                case TokenKind.SEPARATOR:
                    continue
                case TokenKind.UNKNOWN:
                    self._unknown(token)
                case TokenKind.LONG | TokenKind.SHORT:
                    self._option(token)
                case TokenKind.TAIL:
                    if not self._fill(token):
                        self._leftovers.append(token.raw)
                case TokenKind.VALUE:
                    self._value(token)

        while self._scope.routable and (fallback := self._scope.spec.fallback) is not None:
            self._enter(fallback, implicit=True)

        for scope in self._scopes:
            self._finalize(scope)

        result = ParseResult([scope.freeze() for scope in self._scopes], self._leftovers)
        logger.debug("bound path=%s leftovers=%d", " ".join(result.path) or "-", len(result.leftovers))
        return result

    def _enter(self, subcommand, /, implicit=False):
        logger.debug("entering subcommand %s (implicit=%s)", subcommand.name, implicit)
        self._scopes.append(_Scope(subcommand.name, subcommand.spec, implicit))
        self._tokens.rescope(subcommand.spec)

    def _unknown(self, token):
        spec = self._scope.spec
        raise UnknownOptionError(
            "unknown option %r at %s position" % (token.name, ordinal(token.index + 1)),
            target=None,
            token=token.raw,
            index=token.index,
            scope=self._path,
            suggestions=tuple(suggest(
                token.name,
                [*spec.switches, *spec.negations],
                limit=spec.settings.suggestions,
                cutoff=spec.settings.cutoff,
            )),
        )

    def _convert(self, entry, raw, token, /, type=Unset):
        type = coalesce(type, entry.type)
        try:
            return type.convert(raw, entry.choices)
        except ValueError as error:
            settings = self._scope.spec.settings
            raise TypeConversionError(
                "invalid %s value %r for %r at %s position: %s" % (
                    type.value, raw, token.name or entry.dest, ordinal(token.index + 1), error
                ),
                target=entry.dest,
                token=token.raw,
                index=token.index,
                value=raw,
                scope=self._path,
                suggestions=tuple(suggest(
                    raw, map(str, entry.choices), limit=settings.suggestions, cutoff=settings.cutoff
                )),
            ) from None

    def _option(self, token):
        scope = self._scope
        option = scope.spec.lookup(token.name)
        dest = option.dest

        match option.arity:
            case Arity.FLAG:
                if token.negated:
                    if token.value is not Unset:
                        raise TypeConversionError(
                            "negated flag %r at %s position takes no value" % (token.name, ordinal(token.index + 1)),
                            target=dest,
                            token=token.raw,
                            index=token.index,
                            value=token.value,
                            scope=self._path,
                        )
                    value = False
                elif token.value is Unset:
                    value = True
                else:
                    value = self._convert(option, token.value, token)
            case Arity.COUNT:
                if token.value is Unset:
                    value = (scope.values[dest] if scope.sources.get(dest) is ValueSource.USER else 0) + 1
                elif (value := self._convert(option, token.value, token)) < 0:
                    raise TypeConversionError(
                        "count %r at %s position cannot be negative" % (token.name, ordinal(token.index + 1)),
                        target=dest,
                        token=token.raw,
                        index=token.index,
                        value=token.value,
                        scope=self._path,
                    )
            case _:
                if token.value is Unset:
                    raise MissingValueError(
                        "option %r at %s position expects a value" % (token.name, ordinal(token.index + 1)),
                        target=dest,
                        token=token.raw,
                        index=token.index,
                        scope=self._path,
                    )
                value = self._convert(option, token.value, token)
                if option.arity is Arity.MULTI:
                    previous = scope.values[dest] if scope.sources.get(dest) is ValueSource.USER else []
                    value = [*previous, value]

        scope.values[dest] = value
        scope.sources[dest] = ValueSource.USER
        logger.debug("bound option %s=%r", dest, value)

    def _value(self, token):
        scope = self._scope
        spec = scope.spec
        if scope.routable:
            if (subcommand := spec.routes.get(token.value)) is not None:
                return self._enter(subcommand)
            if not spec.positionals:
                if spec.fallback is not None:
                    self._enter(spec.fallback, implicit=True)
                    return self._value(token)
                raise UnknownSubcommandError(
                    "unknown subcommand %r at %s position" % (token.value, ordinal(token.index + 1)),
                    token=token.raw,
                    index=token.index,
                    scope=self._path,
                    suggestions=tuple(suggest(
                        token.value,
                        [word for word, route in spec.routes.items() if not route.hidden],
                        limit=spec.settings.suggestions,
                        cutoff=spec.settings.cutoff,
                    )),
                )
        if not self._fill(token):
            raise ExtraPositionalError(
                "unexpected positional argument %r at %s position" % (token.value, ordinal(token.index + 1)),
                token=token.raw,
                index=token.index,
                value=token.value,
                scope=self._path,
            )

    def _fill(self, token):
        # Bind a value to the next open positional slot; False when none is left.
        scope = self._scope
        positionals = scope.spec.positionals
        if scope.slot >= len(positionals):
            return False

        positional = positionals[scope.slot]
        value = self._convert(positional, token.value, token)
        if positional.variadic:
            scope.values.setdefault(positional.dest, []).append(value)
        else:
            scope.values[positional.dest] = value
            scope.slot += 1
        scope.sources[positional.dest] = ValueSource.USER
        scope.filled = True
        logger.debug("bound positional %s=%r", positional.dest, value)
        return True

    def _environment(self, option, raw):
        # Convert an environment override with the option's arity rules.
        try:
            match option.arity:
                case Arity.MULTI:
                    return tuple(option.type.convert(part, option.choices) for part in raw.split(os.pathsep) if part)
                case Arity.COUNT:
                    if (value := ValueType.INT.convert(raw)) < 0:
                        raise ValueError("count cannot be negative")
                    return value
                case _:
                    return option.type.convert(raw, option.choices)
        except ValueError as error:
            raise TypeConversionError(
                "invalid %s value %r for %r from environment variable %s: %s" % (
                    option.type.value, raw, option.dest, option.env, error
                ),
                target=option.dest,
                token="%s=%s" % (option.env, raw),
                value=raw,
                scope=self._path,
            ) from None

    def _finalize(self, scope):
        spec = scope.spec
        for entry in (*spec.options, *spec.positionals):
            dest = entry.dest
            if scope.sources.get(dest) is ValueSource.USER:
                if isinstance(scope.values[dest], list):
                    scope.values[dest] = tuple(scope.values[dest])
                continue
            if isinstance(entry, OptionSpec) and entry.env is not None and entry.env in self._environ:
                scope.values[dest] = self._environment(entry, self._environ[entry.env])
                scope.sources[dest] = ValueSource.ENVIRONMENT
            elif entry.default is not Unset:
                scope.values[dest] = entry.default
                scope.sources[dest] = ValueSource.DEFAULT
            else:
                scope.values[dest] = entry.resolve_default()
                scope.sources[dest] = ValueSource.MISSING


def bind(spec, arguments, /, environ=Unset):
    """
    bind `arguments` against `spec`; see Binder.bind().
    """
    return Binder(spec, environ=environ).bind(arguments)


__all__ = (
    "ValueSource",
    "Bindings",
    "ParseResult",
    "Binder",
    "bind",
)
