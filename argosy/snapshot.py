"""
Argosy snapshots: serializable structural projection of an ArgumentSpec.

Overview
- A Snapshot is a frozen pydantic tree that mirrors a spec without referring
  to it: every switch string, negated switch, resolved default (rendered to
  the canonical string the binder accepts), choice, domain and constraint is
  copied in. Tooling (completion generators, help renderers, caches) reads
  snapshots, so it never depends on the live spec object.
- Snapshots round-trip through JSON (to_json/from_json) unchanged.
- snapshot(spec) builds the projection once per live spec; the cache holds
  specs weakly, so specs built on the fly are not kept alive by it.

Canonical argv
- canonical() goes the other way for a ParseResult: it re-serializes the
  user-supplied values to an argv that binds back to an equal result.

Public API
- Models: Snapshot, OptionInfo, PositionalInfo, ConstraintInfo,
  SubcommandInfo, SettingsInfo, DomainInfo
- snapshot(spec), canonical(snapshot, result)
"""
from __future__ import annotations

import logging
import weakref
from typing import Literal

from pydantic import BaseModel, Field
from rich.text import Text

from .binder import ValueSource
from .faults import ConstraintKind
from .specs import Arity, Interval, ValueType

logger = logging.getLogger(__name__)


class DomainInfo(BaseModel):
    """
    allowed values: a set of rendered members, or an inclusive interval.
    """
    model_config = {"frozen": True}

    kind: Literal["set", "interval"]
    values: tuple[str, ...] = ()
    low: str | None = None
    high: str | None = None


class SettingsInfo(BaseModel):
    model_config = {"frozen": True}

    clustering: bool = True
    negation: str = "no-"
    suggestions: int = 5
    cutoff: float = 0.6


class OptionInfo(BaseModel):
    """
    one option: switch strings, arity, type and rendered default.

    `primary` is the preferred switch (the first long name, else the first
    short one); canonical argv always uses it.
    """
    model_config = {"frozen": True}

    names: tuple[str, ...]
    negations: tuple[str, ...] = ()
    dest: str
    arity: Arity
    type: ValueType
    default: str | tuple[str, ...] | None = None
    choices: tuple[str, ...] = ()
    domain: DomainInfo | None = None
    required: bool = False
    env: str | None = None
    metavar: str | None = None
    descr: str | None = None
    hidden: bool = False

    @property
    def primary(self):
        return next((name for name in self.names if name.startswith("--")), self.names[0])

    @property
    def takes_value(self):
        return self.arity.takes_value


class PositionalInfo(BaseModel):
    model_config = {"frozen": True}

    name: str
    nargs: Literal["?", "*", "+"] | None = None
    type: ValueType = ValueType.STRING
    default: str | tuple[str, ...] | None = None
    choices: tuple[str, ...] = ()
    domain: DomainInfo | None = None
    metavar: str | None = None
    descr: str | None = None
    hidden: bool = False

    @property
    def variadic(self):
        return self.nargs in ("*", "+")


class ConstraintInfo(BaseModel):
    model_config = {"frozen": True}

    kind: ConstraintKind
    targets: tuple[str, ...]
    companions: tuple[str, ...] = ()


class SubcommandInfo(BaseModel):
    model_config = {"frozen": True}

    name: str
    aliases: tuple[str, ...] = ()
    default: bool = False
    descr: str | None = None
    hidden: bool = False
    snapshot: Snapshot

    @property
    def words(self):
        return (self.name, *self.aliases)


class Snapshot(BaseModel):
    """
    frozen, cycle-free projection of one scope and its subcommand tree.

    navigation
    - route(word): subcommand reachable by a name or alias, else None.
    - find(path): nested snapshot at a path of names or aliases; KeyError
      when a word does not route.
    - walk(): (path, snapshot) for this scope and every nested one, depth
      first in declaration order.
    - option(dest): the option bound to `dest`, else None.
    """
    model_config = {"frozen": True}

    prog: str
    version: str | None = None
    descr: str | None = None
    settings: SettingsInfo = Field(default_factory=SettingsInfo)
    options: tuple[OptionInfo, ...] = ()
    positionals: tuple[PositionalInfo, ...] = ()
    constraints: tuple[ConstraintInfo, ...] = ()
    subcommands: dict[str, SubcommandInfo] = Field(default_factory=dict)

    def to_json(self, indent=None):
        return self.model_dump_json(indent=indent)

    @classmethod
    def from_json(cls, data, /):
        return cls.model_validate_json(data)

    def route(self, word, /):
        for subcommand in self.subcommands.values():
            if word in subcommand.words:
                return subcommand
        return None

    def find(self, path, /):
        node = self
        for word in path:
            if (subcommand := node.route(word)) is None:
                raise KeyError(" ".join(path))
            node = subcommand.snapshot
        return node

    def walk(self, path=()):
        yield path, self
        for name, subcommand in self.subcommands.items():
            yield from subcommand.snapshot.walk((*path, name))

    def option(self, dest, /):
        return next((option for option in self.options if option.dest == dest), None)


SubcommandInfo.model_rebuild()


def _text(descr):
    return descr.plain if isinstance(descr, Text) else descr


def _render(type, value):
    if value is None:
        return None
    if isinstance(value, tuple):
        return tuple(type.render(member) for member in value)
    return type.render(value)


def _domain(type, domain):
    if domain is None:
        return None
    if isinstance(domain, Interval):
        return DomainInfo(
            kind="interval",
            low=None if domain.low is None else type.render(domain.low),
            high=None if domain.high is None else type.render(domain.high),
        )
    values = [type.render(member) for member in domain]
    # Sets have no stable iteration order across interpreter runs.
    return DomainInfo(kind="set", values=tuple(sorted(values) if isinstance(domain, frozenset) else values))


def _project(spec):
    options = tuple(
        OptionInfo(
            names=option.names,
            negations=spec.negated(option),
            dest=option.dest,
            arity=option.arity,
            type=option.type,
            default=_render(option.type, option.resolve_default()),
            choices=tuple(map(str, option.choices)),
            domain=_domain(option.type, option.domain),
            required=option.required,
            env=option.env,
            metavar=option.metavar,
            descr=_text(option.descr),
            hidden=option.hidden,
        )
        for option in spec.options
    )
    positionals = tuple(
        PositionalInfo(
            name=positional.name,
            nargs=positional.nargs,
            type=positional.type,
            default=_render(positional.type, positional.resolve_default()),
            choices=tuple(map(str, positional.choices)),
            domain=_domain(positional.type, positional.domain),
            metavar=positional.metavar,
            descr=_text(positional.descr),
            hidden=positional.hidden,
        )
        for positional in spec.positionals
    )
    constraints = tuple(
        ConstraintInfo(kind=constraint.kind, targets=constraint.targets, companions=constraint.companions)
        for constraint in spec.constraints
    )
    subcommands = {
        subcommand.name: SubcommandInfo(
            name=subcommand.name,
            aliases=subcommand.aliases,
            default=subcommand.default,
            descr=_text(subcommand.descr),
            hidden=subcommand.hidden,
            snapshot=snapshot(subcommand.spec),
        )
        for subcommand in spec.subcommands
    }
    settings = spec.settings
    return Snapshot(
        prog=spec.prog,
        version=spec.version,
        descr=_text(spec.descr),
        settings=SettingsInfo(
            clustering=settings.clustering,
            negation=settings.negation,
            suggestions=settings.suggestions,
            cutoff=settings.cutoff,
        ),
        options=options,
        positionals=positionals,
        constraints=constraints,
        subcommands=subcommands,
    )


_SNAPSHOTS = weakref.WeakKeyDictionary()


def snapshot(spec, /):
    """
    return the Snapshot of `spec` and its subcommand tree.

    the projection is built once per spec object and reused while the spec
    is alive.
    """
    try:
        return _SNAPSHOTS[spec]
    except KeyError:
        pass
    logger.debug("building snapshot for %s", spec.prog)
    result = _SNAPSHOTS[spec] = _project(spec)
    return result


def _switches(option, value):
    name = option.primary
    match option.arity:
        case Arity.FLAG:
            if value:
                return [name]
            return [option.negations[0]] if option.negations else [f"{name}=false"]
        case Arity.MULTI:
            return [f"{name}={option.type.render(member)}" for member in value]
        case _:
            return [f"{name}={option.type.render(value)}"]


def canonical(snapshot, result, /):
    """
    re-serialize the user-supplied values of `result` to argv.

    rules
    - options are emitted per scope in declaration order with their primary
      switch and inline values.
    - a subcommand name is emitted unless its scope was entered implicitly
      and nothing in it (or below it) came from the user.
    - the leaf positionals and the leftovers follow a "--" separator.
    - defaults and environment values are never emitted.

    binding the returned argv against the same spec yields an equal result.
    """
    def user(depth):
        return any(
            source is ValueSource.USER for bindings in result.scopes[depth:] for source in bindings.sources.values()
        )

    argv = []
    node = snapshot
    for depth, bindings in enumerate(result.scopes):
        if depth:
            node = node.subcommands[bindings.name].snapshot
            if not bindings.implicit or user(depth):
                argv.append(bindings.name)
        for option in node.options:
            if bindings.sources.get(option.dest) is ValueSource.USER:
                argv.extend(_switches(option, bindings[option.dest]))

    tail = []
    leaf = result.leaf
    for positional in node.positionals:
        if leaf.sources.get(positional.name) is ValueSource.USER:
            value = leaf[positional.name]
            if positional.variadic:
                tail.extend(positional.type.render(member) for member in value)
            else:
                tail.append(positional.type.render(value))
    tail.extend(result.leftovers)
    if tail:
        argv.extend(["--", *tail])
    return argv


__all__ = (
    "Snapshot",
    "OptionInfo",
    "PositionalInfo",
    "ConstraintInfo",
    "SubcommandInfo",
    "SettingsInfo",
    "DomainInfo",
    "snapshot",
    "canonical",
)
