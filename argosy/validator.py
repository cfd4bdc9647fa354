"""
Argosy validator: evaluate constraints against a ParseResult.

Scope
- Runs after a successful bind; never raises for rule failures. Every
  violation is collected so a caller can report them all at once.

Order
- Scopes from root to leaf.
- Within a scope: constraints in declaration order (implicit Required
  constraints first, see ArgumentSpec), then domain checks for explicitly
  set values in declaration order (options, then positionals).

Semantics
- "explicitly set" means a USER or ENVIRONMENT source; defaults never count.
- Required: the target is still MISSING after defaulting.
- MutuallyExclusive: more than one target explicitly set (the violation
  lists the ones that were).
- RequiresAll: target explicitly set, at least one companion is not.
- RequiresOne: target explicitly set, no companion is.
- Conflicts: both targets explicitly set.
- ExactlyOne: zero or several targets explicitly set (the violation lists
  the ones that were, or every target when none was).
- AtLeastOne: no target explicitly set.
- RequiredIfAnyAbsent: target not explicitly set while at least one
  reference is not either (the violation lists the absent references).
- RequiredIfAllAbsent: target not explicitly set while no reference is.
- Domain: an explicitly set value (or element of a repeatable value) falls
  outside the declared set or interval.
"""
import logging

from .binder import ValueSource
from .faults import ConstraintKind, ConstraintViolation

logger = logging.getLogger(__name__)


def _explicit(bindings, dest):
    return bindings.sources[dest].explicit


def _check(constraint, bindings, scope):
    match constraint.kind:
        case ConstraintKind.REQUIRED:
            target, = constraint.targets
            if bindings.sources[target] is ValueSource.MISSING:
                yield ConstraintViolation(constraint.kind, (target,), scope=scope)
        case ConstraintKind.MUTUALLY_EXCLUSIVE:
            if len(present := [dest for dest in constraint.targets if _explicit(bindings, dest)]) > 1:
                yield ConstraintViolation(constraint.kind, present, scope=scope)
        case ConstraintKind.REQUIRES_ALL:
            target, = constraint.targets
            if _explicit(bindings, target):
                if missing := [dest for dest in constraint.companions if not _explicit(bindings, dest)]:
                    yield ConstraintViolation(constraint.kind, (target,), missing, scope=scope)
        case ConstraintKind.REQUIRES_ONE:
            target, = constraint.targets
            if _explicit(bindings, target) and not any(_explicit(bindings, dest) for dest in constraint.companions):
                yield ConstraintViolation(constraint.kind, (target,), constraint.companions, scope=scope)
        case ConstraintKind.CONFLICTS:
            if all(_explicit(bindings, dest) for dest in constraint.targets):
                yield ConstraintViolation(constraint.kind, constraint.targets, scope=scope)
        case ConstraintKind.EXACTLY_ONE:
            present = [dest for dest in constraint.targets if _explicit(bindings, dest)]
            if len(present) != 1:
                yield ConstraintViolation(constraint.kind, present or constraint.targets, scope=scope)
        case ConstraintKind.AT_LEAST_ONE:
            if not any(_explicit(bindings, dest) for dest in constraint.targets):
                yield ConstraintViolation(constraint.kind, constraint.targets, scope=scope)
        case ConstraintKind.REQUIRED_IF_ANY_ABSENT | ConstraintKind.REQUIRED_IF_ALL_ABSENT:
            target, = constraint.targets
            absent = [dest for dest in constraint.companions if not _explicit(bindings, dest)]
            if constraint.kind is ConstraintKind.REQUIRED_IF_ANY_ABSENT:
                triggered = bool(absent)
            else:
                triggered = len(absent) == len(constraint.companions)
            if triggered and not _explicit(bindings, target):
                yield ConstraintViolation(constraint.kind, (target,), absent, scope=scope)


def _domain(entry, bindings, scope):
    if entry.domain is None or not _explicit(bindings, entry.dest):
        return
    value = bindings[entry.dest]
    for member in value if isinstance(value, tuple) else (value,):
        if member not in entry.domain:
            yield ConstraintViolation(ConstraintKind.DOMAIN, (entry.dest,), scope=scope, value=member)


def validate(result, /):
    """
    return the ordered tuple of violations for `result` (empty when valid).
    """
    violations = []
    for depth, bindings in enumerate(result.scopes):
        scope = result.path[:depth]
        for constraint in bindings.spec.constraints:
            violations.extend(_check(constraint, bindings, scope))
        for entry in (*bindings.spec.options, *bindings.spec.positionals):
            violations.extend(_domain(entry, bindings, scope))

    logger.debug("validated path=%s violations=%d", " ".join(result.path) or "-", len(violations))
    return tuple(violations)


__all__ = (
    "validate",
)
