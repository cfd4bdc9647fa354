"""
Argosy builder: explicit, method-chained construction of ArgumentSpec trees.

Overview
- SpecBuilder collects options, positionals, subcommands and constraints in
  declaration order and turns them into an immutable ArgumentSpec on build().
- Every declaring method returns the builder, so a CLI reads top-down:

    spec = (
        SpecBuilder("tool", version="1.0")
        .flag("-v", "--verbose")
        .option("-o", "--output", type="path")
        .positional("source")
        .subcommand("build", lambda build: build.flag("--release"))
        .exclusive("verbose", "output")
        .build()
    )

Subcommands
- source may be another SpecBuilder, a finished ArgumentSpec, or a callable
  receiving a fresh SpecBuilder (named after the subcommand) to populate.
- Builders are resolved at build() time; a child builder without its own
  settings inherits the settings of its parent.

Errors
- Declaration mistakes surface as TypeError/ValueError from the spec
  classes, at the call that declared them (options, positionals) or at
  build() (scope-level invariants, constraint targets).
"""
from .specs import *
from .utils import *


class SpecBuilder:
    """
    mutable collector for one scope; build() returns the immutable spec.
    """

    def __init__(self, prog, /, *, version=Unset, descr=Unset, settings=Unset):
        self._prog = prog
        self._version = version
        self._descr = descr
        self._settings = settings
        self._options = []
        self._positionals = []
        self._subcommands = []
        self._constraints = []

    @property
    def prog(self):
        return self._prog

    def configure(self, **settings):
        """
        replace this scope's Settings (see argosy.specs.Settings).
        """
        self._settings = Settings(**settings)
        return self

    def option(self, *names, **options):
        """
        declare an option (SINGLE arity unless `arity` says otherwise).
        """
        self._options.append(OptionSpec(*names, **options))
        return self

    def flag(self, *names, **options):
        return self.option(*names, arity=Arity.FLAG, **options)

    def count(self, *names, **options):
        return self.option(*names, arity=Arity.COUNT, **options)

    def multi(self, *names, **options):
        return self.option(*names, arity=Arity.MULTI, **options)

    def positional(self, name, /, **options):
        self._positionals.append(PositionalSpec(name, **options))
        return self

    def subcommand(self, name, source, /, *aliases, default=False, descr=Unset, hidden=False):
        """
        declare a subcommand routed by `name` and `aliases`.

        source
        - SpecBuilder: built with this builder's settings unless it has its own.
        - ArgumentSpec: attached as-is.
        - callable: called with a fresh SpecBuilder(name); it may populate that
          builder in place or return another builder or spec.
        """
        if isinstance(source, SpecBuilder | ArgumentSpec):
            pass
        elif callable(source):
            builder = SpecBuilder(name)
            if (returned := source(builder)) is not None:
                if not isinstance(returned, SpecBuilder | ArgumentSpec):
                    raise TypeError("subcommand callables must return None, a spec-builder or an argument-spec")
                builder = returned
            source = builder
        else:
            raise TypeError("subcommand source must be a spec-builder, an argument-spec or a callable")

        self._subcommands.append((name, source, aliases, {"default": default, "descr": descr, "hidden": hidden}))
        return self

    def constraint(self, constraint, /):
        if not isinstance(constraint, Constraint):
            raise TypeError("constraint() argument must be a constraint instance")
        self._constraints.append(constraint)
        return self

    def required(self, target, /):
        return self.constraint(Required(target))

    def exclusive(self, *targets):
        return self.constraint(MutuallyExclusive(*targets))

    def requires_all(self, target, /, *companions):
        return self.constraint(RequiresAll(target, *companions))

    def requires_one(self, target, /, *companions):
        return self.constraint(RequiresOne(target, *companions))

    def conflicts(self, target, other, /):
        return self.constraint(Conflicts(target, other))

    def exactly_one(self, *targets):
        return self.constraint(ExactlyOne(*targets))

    def at_least_one(self, *targets):
        return self.constraint(AtLeastOne(*targets))

    def required_if_any_absent(self, target, /, *references):
        return self.constraint(RequiredIfAnyAbsent(target, *references))

    def required_if_all_absent(self, target, /, *references):
        return self.constraint(RequiredIfAllAbsent(target, *references))

    def build(self, /, settings=Unset):
        """
        return the ArgumentSpec for this scope and its whole subcommand tree.

        `settings` is the inherited (parent) configuration, used when this
        builder declares none of its own.
        """
        settings = coalesce(self._settings, coalesce(settings, Settings()))
        subcommands = []
        for name, source, aliases, options in self._subcommands:
            if isinstance(source, SpecBuilder):
                source = source.build(settings)
            subcommands.append(SubcommandSpec(name, source, *aliases, **options))

        return ArgumentSpec(
            self._prog,
            self._options,
            self._positionals,
            subcommands,
            self._constraints,
            version=self._version,
            descr=self._descr,
            settings=settings,
        )


__all__ = (
    "SpecBuilder",
)
