"""
Command line of argosy: render completion scripts from serialized snapshots.

    python -m argosy completion bash tool.snapshot.json > tool.bash
    python -m argosy -v --log-json completion fish tool.snapshot.json -o tool.fish

The command line is itself declared and parsed with argosy. Faults are
printed through rich on stderr and exit with status 2; unreadable or invalid
snapshot files exit with status 1.
"""
import logging
import sys

import pydantic
from rich.console import Console
from rich.text import Text

from . import __version__, parse
from .builder import SpecBuilder
from .completion import SHELLS, generate
from .faults import BindingError, ConstraintError
from .logs import configure_logging
from .snapshot import Snapshot

logger = logging.getLogger(__name__)

SPEC = (
    SpecBuilder("argosy", version=__version__, descr="argument specification tooling")
    .flag("-v", "--verbose", descr="log debug records on stderr")
    .flag("--log-json", descr="log as JSON lines instead of console text")
    .flag("--version", descr="print the version and exit")
    .subcommand(
        "completion",
        lambda completion: completion
        .positional("shell", type="choice", choices=tuple(SHELLS), descr="target shell")
        .positional("snapshot", type="path", descr="snapshot JSON file (Snapshot.to_json)")
        .option("-o", "--output", type="path", descr="write the script here instead of stdout"),
        descr="render a shell completion script",
    )
    .build()
)


def _fail(console, message, detail):
    console.print(Text.assemble((message, "bold red"), " ", str(detail)))


def main(arguments=None):
    console = Console(stderr=True)
    try:
        result = parse(SPEC, sys.argv[1:] if arguments is None else arguments)
    except (BindingError, ConstraintError) as error:
        console.print(error)
        return 2

    configure_logging(verbose=result["verbose"], log_json=result["log_json"])
    logger.debug("command line bound to %s", " ".join(result.path) or "argosy")

    if result["version"]:
        print("argosy %s" % __version__)
        return 0

    match result.path:
        case ("completion",):
            try:
                snapshot = Snapshot.from_json(result["snapshot"].read_bytes())
            except OSError as error:
                _fail(console, "cannot read snapshot:", error)
                return 1
            except pydantic.ValidationError as error:
                _fail(console, "invalid snapshot:", error)
                return 1

            script = generate(snapshot, result["shell"])
            if (output := result["output"]) is not None:
                output.write_text(script, encoding="utf-8")
                logger.debug("wrote %s completion to %s", result["shell"], output)
            else:
                sys.stdout.write(script)
            return 0
        case _:
            _fail(console, "missing subcommand:", "try 'argosy completion <shell> <snapshot.json>'")
            return 2


if __name__ == "__main__":
    sys.exit(main())
