# python
"""
Command-line behavioral tests (python -m argosy).

Scope
- Validate --version, completion rendering to stdout and to a file, and the
  exit statuses for argument faults (2) and unreadable snapshots (1).

Conventions
- Test method names follow CamelCase per project convention.
- main() is called in-process with explicit arguments; stdout/stderr are
  captured with contextlib redirection.
"""

from __future__ import annotations

import contextlib
import io
import logging
import pathlib
import tempfile
import unittest
from unittest import TestCase

from argosy import SpecBuilder, __version__
from argosy.__main__ import main
from argosy.snapshot import snapshot


class TestMain(TestCase):
    """Behavioral tests for main()."""

    def setUp(self):
        root = logging.getLogger()
        self.handlers = root.handlers[:]
        self.level = root.level
        self.directory = tempfile.TemporaryDirectory()
        self.path = pathlib.Path(self.directory.name, "tool.json")
        spec = SpecBuilder("tool").flag("--force").subcommand("build", lambda build: None).build()
        self.path.write_text(snapshot(spec).to_json(), encoding="utf-8")

    def tearDown(self):
        root = logging.getLogger()
        root.handlers[:] = self.handlers
        root.setLevel(self.level)
        self.directory.cleanup()

    def run_main(self, *arguments):
        stdout, stderr = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(stderr):
            status = main(list(arguments))
        return status, stdout.getvalue(), stderr.getvalue()

    def testVersion(self):
        status, stdout, _ = self.run_main("--version")
        self.assertEqual(status, 0)
        self.assertEqual(stdout.strip(), "argosy %s" % __version__)

    def testCompletionToStdout(self):
        status, stdout, _ = self.run_main("completion", "bash", str(self.path))
        self.assertEqual(status, 0)
        self.assertIn("complete -F _tool_completion tool", stdout)

    def testCompletionToFile(self):
        output = pathlib.Path(self.directory.name, "tool.fish")
        status, stdout, _ = self.run_main("completion", "fish", str(self.path), "-o", str(output))
        self.assertEqual(status, 0)
        self.assertEqual(stdout, "")
        self.assertIn("__fish_tool_complete", output.read_text(encoding="utf-8"))

    def testUnknownShell(self):
        status, _, _ = self.run_main("completion", "tcsh", str(self.path))
        self.assertEqual(status, 2)

    def testUnknownOption(self):
        status, _, _ = self.run_main("--bogus")
        self.assertEqual(status, 2)

    def testMissingSnapshotArgument(self):
        status, _, _ = self.run_main("completion", "bash")
        self.assertEqual(status, 2)

    def testMissingSubcommand(self):
        status, _, _ = self.run_main()
        self.assertEqual(status, 2)

    def testUnreadableSnapshot(self):
        status, _, _ = self.run_main("completion", "zsh", str(pathlib.Path(self.directory.name, "absent.json")))
        self.assertEqual(status, 1)

    def testInvalidSnapshot(self):
        invalid = pathlib.Path(self.directory.name, "invalid.json")
        invalid.write_text('{"options": 3}', encoding="utf-8")
        status, _, _ = self.run_main("completion", "zsh", str(invalid))
        self.assertEqual(status, 1)


if __name__ == "__main__":
    unittest.main()
