r"""
Argosy tokenizer: classify raw argv strings against the active scope.

Overview
- Tokenizer is a lazy iterator over Token records. It is scope-dependent:
  whether "-o" takes the next argument, or whether "-vx" is a cluster, depends
  on the option table of the scope being bound. The binder calls rescope()
  after every subcommand switch, so later arguments classify against the new
  table.

Rules
- "--name=value" splits into name and inline value; "--name" alone takes the
  next argument when the option needs a value.
- "--" emits a SEPARATOR; every later argument is a TAIL token.
- "-abc" is a short cluster (when Settings.clustering is on): each character
  is a short option, and the first value-taking one takes the rest of the
  token as its inline value ("-ofile", "-o=file"), or the next argument when
  nothing is left.
- A value-taking option takes the next argument unless that argument is "--"
  or a known option of the scope; in that case the value stays Unset and the
  binder reports the missing value.
- "-" alone and negative numbers ("-5", "-1.5") not shadowed by a declared
  short option are plain values.
- "--no-name" on a negatable flag is a LONG token with negated=True.
- Anything else starting with a dash is an UNKNOWN token.

Public API
- TokenKind, Token, Tokenizer, tokenize(arguments, spec)
"""
import logging
import re
from collections import deque, namedtuple
from enum import Enum

from .utils import *

logger = logging.getLogger(__name__)

_NUMBER = re.compile(r"-(\d+(\.\d*)?|\.\d+)([eE][-+]?\d+)?")


class TokenKind(Enum):
    LONG = "long"
    SHORT = "short"
    VALUE = "value"
    SEPARATOR = "separator"
    TAIL = "tail"
    UNKNOWN = "unknown"


class Token(namedtuple("Token", ("kind", "name", "value", "raw", "index", "negated"))):
    """
    one classified argument (or one member of a short cluster).

    fields
    - kind: TokenKind.
    - name: switch name as declared ("--output", "-o", "--no-color") for
      LONG/SHORT/UNKNOWN tokens, else None.
    - value: inline or taken value (str), or Unset when none was available.
    - raw: the original argv string (the whole cluster for cluster members).
    - index: zero-based argv index of `raw`.
    - negated: True for negated flag switches.
    """
    __slots__ = ()

    def __new__(cls, kind, name=None, value=Unset, raw="", index=0, negated=False):
        return super().__new__(cls, kind, name, value, raw, index, negated)


class Tokenizer:
    """
    lazy, rescope-able token stream over one argv sequence.
    """

    def __init__(self, arguments, spec, /):
        self._arguments = deque(enumerate(arguments))
        self._pending = deque()
        self._spec = spec
        self._tail = False

    @property
    def spec(self):
        return self._spec

    def rescope(self, spec, /):
        """
        classify the remaining arguments against `spec` from now on.
        """
        logger.debug("tokenizer rescoped to %s", spec.prog)
        self._spec = spec

    def __iter__(self):
        return self

    def __next__(self):
        if self._pending:
            return self._pending.popleft()
        if not self._arguments:
            raise StopIteration

        index, raw = self._arguments.popleft()
        if self._tail:
            return Token(TokenKind.TAIL, value=raw, raw=raw, index=index)
        if raw == "--":
            self._tail = True
            return Token(TokenKind.SEPARATOR, raw=raw, index=index)
        if raw.startswith("--"):
            return self._long(raw, index)
        if raw.startswith("-") and raw != "-" and not self._numeric(raw):
            return self._short(raw, index)
        return Token(TokenKind.VALUE, value=raw, raw=raw, index=index)

    def _numeric(self, raw):
        return bool(_NUMBER.fullmatch(raw)) and raw[:2] not in self._spec.switches

    def _take(self):
        # Take the next argument as a value unless it is "--" or a switch of this scope.
        if self._arguments and (raw := self._arguments[0][1]) != "--" and not self._spec.is_switch(raw):
            return self._arguments.popleft()[1]
        return Unset

    def _long(self, raw, index):
        name, separator, value = raw.partition("=")
        value = value if separator else Unset

        negated = False
        if (option := self._spec.switches.get(name)) is None:
            if (option := self._spec.negations.get(name)) is None:
                return Token(TokenKind.UNKNOWN, name, value, raw, index)
            negated = True

        if option.arity.takes_value and value is Unset:
            value = self._take()
        return Token(TokenKind.LONG, name, value, raw, index, negated)

    def _short(self, raw, index):
        switches = self._spec.switches
        if (name := raw[:2]) not in switches:
            return Token(TokenKind.UNKNOWN, raw.partition("=")[0], Unset, raw, index)

        if not self._spec.settings.clustering:
            option, rest = switches[name], raw[2:]
            if not rest:
                return Token(TokenKind.SHORT, name, self._take() if option.arity.takes_value else Unset, raw, index)
            if option.arity.takes_value or rest.startswith("="):
                return Token(TokenKind.SHORT, name, rest.removeprefix("="), raw, index)
            return Token(TokenKind.UNKNOWN, raw, Unset, raw, index)

        tokens = []
        for position in range(1, len(raw)):
            if (name := "-" + raw[position]) not in switches:
                return Token(TokenKind.UNKNOWN, name, Unset, raw, index)
            option, rest = switches[name], raw[position + 1:]
            if option.arity.takes_value:
                value = rest.removeprefix("=") if rest else self._take()
                tokens.append(Token(TokenKind.SHORT, name, value, raw, index))
                break
            if rest.startswith("="):
                tokens.append(Token(TokenKind.SHORT, name, rest[1:], raw, index))
                break
            tokens.append(Token(TokenKind.SHORT, name, Unset, raw, index))

        self._pending.extend(tokens[1:])
        return tokens[0]


def tokenize(arguments, spec, /):
    """
    classify `arguments` against a single scope (no subcommand rescoping).

    convenient for inspection and tests; the binder drives a Tokenizer
    directly so it can rescope it.
    """
    return list(Tokenizer(arguments, spec))


__all__ = (
    "TokenKind",
    "Token",
    "Tokenizer",
    "tokenize",
)
