r"""
Argosy shell completion: bash, zsh and fish scripts from a Snapshot.

Overview
- Generators are pure: Snapshot in, script text out. They never look at a
  live ArgumentSpec, so a snapshot read back from JSON completes exactly like
  the spec it was taken from.
- One shared Python-side walk (tables()) computes a ScopeTable per snapshot
  node; every generator only translates those tables into its shell's data
  structures and registration syntax.

Runtime model (identical in the three shells)
- The script replays the binder over the words typed so far:
  • a value-taking option skips the next word (unless it is "--" or a known
    switch), and a trailing value-taking option makes the current word its
    value;
  • "--" ends option processing; later words are positionals;
  • a word routes into a subcommand only while no positional of the scope
    has been filled; an unmatched word at a scope without positionals falls
    back to the default subcommand, if any;
  • "-" and negative numbers count as positionals.
- Candidates for the current word
  • the value of a pending option ("--format <TAB>" or "--format=<TAB>"):
    its choices, or paths for path-typed options;
  • a dash word: the scope's visible switches (hidden options excluded);
  • otherwise subcommands while the scope can still route, else the hints of
    the positional slot being filled; an empty word also lists the switches.

Shell notes
- bash: needs bash >= 4.2 (associative arrays, declare -g); words split on
  "=" by readline are merged back before the replay. Registered with
  "complete -F".
- zsh: "#compdef" header, works autoloaded from $fpath or sourced (compdef).
- fish: one dynamic "complete -c ... -a" entry backed by helper functions.
- Candidate words containing whitespace are not supported.

Public API
- ScopeTable, tables(snapshot)
- CompletionGenerator, BashCompletion, ZshCompletion, FishCompletion
- bash(snapshot), zsh(snapshot), fish(snapshot), generate(snapshot, shell)
"""
import abc
import logging
import re
import shlex
from collections import namedtuple

from .specs import ValueType

logger = logging.getLogger(__name__)


class ScopeTable(namedtuple("ScopeTable", (
        "key",
        "options",
        "switches",
        "takes",
        "routes",
        "subcommands",
        "fallback",
        "variadic",
        "values",
        "files",
))):
    """
    completion data of one scope.

    fields
    - key: full scope path joined by spaces ("tool", "tool build").
    - options: (switch, description) pairs offered as candidates.
    - switches: every switch the binder knows here (hidden and negated included).
    - takes: switches that take a value.
    - routes: word (name or alias, hidden included) -> key of the target scope.
    - subcommands: (name, description) pairs offered while routable, or None
      when the scope declares no subcommands.
    - fallback: key of the default subcommand entered by an unmatched word
      (only for scopes without positionals), or None.
    - variadic: index of a trailing variadic positional slot, or None.
    - values: hint key (a switch or "#<slot>") -> candidate values.
    - files: hint keys completing file system paths.
    """
    __slots__ = ()


def _line(descr):
    # First line of a description, whitespace collapsed.
    return " ".join(descr.splitlines()[0].split()) if descr else ""


def _hint(key, entry, values, files):
    if entry.choices:
        values[key] = entry.choices
    elif entry.domain is not None and entry.domain.kind == "set":
        values[key] = entry.domain.values
    elif entry.type is ValueType.BOOL:
        values[key] = ("true", "false")
    if entry.type is ValueType.PATH:
        files.add(key)


def tables(snapshot, /):
    """
    return the ScopeTable of every scope of `snapshot`, root first.
    """
    result = []
    for path, node in snapshot.walk():
        key = " ".join((snapshot.prog, *path))
        options, switches, takes, values, files = [], [], [], {}, set()

        for option in node.options:
            names = (*option.names, *option.negations)
            switches.extend(names)
            if not option.hidden:
                options.extend((name, _line(option.descr)) for name in names)
            if option.takes_value:
                takes.extend(option.names)
                for name in option.names:
                    _hint(name, option, values, files)

        for index, positional in enumerate(node.positionals):
            _hint("#%d" % index, positional, values, files)

        routes = {}
        fallback = None
        for name, subcommand in node.subcommands.items():
            for word in subcommand.words:
                routes[word] = "%s %s" % (key, name)
            if subcommand.default and not node.positionals:
                fallback = "%s %s" % (key, name)

        subcommands = None
        if node.subcommands:
            subcommands = tuple(
                (name, _line(subcommand.descr))
                for name, subcommand in node.subcommands.items()
                if not subcommand.hidden
            )

        variadic = None
        if node.positionals and node.positionals[-1].variadic:
            variadic = len(node.positionals) - 1

        result.append(ScopeTable(
            key,
            tuple(options),
            tuple(switches),
            tuple(takes),
            routes,
            subcommands,
            fallback,
            variadic,
            values,
            frozenset(files),
        ))
    return result


class CompletionGenerator(abc.ABC):
    """
    base of the per-shell script generators.

    subclasses set `shell` and implement render(); generate() is the entry
    point taking a Snapshot.
    """
    shell = None

    def generate(self, snapshot, /):
        logger.debug("generating %s completion for %s", self.shell, snapshot.prog)
        return self.render(snapshot, tables(snapshot))

    @abc.abstractmethod
    def render(self, snapshot, tables, /):
        raise NotImplementedError

    @staticmethod
    def identifier(snapshot, /):
        """
        shell-safe identifier derived from the program name.
        """
        return re.sub(r"\W", "_", snapshot.prog)


def _words(pairs):
    return " ".join(word for word, _ in pairs)


def _arrays(tables):
    # Flat string maps shared by the bash and zsh scripts (associative arrays).
    return {
        "switches": {table.key: " ".join(table.switches) for table in tables},
        "options": {table.key: _words(table.options) for table in tables},
        "takes": {table.key: " ".join(table.takes) for table in tables},
        "routes": {
            "%s|%s" % (table.key, word): target for table in tables for word, target in table.routes.items()
        },
        "fallback": {table.key: table.fallback for table in tables if table.fallback is not None},
        "subcommands": {table.key: _words(table.subcommands) for table in tables if table.subcommands is not None},
        "variadic": {table.key: str(table.variadic) for table in tables if table.variadic is not None},
        "values": {
            "%s|%s" % (table.key, hint): " ".join(values) for table in tables for hint, values in table.values.items()
        },
        "files": {"%s|%s" % (table.key, hint): "1" for table in tables for hint in sorted(table.files)},
    }


class BashCompletion(CompletionGenerator):
    shell = "bash"

    @staticmethod
    def _array(name, mapping):
        entries = " ".join("[%s]=%s" % (shlex.quote(key), shlex.quote(value)) for key, value in mapping.items())
        return "declare -gA %s=(%s)" % (name, entries)

    def render(self, snapshot, tables, /):
        name = self.identifier(snapshot)
        prefix = "__%s" % name
        root = shlex.quote(tables[0].key)

        arrays = _arrays(tables)

        lines = [
            "# bash completion for %s" % snapshot.prog,
            "# generated by argosy; source this file or install it in bash_completion.d",
            "",
            *(self._array("%s_%s" % (prefix, array), mapping) for array, mapping in arrays.items()),
            "",
            "%s_consumes() {" % prefix,
            '    local takes=" ${%s_takes[$1]} " word="$2" char i' % prefix,
            '    REPLY=""',
            "    if [[ $word == --* ]]; then",
            '        [[ $word != *=* && $takes == *" $word "* ]] || return 1',
            '        REPLY="$word"',
            "        return 0",
            "    fi",
            "    for (( i = 1; i < ${#word}; i++ )); do",
            '        char="${word:i:1}"',
            "        [[ $char == = ]] && return 1",
            '        if [[ $takes == *" -$char "* ]]; then',
            "            (( i == ${#word} - 1 )) || return 1",
            '            REPLY="-$char"',
            "            return 0",
            "        fi",
            "    done",
            "    return 1",
            "}",
            "",
            "%s_hint() {" % prefix,
            '    local key="$1" cur="$2" head="$3"',
            "    if [[ -n ${%s_values[$key]+set} ]]; then" % prefix,
            '        COMPREPLY+=( $(compgen -P "$head" -W "${%s_values[$key]}" -- "$cur") )' % prefix,
            "    fi",
            "    if [[ -n ${%s_files[$key]+set} ]]; then" % prefix,
            '        COMPREPLY+=( $(compgen -P "$head" -f -- "$cur") )',
            "    fi",
            "}",
            "",
            "_%s_completion() {" % name,
            "    local -a words=()",
            '    local i current=0 raw="${COMP_WORDS[COMP_CWORD]}"',
            "    for (( i = 0; i < ${#COMP_WORDS[@]}; i++ )); do",
            "        if (( ${#words[@]} )) && [[ ${words[${#words[@]}-1]} == --* ]] \\",
            "                && [[ ${COMP_WORDS[i]} == = || ( $i -gt 0 && ${COMP_WORDS[i-1]} == = ) ]]; then",
            '            words[${#words[@]}-1]+="${COMP_WORDS[i]}"',
            "        else",
            '            words+=("${COMP_WORDS[i]}")',
            "        fi",
            "        (( i == COMP_CWORD )) && current=$(( ${#words[@]} - 1 ))",
            "    done",
            "",
            '    local scope=%s npos=0 tail=0 want="" idx word key' % root,
            "    for (( idx = 1; idx < current; idx++ )); do",
            '        word="${words[idx]}"',
            "        if (( tail )); then",
            "            npos=$(( npos + 1 ))",
            "        elif [[ $word == -- ]]; then",
            "            tail=1",
            "        elif [[ $word == -?* && ! $word =~ ^-[0-9.] ]]; then",
            '            if %s_consumes "$scope" "$word"; then' % prefix,
            "                if (( idx + 1 == current )); then",
            '                    want="$REPLY"',
            '                elif [[ ${words[idx+1]} != -- && " ${%s_switches[$scope]} " != *" ${words[idx+1]%%%%=*} "* ]]; then'
            % prefix,
            "                    idx=$(( idx + 1 ))",
            "                fi",
            "            fi",
            "        else",
            '            key="$scope|$word"',
            "            while (( npos == 0 )) && [[ -z ${%s_routes[$key]} && -n ${%s_fallback[$scope]} ]]; do"
            % (prefix, prefix),
            '                scope="${%s_fallback[$scope]}"' % prefix,
            '                key="$scope|$word"',
            "            done",
            "            if (( npos == 0 )) && [[ -n ${%s_routes[$key]} ]]; then" % prefix,
            '                scope="${%s_routes[$key]}"' % prefix,
            "            else",
            "                npos=$(( npos + 1 ))",
            "            fi",
            "        fi",
            "    done",
            "",
            '    local cur="${words[current]}" slot head',
            "    COMPREPLY=()",
            "    if [[ -n $want ]]; then",
            '        %s_hint "$scope|$want" "$cur" ""' % prefix,
            "        return 0",
            "    fi",
            "    if (( ! tail )) && [[ $cur == --*=* ]]; then",
            '        head="${cur%%=*}="',
            '        %s_hint "$scope|${cur%%%%=*}" "${cur#*=}" "${head:${#cur}-${#raw}}"' % prefix,
            "        return 0",
            "    fi",
            "    if (( ! tail )) && [[ $cur == -* ]]; then",
            '        COMPREPLY=( $(compgen -W "${%s_options[$scope]}" -- "$cur") )' % prefix,
            "        return 0",
            "    fi",
            "    if (( ! tail && npos == 0 )) && [[ -n ${%s_subcommands[$scope]+set} ]]; then" % prefix,
            '        COMPREPLY=( $(compgen -W "${%s_subcommands[$scope]}" -- "$cur") )' % prefix,
            "    else",
            "        slot=$npos",
            "        if [[ -n ${%s_variadic[$scope]} ]] && (( slot > ${%s_variadic[$scope]} )); then"
            % (prefix, prefix),
            '            slot="${%s_variadic[$scope]}"' % prefix,
            "        fi",
            '        %s_hint "$scope|#$slot" "$cur" ""' % prefix,
            "    fi",
            "    if (( ! tail )) && [[ -z $cur ]]; then",
            '        COMPREPLY+=( $(compgen -W "${%s_options[$scope]}" -- "$cur") )' % prefix,
            "    fi",
            "    return 0",
            "}",
            "",
            "complete -F _%s_completion %s" % (name, shlex.quote(snapshot.prog)),
        ]
        return "\n".join(lines) + "\n"


class ZshCompletion(CompletionGenerator):
    shell = "zsh"

    @staticmethod
    def _array(name, mapping):
        entries = " ".join("%s %s" % (shlex.quote(key), shlex.quote(value)) for key, value in mapping.items())
        return ["typeset -gA %s" % name, "%s=(%s)" % (name, entries)]

    def render(self, snapshot, tables, /):
        name = self.identifier(snapshot)
        prefix = "__%s" % name
        root = shlex.quote(tables[0].key)

        arrays = _arrays(tables)

        lines = [
            "#compdef %s" % snapshot.prog,
            "# zsh completion for %s, generated by argosy" % snapshot.prog,
            "",
        ]
        for array, mapping in arrays.items():
            lines.extend(self._array("%s_%s" % (prefix, array), mapping))
        lines.extend([
            "",
            "%s_consumes() {" % prefix,
            '    local takes=" ${%s_takes[$1]} " word=$2 char' % prefix,
            "    integer i",
            "    REPLY=",
            "    if [[ $word == --* ]]; then",
            '        [[ $word != *=* && $takes == *" $word "* ]] || return 1',
            "        REPLY=$word",
            "        return 0",
            "    fi",
            "    for (( i = 2; i <= $#word; i++ )); do",
            "        char=$word[i]",
            "        [[ $char == = ]] && return 1",
            '        if [[ $takes == *" -$char "* ]]; then',
            "            (( i == $#word )) || return 1",
            "            REPLY=-$char",
            "            return 0",
            "        fi",
            "    done",
            "    return 1",
            "}",
            "",
            "%s_hint() {" % prefix,
            "    if (( ${+%s_values[$1]} )); then" % prefix,
            "        compadd -- ${=%s_values[$1]}" % prefix,
            "    fi",
            "    if (( ${+%s_files[$1]} )); then" % prefix,
            "        _files",
            "    fi",
            "}",
            "",
            "_%s() {" % name,
            "    local scope=%s want= word key next cur=${words[CURRENT]}" % root,
            "    integer npos=0 tail=0 idx slot",
            "    for (( idx = 2; idx < CURRENT; idx++ )); do",
            "        word=${words[idx]}",
            "        if (( tail )); then",
            "            npos=$(( npos + 1 ))",
            "        elif [[ $word == -- ]]; then",
            "            tail=1",
            "        elif [[ $word == -?* && $word != -[0-9.]* ]]; then",
            '            if %s_consumes "$scope" "$word"; then' % prefix,
            "                next=${words[idx+1]}",
            "                if (( idx + 1 == CURRENT )); then",
            "                    want=$REPLY",
            '                elif [[ $next != -- && " ${%s_switches[$scope]} " != *" ${next%%%%=*} "* ]]; then' % prefix,
            "                    idx=$(( idx + 1 ))",
            "                fi",
            "            fi",
            "        else",
            '            key="$scope|$word"',
            "            while (( npos == 0 )) && [[ -z ${%s_routes[$key]} && -n ${%s_fallback[$scope]} ]]; do"
            % (prefix, prefix),
            "                scope=${%s_fallback[$scope]}" % prefix,
            '                key="$scope|$word"',
            "            done",
            "            if (( npos == 0 )) && [[ -n ${%s_routes[$key]} ]]; then" % prefix,
            "                scope=${%s_routes[$key]}" % prefix,
            "            else",
            "                npos=$(( npos + 1 ))",
            "            fi",
            "        fi",
            "    done",
            "",
            "    if [[ -n $want ]]; then",
            '        %s_hint "$scope|$want"' % prefix,
            "        return",
            "    fi",
            "    if (( ! tail )) && [[ $cur == --*=* ]]; then",
            "        key=${cur%%=*}",
            "        compset -P '*='",
            '        %s_hint "$scope|$key"' % prefix,
            "        return",
            "    fi",
            "    if (( ! tail )) && [[ $cur == -* ]]; then",
            "        compadd -- ${=%s_options[$scope]}" % prefix,
            "        return",
            "    fi",
            "    if (( ! tail && npos == 0 && ${+%s_subcommands[$scope]} )); then" % prefix,
            "        compadd -- ${=%s_subcommands[$scope]}" % prefix,
            "    else",
            "        slot=npos",
            # zsh expands ${...} before parsing (( )); an unset key must not leave an empty operand.
            "        if (( ${+%s_variadic[$scope]} )) && (( slot > ${%s_variadic[$scope]:-0} )); then"
            % (prefix, prefix),
            "            slot=${%s_variadic[$scope]}" % prefix,
            "        fi",
            '        %s_hint "$scope|#$slot"' % prefix,
            "    fi",
            "    if (( ! tail )) && [[ -z $cur ]]; then",
            "        compadd -- ${=%s_options[$scope]}" % prefix,
            "    fi",
            "}",
            "",
            "if [[ $zsh_eval_context[-1] == loadautofunc ]]; then",
            '    _%s "$@"' % name,
            "else",
            "    compdef _%s %s" % (name, shlex.quote(snapshot.prog)),
            "fi",
        ])
        return "\n".join(lines) + "\n"


def _fish(text):
    return "'%s'" % text.replace("\\", "\\\\").replace("'", "\\'")


class FishCompletion(CompletionGenerator):
    shell = "fish"

    @staticmethod
    def _function(name, subject, cases, otherwise=()):
        # cases: sequence of (keys, body lines); rendered as a fish switch.
        lines = ["function %s" % name]
        if cases:
            lines.append("    switch %s" % subject)
            for keys, body in cases:
                lines.append("        case %s" % " ".join(map(_fish, keys)))
                lines.extend("            " + line for line in body)
            lines.append("    end")
        lines.extend("    " + line for line in otherwise)
        lines.append("end")
        return lines

    @staticmethod
    def _candidates(pairs):
        return [
            "printf '%%s\\t%%s\\n' %s %s" % (_fish(word), _fish(descr)) if descr else "printf '%%s\\n' %s" % _fish(word)
            for word, descr in pairs
        ]

    def render(self, snapshot, tables, /):
        name = self.identifier(snapshot)
        prefix = "__fish_%s" % name

        lines = [
            "# fish completion for %s, generated by argosy" % snapshot.prog,
            "",
        ]
        lines += self._function("%s_switches" % prefix, "$argv[1]", [
            ((table.key,), ["printf '%%s\\n' %s" % " ".join(map(_fish, table.switches))])
            for table in tables if table.switches
        ])
        lines += self._function("%s_takes" % prefix, "$argv[1]", [
            ((table.key,), ["printf '%%s\\n' %s" % " ".join(map(_fish, table.takes))])
            for table in tables if table.takes
        ])
        lines += self._function("%s_options" % prefix, "$argv[1]", [
            ((table.key,), self._candidates(table.options)) for table in tables if table.options
        ])
        lines += self._function("%s_route" % prefix, '"$argv[1]|$argv[2]"', [
            (("%s|%s" % (table.key, word),), ["echo %s" % _fish(target)])
            for table in tables for word, target in table.routes.items()
        ])
        lines += self._function("%s_fallback" % prefix, "$argv[1]", [
            ((table.key,), ["echo %s" % _fish(table.fallback)]) for table in tables if table.fallback is not None
        ])
        lines += self._function("%s_routable" % prefix, "$argv[1]", [
            ((table.key,), ["return 0"]) for table in tables if table.subcommands is not None
        ], otherwise=["return 1"])
        lines += self._function("%s_subcommands" % prefix, "$argv[1]", [
            ((table.key,), self._candidates(table.subcommands)) for table in tables if table.subcommands
        ])
        lines += self._function("%s_variadic" % prefix, "$argv[1]", [
            ((table.key,), ["echo %d" % table.variadic]) for table in tables if table.variadic is not None
        ])
        lines += self._function("%s_values" % prefix, "$argv[1]", [
            (("%s|%s" % (table.key, hint),), ["printf '%%s\\n' %s" % " ".join(map(_fish, values))])
            for table in tables for hint, values in table.values.items()
        ])
        lines += self._function("%s_files" % prefix, "$argv[1]", [
            (tuple(sorted("%s|%s" % (table.key, hint) for table in tables for hint in table.files)), ["return 0"])
        ] if any(table.files for table in tables) else [], otherwise=["return 1"])

        lines += [
            "function %s_consumes" % prefix,
            "    set -l word $argv[2]",
            "    set -l takes (%s_takes $argv[1])" % prefix,
            "    if string match -q -- '--*' $word",
            "        string match -q -- '*=*' $word; and return 1",
            "        contains -- $word $takes; and printf '%s\\n' $word",
            "        return 0",
            "    end",
            "    set -l chars (string split '' -- (string sub -s 2 -- $word))",
            "    for i in (seq (count $chars))",
            "        test \"$chars[$i]\" = '='; and return 1",
            "        if contains -- -$chars[$i] $takes",
            "            test $i -eq (count $chars); and printf '%s\\n' -$chars[$i]",
            "            return 0",
            "        end",
            "    end",
            "end",
            "",
            "function %s_hint" % prefix,
            "    set -l head $argv[3]",
            "    for value in (%s_values $argv[1])" % prefix,
            "        printf '%s\\n' $head$value",
            "    end",
            "    if %s_files $argv[1]" % prefix,
            "        for path in (__fish_complete_path $argv[2])",
            "            printf '%s\\n' $head$path",
            "        end",
            "    end",
            "end",
            "",
            "function %s_state" % prefix,
            "    set -l tokens (commandline -opc)",
            "    set -l scope %s" % _fish(tables[0].key),
            "    set -l npos 0",
            "    set -l tail 0",
            "    set -l want none",
            "    set -l idx 2",
            "    while test $idx -le (count $tokens)",
            "        set -l word $tokens[$idx]",
            "        if test $tail -eq 1",
            "            set npos (math $npos + 1)",
            "        else if test \"$word\" = '--'",
            "            set tail 1",
            "        else if string match -qr -- '^-[^0-9.]' $word",
            "            set -l taken (%s_consumes $scope $word)" % prefix,
            "            if test -n \"$taken\"",
            "                if test $idx -eq (count $tokens)",
            "                    set want $taken",
            "                else",
            "                    set -l next $tokens[(math $idx + 1)]",
            "                    set -l name (string split -m1 -- '=' $next)[1]",
            "                    if test \"$next\" != '--'; and not contains -- $name (%s_switches $scope)" % prefix,
            "                        set idx (math $idx + 1)",
            "                    end",
            "                end",
            "            end",
            "        else",
            "            set -l target (%s_route $scope $word)" % prefix,
            "            while test $npos -eq 0 -a -z \"$target\"",
            "                set -l fallback (%s_fallback $scope)" % prefix,
            "                test -z \"$fallback\"; and break",
            "                set scope $fallback",
            "                set target (%s_route $scope $word)" % prefix,
            "            end",
            "            if test $npos -eq 0 -a -n \"$target\"",
            "                set scope $target",
            "            else",
            "                set npos (math $npos + 1)",
            "            end",
            "        end",
            "        set idx (math $idx + 1)",
            "    end",
            "    printf '%s\\n' $scope $npos $tail $want",
            "end",
            "",
            "function %s_complete" % prefix,
            "    set -l state (%s_state)" % prefix,
            "    set -l scope $state[1]",
            "    set -l npos $state[2]",
            "    set -l tail $state[3]",
            "    set -l cur (commandline -ct)",
            "    if test \"$state[4]\" != none",
            "        %s_hint \"$scope|$state[4]\" \"$cur\" ''" % prefix,
            "        return",
            "    end",
            "    if test $tail -eq 0; and string match -q -- '--*=*' $cur",
            "        set -l parts (string split -m1 -- '=' $cur)",
            "        %s_hint \"$scope|$parts[1]\" \"$parts[2]\" \"$parts[1]=\"" % prefix,
            "        return",
            "    end",
            "    if test $tail -eq 0; and string match -q -- '-*' $cur",
            "        %s_options $scope" % prefix,
            "        return",
            "    end",
            "    if test $tail -eq 0 -a $npos -eq 0; and %s_routable $scope" % prefix,
            "        %s_subcommands $scope" % prefix,
            "    else",
            "        set -l slot $npos",
            "        set -l last (%s_variadic $scope)" % prefix,
            "        if test -n \"$last\"; and test $slot -gt $last",
            "            set slot $last",
            "        end",
            "        %s_hint \"$scope|#$slot\" \"$cur\" ''" % prefix,
            "    end",
            "    if test $tail -eq 0 -a -z \"$cur\"",
            "        %s_options $scope" % prefix,
            "    end",
            "end",
            "",
            "complete -c %s -f -a '(%s_complete)'" % (_fish(snapshot.prog), prefix),
        ]
        return "\n".join(lines) + "\n"


SHELLS = {
    BashCompletion.shell: BashCompletion,
    ZshCompletion.shell: ZshCompletion,
    FishCompletion.shell: FishCompletion,
}


def bash(snapshot, /):
    return BashCompletion().generate(snapshot)


def zsh(snapshot, /):
    return ZshCompletion().generate(snapshot)


def fish(snapshot, /):
    return FishCompletion().generate(snapshot)


def generate(snapshot, shell, /):
    """
    render the `shell` completion script ("bash", "zsh" or "fish").
    """
    try:
        generator = SHELLS[shell]
    except KeyError:
        raise ValueError("unsupported shell %r; expected one of %s" % (shell, ", ".join(SHELLS))) from None
    return generator().generate(snapshot)


__all__ = (
    "ScopeTable",
    "tables",
    "CompletionGenerator",
    "BashCompletion",
    "ZshCompletion",
    "FishCompletion",
    "SHELLS",
    "bash",
    "zsh",
    "fish",
    "generate",
)
