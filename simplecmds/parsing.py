"""
Simplecmds argument classifier.

parse_args() walks an expanded argument vector once, left to right, and hands
every token either to the command it invokes or, as a value, to the command
opened most recently:

    ["-c", "5", "-d", "1", "2"]  →  {"create": [5], "delete": [1, 2]}

Rules of the walk
- A token equal to one of a directive's aliases opens that command and (re)starts
  its argument list. Invoking the same command twice keeps the last invocation only;
  the discarded values are reported with a ReinvokedCommandWarning.
- Any other token is a value: numeric-looking strings are coerced to numbers and
  appended to the open command.
- The very first token must open a command. When it does not (or there are no
  tokens at all) the walk stops with a fault before any argument list is returned.
"""
import difflib

from .faults import *
from .utils import *


def parse_args(tokens, registry, /):
    """
    Assign tokens to the commands that own them.

    Parameters
    - tokens: Sequence[str]
      The expanded argument vector (see expand_aliases).
    - registry: Registry
      The finalized directive table; provides lookup(token) and trigger(fault).

    Returns
    - dict[str, list]: invoked command name → ordered, coerced values.

    Raises
    - MissingCommandError: the vector is empty.
    - UnknownCommandError: the first token is not a registered alias.
    """
    if not tokens:
        raise MissingCommandError(
            "no command was provided",
            title="missing command",
            code=FaultCode.MISSING_COMMAND,
            hint="run '%s --help' to see available commands" % registry.prog,
            docs=getdoc(FaultCode.MISSING_COMMAND),
        )

    namespace = {}
    current = Unset

    for index, token in enumerate(tokens, 1):
        name = registry.lookup(token)

        if name is not Unset:
            if namespace.get(name):
                registry.trigger(ReinvokedCommandWarning(
                    "command %r at %s position was already invoked; its previous arguments are discarded" % (
                        token, ordinal(index)
                    ),
                    title="repeated command",
                    code=FaultCode.REINVOKED_COMMAND,
                    input=token,
                    index=index,
                    discarded=list(namespace[name]),
                    hint="pass all the arguments of %r after a single invocation" % token,
                    docs=getdoc(FaultCode.REINVOKED_COMMAND),
                ))
            namespace[name] = []
            current = name
            continue

        if current is Unset:
            suggestions = difflib.get_close_matches(str(token), registry.aliases.keys(), 5)
            try:
                hint = "did you mean %r? you can also run '%s --help' to see available commands" % (
                    suggestions[0], registry.prog
                )
            except IndexError:
                hint = "run '%s --help' to see available commands" % registry.prog
            raise UnknownCommandError(
                "unknown command %r at %s position" % (token, ordinal(index)),
                title="unknown command",
                code=FaultCode.UNKNOWN_COMMAND,
                input=token,
                index=index,
                suggestions=suggestions,
                hint=hint,
                docs=getdoc(FaultCode.UNKNOWN_COMMAND),
            )

        namespace[current].append(convert_number(token))

    return namespace


__all__ = (
    "parse_args",
)
