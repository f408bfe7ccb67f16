r"""
Simplecmds aliases: extraction from usage strings and expansion of combined flags.

Overview
- generate_alias(usage, command)
  • Pick the flag tokens (up to two) that select a command out of its free-form
    usage string: "-c --create <text>" → ("-c", "--create").
- expand_aliases(tokens, registry=Unset)
  • Rewrite a raw argument vector before classification: combined short flags
    are split ("-abc" → "-a -b -c") and a comma list right after them is dealt
    across the expanded flags ("-abc 1,2,3" → "-a 1 -b 2 -c 3").
- alternate(aliases, values)
  • The positional merge used by the expander (flag₁ value₁ flag₂ value₂ …).

Grammar
- short flag:  one non-word delimiter and one word character ("-x", "+x", "/x")
- long flag:   "--" followed by three or more word/dash characters ("--create")
- bare word:   two or more word/dash characters, not starting with "-" ("list")
Every alias must start the usage string or follow whitespace.

Quick example:
    >>> generate_alias("-m --my-command [number]", "my_command")
    ('-m', '--my-command')
    >>> expand_aliases(["-l", "one", "-abc", "1,2,3"])
    ['-l', 'one', '-a', '1', '-b', '2', '-c', '3']
"""
import itertools
import re

from .faults import *
from .utils import *

_ALIAS = re.compile(r"(?<!\S)(?:[^\w\s<>\[\],]\w(?![\w-])|--[\w-]{3,}|(?!-)[\w-]{2,})")
_CLUSTER = re.compile(r"([^\w\s])(\w{2,})")
_GROUPED = re.compile(r"\w+(?:,\w+)+")


def generate_alias(usage, command=None, /):
    """
    Find the aliases of a command in its usage string.

    Parameters
    - usage: str
      Free-form usage text, e.g. "-c --create <text>".
    - command: str | None
      Name of the command being registered; only used in error messages.

    Returns
    - tuple[str, ...]: the first one or two matches, in source order (not re-sorted).

    Raises
    - TypeError: usage is not a string.
    - NoAliasError: the usage string holds no alias at all.
    """
    if not isinstance(usage, str):
        raise TypeError(f"command {command!r} 'usage' must be a string")
    if not (aliases := _ALIAS.findall(usage)):
        raise NoAliasError(
            f"no valid aliases found in {command!r} usage string {usage!r}",
            command=command,
            field="usage",
        )
    return tuple(aliases[:2])


def alternate(aliases, values, /):
    """
    Merge flags and values positionally.

    Each flag is followed by the value at the same position; values left over
    once the flags run out are appended after the last flag.

    Examples
    - alternate(["-a", "-b"], ["1", "2"])      -> ["-a", "1", "-b", "2"]
    - alternate(["-a", "-b", "-c"], ["1"])     -> ["-a", "1", "-b", "-c"]
    - alternate(["-a"], ["1", "2", "3"])       -> ["-a", "1", "2", "3"]
    """
    merged = []
    for alias, value in itertools.zip_longest(aliases, values, fillvalue=Unset):
        if alias is not Unset:
            merged.append(alias)
        if value is not Unset:
            merged.append(value)
    return merged


def _is_cluster(token, registry):
    # Known aliases and negative numbers ("-50") are never split.
    if not isinstance(token, str) or not _CLUSTER.fullmatch(token) or isnumeric(token):
        return False
    return registry is Unset or registry.lookup(token) is Unset


def expand_aliases(tokens, /, registry=Unset):
    """
    Expand combined short flags and their grouped values, in place.

    Parameters
    - tokens: Sequence[str]
      The raw argument vector, program name already stripped.
    - registry: Registry | Unset
      When given, tokens that already are registered aliases are not split and
      warnings are surfaced through registry.trigger(); otherwise through the
      module-level trigger() in non-shell mode.

    Returns
    - list[str]: the expanded vector. Empty tokens are dropped, as are comma lists
      that do not follow a combined flag cluster (they have no owner).
    """
    tokens = list(tokens)
    expanded = []

    for index, token in enumerate(tokens):
        if not token:
            continue

        if _is_cluster(token, registry):
            delimiter, letters = _CLUSTER.fullmatch(token).groups()
            aliases = [delimiter + letter for letter in letters]
            try:
                following = tokens[index + 1]
            except IndexError:
                following = ""
            values = following.split(",") if _GROUPED.fullmatch(following or "") else []
            expanded.extend(alternate(aliases, values))
            continue

        if _GROUPED.fullmatch(token):
            # Consumed by the cluster right before it, or dropped as an orphan.
            if index and _is_cluster(tokens[index - 1], registry):
                continue
            warning = OrphanValuesWarning(
                "grouped values %r at %s position do not follow combined flags" % (token, ordinal(index + 1)),
                title="orphan values",
                code=FaultCode.ORPHAN_VALUES,
                input=token,
                index=index + 1,
                hint="place the values right after combined flags (for example: -abc %s)" % token,
                docs=getdoc(FaultCode.ORPHAN_VALUES),
            )
            if registry is Unset:
                trigger(warning)
            else:
                registry.trigger(warning)
            continue

        expanded.append(token)

    return expanded


__all__ = (
    "generate_alias",
    "expand_aliases",
    "alternate",
)
