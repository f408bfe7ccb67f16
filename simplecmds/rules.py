r"""
Simplecmds rule notation and validation.

A rule describes how many arguments a command expects and which primitive
types each position accepts:

    "<string> <number> [number,string]"

- <...>  required slot
- [...]  optional slot
- inside the brackets, a comma separated union of "string", "number", "boolean"

Rules are parsed once, when a command is registered (Rule.parse), and every later
check runs against the structured form (typecheck).

Validation semantics
- arity: at least as many arguments as required slots; when a nonzero amount is
  configured, no more than amount arguments.
- positions inside the required range are checked against their own slot.
- past the required range, a rule without optional slots accepts nothing; otherwise
  each position is checked against its optional slot, and positions beyond the last
  declared slot are checked against the last optional slot (it repeats indefinitely).

Quick example:
    >>> rule = Rule.parse("<number> [string]")
    >>> typecheck(rule, [1, "a", "b", "c"])
    True
    >>> typecheck(rule, [])
    False
"""
import functools
import re
from typing import NamedTuple

from .faults import *
from .utils import *

TYPES = frozenset({"string", "number", "boolean"})

_SLOT = re.compile(r"<(?P<required>[^<>\[\]]*)>|\[(?P<optional>[^<>\[\]]*)\]")
_WHITESPACE = re.compile(r"<[^<>]*\s[^<>]*>|\[[^\[\]]*\s[^\[\]]*\]")


class Slot(NamedTuple):
    """
    One position of a rule: the accepted primitive types and whether it is required.
    """
    types: frozenset
    required: bool

    def accepts(self, value, /):
        return typeof(value) in self.types

    def __str__(self):
        # Stable order so renders do not depend on set iteration.
        types = ",".join(sorted(self.types, key=("string", "number", "boolean").index))
        return f"<{types}>" if self.required else f"[{types}]"


class Rule(tuple):
    """
    Ordered, immutable sequence of slots (required slots first).
    """

    def __new__(cls, slots=(), /):
        slots = tuple(slots)
        for slot in slots:
            if not isinstance(slot, Slot):
                raise TypeError("rule slots must be Slot instances")
        if any(later.required and not earlier.required for earlier, later in zip(slots, slots[1:])):
            raise ValueError("rule required slots must precede optional slots")
        return super().__new__(cls, slots)

    @functools.cached_property
    def required(self):
        """Number of required slots."""
        return sum(slot.required for slot in self)

    @functools.cached_property
    def optional(self):
        """Number of optional slots."""
        return len(self) - self.required

    @classmethod
    def parse(cls, notation, /, command=None):
        """
        Parse a rule notation string into a Rule.

        Parameters
        - notation: str
          Space separated slots, each "<type[,type...]>" or "[type[,type...]]".
        - command: str | None
          Name of the command owning the rule; only used in error messages.

        Returns
        - Rule: the structured notation. A blank notation yields an empty Rule.

        Raises
        - TypeError: notation is not a string.
        - MalformedRuleError: whitespace inside brackets, a slot of unknown shape,
          an empty or unknown type name, or an optional slot before a required one.
        """
        if not isinstance(notation, str):
            raise TypeError(f"command {command!r} 'rule' must be a string")

        def malformed(message):
            return MalformedRuleError(
                f"command {command!r} rule {notation!r} {message}",
                command=command,
                field="rule",
            )

        if _WHITESPACE.search(notation):
            raise malformed("cannot contain whitespace inside of the brackets")

        slots = []
        for part in notation.split():
            if not (match := _SLOT.fullmatch(part)):
                raise malformed(f"has a malformed slot {part!r}")

            required = match["required"] is not None
            names = (match["required"] if required else match["optional"]).split(",")

            if not all(names):
                raise malformed(f"has an empty type name in slot {part!r}")
            if unknown := [name for name in names if name not in TYPES]:
                raise malformed(f"has unknown type {unknown[0]!r} (expected one of: string, number, boolean)")
            if required and slots and not slots[-1].required:
                raise malformed("cannot contain an optional rule before a required one")

            slots.append(Slot(frozenset(names), required))

        return cls(slots)

    def __str__(self):
        return " ".join(map(str, self))

    def __repr__(self):
        return f"rule({str(self)!r})"


def typecheck(rule, args, /, amount=0):
    """
    Validate arguments against a rule.

    Parameters
    - rule: Rule
      Structured notation (see Rule.parse).
    - args: Sequence
      Argument values, already capped to amount and coerced (numbers, sentinel True).
    - amount: int
      Maximum number of arguments; 0 means no upper bound.

    Returns
    - bool: arity check and every per-position type check pass.
    """
    if not isinstance(rule, Rule):
        raise TypeError("typecheck() first argument must be a rule")

    if len(args) < rule.required:
        return False
    if amount and len(args) > amount:
        return False

    for index, value in enumerate(args):
        if index < rule.required:
            slot = rule[index]
        elif not rule.optional:
            return False
        else:
            slot = rule[min(index, len(rule) - 1)]
        if not slot.accepts(value):
            return False

    return True


__all__ = (
    "TYPES",
    "Slot",
    "Rule",
    "typecheck",
)
