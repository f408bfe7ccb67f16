"""
Simplecmds utilities.

Helpers shared by the aliases, rules, parsing and commands layers. Nothing here
knows about commands; everything is small enough to be tested on its own.

Contents
- Unset (UnsetType)
  • "Argument not given" marker, kept apart from None so that None can be a real
    value (an explicit "no rule", "no callback"...). It is falsy and unique.

- coalesce(object, default=None)
  • Swap Unset for a default; any other value, falsy or not, is returned.

- @rename("name")
  • Give generated functions a readable __name__/__qualname__ for tracebacks.

- mirror("field")
  • Read-only property over self._field; containers come out as frozen views.

- normalize(alias)
  • Command name of an alias ("--my-command" → "my_command").

- isnumeric(token) / convert_number(token) / convert_numbers(tokens)
  • Numeric detection and coercion of raw tokens into int/float.

- typeof(value)
  • Rule type name of a parsed value: "string", "number" or "boolean".

- ordinal(number)
  • Position label for fault messages ("first", "12th").
"""
import builtins
import functools
import re
from collections.abc import MutableMapping, MutableSequence, MutableSet
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Type of the Unset marker.

    There is exactly one instance; calling the type again hands it back, and the
    type refuses to be subclassed. The marker may appear on the right-hand side of
    isinstance() unions: isinstance(value, str | Unset).
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("UnsetType cannot be subclassed")


def coalesce(object, default=None, /):
    """
    Return default when object is Unset, otherwise object itself.

    >>> coalesce(Unset, 3), coalesce(None, 3), coalesce(0, 3)
    (3, None, 0)
    """
    return default if object is Unset else object


def rename(name, /):
    """
    Decorator factory assigning name to both __name__ and __qualname__.
    """
    if not isinstance(name, str):
        raise TypeError("rename() argument must be a string")

    def decorator(function):
        if not builtins.callable(function):
            raise TypeError("@rename() must decorate a callable")
        function.__name__ = function.__qualname__ = name
        return function

    return decorator


def _freeze(object):
    # Immutable values (tuples, rules, proxies) are handed out as they are.
    # Unset reads as None from the outside.
    match object:
        case MutableSequence():
            return tuple(object)
        case MutableMapping():
            return MappingProxyType(object)
        case MutableSet():
            return frozenset(object)
    return coalesce(object)


def mirror(name, /):
    """
    Build a property returning self._<name>.

    Lists come back as tuples, dicts as mapping proxies and sets as frozensets, so
    the state of directives and registries cannot be edited through their fields.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() field name must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(getter)


@functools.cache
def normalize(alias, /):
    """
    Derive a command name from an alias.

    Leading delimiters are stripped and the remaining words are joined with
    underscores in lowercase, so the name reads as a Python identifier.

    Examples
    - normalize("--my-command") -> "my_command"
    - normalize("-c")           -> "c"
    - normalize("list")         -> "list"
    """
    if not isinstance(alias, str):
        raise TypeError("normalize() argument must be a string")
    words = re.findall(r"[^\W_]+", alias)
    if not words:
        raise ValueError("normalize() argument must contain at least one word character")
    return "_".join(words).lower()


_INTEGER = re.compile(r"[+-]?\d+")
_DECIMAL = re.compile(r"[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?")


def isnumeric(token, /):
    """
    Return True when a raw token reads as a decimal number ("5", "-2", "1.5", "3e2").
    """
    return isinstance(token, str) and _DECIMAL.fullmatch(token) is not None


def convert_number(token, /):
    """
    Coerce a numeric-looking string into a number; anything else is returned unchanged.

    - "12"   -> 12
    - "-0.5" -> -0.5
    - "1e3"  -> 1000.0
    - "12a"  -> "12a"
    """
    if not isinstance(token, str):
        return token
    if _INTEGER.fullmatch(token):
        try:
            return int(token)
        except ValueError:
            # Longer than sys.get_int_max_str_digits(); kept as a string.
            return token
    if _DECIMAL.fullmatch(token):
        return float(token)
    return token


def convert_numbers(tokens, /):
    """
    Apply convert_number() to every token of an iterable, returning a list.
    """
    return [convert_number(token) for token in tokens]


def typeof(value, /):
    """
    Return the primitive type name a rule slot is checked against.

    bool is tested first because it is a subclass of int.
    """
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int | float):
        return "number"
    if isinstance(value, str):
        return "string"
    raise TypeError("typeof() argument must be a string, a number or a boolean")


@functools.cache
def ordinal(number, /):
    """
    Label of a 1-based position: words up to ten, then "11th", "21st", "102nd"...
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    if number % 100 in (11, 12, 13):
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return f"{number}{suffix}"


Unset = UnsetType()


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "normalize",
    "isnumeric",
    "convert_number",
    "convert_numbers",
    "typeof",
    "ordinal",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
