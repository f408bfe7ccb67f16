"""
Simplecmds faults: what can go wrong, and how it is reported.

Two families
- Runtime faults, produced while parsing a prompt. They carry a FaultCode, a
  title, a hint and whatever context helps (input, index, suggestions...), and
  they render themselves with rich:
  • CommandException: fatal (unknown or missing leading command).
  • CommandWarning: the run goes on (orphan comma lists, re-invoked commands).
- Configuration errors (CommandCreationError and subclasses), produced while
  commands are registered. They are plain ValueError subclasses and always raise.

Reporting
- trigger(fault, **options) folds runtime options (prog, shell, fancy, colorful)
  into a copy of the fault and fires it:
  • shell=False: exceptions are raised, warnings go through warnings.warn.
  • shell=True: the fault is printed on stderr; exceptions then exit with status 1.
- The host may relabel codes (__codes__), document them (__docs__), restyle the
  output (__styles__) or rename the program (__prog__) from its __main__ module.
"""
import inspect
import sys
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    Stable numeric identifiers of runtime faults.

    - 1110x: routing errors (the prompt does not start with a command)
    - 1211x: expansion/classification warnings
    """
    UNKNOWN_COMMAND             = 11101
    MISSING_COMMAND             = 11102

    ORPHAN_VALUES               = 12111
    REINVOKED_COMMAND           = 12112

    def normalize(self):
        """
        Label shown for this code: the host's __codes__ entry, or the number.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _renderer(fault, palette):
    """
    Lay out a fault as a rich renderable:

        [ prog — code | Title ]
        message
         → hint

    With fancy=True the message and hint are boxed in a panel titled by the header.
    """
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", False)
    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def text(fragment, style):
        if not fragment:
            return Text("")
        if isinstance(fragment, Text):
            return fragment if colorful else Text(fragment.plain)
        return Text(str(fragment), styles[style] if colorful else "")

    code = options.get("code")
    header = Text.assemble(
        "[ ",
        text(getattr(main, "__prog__", options.get("prog", "")), "prog-name"),
        " — ",
        text(code.normalize() if isinstance(code, FaultCode) else code, "code"),
        " | ",
        text(options.get("title", "").title(), "title"),
        " ]",
    )
    message = text(fault.message, "message")
    hint = Text.assemble(text(" → ", "hint-arrow"), text(options.get("hint"), "hint"))

    if options.get("fancy", False):
        return Panel(Group(message, hint), title=header, title_align="left")
    return Group(header, message, hint)


class _Fault:
    """
    Shared protocol of runtime faults.

    - message: positional, human readable.
    - options: read-only mapping with the code, title, hint, runtime flags and
      any context the reporter attached.
    - __replace__(**options): copy with more options (used by trigger()).
    - __rich__(): rendering, styled with the class palette.
    """
    palette = {}

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message or "")

    def __rich__(self):
        return _renderer(self, self.palette)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **(dict(self.options) | overrides))


class CommandException(_Fault, Exception):
    """
    Fatal runtime fault: the prompt cannot be routed to any command.
    """
    palette = {
        "prog-name": "bold #E6E6F0",
        "code": "bold #00E5FF",
        "title": "bold #FF4DA6",
        "message": "#C8C8D0",
        "hint-arrow": "#9CE19C dim",
        "hint": "italic #9CE19C",
    }

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)


class UnknownCommandError(CommandException): ...
class MissingCommandError(CommandException): ...


class CommandWarning(_Fault, ABC, Warning):
    """
    Non-fatal runtime fault: something in the prompt was ignored or overridden.
    """
    palette = {
        "prog-name": "bold #E6E6F0",
        "code": "bold #FFB400",
        "title": "bold #FFC2E0",
        "message": "#D6D6DE",
        "hint-arrow": "#B8EFAF dim",
        "hint": "italic #B8EFAF",
    }

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            # Attribute the warning to the outermost caller, not to library frames.
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)


class OrphanValuesWarning(CommandWarning): ...
class ReinvokedCommandWarning(CommandWarning): ...


class CommandCreationError(ValueError):
    """
    A command could not be registered as described.

    Raised at registration (or finalize) time and never routed through trigger():
    a broken command table is a bug of the host program.

    Attributes
    - command: name (or mapping key) of the command at fault, None if unknown.
    - field: descriptor field at fault: "usage", "aliases", "rule", "amount"...
    """

    def __init__(self, message, /, *, command=None, field=None):
        super().__init__(message)
        self.command = command
        self.field = field


class NoAliasError(CommandCreationError): ...
class DuplicateAliasError(CommandCreationError): ...
class DuplicateCommandError(CommandCreationError): ...
class MalformedRuleError(CommandCreationError): ...
class InvalidAmountError(CommandCreationError): ...


def trigger(fault, /, **options):
    """
    Fire a runtime fault with extra options merged in.

    The fault must implement __trigger__ and __replace__ (CommandException and
    CommandWarning do). Typical options: prog, shell, fancy, colorful.
    """
    for method in ("__trigger__", "__replace__"):
        if not callable(getattr(fault, method, None)):
            raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    Documentation string the host registered for code in __main__.__docs__, or None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    return getattr(__import__("__main__"), "__docs__", {}).get(code)


__all__ = (
    "CommandException",
    "UnknownCommandError",
    "MissingCommandError",
    "CommandWarning",
    "OrphanValuesWarning",
    "ReinvokedCommandWarning",
    "CommandCreationError",
    "NoAliasError",
    "DuplicateAliasError",
    "DuplicateCommandError",
    "MalformedRuleError",
    "InvalidAmountError",
    "FaultCode",
    "trigger",
    "getdoc",
)
