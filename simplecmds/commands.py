"""
Simplecmds command layer: register, finalize, and run a command table.

What this module provides
- Directive: the registered specification of one command (aliases, usage, rule,
  amount, callback), immutable once built.
- Program: the builder. Commands are registered with a fluent chain
  (command(...).rule(...)) or from a mapping (commands({...})); program options
  are set with set(...).
- Registry: the finalized, read-only directive table produced by Program.finalize().
  It owns the parse pipeline and the built-in help/version/debug commands.
- Result: per-command outcome, (args, valid).
- build_commands(registry, namespace) / issue_callbacks(registry, results):
  the command builder stage of the pipeline.
- invoke(object, prompt): convenience runner for programs and registries.

Pipeline (Registry.parse)
    prompt ─► tokens ─► expand_aliases ─► parse_args ─► build_commands ─► issue_callbacks
                                              │
                                              └─ first token is not a command: fault, stop

Quick start
    from simplecmds import Program

    def create(args, valid, results):
        print("create", args, valid)

    program = (
        Program(version="v1.0.0", description="Task manager", shell=True)
        .command("-c --create <text>", "Create a task", create)
        .rule("<number,string>", 1)
        .command("-d --delete <id> [id]", "Delete a task")
        .rule("<number> [number]", 2)
    )

    if __name__ == "__main__":
        program.parse()  # reads sys.argv[1:]

Design notes
- The builder never shares state with what it produced: every finalize() returns a
  fresh Registry, so repeated runs (tests, REPLs) do not leak commands.
- Per-command rule mismatches are not faults; they surface as valid=False.
- Only a missing/unknown leading command stops the run (see parsing.parse_args).
"""
import functools
import operator
import os.path
import re
import shlex
import sys
from collections import defaultdict
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import NamedTuple

from rich.console import Console, Group
from rich.panel import Panel
from rich.pretty import pprint
from rich.table import Table
from rich.text import Text

from .aliases import generate_alias, expand_aliases
from .faults import *
from .parsing import parse_args
from .rules import Rule, typecheck
from .utils import *


class CommandType(type):
    """
    Metaclass of Directive, Program and Registry.

    - Every name in __introspectable__ becomes a read-only property (see mirror()).
    - __typename__ ("directive", "program", "registry") prefixes error messages.
    - __repr__/__rich_repr__ list the __displayable__ fields (all the introspectable
      ones when unset); the debug command prints directives through them.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - directive(name='create', aliases=('-c', '--create'), ...)
            """
            fields = ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            return f"{type(self).__typename__}({fields})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _process_identity(cls, metadata):
    """
    Validate the name and the usage, and resolve the aliases.

    - name: non-empty string after trimming.
    - usage: required string; its aliases are generated unless given explicitly.
    - aliases: 1–2 distinct, non-empty strings without whitespace.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not (name := name.strip()):
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
    metadata["name"] = name

    if metadata["usage"] is Unset or metadata["usage"] is None:
        raise CommandCreationError(
            f"command {name!r} must specify a 'usage' string",
            command=name,
            field="usage",
        )
    if not isinstance(usage := metadata["usage"], str):
        raise TypeError(f"{cls.__typename__} 'usage' must be a string")

    if (aliases := metadata["aliases"]) is Unset:
        metadata["aliases"] = generate_alias(usage, name)
        return

    aliases = tuple(aliases)
    if not 1 <= len(aliases) <= 2:
        raise ValueError(f"{cls.__typename__} 'aliases' must hold one or two aliases")
    for alias in aliases:
        if not isinstance(alias, str):
            raise TypeError(f"{cls.__typename__} aliases must be strings")
        elif not alias or re.search(r"\s", alias):
            raise ValueError(f"{cls.__typename__} aliases cannot be empty or contain whitespace")
    if len(set(aliases)) != len(aliases):
        raise DuplicateAliasError(
            f"command {name!r} aliases cannot contain duplicates",
            command=name,
            field="aliases",
        )
    metadata["aliases"] = aliases


def _process_strings(cls, metadata):
    """
    Normalize the display-only scalars: description and help.

    Both default to None; when provided they must be strings (or rich Text).
    """
    for field in ("description", "help"):
        if not isinstance(value := metadata[field], str | Text | Unset | None):
            raise TypeError(f"{cls.__typename__} '{field}' must be a string")
        if isinstance(value, str):
            value = value.strip() or None
        metadata[field] = coalesce(value)


def _process_rule(cls, metadata):
    """
    Parse the rule and derive the effective amount.

    - rule: Unset/None/blank → None (no constraint); str → Rule.parse; Rule kept as-is.
    - amount: non-negative integer (0 = unlimited). A nonzero amount lower than the
      rule's required slots is raised to that count.
    """
    name = metadata["name"]

    match rule := metadata["rule"]:
        case Rule():
            pass
        case str():
            rule = Rule.parse(rule, name)
        case _ if rule is Unset or rule is None:
            rule = None
        case _:
            raise TypeError(f"{cls.__typename__} 'rule' must be a string")
    metadata["rule"] = rule or None

    if not isinstance(amount := metadata["amount"], int) or isinstance(amount, bool):
        raise TypeError(f"{cls.__typename__} 'amount' must be an integer")
    if amount < 0:
        raise InvalidAmountError(
            f"command {name!r} amount must be a non-negative integer, got {amount}",
            command=name,
            field="amount",
        )
    metadata["declared"] = amount
    if amount and rule:
        amount = max(amount, rule.required)
    metadata["amount"] = amount


class Directive(metaclass=CommandType):
    """
    Registered specification of a command.

    Fields (read-only properties)
    - name: unique identifier, key of the command in the results.
    - aliases: one or two tokens that invoke the command (short and/or long form).
    - usage: the human-authored usage string the aliases were extracted from.
    - description: short text for the help menu (or None).
    - help: long text for the command's own help page (or None).
    - rule: parsed Rule, or None when the command accepts anything.
    - amount: effective maximum number of arguments (0 = unlimited).
    - callback: called as callback(args, valid, results) when invoked (or None).

    A directive is immutable; __replace__ builds a new one with some fields changed,
    which is how late-attached rules and help texts are merged in.
    """

    __introspectable__ = (
        "name",
        "aliases",
        "usage",
        "description",
        "help",
        "rule",
        "amount",
        "callback",
    )

    __displayable__ = (
        "name",
        "aliases",
        "usage",
        "rule",
        "amount",
    )

    def __new__(
            cls,
            name,
            usage,
            /,
            description=Unset,
            rule=Unset,
            amount=0,
            callback=Unset,
            *,
            help=Unset,
            aliases=Unset
    ):
        """
        Build a directive, validating every field.

        Raises
        - TypeError on fields of the wrong Python type.
        - CommandCreationError (and subclasses) on a missing usage, a usage without
          aliases, duplicated aliases, a malformed rule or a negative amount.
        """
        if callback is not Unset and callback is not None and not callable(callback):
            raise TypeError(f"{cls.__typename__} 'callback' must be callable")

        metadata = {
            "name": name,
            "usage": usage,
            "aliases": aliases,
            "description": description,
            "help": help,
            "rule": rule,
            "amount": amount,
            "callback": coalesce(callback),
        }
        _process_identity(cls, metadata)
        _process_strings(cls, metadata)
        _process_rule(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        fields = {
            "description": self._description,
            "rule": self._rule,
            "amount": self._declared,
            "callback": self._callback,
            "help": self._help,
            "aliases": self._aliases,
        } | overrides
        return type(self)(self._name, self._usage, **fields)


class Result(NamedTuple):
    """
    Outcome of a command for one run.

    - args: tuple of values, (True,) when invoked without values, None when not invoked.
    - valid: rule/arity check result; always True without a rule, False when not invoked.
    """
    args: tuple | None
    valid: bool


def build_commands(registry, namespace, /):
    """
    Build the result of every registered command.

    Parameters
    - registry: Registry
    - namespace: Mapping[str, Sequence]
      Output of parse_args: invoked command name → values.

    Returns
    - MappingProxyType[str, Result] in registration order, holding every command:
      invoked ones are capped to their amount and validated; the others are
      Result(None, False).
    """
    results = {}
    for name, directive in registry.directives.items():
        if name not in namespace:
            results[name] = Result(None, False)
            continue

        args = list(namespace[name])
        if directive.amount:
            args = args[:directive.amount]
        # Commands invoked without values behave as boolean switches.
        args = tuple(args) or (True,)

        if directive.rule is None:
            valid = True
        else:
            valid = typecheck(directive.rule, args, directive.amount)
        results[name] = Result(args, valid)

    return MappingProxyType(results)


def issue_callbacks(registry, results, /):
    """
    Call every callback whose command was invoked, in registration order.

    Each callback receives (args, valid, results).
    """
    for name, directive in registry.directives.items():
        if directive.callback is None or results[name].args is None:
            continue
        args, valid = results[name]
        directive.callback(args, valid, results)


def _sanitize_prompt(prompt):
    """
    Normalize a prompt into a list of tokens.

    - Unset: sys.argv[1:].
    - str: shell-like string, split with shlex.split.
    - Iterable[str]: items are trimmed; empty items are dropped.
    """
    if prompt is Unset:
        return sys.argv[1:]
    if isinstance(prompt, str):
        return shlex.split(prompt)
    if isinstance(prompt, Iterable):
        tokens = []
        for item in prompt:
            if not isinstance(item, str):
                raise TypeError("parse() argument must be a string or an iterable of strings")
            if item := item.strip():
                tokens.append(item)
        return tokens
    raise TypeError("parse() argument must be a string or an iterable of strings")


_OPTIONS = (
    "version",
    "description",
    "prog",
    "debug",
    "default_rule",
    "shell",
    "fancy",
    "colorful",
)


def _process_options(cls, options):
    """
    Validate program options in place.

    - version/description/prog: strings (prog defaults to the script name).
    - debug/shell/fancy/colorful: coerced to bool.
    - default_rule: (notation, amount) tuple or {"rule": ..., "amount": ...} mapping,
      normalized into a mapping whose missing entries are Unset.
    """
    for name in options:
        if name not in _OPTIONS:
            raise TypeError(f"{cls.__typename__} got an unexpected option {name!r}")

    for name in ("version", "description", "prog"):
        if name in options and not isinstance(options[name], str | Unset | None):
            raise TypeError(f"{cls.__typename__} {name!r} must be a string")

    for name in ("debug", "shell", "fancy", "colorful"):
        if name in options:
            options[name] = bool(options[name])

    if "default_rule" not in options:
        return

    match default := options["default_rule"]:
        case Mapping():
            if unknown := set(default) - {"rule", "amount"}:
                raise TypeError(f"{cls.__typename__} 'default_rule' got unknown field {sorted(unknown)[0]!r}")
            default = {"rule": default.get("rule", Unset), "amount": default.get("amount", Unset)}
        case (notation, amount):
            default = {"rule": notation, "amount": amount}
        case (notation,) | str(notation):
            default = {"rule": notation, "amount": Unset}
        case _ if default is Unset or default is None:
            default = {"rule": Unset, "amount": Unset}
        case _:
            raise TypeError(f"{cls.__typename__} 'default_rule' must be a mapping or a (rule, amount) tuple")

    # Validate eagerly so a broken default fails at configuration time.
    if isinstance(default["rule"], str):
        Rule.parse(default["rule"], "default_rule")
    elif default["rule"] is not Unset and default["rule"] is not None:
        raise TypeError(f"{cls.__typename__} 'default_rule' rule must be a string")
    if default["amount"] is not Unset:
        if not isinstance(default["amount"], int) or isinstance(default["amount"], bool):
            raise TypeError(f"{cls.__typename__} 'default_rule' amount must be an integer")
        if default["amount"] < 0:
            raise InvalidAmountError(
                f"default rule amount must be a non-negative integer, got {default['amount']}",
                field="amount",
            )
    options["default_rule"] = default


def _default_prog():
    """
    Program name used in help pages and hints: the script name without extension.
    """
    return os.path.splitext(os.path.basename(sys.argv[0] if sys.argv else ""))[0] or "simplecmds"


class Program(metaclass=CommandType):
    """
    Builder of a command table.

    Registration
    - command(usage, description, callback, *, name, help): add a command; the name
      defaults to the longest alias, normalized ("--my-command" → "my_command").
    - rule(notation, amount): attach a rule to the last registered command.
    - explain(text): attach a long help text to the last registered command.
    - commands(mapping): add commands from {name: {usage, description, rule, amount,
      callback, help}} descriptors.
    All of them return the program, so calls chain.

    Options
    - version, description, prog: help/version texts.
    - debug: adds the -d/--debug default command.
    - default_rule: rule and/or amount applied to commands that did not set their own.
    - shell, fancy, colorful: fault rendering; in shell mode a fatal fault prints the
      help page and the fault on stderr and exits instead of raising.

    Running
    - finalize() → Registry (read-only), parse(prompt) → results.
    """

    __introspectable__ = (
        "directives",
        "version",
        "description",
        "prog",
        "debug",
        "default_rule",
        "shell",
        "fancy",
        "colorful",
    )

    __displayable__ = (
        "directives",
        "version",
        "prog",
        "shell",
    )

    def __new__(cls, **options):
        self = super().__new__(cls)
        self._directives = {}
        self._explicit = defaultdict(set)
        self._fallback = Unset
        self._last = Unset
        self._version = "v1.0.0"
        self._description = None
        self._prog = Unset
        self._debug = False
        self._default_rule = {"rule": Unset, "amount": Unset}
        self._shell = False
        self._fancy = False
        self._colorful = False
        return self.set(**options)

    def set(self, **options):
        """
        Update program options (see the class docstring). Returns the program.
        """
        _process_options(type(self), options)
        for name, object in options.items():
            setattr(self, "_" + name, object)
        return self

    def _register(self, directive, explicit):
        # Aliases are globally unique; check as soon as the command is known.
        if directive.name in self._directives:
            raise DuplicateCommandError(
                f"command name {directive.name!r} is already in use",
                command=directive.name,
                field="name",
            )
        for other in self._directives.values():
            if conflicts := set(directive.aliases) & set(other.aliases):
                raise DuplicateAliasError(
                    f"command {directive.name!r} alias {sorted(conflicts)[0]!r} is already used by {other.name!r}",
                    command=directive.name,
                    field="aliases",
                )
        self._directives[directive.name] = directive
        self._explicit[directive.name] = set(explicit)
        self._last = directive.name

    def command(self, usage, description=Unset, callback=Unset, /, *, name=Unset, help=Unset):
        """
        Register a command from its usage string.

        Parameters
        - usage: str, e.g. "-c --create <text>"
        - description: str shown in the help menu.
        - callback: callable(args, valid, results).
        - name: explicit name; defaults to the longest alias, normalized.
        - help: long help text for the command's own help page.

        Returns
        - the program, for chaining.
        """
        if name is Unset:
            aliases = generate_alias(usage, usage if isinstance(usage, str) else None)
            name = normalize(max(aliases, key=len))
        self._register(Directive(name, usage, description, callback=callback, help=help), ())
        return self

    def rule(self, notation, amount=0, /):
        """
        Attach a rule and an amount to the last registered command.
        """
        if self._last is Unset:
            raise TypeError(f"{type(self).__typename__} rule() must follow a command() call")
        self._directives[self._last] = self._directives[self._last].__replace__(rule=notation, amount=amount)
        self._explicit[self._last] |= {"rule", "amount"}
        return self

    def explain(self, text, /):
        """
        Attach a long help text to the last registered command.
        """
        if self._last is Unset:
            raise TypeError(f"{type(self).__typename__} explain() must follow a command() call")
        self._directives[self._last] = self._directives[self._last].__replace__(help=text)
        return self

    def commands(self, commands, /):
        """
        Register commands from a mapping of descriptors.

        Example
            program.commands({
                "create": {
                    "usage": "-c --create <text>",
                    "description": "Create a task",
                    "callback": create,
                    "rule": "<number,string>",
                    "amount": 1,
                },
            })
        """
        if not isinstance(commands, Mapping):
            raise TypeError(f"{type(self).__typename__} commands() argument must be a mapping")

        fields = {"usage", "description", "rule", "amount", "callback", "help"}
        for name, descriptor in commands.items():
            if not isinstance(descriptor, Mapping):
                raise TypeError(f"command {name!r} descriptor must be a mapping")
            if unknown := set(descriptor) - fields:
                raise TypeError(f"command {name!r} got an unexpected field {sorted(unknown)[0]!r}")
            directive = Directive(
                name,
                descriptor.get("usage", Unset),
                descriptor.get("description", Unset),
                descriptor.get("rule", Unset),
                descriptor.get("amount", 0),
                descriptor.get("callback", Unset),
                help=descriptor.get("help", Unset),
            )
            self._register(directive, {"rule", "amount"} & set(descriptor))
        return self

    def fallback(self, fallback, /):
        """
        Register a one-time handler for runtime faults.

        The handler receives every fault (errors and warnings) instead of the default
        raise/render behavior; after a fatal fault, parse() returns None.
        Usable as a decorator: @program.fallback
        """
        if not callable(fallback):
            raise TypeError(f"{type(self).__typename__} fallback must be callable")
        if self._fallback is not Unset:
            raise TypeError(f"{type(self).__typename__} fallback cannot be overridden")
        self._fallback = fallback
        return fallback

    def finalize(self):
        """
        Freeze the current table into a Registry.

        The default rule fills the rule/amount of commands that did not set their own;
        the default commands are appended by the registry itself.
        """
        directives = {}
        for name, directive in self._directives.items():
            overrides = {
                field: object for field, object in self._default_rule.items()
                if field not in self._explicit[name] and object is not Unset
            }
            directives[name] = directive.__replace__(**overrides) if overrides else directive

        return Registry(
            directives,
            fallback=self._fallback,
            version=self._version,
            description=self._description,
            prog=coalesce(self._prog, _default_prog()),
            debug=self._debug,
            shell=self._shell,
            fancy=self._fancy,
            colorful=self._colorful,
        )

    def parse(self, prompt=Unset, /):
        """
        Finalize and run: see Registry.parse.
        """
        return self.finalize().parse(prompt)

    def __invoke__(self, prompt=Unset):
        return self.parse(prompt)


def _resolve_aliases(taken, short, long):
    """
    Pick non-conflicting aliases for a default command.

    A taken short alias is replaced by its upper-case form ("-h" → "-H"); aliases that
    are still taken are dropped.
    """
    if short in taken:
        short = short.upper()
    return tuple(alias for alias in (short, long) if alias not in taken)


class Registry(metaclass=CommandType):
    """
    Finalized, read-only command table and the parse pipeline.

    Fields (read-only properties)
    - directives: name → Directive, registration order, default commands last.
    - aliases: alias → command name.
    - defaults: names of the default commands that were added.
    - version, description, prog, debug, shell, fancy, colorful: program options.
    """

    __introspectable__ = (
        "directives",
        "aliases",
        "defaults",
        "version",
        "description",
        "prog",
        "debug",
        "shell",
        "fancy",
        "colorful",
    )

    __displayable__ = (
        "directives",
        "version",
        "prog",
    )

    def __new__(
            cls,
            directives,
            /,
            *,
            fallback=Unset,
            version="v1.0.0",
            description=None,
            prog=Unset,
            debug=False,
            shell=False,
            fancy=False,
            colorful=False
    ):
        if not isinstance(directives, Mapping):
            raise TypeError(f"{cls.__typename__} 'directives' must be a mapping")

        self = super().__new__(cls)
        self._fallback = fallback
        self._version = version
        self._description = description
        self._prog = coalesce(prog, _default_prog())
        self._debug = bool(debug)
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)
        self._directives = {}
        self._aliases = {}
        self._defaults = []

        for name, directive in directives.items():
            if not isinstance(directive, Directive):
                raise TypeError(f"{cls.__typename__} directives must be directives")
            self._add(directive)

        defaults = [
            ("help", "-h", "--help", "Output help menu.", self._helper, 1),
            ("version", "-v", "--version", "Output version information.", self._versioner, 0),
        ]
        if self._debug:
            defaults.append(("debug", "-d", "--debug", "Output debug information.", self._debugger, 0))

        for name, short, long, description, callback, amount in defaults:
            if name in self._directives:
                continue
            if not (aliases := _resolve_aliases(self._aliases, short, long)):
                continue
            self._add(Directive(
                name,
                " ".join(aliases),
                description,
                amount=amount,
                callback=callback,
                aliases=aliases,
            ))
            self._defaults.append(name)

        return self

    def _add(self, directive):
        if directive.name in self._directives:
            raise DuplicateCommandError(
                f"command name {directive.name!r} is already in use",
                command=directive.name,
                field="name",
            )
        for alias in directive.aliases:
            if (other := self._aliases.setdefault(alias, directive.name)) != directive.name:
                raise DuplicateAliasError(
                    f"command {directive.name!r} alias {alias!r} is already used by {other!r}",
                    command=directive.name,
                    field="aliases",
                )
        self._directives[directive.name] = directive

    def lookup(self, token, /):
        """
        Return the name of the command invoked by token, or Unset.
        """
        return self._aliases.get(token, Unset)

    def trigger(self, fault, /, **options):
        """
        Surface a runtime fault with this registry's options.

        - With a fallback, the fault is handed to it and its return value is returned.
        - In shell mode, errors first print the help page on stderr.
        - Then the fault fires: raise/warn (non-shell) or render (shell, errors exit).
        """
        if not callable(getattr(fault, "__replace__", None)):
            raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
        fault = fault.__replace__(
            **options, prog=self.prog, shell=self.shell, fancy=self.fancy, colorful=self.colorful
        )
        if self._fallback:
            return self._fallback(fault)
        if self.shell and isinstance(fault, CommandException):
            self._helper(stderr=True)
        trigger(fault)

    def parse(self, prompt=Unset, /):
        """
        Run the pipeline over a prompt and return the results.

        Parameters
        - prompt: Unset (sys.argv[1:]) | str (shell-like) | Iterable[str]

        Returns
        - MappingProxyType[str, Result] for every registered command, or None when a
          fatal fault was handed to a fallback.

        Raises
        - UnknownCommandError / MissingCommandError outside shell mode, when the first
          token is not a command.
        """
        tokens = expand_aliases(_sanitize_prompt(prompt), self)
        try:
            namespace = parse_args(tokens, self)
        except CommandException as fault:
            return self.trigger(fault)

        results = build_commands(self, namespace)
        issue_callbacks(self, results)
        return results

    def __invoke__(self, prompt=Unset):
        return self.parse(prompt)

    def _styles(self, palette):
        return defaultdict(str, palette | getattr(__import__("__main__"), "__styles__", {}))

    def _helper(self, args=(), valid=True, results=Unset, /, *, stderr=False):
        """
        Render the help menu.

        Called as the help command callback: with a command name (or alias) as first
        argument, the page of that command is shown; otherwise the main page.

        Palette keys (override through __styles__ in __main__)
        - program-label, program-name, version, description
        - section-label, usage, command-description, panel-title
        """
        console = Console(stderr=stderr)
        styles = self._styles({
            "program-label": "bold #00E6FF",
            "program-name": "bold #FF4D94",
            "version": "#FFD600",
            "description": "italic #A3A3A3",
            "section-label": "bold #FFFFFF",
            "usage": "bold #36C5F0",
            "command-description": "#9CA3AF",
            "panel-title": "bold #FF4D94",
        })

        def styler(style):
            return styles[style] if self.colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            return Text(str(fragment), styler(style))

        target = args[0] if args and args[0] is not True else Unset
        if target is not Unset:
            target = self._directives.get(str(target)) or self._directives.get(self.lookup(str(target)))

        header = Text.assemble(
            text("Program: ", "program-label"),
            text(self.prog.capitalize(), "program-name"),
            " (",
            text(self.version, "version"),
            ")",
        )
        lines = [header]

        if target:
            lines.append(Text.assemble(text("Command: ", "program-label"), text(", ".join(target.aliases), "usage")))
            lines.append(Text(""))
            lines.append(text(
                target.help or target.description or "There is no help page for this command.", "description"
            ))
            lines.append(Text(""))
            lines.append(Text.assemble(text("Usage: ", "section-label"), text(f"{self.prog} {target.usage}", "usage")))
        else:
            if self.description:
                lines.append(Text.assemble(text("Description: ", "program-label"), text(self.description, "description")))

            def section(label, names):
                table = Table.grid(padding=(0, 4))
                table.add_column(no_wrap=True)
                table.add_column()
                for name in names:
                    directive = self._directives[name]
                    table.add_row(text(directive.usage, "usage"), text(directive.description, "command-description"))
                return [Text(""), text(label, "section-label"), table]

            lines.extend(section("Commands:", [name for name in self._directives if name not in self._defaults]))
            if self._defaults:
                lines.extend(section("Defaults:", self._defaults))
            lines.append(Text(""))
            lines.append(Text.assemble(text("Usage: ", "section-label"), text(f"{self.prog} <command> [...args]", "usage")))

        renderable = Group(*lines)
        if self.fancy:
            renderable = Panel(renderable, title=text(self.prog, "panel-title"), title_align="left")
        console.print(renderable)

    def _versioner(self, args=(), valid=True, results=Unset, /):
        """
        Print the program name and version.
        """
        styles = self._styles({"program-name": "bold #FF4D94", "version": "#FFD600"})
        Console().print(Text.assemble(
            (self.prog, styles["program-name"] if self.colorful else ""),
            " ",
            (str(self.version), styles["version"] if self.colorful else ""),
        ))

    def _debugger(self, args=(), valid=True, results=Unset, /):
        """
        Pretty-print the directive table.
        """
        pprint(self.directives, console=Console(), expand_all=True)


def invoke(object, prompt=Unset, /):
    """
    Convenience runner for programs and registries.

    Parameters
    - object: an instance providing __invoke__(prompt) (Program or Registry).
    - prompt: Unset (sys.argv[1:]) | str | Iterable[str]

    Returns
    - whatever __invoke__ returns (the results mapping, or None).
    """
    if hasattr(object, "__invoke__") and callable(object.__invoke__):
        return object.__invoke__(prompt)

    target = "argument" if prompt is Unset else "first argument"
    raise TypeError(f"invoke() {target} must implement __invoke__ method") from None


__all__ = (
    # Public API surface for consumers of simplecmds.commands.
    # These names are re-exported from the package __init__.
    "Directive",
    "Program",
    "Registry",
    "Result",
    "build_commands",
    "issue_callbacks",
    "invoke",
)

# Internal metaclass; not part of the public API.
del CommandType
