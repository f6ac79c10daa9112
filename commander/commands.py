"""
Commander command layer: describe interactive commands and decide how they run.

What this module provides
- Command: an immutable description of one interactive command:
  • name and description (the description is display-only).
  • what to run: a handler callback, or a delegate commander that takes over
    the terminal with the remaining tokens as its prefix arguments.
  • how to validate arguments: a custom validator, or a fixed set of allowed
    first arguments.
  • how to complete arguments: an optional completer returning suggestions.

- Dispatch variants:
  • Handler(callback) | Delegate(commander) | Incomplete()
  • resolve(command) picks the variant once, when the command is registered.

- Validation:
  • validate(command, args, options): the three-tier acceptance policy.

- Factory:
  • command(...): build a Command directly or as a decorator around a handler.

Quick start
    from commander import Commander, command, suggestions

    @command(options=("linux", "windows"), completer=lambda args: suggestions("linux", "windows"))
    def build(commander, command, args):
        print("building for", *args)

    shell = Commander(">>> ")
    shell.register(build)
    shell.run()

Design notes
- Command never checks handler/delegate exclusivity; the registry owns that
  invariant (see Registry.register).
- Nothing here holds mutable state: commands are safe to share between
  registries.
"""
import functools
import inspect
import operator
import re
from collections.abc import Iterable

from .utils import *


class CommandType(type):
    """
    Metaclass that gives Command a stable, readable representation.

    Responsibilities
    - Derive __typename__ from the class name (camel-case split with hyphens)
      for consistent, human-friendly labels in errors.
    - Expose every name listed in __introspectable__ as a read-only property
      backed by the private "_name" attribute (via mirror()).
    - Provide __repr__/__rich_repr__ built from the introspectable fields.
    """
    __introspectable__ = ()

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
            - command(name='build', descr=None, ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


class Command(metaclass=CommandType):
    """
    Description of a registrable, interactive command.

    Fields (all read-only)
    - name: str, without spaces. May be empty here; the registry rejects empty names.
    - descr: str | None. Shown beside the name in completion menus.
    - handler: callable(commander, command, args) | None.
    - delegate: commander | None. Receives the remaining tokens via run(*args).
    - completer: callable(args) -> Iterable[Suggestion | str] | None.
    - options: frozenset[str] | None. Allowed first arguments.
    - validator: callable(args) -> bool | None. Overrides options when set.
    """
    __introspectable__ = (
        "name",
        "descr",
        "handler",
        "delegate",
        "completer",
        "options",
        "validator",
    )

    def __init__(
            self,
            name="",
            /,
            descr=Unset,
            *,
            handler=Unset,
            delegate=Unset,
            completer=Unset,
            options=Unset,
            validator=Unset,
    ):
        if not isinstance(name, str):
            raise TypeError(f"{type(self).__typename__} 'name' must be a string")
        # the tokenizer splits on spaces, so such a name could never be dispatched
        if " " in name:
            raise ValueError(f"{type(self).__typename__} 'name' cannot contain spaces")
        if not isinstance(descr, str | Unset):
            raise TypeError(f"{type(self).__typename__} 'descr' must be a string")
        for field, object in (("handler", handler), ("completer", completer), ("validator", validator)):
            if object is not Unset and not callable(object):
                raise TypeError(f"{type(self).__typename__} {field!r} must be callable")
        # duck-typed: anything that can run(*prefix) may act as a delegate
        if delegate is not Unset and not callable(getattr(delegate, "run", None)):
            raise TypeError(f"{type(self).__typename__} 'delegate' must be a commander")
        if options is not Unset:
            if isinstance(options, str) or not isinstance(options, Iterable):
                raise TypeError(f"{type(self).__typename__} 'options' must be an iterable of strings")
            options = tuple(options)
            if not all(isinstance(option, str) for option in options):
                raise TypeError(f"{type(self).__typename__} 'options' must be an iterable of strings")
            options = frozenset(options)

        self._name = name
        self._descr = coalesce(descr)
        self._handler = coalesce(handler)
        self._delegate = coalesce(delegate)
        self._completer = coalesce(completer)
        self._options = coalesce(options)
        self._validator = coalesce(validator)


class Handler:
    """Run a callback with (commander, command, args)."""
    __slots__ = ("callback",)
    __match_args__ = ("callback",)

    def __init__(self, callback):
        self.callback = callback

    def __repr__(self):
        return f"handler({self.callback!r})"


class Delegate:
    """Hand the remaining tokens to another commander's run loop."""
    __slots__ = ("commander",)
    __match_args__ = ("commander",)

    def __init__(self, commander):
        self.commander = commander

    def __repr__(self):
        return f"delegate({self.commander!r})"


class Incomplete:
    """Neither a handler nor a delegate was configured."""
    __slots__ = ()

    def __repr__(self):
        return "incomplete()"


def resolve(command, /):
    """
    Pick the dispatch variant for a command.

    Callers must have rejected commands carrying both a handler and a delegate.
    """
    if command.handler is not None:
        return Handler(command.handler)
    if command.delegate is not None:
        return Delegate(command.delegate)
    return Incomplete()


def validate(command, args, /, options=Unset):
    """
    Decide whether a command accepts the given arguments.

    Policy (first match wins)
    1. command.validator is set: its verdict is final, options are ignored.
    2. options are set: args must be non-empty and args[0] must be an option.
       Later arguments are unconstrained.
    3. otherwise every argument list is accepted.

    Parameters
    - command: Command
    - args: Sequence[str], the tokens after the command name.
    - options: frozenset[str] | None | Unset
      Precomputed membership set (see Registry.register). Unset falls back to
      command.options.
    """
    if command.validator is not None:
        return bool(command.validator(args))
    if (options := coalesce(options, command.options)) is not None:
        return bool(args) and args[0] in options
    return True


def command(source=Unset, /, *args, **kwargs):
    """
    Create a Command or return a decorator that builds one around a handler.

    Invocation modes
    - Direct:
        build = command("build", "compile a target", handler=on_build)
    - Decorator:
        @command(options=("prod", "dev"))
        def env(commander, command, args): ...
      The handler's __name__ is the default name and its docstring the
      default description.

    Returns
    - Command | Callable[[Callable], Command]
    """
    if isinstance(source, str):
        return Command(source, *args, **kwargs)

    @rename("command")
    def wrapper(handler, /):
        if not callable(handler):
            raise TypeError("@command() must be applied to a callable")
        if args:
            raise TypeError("@command() takes keyword arguments only")
        options = dict(kwargs)
        return Command(
            options.pop("name", getattr(handler, "__name__", "")),
            options.pop("descr", inspect.getdoc(handler) or Unset),
            handler=handler,
            **options
        )

    return wrapper(source) if source is not Unset else wrapper


__all__ = (
    # Public API surface for consumers of commander.commands.
    # These names are re-exported from the package __init__.
    "Command",
    "Handler",
    "Delegate",
    "Incomplete",
    "command",
    "validate",
    "resolve",
)

# Remove the internal metaclass from the module namespace.
del CommandType
