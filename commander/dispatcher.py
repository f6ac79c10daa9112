"""
Commander dispatcher: the interactive read-dispatch loop.

What this module provides
- Commander: owns a Registry, a prefix template and an output writer, and runs
  the loop
      read line -> tokenize -> look up -> validate -> run handler | enter delegate
  until the line editor reports end of input (Ctrl+D / Ctrl+C).

Prefix state
- run(*prefix) stores its arguments as the commander's prefix. They fill the
  printf-style template to render the prompt ("%s>" % ("prod",) -> "prod>")
  and stay readable by handlers through commander.prefix.
- A delegate command calls delegate.run(*remaining_tokens): the child takes the
  terminal until its own end of input, then the parent resumes where it was.

Faults
- Problems with a submitted line (unknown command, rejected arguments,
  incomplete command, failing handler) are printed to the writer as a single
  line and the loop continues. run() itself never raises for them.

Line editing
- Input is read from a prompt_toolkit PromptSession created on first use, with
  a CommandCompleter attached. Any object with a compatible
  prompt(message, **options) method may be supplied instead.
"""
import logging
import sys

from prompt_toolkit import PromptSession
from rich.console import Console

from .commands import Handler, Delegate, Incomplete, command, validate
from .completion import CommandCompleter, complete
from .faults import (
    CommandNotFoundError,
    InvalidArgumentsError,
    IncompleteCommandError,
    HandlerError,
    trigger,
)
from .registry import Registry
from .utils import *

logger = logging.getLogger(__name__)


class Commander:
    """
    Interactive command dispatcher.

    Parameters
    - template: str
      printf-style prompt template with one %s per expected prefix argument.
      Without prefix arguments the template is shown as-is.
    - writer: TextIO | Unset (keyword-only)
      Sink for fault messages; defaults to sys.stdout.
    - session: object | Unset (keyword-only)
      Line editor providing prompt(message); defaults to a PromptSession.
    - casesensitive: bool | Unset (keyword-only)
      Completion prefix matching mode; defaults to False.
    - colorful: bool | Unset (keyword-only)
      Style fault messages; defaults to False.
    - **options
      Forwarded to prompt_toolkit.PromptSession (style, history, ...).

    Notes
    - Not thread-safe. One commander runs one loop at a time.
    """
    template = mirror("template")
    prefix = mirror("prefix")
    registry = mirror("registry")
    casesensitive = mirror("casesensitive")
    colorful = mirror("colorful")

    def __init__(
            self,
            template,
            /,
            *,
            writer=Unset,
            session=Unset,
            casesensitive=Unset,
            colorful=Unset,
            **options
    ):
        if not isinstance(template, str):
            raise TypeError("commander 'template' must be a string")
        if session is not Unset and not callable(getattr(session, "prompt", None)):
            raise TypeError("commander 'session' must provide a prompt() method")

        self._template = template
        self._prefix = ()
        self._registry = Registry()
        self._session = session
        self._options = options
        self._casesensitive = bool(coalesce(casesensitive, False))
        self._colorful = bool(coalesce(colorful, False))
        self.writer = coalesce(writer, sys.stdout)

    @property
    def writer(self):
        return self._writer

    @writer.setter
    def writer(self, writer):
        if not callable(getattr(writer, "write", None)):
            raise TypeError("commander 'writer' must be a writable stream")
        self._writer = writer
        self._console = Console(file=writer, highlight=False)

    @property
    def prompt(self):
        """
        The live prompt: the template filled with the prefix arguments, when any.

        A template that does not match the number of prefix arguments, or that
        %-formatting rejects, is shown unfilled.
        """
        if self._prefix:
            try:
                return self._template % self._prefix
            except (TypeError, ValueError):
                logger.warning("prompt template %r does not fit prefix %r", self._template, self._prefix)
        return self._template

    def register(self, command, /):
        """
        Register a command; see Registry.register for the contract.

        Returns the command, so this also works as a decorator on Command objects.
        """
        self._registry.register(command)
        return command

    def command(self, source=Unset, /, *args, **kwargs):
        """
        Build a command with commander.commands.command(...) and register it here.

        Supports the same direct and decorator forms:
            @shell.command(options=("prod", "dev"))
            def env(commander, command, args): ...
        """
        if source is Unset:
            @rename("command")
            def wrapper(handler, /):
                return self.register(command(handler, *args, **kwargs))

            return wrapper
        return self.register(command(source, *args, **kwargs))

    def complete(self, text, word, /):
        """
        Suggestions for the text before the cursor (see completion.complete).
        """
        return complete(self._registry, text, word, casesensitive=self._casesensitive)

    def dispatch(self, line, /):
        """
        Handle one submitted line.

        Steps
        - tokenize; an empty line is ignored.
        - look up the first token; unknown names are reported.
        - validate the remaining tokens; rejected lists are reported.
        - run the handler (failures are reported), enter the delegate's loop,
          or report an incomplete command.
        """
        if not (tokens := tokenize(line)):
            return
        name, args = tokens[0], tokens[1:]

        if (entry := self._registry.get(name)) is None:
            return self._fault(CommandNotFoundError(f"Command {name} not found"))
        if not validate(entry.command, args, entry.options):
            return self._fault(InvalidArgumentsError(f"Invalid arguments [{' '.join(args)}]"))

        logger.debug("dispatching %r with %r", name, args)
        match entry.action:
            case Handler(callback):
                try:
                    callback(self, entry.command, args)
                except Exception as error:
                    logger.debug("command %r failed", name, exc_info=True)
                    self._fault(HandlerError(f"ERROR: {error}"))
            case Delegate(commander):
                logger.debug("entering delegate of %r with prefix %r", name, args)
                commander.run(*args)
                logger.debug("left delegate of %r", name)
            case Incomplete():
                self._fault(IncompleteCommandError(f"Command {name} incomplete"))

    def run(self, *prefix):
        """
        Store the prefix arguments and process lines until end of input.

        Returns None once the line editor raises EOFError or KeyboardInterrupt.
        """
        if not all(isinstance(argument, str) for argument in prefix):
            raise TypeError("run() arguments must be strings")
        self._prefix = prefix
        session = self._resolve_session()

        while True:
            try:
                line = session.prompt(self.prompt)
            except (EOFError, KeyboardInterrupt):
                logger.debug("end of input with prefix %r", self._prefix)
                break
            self.dispatch(line)

    def _resolve_session(self):
        if self._session is Unset:
            self._session = PromptSession(
                completer=CommandCompleter(self),
                complete_while_typing=True,
                **self._options
            )
        return self._session

    def _fault(self, fault):
        logger.debug("fault %s: %s", fault.code.normalize(), fault)
        trigger(fault, shell=True, console=self._console, colorful=self._colorful)

    def __repr__(self):
        return f"commander(template={self._template!r}, prefix={self._prefix!r}, registry={self._registry!r})"


__all__ = (
    "Commander",
)
