"""
Command registry: the name -> command table behind one commander.

Responsibilities
- Enforce the registration contract (non-empty, unique names; a handler and a
  delegate are mutually exclusive).
- Resolve each command's dispatch variant and option set once, at registration.
- Keep the ordered suggestion list used to complete command names
  (first registered, first suggested).

Registration is all-or-nothing: every check runs before any state changes, so a
failed register() leaves the registry exactly as it was.
"""
import logging
from collections import namedtuple
from types import MappingProxyType

from .commands import Command, resolve
from .faults import MissingNameError, DuplicateNameError, ConflictingDispatchError
from .utils import Suggestion

logger = logging.getLogger(__name__)

Entry = namedtuple("Entry", ("command", "action", "options"))
Entry.__doc__ = """
A registered command with its resolved dispatch variant and frozen option set.
"""


class Registry:
    """
    Insertion-ordered table of registered commands.

    Read access
    - len(registry), name in registry, iter(registry) -> names in order
    - registry[name] -> Entry (KeyError when absent), registry.get(name)
    - registry.commands -> read-only mapping name -> Command
    - registry.suggestions -> tuple of Suggestion(name, descr) in order

    Not thread-safe: a registry is meant to be driven by a single loop.
    """

    def __init__(self):
        self._entries = {}
        self._suggestions = []

    def register(self, command, /):
        """
        Add a command.

        Raises
        - TypeError: when command is not a Command.
        - MissingNameError: when the name is empty.
        - DuplicateNameError: when the name is already registered.
        - ConflictingDispatchError: when both handler and delegate are set.

        Returns
        - The Entry stored for the command.
        """
        if not isinstance(command, Command):
            raise TypeError("register() argument must be a command")
        if not command.name:
            raise MissingNameError("command name is missing")
        if command.name in self._entries:
            raise DuplicateNameError(f"command {command.name} already registered")
        if command.handler is not None and command.delegate is not None:
            raise ConflictingDispatchError(
                f"command {command.name} cannot use both a handler and a delegate"
            )

        entry = Entry(command, resolve(command), command.options)
        self._entries[command.name] = entry
        self._suggestions.append(Suggestion(command.name, command.descr))
        logger.debug("registered command %r as %r", command.name, entry.action)
        return entry

    def get(self, name, default=None, /):
        return self._entries.get(name, default)

    @property
    def commands(self):
        return MappingProxyType({name: entry.command for name, entry in self._entries.items()})

    @property
    def suggestions(self):
        return tuple(self._suggestions)

    def __getitem__(self, name):
        return self._entries[name]

    def __contains__(self, name):
        return name in self._entries

    def __iter__(self):
        return iter(tuple(self._entries))

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        return f"registry({', '.join(self._entries)})"


__all__ = (
    "Registry",
    "Entry",
)
