"""
Commander utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the registry, dispatcher and completion layers.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/""/[].

- @rename("name")
  • Assign stable __name__/__qualname__ to generated callables for clean tracebacks.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr) with copies
    for containers to discourage accidental mutation of public API state.

- tokenize(line)
  • Naive whitespace tokenizer used for dispatch and completion (no quoting, no escaping).

- Suggestion / suggestions(*texts)
  • Display pairs offered while the user types, and a shortcut to build them from plain text.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> tokenize("  build   linux x64 ")
    ['build', 'linux', 'x64']
    >>> suggestions("linux", "windows")
    [Suggestion(text='linux', descr=None), Suggestion(text='windows', descr=None)]
"""
from collections import namedtuple
from collections.abc import Sequence, Mapping, Set
from typing import final


@final
class UnsetType:
    """
    Sentinel for "argument not given", for parameters where None is a real value.

    Falsey, printed as "Unset", a single instance per process, and usable on the
    right of a PEP 604 union (isinstance(descr, str | Unset)).
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __ror__(self, other, /):
        return other | type(self)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()


def coalesce(object, default=None, /):
    """Replace Unset with default; any other value, None included, is kept."""
    return object if object is not Unset else default


def rename(name, /):
    """
    Decorator giving a generated function a stable __name__ and __qualname__.
    """
    def wrapper(function):
        function.__name__ = function.__qualname__ = name
        return function

    return wrapper


def _immortalize(object):
    """
    Copy container values so callers cannot mutate the backing field.

    Behavior
    - tuple/frozenset: returned as-is (already immutable).
    - Sequence (non-string): returns a new list.
    - Mapping: returns a new dict with the same keys.
    - Set: returns a new set.
    - Anything else: returned as-is.

    Notes
    - Copies are shallow on purpose: stored commands, commanders and callables
      must keep their identity.
    """
    if isinstance(object, tuple | frozenset | str):
        return object
    elif isinstance(object, Sequence):
        return list(object)
    elif isinstance(object, Mapping):
        return dict(object)
    elif isinstance(object, Set):
        return set(object)
    return object


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The generated property reads "_{name}" from the instance and returns a copy
    for mutable container types.

    Example
    - Given self._prefix, declare prefix = mirror("prefix") to expose it safely.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    return property(getter)


def tokenize(line, /):
    """
    Split a raw input line into its non-empty, space-delimited tokens.

    Splitting happens on single spaces only; consecutive spaces collapse because
    the empty fragments they produce are discarded. There is no quoting or
    escaping: 'say "hello world"' yields ['say', '"hello', 'world"'].

    Parameters
    - line: str

    Returns
    - list[str], possibly empty (for "" or an all-space line).
    """
    if not isinstance(line, str):
        raise TypeError("tokenize() argument must be a string")
    return [token for token in line.split(" ") if token]


Suggestion = namedtuple("Suggestion", ("text", "descr"), defaults=(None,))
Suggestion.__doc__ = """
A completion candidate: the text to insert and an optional description shown beside it.
"""


def suggestions(*texts):
    """
    Build description-less suggestions from plain strings.

    Handy inside argument completers:
        def complete_build(args):
            return suggestions("linux", "windows") if not args else []
    """
    for text in texts:
        if not isinstance(text, str):
            raise TypeError("suggestions() arguments must be strings")
    return [Suggestion(text) for text in texts]


__all__ = (
    # Public API surface for consumers of commander.utils.
    # Note: Unset and its type are not intended to be used by external users.

    # Functions
    "coalesce",
    "rename",
    "mirror",
    "tokenize",
    "suggestions",

    # Types
    "UnsetType",
    "Suggestion",

    # Constants
    "Unset",
)
