"""
Commander faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every issue the
  dispatcher can surface. Codes are grouped by domain to keep logs and
  searches predictable.
- CommandException: base type that carries message + options and knows how
  to render itself on a rich console.
- RegistrationError family: configuration mistakes found by Registry.register();
  always raised to the caller, never printed.
- Dispatch faults: problems with a submitted line; printed to the commander's
  writer as a single line, after which the interactive loop continues.
- trigger(): central entry point to surface any fault.

Integration
- Dispatch code builds a fault and calls trigger(fault, shell=True, console=...).
- In non-shell mode (or without a console) exceptions are raised; in shell mode
  they are rendered via rich.
- The host application may expose __codes__ (FaultCode -> label) and
  __styles__ (style name -> rich style) in __main__ to remap codes and colors.
"""
import copy
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.text import Text

from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes used across the dispatcher (stable identifiers).

    grouping (by high-level domain)
    - dispatch (111xx)
      • COMMAND_NOT_FOUND, INVALID_ARGUMENTS, INCOMPLETE_COMMAND, HANDLER_ERROR
    - registration (112xx)
      • MISSING_NAME, DUPLICATE_NAME, CONFLICTING_DISPATCH
    """
    # --- dispatch errors (111xx) ---
    COMMAND_NOT_FOUND           = 11101
    INVALID_ARGUMENTS           = 11111
    INCOMPLETE_COMMAND          = 11112
    HANDLER_ERROR               = 11131

    # --- registration errors (112xx) ---
    MISSING_NAME                = 11201
    DUPLICATE_NAME              = 11202
    CONFLICTING_DISPATCH        = 11203

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CommandException(Exception):
    """
    base fault: a message plus free-form options (code, console, colorful, ...).

    subclasses pin their FaultCode through the class attribute 'code' so callers
    only have to provide the message.
    """
    code = Unset

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType({"code": type(self).code} | options)

    def __str__(self):
        return self.message if self.message is not Unset else ""

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            "error-message": "bold #FF4DA6",  # friendly pinky message
        } | getattr(main, "__styles__", {}))

        if not self.options.get("colorful", False):
            return Text(str(self))
        return Text(str(self), styles["error-message"])

    def __trigger__(self):
        if not self.options.get("shell", False) or self.options.get("console") is None:
            raise self from None
        # one fault, one line: never let the console wrap the message
        self.options["console"].print(self, soft_wrap=True)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class RegistrationError(CommandException): ...
class MissingNameError(RegistrationError):
    code = FaultCode.MISSING_NAME
class DuplicateNameError(RegistrationError):
    code = FaultCode.DUPLICATE_NAME
class ConflictingDispatchError(RegistrationError):
    code = FaultCode.CONFLICTING_DISPATCH


class DispatchError(CommandException): ...
class CommandNotFoundError(DispatchError):
    code = FaultCode.COMMAND_NOT_FOUND
class InvalidArgumentsError(DispatchError):
    code = FaultCode.INVALID_ARGUMENTS
class IncompleteCommandError(DispatchError):
    code = FaultCode.INCOMPLETE_COMMAND
class HandlerError(DispatchError):
    code = FaultCode.HANDLER_ERROR


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into the fault via copy.replace(fault, **options) before triggering.
    - with shell=True and a console, the fault is printed; otherwise it is raised.

    typical options
    - shell, console, colorful, and any other context a renderer may want to show.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "CommandException",
    "RegistrationError",
    "MissingNameError",
    "DuplicateNameError",
    "ConflictingDispatchError",
    "DispatchError",
    "CommandNotFoundError",
    "InvalidArgumentsError",
    "IncompleteCommandError",
    "HandlerError",
    "FaultCode",
    "trigger",
)
