"""
Switchyard faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue
  (errors and warnings). Codes are grouped by domain to keep copy consistent
  and make logs/searches predictable.
- DispatchException / DispatchWarning: base types that carry message + options and
  know how to render themselves in a friendly, lowercased and actionable way.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

Options carried by every fault
- name / names: the offending switch, parameter or command name(s).
- code: FaultCode; title: short headline; hint: one actionable sentence.
- tool: the Dispatcher or Command that surfaced the fault (used for the header).
- shell, fancy, colorful: runtime flags merged in by the dispatcher.

Integration
- The core raises faults at the point of detection. The dispatcher re-triggers them
  with its runtime flags: outside shell mode they propagate as exceptions, in shell
  mode they are rendered through rich on stderr and the process exits with status 1.
"""
import copy
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
    canonical fault codes used across the dispatcher (stable identifiers).

    grouping (by high-level domain)
    - registration (21xxx)
      • DUPLICATE_DEFINITION, COMMAND_ALREADY_CONFIGURED
    - command selection (22xxx)
      • NO_COMMAND_SELECTED
    - token classification (23xxx)
      • UNKNOWN_SWITCH, UNKNOWN_PARAMETER, MISSING_PARAMETER_VALUE
    - values (24xxx)
      • MISSING_MANDATORY_PARAMETERS, INVALID_PARAMETER_TYPE
    - warnings (29xxx)
      • SHADOWED_PARAMETER

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- registration errors (21xxx) ---
    DUPLICATE_DEFINITION         = 21101
    COMMAND_ALREADY_CONFIGURED   = 21102

    # --- selection errors (22xxx) ---
    NO_COMMAND_SELECTED          = 22101

    # --- token errors (23xxx) ---
    UNKNOWN_SWITCH               = 23101
    UNKNOWN_PARAMETER            = 23102
    MISSING_PARAMETER_VALUE      = 23111

    # --- value errors (24xxx) ---
    MISSING_MANDATORY_PARAMETERS = 24101
    INVALID_PARAMETER_TYPE       = 24111

    # --- warnings (29xxx) ---
    SHADOWED_PARAMETER           = 29101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, kind):
    """
    build the rich renderable shared by exceptions and warnings.

    layout
    - header: "[ <prog> — <code> | <Title> ]"
    - body: the message, then " → hint" on its own line.
    - fancy: the body is wrapped in a Panel titled by the header.
    """
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", False)
    fancy = options.get("fancy", False)

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    prog = getattr(main, "__prog__", getattr(options.get("tool"), "name", "switchyard"))
    code = options.get("code")

    header = Text.assemble(
        "[ ",
        text(prog, styler("prog-name")),
        " — ",
        text(code.normalize() if isinstance(code, FaultCode) else "-", styler("code")),
        " | ",
        text(str(options.get("title", kind)).title(), styler(kind + "-title")),
        " ]"
    )
    message = text(fault.message, styler(kind + "-message"))

    renders = [message]
    if hint := options.get("hint"):
        renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

    if fancy:
        return Panel(Group(*renders), title=header, title_align="left")
    return Group(header, *renders)


class DispatchException(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message) if self.message is not Unset else ""

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        }, "error")

    def __trigger__(self):
        if not self.options.get("shell"):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class DuplicateDefinitionError(DispatchException): ...
class CommandAlreadyConfiguredError(DuplicateDefinitionError): ...
class NoCommandSelectedError(DispatchException): ...
class UnknownSwitchError(DispatchException): ...
class UnknownParameterError(DispatchException): ...
class MissingParameterValueError(DispatchException): ...
class MissingMandatoryParametersError(DispatchException): ...
class InvalidParameterTypeError(DispatchException): ...


class DispatchWarning(ABC, Warning):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message) if self.message is not Unset else ""

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "warning-message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        }, "warning")

    def __trigger__(self):
        if not self.options.get("shell"):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ShadowedParameterWarning(DispatchWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace(fault, **options) before triggering.
    - outside shell mode exceptions are raised and warnings go through warnings.warn;
      in shell mode both are rendered via the rich console (errors then exit).

    typical options
    - tool, shell, fancy, colorful, title, code, hint, name, names, index.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "DispatchException",
    "DuplicateDefinitionError",
    "CommandAlreadyConfiguredError",
    "NoCommandSelectedError",
    "UnknownSwitchError",
    "UnknownParameterError",
    "MissingParameterValueError",
    "MissingMandatoryParametersError",
    "InvalidParameterTypeError",
    "DispatchWarning",
    "ShadowedParameterWarning",
    "FaultCode",
    "trigger",
    "getdoc",
)
