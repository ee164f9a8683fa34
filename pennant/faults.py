"""
Pennant faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue
  (errors and warnings). Codes are grouped by domain to keep logs/searches predictable.
- ArgsError / ArgsWarning: base types that carry a message, an optional scope,
  an optional usage suffix and free-form options, and know how to render themselves
  both as plain text (str) and as rich renderables (__rich__).
- trigger(): central entry point to surface any fault (respecting shell/colorful/fancy).

Plain rendering
- str(error) is "<scope>: <message>\\n\\n<usage>"; an empty scope or usage is dropped
  together with its separator.

Integration
- The session raises faults directly; host programs may call trigger(fault, shell=True)
  to print them through rich and exit with status 1 instead.
"""
import copy
import sys
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)

SCOPE_PARSE = "parse"


class FaultCode(IntEnum):
    """
    canonical fault codes used across the library (stable identifiers).

    grouping (by high-level domain)
    - resolution (1110x/1111x)
      • SYNTAX, MISSING_ARGUMENT
    - access (1112x)
      • VALUE_NOT_FOUND, COERCION_FAILED
    - validation (1113x)
      • VALIDATION_FAILED
    - warnings (12xxx)
      • DUPLICATED_OPTION
    """
    # --- resolution errors (11xxx) ---
    SYNTAX                      = 11101
    MISSING_ARGUMENT            = 11111

    # --- access errors (11xxx) ---
    VALUE_NOT_FOUND             = 11121
    COERCION_FAILED             = 11122

    # --- validation errors (11xxx) ---
    VALIDATION_FAILED           = 11131

    # --- warnings (12xxx) ---
    DUPLICATED_OPTION           = 12111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _describe(scope, message, usage):
    description = "%s: %s" % (scope, message) if scope else message
    if usage:
        description += "\n\n" + usage
    return description


def _render(fault, styles):
    """
    shared rich renderer for errors and warnings.

    layout
    - header: "[ prog — code ]" when a program name is known, otherwise "[ code ]"
    - body:   "<scope>: <message>" with the scope highlighted
    - footer: the usage suffix, dimmed, when present
    """
    main = __import__("__main__")
    styles = defaultdict(str, styles | getattr(main, "__styles__", {}))
    colorful = fault.options.get("colorful", True)

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), styles[style] if colorful else "")

    prog = coalesce(fault.options.get("prog", Unset), getattr(main, "__prog__", None))
    code = text(fault.code.normalize() if fault.code else type(fault).__name__, "code")
    header = Text.assemble("[ ", text(prog, "prog-name"), " — ", code, " ]") if prog else Text.assemble("[ ", code, " ]")
    body = Text.assemble(text(fault.scope, "scope"), ": " if fault.scope else "", text(fault.message, "message"))
    renders = [body]
    if fault.usage:
        renders.append(Text(""))
        renders.append(text(fault.usage, "usage"))

    if fault.options.get("fancy", False):
        return Panel(Group(*renders), title=header, title_align="left")
    return Group(header, *renders)


class ArgsError(Exception):
    """
    base error for every fault raised by an argument session.

    attributes
    - message: human-readable description (without scope or usage).
    - scope:   option name, "parse", or a validation label; "" when absent.
    - usage:   optional usage text appended after a blank line; "" when absent.
    - options: read-only mapping of extra context (raw value, bound, option, ...).
    """
    code = Unset

    def __init__(self, message, /, scope=Unset, usage=Unset, **options):
        if not isinstance(message, str):
            raise TypeError("%s message must be a string" % type(self).__name__)
        self.message = message
        self.scope = coalesce(scope, "")
        self.usage = coalesce(usage, "")
        self.options = MappingProxyType(options)
        super().__init__(_describe(self.scope, self.message, self.usage))

    def __str__(self):
        return _describe(self.scope, self.message, self.usage)

    def __getattr__(self, name):
        try:
            return object.__getattribute__(self, "options")[name]
        except KeyError:
            raise AttributeError("%r object has no attribute %r" % (type(self).__name__, name)) from None

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "scope": "bold #FF4DA6",  # friendly pinky scope
            "message": "#C8C8D0",  # soft light gray message
            "usage": "#9CE19C dim",  # gentle green usage
        })

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        scope = overrides.pop("scope", self.scope)
        usage = overrides.pop("usage", self.usage)
        return type(self)(self.message, scope=scope, usage=usage, **{**self.options, **overrides})


class ArgumentSyntaxError(ArgsError):
    code = FaultCode.SYNTAX


class MissingArgumentError(ArgsError):
    code = FaultCode.MISSING_ARGUMENT


class ValueNotFoundError(ArgsError):
    code = FaultCode.VALUE_NOT_FOUND


class CoercionError(ArgsError):
    code = FaultCode.COERCION_FAILED


class ValidationError(ArgsError):
    code = FaultCode.VALIDATION_FAILED


class ArgsWarning(ABC, Warning):
    """
    base warning for non-fatal faults (e.g., duplicate registrations).
    """
    code = Unset

    def __init__(self, message, /, scope=Unset, **options):
        if not isinstance(message, str):
            raise TypeError("%s message must be a string" % type(self).__name__)
        self.message = message
        self.scope = coalesce(scope, "")
        self.usage = ""
        self.options = MappingProxyType(options)
        super().__init__(_describe(self.scope, self.message, ""))

    def __str__(self):
        return _describe(self.scope, self.message, "")

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "scope": "bold #FFC2E0",  # softer pinky scope for warnings
            "message": "#D6D6DE",  # slightly lighter gray body
        })

    def __trigger__(self):
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=self.options.get("stacklevel", 2))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        scope = overrides.pop("scope", self.scope)
        return type(self)(self.message, scope=scope, **{**self.options, **overrides})


class DuplicateOptionWarning(ArgsWarning):
    code = FaultCode.DUPLICATED_OPTION


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace before triggering.
    - shell=False (default): errors are raised, warnings go through warnings.warn.
    - shell=True: faults are printed on stderr through rich; errors then exit(1).

    typical options
    - shell, fancy, colorful, prog, usage, and any context the caller wants to keep.
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
    "FaultCode",
    "ArgsError",
    "ArgumentSyntaxError",
    "MissingArgumentError",
    "ValueNotFoundError",
    "CoercionError",
    "ValidationError",
    "ArgsWarning",
    "DuplicateOptionWarning",
    "trigger",
)
