"""
Argbind faults (errors, warnings and signals) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain to keep copy consistent and logs searchable.
- Fault: the message + read-only options shared by every fault kind below.
- ArgumentException / ArgumentWarning: errors and warnings that know how to render
  themselves in a friendly, lowercased and actionable way.
- ArgumentSignal: non-error outcomes ("show help", "show version") that stop a parse
  early. They are deliberately NOT ArgumentException subclasses so callers can branch
  on them and exit cleanly.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Short titles, one-sentence bodies, a single clear hint.
- Position-first messages when a token position is known ("at third position").
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Integration
- The registry raises DuplicateQualifierError directly (programmer error).
- The binder/validator build faults and hand them back inside ParseResult.
- Parser.trigger()/invoke() surface them: raised in library mode, rendered via rich
  and turned into an exit status in shell mode.
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
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - signals (1000x)
      • HELP_REQUESTED, VERSION_REQUESTED
    - registration (1110x)
      • DUPLICATE_QUALIFIER
    - binding (1111x)
      • UNKNOWN_OPTION, MISSING_ARGUMENTS
    - validation (1113x)
      • MISSING_REQUIRED, INVALID_CHOICE
    - terminal (1114x)
      • NO_TERMINAL
    - warnings (1211x)
      • DEPRECATED_ARGUMENT

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- signals (10xxx) ---
    HELP_REQUESTED              = 10001
    VERSION_REQUESTED           = 10002

    # --- registration errors (11xxx) ---
    DUPLICATE_QUALIFIER         = 11101

    # --- binding errors (11xxx) ---
    UNKNOWN_OPTION              = 11111
    MISSING_ARGUMENTS           = 11112

    # --- validation errors (11xxx) ---
    MISSING_REQUIRED            = 11131
    INVALID_CHOICE              = 11132

    # --- terminal errors (11xxx) ---
    NO_TERMINAL                 = 11141

    # --- warnings (12xxx) ---
    DEPRECATED_ARGUMENT         = 12111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _prog(options):
    """
    resolve the program name shown in fault headers.

    order: __main__.__prog__, then the prog of the 'tool' option (a Parser), then "argbind".
    """
    tool = options.get("tool")
    return getattr(__import__("__main__"), "__prog__", getattr(tool, "prog", None) or "argbind")


def _render(fault, palette, kind):
    """
    build the rich renderable shared by exceptions and warnings.

    palette: default styles for this kind; __main__.__styles__ overrides win.
    kind: "error" or "warning", selects the title/message palette keys.
    """
    styles = defaultdict(str, palette | getattr(__import__("__main__"), "__styles__", {}))
    colorful = fault.options.get("colorful", False)
    fancy = fault.options.get("fancy", False)

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

    code = fault.options.get("code")
    header = Text.assemble(
        "[ ",
        text(_prog(fault.options), styler("prog-name")),
        " — ",
        text(code.normalize() if isinstance(code, FaultCode) else "?", styler("code")),
        " | ",
        text(str(fault.options.get("title", type(fault).__name__)).title(), styler(kind + "-title")),
        " ]"
    )
    message = text(fault.message, styler(kind + "-message"))
    renders = [message]
    if hint := fault.options.get("hint"):
        renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

    if fancy:
        try:
            width = int((console.width - 4) * fault.options["ratio"])
        except KeyError:
            width = None
        return Panel(Group(*renders), title=header, title_align="left", width=width)

    return Group(header, *renders)


class Fault:
    """
    shared state of errors, signals and warnings.

    carries a lowercase, one-sentence message plus a read-only mapping of options
    (title, code, hint and any context such as qualifier/argument/value/index).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message if self.message is not Unset else ""

    def __getattr__(self, name):
        # Expose fault context (qualifier, argument, value, ...) as attributes.
        try:
            return self.__dict__["options"][name]
        except KeyError:
            raise AttributeError(name) from None

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ArgumentException(Fault, Exception):
    """
    base type for every parse/registration error.
    """

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

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)


class DuplicateQualifierError(ArgumentException): ...
class UnknownOptionError(ArgumentException): ...
class MissingArgumentsError(ArgumentException): ...
class MissingRequiredError(ArgumentException): ...
class InvalidChoiceError(ArgumentException): ...
class NoTerminalError(ArgumentException): ...


class ArgumentSignal(Fault, Exception):
    """
    base type for early, successful terminations of a parse (help/version).

    a signal is not an error: in shell mode its trigger renders the requested
    output on stdout and exits with status 0.
    """

    def __show__(self, tool):
        raise NotImplementedError

    def __trigger__(self) -> None:
        if (tool := self.options.get("tool")) is not None:
            self.__show__(tool)
        if self.options.get("shell", False):
            sys.exit(0)


class HelpRequested(ArgumentSignal):
    def __show__(self, tool):
        tool.print_help()


class VersionRequested(ArgumentSignal):
    def __show__(self, tool):
        tool.print_version()


class ArgumentWarning(Fault, ABC, Warning):
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

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)


class DeprecatedArgumentWarning(ArgumentWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - exceptions are raised in library mode and rendered + exit(1) in shell mode.
    - warnings are warned in library mode and rendered in shell mode.
    - signals render help/version (when a tool is attached) and exit(0) in shell mode.
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
    when not found, returns None (renderers treat docs as optional).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "Fault",
    "ArgumentException",
    "DuplicateQualifierError",
    "UnknownOptionError",
    "MissingArgumentsError",
    "MissingRequiredError",
    "InvalidChoiceError",
    "NoTerminalError",
    "ArgumentSignal",
    "HelpRequested",
    "VersionRequested",
    "ArgumentWarning",
    "DeprecatedArgumentWarning",
    "FaultCode",
    "trigger",
    "getdoc",
)
