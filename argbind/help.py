"""
Argbind help/version rendering (rich-based).

Layout
- usage line: "usage: <prog> [flags/options] <positionals>", wrapped with a hanging
  indent under the first item.
- description paragraph (optional).
- "positional arguments:" then "optional arguments:" blocks: a names column, then the
  description at a fixed indent, word-wrapped to the target width.
- epilog paragraph (optional).

Width
- detect_width() asks the terminal attached to stdout; it raises NoTerminalError
  when there is none. Renderers fall back to FALLBACK_WIDTH in that case.

Palette
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When colorful is False, styling is suppressed; deprecated* still apply strike.
"""
import io
import os
import sys
from collections import defaultdict, deque

from rich.console import Console, Group
from rich.containers import Lines
from rich.panel import Panel
from rich.text import Text

from .faults import FaultCode, NoTerminalError, getdoc
from .utils import Unset

FALLBACK_WIDTH = 80

# column where argument descriptions start (narrow terminals use a third of the width)
INDENT = 24


def detect_width():
    """
    return the column count of the terminal attached to stdout.

    raises NoTerminalError when stdout is not a terminal (pipes, files, CI).
    """
    try:
        columns = os.get_terminal_size(sys.__stdout__.fileno()).columns
    except (AttributeError, ValueError, OSError):
        columns = 0
    if columns <= 0:
        raise NoTerminalError(
            "unable to query the terminal width",
            title="no terminal",
            code=FaultCode.NO_TERMINAL,
            hint="pass an explicit width or use the %d column fallback" % FALLBACK_WIDTH,
            docs=getdoc(FaultCode.NO_TERMINAL),
        )
    return columns


def resolve_width(width=Unset, /):
    """
    return `width` when given, else the detected terminal width, else FALLBACK_WIDTH.
    """
    if width is not Unset:
        if isinstance(width, bool) or not isinstance(width, int) or width < 1:
            raise ValueError("width must be a positive integer")
        return width
    try:
        return detect_width()
    except NoTerminalError:
        return FALLBACK_WIDTH


def _scratch(width):
    # an offscreen console: only used to measure/wrap Text
    return Console(file=io.StringIO(), width=width, color_system=None, legacy_windows=False)


def _wrap(text, width, /):
    # styled counterpart of wrap(): keeps the spans of a rich Text
    return text.wrap(_scratch(width), width)


def wrap(text, width, /):
    """
    word-wrap `text` into lines no longer than `width` (overlong words are folded).
    """
    if not text:
        return []
    return [line.plain.rstrip() for line in _wrap(Text(str(text)), width)]


def _styler(colorful):
    styles = defaultdict(str, {
        # === Head sections ===
        "usage-label": "bold #00E6FF",  # CYAN → signature info color
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "program-version": "bold #00E6FF",
        "usage-section": "bold #36C5F0",  # SKY-BLUE → softer than cyan
        "description-section": "italic #A3A3A3",  # Neutral gray
        "epilog-section": "#737373",  # Dim footer gray

        # === Groups / arguments ===
        "group-label": "bold #FFFFFF",  # Pure white headers
        "argument-description": "#9CA3AF",  # Muted gray

        # === Names / metavars ===
        "option-name": "bold #00E6FF",  # CYAN for options
        "flag-name": "bold #22C55E",  # GREEN for flags
        "deprecated-name": "bold #F97316 strike",  # ORANGE strike for deprecated

        "metavar": "bold #FFD600",  # AMBER for parameters
        "greedy-metavar": "bold italic #FFD600",
        "deprecated-metavar": "bold #F97316 strike",

        "choice": "bold #FF4D94",  # MAGENTA → choices stand out
        "deprecated-choice": "bold #F97316 strike",

        # === Fancy panel ===
        "panel-title": "bold #FF4D94",
        "panel-subtitle": "#9CA3AF",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        if "deprecated" in style and not colorful:
            return "strike"
        return styles[style] if colorful else ""

    return styler


def _text(fragment, style=""):
    if isinstance(fragment, Text):
        return fragment.copy()
    return Text(str(fragment), style)


def _names(argument, styler):
    """
    short qualifiers first, then long ones, joined with ", ".
    """
    if argument.deprecated:
        style = "deprecated-name"
    else:
        style = "option-name" if argument.action.parametric else "flag-name"
    ordered = sorted(argument.qualifiers, key=lambda qualifier: qualifier.startswith("--"))
    return Text(", ").join(_text(qualifier, styler(style)) for qualifier in ordered)


def _metavar(argument, styler, *, simple=False):
    """
    value label for an argument, decorated with its arity unless `simple`.
    """
    if argument.choices:
        style = "deprecated-choice" if argument.deprecated else "choice"
        choices = argument.choices if isinstance(argument.choices, tuple) else sorted(argument.choices)
        metavar = Text.assemble("{", Text(",").join(_text(choice, styler(style)) for choice in choices), "}")
    else:
        style = "deprecated-metavar" if argument.deprecated else (
            "greedy-metavar" if argument.nargs == "R" else "metavar"
        )
        if argument.metavar is not None:
            metavar = _text(argument.metavar, styler(style))
        else:
            metavar = Text.assemble("<", _text(argument.dest, styler(style)), ">")

    if simple:
        return metavar

    match argument.nargs:
        case "?":
            return Text.assemble("[", metavar, "]")
        case "*":
            return Text.assemble("[", metavar, " ...]")
        case "+":
            return Text.assemble(metavar, " [", metavar, " ...]")
        case "R":
            return Text.assemble(metavar, " ...")
        case int(count):
            return Text(" ").join(metavar.copy() for _ in range(count))
    return metavar


def _describe(argument):
    """
    description text plus a "(default: ...)" suffix when a default is declared.
    """
    parts = []
    if argument.descr:
        parts.append(str(argument.descr))
    if argument.default is not None:
        default = argument.default if isinstance(argument.default, str) else " ".join(argument.default)
        parts.append("(default: %s)" % default)
    return " ".join(parts)


def render_help(parser, /, width=Unset):
    """
    build the help renderable for `parser` at `width` columns.

    `parser` provides prog, usage, descr, epilog, colorful, fancy and registry.
    """
    width = resolve_width(width) - 4 * bool(parser.fancy)
    width = max(width, 8)
    styler = _styler(parser.colorful)

    renders = []

    usage = Text()
    usage.append("usage", styler("usage-label")).append(": ")
    if parser.usage:
        for index, line in enumerate(_wrap(_text(parser.usage, styler("usage-section")), width - len(usage))):
            usage.append("\n" + " " * len("usage: ") if index else "").append(line)
    else:
        usage.append(_text(parser.prog, styler("program-name")))
        offset = len(usage) + 1
        if offset > width // 2:
            offset = len("usage: ")

        inputs = deque()
        for argument in parser.registry.optionals():
            if argument.hidden:
                continue
            item = _text(argument.primary, styler("flag-name" if not argument.action.parametric else "option-name"))
            if argument.action.parametric:
                item = Text.assemble(item, " ", _metavar(argument, styler))
            inputs.append(item if argument.required else Text.assemble("[", item, "]"))
        for argument in parser.registry.positionals():
            if not argument.hidden:
                inputs.append(_metavar(argument, styler))

        # the first line starts right after the program name, the others at `offset`
        lines = Lines([Text()])
        limit = width - len(usage) - 1
        for input in inputs:
            if (lines[-1] and len(lines[-1]) + 1 + len(input) > limit) or (
                    not lines[-1] and len(lines) == 1 and len(input) > limit):
                lines.append(Text())
                limit = width - offset
            lines[-1].append(Text(" ") + input if lines[-1] else input)

        first, *rest = lines
        if first:
            usage.append(" ").append(first)
        for line in rest:
            usage.append("\n").append(" " * offset).append(line)
    renders.append(usage)

    if parser.descr:
        descr = _text(parser.descr, styler("description-section"))
        renders.append(Text("\n").join(_wrap(descr, width)))

    indent = INDENT if width >= 3 * INDENT else max(2, width // 3)
    padding = 2
    for title, arguments in (
            ("positional arguments", parser.registry.positionals()),
            ("optional arguments", parser.registry.optionals()),
    ):
        arguments = [argument for argument in arguments if not argument.hidden]
        if not arguments:
            continue

        block = Text()
        block.append(title, styler("group-label")).append(":")
        for argument in arguments:
            if argument.positional:
                head = _metavar(argument, styler, simple=True)
            elif argument.action.parametric:
                head = Text.assemble(_names(argument, styler), " ", _metavar(argument, styler))
            else:
                head = _names(argument, styler)

            section = Text(" " * padding)
            for index, line in enumerate(_wrap(head, width - padding)):
                section.append("\n" + " " * padding if index else "").append(line)

            if descr := _describe(argument):
                if "\n" in section.plain or len(section) > indent - 2:
                    section.append("\n").append(" " * indent)
                else:
                    section.append(" " * (indent - len(section)))
                wrapped = _wrap(_text(descr, styler("argument-description")), width - indent)
                for index, line in enumerate(wrapped):
                    section.append("\n" + " " * indent if index else "").append(line)

            block.append("\n").append(section)
        renders.append(block)

    if parser.epilog:
        epilog = _text(parser.epilog, styler("epilog-section"))
        renders.append(Text("\n").join(_wrap(epilog, width)))

    for render in renders:
        render.rstrip()

    renderable = Group(*(Text("\n").join((render, Text())) if index < len(renders) - 1 else render
                         for index, render in enumerate(renders)))

    if parser.fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[ ", f"{parser.prog} HELP".upper(), " ]", style=styler("panel-title")),
            title_align="left",
            width=width + 4,
        )
    return renderable


def render_version(parser, /, width=Unset):
    """
    build the version renderable: "<prog> <version>".
    """
    width = resolve_width(width)
    styler = _styler(parser.colorful)
    renderable = Text.assemble(
        _text(parser.prog, styler("program-name")),
        " ",
        _text(parser.version or "0.0.0", styler("program-version")),
    )
    if parser.fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[ ", f"{parser.prog} VERSION".upper(), " ]", style=styler("panel-title")),
            title_align="left",
            width=width,
        )
    return renderable


def _export(renderable, width):
    console = _scratch(width)
    with console.capture() as capture:
        console.print(renderable)
    return capture.get()


def format_help(parser, /, width=Unset):
    """
    render help into a plain string (no colour codes) at `width` columns.
    """
    width = resolve_width(width)
    return _export(render_help(parser, width), width)


def format_version(parser, /, width=Unset):
    width = resolve_width(width)
    return _export(render_version(parser, width), width)


__all__ = (
    "FALLBACK_WIDTH",
    "detect_width",
    "resolve_width",
    "wrap",
    "render_help",
    "render_version",
    "format_help",
    "format_version",
)
