"""
Argbind parser facade: declare arguments, parse tokens, render help.

What this module provides
- Parser: owns a Registry plus the runtime flags (shell/fancy/colorful) and the
  program metadata shown in help/version output.
  • add_argument(...) / register(...) declare arguments (DuplicateQualifierError
    is raised here, at declaration time).
  • parse(tokens) runs bind → validate and returns a ParseResult; parse and
    validation faults (and the help/version signals) are returned, never raised.
  • format_help/format_version/print_help/print_version render through rich.
- invoke(parser, prompt): convenience runner; surfaces the fault of a parse the
  way the parser is configured (raise in library mode, render + exit in shell mode).

Quick start
    from argbind import Parser, invoke

    parser = Parser("greet", descr="say hello", version="1.0.0", shell=True)
    parser.add_argument("-u", "--upper", action="store_true", default="false")
    parser.add_argument("name", required=True, default="John")

    if __name__ == "__main__":
        namespace, leftovers, _ = invoke(parser)
"""
import copy
import os.path
import shlex
import sys
from collections.abc import Iterable

from rich.console import Console

from .arguments import Argument
from .binder import bind
from .faults import *
from .help import format_help, format_version, render_help, render_version, resolve_width
from .namespace import Namespace, ParseResult
from .registry import Registry
from .utils import *
from .validator import validate


class Parser:
    """
    Declarative argument parser.

    Parameters
    - prog: program name (defaults to the basename of sys.argv[0]).
    - descr / usage / epilog: help text sections; usage replaces the generated line.
    - version: version string; when given, a "--version" argument is registered.
    - helper: register the built-in "-h/--help" argument (default True).
    - shell: surface faults the CLI way (render + exit) instead of raising.
    - fancy: wrap help and faults in panels.
    - colorful: enable the rich palette.
    """

    def __init__(
            self,
            prog=Unset,
            descr=Unset,
            usage=Unset,
            epilog=Unset,
            version=Unset,
            helper=True,
            *,
            shell=False,
            fancy=False,
            colorful=False,
    ):
        for name, value in (("prog", prog), ("descr", descr), ("usage", usage), ("epilog", epilog), ("version", version)):
            if not isinstance(value, str | Unset):
                raise TypeError(f"parser {name!r} must be a string")

        self._prog = coalesce(prog, os.path.basename(sys.argv[0]) or "argbind")
        self._descr = coalesce(descr)
        self._usage = coalesce(usage)
        self._epilog = coalesce(epilog)
        self._version = coalesce(version)
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)
        self._registry = Registry()

        if helper:
            self.add_argument("-h", "--help", action="help", descr="show this help message and exit")
        if self._version:
            self.add_argument("--version", action="version", descr="show the program version and exit")

    @property
    def registry(self):
        return self._registry

    @property
    def prog(self):
        return self._prog

    @property
    def descr(self):
        return self._descr

    @property
    def usage(self):
        return self._usage

    @property
    def epilog(self):
        return self._epilog

    @property
    def version(self):
        return self._version

    @property
    def shell(self):
        return self._shell

    @property
    def fancy(self):
        return self._fancy

    @property
    def colorful(self):
        return self._colorful

    def __repr__(self):
        return f"parser(prog={self._prog!r}, arguments={len(self._registry)})"

    def __rich_repr__(self):
        yield "prog", self._prog
        yield "version", self._version
        yield "arguments", tuple(self._registry)

    def add_argument(self, *qualifiers, **options):
        """
        Build an Argument from the given qualifiers/options and register it.
        """
        return self._registry.register(Argument(*qualifiers, **options))

    def register(self, argument, /):
        """
        Register a pre-built Argument.
        """
        return self._registry.register(argument)

    def trigger(self, fault, /, **options):
        """
        Surface `fault` with this parser's runtime flags attached.
        """
        if (
                not hasattr(fault, "__trigger__") or
                not callable(fault.__trigger__) or
                not hasattr(fault, "__replace__") or
                not callable(fault.__replace__)
        ):
            raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
        trigger(copy.replace(fault, **options, tool=self, shell=self._shell, fancy=self._fancy, colorful=self._colorful))

    def parse(self, tokens=Unset, /):
        """
        Parse raw tokens into a ParseResult(namespace, leftovers, fault).

        - tokens: Unset (read sys.argv[1:]), a shell-like string (split with
          shlex.split) or an iterable of strings used verbatim.

        On success fault is None and leftovers lists the plain tokens no argument
        took. On failure the namespace is empty and fault holds the
        ArgumentException or ArgumentSignal that stopped the parse.
        """
        if tokens is Unset:
            tokens = sys.argv[1:]
        elif isinstance(tokens, str):
            tokens = shlex.split(tokens)
        elif isinstance(tokens, Iterable):
            tokens = list(tokens)
            if not all(isinstance(token, str) for token in tokens):
                raise TypeError("parse() argument must be a string or an iterable of strings")
        else:
            raise TypeError("parse() argument must be a string or an iterable of strings")

        try:
            values, leftovers = bind(tokens, self._registry, report=self.trigger)
            validate(values, self._registry)
        except (ArgumentException, ArgumentSignal) as fault:
            return ParseResult(Namespace(), [], fault)
        return ParseResult(Namespace(values), leftovers)

    def format_help(self, width=Unset, /):
        """
        Help text as a plain string, wrapped to `width` (terminal width or 80 by default).
        """
        return format_help(self, width)

    def format_version(self, width=Unset, /):
        return format_version(self, width)

    def print_help(self):
        width = resolve_width()
        Console(width=width).print(render_help(self, width))

    def print_version(self):
        width = resolve_width()
        Console(width=width).print(render_version(self, width))

    def __invoke__(self, prompt=Unset):
        """
        Parse `prompt` and surface the outcome.

        - faults are triggered: raised in library mode, rendered to stderr with
          exit status 1 in shell mode.
        - help/version signals print the requested text; in shell mode the
          process then exits with status 0.

        Returns the ParseResult (when the process was not exited).
        """
        result = self.parse(prompt)
        if result.fault is not None:
            self.trigger(result.fault)
        return result


def invoke(parser, prompt=Unset, /):
    """
    Convenience runner: parse `prompt` with `parser` and surface the outcome.

    - parser: an object implementing __invoke__(prompt) (a Parser).
    - prompt: Unset (sys.argv[1:]), a shell-like string, or an iterable of strings.

    Raises TypeError when `parser` cannot be invoked.
    """
    if hasattr(parser, "__invoke__") and callable(parser.__invoke__):
        return parser.__invoke__(prompt)
    target = "argument" if prompt is Unset else "first argument"
    raise TypeError(f"invoke() {target} must implement __invoke__ method") from None


__all__ = (
    "Parser",
    "invoke",
)
