"""
Argbind binder: walk raw tokens, resolve options, consume values, apply actions.

phases
- scan
  • "--" ends option scanning; every later token is queued as plain text.
  • an option token is expanded ("-ab" → "-a", "-b"; "--name" → "--name") and every
    qualifier is resolved before any action runs, so a cluster never half-applies.
  • each resolved argument consumes the tokens following the option token according
    to its nargs, stopping at the next option token or "--".
  • an "R" (remainder) option swallows every remaining token verbatim and ends the scan.
  • help/version actions stop the scan at once with a signal.
  • anything else is queued for positional assignment.
- positional assignment
  • queued tokens are handed to positionals in declaration order; a positional that
    finds nothing left stays unmatched (the validator decides whether that is fatal).
- leftovers
  • whatever the positionals did not take is returned to the caller.

faults are raised (UnknownOptionError, MissingArgumentsError, HelpRequested,
VersionRequested); the parser turns them into a ParseResult.
"""
from collections import deque

from .arguments import Action, REMAINDER
from .faults import *
from .tokens import ESCAPE, classify, isoption
from .utils import ordinal


def _available(tokens, cursor):
    """
    count the plain tokens from `cursor` up to the next option token, "--", or the end.
    """
    count = 0
    while cursor + count < len(tokens):
        token = tokens[cursor + count]
        if token == ESCAPE or isoption(token):
            break
        count += 1
    return count


def _take(argument, qualifier, available, index):
    """
    decide how many of `available` tokens `argument` consumes.

    raises MissingArgumentsError when a fixed count or "+" cannot be satisfied.
    """
    match nargs := argument.nargs:
        case 0:
            return 0
        case "?":
            return min(1, available)
        case "*" | "R":
            return available
        case "+":
            if not available:
                raise MissingArgumentsError(
                    "%s %r at %s position expects at least one value, got none" % (
                        "positional" if argument.positional else "option", qualifier, ordinal(index)
                    ),
                    title="missing arguments",
                    code=FaultCode.MISSING_ARGUMENTS,
                    qualifier=qualifier,
                    argument=argument,
                    expected=1,
                    available=0,
                    index=index,
                    hint="pass one or more values after %s" % qualifier,
                    docs=getdoc(FaultCode.MISSING_ARGUMENTS),
                )
            return available
        case int():
            if available < nargs:
                raise MissingArgumentsError(
                    "%s %r at %s position expects %d value%s, got %d" % (
                        "positional" if argument.positional else "option",
                        qualifier, ordinal(index), nargs, "s" * (nargs != 1), available
                    ),
                    title="missing arguments",
                    code=FaultCode.MISSING_ARGUMENTS,
                    qualifier=qualifier,
                    argument=argument,
                    expected=nargs,
                    available=available,
                    index=index,
                    hint="pass exactly %d value%s after %s" % (nargs, "s" * (nargs != 1), qualifier),
                    docs=getdoc(FaultCode.MISSING_ARGUMENTS),
                )
            return nargs
    raise RuntimeError("unexpected nargs %r" % nargs)


def _apply(argument, consumed, values):
    """
    run `argument.action` over the consumed tokens, updating `values` in place.
    """
    dest = argument.dest
    match argument.action:
        case Action.STORE_TRUE:
            values[dest] = "true"
        case Action.STORE_FALSE:
            values[dest] = "false"
        case Action.STORE_CONST:
            values[dest] = argument.const
        case Action.STORE:
            if argument.multiple:
                values[dest] = list(consumed)
            elif not consumed and argument.const is not None:
                # nargs="?" given without a value
                values[dest] = argument.const
            else:
                values[dest] = " ".join(consumed)
        case Action.APPEND_CONST:
            values.setdefault(dest, []).append(argument.const)
        case Action.APPEND:
            bucket = values.setdefault(dest, [])
            if consumed:
                bucket.extend(consumed)
            elif argument.const is not None:
                bucket.append(argument.const)
        case _:
            raise RuntimeError("unexpected action %r" % argument.action)


def bind(tokens, registry, /, *, report=trigger):
    """
    bind raw tokens to the arguments of `registry`.

    parameters
    - tokens: iterable of str, the raw invocation tokens (no program name).
    - registry: Registry holding the declared arguments.
    - report: callable used to surface non-fatal warnings (deprecations);
      defaults to faults.trigger.

    returns
    - (values, leftovers): a dict from destination key to str | list[str], and the
      list of plain tokens no argument consumed.

    raises
    - UnknownOptionError, MissingArgumentsError, HelpRequested, VersionRequested.
    """
    tokens = list(tokens)
    values = {}
    queue = deque()

    cursor = 0
    while cursor < len(tokens):
        token = tokens[cursor]

        if token == ESCAPE:
            # the escape itself is dropped, everything after it is plain text
            queue.extend(enumerate(tokens[cursor + 1:], cursor + 2))
            break

        if not isoption(token):
            queue.append((cursor + 1, token))
            cursor += 1
            continue

        index = cursor + 1
        prefix = "--" if token.startswith("--") else "-"
        resolved = []
        names, _ = classify([token])
        for name in names:
            if (argument := registry.lookup(qualifier := prefix + name)) is None:
                raise UnknownOptionError(
                    "unknown option %r at %s position" % (qualifier, ordinal(index)),
                    title="unknown option",
                    code=FaultCode.UNKNOWN_OPTION,
                    qualifier=qualifier,
                    token=token,
                    index=index,
                    hint="use '--' before values that start with a dash, or run with --help to see all options",
                    docs=getdoc(FaultCode.UNKNOWN_OPTION),
                )
            resolved.append((qualifier, argument))

        cursor += 1
        for qualifier, argument in resolved:
            if argument.deprecated:
                report(DeprecatedArgumentWarning(
                    "option %r at %s position is deprecated" % (qualifier, ordinal(index)),
                    title="deprecated option",
                    code=FaultCode.DEPRECATED_ARGUMENT,
                    qualifier=qualifier,
                    index=index,
                    argument=argument,
                    hint="run with --help to see current usage and alternatives",
                    docs=getdoc(FaultCode.DEPRECATED_ARGUMENT),
                ))

            if argument.action is Action.HELP:
                raise HelpRequested(
                    "help requested with %r" % qualifier,
                    code=FaultCode.HELP_REQUESTED,
                    qualifier=qualifier,
                    argument=argument,
                )
            if argument.action is Action.VERSION:
                raise VersionRequested(
                    "version requested with %r" % qualifier,
                    code=FaultCode.VERSION_REQUESTED,
                    qualifier=qualifier,
                    argument=argument,
                )

            if argument.nargs == REMAINDER:
                consumed = tokens[cursor:]
            else:
                consumed = tokens[cursor:cursor + _take(argument, qualifier, _available(tokens, cursor), index)]
            cursor += len(consumed)
            _apply(argument, consumed, values)

    for argument in registry.positionals():
        if not queue:
            break
        count = _take(argument, argument.dest, len(queue), queue[0][0])
        index = queue[0][0]
        consumed = [queue.popleft()[1] for _ in range(count)]
        if argument.deprecated and consumed:
            report(DeprecatedArgumentWarning(
                "positional %r at %s position is deprecated" % (argument.dest, ordinal(index)),
                title="deprecated positional",
                code=FaultCode.DEPRECATED_ARGUMENT,
                qualifier=argument.dest,
                index=index,
                argument=argument,
                hint="run with --help to see current usage and alternatives",
                docs=getdoc(FaultCode.DEPRECATED_ARGUMENT),
            ))
        _apply(argument, consumed, values)

    return values, [token for _, token in queue]


__all__ = (
    "bind",
)
