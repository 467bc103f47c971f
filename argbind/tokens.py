r"""
Argbind token classification.

A raw invocation token is one of
- the escape token "--", which forces what follows to be read as plain text;
- an option token: one or two dashes followed by ASCII letters only
  (r"-{1,2}[a-zA-Z]+"). A single dash introduces a cluster of short letters
  ("-ab" is "-a" then "-b"); two dashes introduce one long name ("--name");
- a plain token: anything else ("-", "-1", "--dry-run", "file.txt", ...).

classify() gives the help-oriented view of a token list. The binder walks the
original list itself, because consuming option values needs the positions this
view throws away. It still classifies each option token it meets through
classify(), so both passes agree on what an option token names.

    >>> classify(["-ab", "--name", "x", "--", "-c"])
    (['a', 'b', 'name'], ['x', '-c'])
"""
import re

ESCAPE = "--"

OPTION_PATTERN = re.compile(r"-{1,2}[a-zA-Z]+")


def isoption(token, /):
    """
    Return True when `token` has the shape of an option token.
    """
    return OPTION_PATTERN.fullmatch(token) is not None


def expand(token, /):
    """
    Expand an option token into its bare qualifier names.

    - "-abc"   → ["a", "b", "c"]
    - "--name" → ["name"]

    Raises ValueError when the token is not an option token.
    """
    if not isoption(token):
        raise ValueError(f"expand() argument {token!r} is not an option token")
    if token.startswith("--"):
        return [token[2:]]
    return list(token[1:])


def classify(tokens, /):
    """
    Split raw tokens into (options, plains).

    Rules, applied left to right:
    1. "--" with a following token forces that token into plains; both are consumed.
    2. An option token contributes its expanded names to options.
    3. Anything else (including a trailing lone "--") is a plain token.
    """
    options = []
    plains = []

    index = 0
    while index < len(tokens):
        token = tokens[index]

        if token == ESCAPE and index + 1 < len(tokens):
            plains.append(tokens[index + 1])
            index += 2
            continue

        if isoption(token):
            options.extend(expand(token))
        else:
            plains.append(token)
        index += 1

    return options, plains


__all__ = (
    "ESCAPE",
    "OPTION_PATTERN",
    "isoption",
    "expand",
    "classify",
)
