r"""
Argbind argument specifications.

Overview
- Action: the closed set of things a matched argument can do to the namespace
  (store_true, store_false, store_const, store, append_const, append, help, version).
- REMAINDER: the "all remaining tokens" arity marker ("R"; `...` is accepted too).
- Argument: one immutable flag/option/positional declaration, validated wholesale
  on construction.

Declaring
- Named arguments take dashed qualifiers: "-x" (one ASCII letter) and/or "--name"
  (ASCII letters only), the exact shapes the tokenizer recognizes as options.
- Positional arguments are declared by their destination name alone ("name").

Metadata (sanitized on construction)
- dest: namespace key; defaults to the first long qualifier, else the first short one.
- action: Action | str, default "store".
- nargs: int >= 0 | "?" | "*" | "+" | "R". Zero-token actions only allow 0 (their
  default); store/append default to 1 and reject 0.
- const: required by store_const/append_const, optional for store/append with "?".
- default: str or an iterable of str (normalized to a tuple).
- choices: iterable of str; duplicates rejected unless a Set.
- required, hidden, deprecated: bool.
- descr/metavar: non-empty strings when provided (help text and value label).

Quick example:
    >>> upper = Argument("-u", "--upper", action="store_true", default="false")
    >>> upper.dest, upper.nargs
    ('upper', 0)
    >>> name = Argument("name", nargs=1, required=True)
    >>> name.positional
    True
"""
import enum
import functools
import operator
import re
from collections.abc import Iterable, Set

from rich.text import Text

from .utils import *

REMAINDER = "R"


class Action(enum.Enum):
    """
    What a matched argument does to the namespace.

    STORE_TRUE/STORE_FALSE/STORE_CONST/APPEND_CONST/HELP/VERSION take no tokens;
    STORE/APPEND carry the tokens they consume.
    """
    STORE_TRUE = "store_true"
    STORE_FALSE = "store_false"
    STORE_CONST = "store_const"
    STORE = "store"
    APPEND_CONST = "append_const"
    APPEND = "append"
    HELP = "help"
    VERSION = "version"

    @property
    def parametric(self):
        """
        True when the action carries consumed tokens (store/append).
        """
        return self in (Action.STORE, Action.APPEND)

    @property
    def terminal(self):
        """
        True when the action ends the parse with a signal (help/version).
        """
        return self in (Action.HELP, Action.VERSION)


class ArgumentType(type):
    """
    Metaclass giving specs a stable repr and read-only introspection.

    - __typename__ is derived from the class name and used in messages.
    - every name in __introspectable__ becomes a read-only property over "_<name>".
    - __displayable__ (if set) narrows what __rich_repr__ shows.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: view(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_qualifiers(cls, metadata, /):
    """
    Internal: validate qualifiers and derive positional/dest.

    - named form: "-x" or "--name" (ASCII letters only), unique within the argument.
    - positional form: a single undashed destination name.
    - dest: explicit for named specs (optional), forbidden for positionals.
    """
    if not metadata["qualifiers"]:
        raise TypeError(f"{cls.__typename__} must specify at least one qualifier or a positional name")

    qualifiers = []
    names = []
    for qualifier in metadata["qualifiers"]:
        if not isinstance(qualifier, str):
            raise TypeError(f"{cls.__typename__} qualifiers must be strings")
        elif not (qualifier := qualifier.strip()):
            raise ValueError(f"{cls.__typename__} qualifiers cannot be empty-strings")
        elif qualifier in qualifiers or qualifier in names:
            raise ValueError(f"{cls.__typename__} qualifiers cannot contain duplicates")
        elif qualifier.startswith("-"):
            if not re.fullmatch(r"-[a-zA-Z]|--[a-zA-Z]+", qualifier):
                raise ValueError(f"{cls.__typename__} qualifiers must look like '-x' or '--name' (ascii letters only)")
            qualifiers.append(qualifier)
        elif re.fullmatch(r"[^\W\d][\w-]*", qualifier):
            names.append(qualifier)
        else:
            raise ValueError(f"{cls.__typename__} positional name {qualifier!r} is not a valid destination")

    if names and qualifiers:
        raise ValueError(f"{cls.__typename__} cannot mix a positional name with option qualifiers")
    if len(names) > 1:
        raise ValueError(f"{cls.__typename__} can declare only one positional name")

    metadata["qualifiers"] = tuple(qualifiers)
    metadata["positional"] = bool(names)

    if names:
        if metadata["dest"] is not Unset:
            raise TypeError(f"positional {cls.__typename__} cannot specify a 'dest'")
        metadata["dest"] = names[0]
        return

    if not isinstance(dest := metadata["dest"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'dest' must be a string")
    elif isinstance(dest, str) and not (dest := dest.strip()):
        raise ValueError(f"{cls.__typename__} 'dest' cannot be empty")

    longs = [qualifier for qualifier in qualifiers if qualifier.startswith("--")]
    metadata["dest"] = coalesce(dest, (longs or qualifiers)[0].lstrip("-"))


def _sanitize_arity(cls, metadata, /):
    """
    Internal: normalize 'action' and 'nargs' and check they agree.
    """
    action = metadata["action"]
    if isinstance(action, str):
        try:
            action = Action(action)
        except ValueError:
            raise ValueError(f"{cls.__typename__} 'action' {action!r} is unknown") from None
    elif not isinstance(action, Action):
        raise TypeError(f"{cls.__typename__} 'action' must be an action or a string")
    metadata["action"] = action

    if metadata["positional"] and not action.parametric:
        raise ValueError(f"positional {cls.__typename__} can only store or append")

    nargs = metadata["nargs"]
    if nargs is Ellipsis:
        nargs = REMAINDER
    if isinstance(nargs, bool) or not isinstance(nargs, str | int | Unset):
        raise TypeError(f"{cls.__typename__} 'nargs' must be a string or an integer")
    if isinstance(nargs, str) and nargs not in ("?", "*", "+", REMAINDER):
        raise ValueError(f"{cls.__typename__} 'nargs' must be one of '?', '*', '+', or 'R'")
    if isinstance(nargs, int) and nargs < 0:
        raise ValueError(f"{cls.__typename__} 'nargs' must be a non-negative integer")

    if action.parametric:
        if nargs == 0:
            raise ValueError(f"{cls.__typename__} with action {action.value!r} must consume at least one token")
        metadata["nargs"] = coalesce(nargs, 1)
    else:
        if nargs not in (Unset, 0):
            raise ValueError(f"{cls.__typename__} with action {action.value!r} cannot consume tokens")
        metadata["nargs"] = 0


def _sanitize_values(cls, metadata, /):
    """
    Internal: validate const/default/choices against the action.
    """
    action = metadata["action"]

    const = metadata["const"]
    if not isinstance(const, str | Unset):
        raise TypeError(f"{cls.__typename__} 'const' must be a string")
    if action in (Action.STORE_CONST, Action.APPEND_CONST) and const is Unset:
        raise TypeError(f"{cls.__typename__} with action {action.value!r} requires a 'const'")
    if const is not Unset and action not in (Action.STORE_CONST, Action.APPEND_CONST):
        if not (action.parametric and metadata["nargs"] == "?"):
            raise TypeError(f"{cls.__typename__} 'const' is only allowed for const actions or nargs='?'")

    default = metadata["default"]
    if isinstance(default, Iterable) and not isinstance(default, str):
        default = tuple(default)
        if not all(isinstance(item, str) for item in default):
            raise TypeError(f"{cls.__typename__} 'default' items must be strings")
    elif not isinstance(default, str | Unset):
        raise TypeError(f"{cls.__typename__} 'default' must be a string or an iterable of strings")
    if default is not Unset and action.terminal:
        raise TypeError(f"{cls.__typename__} with action {action.value!r} cannot have a 'default'")
    metadata["default"] = default

    if not isinstance(choices := metadata["choices"], Iterable) or isinstance(choices, str):
        raise TypeError(f"{cls.__typename__} 'choices' must be a non-string iterable")
    if not isinstance(choices, Set):
        sanitized = []
        for choice in choices:
            if choice in sanitized:
                raise ValueError(f"{cls.__typename__} 'choices' cannot contain duplicates")
            sanitized.append(choice)
        choices = tuple(sanitized)
    if not all(isinstance(choice, str) for choice in choices):
        raise TypeError(f"{cls.__typename__} 'choices' must be strings")
    if choices and not action.parametric:
        raise TypeError(f"{cls.__typename__} with action {action.value!r} cannot have 'choices'")
    metadata["choices"] = choices


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate help-facing metadata and flags.
    """
    for field in ("descr", "metavar"):
        if not isinstance(value := metadata[field], str | Text | Unset):
            raise TypeError(f"{cls.__typename__} {field!r} must be a string")
        elif isinstance(value, str) and not (value := value.strip()):
            raise ValueError(f"{cls.__typename__} {field!r} cannot be empty")
        metadata[field] = value

    if metadata["metavar"] and not metadata["action"].parametric:
        raise TypeError(f"{cls.__typename__} with action {metadata['action'].value!r} cannot have a 'metavar'")

    if metadata["action"].terminal:
        if metadata["required"]:
            raise TypeError(f"{cls.__typename__} with action {metadata['action'].value!r} cannot be required")
        if metadata["hidden"]:
            raise TypeError(f"{cls.__typename__} with action {metadata['action'].value!r} cannot be hidden")
        if metadata["deprecated"]:
            raise TypeError(f"{cls.__typename__} with action {metadata['action'].value!r} cannot be deprecated")


class Argument(metaclass=ArgumentType):
    """
    One declared flag, option or positional.

    An Argument is immutable once built: every field is sanitized in __new__ and
    exposed through read-only properties. Ownership of qualifiers and destination
    keys across a parser is checked later, by the Registry.
    """

    __introspectable__ = (
        "qualifiers",
        "dest",
        "action",
        "nargs",
        "default",
        "const",
        "required",
        "choices",
        "descr",
        "metavar",
        "positional",
        "hidden",
        "deprecated",
    )

    __displayable__ = (
        "qualifiers",
        "dest",
        "action",
        "nargs",
        "default",
        "required",
        "choices",
    )

    def __new__(
            cls,
            *qualifiers,
            dest=Unset,
            action=Action.STORE,
            nargs=Unset,
            default=Unset,
            const=Unset,
            required=False,
            choices=(),
            descr=Unset,
            metavar=Unset,
            hidden=False,
            deprecated=False
    ):
        """
        Construct an Argument from its qualifiers and named options.

        Raises TypeError/ValueError on any inconsistent declaration (see module docs).
        """
        metadata = {
            "qualifiers": qualifiers,
            "dest": dest,
            "action": action,
            "nargs": nargs,
            "default": default,
            "const": const,
            "required": bool(required),
            "choices": choices,
            "descr": descr,
            "metavar": metavar,
            "positional": False,
            "hidden": bool(hidden),
            "deprecated": bool(deprecated),
        }
        _sanitize_qualifiers(cls, metadata)
        _sanitize_arity(cls, metadata)
        _sanitize_values(cls, metadata)
        _sanitize_metadata(cls, metadata)

        self = super().__new__(cls)
        # Mirror sanitized metadata into private fields; read-only properties expose them.
        for name, object in metadata.items():
            super(Argument, self).__setattr__("_" + name, coalesce(object))
        return self

    def __setattr__(self, name, value, /):
        raise AttributeError(f"{type(self).__typename__} is read-only")

    def __delattr__(self, name, /):
        raise AttributeError(f"{type(self).__typename__} is read-only")

    @property
    def primary(self):
        """
        The name used in messages: the first qualifier, or the destination for positionals.
        """
        return self.qualifiers[0] if self.qualifiers else self.dest

    @property
    def multiple(self):
        """
        True when the stored namespace value is a sequence rather than a single string.
        """
        if self.action in (Action.APPEND, Action.APPEND_CONST):
            return True
        return self.action is Action.STORE and self.nargs not in (1, "?")


__all__ = (
    "Action",
    "Argument",
    "REMAINDER",
)

del ArgumentType
