"""
Argbind result types.

- Namespace: read-only mapping from destination key to the stored value. Values
  are plain strings or tuples of strings; the typed getters are a thin conversion
  layer on top and never change what is stored.
- ParseResult: (namespace, leftovers, fault) as returned by Parser.parse().
"""
from collections.abc import Mapping
from typing import NamedTuple

from .utils import Unset

_TRUTHS = {
    "true": True, "yes": True, "on": True, "1": True,
    "false": False, "no": False, "off": False, "0": False,
}


class Namespace(Mapping):
    """
    Immutable destination → value mapping produced by one parse call.
    """

    def __init__(self, values=(), /):
        self._values = {
            key: value if isinstance(value, str) else tuple(value)
            for key, value in dict(values).items()
        }

    def __getitem__(self, key):
        return self._values[key]

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def __repr__(self):
        return f"namespace({", ".join("%s=%r" % item for item in self._values.items())})"

    def __rich_repr__(self):
        yield from self._values.items()

    def __eq__(self, other):
        if isinstance(other, Mapping):
            return dict(self.items()) == dict(other.items())
        return NotImplemented

    __hash__ = None

    def _fetch(self, key, fallback):
        try:
            return self._values[key]
        except KeyError:
            if fallback is Unset:
                raise
            return fallback

    def getstr(self, key, fallback=Unset, /):
        """
        Return a single string value; a one-element sequence is unwrapped.
        """
        value = self._fetch(key, fallback)
        if isinstance(value, tuple):
            if len(value) != 1:
                raise ValueError(f"{key!r} holds {len(value)} values, not one")
            return value[0]
        return value

    def getlist(self, key, fallback=Unset, /):
        """
        Return the value as a list (a single string becomes a one-element list).
        """
        value = self._fetch(key, fallback)
        if isinstance(value, str):
            return [value]
        return list(value)

    def getint(self, key, fallback=Unset, /):
        if key not in self._values and fallback is not Unset:
            return fallback
        value = self.getstr(key)
        try:
            return int(value)
        except ValueError:
            raise ValueError(f"{key!r} value {value!r} is not an integer") from None

    def getfloat(self, key, fallback=Unset, /):
        if key not in self._values and fallback is not Unset:
            return fallback
        value = self.getstr(key)
        try:
            return float(value)
        except ValueError:
            raise ValueError(f"{key!r} value {value!r} is not a number") from None

    def getbool(self, key, fallback=Unset, /):
        if key not in self._values and fallback is not Unset:
            return fallback
        value = self.getstr(key)
        try:
            return _TRUTHS[value.strip().lower()]
        except KeyError:
            raise ValueError(f"{key!r} value {value!r} is not a boolean") from None

    def asdict(self):
        """
        Plain dict copy with list values (convenient for printing/serializing).
        """
        return {key: value if isinstance(value, str) else list(value) for key, value in self._values.items()}


class ParseResult(NamedTuple):
    """
    Outcome of one parse call.

    - namespace: the bound (and defaulted) values; empty when the parse failed.
    - leftovers: plain tokens no argument consumed.
    - fault: None on success, an ArgumentException on failure, or an
      ArgumentSignal (help/version requested).
    """
    namespace: Namespace
    leftovers: list
    fault: Exception | None = None

    @property
    def ok(self):
        return self.fault is None


__all__ = (
    "Namespace",
    "ParseResult",
)
