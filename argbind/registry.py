"""
Argbind registry: the set of arguments declared for one parser.

Every qualifier ("-u", "--upper") and every destination key belongs to exactly
one Argument. Conflicts are detected when an argument is registered, never while
parsing. The registry is add-only; it is built before parsing starts and only
read afterwards (by the binder, the validator and the help renderer).
"""
from .arguments import Argument
from .faults import DuplicateQualifierError, FaultCode, getdoc


class Registry:
    """
    Add-only collection of Argument specs indexed by qualifier and destination.

    Iteration yields the arguments in registration order.
    """

    def __init__(self, arguments=(), /):
        self._arguments = []
        self._qualifiers = {}
        self._dests = {}
        for argument in arguments:
            self.register(argument)

    def register(self, argument, /):
        """
        Add an argument, failing with DuplicateQualifierError when one of its
        qualifiers or its destination key is already owned by another argument.

        Returns the registered argument.
        """
        if not isinstance(argument, Argument):
            raise TypeError("register() argument must be an argument")

        for qualifier in argument.qualifiers:
            if (owner := self._qualifiers.get(qualifier)) is not None:
                raise DuplicateQualifierError(
                    "qualifier %r is already declared by %r" % (qualifier, owner.primary),
                    title="duplicate qualifier",
                    code=FaultCode.DUPLICATE_QUALIFIER,
                    qualifier=qualifier,
                    argument=argument,
                    owner=owner,
                    hint="give each option its own qualifiers",
                    docs=getdoc(FaultCode.DUPLICATE_QUALIFIER),
                )

        if (owner := self._dests.get(argument.dest)) is not None:
            raise DuplicateQualifierError(
                "destination %r is already used by %r" % (argument.dest, owner.primary),
                title="duplicate destination",
                code=FaultCode.DUPLICATE_QUALIFIER,
                qualifier=argument.dest,
                argument=argument,
                owner=owner,
                hint="pass a distinct dest=... for one of them",
                docs=getdoc(FaultCode.DUPLICATE_QUALIFIER),
            )

        self._arguments.append(argument)
        self._qualifiers.update(dict.fromkeys(argument.qualifiers, argument))
        self._dests[argument.dest] = argument
        return argument

    def lookup(self, qualifier, /):
        """
        Return the argument owning a dashed qualifier, or None.
        """
        return self._qualifiers.get(qualifier)

    def destination(self, dest, /):
        """
        Return the argument storing into `dest`, or None.
        """
        return self._dests.get(dest)

    def positionals(self):
        """
        Positional arguments in declaration order.
        """
        return tuple(argument for argument in self._arguments if argument.positional)

    def optionals(self):
        """
        Named (non-positional) arguments in declaration order.
        """
        return tuple(argument for argument in self._arguments if not argument.positional)

    @property
    def qualifiers(self):
        return tuple(self._qualifiers)

    def __iter__(self):
        return iter(tuple(self._arguments))

    def __len__(self):
        return len(self._arguments)

    def __contains__(self, item):
        if isinstance(item, Argument):
            return any(item is argument for argument in self._arguments)
        return item in self._qualifiers

    def __repr__(self):
        return f"registry({", ".join(map(repr, self._arguments))})"

    def __rich_repr__(self):
        yield from self._arguments


__all__ = (
    "Registry",
)
