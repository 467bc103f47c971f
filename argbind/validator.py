"""
Argbind validator: required arguments, choices, and defaults.

Runs after binding, over the arguments in registration order:
1. required
   • a required positional must have been supplied on the command line;
   • a required option is satisfied when it was supplied or declares a default.
2. choices: every bound value (each element for list values) must be allowed.
3. defaults: arguments left unbound receive their default.

The first violation is raised; `values` is updated in place with the defaults.
"""
from .faults import FaultCode, InvalidChoiceError, MissingRequiredError, getdoc


def validate(values, registry, /):
    """
    check `values` (destination → str | list[str]) against `registry`, then fill defaults.

    raises MissingRequiredError or InvalidChoiceError.
    """
    for argument in registry:
        if not argument.required or argument.dest in values:
            continue
        if argument.positional or argument.default is None:
            raise MissingRequiredError(
                "%s %r is required" % ("positional" if argument.positional else "option", argument.primary),
                title="missing required argument",
                code=FaultCode.MISSING_REQUIRED,
                qualifier=argument.primary,
                argument=argument,
                hint="pass a value for %s; run with --help to see the expected usage" % argument.primary,
                docs=getdoc(FaultCode.MISSING_REQUIRED),
            )

    for argument in registry:
        if not argument.choices or argument.dest not in values:
            continue
        value = values[argument.dest]
        for item in [value] if isinstance(value, str) else value:
            if item not in argument.choices:
                allowed = sorted(argument.choices)
                raise InvalidChoiceError(
                    "invalid choice %r for %r" % (item, argument.primary),
                    title="invalid choice",
                    code=FaultCode.INVALID_CHOICE,
                    qualifier=argument.primary,
                    argument=argument,
                    value=item,
                    choices=allowed,
                    hint="choose one of: %s" % ", ".join(map(repr, allowed)),
                    docs=getdoc(FaultCode.INVALID_CHOICE),
                )

    for argument in registry:
        if argument.default is not None and argument.dest not in values:
            values[argument.dest] = argument.default if isinstance(argument.default, str) else list(argument.default)

    return values


__all__ = (
    "validate",
)
