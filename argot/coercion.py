"""
Argot value coercion.

Given the raw parameter groups collected for an option (one group per
occurrence that took parameters), produce the option's final value:

1. every occurrence of a non-flag option must have taken a parameter
   (OptionValueRequiredError otherwise);
2. every raw parameter is converted by the option's ValueType
   (UncastableValueError names the switch and the offending token);
3. the converted groups are reshaped by arity × multiplicity:

   | arity  | multi=False                  | multi=True                   |
   |--------|------------------------------|------------------------------|
   | SINGLE | scalar                       | [scalar per occurrence]      |
   | MULTI  | [values of the occurrence]   | [[values] per occurrence]    |

Flags never take parameters: a given flag is the negation of its default.
"""
from .faults import FaultCode, OptionValueRequiredError, UncastableValueError, getdoc
from .utils import ordinal
from .valuetypes import Arity


class GivenArg:
    """
    Parse-scoped record of one option supplied on the command line.

    - switch: switch text of the latest occurrence ("--name" or "-n").
    - occurrences: (position, params) per occurrence, in order; position is
      the 1-based index of the switch token, params is the list of taken
      parameters or None when the occurrence took none.
    """

    __slots__ = ("switch", "occurrences")

    def __init__(self, switch):
        self.switch = switch
        self.occurrences = []

    def __repr__(self):
        return f"given-arg(switch={self.switch!r}, occurrences={self.occurrences!r})"

    def record(self, switch, position, params=None, /):
        self.switch = switch
        self.occurrences.append((position, params))

    def take(self, params, /):
        """
        attach parameters to the latest occurrence.
        """
        position, _ = self.occurrences[-1]
        self.occurrences[-1] = (position, list(params))

    @property
    def groups(self):
        return [params for _, params in self.occurrences if params is not None]


def convert(spec, switch, token, position, /):
    """
    convert one raw parameter for 'spec', raising UncastableValueError on failure.
    """
    try:
        return spec.type.coerce(token)
    except ValueError:
        raise UncastableValueError(
            "option %r at %s position needs %s, got %r" % (switch, ordinal(position), spec.type.kind, token),
            title="invalid value",
            code=FaultCode.UNCASTABLE_VALUE,
            hint="pass %s after %s (for example: %s %s)" % (
                spec.type.kind, switch, switch, spec.type.placeholder
            ),
            input=switch,
            token=token,
            index=position,
            option=spec.name,
            docs=getdoc(FaultCode.UNCASTABLE_VALUE),
        ) from None


def reshape(spec, groups, /):
    """
    fold converted parameter groups into the option's value shape.
    """
    match spec.arity, spec.multi:
        case Arity.SINGLE, False:
            return groups[0][0]
        case Arity.SINGLE, True:
            return [group[0] for group in groups]
        case Arity.MULTI, False:
            return groups[0]
        case Arity.MULTI, True:
            return groups
    raise TypeError(f"{spec.type.value} options have no parameters to reshape")


def coerce(spec, given, /):
    """
    final value of an option that was supplied on the command line.

    bare occurrences of a valued option are skipped as long as at least one
    occurrence carried parameters.
    """
    if spec.arity is Arity.FLAG:
        return not spec.default

    groups = [
        [convert(spec, given.switch, token, position) for token in params]
        for position, params in given.occurrences
        if params is not None
    ]
    if not groups:
        position, _ = given.occurrences[0]
        raise OptionValueRequiredError(
            "option %r at %s position needs a parameter" % (given.switch, ordinal(position)),
            title="missing value",
            code=FaultCode.OPTION_VALUE_REQUIRED,
            hint="pass %s after %s (for example: %s %s)" % (
                spec.type.kind, given.switch, given.switch, spec.type.placeholder
            ),
            input=given.switch,
            index=position,
            option=spec.name,
            docs=getdoc(FaultCode.OPTION_VALUE_REQUIRED),
        )
    return reshape(spec, groups)


__all__ = (
    "GivenArg",
    "convert",
    "reshape",
    "coerce",
)
