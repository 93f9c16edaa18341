"""
Argot value types and type resolution.

Overview
- Arity: how many parameters a single occurrence of an option consumes
  (FLAG → none, SINGLE → exactly one, MULTI → every collected parameter).
- ValueType: closed enumeration of the supported option types. Every member
  knows its arity, how to coerce one raw token, how to describe itself in a
  diagnostic ("an integer") and its help placeholder ("<i>").
- resolve(type, default, multi): normalize an explicit type (tag, synonym,
  Python class, or ValueType) and/or infer one from a default value.

Token grammar (ASCII digits only)
- int:   [0-9]+                                 (no sign)
- float: -?(([0-9]+(\\.[0-9]+)?)|(\\.[0-9]+))   (optional leading '-')
- date:  ISO-8601 date or date-time (datetime.date / datetime.datetime)
- string: passthrough

Inference from defaults
- bool → flag (checked before numbers: bool is an int subclass).
- int/float whose decimal string is all digits → int; any other number → float.
  A negative integer therefore infers float, keeping the inferred type
  consistent with what the int grammar would accept.
- str → string, date/datetime → date.
- list/tuple → plural type of the first element; empty sequences fail.
"""
import datetime
import re
from collections.abc import Sequence
from enum import Enum

from .faults import DefinitionError
from .utils import Unset

_INTEGER = re.compile(r"[0-9]+")
_FLOAT = re.compile(r"-?(([0-9]+(\.[0-9]+)?)|(\.[0-9]+))")


class Arity(Enum):
    """
    parameters consumed by one occurrence of an option.
    """
    FLAG = 0
    SINGLE = 1
    MULTI = 2


def _parse_integer(token, /):
    if not _INTEGER.fullmatch(token):
        raise ValueError(f"invalid integer literal: {token!r}")
    return int(token)


def _parse_float(token, /):
    if not _FLOAT.fullmatch(token):
        raise ValueError(f"invalid floating-point literal: {token!r}")
    return float(token)


def _parse_date(token, /):
    try:
        return datetime.date.fromisoformat(token)
    except ValueError:
        return datetime.datetime.fromisoformat(token)


def _parse_string(token, /):
    return str(token)


class ValueType(Enum):
    """
    closed set of option value types.

    single-argument members (INT, STRING, FLOAT, DATE) take one parameter per
    occurrence; their plural twins (INTS, STRINGS, FLOATS, DATES) take every
    parameter that follows the switch; FLAG takes none.
    """
    FLAG = "flag"
    INT = "int"
    INTS = "ints"
    STRING = "string"
    STRINGS = "strings"
    FLOAT = "float"
    FLOATS = "floats"
    DATE = "date"
    DATES = "dates"

    @property
    def arity(self):
        match self:
            case ValueType.FLAG:
                return Arity.FLAG
            case ValueType.INT | ValueType.STRING | ValueType.FLOAT | ValueType.DATE:
                return Arity.SINGLE
            case ValueType.INTS | ValueType.STRINGS | ValueType.FLOATS | ValueType.DATES:
                return Arity.MULTI
        raise RuntimeError("unreachable")

    @property
    def singular(self):
        """
        the single-argument twin (FLAG and single types map to themselves).
        """
        match self:
            case ValueType.INTS:
                return ValueType.INT
            case ValueType.STRINGS:
                return ValueType.STRING
            case ValueType.FLOATS:
                return ValueType.FLOAT
            case ValueType.DATES:
                return ValueType.DATE
            case _:
                return self

    @property
    def plural(self):
        """
        the multi-argument twin (FLAG has none and maps to itself).
        """
        match self:
            case ValueType.INT:
                return ValueType.INTS
            case ValueType.STRING:
                return ValueType.STRINGS
            case ValueType.FLOAT:
                return ValueType.FLOATS
            case ValueType.DATE:
                return ValueType.DATES
            case _:
                return self

    @property
    def kind(self):
        """
        what a valid parameter is, phrased for diagnostics.
        """
        match self.singular:
            case ValueType.INT:
                return "an integer"
            case ValueType.FLOAT:
                return "a floating-point number"
            case ValueType.DATE:
                return "a date"
            case ValueType.STRING:
                return "a string"
            case _:
                return "no value"

    @property
    def placeholder(self):
        """
        help-screen label for the parameter(s), empty for flags.
        """
        label = {
            ValueType.FLAG: "",
            ValueType.INT: "i",
            ValueType.STRING: "s",
            ValueType.FLOAT: "f",
            ValueType.DATE: "date",
        }[self.singular]
        if not label:
            return ""
        return "<%s%s>" % (label, "+" * (self.arity is Arity.MULTI))

    def coerce(self, token, /):
        """
        convert one raw parameter; raises ValueError when the token is invalid.
        """
        match self.singular:
            case ValueType.INT:
                return _parse_integer(token)
            case ValueType.FLOAT:
                return _parse_float(token)
            case ValueType.DATE:
                return _parse_date(token)
            case ValueType.STRING:
                return _parse_string(token)
        raise TypeError(f"{self.value} options do not take parameters")


# Textual synonyms accepted for the 'type' attribute.
_SYNONYMS = {
    "boolean": ValueType.FLAG,
    "bool": ValueType.FLAG,
    "integer": ValueType.INT,
    "integers": ValueType.INTS,
    "double": ValueType.FLOAT,
    "doubles": ValueType.FLOATS,
}

# Tags that name planned IO-resource types; accepted by no coercer.
_RESERVED = ("io", "ios")


def _normalize(type, /):
    """
    map an explicit type hint onto a ValueType member.
    """
    if isinstance(type, ValueType):
        return type
    if isinstance(type, str):
        if type in _RESERVED:
            raise DefinitionError(f"argument type {type!r} is reserved and not supported")
        try:
            return _SYNONYMS.get(type) or ValueType(type)
        except ValueError:
            raise DefinitionError(f"unsupported argument type {type!r}") from None
    # bool before int: bool is an int subclass; datetime before date for the same reason
    for hint, member in (
            (bool, ValueType.FLAG),
            (str, ValueType.STRING),
            (int, ValueType.INT),
            (float, ValueType.FLOAT),
            (datetime.datetime, ValueType.DATE),
            (datetime.date, ValueType.DATE),
    ):
        if type is hint:
            return member
    raise DefinitionError(f"unsupported argument type {type!r}")


def _infer_scalar(object, /):
    if isinstance(object, bool):
        return ValueType.FLAG
    if isinstance(object, int | float):
        return ValueType.INT if _INTEGER.fullmatch(str(object)) else ValueType.FLOAT
    if isinstance(object, str):
        return ValueType.STRING
    if isinstance(object, datetime.date):
        return ValueType.DATE
    return Unset


def infer(default, /):
    """
    infer a ValueType from a default value, or Unset when there is nothing to infer from.

    raises DefinitionError for empty sequences and unsupported value types.
    """
    if default is Unset or default is None:
        return Unset
    if isinstance(default, Sequence) and not isinstance(default, str):
        if not default:
            raise DefinitionError("multiple argument type cannot be deduced from an empty list")
        inferred = _infer_scalar(default[0])
        if inferred is Unset or inferred is ValueType.FLAG:
            raise DefinitionError("unsupported multiple argument type")
        return inferred.plural
    if (inferred := _infer_scalar(default)) is Unset:
        raise DefinitionError("unsupported argument type")
    return inferred


def resolve(type=Unset, default=Unset, multi=False):
    """
    resolve the effective ValueType of an option.

    rules
    - an explicit type is normalized first (synonyms, Python classes, members).
    - multi + list default + no explicit type: the list is a per-occurrence
      default, so only its first element drives inference.
    - explicit and inferred types must agree, otherwise DefinitionError.
    - with neither, the option is a flag.
    """
    explicit = Unset if type is Unset or type is None else _normalize(type)

    if (
            multi and
            explicit is Unset and
            isinstance(default, Sequence) and
            not isinstance(default, str)
    ):
        if not default:
            raise DefinitionError("multiple argument type cannot be deduced from an empty list")
        default = default[0]

    inferred = infer(default)

    if explicit is not Unset and inferred is not Unset and explicit is not inferred:
        raise DefinitionError(
            "type specification and default type don't match (default type is %s)" % inferred.value
        )

    if explicit is not Unset:
        return explicit
    if inferred is not Unset:
        return inferred
    return ValueType.FLAG


__all__ = (
    "Arity",
    "ValueType",
    "infer",
    "resolve",
)
