r"""
Argot declaration records: options, banners and constraints.

Overview
- OptionSpec: one declared option (name, long/short switches, value type,
  multiplicity, required-ness, default, description).
- Banner: free text interleaved with options in declaration order (help only).
- Constraint: a "depends" (mutual requirement) or "conflicts" (mutual
  exclusion) relationship over option names.

- Introspection & representation
  • SpecType metaclass provides stable __repr__/__rich_repr__ and exposes the
    fields listed in __introspectable__ as read-only properties (via mirror()).

Metadata (sanitized on construction)
- OptionSpec
  • name: non-empty string (registry key).
  • long: derived from name ('_' → '-') when omitted; a leading '--' is
    stripped; anything else starting with '-' is rejected.
  • short: Unset | single character | "-X" | "none"; never a digit or dash.
  • type: resolved through argot.valuetypes.resolve (explicit and/or inferred).
  • default: flags default to False; multi options wrap a scalar default into
    a one-element list and default to [] when nothing was given.
- Constraint
  • kind: ConstraintKind; members: two or more distinct option names.

Cross-spec rules (uniqueness of name/long/short, members being registered)
belong to argot.registry, which owns every OptionSpec once declared.
"""
import functools
import operator
import re
from collections.abc import Sequence
from enum import Enum

from .faults import DefinitionError
from .utils import *
from .valuetypes import ValueType, resolve

_INVALID_SHORT = re.compile(r"[\d-]")


class SpecType(type):
    """
    Metaclass giving declaration records read-only fields and stable reprs.

    Conventions
    - __typename__ is derived from the class name (camel-case split with
      hyphens) and used in messages.
    - every name listed in __introspectable__ becomes a property mirroring the
      private "_<name>" field.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_identity(cls, metadata, /):
    """
    Internal: validate name/descr and derive the long switch text.

    Raises
    - TypeError: name or descr of the wrong Python type.
    - DefinitionError: empty name, malformed long form.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not name:
        raise DefinitionError(f"{cls.__typename__} 'name' cannot be empty")

    if not isinstance(metadata["descr"], str):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")

    long = coalesce(metadata["long"], None)
    long = str(long) if long is not None else name.replace("_", "-")
    if match := re.fullmatch(r"--([^-].*)", long, re.DOTALL):
        long = match[1]
    elif not re.match(r"[^-]", long):
        raise DefinitionError(f"invalid long option name {long!r}", name)
    metadata["long"] = long


def _sanitize_short(cls, metadata, /):
    """
    Internal: normalize the short switch character.

    Accepted forms: Unset/None (auto-assign later), "none" (never assign), a
    single character, or "-X" (stripped to "X"). Digits and dashes are refused.
    """
    short = coalesce(metadata["short"], None)
    if short is None:
        metadata["short"] = Unset
        return
    if not isinstance(short, str):
        raise TypeError(f"{cls.__typename__} 'short' must be a string")
    if short == "none" or len(short) == 1:
        pass
    elif match := re.fullmatch(r"-(.)", short, re.DOTALL):
        short = match[1]
    else:
        raise DefinitionError(f"invalid short option name {short!r}", metadata["name"])

    if short != "none" and _INVALID_SHORT.fullmatch(short):
        raise DefinitionError("a short option name can't be a number or a dash", metadata["name"])
    metadata["short"] = short


def _sanitize_value(cls, metadata, /):
    """
    Internal: resolve the value type and materialize the effective default.

    - the type is resolved from the explicit hint and/or the default.
    - flags: default False unless a boolean was given.
    - multi (non-flag): scalar defaults become [default]; no default becomes [].
    - otherwise a missing default becomes None.
    """
    try:
        type = resolve(metadata["type"], metadata["default"], metadata["multi"])
    except DefinitionError as error:
        raise DefinitionError(error.message, metadata["name"]) from None
    metadata["type"] = type

    default = coalesce(metadata["default"], None)
    if type is ValueType.FLAG:
        default = bool(default)
    elif metadata["multi"]:
        if default is None:
            default = []
        elif not isinstance(default, Sequence) or isinstance(default, str):
            default = [default]
        else:
            default = list(default)
    elif isinstance(default, Sequence) and not isinstance(default, str):
        default = list(default)
    metadata["default"] = default


class OptionSpec(metaclass=SpecType):
    """
    Declared option.

    Instances are created by Registry.define() (Parser.opt()); the registry is
    the only writer of the 'short' field afterwards, when it assigns default
    short letters at the first parse.
    """

    __introspectable__ = (
        "name",
        "long",
        "short",
        "type",
        "multi",
        "required",
        "default",
        "descr",
    )

    def __new__(
            cls,
            name,
            descr="",
            /,
            *,
            long=Unset,
            short=Unset,
            type=Unset,
            default=Unset,
            multi=False,
            required=False,
    ):
        metadata = {
            "name": name,
            "descr": descr,
            "long": long,
            "short": short,
            "type": type,
            "default": default,
            "multi": bool(multi),
            "required": bool(required),
        }
        _sanitize_identity(cls, metadata)
        _sanitize_short(cls, metadata)
        _sanitize_value(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @property
    def arity(self):
        return self.type.arity

    @property
    def switches(self):
        """
        command-line spellings of this option, long first ("--name", "-n").
        """
        switches = ["--" + self.long]
        if self.short and self.short != "none":
            switches.append("-" + self.short)
        return tuple(switches)


class Banner(metaclass=SpecType):
    """
    Free text shown between options on the help screen.
    """

    __introspectable__ = ("text",)

    def __new__(cls, text, /):
        if not isinstance(text, str):
            raise TypeError(f"{cls.__typename__} 'text' must be a string")
        self = super().__new__(cls)
        self._text = text
        return self


class ConstraintKind(Enum):
    DEPENDS = "depends"
    CONFLICTS = "conflicts"


class Constraint(metaclass=SpecType):
    """
    Relationship among two or more options, checked only when one of them is given.

    - DEPENDS: if any member is given, every member must be given.
    - CONFLICTS: if any member is given, no other member may be given.
    """

    __introspectable__ = ("kind", "members")

    def __new__(cls, kind, members, /):
        kind = ConstraintKind(kind)
        members = tuple(members)
        for member in members:
            if not isinstance(member, str):
                raise TypeError(f"{cls.__typename__} members must be option names")
        if len(set(members)) != len(members):
            raise DefinitionError(f"{kind.value} constraint cannot contain duplicates")
        if len(members) < 2:
            raise DefinitionError(f"{kind.value} constraint must have at least two options")
        self = super().__new__(cls)
        self._kind = kind
        self._members = members
        return self

    def trigger(self, given, /):
        """
        first member (in declaration order) present in 'given', or Unset.
        """
        return next((member for member in self.members if member in given), Unset)


__all__ = (
    "OptionSpec",
    "Banner",
    "ConstraintKind",
    "Constraint",
)
