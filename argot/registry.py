"""
Argot option registry.

The registry owns every declaration made on a parser:
- specs:   name → OptionSpec
- longs:   long switch text → name
- shorts:  short switch character → name
- entries: OptionSpec and Banner records in declaration order
- constraints: Constraint records in declaration order

Only validated insertion (define/banner/constrain) and lookups are exposed;
the indices themselves never leave this module except as read-only views.

Lifecycle
- built by sequential declarations;
- at the first parse, ensure_builtins() synthesizes 'version' (when a version
  string is configured) and 'help', then resolve_default_shorts() gives every
  option without a short letter the first free character of its long switch;
- both steps are idempotent, so later parses see the same registry.
"""
from types import MappingProxyType

from .faults import DefinitionError
from .specs import OptionSpec, Banner, Constraint
from .utils import *
from .valuetypes import ValueType


class Registry:
    """
    Declarations of one parser, indexed by name, long switch and short switch.
    """

    def __init__(self):
        self._specs = {}
        self._longs = {}
        self._shorts = {}
        self._entries = []
        self._constraints = []

    def __contains__(self, name):
        return name in self._specs

    def __iter__(self):
        return iter(self._specs.values())

    def __len__(self):
        return len(self._specs)

    @property
    def entries(self):
        """
        declaration-ordered OptionSpec/Banner records (read-only snapshot).
        """
        return tuple(self._entries)

    @property
    def constraints(self):
        return tuple(self._constraints)

    @property
    def shorts(self):
        return MappingProxyType(self._shorts)

    def spec(self, name, /):
        return self._specs[name]

    def by_long(self, long, /):
        """
        name registered for a long switch (without dashes), or Unset.
        """
        return self._longs.get(long, Unset)

    def by_short(self, short, /):
        """
        name registered for a short switch character, or Unset.
        """
        return self._shorts.get(short, Unset)

    def define(self, name, descr="", /, **options):
        """
        declare an option and index it.

        raises
        - DefinitionError: duplicate name, long or short switch, or any
          per-option validation failure (see OptionSpec).
        """
        if name in self._specs:
            raise DefinitionError(f"you already have an argument named {name!r}")

        spec = OptionSpec(name, descr, **options)

        if spec.long in self._longs:
            raise DefinitionError(
                "long option name %r is already taken; please specify a (different) long" % spec.long, name
            )
        if spec.short and spec.short != "none" and spec.short in self._shorts:
            raise DefinitionError(
                "short option name %r is already taken; please specify a (different) short" % spec.short, name
            )

        self._specs[name] = spec
        self._longs[spec.long] = name
        if spec.short and spec.short != "none":
            self._shorts[spec.short] = name
        self._entries.append(spec)
        return spec

    def banner(self, text, /):
        banner = Banner(text)
        self._entries.append(banner)
        return banner

    def constrain(self, kind, members, /):
        """
        record a depends/conflicts constraint over already-declared options.
        """
        members = tuple(members)
        for member in members:
            if member not in self._specs:
                raise DefinitionError(f"unknown option {member!r}")
        constraint = Constraint(kind, members)
        self._constraints.append(constraint)
        return constraint

    def ensure_builtins(self, version=Unset, /):
        """
        synthesize the 'version' and 'help' flags unless already declared
        (by name or by long switch). 'version' only exists with a version string.
        """
        if version and "version" not in self._specs and "version" not in self._longs:
            self.define("version", "Print version and exit")
        if "help" not in self._specs and "help" not in self._longs:
            self.define("help", "Show this message")

    def resolve_default_shorts(self):
        """
        give each option without a short letter the first usable character of
        its long switch: not a digit, not a dash, not already taken.
        """
        for spec in self._entries:
            if not isinstance(spec, OptionSpec) or spec.short:
                continue
            for char in spec.long:
                if char.isdigit() or char == "-" or char in self._shorts:
                    continue
                spec._short = char
                self._shorts[char] = spec.name
                break

    def builtin(self, name, /):
        """
        True when 'name' is the synthesized help/version flag (a flag named so).
        """
        spec = self._specs.get(name)
        return spec is not None and spec.type is ValueType.FLAG and name in ("help", "version")


__all__ = (
    "Registry",
)
