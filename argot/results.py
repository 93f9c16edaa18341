"""
Argot parse outcomes.

Parser.parse() returns exactly one of these tagged records, so callers branch
with a plain match statement instead of catching control-flow exceptions:

    match parser.parse(argv):
        case Values(values, leftovers):
            ...
        case HelpRequested(parser):
            educate(parser)
        case VersionRequested(version):
            print(version)
        case Failure(fault):
            trigger(fault, shell=True)
"""
from typing import NamedTuple, Any


class Values(NamedTuple):
    """
    successful parse: option values (plus "<name>_given" markers) and leftovers.
    """
    values: dict[str, Any]
    leftovers: list[str]

    def __getitem__(self, key):
        # string keys address option values; integers keep tuple indexing
        if isinstance(key, str):
            return self.values[key]
        return tuple.__getitem__(self, key)

    def __contains__(self, key):
        return key in self.values

    def get(self, key, default=None, /):
        return self.values.get(key, default)

    def given(self, name, /):
        """
        whether option 'name' was supplied on the command line.
        """
        return self.values.get(name + "_given", False)


class HelpRequested(NamedTuple):
    parser: Any


class VersionRequested(NamedTuple):
    version: str


class Failure(NamedTuple):
    """
    first parse error encountered (scan, then constraints, then required, then values).
    """
    fault: Exception

    @property
    def code(self):
        return self.fault.code


__all__ = (
    "Values",
    "HelpRequested",
    "VersionRequested",
    "Failure",
)
