"""
Argot faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing parse
  issue. Codes are grouped by domain to keep copy consistent and make
  logs/searches predictable.
- DefinitionError: raised while options and constraints are being declared.
  Never rendered, never deferred: a broken declaration is a programming error.
- ParseError / ParseWarning: base types that carry message + options and know
  how to render themselves in a friendly, lowercased, actionable way.
- trigger(): central entry point to surface a fault (raise/warn, or print with
  rich and exit when running in shell mode).
- getdoc(): optional description lookup for a code from the host application.

Host configuration (read from __main__ when present)
- __styles__: palette overrides for the rich rendering.
- __codes__: FaultCode → label remapping (see FaultCode.normalize()).
- __docs__: FaultCode → short documentation string (see getdoc()).
- __prog__: program name shown in the fault header.
"""
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - switches (1111x)
      • MALFORMED_TOKEN, UNKNOWN_SWITCH, DUPLICATED_SWITCH, OPTION_VALUE_REQUIRED
    - values (1112x)
      • UNCASTABLE_VALUE
    - constraints (1115x)
      • UNMET_DEPENDENCY, CONFLICTING_SWITCHES, MISSING_REQUIRED
    - warnings (12xxx)
      • EMPTY_INLINE_VALUE

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- switch errors (111xx) ---
    MALFORMED_TOKEN             = 11111
    UNKNOWN_SWITCH              = 11112
    DUPLICATED_SWITCH           = 11115
    OPTION_VALUE_REQUIRED       = 11117

    # --- value errors (112xx) ---
    UNCASTABLE_VALUE            = 11126

    # --- constraint errors (115xx) ---
    UNMET_DEPENDENCY            = 11151
    CONFLICTING_SWITCHES        = 11152
    MISSING_REQUIRED            = 11153

    # --- warnings (12xxx) ---
    EMPTY_INLINE_VALUE          = 12111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class DefinitionError(ValueError):
    """
    raised when an option, banner or constraint declaration is invalid.

    covers duplicate names/long/short flags, malformed long/short spellings,
    unsupported or conflicting types, empty list defaults and constraints over
    unknown options. the registry is left untouched by the failing call.
    """

    def __init__(self, message, /, option=Unset):
        super().__init__(message)
        self.message = message
        self.option = option

    def __str__(self):
        if self.option is not Unset:
            return f"option {self.option!r}: {self.message}"
        return self.message


def _render(fault, palette, title_style, message_style):
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", False)

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    prog = text(getattr(main, "__prog__", options.get("prog", "argot")), styler("prog-name"))
    code = options.get("code")

    header = Text.assemble(
        "[ ",
        prog,
        " — ",
        text(code.normalize() if isinstance(code, FaultCode) else "", styler("code")),
        " | ",
        text(str(options.get("title", "")).title(), styler(title_style)),
        " ]"
    )
    message = text(fault.message, styler(message_style))
    hint = Text.assemble(text(" → ", styler("hint-arrow")), text(options.get("hint", ""), styler("hint")))

    if options.get("fancy", False):
        return Panel(Group(message, hint), title=header, title_align="left")

    return Group(header, message, hint)


class _Fault:
    """
    shared plumbing of ParseError and ParseWarning.

    attributes
    - message: short, lowercased, position-first sentence.
    - options: read-only mapping of context (title, code, hint, input, token,
      index, suggestions, ... plus runtime flags shell/fancy/colorful).
    - code: shortcut for options["code"].
    """
    __palette__ = {}
    __roles__ = ("", "")

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    def __str__(self):
        return str(self.message)

    def __rich__(self):
        return _render(self, type(self).__palette__, *type(self).__roles__)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **self.options | overrides)


class ParseError(_Fault, Exception):
    """
    base class of every fault raised while parsing an argument vector.
    """
    __palette__ = {
        # header parts
        "prog-name": "bold #E6E6F0",  # near-white program name
        "code": "bold #00E5FF",  # neon cyan fault code
        "error-title": "bold #FF4DA6",  # friendly pinky title

        # body
        "error-message": "#C8C8D0",  # soft light gray message
        "hint-arrow": "#9CE19C dim",  # gentle green arrow
        "hint": "italic #9CE19C",  # gentle green hint text
    }
    __roles__ = ("error-title", "error-message")

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)


class MalformedTokenError(ParseError): ...
class UnknownSwitchError(ParseError): ...
class DuplicatedSwitchError(ParseError): ...
class OptionValueRequiredError(ParseError): ...
class UncastableValueError(ParseError): ...
class DependencyError(ParseError): ...
class ConflictError(ParseError): ...
class MissingRequiredError(ParseError): ...


class ParseWarning(_Fault, Warning):
    """
    base class of non-fatal parse diagnostics (same options contract as ParseError).
    """
    __palette__ = {
        # header parts
        "prog-name": "bold #E6E6F0",  # near-white program name
        "code": "bold #FFB400",  # amber fault code for warnings
        "warning-title": "bold #FFC2E0",  # softer pinky title for warnings

        # body
        "warning-message": "#D6D6DE",  # slightly lighter gray body
        "hint-arrow": "#B8EFAF dim",  # softer green arrow
        "hint": "italic #B8EFAF",  # softer green hint text
    }
    __roles__ = ("warning-title", "warning-message")

    def __trigger__(self):
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=4)
        console.print(self)


class EmptyInlineValueWarning(ParseWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via the rich console (errors then exit
      with status 1); otherwise errors are raised and warnings are emitted.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    returns None when nothing is registered.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    return getattr(__import__("__main__"), "__docs__", {}).get(code)


__all__ = (
    "FaultCode",
    "DefinitionError",
    "ParseError",
    "MalformedTokenError",
    "UnknownSwitchError",
    "DuplicatedSwitchError",
    "OptionValueRequiredError",
    "UncastableValueError",
    "DependencyError",
    "ConflictError",
    "MissingRequiredError",
    "ParseWarning",
    "EmptyInlineValueWarning",
    "trigger",
    "getdoc",
)
