"""
Argot help and version rendering (rich).

- educate(parser, console=None): help screen.
    <version>                      (when set, unless the first entry is a banner)

    options:                       (unless the first entry is a banner)
      --long, -s <placeholder>     description (default: value)
    <banner text>                  (wherever it was declared)

  A description ending with a period gets "(Default: value)" instead. Defaults
  are shown only when truthy; list defaults are joined with ", ".
- announce(parser, console=None): the version string alone.

Palette keys
- version, options-label, option-name, flag-name, placeholder,
  option-description, default, banner, panel-title

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- Styles only apply when the parser is colorful; fancy wraps help in a panel.
"""
import datetime
from collections import defaultdict

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .specs import Banner, OptionSpec
from .valuetypes import Arity


def _palette(parser):
    styles = defaultdict(str, {
        # === Head ===
        "version": "bold #00E6FF",  # Cyan version line
        "options-label": "bold #FFFFFF",  # White section header

        # === Switches ===
        "option-name": "bold #00E6FF",  # Cyan for options taking parameters
        "flag-name": "bold #22C55E",  # Green for flags
        "placeholder": "bold #FFD600",  # Amber parameter labels

        # === Descriptions ===
        "option-description": "#9CA3AF",  # Muted gray
        "default": "italic #737373",  # Dim default suffix
        "banner": "#D1D5DB",

        # === Fancy panel ===
        "panel-title": "bold #FF4D94",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if parser.colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not parser.colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    return styler, text


def _format_default(default):
    if isinstance(default, list):
        return ", ".join(map(_format_default, default))
    if isinstance(default, datetime.date):
        return default.isoformat()
    return str(default)


def _describe(spec):
    """
    description with its "(default: ...)" suffix, as plain text.
    """
    descr = spec.descr
    if spec.default:
        label = "Default" if descr.endswith(".") else "default"
        suffix = "(%s: %s)" % (label, _format_default(spec.default))
        descr = f"{descr} {suffix}" if descr else suffix
    return descr


def _switches(spec, styler, text):
    style = "flag-name" if spec.arity is Arity.FLAG else "option-name"
    switches = Text(", ").join(text(switch, styler(style)) for switch in spec.switches)
    if placeholder := spec.type.placeholder:
        switches.append(" ").append(text(placeholder, styler("placeholder")))
    return switches


def educate(parser, console=None):
    """
    Render the help screen of 'parser' to 'console' (stdout by default).
    """
    registry = parser.registry
    registry.ensure_builtins(parser.version())
    registry.resolve_default_shorts()

    console = console or Console()
    styler, text = _palette(parser)
    width = console.width - 4 * parser.fancy  # panel gutters

    entries = registry.entries
    lefts = {
        entry.name: _switches(entry, styler, text)
        for entry in entries
        if isinstance(entry, OptionSpec)
    }
    padding = 2
    indent = max((len(left) for left in lefts.values()), default=0) + padding + 4

    renders = []

    if not (entries and isinstance(entries[0], Banner)):
        if parser.version():
            renders.append(text(parser.version(), styler("version")).append("\n"))
        renders.append(text("options", styler("options-label")).append(":"))

    for entry in entries:
        if isinstance(entry, Banner):
            banner = Text()
            for line in text(entry.text, styler("banner")).wrap(console, width):
                banner.append(line).append("\n")
            renders.append(banner)
            continue

        section = Text(" " * padding).append(lefts[entry.name])
        if descr := text(_describe(entry), styler("option-description")):
            # wide switch columns push the description to its own line
            if len(section) >= indent:
                section.append("\n").append(" " * indent)
            else:
                section.append(" " * (indent - len(section)))
            wrapped = descr.wrap(console, max(width - indent, 10))
            try:
                section.append(wrapped.pop(0))
            except IndexError:
                pass
            for line in wrapped:
                section.append("\n").append(" " * indent).append(line)
        renders.append(section)

    renderable = Group(*renders)
    if parser.fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[", " ", "HELP", " ", "]", style=styler("panel-title")),
            title_align="left",
        )
    console.print(renderable)


def announce(parser, console=None):
    """
    Print the version string of 'parser' (nothing when it has none).
    """
    if not (version := parser.version()):
        return
    styler, text = _palette(parser)
    (console or Console()).print(text(version, styler("version")))


__all__ = (
    "educate",
    "announce",
)
