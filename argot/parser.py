"""
Argot parser.

Public surface
- Parser: declare options (opt), banners (banner/text), constraints
  (depends/conflicts), stop words (stop_on/stop_on_unknown) and an optional
  version string, then parse(argv) into a tagged outcome (see argot.results).
- options(argv, *builders, **settings): one-shot runner that builds a parser,
  parses, renders help/version and exits, or surfaces the failure.

Parse pipeline (one call)
1. first call only: synthesize the 'version'/'help' flags and assign default
   short letters (both idempotent).
2. scan the vector once (argot.scanner); every switch occurrence is resolved to
   an option and recorded in a fresh given-args map together with the
   parameters its arity entitles it to.
3. 'version', then 'help', short-circuit everything below.
4. depends/conflicts constraints, then required options (argot.constraints).
5. values: defaults for every option, overwritten by the coerced value of
   every supplied option plus a "<name>_given" marker (argot.coercion).

The first fault wins. It is raised internally and returned as Failure(fault)
(or re-raised when parse(..., raising=True)). The engine never prints and never
exits; only the runner and the rendering helpers do.

Notes
- Switch resolution: "-X" (one non-dash character) looks up a short letter,
  "--name" a long switch; any other switch-shaped text is malformed.
- Concurrent or interleaved parse() calls on one instance are unsupported;
  sequential calls are independent of each other.
"""
import difflib
import functools
import re
import sys
import warnings

from .coercion import GivenArg, coerce
from .constraints import check_constraints, check_required
from .faults import *
from .registry import Registry
from .results import Values, HelpRequested, VersionRequested, Failure
from .scanner import Scanner
from .specs import ConstraintKind
from .utils import *
from .valuetypes import Arity

_SHORT_SWITCH = re.compile(r"-([^-])")
_LONG_SWITCH = re.compile(r"--([^-]\S*)")


def _initial(spec):
    # a multi flag keeps its boolean default for negation but reads as [] until given
    if spec.multi and spec.arity is Arity.FLAG and not spec.default:
        return []
    return spec.default


class Parser:
    """
    Command-line option parser.

    runtime settings (keyword-only)
    - version: version string; enables the synthesized '--version' flag.
    - prog: program name used in rendered faults.
    - stop_words: tokens that end option scanning.
    - stop_on_unknown: end option scanning at the first unrecognized token.
    - shell / fancy / colorful: how faults and help are surfaced by trigger(),
      the runner and argot.render (see argot.faults).
    """

    def __init__(
            self,
            *,
            version=Unset,
            prog=Unset,
            stop_words=(),
            stop_on_unknown=False,
            shell=False,
            fancy=False,
            colorful=False,
    ):
        if version is not Unset and not isinstance(version, str):
            raise TypeError("parser 'version' must be a string")
        self._registry = Registry()
        self._version = version
        self._stop_words = list(stop_words)
        self._stop_on_unknown = bool(stop_on_unknown)
        self._leftovers = []
        self.prog = prog
        self.shell = bool(shell)
        self.fancy = bool(fancy)
        self.colorful = bool(colorful)

    def __repr__(self):
        return "parser(%s)" % ", ".join(
            "%s=%r" % (spec.name, spec.type.value) for spec in self._registry
        )

    # ── declarations ─────────────────────────────────────────────────────────

    @property
    def registry(self):
        return self._registry

    @property
    def leftovers(self):
        """
        leftovers of the last successful parse.
        """
        return list(self._leftovers)

    @property
    def stop_words(self):
        return tuple(self._stop_words)

    def opt(self, name, descr="", /, **options):
        """
        declare an option; see OptionSpec for the accepted keywords
        (long, short, type, default, multi, required).
        """
        return self._registry.define(name, descr, **options)

    def banner(self, text, /):
        return self._registry.banner(text)

    text = banner

    def version(self, version=Unset, /):
        """
        set the version string (enables '--version'), or return it when called bare.
        """
        if version is Unset:
            return self._version
        if not isinstance(version, str):
            raise TypeError("version() argument must be a string")
        self._version = version
        return version

    def depends(self, *names):
        """
        if any of 'names' is given, all of them must be.
        """
        return self._registry.constrain(ConstraintKind.DEPENDS, names)

    def conflicts(self, *names):
        """
        at most one of 'names' may be given.
        """
        return self._registry.constrain(ConstraintKind.CONFLICTS, names)

    def stop_on(self, *words):
        """
        end option scanning at any of 'words' (subcommand names); they and
        everything after them are left over.
        """
        for word in words:
            if isinstance(word, str):
                self._stop_words.append(word)
            else:
                self._stop_words.extend(word)

    def stop_on_unknown(self):
        self._stop_on_unknown = True

    # ── parsing ──────────────────────────────────────────────────────────────

    def parse(self, argv, /, *, raising=False):
        """
        parse an argument vector (program name excluded).

        returns
        - Values(values, leftovers) on success;
        - HelpRequested(parser) / VersionRequested(version) when asked for;
        - Failure(fault) for the first ParseError, unless raising=True, in
          which case the fault propagates.

        'argv' itself is never modified.
        """
        if isinstance(argv, str):
            raise TypeError("parse() argument must be a sequence of strings, not a string")
        self._registry.ensure_builtins(self._version)
        self._registry.resolve_default_shorts()
        try:
            return self._parse(list(argv))
        except ParseError as fault:
            if raising:
                raise
            return Failure(fault)

    def _parse(self, argv):
        given = {}
        scanner = Scanner(self._stop_words, self._stop_on_unknown)
        leftovers = scanner.scan(argv, functools.partial(self._handle, given))

        if "version" in given and self._version and self._registry.builtin("version"):
            return VersionRequested(self._version)
        if "help" in given and self._registry.builtin("help"):
            return HelpRequested(self)

        check_constraints(self._registry, given)
        check_required(self._registry, given)

        values = {spec.name: _initial(spec) for spec in self._registry}
        for name, arg in given.items():
            values[name] = coerce(self._registry.spec(name), arg)
            values[name + "_given"] = True

        self._leftovers = leftovers
        return Values(values, list(leftovers))

    def _resolve_switch(self, switch, position):
        """
        map a switch to an option name, or raise the matching ParseError.
        """
        if match := _SHORT_SWITCH.fullmatch(switch):
            name = self._registry.by_short(match[1])
        elif match := _LONG_SWITCH.fullmatch(switch):
            name = self._registry.by_long(match[1])
        else:
            raise MalformedTokenError(
                "invalid argument syntax %r at %s position" % (switch, ordinal(position)),
                title="malformed option or flag",
                code=FaultCode.MALFORMED_TOKEN,
                hint="options are spelled -x, -xyz, --name or --name=value",
                token=switch,
                index=position,
                docs=getdoc(FaultCode.MALFORMED_TOKEN),
            )

        if name is Unset:
            switches = [candidate for spec in self._registry for candidate in spec.switches]
            suggestions = difflib.get_close_matches(switch, switches, 5)
            try:
                hint = "did you mean %r? you can also run --help to see all options" % suggestions[0]
            except IndexError:
                hint = "try --help to see all available options"
            raise UnknownSwitchError(
                "unknown argument %r at %s position" % (switch, ordinal(position)),
                title="unknown option or flag",
                code=FaultCode.UNKNOWN_SWITCH,
                hint=hint,
                input=switch,
                index=position,
                suggestions=suggestions,
                docs=getdoc(FaultCode.UNKNOWN_SWITCH),
            )
        return name

    def _handle(self, given, switch, params, /, *, position, inline):
        """
        scanner callback: record one occurrence and report the parameters taken.
        """
        name = self._resolve_switch(switch, position)
        spec = self._registry.spec(name)

        if name in given and not spec.multi:
            raise DuplicatedSwitchError(
                "option %r at %s position specified multiple times" % (switch, ordinal(position)),
                title="duplicated option or flag",
                code=FaultCode.DUPLICATED_SWITCH,
                hint="keep a single %s, or declare the option with multi=True" % switch,
                input=switch,
                index=position,
                option=name,
                docs=getdoc(FaultCode.DUPLICATED_SWITCH),
            )

        if inline and params == [""] and spec.arity is not Arity.FLAG:
            self.trigger(EmptyInlineValueWarning(
                "empty inline value for option %r at %s position" % (switch, ordinal(position)),
                title="empty inline value",
                code=FaultCode.EMPTY_INLINE_VALUE,
                hint="add a value after '=' (for example: %s=%s)" % (switch, spec.type.placeholder),
                input=switch,
                index=position,
                option=name,
                docs=getdoc(FaultCode.EMPTY_INLINE_VALUE),
            ), shell=False)

        arg = given.setdefault(name, GivenArg(switch))
        arg.record(switch, position)

        if not params:
            return 0
        match spec.arity:
            case Arity.SINGLE:
                arg.take(params[:1])
                return 1
            case Arity.MULTI:
                arg.take(params)
                return len(params)
        return 0

    def trigger(self, fault, /, **options):
        """
        surface a fault with this parser's runtime settings (see argot.faults.trigger).
        """
        settings = dict(shell=self.shell, fancy=self.fancy, colorful=self.colorful)
        if self.prog is not Unset:
            settings["prog"] = self.prog
        trigger(fault, **(settings | options))


def options(argv=None, /, *builders, **settings):
    """
    build a parser, parse 'argv' (default: sys.argv[1:]) and handle the outcome.

    - builders: callables receiving the parser, used to declare its options.
    - settings: Parser keyword settings; 'shell' defaults to True here.

    parse warnings are collected while parsing and surfaced here (printed in
    shell mode, re-issued through the warnings module otherwise).

    outcomes
    - help requested: print help (argot.render.educate), exit with status 0.
    - version requested: print the version, exit with status 0.
    - failure: trigger the fault (shell mode prints it and exits with status 1).
    - success: return Values.

    'argv' is never modified; use Values.leftovers for the unparsed tokens.
    """
    from .render import educate, announce

    settings.setdefault("shell", True)
    parser = Parser(**settings)
    for builder in builders:
        builder(parser)

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", ParseWarning)
        outcome = parser.parse(sys.argv[1:] if argv is None else argv)
    for item in caught:
        if issubclass(item.category, ParseWarning):
            parser.trigger(item.message)
        else:
            warnings.warn_explicit(item.message, item.category, item.filename, item.lineno)

    match outcome:
        case Values() as values:
            return values
        case HelpRequested(parser):
            educate(parser)
            sys.exit(0)
        case VersionRequested():
            announce(parser)
            sys.exit(0)
        case Failure(fault):
            parser.trigger(fault)
            # reached only when a fault handler chose not to raise or exit
            return None


__all__ = (
    "Parser",
    "options",
)
