r"""
Argot argument scanner.

One left-to-right pass over an argument vector. For every switch occurrence
the scanner calls back into the parser, which answers with the number of
trailing parameters it consumed; whatever is not consumed as a switch or a
parameter is returned as leftovers.

Token classification (first match wins)
1. a stop word          → halt; the stop word and the rest are leftovers.
2. "--"                 → halt; the rest are leftovers, "--" itself is dropped.
3. "--name=value"       → one occurrence with the single parameter "value".
4. "--name"             → collect trailing parameters, call back with them
                          (or with None when there are none).
5. "-xyz"               → cluster: "-x" and "-y" bare, "-z" collects like 4.
6. anything else        → leftover (or halt under stop-on-unknown).

Parameter collection
- following tokens are consumed while they do not look like a switch and are
  not stop words. A token looks like a switch when it matches
  ^-(-|\.$|[^\d.]), so "-3", "-0.5" and "-.5" are parameters, while "-x",
  "--x" and "-." are switches.

Advance rule
- after a call back that was given parameters, the scan resumes past the
  switch and the parameters the callback took. Parameters it did not take are
  scanned again as ordinary tokens; unless stop-on-unknown is active, in which
  case a callback taking none halts the scan and everything after the switch
  is a leftover.
"""
import re

_PARAMETER_STOP = re.compile(r"-(-|\.$|[^\d.])")
_INLINE_LONG = re.compile(r"--(\S+?)=(.*)", re.DOTALL)
_LONG = re.compile(r"--(\S+)")
_SHORTS = re.compile(r"-(\S+)")


class Scanner:
    """
    Tokenizer for one argument vector.

    parameters
    - stop_words: tokens that end option scanning (subcommand names).
    - stop_on_unknown: halt at the first token that is neither a switch nor a
      parameter, and at any switch that takes none of its parameters.

    callback contract
    - callback(switch, params, position=..., inline=...) → int
      • switch: the switch text as it appeared ("--name", "-x").
      • params: list of collected parameters, or None.
      • position: 1-based position of the switch token in the vector.
      • inline: True for the "--name=value" form.
      • returns the number of parameters taken (ignored for inline forms).
    """

    def __init__(self, stop_words=(), stop_on_unknown=False):
        self.stop_words = tuple(stop_words)
        self.stop_on_unknown = bool(stop_on_unknown)

    def looks_like_switch(self, token, /):
        return bool(_PARAMETER_STOP.match(token))

    def collect(self, argv, start, /):
        """
        parameters following argv[start - 1], up to the next switch or stop word.
        """
        params = []
        for token in argv[start:]:
            if self.looks_like_switch(token) or token in self.stop_words:
                break
            params.append(token)
        return params

    def scan(self, argv, callback, /):
        """
        walk 'argv' once and return the leftovers (a new list).
        """
        argv = list(argv)
        leftovers = []
        index = 0

        while index < len(argv):
            token = argv[index]

            if token in self.stop_words:
                return leftovers + argv[index:]

            if token == "--":
                return leftovers + argv[index + 1:]

            if match := _INLINE_LONG.fullmatch(token):
                callback("--" + match[1], [match[2]], position=index + 1, inline=True)
                index += 1
                continue

            if _LONG.fullmatch(token):
                switches = [token]
            elif match := _SHORTS.fullmatch(token):
                switches = ["-" + char for char in match[1]]
            else:
                if self.stop_on_unknown:
                    return leftovers + argv[index:]
                leftovers.append(token)
                index += 1
                continue

            # every switch of a cluster but the last is a bare flag
            for switch in switches[:-1]:
                callback(switch, None, position=index + 1, inline=False)

            if params := self.collect(argv, index + 1):
                taken = callback(switches[-1], params, position=index + 1, inline=False)
                if not taken and self.stop_on_unknown:
                    return leftovers + argv[index + 1:]
                index += 1 + taken
            else:
                callback(switches[-1], None, position=index + 1, inline=False)
                index += 1

        return leftovers


__all__ = (
    "Scanner",
)
