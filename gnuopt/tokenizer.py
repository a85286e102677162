"""
gnuopt argument tokenizer: walk an argument vector against an option table.

Grammar (GNU style, no permutation)
- "--"            ends option scanning; every later token is an operand.
- "--name"        long option; "--name=value" carries an inline value.
- "-abc"          bundled short options; "-ofile" gives option o the value "file".
- anything else   (including "-" alone) ends option scanning and is the first operand.

Values
- no-argument options count their occurrences (1, 2, ...).
- argument options store their string value; a later occurrence overwrites.
- an option with both a short and a long name answers to both in the result.
- options that did not occur but have a default get that default.

Quirks mode
- unknown "--name" and "-x" tokens are registered on the fly instead of
  failing; the new options go through OptionTable.merge() with the permissive
  policy, the same gate the compiler uses.

Atomicity
- parsing works on a copy of the table; the caller's table only grows (quirks
  mode) once the whole argument vector has been parsed successfully.
"""
import difflib
import logging
from collections import deque
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from .faults import *
from .options import *
from .utils import *

logger = logging.getLogger(__name__)


def looks_like_option(token, /):
    """
    True for tokens that start with '-' other than the lone '-' (stdin by convention).
    """
    return token.startswith("-") and token != "-"


class ParseResult(Mapping):
    """
    Read-only outcome of one tokenization pass.

    Values are held once per option; a name lookup table maps every short and
    long name to its option. As a Mapping, the result answers to any option
    name that received a value (occurrence or default):

        result["v"], result["verbose"]  # same value
        result.get("missing")           # None

    Attributes
    - options: {name: value} snapshot, both names of aliased options included.
    - operands: tuple of operand strings, in order.
    - table: the option table the arguments were parsed against.
    """

    def __init__(self, table, values, operands):
        self._table = tuple(table)
        self._values = dict(values)
        self._names = {name: option for option in self._table for name in option.names}
        self._operands = tuple(operands)

    def __getitem__(self, name):
        try:
            return self._values[self._names[name]]
        except KeyError:
            raise KeyError(name) from None

    def __iter__(self):
        for option in self._table:
            if option in self._values:
                yield from option.names

    def __len__(self):
        return sum(len(option.names) for option in self._table if option in self._values)

    def __repr__(self):
        return f"parse-result(options={dict(self)!r}, operands={list(self._operands)!r})"

    def __rich_repr__(self):
        yield "options", dict(self)
        yield "operands", self._operands

    @property
    def options(self):
        return MappingProxyType(dict(self))

    @property
    def operands(self):
        return self._operands

    @property
    def table(self):
        return self._table

    def operand(self, index, /):
        """
        Return the index-th operand (0-based), or None if there is no such operand.
        """
        try:
            return self._operands[index] if index >= 0 else None
        except IndexError:
            return None

    def value(self, option, /):
        """
        Return the value recorded for an Option object, or None.
        """
        return self._values.get(option)


class ArgumentTokenizer:
    """
    Single-pass state machine turning argument tokens into a ParseResult.

    Parameters
    - table: OptionTable to resolve names against. A plain iterable of options
      is wrapped into a fresh table (quirks registrations then stay private).
    - quirks: register unknown options instead of failing.
    """

    def __init__(self, table, /, *, quirks=False):
        if not isinstance(table, OptionTable):
            table = OptionTable(table)
        self._table = table
        self._quirks = bool(quirks)

    @property
    def table(self):
        return self._table

    @property
    def quirks(self):
        return self._quirks

    def parse(self, tokens, /):
        """
        Parse argument tokens (as they follow the program name) into a ParseResult.

        phases
        - setup: copy the table, reset per-run state, install the token deque.
        - loop: classify each token as terminator, long option, short bundle, or
          first operand; the 1-based position of the current token is tracked
          so faults can say "at third position".
        - post-parse: collect operands, fill in defaults, commit quirks
          registrations back into the caller's table.

        Raises
        - TypeError: when tokens is not an iterable of strings.
        - UnknownOptionError, MissingArgumentError, UnexpectedArgumentError.
        """
        if isinstance(tokens, str) or not isinstance(tokens, Iterable):
            raise TypeError("parse() argument must be an iterable of strings")
        tokens = list(tokens)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() argument must be an iterable of strings")

        self._working = self._table.copy()
        self._values = {}
        self._tokens = deque(tokens)
        self._index = 0

        while self._tokens:
            token = self._tokens.popleft()
            self._index += 1

            if token == "--":
                break
            if token.startswith("--"):
                self._parse_long(token)
            elif looks_like_option(token):
                self._parse_short(token)
            else:
                # first operand: stop recognizing options, keep the token
                self._tokens.appendleft(token)
                break

        operands = list(self._tokens)
        self._tokens.clear()

        for option in self._working:
            if option not in self._values and option.has_default:
                self._values[option] = option.default

        if self._quirks and len(self._working) != len(self._table):
            self._table.merge(self._working, ConflictPolicy.PERMISSIVE)

        result = ParseResult(self._working, self._values, operands)
        logger.debug("parsed %d token(s): %r", len(tokens), result)
        return result

    def _parse_long(self, token):
        name, equals, inline = token[2:].partition("=")
        inline = inline if equals else None
        input = "--" + name

        option = self._working.find_long(name)
        if option is None:
            option = self._register(input, name, long=True, inline=inline)

        if not option.takes_argument:
            if inline is not None:
                raise UnexpectedArgumentError(
                    "option %r at %s position does not take an argument" % (input, ordinal(self._index)),
                    title="unexpected argument",
                    code=FaultCode.UNEXPECTED_ARGUMENT,
                    hint="remove everything from '=' (for example: %s)" % input,
                    input=input,
                    index=self._index,
                    option=option,
                )
            return self._record(option, None)

        if inline:
            return self._record(option, inline)
        if inline is not None:
            # "--name=": an empty inline value deliberately falls back to the
            # default rather than failing; only options without one are missing
            if option.mode is REQUIRED_ARGUMENT and not option.has_default:
                self._missing(option, input, inline=True)
            return self._record(option, coalesce(option.default, 1))

        if option.mode is REQUIRED_ARGUMENT:
            return self._record(option, self._take(option, input))
        # long optional arguments only come inline
        return self._record(option, coalesce(option.default, 1))

    def _parse_short(self, token):
        for offset in range(1, len(token)):
            character = token[offset]
            input = "-" + character

            option = self._working.find_short(character)
            if option is None:
                option = self._register(input, character, long=False)

            if not option.takes_argument:
                self._record(option, None)
                continue

            if rest := token[offset + 1:]:
                self._record(option, rest)
            elif option.mode is REQUIRED_ARGUMENT:
                self._record(option, self._take(option, input))
            elif self._tokens and not looks_like_option(self._tokens[0]):
                self._index += 1
                self._record(option, self._tokens.popleft())
            else:
                self._record(option, coalesce(option.default, 1))
            # an argument-taking option ends the bundle
            return

    def _take(self, option, input):
        """
        Consume the next token as the value of a required-argument option.
        """
        if not self._tokens or looks_like_option(self._tokens[0]):
            self._missing(option, input)
        self._index += 1
        return self._tokens.popleft()

    def _missing(self, option, input, *, inline=False):
        if inline:
            hint = "add a value after '=' (for example: %s=<value>)" % input
        elif input.startswith("--"):
            hint = "pass a value after %s, or use %s=<value> if it starts with '-'" % (input, input)
        else:
            hint = "pass a value after %s, or attach it as %s<value> if it starts with '-'" % (input, input)
        raise MissingArgumentError(
            "option %r at %s position requires an argument" % (input, ordinal(self._index)),
            title="missing argument",
            code=FaultCode.MISSING_ARGUMENT,
            hint=hint,
            input=input,
            index=self._index,
            option=option,
        )

    def _register(self, input, name, *, long, inline=None):
        """
        Resolve an unknown option: register it in quirks mode, fail otherwise.
        """
        valid = is_long_name(name) if long else is_short_name(name)
        if not self._quirks or not valid:
            if long:
                known = ["--" + option.long for option in self._working if option.long is not None]
            else:
                known = ["-" + option.short for option in self._working if option.short is not None]
            suggestions = difflib.get_close_matches(input, known, 5)
            try:
                hint = "did you mean %r?" % suggestions[0]
            except IndexError:
                hint = "remove it, or pass it after '--' if it is meant as an operand"
            raise UnknownOptionError(
                "unknown option %r at %s position" % (input, ordinal(self._index)),
                title="unknown option",
                code=FaultCode.UNKNOWN_OPTION,
                hint=hint,
                input=input,
                index=self._index,
                suggestions=suggestions,
            )

        if long:
            option = Option(None, name, NO_ARGUMENT if inline is None else REQUIRED_ARGUMENT)
            if inline is not None:
                option.default = inline or 1
        else:
            option = Option(name, None, NO_ARGUMENT)

        self._working.merge([option], ConflictPolicy.PERMISSIVE)
        logger.debug("registered %r from %s position", option, ordinal(self._index))
        return option

    def _record(self, option, value):
        if option.takes_argument:
            self._values[option] = value
        else:
            self._values[option] = self._values.get(option, 0) + 1


def parse(tokens, table, /, quirks=False):
    """
    Parse tokens against table in one call; see ArgumentTokenizer.parse().
    """
    return ArgumentTokenizer(table, quirks=quirks).parse(tokens)


__all__ = (
    "ParseResult",
    "ArgumentTokenizer",
    "looks_like_option",
    "parse",
)
