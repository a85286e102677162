"""
gnuopt facade: declare options, parse a command line, read the outcome.

What this module provides
- Getopt: wires the specification compiler, the option table, the argument
  tokenizer and the help formatter together, and exposes the parse result as
  a read-only mapping.

Quick start
    from gnuopt import Getopt, Option, REQUIRED_ARGUMENT

    getopt = Getopt([
        ["v", "verbose", 0, "talk more"],
        Option("o", "output", REQUIRED_ARGUMENT, description="where to write"),
    ])
    getopt.parse("-vv --output=out.txt in.txt")
    getopt["verbose"]    # 2
    getopt["o"]          # "out.txt"
    getopt.operands      # ("in.txt",)

Runtime flags
- quirks: register unknown options while parsing instead of failing.
- shell: render faults (and the help text) on stderr with rich and exit with
  status 1 instead of raising.
- fancy: draw faults inside a panel.
- colorful: apply the palettes (overridable via __styles__ in __main__).
"""
import logging
import shlex
import sys
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from rich.console import Console

from .compiler import SpecificationCompiler
from .faults import *
from .helptext import DEFAULT_BANNER, HelpTextFormatter
from .options import NO_ARGUMENT, OptionTable
from .tokenizer import ArgumentTokenizer
from .utils import *

logger = logging.getLogger(__name__)


class Getopt(Mapping):
    """
    Command-line option parser facade.

    Parameters
    - options: Unset | str | Sequence
      Initial specification (option string, rows, or Option objects); see add_options().
    - default_mode: ArgumentMode used for rows that leave the mode out.
    - quirks: bool
      Accept and register unknown options while parsing.
    - shell, fancy, colorful: bool
      Fault rendering switches (see module docstring).
    - banner: str
      Usage banner template for the help text ("%s" receives the script name).

    Reading the outcome (after parse())
    - getopt[name] / getopt.option(name): value, or None when absent.
    - getopt.get(name, default): value, or default when absent.
    - getopt.options: {name: value}, both names of aliased options included.
    - getopt.operands / getopt.operand(i).
    - len(getopt) / iter(getopt): one entry per given option (its short name
      when it has one, else its long name).
    """

    def __init__(
            self,
            options=Unset,
            default_mode=NO_ARGUMENT,
            *,
            quirks=False,
            shell=False,
            fancy=False,
            colorful=False,
            banner=DEFAULT_BANNER
    ):
        self._compiler = SpecificationCompiler(default_mode)
        self._table = OptionTable()
        self._formatter = HelpTextFormatter(banner, colorful=colorful)
        self._result = Unset
        self._quirks = bool(quirks)
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)
        if options is not Unset:
            self.add_options(options)

    @property
    def table(self):
        return self._table

    @property
    def quirks(self):
        return self._quirks

    @property
    def shell(self):
        return self._shell

    @property
    def fancy(self):
        return self._fancy

    @property
    def colorful(self):
        return self._colorful

    @property
    def result(self):
        """
        The last successful ParseResult, or None before parse().
        """
        return coalesce(self._result)

    @property
    def banner(self):
        return self._formatter.banner

    @banner.setter
    def banner(self, banner):
        self._formatter.banner = banner

    def add_options(self, options, /):
        """
        Extend the list of known options.

        Accepts the same shapes as the constructor: an option string like
        "ab:c::", or a sequence of rows and/or Option objects. Conflicting
        redefinitions raise ConflictingOptionError; exact repeats are ignored.
        """
        added = self._table.merge(self._compiler.compile(options))
        logger.debug("added %d option(s), %d known", len(added), len(self._table))
        return self

    def parse(self, arguments=Unset, /):
        """
        Parse a command line.

        Parameters
        - arguments:
          • Unset: read tokens from sys.argv[1:].
          • str: shell-like string; split via shlex.split.
          • Iterable[str]: pre-tokenized sequence, passed on verbatim (empty
            strings included).

        Faults are surfaced through trigger(): raised, or rendered with the
        help text on stderr followed by exit status 1 in shell mode.
        """
        if arguments is Unset:
            tokens = sys.argv[1:]
        elif isinstance(arguments, str):
            tokens = shlex.split(arguments)
        elif isinstance(arguments, Iterable):
            tokens = list(arguments)
            if not all(isinstance(token, str) for token in tokens):
                raise TypeError("parse() argument must be a string or an iterable of strings")
        else:
            raise TypeError("parse() argument must be a string or an iterable of strings")

        self._result = Unset
        try:
            self._result = ArgumentTokenizer(self._table, quirks=self._quirks).parse(tokens)
        except GetoptException as fault:
            self.trigger(fault)
        return self

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this parser's runtime flags.
        """
        if self._shell:
            self.print_help(stderr=True)
        trigger(
            fault,
            **options,
            prog=self._formatter.script_name,
            shell=self._shell,
            fancy=self._fancy,
            colorful=self._colorful,
        )

    def option(self, name, /):
        """
        Value of the given (short or long) option name.

        - None when the option was not given and has no default.
        - the default value when one is configured and the option was not given.
        - an int (occurrence count) for options given without argument.
        - a str for options given with an argument.
        """
        return self._result.get(name) if self._result is not Unset else None

    @property
    def options(self):
        return self._result.options if self._result is not Unset else MappingProxyType({})

    @property
    def operands(self):
        return self._result.operands if self._result is not Unset else ()

    def operand(self, index, /):
        """
        The index-th operand (0-based), or None if it does not exist.
        """
        return self._result.operand(index) if self._result is not Unset else None

    def help_text(self, padding=Unset):
        """
        Plain help text: banner, then one line per known option.
        """
        return self._formatter.format(self._table, padding)

    def print_help(self, *, stderr=False):
        Console(stderr=stderr).print(self._formatter.render(self._table), end="", highlight=False)

    def __getitem__(self, name):
        return self.option(name)

    def get(self, name, default=None, /):
        """
        Value of the given option name when it has one, else default.

        Unlike getopt[name], which answers None for any absent option, this
        honours the fallback for names that received no value.
        """
        return self.option(name) if name in self else default

    def __contains__(self, name):
        return self._result is not Unset and name in self._result

    def __iter__(self):
        # an option with both names is listed once, under its short name
        if self._result is not Unset:
            for option in self._result.table:
                if (name := option.names[0]) in self._result:
                    yield name

    def __len__(self):
        return sum(1 for _ in self)

    def __setitem__(self, name, value):
        raise TypeError("Getopt is read-only")

    def __delitem__(self, name):
        raise TypeError("Getopt is read-only")

    def __repr__(self):
        return f"getopt(options={dict(self.options)!r}, operands={list(self.operands)!r})"

    def __rich_repr__(self):
        yield "options", dict(self.options)
        yield "operands", self.operands


__all__ = (
    "Getopt",
)
