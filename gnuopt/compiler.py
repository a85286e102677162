"""
gnuopt specification compiler: from user declarations to Option objects.

Accepted specification shapes
- GrammarString: getopt(3)-style string, e.g. "ab:c::"
  • every ASCII letter or digit is a short option
  • one trailing ':' → required argument, two → optional argument
- RowList: sequence of rows and/or prebuilt Option objects; a row is
  [short_or_name, long_or_mode, mode?, description?, default?]
- OptionList: sequence made only of prebuilt Option objects

specify(source) classifies raw user input into one of these shapes once, at
the entry point; SpecificationCompiler.compile() dispatches on the shape and
nothing downstream inspects the raw input again.

Merging
- merge_into(table, options, policy) folds compiled options into an
  OptionTable; it is OptionTable.merge() under a compiler-facing name.
"""
import logging
from collections.abc import Sequence
from typing import NamedTuple

from .faults import *
from .options import ArgumentMode, ConflictPolicy, Option, OptionTable, NO_ARGUMENT, is_short_name

logger = logging.getLogger(__name__)


class GrammarString(NamedTuple):
    """getopt(3)-style option string."""
    string: str


class RowList(NamedTuple):
    """rows (and possibly prebuilt options) to be turned into options."""
    rows: tuple


class OptionList(NamedTuple):
    """prebuilt options, taken as they are."""
    options: tuple


type Specification = GrammarString | RowList | OptionList


def specify(source, /):
    """
    Classify a raw specification into GrammarString, RowList or OptionList.

    - str → GrammarString
    - sequence of Option only → OptionList
    - any other sequence → RowList (its rows are validated later)
    - an already classified specification is returned unchanged

    Raises
    - TypeError: for anything that is not a string or a sequence.
    """
    if isinstance(source, GrammarString | RowList | OptionList):
        return source
    if isinstance(source, str):
        return GrammarString(source)
    if isinstance(source, Option):
        return OptionList((source,))
    if isinstance(source, Sequence) and not isinstance(source, bytes | bytearray):
        items = tuple(source)
        if items and all(isinstance(item, Option) for item in items):
            return OptionList(items)
        return RowList(items)
    raise TypeError("specification must be an option string or a sequence of options/rows")


class SpecificationCompiler:
    """
    Converts user-given option specifications into Option objects.

    Parameters
    - default_mode: ArgumentMode used for rows that leave out the mode
      (defaults to NO_ARGUMENT).
    """

    def __init__(self, default_mode=NO_ARGUMENT):
        try:
            self._default_mode = ArgumentMode(default_mode)
        except ValueError:
            raise ValueError(f"default mode must be one of 0, 1 or 2, got {default_mode!r}") from None

    @property
    def default_mode(self):
        return self._default_mode

    def compile(self, source, /):
        """
        Compile any accepted specification shape into a list of options.
        """
        match specification := specify(source):
            case GrammarString(string):
                options = self.parse_string(string)
            case RowList(rows):
                options = self.parse_rows(rows)
            case OptionList(options):
                options = list(options)
        logger.debug("compiled %d option(s) from %s", len(options), type(specification).__name__)
        return options

    def parse_string(self, string, /):
        """
        Parse a GNU-style option string.

        Each letter or digit declares a short option with no argument; one
        trailing ':' makes the argument required, two make it optional.

        Raises
        - EmptySpecificationError: when the string is empty.
        - MalformedSpecificationError: when a character other than a letter
          or digit shows up where a letter is expected. The message carries the
          character, its 1-based position and whether ':' was acceptable too.
        """
        if not string:
            raise EmptySpecificationError(
                "option string must not be empty",
                title="empty specification",
                code=FaultCode.EMPTY_SPECIFICATION,
                hint="declare at least one option, for example 'ab:c::'",
            )

        options = []
        eol = len(string) - 1
        colon = False  # whether ':' would also be acceptable at the current position
        index = 0
        while index <= eol:
            character = string[index]
            if not is_short_name(character):
                raise MalformedSpecificationError(
                    "option string is not well formed: expected a letter%s, found %r at position %d" % (
                        " or ':'" if colon else "", character, index + 1
                    ),
                    title="malformed specification",
                    code=FaultCode.MALFORMED_SPECIFICATION,
                    hint="use letters or digits, each followed by at most two colons",
                    input=character,
                    position=index + 1,
                    colon=colon,
                )
            if index == eol or string[index + 1] != ":":
                options.append(Option(character, None, ArgumentMode.NO_ARGUMENT))
                colon = True
                index += 1
            elif index < eol - 1 and string[index + 2] == ":":
                options.append(Option(character, None, ArgumentMode.OPTIONAL_ARGUMENT))
                colon = False
                index += 3
            else:
                options.append(Option(character, None, ArgumentMode.REQUIRED_ARGUMENT))
                colon = True
                index += 2
        return options

    def parse_rows(self, rows, /):
        """
        Parse a list of option rows and/or prebuilt Option objects.

        Raises
        - EmptySpecificationError: when no rows are given.
        - InvalidRowTypeError: when an element is neither an Option nor a row
          (a non-string sequence of one to five fields).
        """
        if not rows:
            raise EmptySpecificationError(
                "no options given",
                title="empty specification",
                code=FaultCode.EMPTY_SPECIFICATION,
                hint="pass at least one option row, for example ['v', 'verbose']",
            )

        options = []
        for index, row in enumerate(rows, 1):
            if isinstance(row, Option):
                options.append(row)
            elif isinstance(row, Sequence) and not isinstance(row, str | bytes | bytearray) and 0 < len(row) <= 5:
                options.append(self._create_option(row))
            else:
                raise InvalidRowTypeError(
                    "invalid option type at row %d, must be an option or a row of one to five fields" % index,
                    title="invalid row type",
                    code=FaultCode.INVALID_ROW_TYPE,
                    hint="use [short, long, mode, description, default] or a prebuilt option",
                    row=row,
                    position=index,
                )
        return options

    def _create_option(self, row):
        row = list(row)
        size = len(row)
        if size < 3:
            row = self._complete_row(row)
        option = Option(row[0], row[1], row[2])
        if size >= 4:
            option.description = row[3]
        if size >= 5:
            option.default = row[4]
        return option

    def _complete_row(self, row):
        """
        Fill in the parts a short row leaves out.

        - the first field is the short name when it is one character long,
          otherwise the long name; the other name is None.
        - a non-integer second field is the long name of a short option.
        - a two-field row whose second field is an integer is [name, mode];
          otherwise the mode is the compiler's default mode.
        """
        first = row[0]
        short = first if isinstance(first, str) and len(first) == 1 else None

        long = None
        if short is None:
            long = first
        elif len(row) > 1 and not _is_mode(row[1]):
            long = row[1]

        mode = self._default_mode
        if len(row) == 2 and _is_mode(row[1]):
            mode = row[1]

        return [short, long, mode]


def _is_mode(object, /):
    return isinstance(object, int) and not isinstance(object, bool)


def merge_into(table, options, /, policy=ConflictPolicy.STRICT):
    """
    Merge options into table (an OptionTable, or any iterable of options).

    Returns the table that now holds the merged options; when a plain
    iterable was given, a new OptionTable is returned and the input is left
    unchanged.
    """
    if not isinstance(table, OptionTable):
        table = OptionTable(table)
    table.merge(options, policy)
    return table


__all__ = (
    "GrammarString",
    "RowList",
    "OptionList",
    "Specification",
    "specify",
    "SpecificationCompiler",
    "merge_into",
)
