r"""
gnuopt option declarations and the option table.

Overview
- ArgumentMode: NO_ARGUMENT (0), REQUIRED_ARGUMENT (1), OPTIONAL_ARGUMENT (2).
  An IntEnum, so the integer shorthand accepted in row specifications keeps working.
- Option: one accepted flag (short name, long name, argument mode, description, default).
- ConflictPolicy: STRICT raises on conflicting redefinitions, PERMISSIVE drops the newcomer.
- OptionTable: ordered, unique, conflict-free sequence of Option. merge() is the
  only operation that ever changes its membership.

Identity rules
- Two options are duplicates when their short and long names are pairwise equal.
- Two options conflict when they agree on exactly one of short/long and disagree
  on the other, unless both lack a short name or both lack a long name.

Validation highlights
- short must match r"[A-Za-z0-9]".
- long must match r"[A-Za-z0-9][A-Za-z0-9_-]+" (at least two characters).
- at least one of short/long is required.
- mode must be one of the ArgumentMode values (plain 0/1/2 are coerced).

Quick example:
    >>> from gnuopt.options import Option, OptionTable, ArgumentMode
    >>> table = OptionTable()
    >>> table.merge([Option("v", "verbose"), Option("o", "output", ArgumentMode.REQUIRED_ARGUMENT)])
    >>> table.find("output").short
    'o'
"""
import functools
import logging
import operator
import re
from collections.abc import Iterable, Sequence
from enum import Enum, IntEnum

from rich.text import Text

from .faults import ConflictingOptionError, FaultCode
from .utils import *

logger = logging.getLogger(__name__)


class ArgumentMode(IntEnum):
    """
    whether an option takes an argument.

    the numeric values are part of the public contract: row specifications
    may spell the mode as a bare integer (e.g. ["o", 1]).
    """
    NO_ARGUMENT       = 0
    REQUIRED_ARGUMENT = 1
    OPTIONAL_ARGUMENT = 2


NO_ARGUMENT = ArgumentMode.NO_ARGUMENT
REQUIRED_ARGUMENT = ArgumentMode.REQUIRED_ARGUMENT
OPTIONAL_ARGUMENT = ArgumentMode.OPTIONAL_ARGUMENT


class ConflictPolicy(Enum):
    """
    what merge() does with a newcomer that conflicts with a survivor.
    """
    STRICT = "strict"
    PERMISSIVE = "permissive"


class OptionType(type):
    """
    Metaclass that gives option declarations a stable representation.

    Responsibilities
    - Derive __typename__ from the class name for messages.
    - Expose every name listed in __introspectable__ as a read-only property
      mirroring the private "_name" field, unless the class body defines it.
    - Provide __repr__/__rich_repr__ driven by __introspectable__.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            } | namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_names(cls, metadata, /):
    """
    Internal: validate the short/long pair of an option declaration.

    Raises
    - TypeError: when a name is neither a string nor None.
    - ValueError: when both names are missing or a name is not well formed.
    """
    short, long = metadata["short"], metadata["long"]

    if not isinstance(short, str | None):
        raise TypeError(f"{cls.__typename__} 'short' must be a string")
    if not isinstance(long, str | None):
        raise TypeError(f"{cls.__typename__} 'long' must be a string")

    # Empty strings count as absent names
    short = short or None
    long = long or None

    if short is None and long is None:
        raise ValueError(f"{cls.__typename__} short and long name may not both be empty")
    if short is not None and not is_short_name(short):
        raise ValueError(f"{cls.__typename__} short name must be one alphanumeric character, got {short!r}")
    if long is not None and not is_long_name(long):
        raise ValueError(
            f"{cls.__typename__} long name must be alphanumeric (plus '-' and '_') "
            f"and at least 2 characters long, got {long!r}"
        )

    metadata["short"] = short
    metadata["long"] = long


def _sanitize_mode(cls, metadata, /):
    """
    Internal: coerce the argument mode into an ArgumentMode member.
    """
    mode = metadata["mode"]
    if isinstance(mode, bool) or not isinstance(mode, int):
        raise TypeError(f"{cls.__typename__} 'mode' must be an argument mode")
    try:
        metadata["mode"] = ArgumentMode(mode)
    except ValueError:
        raise ValueError(f"{cls.__typename__} 'mode' must be one of 0, 1 or 2, got {mode!r}") from None


def is_short_name(name, /):
    """
    True when name is usable as a short option (one ASCII letter or digit).
    """
    return isinstance(name, str) and re.fullmatch(r"[A-Za-z0-9]", name) is not None


def is_long_name(name, /):
    """
    True when name is usable as a long option.
    """
    return isinstance(name, str) and re.fullmatch(r"[A-Za-z0-9][A-Za-z0-9_-]+", name) is not None


class Option(metaclass=OptionType):
    """
    Declaration of one accepted command-line option.

    short, long and mode are fixed at construction and exposed read-only;
    description and default stay settable, since row specifications fill them
    in after the option itself is built.

    default is Unset when no default is configured, so that None can be used
    as a real default value.
    """

    __introspectable__ = (
        "short",
        "long",
        "mode",
        "description",
        "default",
    )

    def __init__(self, short=None, long=None, mode=NO_ARGUMENT, *, description="", default=Unset):
        metadata = {
            "short": short,
            "long": long,
            "mode": mode,
        }
        _sanitize_names(type(self), metadata)
        _sanitize_mode(type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

        self.description = description
        self.default = default

    @property
    def description(self):
        return self._description

    @description.setter
    def description(self, description):
        if not isinstance(description, str | Text):
            raise TypeError(f"{type(self).__typename__} 'description' must be a string")
        self._description = description

    @property
    def default(self):
        return self._default

    @default.setter
    def default(self, default):
        self._default = default

    @property
    def names(self):
        """
        present names, short first.
        """
        return tuple(name for name in (self._short, self._long) if name is not None)

    @property
    def takes_argument(self):
        return self._mode is not NO_ARGUMENT

    @property
    def has_default(self):
        return self._default is not Unset

    def matches(self, name, /):
        """
        True when name is this option's short or long name.
        """
        return name is not None and name in self.names

    def duplicates(self, other, /):
        """
        True when both options declare exactly the same short/long pair.
        """
        return self._short == other._short and self._long == other._long

    def conflicts(self, other, /):
        """
        True when other redefines one of this option's names with a different partner.

        Options that both lack a short name, or both lack a long name, never
        conflict: they are independent options that share nothing.
        """
        if (self._short is None and other._short is None) or (self._long is None and other._long is None):
            return False
        return (self._short == other._short) != (self._long == other._long)


class OptionTable(Sequence):
    """
    Ordered, unique and conflict-free collection of options.

    The table is the explicit mutable handle shared between the specification
    compiler and the argument tokenizer. merge() is its only mutator; every
    change of membership, including options registered on the fly in quirks
    mode, goes through it.
    """

    def __init__(self, options=(), /):
        self._options = []
        if options:
            self.merge(options)

    def __getitem__(self, index):
        return self._options[index]

    def __len__(self):
        return len(self._options)

    def __repr__(self):
        return f"option-table({self._options!r})"

    def __rich_repr__(self):
        yield from self._options

    def copy(self):
        """
        Return an independent table with the same options (options are shared, not cloned).
        """
        table = type(self)()
        table._options = list(self._options)
        return table

    def find(self, name, /):
        """
        Return the option whose short or long name is name, or None.
        """
        for option in self._options:
            if option.matches(name):
                return option
        return None

    def find_short(self, name, /):
        for option in self._options:
            if option.short is not None and option.short == name:
                return option
        return None

    def find_long(self, name, /):
        for option in self._options:
            if option.long is not None and option.long == name:
                return option
        return None

    def merge(self, options, /, policy=ConflictPolicy.STRICT):
        """
        Merge new options into the table, keeping it unique and conflict-free.

        behavior
        - candidates are the current options followed by the new ones, in order.
        - each candidate is compared with every survivor so far:
          • duplicate (same short and long) → dropped, the first instance is kept.
          • conflict → ConflictingOptionError under STRICT; dropped under PERMISSIVE.
        - the table is replaced only once every candidate has been checked, so a
          failed merge leaves it untouched.

        returns
        - the list of newly added options (duplicates and dropped options excluded).
        """
        if not isinstance(options, Iterable):
            raise TypeError("merge() argument must be an iterable of options")
        if not isinstance(policy, ConflictPolicy):
            raise TypeError("merge() policy must be a conflict policy")

        survivors = []
        added = []
        existing = len(self._options)

        for index, candidate in enumerate([*self._options, *options]):
            if not isinstance(candidate, Option):
                raise TypeError("merge() argument must be an iterable of options")

            for survivor in survivors:
                if survivor is candidate or survivor.duplicates(candidate):
                    logger.debug("dropping duplicate %r", candidate)
                    break
                if survivor.conflicts(candidate):
                    if policy is ConflictPolicy.PERMISSIVE:
                        logger.debug("dropping %r, it conflicts with %r", candidate, survivor)
                        break
                    raise ConflictingOptionError(
                        "option %s conflicts with already defined option %s" % (
                            _describe(candidate), _describe(survivor)
                        ),
                        title="conflicting option",
                        code=FaultCode.CONFLICTING_OPTION,
                        hint="give %s a distinct short and long name, or declare it exactly as before" % _describe(candidate),
                        option=candidate,
                        existing=survivor,
                    )
            else:
                survivors.append(candidate)
                if index >= existing:
                    added.append(candidate)

        self._options = survivors
        return added


def _describe(option, /):
    """
    Human-friendly '-a/--alpha' label of an option.
    """
    return "/".join(
        prefix + name for prefix, name in (("-", option.short), ("--", option.long)) if name is not None
    )


__all__ = (
    "ArgumentMode",
    "NO_ARGUMENT",
    "REQUIRED_ARGUMENT",
    "OPTIONAL_ARGUMENT",
    "ConflictPolicy",
    "Option",
    "OptionTable",
    "is_short_name",
    "is_long_name",
)

# Remove the internal metaclass from the module namespace; not part of the public API.
del OptionType
