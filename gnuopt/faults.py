"""
gnuopt faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every failure the
  specification compiler and the argument tokenizer can report.
- GetoptException: base type that carries message + options and knows how to
  render itself in a friendly, lowercased, and actionable way.
- SpecificationError / ArgumentError: the two families callers branch on
  (bad option declarations vs. bad command lines).
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).

Integration
- The compiler and the tokenizer raise faults directly with a code, a title
  and a hint in their options.
- The Getopt facade hands caught faults to trigger() together with its runtime
  options: in non-shell mode the fault is raised, in shell mode it is rendered
  via rich on stderr and the process exits with status 1.
"""
import sys
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
    canonical fault codes used across the library (stable identifiers).

    grouping
    - specification (2110x)
      • EMPTY_SPECIFICATION, MALFORMED_SPECIFICATION, INVALID_ROW_TYPE, CONFLICTING_OPTION
    - arguments (2111x)
      • UNKNOWN_OPTION, MISSING_ARGUMENT, UNEXPECTED_ARGUMENT
    """
    # --- specification errors (2110x) ---
    EMPTY_SPECIFICATION     = 21101
    MALFORMED_SPECIFICATION = 21102
    INVALID_ROW_TYPE        = 21103
    CONFLICTING_OPTION      = 21104

    # --- argument errors (2111x) ---
    UNKNOWN_OPTION          = 21111
    MISSING_ARGUMENT        = 21112
    UNEXPECTED_ARGUMENT     = 21113

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(sys.modules.get("__main__"), "__codes__", {}).get(self, self.value))


class GetoptException(Exception):
    """
    base fault: a message plus read-only context options.

    well-known options
    - code: FaultCode of the fault.
    - title: short lowercased headline.
    - hint: one actionable sentence.
    - shell, fancy, colorful: runtime rendering switches (see trigger()).
    - anything else is context for callers (input, index, position, option, ...).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message)

    def __rich__(self):
        main = sys.modules.get("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", False)

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

        prog = text(self.options.get("prog") or getattr(main, "__prog__", "getopt"), styler("prog-name"))
        code = self.options.get("code")

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code.normalize() if code is not None else "?", styler("code")),
            " | ",
            text(str(self.options.get("title", "error")).title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.options.get("hint", ""), styler("hint")))

        if self.options.get("fancy", False):
            return Panel(Group(message, hint), title=header, title_align="left")

        return Group(header, message, hint)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class SpecificationError(GetoptException): ...
class EmptySpecificationError(SpecificationError): ...
class MalformedSpecificationError(SpecificationError): ...
class InvalidRowTypeError(SpecificationError): ...
class ConflictingOptionError(SpecificationError): ...

class ArgumentError(GetoptException): ...
class UnknownOptionError(ArgumentError): ...
class MissingArgumentError(ArgumentError): ...
class UnexpectedArgumentError(ArgumentError): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see GetoptException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via the rich console and the process exits;
      otherwise, the fault is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "GetoptException",
    "SpecificationError",
    "EmptySpecificationError",
    "MalformedSpecificationError",
    "InvalidRowTypeError",
    "ConflictingOptionError",
    "ArgumentError",
    "UnknownOptionError",
    "MissingArgumentError",
    "UnexpectedArgumentError",
    "trigger",
)
