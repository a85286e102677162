"""
gnuopt help text: a banner followed by one line per declared option.

Layout
    Usage: prog [options] [operands]
    Options:
      -a, --alpha              first option
      -o, --output <arg>       where to write
      -c [<arg>]               optional argument

- the banner is a template; "%s" is replaced by the script name.
- the option column is padded to `padding` characters.

Rendering
- render(options) returns a rich Text (styled when colorful=True).
- format(options) returns the same content as a plain string.
- palette entries can be overridden through a __styles__ mapping in __main__.
- the script name comes from __main__.__prog__ when defined, else from sys.argv[0].
"""
import os.path
import sys
from collections import defaultdict

from rich.text import Text

from .options import REQUIRED_ARGUMENT, OPTIONAL_ARGUMENT
from .utils import *

DEFAULT_BANNER = "Usage: %s [options] [operands]\n"


def discover_script_name():
    """
    Name of the running script: __main__.__prog__ if set, else basename(sys.argv[0]).
    """
    if prog := getattr(sys.modules.get("__main__"), "__prog__", None):
        return str(prog)
    if sys.argv and sys.argv[0]:
        return os.path.basename(sys.argv[0])
    return "getopt"


class HelpTextFormatter:
    """
    Renders the usage banner and the option listing.

    Parameters
    - banner: template string; "%s" receives the script name.
    - padding: width of the option column.
    - colorful: apply the palette (rich styles) to the rendered Text.
    - script_name: overrides discover_script_name().
    """

    def __init__(self, banner=DEFAULT_BANNER, padding=25, *, colorful=False, script_name=Unset):
        self.banner = banner
        self.padding = padding
        self.colorful = bool(colorful)
        self._script_name = script_name

    @property
    def banner(self):
        return self._banner

    @banner.setter
    def banner(self, banner):
        if not isinstance(banner, str):
            raise TypeError("banner must be a string")
        self._banner = banner

    @property
    def padding(self):
        return self._padding

    @padding.setter
    def padding(self, padding):
        if isinstance(padding, bool) or not isinstance(padding, int):
            raise TypeError("padding must be an integer")
        if padding < 0:
            raise ValueError("padding cannot be negative")
        self._padding = padding

    @property
    def script_name(self):
        return coalesce(self._script_name, discover_script_name())

    @script_name.setter
    def script_name(self, script_name):
        if not isinstance(script_name, str | Unset):
            raise TypeError("script name must be a string")
        self._script_name = script_name

    def render(self, options, /, padding=Unset):
        """
        Build the help text for the given options as a rich Text.
        """
        styles = defaultdict(str, {
            "banner": "bold #36C5F0",  # SKY-BLUE usage line
            "options-label": "bold #FFFFFF",  # Pure white header
            "option-name": "bold #00E6FF",  # CYAN for option names
            "metavar": "bold #FFD600",  # AMBER for arguments
            "description": "#9CA3AF",  # Muted gray
        } | getattr(sys.modules.get("__main__"), "__styles__", {}))

        def styler(style):
            return styles[style] if self.colorful else ""

        width = coalesce(padding, self._padding)
        text = Text()
        text.append(self._banner.replace("%s", self.script_name), styler("banner"))
        text.append("Options:\n", styler("options-label"))

        for option in options:
            names = Text(", ").join(
                Text(prefix + name, styler("option-name"))
                for prefix, name in (("-", option.short), ("--", option.long)) if name is not None
            )
            if option.mode is REQUIRED_ARGUMENT:
                metavar = "<arg>"
            elif option.mode is OPTIONAL_ARGUMENT:
                metavar = "[<arg>]"
            else:
                metavar = ""

            head = Text.assemble("  ", names, " ", (metavar, styler("metavar")))
            if len(head) < width:
                head.pad_right(width - len(head))

            text.append_text(head)
            text.append(" ")
            if isinstance(option.description, Text):
                text.append_text(option.description)
            else:
                text.append(option.description, styler("description"))
            text.append("\n")

        return text

    def format(self, options, /, padding=Unset):
        """
        Plain-string version of render().
        """
        return self.render(options, padding).plain


__all__ = (
    "DEFAULT_BANNER",
    "discover_script_name",
    "HelpTextFormatter",
)
