from rich.pretty import pprint

from gnuopt import *

__prog__ = "demo"


getopt = Getopt(
    [
        ["v", "verbose", NO_ARGUMENT, "talk more (repeat for even more)"],
        ["o", "output", REQUIRED_ARGUMENT, "where to write", "out.txt"],
        Option(None, "color", OPTIONAL_ARGUMENT, description="colorize output", default="auto"),
    ],
    shell=True,
    fancy=True,
    colorful=True,
)


if __name__ == '__main__':
    pprint(getopt.parse())
