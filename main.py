"""
average: add or average a list of numbers.

    python main.py [-v | --verbose ...] [-n | --number float64 ...] [operation]

The verbosity level is counted from the -v flags and handed down explicitly;
nothing here keeps global state.
"""
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from argsift import Args

DESCRIPTION = "A simple utility to add or average a number list."

VERBOSE_FLAG = "[-v | --verbose ...]"
VERBOSE_DESC = "The verbose level."

NUMBER_FLAG = "[-n | --number float64 ...]"
NUMBER_DESC = "The numbers to act on."

OPERATION_NAME = "[operation]"
OPERATION_DESC = "The operation (add or average) defaulting to add."

# verbosity levels
ALWAYS, LEVEL1, LEVEL2, LEVEL3 = range(4)


def process(numbers, operation, /, verbosity=0, console=None):
    console = console or Console()

    def say(level, message):
        if verbosity >= level:
            console.print(message, markup=False, highlight=False)

    say(LEVEL1, f"Verbose set to {verbosity}")
    say(LEVEL2, f"Read in {len(numbers)} numbers")
    say(LEVEL2, f"Operation: {operation}")

    total = 0.0
    for index, number in enumerate(numbers):
        say(LEVEL3, f"Number ({index}): {number:f}")
        total += number

    if operation == "average":
        average = total / len(numbers) if numbers else 0.0
        say(ALWAYS, f"Avg: {average:f}")
    else:
        say(ALWAYS, f"Sum: {total:f}")


def main(argv=None, /, *, console=None):
    args = Args(DESCRIPTION, sys.argv if argv is None else argv)

    verbosity = args.count(VERBOSE_FLAG, VERBOSE_DESC)
    if verbosity > LEVEL3:
        logging.getLogger("argsift").setLevel(logging.DEBUG)

    numbers = args.values(NUMBER_FLAG, NUMBER_DESC, kind="float64")

    if not args.has_next():
        args.push_token("add")
    operation = args.next_option(OPERATION_NAME, ("add", "average"), OPERATION_DESC)

    args.done()

    if args.has_fault():
        args.report(shell=True, deferred=True)
        return 1

    process(numbers, operation, verbosity, console)
    return 0


if __name__ == '__main__':
    logging.basicConfig(level=logging.WARNING, format="%(message)s", handlers=[RichHandler(show_path=False)])
    sys.exit(main())
