"""Command-line entry point: evaluates one expression (-e), every logical line of a file, or starts the interactive
shell. Also uses the error handling context manager. Installed as the `minischeme` console script.
"""

import argparse
import sys

from minischeme.interpreter import run
from minischeme.lang.config import Config
from minischeme.lang.error import ErrorHandler
from minischeme.lang.session import Session
from minischeme.lang.shell import Shell


def positive_int(text):
    """argparse type for --max-depth."""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got '{text}'")
    if value < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got '{text}'")
    return value


def build_parser():
    parser = argparse.ArgumentParser(prog="minischeme", description="Evaluate Scheme S-expressions.")
    parser.add_argument("file", help="file to evaluate line by line (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("-e", "--expr", help="evaluate a single expression and print the result")
    parser.add_argument("--max-depth", type=positive_int, default=Config.max_depth,
                        help=f"maximum nesting depth of lists and calls (default: {Config.max_depth})")
    parser.add_argument("--no-color", action="store_true", help="print diagnostics without colors")
    return parser


def main(argv=None):
    """Runs the minischeme interpreter. Called from the minischeme console script."""
    args = build_parser().parse_args(argv)

    with ErrorHandler(color=not args.no_color) as error_handler:
        config = Config.from_args(args)
        error_handler.fatal = config.fatal

        if args.expr is not None:
            print(run(args.expr, config))

        elif args.file is not None:
            sess = Session(error_handler, args.file, config, cmd_line=False)
            for result in sess.run():
                print(result)

        else:
            Shell(Session(error_handler, Session.SH_FILE, config, cmd_line=True)).cmdloop()

    return 0


if __name__ == "__main__":
    sys.exit(main())
