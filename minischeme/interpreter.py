"""Single-expression Scheme interpreter.

Program flow for one expression:
    1. Tokenizer: splits the text into tokens with one token of lookahead (see pure/tokenizer.py)
    2. Reader: builds one tree of Numbers, Booleans, Symbols, Pairs and Quote markers (see pure/reader.py)
        - reading is strict: anything but exactly one well-formed datum is a SchemeSyntaxError
    3. Evaluator: reduces the tree against the fixed table of built-in forms (see pure/evaluator.py)
        - there are no variables or user procedures, so nothing outlives the expression
    4. Printer: renders the result back to canonical S-expression text (see pure/printer.py)

run() is the only entry point the outer layers (session, shell, command line) use.
"""

from minischeme.lang.config import Config
from minischeme.lang.error import SchemeRuntimeError
from minischeme.pure.evaluator import Evaluator
from minischeme.pure.printer import render
from minischeme.pure.reader import read_one
from minischeme.pure.tokenizer import Tokenizer


def run(text, config=None):
    """Parses and evaluates text, returning the rendering of the result. Raises SchemeSyntaxError or
    SchemeRuntimeError; nothing is returned for partially evaluated input.
    """
    if config is None:
        config = Config()

    try:
        tree = read_one(Tokenizer(text), config)
        return render(Evaluator(config).reduce(tree))
    except RecursionError:
        raise SchemeRuntimeError("'{}' is nested too deeply to evaluate", text, kind="depth") from None
