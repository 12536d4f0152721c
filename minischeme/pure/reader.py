"""Recursive-descent reader: turns the token stream of a Tokenizer into exactly one datum.

```
<datum> ::= <integer> | <boolean> | <symbol>
          | "'" <datum>                             ; read as Quote(<datum>)
          | "(" <datum>* ")"                        ; proper list
          | "(" <datum>+ "." <datum> ")"            ; improper list, exactly one datum after the dot
```

Reading is strict: empty input, unterminated lists, stray closing brackets, misplaced dots and anything left over
after the top-level datum are all SchemeSyntaxErrors. Nesting deeper than Config.max_depth is rejected the same way,
so deep input never exhausts the Python stack.

Protocol: every reading function starts with the first token of its datum buffered in the tokenizer and returns with
the *last* token of that datum still buffered, so that the caller decides when to advance (and can use peek_is_dot to
look past it).
"""

from minischeme.lang.config import Config
from minischeme.lang.error import SchemeSyntaxError
from minischeme.pure.objects import Boolean, ListBuilder, Number, Quote, Symbol
from minischeme.pure.tokenizer import (BooleanToken, BracketToken, DotToken, IntegerToken, QuoteToken, SymbolToken,
                                       Tokenizer)


def _error(tokenizer, msg):
    """SchemeSyntaxError pointing at the current token (or at the end of input)."""
    return SchemeSyntaxError("'{}' " + msg, tokenizer.text, start=tokenizer.start, end=tokenizer.end)


def _check_depth(tokenizer, depth, config):
    if depth > config.max_depth:
        raise _error(tokenizer, f"is nested deeper than {config.max_depth} levels")


def read_atom(token):
    """Returns the Number, Boolean or Symbol for an atom token, or None if token isn't an atom."""
    if isinstance(token, IntegerToken):
        return Number(token.value)
    elif isinstance(token, BooleanToken):
        return Boolean(token.value)
    elif isinstance(token, SymbolToken):
        return Symbol(token.name)
    return None


def read_datum(tokenizer, depth, config):
    """Reads the datum starting at the current token."""
    token = tokenizer.current()

    atom = read_atom(token)
    if atom is not None:
        return atom

    if isinstance(token, QuoteToken):
        _check_depth(tokenizer, depth + 1, config)
        tokenizer.next()
        if tokenizer.is_end():
            raise _error(tokenizer, "ends after a quote")
        return Quote(read_datum(tokenizer, depth + 1, config))

    elif token is BracketToken.OPEN:
        return read_list(tokenizer, depth + 1, config)

    elif token is BracketToken.CLOSE:
        raise _error(tokenizer, "has an unexpected ')'")

    elif isinstance(token, DotToken):
        raise _error(tokenizer, "has an unexpected '.'")

    raise _error(tokenizer, "has an unknown token")  # pragma: no cover


def read_list(tokenizer, depth, config):
    """Reads the list whose opening bracket is the current token. Elements are appended iteratively; only nested lists
    recurse. Returns EMPTY for (), otherwise the head pair of the chain.
    """
    _check_depth(tokenizer, depth, config)

    builder = ListBuilder()
    tokenizer.next()  # past "("

    while True:
        if tokenizer.is_end():
            raise _error(tokenizer, "has an unterminated list")

        token = tokenizer.current()
        if token is BracketToken.CLOSE:
            return builder.finish()
        elif isinstance(token, DotToken):
            raise _error(tokenizer, "has a '.' that does not follow a list element")

        builder.append(read_datum(tokenizer, depth, config))

        if tokenizer.peek_is_dot():
            return builder.finish(_read_dotted_tail(tokenizer, depth, config))

        tokenizer.next()


def _read_dotted_tail(tokenizer, depth, config):
    """Reads ". <datum> )" after the last element of an improper list. Leaves the closing bracket buffered."""
    tokenizer.next()  # onto "."
    tokenizer.next()

    if tokenizer.is_end():
        raise _error(tokenizer, "has an unterminated list")

    token = tokenizer.current()
    if token is BracketToken.CLOSE or isinstance(token, DotToken):
        raise _error(tokenizer, "expects exactly one datum after '.'")

    tail = read_datum(tokenizer, depth, config)

    tokenizer.next()
    if tokenizer.is_end():
        raise _error(tokenizer, "has an unterminated list")
    if tokenizer.current() is not BracketToken.CLOSE:
        raise _error(tokenizer, "expects ')' right after the datum following '.'")

    return tail


def read_one(tokenizer, config=None):
    """Reads exactly one top-level datum. The whole input must be consumed by it."""
    if config is None:
        config = Config()

    if tokenizer.is_end():
        raise SchemeSyntaxError("expression cannot be empty", diagnosis=False)

    datum = read_datum(tokenizer, 0, config)

    tokenizer.next()
    if not tokenizer.is_end():
        raise _error(tokenizer, "has trailing input after a complete expression")

    return datum


def parse(text, config=None):
    """Shorthand for read_one(Tokenizer(text), config)."""
    return read_one(Tokenizer(text), config)
