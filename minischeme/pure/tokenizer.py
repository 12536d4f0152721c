"""Lexical analysis of S-expressions. The tokenizer buffers exactly one token of lookahead.

Lexical grammar:

```
<integer> ::= ["+" | "-"] <digit>+          ; sign must be immediately followed by a digit, value must fit in an i64
<symbol>  ::= <start> <part>*
<start>   ::= <letter> | "<" | "=" | ">" | "*" | "/" | "#" | "+" | "-"
<part>    ::= <start> | <digit> | "?" | "!"
<boolean> ::= "#t" | "#f"                   ; scanned as a symbol, then reclassified
<quote>   ::= "'"
<dot>     ::= "."
<bracket> ::= "(" | ")"
```

Whitespace separates tokens and is otherwise discarded. Any other character is a syntax error.
"""

import enum
import string
from dataclasses import dataclass

from minischeme.lang.error import InternalError, SchemeSyntaxError
from minischeme.pure.objects import I64_MAX, I64_MIN


LETTERS = frozenset(string.ascii_letters)
DIGITS = frozenset(string.digits)
SYMBOL_MARKERS = frozenset("<=>*/#+-")
SYMBOL_START = LETTERS | SYMBOL_MARKERS
SYMBOL_PART = SYMBOL_START | DIGITS | frozenset("?!")


@dataclass(frozen=True)
class IntegerToken:
    value: int


@dataclass(frozen=True)
class SymbolToken:
    name: str


@dataclass(frozen=True)
class BooleanToken:
    value: bool


@dataclass(frozen=True)
class QuoteToken:
    pass


@dataclass(frozen=True)
class DotToken:
    pass


class BracketToken(enum.Enum):
    OPEN = "("
    CLOSE = ")"


class Tokenizer:
    """Splits text into tokens on demand. next() advances, current() returns the buffered token, and is_end() tells
    whether the input has been exhausted. start and end delimit the current token in text (both are len(text) once
    the input is exhausted).
    """

    def __init__(self, text):
        self.text = text
        self.pos = 0
        self.start = self.end = 0

        self._current = None
        self._is_end = False

        self.next()

    def is_end(self):
        return self._is_end

    def current(self):
        """Returns the buffered token. Asking for a token past the end of input is a bug in the caller."""
        if self._current is None:
            raise InternalError("no token buffered at position {}", str(self.pos))
        return self._current

    def next(self):
        """Advances to the next token, or marks the end of input if there is none."""
        self._skip_whitespace()

        if self.pos >= len(self.text):
            self._current = None
            self._is_end = True
            self.start = self.end = len(self.text)
            return

        self.start = self.pos
        char = self.text[self.pos]

        if char == "(":
            self._emit(BracketToken.OPEN, 1)
        elif char == ")":
            self._emit(BracketToken.CLOSE, 1)
        elif char == "'":
            self._emit(QuoteToken(), 1)
        elif char == ".":
            self._emit(DotToken(), 1)
        elif self._starts_integer(self.pos):
            self._read_integer()
        elif char in SYMBOL_START:
            self._read_symbol()
        else:
            raise SchemeSyntaxError("'{}' contains unexpected character '{}'", (self.text, char), start=self.pos,
                                    end=self.pos + 1)

    def peek_is_dot(self):
        """Whether the next non-whitespace character starts a dot token. Only whitespace is consumed, so current() is
        left untouched.
        """
        self._skip_whitespace()
        return self.pos < len(self.text) and self.text[self.pos] == "."

    def _skip_whitespace(self):
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def _emit(self, token, length):
        self.pos += length
        self.end = self.pos
        self._current = token

    def _starts_integer(self, pos):
        char = self.text[pos]
        if char in DIGITS:
            return True
        return char in "+-" and pos + 1 < len(self.text) and self.text[pos + 1] in DIGITS

    def _read_integer(self):
        end = self.pos + 1
        while end < len(self.text) and self.text[end] in DIGITS:
            end += 1

        literal = self.text[self.pos:end]
        value = int(literal)
        if not I64_MIN <= value <= I64_MAX:
            raise SchemeSyntaxError("'{}' contains integer literal '{}' that does not fit in 64 bits",
                                    (self.text, literal), start=self.pos, end=end)

        self._emit(IntegerToken(value), end - self.pos)

    def _read_symbol(self):
        end = self.pos + 1
        while end < len(self.text) and self.text[end] in SYMBOL_PART:
            end += 1

        name = self.text[self.pos:end]
        if name == "#t":
            token = BooleanToken(True)
        elif name == "#f":
            token = BooleanToken(False)
        else:
            token = SymbolToken(name)

        self._emit(token, end - self.pos)
