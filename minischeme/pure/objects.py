"""Object model shared by the reader, evaluator and printer.

Every node of a parsed or evaluated tree is one of:

```
<value> ::= Number      ; machine integer, immutable
          | Boolean     ; #t / #f, immutable
          | Symbol      ; self-evaluating name, also selects a built-in form in call position
          | Pair        ; (first . second), chains of pairs make lists
          | EMPTY       ; the empty list, terminates proper lists
          | Quote       ; parse-time marker around exactly one datum, never a runtime value
```

Pairs may be shared between trees (quote returns a live sub-tree, cons links its arguments without copying), so
nothing here ever copies a node. A pair's slots are filled once while it is being built, by ListBuilder, and are
read-only afterwards.
"""

from dataclasses import dataclass


I64_MIN = -2 ** 63
I64_MAX = 2 ** 63 - 1


class Empty:
    """The empty list. Use the EMPTY singleton."""

    def __init__(self):
        raise NotImplementedError("Empty is a singleton")

    def __repr__(self):
        return "EMPTY"

    def __bool__(self):
        return False


EMPTY = Empty.__new__(Empty)


@dataclass(frozen=True)
class Number:
    value: int


@dataclass(frozen=True)
class Boolean:
    value: bool


@dataclass(frozen=True)
class Symbol:
    name: str


@dataclass(frozen=True, eq=False)
class Quote:
    """Marker produced by the reader for 'datum. Evaluation unwraps it; it must never reach the printer."""
    child: object

    def __eq__(self, other):
        return isinstance(other, Quote) and self.child == other.child


class Pair:
    """Two-slot cons cell. Slots are read-only properties: build new pairs with Pair(first, second) or ListBuilder."""
    __slots__ = ("_first", "_second")

    def __init__(self, first, second=EMPTY):
        self._first = first
        self._second = second

    @property
    def first(self):
        return self._first

    @property
    def second(self):
        return self._second

    def pairs(self):
        """Yields every pair of the chain starting at self, stopping at the first non-pair tail."""
        cur = self
        while isinstance(cur, Pair):
            yield cur
            cur = cur.second

    def __iter__(self):
        for pair in self.pairs():
            yield pair.first

    def tail(self):
        """Returns whatever terminates the chain: EMPTY for a proper list, an atom for an improper one."""
        cur = self
        while isinstance(cur, Pair):
            cur = cur.second
        return cur

    def __eq__(self, other):
        if not isinstance(other, Pair):
            return False

        left, right = self, other
        while isinstance(left, Pair) and isinstance(right, Pair):
            if left.first != right.first:
                return False
            left, right = left.second, right.second

        return left == right

    __hash__ = None

    def __repr__(self):
        items = [repr(item) for item in self]
        tail = self.tail()
        if tail is not EMPTY:
            items += [".", repr(tail)]
        return f"Pair({' '.join(items)})"


class ListBuilder:
    """Builds a chain of pairs front to back. This is the only place a pair's second slot is assigned after the pair
    has been allocated, and only while the pair is still private to the builder.
    """

    def __init__(self):
        self.head = self.last = EMPTY

    def append(self, value):
        """Appends value as the next element of the list."""
        node = Pair(value)
        if self.head is EMPTY:
            self.head = node
        else:
            self.last._second = node
        self.last = node
        return node

    def finish(self, tail=EMPTY):
        """Terminates the chain with tail (EMPTY for a proper list) and returns its head. With no elements appended,
        tail itself is returned.
        """
        if self.head is EMPTY:
            return tail
        self.last._second = tail
        head = self.head
        self.head = self.last = EMPTY
        return head


def from_list(items, tail=EMPTY):
    """Returns a chain of pairs holding items, terminated by tail."""
    builder = ListBuilder()
    for item in items:
        builder.append(item)
    return builder.finish(tail)


def is_atom(node):
    return isinstance(node, (Number, Boolean, Symbol))


def is_false(node):
    """Only the boolean #f is false; every other value (0 and () included) is truthy."""
    return isinstance(node, Boolean) and not node.value


def is_proper_list(node):
    """Whether node is EMPTY or a chain of pairs ending in EMPTY."""
    if node is EMPTY:
        return True
    return isinstance(node, Pair) and node.tail() is EMPTY


def length(node):
    """Number of pairs in the chain starting at node (0 for anything that isn't a pair)."""
    if not isinstance(node, Pair):
        return 0
    return sum(1 for __ in node.pairs())
