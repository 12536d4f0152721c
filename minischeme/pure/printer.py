"""Renders evaluated values back to canonical S-expression text."""

from minischeme.lang.error import InternalError
from minischeme.pure.objects import EMPTY, Boolean, Number, Pair, Quote, Symbol


def render(value):
    """Returns the canonical text of value: () for the empty list, decimal for numbers, #t/#f for booleans, the name
    for symbols, and parenthesized (dotted if improper) bodies for pairs.
    """
    if value is EMPTY:
        return "()"
    elif isinstance(value, Number):
        return str(value.value)
    elif isinstance(value, Boolean):
        return "#t" if value.value else "#f"
    elif isinstance(value, Symbol):
        return value.name
    elif isinstance(value, Pair):
        return f"({render_pair_body(value)})"
    elif isinstance(value, Quote):
        raise InternalError("quote marker reached the printer: '{}'", repr(value))
    raise InternalError("cannot render unknown value '{}'", repr(value))


def render_pair_body(pair):
    """Space-separated elements of the chain starting at pair, followed by '. tail' for an improper list."""
    parts = []
    node = pair
    while isinstance(node, Pair):
        parts.append(render(node.first))
        node = node.second

    if node is not EMPTY:
        parts.append(".")
        parts.append(render(node))

    return " ".join(parts)
