"""Evaluation of parsed S-expressions against the fixed vocabulary of built-in forms.

Numbers, booleans and symbols evaluate to themselves, a Quote evaluates to its child, and a pair is a call form whose
first element must be a symbol naming one of FORMS. There is no environment: nothing can be defined, so every call is
resolved through the FORMS table.

Argument lists are walked iteratively. Only nested call forms recurse, and that recursion is bounded by
Config.max_depth.
"""

import enum
import operator

from minischeme.lang.config import Config
from minischeme.lang.error import InternalError, SchemeRuntimeError
from minischeme.pure.objects import (EMPTY, I64_MAX, I64_MIN, Boolean, ListBuilder, Number, Pair, Quote, Symbol,
                                     from_list, is_atom, is_false, is_proper_list, length)
from minischeme.pure.printer import render


class Form(enum.Enum):
    """Tags of the built-in forms. The value is the name the form is called by."""
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MAX = "max"
    MIN = "min"

    GE = ">="
    GT = ">"
    LE = "<="
    LT = "<"
    EQ = "="

    IS_NUMBER = "number?"
    IS_BOOLEAN = "boolean?"
    IS_PAIR = "pair?"
    IS_NULL = "null?"
    IS_LIST = "list?"

    ABS = "abs"
    NOT = "not"
    AND = "and"
    OR = "or"
    QUOTE = "quote"

    CONS = "cons"
    CAR = "car"
    CDR = "cdr"
    LIST = "list"
    LIST_REF = "list-ref"
    LIST_TAIL = "list-tail"


FORMS = {form.value: form for form in Form}


def _truncating_div(a, b):
    """Integer division rounding toward zero, like machine integer division."""
    if b == 0:
        raise SchemeRuntimeError("division by zero in '{}'", f"(/ {a} {b})", kind="division")
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


FOLDS = {
    Form.ADD: operator.add,
    Form.SUB: operator.sub,
    Form.MUL: operator.mul,
    Form.DIV: _truncating_div,
    Form.MAX: max,
    Form.MIN: min,
}

# value of the fold over zero operands; folds missing here need at least MIN_OPERANDS[form] operands
EMPTY_FOLDS = {Form.ADD: 0, Form.MUL: 1}
MIN_OPERANDS = {Form.SUB: 2, Form.DIV: 2, Form.MAX: 1, Form.MIN: 1}

COMPARISONS = {
    Form.GE: operator.ge,
    Form.GT: operator.gt,
    Form.LE: operator.le,
    Form.LT: operator.lt,
    Form.EQ: operator.eq,
}

PREDICATES = {
    Form.IS_NUMBER: lambda value: isinstance(value, Number),
    Form.IS_BOOLEAN: lambda value: isinstance(value, Boolean),
    Form.IS_PAIR: lambda value: isinstance(value, Pair),
    Form.IS_NULL: lambda value: value is EMPTY,
    Form.IS_LIST: is_proper_list,
    Form.NOT: is_false,
}


def check_i64(value, form):
    """Returns value if it fits in a signed 64-bit integer, otherwise raises an overflow error."""
    if not I64_MIN <= value <= I64_MAX:
        raise SchemeRuntimeError("integer overflow in '{}'", form.value, kind="overflow")
    return value


def elements(node):
    """Yields the (unevaluated) elements of an argument chain. A non-empty, non-pair tail, or node itself if it isn't a
    pair, counts as one final element.
    """
    while isinstance(node, Pair):
        yield node.first
        node = node.second
    if node is not EMPTY:
        yield node


def literal(node):
    """Returns node as a runtime value without evaluating it. Quote markers inside node are spelled out as
    (quote <datum>) lists; a sub-tree without markers is returned as is, not copied.
    """
    if isinstance(node, Quote):
        return from_list([Symbol(Form.QUOTE.value), literal(node.child)])
    if not isinstance(node, Pair):
        return node

    builder = ListBuilder()
    changed = False
    for pair in node.pairs():
        item = literal(pair.first)
        changed = changed or item is not pair.first
        builder.append(item)

    tail = node.tail()
    new_tail = literal(tail)
    if not changed and new_tail is tail:
        return node
    return builder.finish(new_tail)


class Evaluator:
    """Reduces parsed trees to values. An Evaluator only holds the configuration and the current call depth, so a fresh
    one is cheap; interpreter.run makes one per expression.
    """

    def __init__(self, config=None):
        self.config = config if config is not None else Config()
        self.depth = 0

    def reduce(self, node):
        """Evaluates node: atoms are returned as is, one level of Quote is unwrapped, and pairs are applied."""
        if is_atom(node):
            return node
        elif isinstance(node, Quote):
            return literal(node.child)
        elif node is EMPTY:
            raise SchemeRuntimeError("cannot evaluate '()': there is no command to call", kind="call")
        elif isinstance(node, Pair):
            if self.depth >= self.config.max_depth:
                raise SchemeRuntimeError("calls are nested deeper than {} levels", str(self.config.max_depth),
                                         kind="depth")
            self.depth += 1
            try:
                return self.apply(node)
            finally:
                self.depth -= 1

        raise InternalError("cannot evaluate unknown node '{}'", repr(node))

    def apply(self, pair):
        """Dispatches the call form pair to the built-in named by its first element."""
        head = pair.first
        if not isinstance(head, Symbol):
            raise SchemeRuntimeError("cannot call without command: '{}' is not a symbol", _show(head), kind="call")

        form = FORMS.get(head.name)
        if form is None:
            raise SchemeRuntimeError("unbound operator '{}'", head.name, kind="unbound")

        args = pair.second

        if form in FOLDS:
            return self.fold(form, args)
        elif form in COMPARISONS:
            return self.compare(form, args)
        elif form in PREDICATES:
            return Boolean(PREDICATES[form](self.single(form, args)))
        elif form is Form.ABS:
            value = self.single(form, args)
            if not isinstance(value, Number):
                raise SchemeRuntimeError("'{}' expects a number", form.value, kind="type")
            return Number(check_i64(abs(value.value), form))
        elif form is Form.AND:
            return self.logical_and(args)
        elif form is Form.OR:
            return self.logical_or(args)
        elif form is Form.QUOTE:
            return literal(self.single_node(form, args))
        elif form is Form.CONS:
            first, second = self.pair_of_values(form, args)
            return Pair(first, second)
        elif form in (Form.CAR, Form.CDR):
            value = self.single(form, args)
            if not isinstance(value, Pair):
                raise SchemeRuntimeError("'{}' expects a non-empty pair", form.value, kind="type")
            return value.first if form is Form.CAR else value.second
        elif form is Form.LIST:
            if args is not EMPTY and not isinstance(args, Pair):
                raise SchemeRuntimeError("invalid call for '{}'", form.value, kind="type")
            return literal(args)
        elif form is Form.LIST_REF:
            return self.list_ref(form, args)
        elif form is Form.LIST_TAIL:
            return self.list_tail(form, args)

        raise InternalError("form '{}' has no handler", form.value)

    def to_integers(self, node, form=None):
        """Reduces every element of the argument chain node, requiring numbers. Returns their int payloads in order."""
        result = []
        for element in elements(node):
            value = self.reduce(element)
            if not isinstance(value, Number):
                name = form.value if form is not None else "arithmetic"
                raise SchemeRuntimeError("'{}' expects only integers, got '{}'", (name, _show(value)), kind="type")
            result.append(value.value)
        return result

    def to_values(self, node):
        """Reduces every element of the argument chain node. Returns the values in order."""
        return [self.reduce(element) for element in elements(node)]

    def fold(self, form, args):
        values = self.to_integers(args, form)

        if not values and form in EMPTY_FOLDS:
            return Number(EMPTY_FOLDS[form])
        if len(values) < MIN_OPERANDS.get(form, 0):
            raise SchemeRuntimeError("not enough arguments for '{}'", form.value, kind="arity")

        fn = FOLDS[form]
        result = values[0]
        for value in values[1:]:
            result = check_i64(fn(result, value), form)
        return Number(result)

    def compare(self, form, args):
        values = self.to_integers(args, form)
        comparator = COMPARISONS[form]
        return Boolean(all(comparator(a, b) for a, b in zip(values, values[1:])))

    def single_node(self, form, args):
        """Returns the only (unevaluated) argument of a one-argument form, telling missing, malformed and surplus
        arguments apart.
        """
        if args is EMPTY:
            raise SchemeRuntimeError("1 argument is expected for '{}'", form.value, kind="missing")
        if not isinstance(args, Pair):
            raise SchemeRuntimeError("invalid call for '{}'", form.value, kind="type")
        if args.second is not EMPTY:
            raise SchemeRuntimeError("too many arguments for '{}'", form.value, kind="arity")
        return args.first

    def single(self, form, args):
        return self.reduce(self.single_node(form, args))

    def pair_of_values(self, form, args):
        values = self.to_values(args)
        if len(values) != 2:
            raise SchemeRuntimeError("'{}' expects 2 arguments, got {}", (form.value, str(len(values))), kind="arity")
        return values

    def logical_and(self, args):
        result = Boolean(True)
        for element in elements(args):
            result = self.reduce(element)
            if is_false(result):
                return Boolean(False)
        return result

    def logical_or(self, args):
        result = Boolean(False)
        for element in elements(args):
            result = self.reduce(element)
            if not is_false(result):
                return result
        return result

    def _list_and_index(self, form, args):
        """Validates the (list index) arguments shared by list-ref and list-tail."""
        lst, index = self.pair_of_values(form, args)

        if not is_proper_list(lst):
            raise SchemeRuntimeError("'{}' expects a proper list, got '{}'", (form.value, _show(lst)), kind="type")
        if not isinstance(index, Number):
            raise SchemeRuntimeError("'{}' expects an integer index, got '{}'", (form.value, _show(index)),
                                     kind="type")

        return lst, index.value

    def list_ref(self, form, args):
        lst, index = self._list_and_index(form, args)

        if not 0 <= index < length(lst):
            raise SchemeRuntimeError("index {} is out of range for '{}'", (str(index), form.value), kind="range")

        for position, element in enumerate(lst):
            if position == index:
                return self.reduce(element)

    def list_tail(self, form, args):
        lst, index = self._list_and_index(form, args)

        if not 0 <= index <= length(lst):
            raise SchemeRuntimeError("index {} is out of range for '{}'", (str(index), form.value), kind="range")

        for __ in range(index):
            lst = lst.second
        return lst


def _show(value):
    """Best-effort rendering of value for error messages."""
    try:
        return render(value)
    except InternalError:
        return repr(value)
