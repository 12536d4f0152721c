import unittest

from minischeme.lang.error import InternalError
from minischeme.pure.objects import EMPTY, Boolean, Number, Pair, Quote, Symbol, from_list
from minischeme.pure.printer import render, render_pair_body


class PrinterTestCase(unittest.TestCase):

    def test_atoms(self):
        cases = [
            (EMPTY, "()"),
            (Number(42), "42"),
            (Number(-7), "-7"),
            (Boolean(True), "#t"),
            (Boolean(False), "#f"),
            (Symbol("list-ref"), "list-ref"),
        ]
        for case, expected in cases:
            self.assertEqual(expected, render(case), case)

    def test_pairs(self):
        cases = [
            (from_list([Number(1), Number(2), Number(3)]), "(1 2 3)"),
            (Pair(Number(1), Number(2)), "(1 . 2)"),
            (from_list([Number(1), Number(2)], Number(3)), "(1 2 . 3)"),
            (from_list([Number(1), from_list([Number(2), EMPTY])]), "(1 (2 ()))"),
            (from_list([Pair(Symbol("a"), Boolean(False))]), "((a . #f))"),
            (Pair(EMPTY, EMPTY), "(())"),
        ]
        for case, expected in cases:
            self.assertEqual(expected, render(case), case)

    def test_render_pair_body(self):
        self.assertEqual("1 2 . 3", render_pair_body(from_list([Number(1), Number(2)], Number(3))))

    def test_quote_is_internal_error(self):
        should_raise = [Quote(Number(1)), from_list([Number(1), Quote(Symbol("a"))]), Pair(Number(1), Quote(EMPTY))]
        for case in should_raise:
            with self.assertRaises(InternalError) as ctx:
                render(case)
            self.assertTrue(ctx.exception.internal)

    def test_unknown_value(self):
        self.assertRaises(InternalError, render, 5)
        self.assertRaises(InternalError, render, None)

    def test_long_list(self):
        lst = from_list([Number(0)] * 10000)
        self.assertEqual("(" + " ".join(["0"] * 10000) + ")", render(lst))


if __name__ == '__main__':
    unittest.main()
