import unittest

from minischeme.pure.objects import (EMPTY, Boolean, Empty, ListBuilder, Number, Pair, Quote, Symbol, from_list,
                                     is_false, is_proper_list, length)


class ObjectsTestCase(unittest.TestCase):

    def test_empty_is_singleton(self):
        self.assertRaises(NotImplementedError, Empty)
        self.assertFalse(EMPTY)
        self.assertEqual("EMPTY", repr(EMPTY))

    def test_atoms_compare_by_value(self):
        self.assertEqual(Number(3), Number(3))
        self.assertNotEqual(Number(1), Boolean(True))
        self.assertNotEqual(Symbol("a"), Symbol("b"))
        self.assertEqual(Quote(Number(1)), Quote(Number(1)))

    def test_pair_slots_are_read_only(self):
        pair = Pair(Number(1), Number(2))
        with self.assertRaises(AttributeError):
            pair.first = Number(3)
        with self.assertRaises(AttributeError):
            pair.second = EMPTY

    def test_pair_equality(self):
        self.assertEqual(from_list([Number(1), from_list([Number(2)])]), from_list([Number(1), from_list([Number(2)])]))
        self.assertEqual(Pair(Number(1), Number(2)), Pair(Number(1), Number(2)))
        self.assertNotEqual(from_list([Number(1)]), Pair(Number(1), Number(2)))
        self.assertNotEqual(from_list([Number(1), Number(2)]), from_list([Number(1)]))
        self.assertNotEqual(Pair(Number(1)), Number(1))

    def test_list_builder(self):
        builder = ListBuilder()
        self.assertIs(EMPTY, builder.finish())

        builder = ListBuilder()
        self.assertEqual(Number(5), builder.finish(Number(5)))

        builder = ListBuilder()
        for value in range(3):
            builder.append(Number(value))
        lst = builder.finish(Symbol("z"))
        self.assertEqual([Number(0), Number(1), Number(2)], list(lst))
        self.assertEqual(Symbol("z"), lst.tail())

    def test_from_list_shares_elements(self):
        inner = from_list([Number(1)])
        outer = from_list([inner, inner])
        self.assertIs(outer.first, outer.second.first)

    def test_is_proper_list(self):
        should_pass = [EMPTY, from_list([Number(1)]), from_list([EMPTY, Number(2)])]
        for case in should_pass:
            self.assertTrue(is_proper_list(case), case)

        should_fail = [Number(1), Pair(Number(1), Number(2)), from_list([Number(1)], Boolean(False))]
        for case in should_fail:
            self.assertFalse(is_proper_list(case), case)

    def test_length(self):
        cases = {0: EMPTY, 1: Pair(Number(1), Number(2)), 3: from_list([Number(0)] * 3)}
        for expected, case in cases.items():
            self.assertEqual(expected, length(case), case)

    def test_is_false(self):
        self.assertTrue(is_false(Boolean(False)))
        for case in [Boolean(True), Number(0), EMPTY, Symbol("f")]:
            self.assertFalse(is_false(case), case)

    def test_long_lists_do_not_recurse(self):
        lst = from_list([Number(n) for n in range(10000)])
        self.assertEqual(10000, length(lst))
        self.assertEqual(lst, from_list([Number(n) for n in range(10000)]))


if __name__ == '__main__':
    unittest.main()
