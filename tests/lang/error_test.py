import io
import unittest

from minischeme.lang.error import ErrorHandler, GenericException, InternalError, SchemeRuntimeError, SchemeSyntaxError


class GenericExceptionTestCase(unittest.TestCase):

    def test_message_template(self):
        error = GenericException("'{}' has a stray '{}'", ("(1))", ")"), start=3, end=4)
        self.assertEqual("'(1))' has a stray ')'", error.msg)
        self.assertEqual("'(1))' has a stray ')'", str(error))
        self.assertEqual("(1))", error.expr)
        self.assertEqual((3, 4), (error.start, error.end))

    def test_defaults(self):
        error = GenericException("boom")
        self.assertEqual("", error.expr)
        self.assertEqual(0, error.end)
        self.assertFalse(error.internal)

        error = GenericException("'{}' is bad", "abc")
        self.assertEqual(3, error.end)

    def test_kinds(self):
        self.assertIsInstance(SchemeSyntaxError("x"), SyntaxError)
        self.assertIsInstance(SchemeSyntaxError("x"), GenericException)
        self.assertIsInstance(SchemeRuntimeError("x"), RuntimeError)
        self.assertNotIsInstance(InternalError("x"), RuntimeError)
        self.assertTrue(InternalError("x").internal)

        self.assertEqual("arity", SchemeRuntimeError("x", kind="arity").kind)
        self.assertFalse(SchemeRuntimeError("x").diagnosis)
        self.assertRaises(AssertionError, SchemeRuntimeError, "x", kind="nonsense")


class ErrorHandlerTestCase(unittest.TestCase):

    def handler(self, fatal=False):
        out = io.StringIO()
        return ErrorHandler(fatal=fatal, color=False, out=out), out

    def test_throw_prints_and_diagnoses(self):
        handler, out = self.handler()
        with handler:
            raise SchemeSyntaxError("'{}' has an unexpected ')'", "(1))", start=3, end=4)

        self.assertEqual("error: '(1))' has an unexpected ')'\n  (1))\n     ^\n", out.getvalue())

    def test_internal_errors_are_flagged(self):
        handler, out = self.handler()
        with handler:
            raise InternalError("no token buffered")
        self.assertEqual("[internal] error: no token buffered\n", out.getvalue())

    def test_fatal_exits(self):
        handler, __ = self.handler(fatal=True)
        with self.assertRaises(SystemExit) as ctx:
            with handler:
                raise SchemeRuntimeError("unbound operator '{}'", "foo", kind="unbound")
        self.assertEqual(1, ctx.exception.code)

    def test_unknown_errors_propagate(self):
        handler, out = self.handler()
        with self.assertRaises(KeyError):
            with handler:
                raise KeyError("oops")
        self.assertIn("[internal] error: unknown error", out.getvalue())

    def test_recursion_error(self):
        handler, out = self.handler()
        with handler:
            raise RecursionError()
        self.assertIn("maximum recursion depth exceeded", out.getvalue())

    def test_traceback(self):
        handler, out = self.handler()
        handler.register_file("a.scm")
        handler.register_file("b.scm")
        handler.register_line("a.scm", "(+ 1 2)", 1)
        handler.register_line("b.scm", "(foo)", 7)
        with handler:
            raise SchemeRuntimeError("unbound operator '{}'", "foo", kind="unbound")

        self.assertTrue(out.getvalue().startswith("Traceback:\n  File 'a.scm', line 1:\n    (+ 1 2)\n"))
        self.assertIn("  File 'b.scm', line 7:\n    (foo)\n", out.getvalue())
        self.assertEqual({"a.scm": (None, None), "b.scm": (None, None)}, handler.traceback)

    def test_warn(self):
        handler, out = self.handler()
        handler.register_file("f.scm")
        handler.register_line("f.scm", "(1))", 3)
        handler.warn("'{}' has more ')' than '('", "(1))", start=3, end=4)
        self.assertEqual("f.scm:3:3: warning: '(1))' has more ')' than '('\n  (1))\n     ^\n", out.getvalue())

    def test_color(self):
        out = io.StringIO()
        handler = ErrorHandler(fatal=False, color=True, out=out)
        with handler:
            raise SchemeRuntimeError("unbound operator '{}'", "foo", kind="unbound")
        self.assertIn("unbound operator", out.getvalue())
        self.assertIn("foo", out.getvalue())


if __name__ == '__main__':
    unittest.main()
