"""Error handling for minischeme. Only GenericExceptions should be encountered during running: if another type of
error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

There are two user-facing kinds of error, both of which abort the current expression:
    - SchemeSyntaxError: the text could not be tokenized or read into a single datum
    - SchemeRuntimeError: the datum was read, but could not be evaluated
InternalErrors signal a broken contract inside the interpreter itself and are never the user's fault.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw a minischeme error/warning."""

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        """Parses args for GenericException or warning. exprs[0] should be the offending source text; start and end
        delimit the offending span within it.
        """
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.template = msg
        self.exprs = list(exprs)
        self.msg = msg.format(*self.exprs)
        self.expr = self.exprs[0] if self.exprs else ""
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)

    def colored_msg(self):
        """Same as msg, but with expr snippets bolded."""
        return self.template.format(*(colored(expr, attrs=["bold"]) for expr in self.exprs))

    def __str__(self):
        return self.msg


class SchemeSyntaxError(GenericException, SyntaxError):
    """Malformed token stream or malformed tree shape."""


class SchemeRuntimeError(GenericException, RuntimeError):
    """Well-formed tree that is invalid at evaluation time. kind is one of KINDS."""
    KINDS = ("unbound", "arity", "type", "missing", "range", "division", "overflow", "depth", "call")

    def __init__(self, msg, exprs=None, kind="call", **kwargs):
        assert kind in SchemeRuntimeError.KINDS, f"unknown runtime error kind '{kind}'"
        kwargs.setdefault("diagnosis", False)  # runtime errors don't carry source spans
        super().__init__(msg, exprs, **kwargs)
        self.kind = kind


class InternalError(GenericException):
    """Contract violation inside the interpreter."""

    def __init__(self, msg, exprs=None, **kwargs):
        kwargs["internal"] = True
        kwargs.setdefault("diagnosis", False)
        super().__init__(msg, exprs, **kwargs)


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom minischeme errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True, color=True, out=None):
        self.fatal = fatal
        self.color = color
        self.out = out  # defaults to sys.stdout at print time so that captured streams work
        self.traceback = {}

    def _colored(self, text, color=None, attrs=None):
        if not self.color:
            return text
        return colored(text, color, attrs=attrs)

    def _print(self, *args):
        print(*args, file=self.out if self.out is not None else sys.stdout)

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session add/run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after successful Session add/run."""
        self.traceback[path] = (None, None)

    def diagnose(self, error, warning=False):
        """Returns offending part of error.expr highlighted and bolded, with a caret underline."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += self._colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += self._colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def _message(self, error):
        return error.colored_msg() if self.color else error.msg

    def warn(self, *args, **kwargs):
        """Generates and prints warning message based on args."""
        error = GenericException(*args, **kwargs)

        location = ""
        for file, (line, line_num) in self.traceback.items():
            if line is not None:
                col = line.find(error.expr) + error.start if error.expr in line else 0
                location = f"{file}:{line_num}:{col}: "
                break

        error_msg = self._colored(location, attrs=["bold"]) if location else ""
        error_msg += self._colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + self._message(error)

        self._print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            self._print(self.diagnose(error, warning=True))

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (line, line_num) representing origination of error.
        """
        error_msg = ""
        lines = 0
        for file, (line, line_num) in self.traceback.items():  # dicts are insertion-ordered
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"
                lines += 1

        if lines > 1:
            error_msg = "Traceback:\n" + error_msg

        if error.internal:
            error_msg += self._colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += self._colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + self._message(error)
        self._print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            self._print(self.diagnose(error))

        if self.fatal:
            sys.exit(1)
        self.traceback = {path: (None, None) for path in self.traceback}  # reset (no need if error is fatal)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt", diagnosis=False))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("expression is nested too deeply: maximum recursion depth exceeded",
                                        diagnosis=False))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", diagnosis=False,
                                        internal=True))
            do_exit = True

        return not do_exit
