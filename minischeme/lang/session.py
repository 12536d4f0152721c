"""Session control for minischeme. Feeds expressions from a file or from the command line to the interpreter, one
logical line at a time.
"""

from minischeme.interpreter import run
from minischeme.lang.config import Config
from minischeme.lang.error import GenericException


class Session:
    """Governs a minischeme session: a queue of logical lines waiting to be evaluated."""
    SH_FILE = "<in>"     # command-line interpreter filename
    COMMENT = ";"        # starts a comment running to the end of the line

    def __init__(self, error_handler, path, config=None, cmd_line=False):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path                # used for error messages
        self.config = config if config is not None else Config()
        self.cmd_line = cmd_line        # whether or not in command-line mode

        self.to_exec = {}  # dict of line num: logical line to evaluate

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            exprs = []
            add_to_prev = False

            try:
                with open(path, "r") as file:
                    for line_num, line in enumerate(file):
                        __, add_to_prev = self.preprocess_line(line, line_num + 1, add_to_prev, exprs)
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            for expr, line_num in exprs:
                self.add(expr, line_num)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename", diagnosis=False)

    @staticmethod
    def preprocess_line(line, line_num, add_to_prev, exprs=None):
        """Preprocesses a line from a file or command-line. In command-line mode, exprs can be ignored (used to keep
        track of file's exprs), but add_to_prev will indicate whether a line continuation is necessary. Returns
        updated value of line and add_to_prev.
        """
        if Session.COMMENT in line:
            line = line[:line.index(Session.COMMENT)]  # get rid of comments

        line = line.strip()
        if exprs is not None:
            if line and not add_to_prev:
                exprs.append((line, line_num))
            elif add_to_prev:
                prev, first_line_num = exprs.pop()
                line = f"{prev} {line}".strip()
                exprs.append((line, first_line_num))

        return line, line.count("(") > line.count(")")

    def add(self, expr, line_num):
        """Queues a logical line. Evaluation is delayed until run is called."""
        self.error_handler.register_line(self.path, expr, line_num)  # in case a warning is printed

        if expr.count(")") > expr.count("("):
            stray = expr.rindex(")")
            self.error_handler.warn("'{}' has more ')' than '('", expr, start=stray, end=stray + 1)

        self.to_exec[line_num] = expr
        self.error_handler.remove_line(self.path)

    def run(self):
        """Evaluates the queued lines in order, yielding the rendering of each one as soon as it is computed. Errors are
        raised to the caller (usually an ErrorHandler); the offending line is dropped from the queue either way.
        """
        for line_num, expr in list(self.to_exec.items()):
            self.error_handler.register_line(self.path, expr, line_num)

            try:
                result = run(expr, self.config)
            finally:
                del self.to_exec[line_num]

            self.error_handler.remove_line(self.path)
            yield result
