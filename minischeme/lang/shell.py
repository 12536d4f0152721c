"""Handles interactive/command-line mode for the minischeme interpreter. Uses cmd as backend."""

import cmd

from minischeme.pure.evaluator import FORMS


class Shell(cmd.Cmd):
    """Scheme expression shell."""
    intro = "minischeme :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def default(self, line):
        """Evaluates an arbitrary expression."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            line, add_to_prev = self.sess.preprocess_line(f"{self._tmp_line} {line}", self.line_num, False)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            if not line:
                return

            self.sess.add(line, self.line_num)
            for result in self.sess.run():
                print(result, file=self.stdout)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to minischeme!\n\n"
              "Type one S-expression and it will be evaluated and printed. There are no variables \n"
              "or user-defined procedures: every call uses one of the built-in forms below.\n\n"
              f"  {' '.join(FORMS)}\n\n"
              "Try it out by typing '(+ 1 2)'. Lists are built with 'cons' and 'list', and \n"
              "'(quote (+ 1 2))' (or ''(+ 1 2)') returns the list itself instead of 3. Type 'exit' \n"
              "or press Ctrl-D to leave.", file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
