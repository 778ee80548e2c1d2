"""Interactive mode for the Rune interpreter. Uses cmd as backend."""

import cmd

from .errors import NoMatch, RuneError
from .interpreter import Interpreter
from .lexer import tokenize
from .parser import parse_declaration, parse_expression


class Shell(cmd.Cmd):
    """Rune interpreter shell.

    Each line is parsed as a declaration first and, if it does not start
    with `let`, as an expression. Declarations accumulate in one global
    scope that lives as long as the shell.
    """
    intro = "Rune interpreter\nType 'help' for more information, 'exit' to quit."
    prompt = "> "

    def __init__(self, interpreter=None, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.interpreter = interpreter if interpreter is not None else Interpreter()

    def eval_line(self, line):
        """Evaluates one line and returns its value. Raises RuneError on syntax errors."""
        tokens = tokenize(line)
        try:
            decl = parse_declaration(tokens)
        except NoMatch:
            expr = parse_expression(tokens)
            return self.interpreter.evaluate_guarded(expr, self.interpreter.global_scope)
        return self.interpreter.declare(decl)

    def default(self, line):
        """Executes an arbitrary Rune declaration or expression."""
        try:
            value = self.eval_line(line)
        except RuneError as e:
            print(repr(e))
            return
        print(repr(value))

    def do_env(self, arg):
        """Prints the current global scope."""
        print(repr(self.interpreter.global_scope))

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Declare names with 'let name = expression' and evaluate any other line\n"
              "as an expression. Functions take one parameter: 'let add = x -> y -> x + y',\n"
              "then 'add 1 2'. The first declaration of a name wins.\n"
              "'env' shows every name declared so far.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
