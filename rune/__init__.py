# Rune language package
# This package provides a parser and tree-walking interpreter for the Rune language.
from .interpreter import run_program, compile_module, eval_module, eval_expression, Interpreter
from .parser import parse_source, parse_module, parse_declaration, parse_expression
from .lexer import tokenize
from .environment import Scope
from .errors import RuneError, ParseError, NoMatch

__all__ = [
    'run_program',
    'compile_module',
    'eval_module',
    'eval_expression',
    'Interpreter',
    'parse_source',
    'parse_module',
    'parse_declaration',
    'parse_expression',
    'tokenize',
    'Scope',
    'RuneError',
    'ParseError',
    'NoMatch',
]
