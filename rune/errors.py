"""Exception types for the Rune front end.

Syntax errors (tokenizing and parsing) are exceptions. Runtime errors are
not: the interpreter represents them as `ErrorVal` values, see
`rune.types`.
"""

from typing import Any, Tuple


class RuneError(Exception):
    """Base class for Rune tokenize and parse errors."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self})"


class TokenizeError(RuneError):
    pass


class UnexpectedCharacter(TokenizeError):
    def __init__(self, char: str, line: int, column: int):
        super().__init__(f"unexpected character {char!r} at {line}:{column}")
        self.char = char
        self.line = line
        self.column = column

    def __repr__(self) -> str:
        return f"UnexpectedCharacter({self.char!r}, {self.line}:{self.column})"


class ParseError(RuneError):
    pass


class NoMatch(ParseError):
    """The grammar alternative being tried does not apply here.

    Only used for alternation (a REPL line that is not a declaration is
    retried as an expression); it is never a genuine syntax error.
    """

    def __init__(self, expected: str = 'declaration'):
        super().__init__(f"no {expected} here")
        self.expected = expected

    def __repr__(self) -> str:
        return 'NoMatch'


class UnexpectedToken(ParseError):
    def __init__(self, found: Any, expected: Any):
        super().__init__(
            f"expected {expected.value} at {found.line}:{found.column}, got {found.text!r}"
        )
        self.found = found
        self.expected = expected

    def __repr__(self) -> str:
        return f"UnexpectedToken({self.found!r}, {self.expected!r})"


class UnexpectedTokenMultiple(ParseError):
    def __init__(self, found: Any, expected: Tuple[Any, ...]):
        names = ', '.join(kind.value for kind in expected)
        super().__init__(
            f"expected one of {names} at {found.line}:{found.column}, got {found.text!r}"
        )
        self.found = found
        self.expected = tuple(expected)

    def __repr__(self) -> str:
        return f"UnexpectedTokenMultiple({self.found!r}, {list(self.expected)!r})"


class ExpectedEndOfInput(ParseError):
    """Tokens were left over after a complete parse."""

    def __init__(self, found: Any, expected: str = 'end of input'):
        super().__init__(
            f"expected {expected} at {found.line}:{found.column}, got {found.text!r}"
        )
        self.found = found
        self.expected = expected

    def __repr__(self) -> str:
        return f"ExpectedEndOfInput({self.found!r}, {self.expected!r})"


class UnexpectedEndOfInput(ParseError):
    def __init__(self, expected: str = 'expression'):
        super().__init__(f"unexpected end of input, expected {expected}")
        self.expected = expected

    def __repr__(self) -> str:
        return 'UnexpectedEndOfInput'


class NestingTooDeep(ParseError):
    """Parentheses or unary operators nested past Python's recursion limit."""

    def __init__(self, found: Any = None):
        where = f" at {found.line}:{found.column}" if found is not None else ''
        super().__init__(f"expression nested too deeply{where}")
        self.found = found

    def __repr__(self) -> str:
        if self.found is None:
            return 'NestingTooDeep'
        return f"NestingTooDeep({self.found!r})"
