"""Abstract Syntax Tree (AST) definitions for the Rune language.

The AST classes defined in this module represent the syntactic structure
of parsed Rune programs. Nodes are frozen dataclasses: once the parser has
built a tree nothing mutates it, and every node exclusively owns its
children. The `Operator` enum carries the precedence table used by the
precedence-climbing parser.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .lexer import TokenKind


# Lowest binding strength; used at the start of an expression and inside
# parentheses.
LOWEST_PRECEDENCE = 0
# Implicit application (`f x`) binds tighter than every operator.
APPLICATION_PRECEDENCE = 4


class Associativity(Enum):
    LEFT = 'left'
    RIGHT = 'right'


class Operator(Enum):
    """Binary and unary operators with their precedence and associativity."""
    ADD = ('+', 1, Associativity.LEFT)
    SUBTRACT = ('-', 1, Associativity.LEFT)
    MULTIPLY = ('*', 2, Associativity.LEFT)
    DIVIDE = ('/', 2, Associativity.LEFT)
    MODULO = ('%', 2, Associativity.LEFT)
    UNARY_PLUS = ('+', 3, Associativity.RIGHT)
    UNARY_MINUS = ('-', 3, Associativity.RIGHT)

    def __init__(self, symbol: str, precedence: int, associativity: Associativity):
        self.symbol = symbol
        self.precedence = precedence
        self.associativity = associativity

    def __repr__(self) -> str:
        return f"Operator.{self.name}"

    def right_precedence(self) -> int:
        """Minimum precedence for the right-hand operand of this operator."""
        if self.associativity is Associativity.RIGHT:
            return self.precedence
        return self.precedence + 1

    @staticmethod
    def binary(kind: TokenKind) -> Optional['Operator']:
        return _BINARY_OPERATORS.get(kind)

    @staticmethod
    def unary(kind: TokenKind) -> Optional['Operator']:
        return _UNARY_OPERATORS.get(kind)


_BINARY_OPERATORS = {
    TokenKind.PLUS: Operator.ADD,
    TokenKind.MINUS: Operator.SUBTRACT,
    TokenKind.STAR: Operator.MULTIPLY,
    TokenKind.SLASH: Operator.DIVIDE,
    TokenKind.PERCENT: Operator.MODULO,
}

_UNARY_OPERATORS = {
    TokenKind.PLUS: Operator.UNARY_PLUS,
    TokenKind.MINUS: Operator.UNARY_MINUS,
}


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass(frozen=True)
class Expression(Node):
    """Base class for expression nodes."""
    pass


@dataclass(frozen=True)
class Identifier(Expression):
    name: str


@dataclass(frozen=True)
class NumberLiteral(Expression):
    text: str  # digits as written; parsed when evaluated


@dataclass(frozen=True)
class StringLiteral(Expression):
    text: str  # contents without the surrounding quotes


@dataclass(frozen=True)
class Function(Expression):
    parameter: str
    body: Expression


@dataclass(frozen=True)
class Call(Expression):
    callee: Expression
    argument: Expression


@dataclass(frozen=True)
class Binary(Expression):
    operator: Operator
    left: Expression
    right: Expression


@dataclass(frozen=True)
class Unary(Expression):
    operator: Operator
    operand: Expression


@dataclass(frozen=True)
class Block(Expression):
    """Placeholder block expression. Always evaluates to zero."""
    pass


@dataclass(frozen=True)
class Declaration(Node):
    name: str
    initializer: Expression


@dataclass(frozen=True)
class Module(Node):
    declarations: Tuple[Declaration, ...] = field(default_factory=tuple)

    @classmethod
    def of(cls, declarations: List[Declaration]) -> 'Module':
        return cls(tuple(declarations))
