"""Parser for the Rune language.

The parser works on the token list produced by `rune.lexer.tokenize` and
builds the immutable AST defined in `rune.ast`.

Expressions are parsed by precedence climbing: a single
recursive routine takes the minimum precedence an operator must have to be
folded into the current expression, so no grammar production is needed
per precedence level and left-recursive rules such as `e + e` are handled
by the loop rather than by recursion. Juxtaposition of two primaries is
implicit function application; it is treated as the tightest binding,
left-associative operator, so `f 1 2` is `(f 1) 2`.

The public entry points are `parse_module`, `parse_declaration`,
`parse_expression` and `parse_source`.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence, TypeVar

from .ast import (
    APPLICATION_PRECEDENCE, LOWEST_PRECEDENCE,
    Binary, Call, Declaration, Expression, Function, Identifier, Module,
    NumberLiteral, Operator, StringLiteral, Unary,
)
from .errors import (
    ExpectedEndOfInput, NestingTooDeep, NoMatch, UnexpectedEndOfInput,
    UnexpectedToken, UnexpectedTokenMultiple,
)
from .lexer import Token, TokenKind, tokenize


# Token kinds that can begin a primary expression without being mistaken
# for a binary operator. These are the only tokens that trigger implicit
# application.
PRIMARY_START = (TokenKind.IDENT, TokenKind.NUMBER, TokenKind.STRING, TokenKind.LPAREN)


class Parser:
    def __init__(self, tokens: Sequence[Token]):
        self.tokens = list(tokens)
        self.pos = 0

    def peek(self) -> Optional[Token]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def advance(self) -> Token:
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def match(self, kind: TokenKind) -> bool:
        token = self.peek()
        return token is not None and token.kind == kind

    def try_consume(self, kind: TokenKind) -> Optional[Token]:
        """Consume the next token if it is of `kind`; never raises."""
        if self.match(kind):
            return self.advance()
        return None

    def consume(self, kind: TokenKind) -> Token:
        token = self.peek()
        if token is None:
            raise UnexpectedEndOfInput(kind.value)
        if token.kind != kind:
            raise UnexpectedToken(token, kind)
        self.pos += 1
        return token

    def expect_end(self, expected: str = 'end of input'):
        token = self.peek()
        if token is not None:
            raise ExpectedEndOfInput(token, expected)

    def can_start_primary(self) -> bool:
        token = self.peek()
        return token is not None and token.kind in PRIMARY_START

    # Modules and declarations

    def parse_module(self) -> Module:
        declarations: List[Declaration] = []
        while True:
            decl = self.try_declaration()
            if decl is None:
                break
            declarations.append(decl)
        self.expect_end('declaration or end of input')
        return Module.of(declarations)

    def try_declaration(self) -> Optional[Declaration]:
        """Parse `let NAME = expression [;]`.

        Returns None, consuming nothing, when the next token is not `let`.
        Once `let` has been seen every failure is a real syntax error.
        """
        if self.try_consume(TokenKind.LET) is None:
            return None
        name = self.consume(TokenKind.IDENT).text
        self.consume(TokenKind.ASSIGN)
        initializer = self.parse_expression()
        self.try_consume(TokenKind.SEMICOLON)
        return Declaration(name, initializer)

    def parse_declaration(self) -> Declaration:
        decl = self.try_declaration()
        if decl is None:
            raise NoMatch('declaration')
        return decl

    # Expressions

    def parse_expression(self, min_precedence: int = LOWEST_PRECEDENCE) -> Expression:
        expr = self.parse_primary()
        while True:
            token = self.peek()
            if token is None:
                break
            op = Operator.binary(token.kind)
            if op is not None:
                if op.precedence < min_precedence:
                    break
                self.advance()
                right = self.parse_expression(op.right_precedence())
                expr = Binary(op, expr, right)
                continue
            if APPLICATION_PRECEDENCE < min_precedence or not self.can_start_primary():
                break
            # `f x y` folds left: the argument is a single primary
            expr = Call(expr, self.parse_primary())
        return expr

    def parse_primary(self) -> Expression:
        token = self.peek()
        if token is None:
            raise UnexpectedEndOfInput('expression')
        op = Operator.unary(token.kind)
        if op is not None:
            self.advance()
            return Unary(op, self.parse_expression(op.precedence))
        if token.kind == TokenKind.LPAREN:
            self.advance()
            expr = self.parse_expression(LOWEST_PRECEDENCE)
            self.consume(TokenKind.RPAREN)
            return expr
        if token.kind == TokenKind.IDENT:
            self.advance()
            if self.try_consume(TokenKind.ARROW) is not None:
                # the lambda body extends as far as the expression grammar allows
                return Function(token.text, self.parse_expression(LOWEST_PRECEDENCE))
            return Identifier(token.text)
        if token.kind == TokenKind.NUMBER:
            self.advance()
            return NumberLiteral(token.text)
        if token.kind == TokenKind.STRING:
            self.advance()
            return StringLiteral(token.text[1:-1])
        raise UnexpectedTokenMultiple(
            token,
            (TokenKind.IDENT, TokenKind.NUMBER, TokenKind.STRING,
             TokenKind.LPAREN, TokenKind.PLUS, TokenKind.MINUS),
        )


T = TypeVar('T')


def _guard_depth(parser: Parser, parse: Callable[[], T]) -> T:
    # each `(` or unary operator costs a couple of Python frames
    try:
        return parse()
    except RecursionError:
        raise NestingTooDeep(parser.peek()) from None


def parse_module(tokens: Sequence[Token]) -> Module:
    """Parse a whole module. Trailing tokens are a syntax error."""
    parser = Parser(tokens)
    return _guard_depth(parser, parser.parse_module)


def parse_declaration(tokens: Sequence[Token]) -> Declaration:
    """Parse exactly one declaration.

    Raises `NoMatch` when the input does not start with `let`, so that an
    interactive caller can retry the same tokens as an expression.
    """
    parser = Parser(tokens)
    decl = _guard_depth(parser, parser.parse_declaration)
    parser.expect_end()
    return decl


def parse_expression(tokens: Sequence[Token]) -> Expression:
    """Parse exactly one expression."""
    parser = Parser(tokens)
    expr = _guard_depth(parser, parser.parse_expression)
    parser.expect_end()
    return expr


def parse_source(source: str) -> Module:
    """Tokenize and parse Rune source code into a Module AST."""
    return parse_module(tokenize(source))
