"""Tokenizer for the Rune language.

The lexer is a thin wrapper around a Lark `basic` lexer. The grammar
below only exists to declare the terminals; `Lark.lex` is used to split
the source into tokens without running the parser, because the token
stream is consumed by the hand-written precedence-climbing parser in
`rune.parser`.

Keywords are resolved by Lark itself: the `LET` string terminal also
matches `IDENT`, so Lark retypes an identifier whose full text is `let`
while `letter` stays an identifier.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List

from lark import Lark
from lark.exceptions import UnexpectedCharacters

from .errors import UnexpectedCharacter


class TokenKind(Enum):
    LET = 'let'
    IDENT = 'identifier'
    NUMBER = 'number literal'
    STRING = 'string literal'
    SEMICOLON = "';'"
    LBRACE = "'{'"
    RBRACE = "'}'"
    LPAREN = "'('"
    RPAREN = "')'"
    PLUS = "'+'"
    MINUS = "'-'"
    STAR = "'*'"
    SLASH = "'/'"
    PERCENT = "'%'"
    ASSIGN = "'='"
    ARROW = "'->'"

    def __repr__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    line: int = 0
    column: int = 0

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.text!r}, {self.line}:{self.column})"


RUNE_TOKENS = r"""
    start: _token*
    _token: LET | IDENT | NUMBER | STRING
          | SEMICOLON | LBRACE | RBRACE | LPAREN | RPAREN
          | ARROW | PLUS | MINUS | STAR | SLASH | PERCENT | ASSIGN

    LET: "let"
    IDENT: /[A-Za-z_][A-Za-z0-9_]*/
    NUMBER: /[0-9]+/
    STRING: /"[^"]*"/

    SEMICOLON: ";"
    LBRACE: "{"
    RBRACE: "}"
    LPAREN: "("
    RPAREN: ")"
    ARROW: "->"
    PLUS: "+"
    MINUS: "-"
    STAR: "*"
    SLASH: "/"
    PERCENT: "%"
    ASSIGN: "="

    %import common.WS
    %ignore WS
"""


RUNE_LEXER = Lark(
    RUNE_TOKENS,
    parser='lalr',
    lexer='basic',
)


def tokenize(source: str) -> List[Token]:
    """Convert source code into a list of tokens.

    Raises `UnexpectedCharacter` for any character that cannot begin a
    token, including the opening quote of an unterminated string.
    """
    tokens: List[Token] = []
    try:
        for tok in RUNE_LEXER.lex(source):
            tokens.append(Token(TokenKind[tok.type], str(tok), tok.line, tok.column))
    except UnexpectedCharacters as e:
        raise UnexpectedCharacter(e.char, e.line, e.column) from None
    return tokens
