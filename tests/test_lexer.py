import pytest

from rune.errors import TokenizeError, UnexpectedCharacter
from rune.lexer import Token, TokenKind, tokenize


def kinds(source):
    return [t.kind for t in tokenize(source)]


def test_keyword_and_identifiers():
    tokens = tokenize('let letter = 1')
    assert [t.kind for t in tokens] == [TokenKind.LET, TokenKind.IDENT, TokenKind.ASSIGN, TokenKind.NUMBER]
    assert [t.text for t in tokens] == ['let', 'letter', '=', '1']


def test_arrow_is_not_minus():
    assert kinds('x -> x - 1') == [
        TokenKind.IDENT, TokenKind.ARROW, TokenKind.IDENT, TokenKind.MINUS, TokenKind.NUMBER,
    ]


def test_punctuation_and_operators():
    assert kinds('; { } ( ) + - * / % =') == [
        TokenKind.SEMICOLON, TokenKind.LBRACE, TokenKind.RBRACE, TokenKind.LPAREN,
        TokenKind.RPAREN, TokenKind.PLUS, TokenKind.MINUS, TokenKind.STAR,
        TokenKind.SLASH, TokenKind.PERCENT, TokenKind.ASSIGN,
    ]


def test_string_keeps_quotes_in_text():
    tokens = tokenize('"hi there"')
    assert tokens == [Token(TokenKind.STRING, '"hi there"', 1, 1)]


def test_positions():
    tokens = tokenize('let x =\n  5')
    assert (tokens[-1].line, tokens[-1].column) == (2, 3)


def test_empty_source():
    assert tokenize('  \n\t ') == []


def test_unexpected_character():
    with pytest.raises(UnexpectedCharacter) as info:
        tokenize('let x = 1 # 2')
    assert info.value.char == '#'
    assert (info.value.line, info.value.column) == (1, 11)
    assert repr(info.value) == "UnexpectedCharacter('#', 1:11)"


def test_unterminated_string():
    with pytest.raises(TokenizeError) as info:
        tokenize('"abc')
    assert info.value.char == '"'
