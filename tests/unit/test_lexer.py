"""Tests for the craft lexer."""

from pathlib import Path

import pytest

from craft.core.errors import ParseError
from craft.core.lexer import TokenType, tokenize


def types(text: str) -> list[TokenType]:
    return [t.type for t in tokenize(text, Path("test.craft"))]


class TestTokens:
    def test_keywords_and_identifiers(self):
        tokens = tokenize("service Checkout", Path("test.craft"))
        assert tokens[0].type == TokenType.SERVICE
        assert tokens[1].type == TokenType.IDENTIFIER
        assert tokens[1].value == "Checkout"
        assert tokens[-1].type == TokenType.EOF

    def test_hyphenated_identifier(self):
        tokens = tokenize("data-stores: service-re-go-vas", Path("test.craft"))
        assert [t.value for t in tokens[:3]] == ["data-stores", ":", "service-re-go-vas"]
        assert tokens[0].type == TokenType.IDENTIFIER

    def test_arrow_is_not_part_of_identifier(self):
        tokens = tokenize("20% -> staging", Path("test.craft"))
        assert [t.type for t in tokens[:3]] == [
            TokenType.PERCENTAGE,
            TokenType.ARROW,
            TokenType.IDENTIFIER,
        ]
        assert tokens[0].value == "20%"

    def test_arrow_directly_after_identifier(self):
        tokens = tokenize("a->b", Path("test.craft"))
        assert [t.value for t in tokens[:3]] == ["a", "->", "b"]

    def test_string(self):
        tokens = tokenize('"Order Placed"', Path("test.craft"))
        assert tokens[0].type == TokenType.STRING
        assert tokens[0].value == "Order Placed"

    def test_punctuation(self):
        assert types("{ } [ ] ( ) : , >")[:-1] == [
            TokenType.LBRACE,
            TokenType.RBRACE,
            TokenType.LBRACKET,
            TokenType.RBRACKET,
            TokenType.LPAREN,
            TokenType.RPAREN,
            TokenType.COLON,
            TokenType.COMMA,
            TokenType.GREATER_THAN,
        ]

    def test_digit_led_word_is_identifier(self):
        tokens = tokenize("2fa", Path("test.craft"))
        assert tokens[0].type == TokenType.IDENTIFIER
        assert tokens[0].value == "2fa"


class TestLayout:
    def test_comments_are_skipped(self):
        assert types("# comment\n// another\nactor") == [
            TokenType.ACTOR,
            TokenType.EOF,
        ]

    def test_blank_lines_collapse(self):
        assert types("actor\n\n\nactor") == [
            TokenType.ACTOR,
            TokenType.NEWLINE,
            TokenType.ACTOR,
            TokenType.EOF,
        ]

    def test_leading_byte_order_mark(self):
        tokens = tokenize("\ufeffactor user A", Path("test.craft"))
        assert tokens[0].type == TokenType.ACTOR
        assert (tokens[0].line, tokens[0].column) == (1, 1)

    def test_positions(self):
        tokens = tokenize("actor\n  user", Path("test.craft"))
        user = tokens[2]
        assert (user.line, user.column) == (2, 3)


class TestErrors:
    def test_unterminated_string(self):
        with pytest.raises(ParseError, match="Unterminated string"):
            tokenize('"oops', Path("test.craft"))

    def test_unexpected_character(self):
        with pytest.raises(ParseError, match="Unexpected character") as exc_info:
            tokenize("actor @", Path("test.craft"))
        assert exc_info.value.context.line == 1
        assert exc_info.value.context.column == 7
