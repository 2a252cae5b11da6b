"""
Base parser class for the craft DSL.

Provides common token manipulation and utility methods used by all parser mixins.
"""

from pathlib import Path

from ..errors import ParseError, make_parse_error, source_snippet
from ..lexer import Token, TokenType

# Words that join a verb or callee to the rest of an action phrase
CONNECTOR_WORDS = frozenset(
    {"to", "the", "a", "an", "with", "from", "in", "on", "at", "for", "by", "as"}
)

# Tokens that end a line-oriented construct
LINE_END = (TokenType.NEWLINE, TokenType.RBRACE, TokenType.EOF)


class BaseParser:
    """
    Base parser class with token manipulation utilities.

    This class provides the foundation for recursive descent parsing,
    including token navigation, matching, and error generation.
    """

    def __init__(self, tokens: list[Token], file: Path, text: str = ""):
        """
        Initialize parser.

        Args:
            tokens: List of tokens from lexer
            file: Source file path (for error reporting)
            text: Source text (for error snippets)
        """
        self.tokens = tokens
        self.file = file
        self.text = text
        self.pos = 0

    def current_token(self) -> Token:
        """Get current token."""
        if self.pos >= len(self.tokens):
            return self.tokens[-1]  # Return EOF
        return self.tokens[self.pos]

    def peek_token(self, offset: int = 1) -> Token:
        """Peek ahead at token."""
        pos = self.pos + offset
        if pos >= len(self.tokens):
            return self.tokens[-1]  # Return EOF
        return self.tokens[pos]

    def advance(self) -> Token:
        """Consume and return current token."""
        token = self.current_token()
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def error(self, message: str, token: Token | None = None) -> ParseError:
        """Build a ParseError located at `token` (default: current token)."""
        token = token or self.current_token()
        snippet = source_snippet(self.text, token.line) if self.text else None
        return make_parse_error(message, self.file, token.line, token.column, snippet)

    def expect(self, token_type: TokenType) -> Token:
        """
        Expect a specific token type and consume it.

        Raises:
            ParseError: If token doesn't match
        """
        token = self.current_token()
        if token.type != token_type:
            raise self.error(f"Expected {token_type.value}, got {_describe(token)}")
        return self.advance()

    def match(self, *token_types: TokenType) -> bool:
        """Check if current token matches any of the given types."""
        return self.current_token().type in token_types

    def match_word(self, value: str) -> bool:
        """Check if the current token is the plain word `value`."""
        token = self.current_token()
        return token.is_word() and token.value == value

    def skip_newlines(self) -> None:
        """Skip any NEWLINE tokens."""
        while self.match(TokenType.NEWLINE):
            self.advance()

    def expect_word(self) -> Token:
        """Expect an identifier, number or keyword used as a plain word."""
        token = self.current_token()
        if not token.is_word():
            raise self.error(f"Expected identifier, got {_describe(token)}")
        return self.advance()

    def expect_name(self) -> str:
        """Expect a name: a plain word or a quoted string."""
        if self.match(TokenType.STRING):
            return self.advance().value
        return self.expect_word().value

    def at_name(self) -> bool:
        token = self.current_token()
        return token.type == TokenType.STRING or token.is_word()

    def at_section_key(self) -> bool:
        """True when positioned on ``key:``."""
        return self.current_token().is_word() and self.peek_token().type == TokenType.COLON

    def parse_name_list(self) -> list[str]:
        """
        Parse ``name, name, ...``.

        A newline may follow a comma; the list ends at the first name not
        followed by a comma.
        """
        names = [self.expect_name()]
        while self.match(TokenType.COMMA):
            self.advance()
            self.skip_newlines()
            names.append(self.expect_name())
        return names

    def parse_rest_of_line(self) -> list[str]:
        """Collect the remaining words of the current line."""
        words: list[str] = []
        while not self.match(*LINE_END):
            token = self.current_token()
            if not (token.is_word() or token.type in (TokenType.STRING, TokenType.PERCENTAGE)):
                raise self.error(f"Unexpected {_describe(token)} in phrase")
            words.append(self.advance().value)
        return words

    def end_line(self) -> None:
        """Require the end of a line-oriented construct."""
        if not self.match(*LINE_END):
            raise self.error(f"Expected end of line, got {_describe(self.current_token())}")
        self.skip_newlines()


def _describe(token: Token) -> str:
    if token.type == TokenType.EOF:
        return "end of file"
    if token.type == TokenType.NEWLINE:
        return "end of line"
    return f"'{token.value}'"
