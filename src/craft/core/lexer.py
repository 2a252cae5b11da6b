"""
Lexer/Tokenizer for the craft DSL.

Converts raw DSL text into a stream of tokens with source location tracking.
Blocks are delimited by braces; NEWLINE tokens are kept because use case
actions are line oriented.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .errors import ParseError, make_parse_error, source_snippet


class TokenType(Enum):
    """Token types in the craft DSL."""

    # Literals
    IDENTIFIER = "IDENTIFIER"
    STRING = "STRING"
    NUMBER = "NUMBER"
    PERCENTAGE = "PERCENTAGE"

    # Keywords
    ACTOR = "actor"
    ACTORS = "actors"
    DOMAIN = "domain"
    DOMAINS = "domains"
    SERVICE = "service"
    SERVICES = "services"
    EXPOSURE = "exposure"
    ARCH = "arch"
    USE_CASE = "use_case"
    WHEN = "when"
    ASKS = "asks"
    NOTIFIES = "notifies"
    RETURNS = "returns"
    LISTENS = "listens"

    # Punctuation
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"
    LPAREN = "("
    RPAREN = ")"
    COLON = ":"
    COMMA = ","
    ARROW = "->"
    GREATER_THAN = ">"

    # Layout
    NEWLINE = "NEWLINE"
    EOF = "EOF"


# Keywords set for quick lookup
KEYWORDS = {
    "actor",
    "actors",
    "domain",
    "domains",
    "service",
    "services",
    "exposure",
    "arch",
    "use_case",
    "when",
    "asks",
    "notifies",
    "returns",
    "listens",
}

# Token types that read as plain words inside phrases and names
WORD_TYPES = {TokenType.IDENTIFIER, TokenType.NUMBER} | {TokenType(k) for k in KEYWORDS}

_PUNCTUATION = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ":": TokenType.COLON,
    ",": TokenType.COMMA,
    ">": TokenType.GREATER_THAN,
}


@dataclass
class Token:
    """
    A single token in the DSL.

    Attributes:
        type: Type of token
        value: String value of the token
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    type: TokenType
    value: str
    line: int
    column: int

    def is_word(self) -> bool:
        """True for identifiers, numbers and keywords."""
        return self.type in WORD_TYPES

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


class Lexer:
    """
    Lexer for the craft DSL.

    Converts source text into a stream of tokens.
    """

    def __init__(self, text: str, file: Path):
        """
        Initialize lexer.

        Args:
            text: Source text to tokenize
            file: Source file path (for error reporting)
        """
        # drop a leading byte order mark
        self.text = text.removeprefix("\ufeff")
        self.file = file
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []

    def current_char(self) -> str | None:
        """Get current character or None if at end."""
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def peek_char(self, offset: int = 1) -> str | None:
        """Peek ahead at character."""
        pos = self.pos + offset
        if pos >= len(self.text):
            return None
        return self.text[pos]

    def advance(self) -> None:
        """Move to next character, updating line/column."""
        if self.pos < len(self.text):
            if self.text[self.pos] == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def skip_whitespace(self) -> None:
        """Skip whitespace characters other than newlines."""
        while self.current_char() in (" ", "\t", "\r"):
            self.advance()

    def skip_comment(self) -> None:
        """Skip a ``#`` or ``//`` comment up to the end of the line."""
        while self.current_char() and self.current_char() != "\n":
            self.advance()

    def error(self, message: str, line: int, column: int) -> ParseError:
        return make_parse_error(
            message, self.file, line, column, snippet=source_snippet(self.text, line)
        )

    def read_string(self) -> str:
        """Read a double-quoted string."""
        start_line = self.line
        start_col = self.column
        self.advance()  # skip opening quote

        chars = []
        while True:
            current = self.current_char()
            if not current or current in ('"', "\n"):
                break

            if current == "\\":
                self.advance()
                escape_char = self.current_char()
                if escape_char == "n":
                    chars.append("\n")
                elif escape_char == "t":
                    chars.append("\t")
                elif escape_char:
                    chars.append(escape_char)
                self.advance()
            else:
                chars.append(current)
                self.advance()

        if self.current_char() != '"':
            raise self.error("Unterminated string literal", start_line, start_col)

        self.advance()  # skip closing quote
        return "".join(chars)

    def read_number(self) -> tuple[str, TokenType]:
        """
        Read a number, optionally followed by ``%``.

        Digits followed by letters (``2fa``, ``3d``) are read as identifiers.
        """
        chars = []
        current = self.current_char()
        while current and (current.isdigit() or current == "."):
            chars.append(current)
            self.advance()
            current = self.current_char()

        if current == "%":
            self.advance()
            return "".join(chars) + "%", TokenType.PERCENTAGE

        if current and (current.isalpha() or current == "_"):
            return "".join(chars) + self.read_identifier(), TokenType.IDENTIFIER

        return "".join(chars), TokenType.NUMBER

    def read_identifier(self) -> str:
        """
        Read an identifier or keyword.

        Hyphens are part of identifiers (``data-stores``, ``user-svc``)
        unless they start an ``->`` arrow.
        """
        chars = []
        current = self.current_char()
        while current and (
            current.isalnum() or current == "_" or (current == "-" and self.peek_char() != ">")
        ):
            chars.append(current)
            self.advance()
            current = self.current_char()
        return "".join(chars)

    def tokenize(self) -> list[Token]:
        """
        Tokenize the entire source text.

        Returns:
            List of tokens ending with EOF

        Raises:
            ParseError: If an unexpected character is encountered
        """
        while self.pos < len(self.text):
            self.skip_whitespace()

            ch = self.current_char()
            if ch is None:
                break

            token_line = self.line
            token_col = self.column

            # Comments
            if ch == "#" or (ch == "/" and self.peek_char() == "/"):
                self.skip_comment()

            elif ch == "\n":
                # Collapse runs of blank lines into one NEWLINE
                if self.tokens and self.tokens[-1].type != TokenType.NEWLINE:
                    self.tokens.append(Token(TokenType.NEWLINE, "\\n", token_line, token_col))
                self.advance()

            elif ch == '"':
                value = self.read_string()
                self.tokens.append(Token(TokenType.STRING, value, token_line, token_col))

            elif ch.isdigit():
                value, token_type = self.read_number()
                self.tokens.append(Token(token_type, value, token_line, token_col))

            elif ch.isalpha() or ch == "_":
                value = self.read_identifier()
                if value in KEYWORDS:
                    token_type = TokenType(value)
                else:
                    token_type = TokenType.IDENTIFIER
                self.tokens.append(Token(token_type, value, token_line, token_col))

            elif ch == "-" and self.peek_char() == ">":
                self.advance()
                self.advance()
                self.tokens.append(Token(TokenType.ARROW, "->", token_line, token_col))

            elif ch in _PUNCTUATION:
                self.advance()
                self.tokens.append(Token(_PUNCTUATION[ch], ch, token_line, token_col))

            else:
                raise self.error(f"Unexpected character: {ch!r}", token_line, token_col)

        self.tokens.append(Token(TokenType.EOF, "", self.line, self.column))
        return self.tokens


def tokenize(text: str, file: Path) -> list[Token]:
    """
    Convenience function to tokenize DSL text.

    Args:
        text: Source text
        file: Source file path

    Returns:
        List of tokens
    """
    lexer = Lexer(text, file)
    return lexer.tokenize()
