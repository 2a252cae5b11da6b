"""
Error types for craft DSL parsing and project configuration.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class CraftError(Exception):
    """Base exception for all craft errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ParseError(CraftError):
    """
    Raised when DSL source cannot be turned into declarations.

    Examples:
    - Unterminated string literal
    - Unbalanced braces
    - Unexpected tokens inside a block
    - Action lines outside a `when` scenario
    """

    pass


class ManifestError(CraftError):
    """
    Raised when a craft.toml project manifest cannot be loaded.

    Examples:
    - Missing manifest file
    - Invalid TOML
    - Unknown conflict policy name
    """

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        file: Path to the source file where error occurred
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional source excerpt around the error location
    """

    file: Path
    line: int
    column: int
    snippet: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "shop.craft:10:5"
        """
        location = f"{self.file}:{self.line}:{self.column}"
        if self.snippet:
            return f"{location}\n{self._format_snippet()}"
        return location

    def _format_snippet(self) -> str:
        """Format the snippet with line numbers and a marker under the column."""
        if not self.snippet:
            return ""

        formatted = []
        # Snippet starts up to 2 lines before the error line
        start_line = max(1, self.line - 2)

        for i, line in enumerate(self.snippet.split("\n")):
            line_num = start_line + i
            prefix = f"{line_num:4d} | "
            formatted.append(prefix + line)
            if line_num == self.line:
                formatted.append(" " * (len(prefix) + self.column - 1) + "^^^")

        return "\n".join(formatted)


def source_snippet(text: str, line: int, radius: int = 2) -> str:
    """Return the lines of `text` surrounding a 1-indexed `line`."""
    lines = text.split("\n")
    start = max(1, line - radius)
    end = min(len(lines), line + radius)
    return "\n".join(lines[start - 1 : end])


def make_parse_error(
    message: str,
    file: Path,
    line: int,
    column: int,
    snippet: str | None = None,
) -> ParseError:
    """
    Helper to create a ParseError with context.

    Args:
        message: Error description
        file: Source file path
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional code snippet

    Returns:
        ParseError with context attached
    """
    context = ErrorContext(file=file, line=line, column=column, snippet=snippet)
    return ParseError(message, context)
