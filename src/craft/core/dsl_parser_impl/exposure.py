"""
Exposure parsing for the craft DSL.

Handles ``exposure PublicAPI { to: Customer  of: Checkout  through: Gateway }``.
"""

from typing import TYPE_CHECKING, Any

from .. import ir
from ..lexer import TokenType

EXPOSURE_FIELDS = ("to", "of", "through")


class ExposureParserMixin:
    """
    Mixin providing exposure parsing.

    Note: This mixin expects to be combined with BaseParser via multiple inheritance.
    """

    if TYPE_CHECKING:
        expect: Any
        expect_word: Any
        expect_name: Any
        match: Any
        skip_newlines: Any
        parse_name_list: Any
        error: Any

    def parse_exposure(self) -> ir.ExposureDecl:
        self.expect(TokenType.EXPOSURE)
        name = self.expect_name()
        self.skip_newlines()
        self.expect(TokenType.LBRACE)

        fields: dict[str, list[str]] = {key: [] for key in EXPOSURE_FIELDS}

        self.skip_newlines()
        while not self.match(TokenType.RBRACE):
            key_token = self.expect_word()
            if key_token.value not in fields:
                raise self.error(
                    f"Unknown exposure field '{key_token.value}' (expected to, of or through)",
                    key_token,
                )
            self.expect(TokenType.COLON)
            fields[key_token.value].extend(self.parse_name_list())
            self.skip_newlines()

        self.expect(TokenType.RBRACE)

        return ir.ExposureDecl(name=name, **fields)
