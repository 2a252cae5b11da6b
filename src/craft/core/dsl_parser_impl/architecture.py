"""
Architecture parsing for the craft DSL.

Handles ``arch`` blocks with presentation and gateway layers::

    arch Web {
        presentation: WebApp[spa] > CDN[cache:aggressive]
        gateway: APIGateway[auth:jwt] > LoadBalancer  Edge[ssl, cache]
    }
"""

from typing import TYPE_CHECKING, Any

from .. import ir
from ..lexer import TokenType

ARCH_SECTIONS = ("presentation", "gateway")


class ArchitectureParserMixin:
    """
    Mixin providing architecture parsing.

    Note: This mixin expects to be combined with BaseParser via multiple inheritance.
    """

    if TYPE_CHECKING:
        expect: Any
        expect_word: Any
        expect_name: Any
        advance: Any
        match: Any
        at_name: Any
        at_section_key: Any
        skip_newlines: Any
        error: Any

    def parse_architecture(self) -> ir.ArchitectureDecl:
        self.expect(TokenType.ARCH)

        name = ""
        if not self.match(TokenType.LBRACE, TokenType.NEWLINE):
            name = self.expect_name()
        self.skip_newlines()
        self.expect(TokenType.LBRACE)

        sections: dict[str, list[ir.ComponentSpec]] = {key: [] for key in ARCH_SECTIONS}

        self.skip_newlines()
        while not self.match(TokenType.RBRACE):
            key_token = self.expect_word()
            if key_token.value not in sections:
                raise self.error(
                    f"Unknown architecture section '{key_token.value}' "
                    "(expected presentation or gateway)",
                    key_token,
                )
            self.expect(TokenType.COLON)
            sections[key_token.value] = self._parse_component_list()

        self.expect(TokenType.RBRACE)

        return ir.ArchitectureDecl(name=name, **sections)

    def _parse_component_list(self) -> list[ir.ComponentSpec]:
        """Components up to the next section key or the closing brace."""
        components = []
        self.skip_newlines()
        while self.at_name() and not self.at_section_key():
            components.append(self._parse_component())
            if self.match(TokenType.COMMA):
                self.advance()
            self.skip_newlines()
        return components

    def _parse_component(self) -> ir.ComponentSpec:
        first = self._parse_component_node()
        if not self.match(TokenType.GREATER_THAN):
            return first

        chain = [first]
        while self.match(TokenType.GREATER_THAN):
            self.advance()
            self.skip_newlines()
            chain.append(self._parse_component_node())
        return ir.ComponentSpec(kind=ir.ComponentKind.FLOW, chain=chain)

    def _parse_component_node(self) -> ir.ComponentSpec:
        name = self.expect_name()
        modifiers = []

        if self.match(TokenType.LBRACKET):
            self.advance()
            while not self.match(TokenType.RBRACKET):
                key = self.expect_word().value
                value = ""
                if self.match(TokenType.COLON):
                    self.advance()
                    value = self.expect_name()
                modifiers.append(ir.ComponentModifier(key=key, value=value))
                if self.match(TokenType.COMMA):
                    self.advance()
                elif not self.match(TokenType.RBRACKET):
                    raise self.error("Expected ',' or ']' in component modifiers")
            self.expect(TokenType.RBRACKET)

        return ir.ComponentSpec(kind=ir.ComponentKind.SIMPLE, name=name, modifiers=modifiers)
