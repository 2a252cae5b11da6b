"""
Domain parsing for the craft DSL.

Handles ``domain Payment { Billing Refunds }`` and the ``domains { ... }``
block form.
"""

from typing import TYPE_CHECKING, Any

from .. import ir
from ..lexer import TokenType


class DomainParserMixin:
    """
    Mixin providing domain parsing.

    Note: This mixin expects to be combined with BaseParser via multiple inheritance.
    """

    if TYPE_CHECKING:
        expect: Any
        expect_name: Any
        advance: Any
        match: Any
        skip_newlines: Any

    def parse_domain(self) -> ir.DomainDecl:
        """Parse ``domain <name> [{ <sub> ... }]``."""
        self.expect(TokenType.DOMAIN)
        return self._parse_domain_entry()

    def parse_domains_block(self) -> ir.DomainsBlock:
        """Parse ``domains { <name> [{ ... }] ... }``."""
        self.expect(TokenType.DOMAINS)
        self.skip_newlines()
        self.expect(TokenType.LBRACE)

        domains = []
        self.skip_newlines()
        while not self.match(TokenType.RBRACE):
            domains.append(self._parse_domain_entry())
            if self.match(TokenType.COMMA):
                self.advance()
            self.skip_newlines()
        self.expect(TokenType.RBRACE)

        return ir.DomainsBlock(domains=domains)

    def _parse_domain_entry(self) -> ir.DomainDecl:
        name = self.expect_name()

        sub_domains: list[str] = []
        self.skip_newlines()
        if self.match(TokenType.LBRACE):
            self.advance()
            self.skip_newlines()
            while not self.match(TokenType.RBRACE):
                sub_domains.append(self.expect_name())
                if self.match(TokenType.COMMA):
                    self.advance()
                self.skip_newlines()
            self.expect(TokenType.RBRACE)

        return ir.DomainDecl(name=name, sub_domains=sub_domains)
