"""
Service parsing for the craft DSL.

Handles single and block service declarations::

    service Checkout {
        domains: Order, Payment
        data-stores: orders_db, cache
        language: go
        deployment: canary(20% -> staging, 80% -> production)
    }

    services {
        "Order Service" { domains: Order }
        user-svc { language: python }
    }
"""

from typing import TYPE_CHECKING, Any

from .. import ir
from ..lexer import TokenType


class ServiceParserMixin:
    """
    Mixin providing service parsing.

    Note: This mixin expects to be combined with BaseParser via multiple inheritance.
    """

    if TYPE_CHECKING:
        expect: Any
        expect_word: Any
        expect_name: Any
        advance: Any
        match: Any
        current_token: Any
        skip_newlines: Any
        parse_name_list: Any
        error: Any

    def parse_service(self) -> ir.ServiceDecl:
        """Parse ``service <name> { ... }``."""
        self.expect(TokenType.SERVICE)
        return self._parse_service_entry()

    def parse_services_block(self) -> ir.ServicesBlock:
        """Parse ``services { <name> { ... } ... }``."""
        self.expect(TokenType.SERVICES)
        self.skip_newlines()
        self.expect(TokenType.LBRACE)

        services = []
        self.skip_newlines()
        while not self.match(TokenType.RBRACE):
            services.append(self._parse_service_entry())
            if self.match(TokenType.COMMA):
                self.advance()
            self.skip_newlines()
        self.expect(TokenType.RBRACE)

        return ir.ServicesBlock(services=services)

    def _parse_service_entry(self) -> ir.ServiceDecl:
        name = self.expect_name()
        self.skip_newlines()
        self.expect(TokenType.LBRACE)

        domains: list[str] = []
        data_stores: list[str] = []
        language = ""
        deployment_kind = ""
        deployment_rules: list[ir.DeploymentRule] = []

        self.skip_newlines()
        while not self.match(TokenType.RBRACE):
            key_token = self.expect_word()
            self.expect(TokenType.COLON)
            key = key_token.value

            if key == "domains":
                domains.extend(self.parse_name_list())
            elif key == "data-stores":
                data_stores.extend(self.parse_name_list())
            elif key == "language":
                language = self.expect_name()
            elif key == "deployment":
                deployment_kind, deployment_rules = self._parse_deployment()
            else:
                raise self.error(
                    f"Unknown service field '{key}' "
                    "(expected domains, data-stores, language or deployment)",
                    key_token,
                )
            self.skip_newlines()

        self.expect(TokenType.RBRACE)

        return ir.ServiceDecl(
            name=name,
            domains=domains,
            data_stores=data_stores,
            language=language,
            deployment_kind=deployment_kind,
            deployment_rules=deployment_rules,
        )

    def _parse_deployment(self) -> tuple[str, list[ir.DeploymentRule]]:
        """Parse ``<kind>[(<pct> -> <target>, ...)]``."""
        kind = self.expect_word().value
        rules: list[ir.DeploymentRule] = []

        if self.match(TokenType.LPAREN):
            self.advance()
            self.skip_newlines()
            while not self.match(TokenType.RPAREN):
                rules.append(self._parse_deployment_rule())
                self.skip_newlines()
                if self.match(TokenType.COMMA):
                    self.advance()
                    self.skip_newlines()
            self.expect(TokenType.RPAREN)

        return kind, rules

    def _parse_deployment_rule(self) -> ir.DeploymentRule:
        token = self.current_token()
        if token.type not in (TokenType.PERCENTAGE, TokenType.NUMBER):
            raise self.error(f"Expected percentage, got '{token.value}'")
        percentage = self.advance().value
        self.expect(TokenType.ARROW)
        target = self.expect_name()
        return ir.DeploymentRule(percentage=percentage, target=target)
